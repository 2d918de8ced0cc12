"""Loading, joining and exporting the two CSV sources."""

import tempfile
import unittest
from pathlib import Path

import numpy as np
import pandas as pd

import chart_settings as CS
from region_data import (
    DataLoadError,
    build_country_records,
    load_country_records,
    load_sources,
    main,
    region_means_long,
    region_means_wide,
    region_scorecard,
    scorecard_lines,
)

GDP = "GDP growth\n(annual %)"
METRICS = [
    {"key": "infant mortality", "label": "Infant Mortality", "higher_better": False},
    {"key": GDP, "label": "GDP Growth (% / yr)", "higher_better": True},
]


def raw_table():
    return pd.DataFrame([
        {"country": "United States", "ISO Country code": "USA", "indicator": "value",
         "infant mortality": "5.4", GDP: "2.1%"},
        {"country": "Canada", "ISO Country code": "CAN", "indicator": "value",
         "infant mortality": "4.3", GDP: "..."},
        {"country": "China", "ISO Country code": "CHN", "indicator": "value",
         "infant mortality": "5.0", GDP: "5.2"},
        {"country": "Nowhere", "ISO Country code": "XXX", "indicator": "value",
         "infant mortality": "99", GDP: "99"},
        {"country": "Antarctica", "ISO Country code": "ATA", "indicator": "value",
         "infant mortality": "1", GDP: "1"},
        {"country": "", "ISO Country code": "USA", "indicator": "source",
         "infant mortality": "WHO", GDP: "World Bank"},
        {"country": "", "ISO Country code": "USA", "indicator": "URL",
         "infant mortality": "https://example.org", GDP: ""},
        {"country": "", "ISO Country code": "USA", "indicator": "notes",
         "infant mortality": "", GDP: ""},
        {"country": "", "ISO Country code": "USA", "indicator": "data year",
         "infant mortality": "2022", GDP: "2023"},
    ])


def region_table():
    return pd.DataFrame([
        {"ISO Country code": "USA", "Region": "Americas"},
        {"ISO Country code": "CAN", "Region": "Americas"},
        {"ISO Country code": "CHN", "Region": "East Asia & Pacific"},
        {"ISO Country code": "ATA", "Region": "Antarctica"},
    ])


class LoadTests(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.data_path = self.dir / "data.csv"
        self.regions_path = self.dir / "regions.csv"
        raw_table().to_csv(self.data_path, index=False)
        region_table().to_csv(self.regions_path, index=False)

    def tearDown(self):
        self.tmp.cleanup()

    def test_cells_stay_raw_text(self):
        raw, regions = load_sources(self.data_path, self.regions_path)
        self.assertIn(GDP, raw.columns)
        self.assertEqual(raw.loc[1, GDP], "...")
        self.assertEqual(raw.loc[0, GDP], "2.1%")
        self.assertEqual(raw.loc[7, "infant mortality"], "")
        self.assertEqual(len(regions), 4)

    def test_metadata_and_unmapped_rows_are_dropped(self):
        countries = load_country_records(self.data_path, self.regions_path)
        self.assertEqual(countries["ISO Country code"].tolist(), ["USA", "CAN", "CHN"])
        self.assertEqual(countries["region"].tolist(),
                         ["Americas", "Americas", "East Asia & Pacific"])

    def test_missing_file_is_a_load_error(self):
        with self.assertRaises(DataLoadError):
            load_sources(self.dir / "nope.csv", self.regions_path)
        with self.assertRaises(DataLoadError):
            load_sources(self.data_path, self.dir / "nope.csv")

    def test_missing_columns_is_a_load_error(self):
        region_table().rename(columns={"Region": "Zone"}).to_csv(self.regions_path, index=False)
        with self.assertRaises(DataLoadError) as cm:
            load_sources(self.data_path, self.regions_path)
        self.assertIsInstance(cm.exception.__cause__, ValueError)

    def test_empty_file_is_a_load_error(self):
        self.data_path.write_text("")
        with self.assertRaises(DataLoadError):
            load_sources(self.data_path, self.regions_path)

    def test_main_writes_tables(self):
        out = self.dir / "out"
        code = main(["--data", str(self.data_path), "--regions", str(self.regions_path),
                     "--out-dir", str(out)])
        self.assertEqual(code, 0)
        for name in ("region_means_long.csv", "region_means_wide.csv", "region_scorecard.csv"):
            self.assertTrue((out / name).exists(), name)

    def test_main_reports_load_failure(self):
        code = main(["--data", str(self.dir / "nope.csv"), "--regions", str(self.regions_path),
                     "--out-dir", str(self.dir / "out")])
        self.assertEqual(code, 1)


class JoinAndExportTests(unittest.TestCase):

    def setUp(self):
        self.countries = build_country_records(raw_table(), region_table())

    def test_later_mapping_rows_win(self):
        regions = pd.concat([
            region_table(),
            pd.DataFrame([{"ISO Country code": "CHN", "Region": "South Asia"}]),
        ], ignore_index=True)
        countries = build_country_records(raw_table(), regions)
        self.assertEqual(countries.loc[countries["ISO Country code"] == "CHN", "region"].item(),
                         "South Asia")

    def test_region_means_long(self):
        long_df = region_means_long(self.countries, CS.REGION_LIST, METRICS)
        self.assertEqual(len(long_df), len(METRICS) * len(CS.REGION_LIST))
        americas = long_df[(long_df["region"] == "Americas")].set_index("label")["mean"]
        self.assertAlmostEqual(americas["Infant Mortality"], 4.85)
        # Canada's "..." is skipped, not counted as zero
        self.assertAlmostEqual(americas["GDP Growth (% / yr)"], 2.1)
        ssa = long_df[(long_df["region"] == "Sub-Saharan Africa")]["mean"]
        self.assertTrue(ssa.isna().all())

    def test_region_means_wide_keeps_order(self):
        wide = region_means_wide(region_means_long(self.countries, CS.REGION_LIST, METRICS))
        self.assertEqual(wide.index.tolist(), ["Infant Mortality", "GDP Growth (% / yr)"])
        self.assertEqual(wide.columns.tolist(), CS.REGION_LIST)

    def test_scorecard(self):
        card = region_scorecard(self.countries, CS.REGION_LIST, METRICS).set_index("region")
        # Americas: mortality 4.85 vs 5.0 (lower is better), growth 2.1 vs 5.2
        self.assertEqual(card.loc["Americas", "strong_count"], 1)
        self.assertEqual(card.loc["Americas", "percent"], 50)
        self.assertEqual(card.loc["East Asia & Pacific", "strong_count"], 1)
        self.assertEqual(card.loc["South Asia", "strong_count"], 0)
        self.assertTrue((card["total"] == 2).all())

    def test_scorecard_lines_round_halves_up(self):
        card = pd.DataFrame([
            {"region": "Americas", "strong_count": 1, "total": 8, "percent": 12.5},
            {"region": "South Asia", "strong_count": 0, "total": 8, "percent": 0.0},
        ])
        self.assertEqual(scorecard_lines(card), [
            "Americas: 13% of metrics stronger (1/8)",
            "South Asia: 0% of metrics stronger (0/8)",
        ])


if __name__ == "__main__":
    unittest.main()
