# region_data.py
# Load data.csv + regions.csv, join countries to their region, and export
# regional means as tidy CSV tables.

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pandas as pd

import chart_settings as CS
from radial_core import aggregate_metrics, compute_view, format_percent

logger = logging.getLogger(__name__)

DATA_COLUMNS = {CS.INDICATOR_COLUMN, CS.ISO_COLUMN}
REGION_COLUMNS = {CS.ISO_COLUMN, CS.REGION_COLUMN}


class DataLoadError(RuntimeError):
    """One of the two input tables could not be loaded. Nothing is drawn."""


def read_raw_csv(path, need):
    """
    Read a CSV with every cell kept as raw text ("" for blanks, no NA guessing),
    so the value parser sees exactly what the file says.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{path} not found.")
    if path.is_dir():
        raise IsADirectoryError(f"Expected a file, found directory: {path}")

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = set(need) - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in {path}: {sorted(missing)}")
    return df


def load_sources(data_path=CS.DATA_FILE, regions_path=CS.REGIONS_FILE):
    """
    Read the indicator table and the region mapping side by side.
    Both must succeed; the first failure is raised as DataLoadError.
    """
    with ThreadPoolExecutor(max_workers=2) as pool:
        jobs = [
            ("indicator table", pool.submit(read_raw_csv, data_path, DATA_COLUMNS)),
            ("region mapping", pool.submit(read_raw_csv, regions_path, REGION_COLUMNS)),
        ]
        tables = []
        for name, job in jobs:
            try:
                tables.append(job.result())
            except (OSError, ValueError) as e:
                raise DataLoadError(f"Could not load {name}: {e}") from e
    raw, region_map = tables
    return raw, region_map


def build_country_records(raw, region_map, region_list=CS.REGION_LIST):
    """
    Drop metadata rows, attach each country's region by ISO code, and keep only
    countries whose region is one of region_list.
    """
    is_meta = raw[CS.INDICATOR_COLUMN].isin(CS.METADATA_INDICATORS)
    rows = raw[~is_meta]

    # later rows win, same as building a dict from the table
    region_by_iso = dict(zip(region_map[CS.ISO_COLUMN], region_map[CS.REGION_COLUMN]))
    rows = rows.assign(region=rows[CS.ISO_COLUMN].map(region_by_iso))

    known = rows["region"].isin(list(region_list))
    unmapped = rows.loc[~known, CS.ISO_COLUMN]
    if not unmapped.empty:
        logger.debug("Skipping %d rows with no known region: %s",
                     len(unmapped), ", ".join(unmapped.astype(str)))

    countries = rows[known].reset_index(drop=True)
    logger.info("Loaded %d country rows (%d metadata rows, %d unmapped rows dropped)",
                len(countries), int(is_meta.sum()), len(unmapped))
    return countries


def load_country_records(data_path=CS.DATA_FILE, regions_path=CS.REGIONS_FILE,
                         region_list=CS.REGION_LIST):
    raw, region_map = load_sources(data_path, regions_path)
    return build_country_records(raw, region_map, region_list)


# -----------------------------
# Exports
# -----------------------------

def region_means_long(countries, region_list=CS.REGION_LIST, metrics=CS.METRICS):
    """One row per (metric, region): key, label, higher_better, region, mean."""
    region_list = list(region_list)
    if not region_list:
        return pd.DataFrame(columns=["key", "label", "higher_better", "region", "mean"])

    # per-region means do not depend on the selection
    aggregates = aggregate_metrics(countries, region_list, metrics, region_list[0])
    rows = [
        {
            "key": m["key"],
            "label": m["label"],
            "higher_better": m["higher_better"],
            "region": v["region"],
            "mean": v["value"],
        }
        for m in aggregates
        for v in m["values_per_region"]
    ]
    return pd.DataFrame(rows, columns=["key", "label", "higher_better", "region", "mean"])


def region_means_wide(long_df, region_list=CS.REGION_LIST):
    """Metric labels down, regions across (metric order and region order kept)."""
    labels = list(dict.fromkeys(long_df["label"]))
    wide = long_df.pivot(index="label", columns="region", values="mean")
    return wide.reindex(index=labels, columns=list(region_list))


def region_scorecard(countries, region_list=CS.REGION_LIST, metrics=CS.METRICS):
    """For every region: how many metrics beat the other regions' average."""
    rows = []
    for region in region_list:
        summary = compute_view(countries, region_list, metrics, region)["summary"]
        rows.append({
            "region": region,
            "strong_count": summary["strong_count"],
            "total": summary["total"],
            "percent": summary["percent"],
        })
    return pd.DataFrame(rows, columns=["region", "strong_count", "total", "percent"])


def scorecard_lines(scorecard):
    return [
        f"{row.region}: {format_percent(row.percent)} of metrics stronger "
        f"({row.strong_count}/{row.total})"
        for row in scorecard.itertuples(index=False)
    ]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Export regional means for the radial dashboard")
    parser.add_argument("--data", default=CS.DATA_FILE, help="indicator table (CSV)")
    parser.add_argument("--regions", default=CS.REGIONS_FILE, help="ISO code -> region table (CSV)")
    parser.add_argument("--out-dir", default=".", help="where to write the CSV tables")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        countries = load_country_records(args.data, args.regions)
    except DataLoadError as e:
        logger.error("Error loading data: %s", e)
        return 1

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    long_df = region_means_long(countries)
    wide = region_means_wide(long_df)
    scorecard = region_scorecard(countries)

    long_df.to_csv(out_dir / "region_means_long.csv", index=False)
    wide.to_csv(out_dir / "region_means_wide.csv")
    scorecard.to_csv(out_dir / "region_scorecard.csv", index=False)

    print("\n✅ Wrote:")
    print(" - region_means_long.csv   (key, label, higher_better, region, mean)")
    print(" - region_means_wide.csv   (one row per metric, one column per region)")
    print(" - region_scorecard.csv    (region, strong_count, total, percent)")
    print()
    for line in scorecard_lines(scorecard):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
