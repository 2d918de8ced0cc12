# radial_core.py
# Region-vs-rest aggregation and radial layout for the Regional Strengths chart.
#
# Everything here is pure: compute_view() rebuilds the whole view model from the
# country records each time the selected region changes.

import logging
import math
import re

import numpy as np
import pandas as pd

import chart_settings as CS

logger = logging.getLogger(__name__)

# Cell text that means "no data" (compared after stripping whitespace)
MISSING_TOKENS = {"", "-", "...", "NaN"}
# Plain ASCII decimals only ("1_000", non-Latin digits and hex are not numbers here)
DECIMAL_RE = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


# -----------------------------
# Value parsing
# -----------------------------

def parse_number(value):
    """Raw cell text -> float. Blank, '-', '...', 'NaN' or anything unparseable -> NaN."""
    if value is None:
        return np.nan
    s = str(value).strip()
    if s in MISSING_TOKENS:
        return np.nan
    s = s.replace(",", "").replace("%", "")
    if not DECIMAL_RE.fullmatch(s):
        return np.nan
    try:
        num = float(s)
    except ValueError:
        return np.nan
    return num if np.isfinite(num) else np.nan


def mean(values):
    """Mean of the non-missing values; NaN (never 0) when none are left."""
    vals = np.array([v for v in values if not pd.isna(v)], dtype=float)
    if vals.size == 0:
        return np.nan
    return float(vals.mean())


def format_percent(percent):
    """Whole percent, halves rounded up ("12.5" -> "13%")."""
    return f"{int(math.floor(percent + 0.5))}%"


# -----------------------------
# Aggregation
# -----------------------------

def as_country_frame(country_records):
    """Accept a DataFrame or an iterable of row dicts; always return a frame with a region column."""
    if isinstance(country_records, pd.DataFrame):
        df = country_records
    else:
        df = pd.DataFrame(list(country_records))
    if "region" not in df.columns:
        df = df.assign(region=pd.Series(dtype=object))
    return df


def _metric_values(countries, key):
    if key not in countries.columns:
        return pd.Series(np.nan, index=countries.index, dtype=float)
    return countries[key].map(parse_number)


def is_stronger(selected_value, other_mean, higher_better):
    """Ties count as stronger; a missing operand is never stronger."""
    if pd.isna(selected_value) or pd.isna(other_mean):
        return False
    if higher_better:
        return bool(selected_value >= other_mean)
    return bool(selected_value <= other_mean)


def aggregate_metrics(country_records, region_list, metrics, selected_region):
    """
    One aggregate per metric definition, in definition order.

    values_per_region holds the mean per region in region_list order.
    other_mean is the mean of the other regions' means, not of their pooled
    countries, so every region weighs the same.
    """
    region_list = list(region_list)
    if selected_region not in region_list:
        raise ValueError(
            f"Unknown region {selected_region!r}; expected one of {region_list}"
        )

    countries = as_country_frame(country_records)
    by_region = {r: countries[countries["region"] == r] for r in region_list}

    aggregates = []
    for metric in metrics:
        values_per_region = [
            {"region": region, "value": mean(_metric_values(g, metric["key"]))}
            for region, g in by_region.items()
        ]
        selected_value = next(
            v["value"] for v in values_per_region if v["region"] == selected_region
        )
        other_mean = mean(
            v["value"] for v in values_per_region if v["region"] != selected_region
        )
        aggregates.append({
            "key": metric["key"],
            "label": metric["label"],
            "higher_better": bool(metric["higher_better"]),
            "values_per_region": values_per_region,
            "selected_value": selected_value,
            "other_mean": other_mean,
            "is_stronger": is_stronger(selected_value, other_mean, metric["higher_better"]),
        })
    return aggregates


def sort_metrics(aggregates):
    """Stronger metrics first, then by label. sorted() is stable for equal keys."""
    return sorted(aggregates, key=lambda m: (not m["is_stronger"], m["label"]))


# -----------------------------
# Scales
# -----------------------------

class BandScale:
    """
    n equal bands over [start, stop], the same model as a d3 band scale with
    paddingInner == paddingOuter == padding.

    position(i) is the band's anchor; wedges are drawn anchor +/- bandwidth/2.
    """

    def __init__(self, n, start=0.0, stop=2 * math.pi, padding=CS.BAND_PADDING, align=0.5):
        self.n = int(n)
        self.padding = float(padding)
        self.step = (stop - start) / max(1, self.n - self.padding + 2 * self.padding)
        self.bandwidth = self.step * (1 - self.padding)
        self.offset = start + (stop - start - self.step * (self.n - self.padding)) * align

    def position(self, i):
        return self.offset + self.step * i

    def wedge(self, i):
        a = self.position(i)
        return a - self.bandwidth / 2, a + self.bandwidth / 2

    @property
    def inner_padding(self):
        return self.padding * self.step

    @property
    def outer_padding(self):
        return self.padding * self.step


class LinearScale:
    """Linear map domain -> range. NaN in, NaN out."""

    def __init__(self, domain, range, clamp=False):
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range[0]), float(range[1]))
        self.clamp = clamp

    def __call__(self, value):
        if pd.isna(value):
            return np.nan
        d0, d1 = self.domain
        r0, r1 = self.range
        t = (float(value) - d0) / (d1 - d0) if d1 != d0 else 0.5
        if self.clamp:
            t = min(1.0, max(0.0, t))
        return r0 + t * (r1 - r0)

    def __repr__(self):
        return f"LinearScale(domain={self.domain}, range={self.range}, clamp={self.clamp})"


def radial_domain(values):
    """
    [min, max] of the numeric values, or the (0, 1) fallback when there are
    none or they are all equal. Returns (domain, is_fallback).
    """
    vals = [v for v in values if not pd.isna(v)]
    if vals and min(vals) != max(vals):
        return (min(vals), max(vals)), False
    return (0.0, 1.0), True


def radial_scale(metric, inner_radius=CS.INNER_RADIUS, outer_radius=CS.OUTER_RADIUS):
    domain, fallback = radial_domain(v["value"] for v in metric["values_per_region"])
    # the fallback domain says nothing about the data, so keep every dot on the ring
    return LinearScale(domain, (inner_radius, outer_radius), clamp=fallback)


def assign_layout(sorted_metrics, inner_radius=CS.INNER_RADIUS,
                  outer_radius=CS.OUTER_RADIUS, padding=CS.BAND_PADDING):
    """
    Give every metric (already in display order) its wedge and radial scale.
    Returns (new metric dicts, BandScale); the inputs are not modified.
    """
    bands = BandScale(len(sorted_metrics), padding=padding)
    laid_out = []
    for i, metric in enumerate(sorted_metrics):
        start, end = bands.wedge(i)
        scale = radial_scale(metric, inner_radius, outer_radius)
        laid_out.append(dict(
            metric,
            angle=bands.position(i),
            start_angle=start,
            end_angle=end,
            domain=scale.domain,
            r_scale=scale,
        ))
    return laid_out, bands


def radius_for(metric, value):
    """Radius for a value on this metric's spoke; missing values sit on the inner ring."""
    r = metric["r_scale"](value)
    return metric["r_scale"].range[0] if pd.isna(r) else r


def connector_extent(metric):
    """(min radius, max radius) across the numeric region means of one metric."""
    vals = [v["value"] for v in metric["values_per_region"] if not pd.isna(v["value"])]
    if not vals:
        inner = metric["r_scale"].range[0]
        return inner, inner
    return metric["r_scale"](min(vals)), metric["r_scale"](max(vals))


# -----------------------------
# Summary
# -----------------------------

def summarize(laid_out):
    """
    Headline numbers for the centre of the chart.

    strong_span runs from the first strong wedge's start to the last one's end.
    It is only one contiguous arc because sort_metrics() puts the strong
    metrics first; it is None when nothing is strong.
    """
    total = len(laid_out)
    strong = [m for m in laid_out if m["is_stronger"]]
    percent = 100.0 * len(strong) / total if total else 0.0

    span = None
    if strong:
        span = {
            "start": min(m["start_angle"] for m in strong),
            "end": max(m["end_angle"] for m in strong),
        }
    return {
        "percent": percent,
        "strong_count": len(strong),
        "total": total,
        "strong_span": span,
    }


def compute_view(country_records, region_list, metrics, selected_region,
                 inner_radius=CS.INNER_RADIUS, outer_radius=CS.OUTER_RADIUS,
                 padding=CS.BAND_PADDING):
    """Full recomputation: aggregate -> sort -> layout -> summary."""
    aggregates = aggregate_metrics(country_records, region_list, metrics, selected_region)
    ordered = sort_metrics(aggregates)
    laid_out, bands = assign_layout(ordered, inner_radius, outer_radius, padding)
    summary = summarize(laid_out)
    logger.debug(
        "View for %s: %d/%d metrics stronger", selected_region,
        summary["strong_count"], summary["total"],
    )
    return {
        "region": selected_region,
        "metrics": laid_out,
        "layout": bands,
        "summary": summary,
    }
