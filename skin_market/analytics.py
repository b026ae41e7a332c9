# -*- coding: utf-8 -*-
"""
Skin Market Suite | Analytics Module

Market totals, CAGR and market-share calculations. These two formulas are
the only derived numbers in the dashboard; every consumer goes through
cagr() and market_share() so the zero-fallback policy stays identical.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from skin_market.config import PipelineConfig
from skin_market.models import GroupedData, MarketTotals, TimePoint


# ==============================================================================
# FORMULAS
# ==============================================================================

def cagr(start: float, end: float, years: float) -> float:
    """
    Compound annual growth rate, in percent.

    Returns exactly 0.0 unless start > 0, end > 0 and years > 0.
    """
    if start <= 0 or end <= 0 or years <= 0:
        return 0.0
    return ((end / start) ** (1 / years) - 1) * 100


def market_share(part: float, whole: float) -> float:
    """Share of `part` in `whole`, in percent; 0.0 when whole is not positive."""
    return part / whole * 100 if whole > 0 else 0.0


# ==============================================================================
# TOTALS
# ==============================================================================

def value_for_year(series: Sequence[TimePoint], year: int) -> float:
    """Value of the point for `year`; a missing year contributes 0."""
    for p in series:
        if p.year == year:
            return p.value
    return 0.0


def bucket_total(grouped: GroupedData, region: str, segment_type: str, year: int) -> float:
    """Sum over every segment name in one region/segment-type bucket for a year."""
    segments = grouped.get(region, {}).get(segment_type, {})
    return sum(value_for_year(series, year) for series in segments.values())


def totals_for_bucket(grouped: GroupedData, region: str, segment_type: str,
                      config: PipelineConfig) -> MarketTotals:
    base = bucket_total(grouped, region, segment_type, config.base_year)
    forecast = bucket_total(grouped, region, segment_type, config.forecast_year)
    return MarketTotals(
        market_size_base=base,
        market_size_forecast=forecast,
        cagr=cagr(base, forecast, config.cagr_years),
        base_year=config.base_year,
        forecast_year=config.forecast_year,
    )


def compute_market_totals(grouped: GroupedData, config: Optional[PipelineConfig] = None) -> MarketTotals:
    """
    Global market size for the base and forecast year.

    Summed over the global region's Type bucket. Without a global region
    (or without its Type bucket) every figure is 0.
    """
    config = config or PipelineConfig()
    return totals_for_bucket(grouped, config.global_region, config.type_segment, config)


def region_totals(grouped: GroupedData, config: Optional[PipelineConfig] = None) -> Dict[str, MarketTotals]:
    """Type-bucket totals for every region other than the global one."""
    config = config or PipelineConfig()
    return {
        region: totals_for_bucket(grouped, region, config.type_segment, config)
        for region in grouped
        if region != config.global_region
    }


# ==============================================================================
# TABLES (for charts and reports)
# ==============================================================================

def segment_growth_table(
    grouped: GroupedData,
    region: str,
    segment_type: str,
    totals: MarketTotals,
    config: Optional[PipelineConfig] = None,
) -> pd.DataFrame:
    """
    One row per segment name with base/forecast size, share and CAGR.

    Args:
        grouped: Grouped time series
        region: Region key (e.g. "Global")
        segment_type: Bucket key (e.g. "Ingredient")
        totals: Totals the shares are computed against
        config: Pipeline settings (years)

    Returns:
        DataFrame sorted by forecast size, descending
    """
    config = config or PipelineConfig()
    rows: List[Dict] = []
    for name, series in grouped.get(region, {}).get(segment_type, {}).items():
        base = value_for_year(series, config.base_year)
        forecast = value_for_year(series, config.forecast_year)
        rows.append({
            "Segment": name,
            "Base": base,
            "Forecast": forecast,
            "Share_Base": market_share(base, totals.market_size_base),
            "Share_Forecast": market_share(forecast, totals.market_size_forecast),
            "CAGR": cagr(base, forecast, config.cagr_years),
        })

    columns = ["Segment", "Base", "Forecast", "Share_Base", "Share_Forecast", "CAGR"]
    out = pd.DataFrame(rows, columns=columns)
    if out.empty:
        return out
    out["Δ Share (pp)"] = out["Share_Forecast"] - out["Share_Base"]
    return out.sort_values("Forecast", ascending=False, kind="stable").reset_index(drop=True)


def linear_trend(series: Sequence[TimePoint]) -> Tuple[float, float]:
    """
    Least-squares line through a time series.

    Returns (slope, intercept) where value = slope*year + intercept; a flat
    line at the mean when there are fewer than two points or no variation.
    """
    x = np.array([p.year for p in series], dtype=float)
    y = np.array([p.value for p in series], dtype=float)
    if len(x) < 2 or np.all(y == y[0]):
        return 0.0, float(y.mean()) if len(y) else 0.0

    m, b = np.polyfit(x, y, 1)
    return float(m), float(b)


def growth_leaders(totals_by_name: Dict[str, MarketTotals]) -> Dict[str, Optional[str]]:
    """Fastest-growing and largest (by forecast size) entries of a totals mapping."""
    if not totals_by_name:
        return {"fastest_growing": None, "largest": None}
    fastest = max(totals_by_name, key=lambda k: totals_by_name[k].cagr)
    largest = max(totals_by_name, key=lambda k: totals_by_name[k].market_size_forecast)
    return {"fastest_growing": fastest, "largest": largest}
