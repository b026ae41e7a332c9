# -*- coding: utf-8 -*-
"""
Skin Market Suite | Transformer

Combines grouped time series, the market totals and editorial content into
the DomainModel the dashboard renders. Pure: the same inputs always give
the same model.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from skin_market.analytics import cagr, market_share, region_totals, value_for_year
from skin_market.config import PipelineConfig
from skin_market.models import (
    CountrySummary,
    DomainModel,
    EndUserSummary,
    GenderSummary,
    GroupedData,
    IngredientSummary,
    MarketTotals,
    Overview,
    ProductTypeSummary,
    RegionSummary,
    TimePoint,
)

logger = logging.getLogger(__name__)


def _base_and_forecast(series: Sequence[TimePoint], config: PipelineConfig) -> Tuple[float, float]:
    return value_for_year(series, config.base_year), value_for_year(series, config.forecast_year)


def _segment_fields(series: Sequence[TimePoint], totals: MarketTotals, config: PipelineConfig) -> Dict:
    """Size, share against the global totals and own CAGR for one segment."""
    base, forecast = _base_and_forecast(series, config)
    return {
        "market_size_base": base,
        "market_size_forecast": forecast,
        "market_share_base": market_share(base, totals.market_size_base),
        "market_share_forecast": market_share(forecast, totals.market_size_forecast),
        "cagr": cagr(base, forecast, config.cagr_years),
    }


def _by_forecast_share(items: List) -> Tuple:
    return tuple(sorted(items, key=lambda s: s.market_share_forecast, reverse=True))


# ==============================================================================
# SECTIONS
# ==============================================================================

def build_overview(totals: MarketTotals, config: PipelineConfig) -> Overview:
    ed = config.editorial
    return Overview(
        market_name=ed.market_name,
        base_year=config.base_year,
        forecast_year=config.forecast_year,
        cagr=totals.cagr,
        market_size_base=totals.market_size_base,
        market_size_forecast=totals.market_size_forecast,
        key_drivers=tuple(ed.key_drivers),
        key_restraints=tuple(ed.key_restraints),
    )


def build_regions(grouped: GroupedData, totals: MarketTotals, config: PipelineConfig) -> Tuple[RegionSummary, ...]:
    """Every non-global region, ordered by forecast share (largest first)."""
    regions = []
    for name, rt in region_totals(grouped, config).items():
        countries = grouped[name].get(config.country_segment, {})
        regions.append(RegionSummary(
            name=name,
            market_size_base=rt.market_size_base,
            market_size_forecast=rt.market_size_forecast,
            market_share_base=market_share(rt.market_size_base, totals.market_size_base),
            market_share_forecast=market_share(rt.market_size_forecast, totals.market_size_forecast),
            cagr=rt.cagr,
            key_markets=tuple(countries),
            market_drivers=config.editorial.drivers_for_region(name),
        ))
    return _by_forecast_share(regions)


def build_product_types(grouped: GroupedData, totals: MarketTotals, config: PipelineConfig) -> Tuple[ProductTypeSummary, ...]:
    ed = config.editorial
    segments = grouped.get(config.global_region, {}).get(config.type_segment, {})
    items = [
        ProductTypeSummary(
            name=name,
            description=ed.description_for_product(name),
            applications=ed.applications_for_product(name),
            **_segment_fields(series, totals, config),
        )
        for name, series in segments.items()
    ]
    return _by_forecast_share(items)


def build_ingredients(grouped: GroupedData, totals: MarketTotals, config: PipelineConfig) -> Tuple[IngredientSummary, ...]:
    ed = config.editorial
    segments = grouped.get(config.global_region, {}).get(config.ingredient_segment, {})
    items = [
        IngredientSummary(
            name=name,
            benefits=ed.benefits_for_ingredient(name),
            **_segment_fields(series, totals, config),
        )
        for name, series in segments.items()
    ]
    return _by_forecast_share(items)


def build_gender(grouped: GroupedData, totals: MarketTotals, config: PipelineConfig) -> Tuple[GenderSummary, ...]:
    ed = config.editorial
    segments = grouped.get(config.global_region, {}).get(config.gender_segment, {})
    return tuple(
        GenderSummary(
            name=name,
            age_groups=ed.age_groups_for_gender(name),
            **_segment_fields(series, totals, config),
        )
        for name, series in segments.items()
    )


def build_end_users(grouped: GroupedData, totals: MarketTotals, config: PipelineConfig) -> Tuple[EndUserSummary, ...]:
    """End-user segments across all regions; the first region carrying a name wins."""
    ed = config.editorial
    seen: Dict[str, EndUserSummary] = {}
    for types in grouped.values():
        for name, series in types.get(config.end_user_segment, {}).items():
            if name in seen:
                continue
            seen[name] = EndUserSummary(
                name=name,
                characteristics=ed.characteristics_for_end_user(name),
                **_segment_fields(series, totals, config),
            )
    return tuple(seen.values())


def build_countries(grouped: GroupedData, config: PipelineConfig) -> Dict[str, CountrySummary]:
    ed = config.editorial
    countries: Dict[str, CountrySummary] = {}
    for types in grouped.values():
        for name, series in types.get(config.country_segment, {}).items():
            base, forecast = _base_and_forecast(series, config)
            countries[name] = CountrySummary(
                name=name,
                market_size_base=base,
                market_size_forecast=forecast,
                cagr=cagr(base, forecast, config.cagr_years),
                population=ed.population_for_country(name),
                penetration_rate=ed.penetration_for_country(name),
                average_spending=ed.spending_for_country(name),
            )
    return countries


def copy_time_series(grouped: GroupedData) -> GroupedData:
    return {
        region: {
            segment_type: {name: list(points) for name, points in segments.items()}
            for segment_type, segments in types.items()
        }
        for region, types in grouped.items()
    }


# ==============================================================================
# ENTRY POINT
# ==============================================================================

def transform(grouped: GroupedData, totals: MarketTotals, config: Optional[PipelineConfig] = None) -> DomainModel:
    """
    Build the DomainModel.

    Args:
        grouped: Output of group_records()
        totals: Output of compute_market_totals()
        config: Pipeline settings and editorial content

    Returns:
        A fresh, read-only DomainModel
    """
    config = config or PipelineConfig()
    model = DomainModel(
        overview=build_overview(totals, config),
        regions=build_regions(grouped, totals, config),
        product_types=build_product_types(grouped, totals, config),
        ingredients=build_ingredients(grouped, totals, config),
        gender=build_gender(grouped, totals, config),
        end_users=build_end_users(grouped, totals, config),
        countries=build_countries(grouped, config),
        time_series=copy_time_series(grouped),
        market_players=tuple(config.editorial.market_players),
        trends=tuple(config.editorial.trends),
    )
    logger.debug(
        "Transformed %d regions, %d product types, %d countries",
        len(model.regions), len(model.product_types), len(model.countries),
    )
    return model
