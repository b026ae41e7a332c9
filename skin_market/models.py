# -*- coding: utf-8 -*-
"""
Skin Market Suite | Domain Model

Typed records produced by the parser and the read-only snapshot the
transformer hands to the dashboard pages. All sizes are USD millions,
shares and growth rates are percentages.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


# ==============================================================================
# PIPELINE RECORDS
# ==============================================================================

@dataclass(frozen=True)
class Record:
    """One parsed input row."""

    region: str
    segment_type: str
    segment_name: str
    year: int
    value: float
    # 1-based data row in the source table; 0 when built by hand
    row: int = field(default=0, compare=False)


@dataclass(frozen=True)
class TimePoint:
    year: int
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"year": self.year, "value": self.value}


# Region -> Segment Type -> Segment Name -> points ascending by year
GroupedData = Dict[str, Dict[str, Dict[str, List[TimePoint]]]]


@dataclass(frozen=True)
class MarketTotals:
    """Market size for the base and forecast year plus the CAGR between them."""

    market_size_base: float
    market_size_forecast: float
    cagr: float
    base_year: int
    forecast_year: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "marketSizeBase": self.market_size_base,
            "marketSizeForecast": self.market_size_forecast,
            "cagr": self.cagr,
            "baseYear": self.base_year,
            "forecastYear": self.forecast_year,
        }


# ==============================================================================
# DOMAIN MODEL
# ==============================================================================

@dataclass(frozen=True)
class Overview:
    market_name: str
    base_year: int
    forecast_year: int
    cagr: float
    market_size_base: float
    market_size_forecast: float
    key_drivers: Tuple[str, ...] = ()
    key_restraints: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "marketName": self.market_name,
            "baseYear": self.base_year,
            "forecastYear": self.forecast_year,
            "cagr": self.cagr,
            "marketSizeBase": self.market_size_base,
            "marketSizeForecast": self.market_size_forecast,
            "keyDrivers": list(self.key_drivers),
            "keyRestraints": list(self.key_restraints),
        }


@dataclass(frozen=True)
class RegionSummary:
    name: str
    market_size_base: float
    market_size_forecast: float
    market_share_base: float
    market_share_forecast: float
    cagr: float
    key_markets: Tuple[str, ...] = ()
    market_drivers: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "marketSizeBase": self.market_size_base,
            "marketSizeForecast": self.market_size_forecast,
            "marketShareBase": self.market_share_base,
            "marketShareForecast": self.market_share_forecast,
            "cagr": self.cagr,
            "keyMarkets": list(self.key_markets),
            "marketDrivers": list(self.market_drivers),
        }


@dataclass(frozen=True)
class SegmentSummary:
    """Share and growth of one named segment against the global totals."""

    name: str
    market_size_base: float
    market_size_forecast: float
    market_share_base: float
    market_share_forecast: float
    cagr: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "marketSizeBase": self.market_size_base,
            "marketSizeForecast": self.market_size_forecast,
            "marketShareBase": self.market_share_base,
            "marketShareForecast": self.market_share_forecast,
            "cagr": self.cagr,
        }


@dataclass(frozen=True)
class ProductTypeSummary(SegmentSummary):
    description: str = ""
    applications: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["description"] = self.description
        d["applications"] = list(self.applications)
        return d


@dataclass(frozen=True)
class IngredientSummary(SegmentSummary):
    benefits: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["benefits"] = list(self.benefits)
        return d


@dataclass(frozen=True)
class GenderSummary(SegmentSummary):
    age_groups: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["ageGroups"] = list(self.age_groups)
        return d


@dataclass(frozen=True)
class EndUserSummary(SegmentSummary):
    characteristics: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["characteristics"] = list(self.characteristics)
        return d


@dataclass(frozen=True)
class CountrySummary:
    name: str
    market_size_base: float
    market_size_forecast: float
    cagr: float
    population: float
    penetration_rate: float
    average_spending: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "marketSizeBase": self.market_size_base,
            "marketSizeForecast": self.market_size_forecast,
            "cagr": self.cagr,
            "population": self.population,
            "penetrationRate": self.penetration_rate,
            "averageSpending": self.average_spending,
        }


@dataclass(frozen=True)
class MarketPlayer:
    name: str
    market_share: float
    headquarters: str
    key_products: Tuple[str, ...]
    revenue_2023: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "marketShare": self.market_share,
            "headquarters": self.headquarters,
            "keyProducts": list(self.key_products),
            "revenue2023": self.revenue_2023,
        }


@dataclass(frozen=True)
class MarketTrend:
    trend: str
    impact: str
    description: str
    regions: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trend": self.trend,
            "impact": self.impact,
            "description": self.description,
            "regions": list(self.regions),
        }


def time_series_to_dict(grouped: GroupedData) -> Dict[str, Any]:
    """Render grouped data as plain nested dicts of {year, value} points."""
    return {
        region: {
            segment_type: {
                segment_name: [p.to_dict() for p in points]
                for segment_name, points in segments.items()
            }
            for segment_type, segments in types.items()
        }
        for region, types in grouped.items()
    }


@dataclass(frozen=True)
class DomainModel:
    """Everything the dashboard renders, produced fresh on each pipeline run."""

    overview: Overview
    regions: Tuple[RegionSummary, ...] = ()
    product_types: Tuple[ProductTypeSummary, ...] = ()
    ingredients: Tuple[IngredientSummary, ...] = ()
    gender: Tuple[GenderSummary, ...] = ()
    end_users: Tuple[EndUserSummary, ...] = ()
    countries: Dict[str, CountrySummary] = field(default_factory=dict)
    time_series: GroupedData = field(default_factory=dict)
    market_players: Tuple[MarketPlayer, ...] = ()
    trends: Tuple[MarketTrend, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overview": self.overview.to_dict(),
            "regions": [r.to_dict() for r in self.regions],
            "productTypes": [p.to_dict() for p in self.product_types],
            "ingredients": [i.to_dict() for i in self.ingredients],
            "gender": [g.to_dict() for g in self.gender],
            "endUsers": [e.to_dict() for e in self.end_users],
            "countries": {name: c.to_dict() for name, c in self.countries.items()},
            "timeSeries": time_series_to_dict(self.time_series),
            "marketPlayers": [m.to_dict() for m in self.market_players],
            "trends": [t.to_dict() for t in self.trends],
        }
