# -*- coding: utf-8 -*-
"""
Skin Market Suite | Configuration

App-level constants for the Streamlit pages plus the typed pipeline
configuration. Environment variables are parsed here and nowhere else.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Optional

from skin_market.editorial import DEFAULT_EDITORIAL, EditorialContent, load_editorial
from skin_market.errors import ConfigError

APP_TITLE = "Skin Boosters Market Intelligence"
APP_ICON = "💉"
APP_VERSION = "1.0.0"

# Page configuration
PAGE_CONFIG = {
    "page_title": APP_TITLE,
    "page_icon": APP_ICON,
    "layout": "wide",
    "initial_sidebar_state": "expanded"
}

# Bundled sample, relative to the project root
DEFAULT_DATA_FILE = "data/market-data.csv"

# Session cache lifetime for the last processed dataset
CACHE_TTL_SECONDS = 3600

# Chart palette
CHART_COLORS = [
    "#3B82F6",  # Blue
    "#EC4899",  # Pink
    "#10B981",  # Green
    "#F59E0B",  # Yellow
    "#EF4444",  # Red
    "#8B5CF6",  # Purple
    "#06B6D4",  # Cyan
    "#84CC16",  # Lime
    "#F97316",  # Orange
    "#6366F1",  # Indigo
]

# Segment-type buckets the transformer reads
SEGMENT_TYPE = "Type"
SEGMENT_INGREDIENT = "Ingredient"
SEGMENT_GENDER = "Gender"
SEGMENT_END_USER = "End User"
SEGMENT_COUNTRY = "Country"


@dataclass(frozen=True)
class PipelineConfig:
    """
    Settings for one transformation run.

    Attributes:
        base_year: First year of the projection window
        forecast_year: Last year of the projection window
        global_region: Region key whose Type bucket defines the market totals
        normalize_names: Map region/segment aliases (NA, APAC, HA, US...) to canonical names
        editorial: Descriptive content attached to the model
    """

    base_year: int = 2024
    forecast_year: int = 2032
    global_region: str = "Global"
    type_segment: str = SEGMENT_TYPE
    ingredient_segment: str = SEGMENT_INGREDIENT
    gender_segment: str = SEGMENT_GENDER
    end_user_segment: str = SEGMENT_END_USER
    country_segment: str = SEGMENT_COUNTRY
    normalize_names: bool = True
    editorial: EditorialContent = field(default=DEFAULT_EDITORIAL, compare=False)

    def __post_init__(self) -> None:
        if self.forecast_year <= self.base_year:
            raise ConfigError(
                f"Forecast year ({self.forecast_year}) must be after base year ({self.base_year})"
            )

    @property
    def cagr_years(self) -> int:
        return self.forecast_year - self.base_year

    @classmethod
    def from_env(cls, editorial: Optional[EditorialContent] = None) -> "PipelineConfig":
        """
        Build config from environment variables.

        SKIN_MARKET_BASE_YEAR, SKIN_MARKET_FORECAST_YEAR and
        SKIN_MARKET_EDITORIAL_PATH (JSON overlay) are all optional.

        Raises:
            ConfigError: If a value cannot be parsed
        """
        base_year = _parse_year("SKIN_MARKET_BASE_YEAR", os.getenv("SKIN_MARKET_BASE_YEAR", "2024"))
        forecast_year = _parse_year("SKIN_MARKET_FORECAST_YEAR", os.getenv("SKIN_MARKET_FORECAST_YEAR", "2032"))

        if editorial is None:
            editorial_path = os.getenv("SKIN_MARKET_EDITORIAL_PATH", "")
            editorial = load_editorial(editorial_path) if editorial_path else DEFAULT_EDITORIAL

        return cls(base_year=base_year, forecast_year=forecast_year, editorial=editorial)


def _parse_year(name: str, raw_value: str) -> int:
    try:
        return int(raw_value)
    except ValueError as e:
        raise ConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'."
        ) from e
