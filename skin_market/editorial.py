# -*- coding: utf-8 -*-
"""
Skin Market Suite | Editorial Content

Descriptive, non-computed content attached to the domain model: region
drivers, product descriptions, ingredient benefits, country demographics,
market players and trends. Callers may inject their own tables; unknown
names fall back to generic defaults.
"""

from __future__ import annotations
import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from skin_market.errors import ConfigError
from skin_market.models import MarketPlayer, MarketTrend


# ==============================================================================
# DEFAULT TABLES
# ==============================================================================

MARKET_NAME = "Global Skin Boosters Market"

KEY_DRIVERS = (
    "Rising awareness about aesthetic treatments",
    "Increasing disposable income in emerging markets",
    "Growing aging population globally",
    "Technological advancements in minimally invasive procedures",
)

KEY_RESTRAINTS = (
    "High cost of treatments",
    "Risk of side effects and complications",
    "Lack of skilled professionals in developing regions",
)

REGION_DRIVERS = {
    "North America": ("High disposable income", "Advanced healthcare infrastructure"),
    "Europe": ("Aging population", "Aesthetic consciousness"),
    "Asia Pacific": ("Growing middle class", "Increasing beauty awareness"),
    "Latin America": ("Beauty culture", "Medical tourism"),
    "Middle East & Africa": ("Medical tourism", "High-income demographics"),
}

PRODUCT_DESCRIPTIONS = {
    "Mesotherapy": "Injection of vitamins, minerals, and other nutrients directly into the skin",
    "Micro-needle": "Minimally invasive skin treatment using fine needles to create micro-injuries",
}

PRODUCT_APPLICATIONS = {
    "Mesotherapy": ("Facial rejuvenation", "Body contouring", "Hair restoration"),
    "Micro-needle": ("Scar reduction", "Skin texture improvement", "Anti-aging"),
}

INGREDIENT_BENEFITS = {
    "Hyaluronic Acid (HA)": ("Deep hydration", "Volume restoration", "Skin elasticity"),
    "Hyaluronic acid (HA)": ("Deep hydration", "Volume restoration", "Skin elasticity"),
    "Polydeoxyribonucleotides (PDRN)": ("Tissue regeneration", "Anti-inflammatory", "Wound healing"),
    "Poly-L-Lactic Acid (PLLA)": ("Collagen stimulation", "Long-lasting results"),
    "Poly-L-Lactic Acid (PLLA)/ Poly-D, L-Lactic Acid (PDLLA)": ("Collagen stimulation", "Long-lasting results"),
    "Polycaprolactone (PCL)": ("Collagen synthesis", "Skin tightening"),
    "Exosomes": ("Cellular regeneration", "Advanced anti-aging"),
}

AGE_GROUPS = {
    "Female": ("25-35", "36-45", "46-55", "55+"),
}

END_USER_CHARACTERISTICS = {
    "Medspas": ("Luxury experience", "Comprehensive services", "High-end clientele"),
    "Dermatology Clinics": ("Medical expertise", "Clinical setting", "Insurance coverage"),
}

# Population in millions, penetration in percent, spending in USD per patient
COUNTRY_POPULATION = {"United States": 331.9, "US": 331.9, "Canada": 38.2, "Mexico": 128.9}
COUNTRY_PENETRATION = {"United States": 2.8, "US": 2.8, "Canada": 3.2, "Mexico": 1.1}
COUNTRY_SPENDING = {"United States": 890.0, "US": 890.0, "Canada": 1150.0, "Mexico": 650.0}

MARKET_PLAYERS = (
    MarketPlayer("Allergan Aesthetics (AbbVie)", 18.5, "Ireland",
                 ("Juvederm", "Voluma", "Volbella", "Skinvive"), 4200),
    MarketPlayer("Galderma", 15.2, "Switzerland",
                 ("Restylane", "Emervel", "Sculptra", "Redensity"), 3800),
    MarketPlayer("Merz Pharma", 12.8, "Germany",
                 ("Belotero", "Radiesse", "Ultherapy"), 2900),
    MarketPlayer("Sinclair Pharma", 9.4, "UK",
                 ("Perfectha", "Sculptra", "Ellanse"), 1800),
    MarketPlayer("Others", 44.1, "Various", ("Various regional brands",), 8500),
)

MARKET_TRENDS = (
    MarketTrend(
        "Rising Demand for Non-Invasive Procedures", "High",
        "Consumers increasingly prefer minimally invasive treatments with minimal downtime",
        ("North America", "Europe", "Asia Pacific"),
    ),
    MarketTrend(
        "Growing Male Market Segment", "Medium",
        "Increasing acceptance of aesthetic treatments among male consumers",
        ("North America", "Europe"),
    ),
    MarketTrend(
        "Technological Advancements", "High",
        "Development of new ingredients and delivery methods enhancing treatment efficacy",
        ("Global",),
    ),
    MarketTrend(
        "Medical Tourism", "Medium",
        "Cross-border travel for affordable and high-quality aesthetic treatments",
        ("Asia Pacific", "Latin America", "Middle East & Africa"),
    ),
)


# ==============================================================================
# EDITORIAL CONTENT
# ==============================================================================

@dataclass(frozen=True)
class EditorialContent:
    """Lookup tables keyed by entity name, with generic fallbacks."""

    market_name: str = MARKET_NAME
    key_drivers: Tuple[str, ...] = KEY_DRIVERS
    key_restraints: Tuple[str, ...] = KEY_RESTRAINTS
    region_drivers: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: dict(REGION_DRIVERS))
    product_descriptions: Mapping[str, str] = field(default_factory=lambda: dict(PRODUCT_DESCRIPTIONS))
    product_applications: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: dict(PRODUCT_APPLICATIONS))
    ingredient_benefits: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: dict(INGREDIENT_BENEFITS))
    age_groups: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: dict(AGE_GROUPS))
    end_user_characteristics: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: dict(END_USER_CHARACTERISTICS))
    country_population: Mapping[str, float] = field(default_factory=lambda: dict(COUNTRY_POPULATION))
    country_penetration: Mapping[str, float] = field(default_factory=lambda: dict(COUNTRY_PENETRATION))
    country_spending: Mapping[str, float] = field(default_factory=lambda: dict(COUNTRY_SPENDING))
    market_players: Tuple[MarketPlayer, ...] = MARKET_PLAYERS
    trends: Tuple[MarketTrend, ...] = MARKET_TRENDS

    # Fallbacks for names missing from the tables
    default_region_drivers: Tuple[str, ...] = ("Market expansion", "Economic growth")
    default_description: str = "Advanced skin booster treatment"
    default_applications: Tuple[str, ...] = ("Skin enhancement", "Anti-aging")
    default_benefits: Tuple[str, ...] = ("Skin enhancement", "Anti-aging benefits")
    default_age_groups: Tuple[str, ...] = ("30-40", "41-50", "50+")
    default_characteristics: Tuple[str, ...] = ("Professional service", "Quality treatment")
    default_population: float = 50.0
    default_penetration: float = 2.0
    default_spending: float = 750.0

    def drivers_for_region(self, name: str) -> Tuple[str, ...]:
        return tuple(self.region_drivers.get(name, self.default_region_drivers))

    def description_for_product(self, name: str) -> str:
        return self.product_descriptions.get(name, self.default_description)

    def applications_for_product(self, name: str) -> Tuple[str, ...]:
        return tuple(self.product_applications.get(name, self.default_applications))

    def benefits_for_ingredient(self, name: str) -> Tuple[str, ...]:
        return tuple(self.ingredient_benefits.get(name, self.default_benefits))

    def age_groups_for_gender(self, name: str) -> Tuple[str, ...]:
        return tuple(self.age_groups.get(name, self.default_age_groups))

    def characteristics_for_end_user(self, name: str) -> Tuple[str, ...]:
        return tuple(self.end_user_characteristics.get(name, self.default_characteristics))

    def population_for_country(self, name: str) -> float:
        return float(self.country_population.get(name, self.default_population))

    def penetration_for_country(self, name: str) -> float:
        return float(self.country_penetration.get(name, self.default_penetration))

    def spending_for_country(self, name: str) -> float:
        return float(self.country_spending.get(name, self.default_spending))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["EditorialContent"] = None) -> "EditorialContent":
        """
        Overlay a JSON-style mapping on top of the default tables.

        Lookup tables are merged key by key; scalar and list fields replace the
        base value. Keys may be snake_case or camelCase.

        Args:
            data: Mapping loaded from JSON (or built by the caller)
            base: Content to overlay (defaults to DEFAULT_EDITORIAL)

        Returns:
            New EditorialContent instance

        Raises:
            ConfigError: On unknown keys or wrongly typed values
        """
        base = base if base is not None else DEFAULT_EDITORIAL
        known = set(base.__dataclass_fields__)
        updates: Dict[str, Any] = {}

        for raw_key, value in data.items():
            key = _snake_case(raw_key)
            if key not in known:
                raise ConfigError(f"Unknown editorial key: {raw_key!r}")

            current = getattr(base, key)
            if key == "market_players":
                updates[key] = tuple(_player_from_dict(p) for p in _as_list(raw_key, value))
            elif key == "trends":
                updates[key] = tuple(_trend_from_dict(t) for t in _as_list(raw_key, value))
            elif isinstance(current, Mapping):
                if not isinstance(value, Mapping):
                    raise ConfigError(f"Editorial key {raw_key!r} must be an object")
                merged = dict(current)
                for name, entry in value.items():
                    merged[name] = _table_entry(key, f"{raw_key}.{name}", entry)
                updates[key] = merged
            elif isinstance(current, tuple):
                updates[key] = _text_tuple(raw_key, value)
            elif isinstance(current, float):
                updates[key] = _as_float(raw_key, value)
            else:
                if not isinstance(value, str):
                    raise ConfigError(f"Editorial key {raw_key!r} must be a string")
                updates[key] = value

        return replace(base, **updates)


DEFAULT_EDITORIAL = EditorialContent()


def load_editorial(path: Union[str, Path]) -> EditorialContent:
    """Read an editorial overlay from a JSON file."""
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Editorial file not found: {p}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Editorial file {p} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Editorial file {p} must contain a JSON object")
    return EditorialContent.from_mapping(data)


# ==============================================================================
# HELPERS
# ==============================================================================

def _snake_case(key: str) -> str:
    out = []
    for ch in key:
        if ch.isupper():
            out.append("_" + ch.lower())
        else:
            out.append(ch)
    return "".join(out).lstrip("_")


def _as_list(key: str, value: Any) -> list:
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"Editorial key {key!r} must be a list")
    return list(value)


# Tables whose entries are numbers or single strings; the rest hold lists
NUMERIC_TABLES = frozenset({"country_population", "country_penetration", "country_spending"})
TEXT_TABLES = frozenset({"product_descriptions"})


def _as_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"Editorial key {key!r} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Editorial key {key!r} must be a number, got {value!r}") from e


def _text_tuple(key: str, value: Any) -> Tuple[str, ...]:
    items = _as_list(key, value)
    if not all(isinstance(item, str) for item in items):
        raise ConfigError(f"Editorial key {key!r} must be a list of strings")
    return tuple(items)


def _table_entry(table: str, key: str, entry: Any) -> Any:
    if table in NUMERIC_TABLES:
        return _as_float(key, entry)
    if table in TEXT_TABLES:
        if not isinstance(entry, str):
            raise ConfigError(f"Editorial key {key!r} must be a string")
        return entry
    return _text_tuple(key, entry)


def _player_from_dict(d: Mapping[str, Any]) -> MarketPlayer:
    try:
        return MarketPlayer(
            name=d["name"],
            market_share=float(d.get("marketShare", d.get("market_share", 0.0))),
            headquarters=d.get("headquarters", ""),
            key_products=tuple(d.get("keyProducts", d.get("key_products", ()))),
            revenue_2023=float(d.get("revenue2023", d.get("revenue_2023", 0.0))),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Invalid market player entry: {d!r}") from e


def _trend_from_dict(d: Mapping[str, Any]) -> MarketTrend:
    try:
        return MarketTrend(
            trend=d["trend"],
            impact=d.get("impact", ""),
            description=d.get("description", ""),
            regions=tuple(d.get("regions", ())),
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise ConfigError(f"Invalid trend entry: {d!r}") from e
