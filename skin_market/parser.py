# -*- coding: utf-8 -*-
"""
Skin Market Suite | Parser

Turns a raw market-sizing table into typed Records. Header strings are
resolved to Record fields once, here; nothing downstream touches raw
column names.
"""

from __future__ import annotations
import io
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from skin_market.config import PipelineConfig
from skin_market.errors import ParseWarning, SourceError
from skin_market.models import Record

logger = logging.getLogger(__name__)

# ==============================================================================
# CONFIGURATION
# ==============================================================================

RECORD_FIELDS = ("region", "segment_type", "segment_name", "year", "value")

COLUMN_LABELS = {
    "region": "Region",
    "segment_type": "Segment Type",
    "segment_name": "Segment Name",
    "year": "Year",
    "value": "Value (USD Thousand)",
}

# Normalized, upper-cased header -> Record field
CANON_COLS = {
    "REGION": "region",
    "SEGMENT TYPE": "segment_type",
    "SEGMENTTYPE": "segment_type",
    "SEGMENT NAME": "segment_name",
    "SEGMENTNAME": "segment_name",
    "YEAR": "year",
    "VALUE USD THOUSAND": "value",
    "VALUE USD MILLION": "value",
}

# Multiplier that brings each value column to USD millions
VALUE_SCALES = {
    "VALUE USD THOUSAND": 1 / 1000,
    "VALUE USD MILLION": 1.0,
}

REGION_ALIASES = {
    "NA": "North America",
    "EU": "Europe",
    "APAC": "Asia Pacific",
    "Asia-Pacific": "Asia Pacific",
    "LATAM": "Latin America",
    "South America": "Latin America",
    "MEA": "Middle East & Africa",
    "MENA": "Middle East & Africa",
}

SEGMENT_TYPE_ALIASES = {
    "Product Type": "Type",
    "Active Ingredient": "Ingredient",
    "Demographics": "Gender",
    "Channel": "End User",
}

SEGMENT_NAME_ALIASES = {
    "HA": "Hyaluronic Acid (HA)",
    "Hyaluronic acid": "Hyaluronic Acid (HA)",
    "PDRN": "Polydeoxyribonucleotides (PDRN)",
    "PCL": "Polycaprolactone (PCL)",
    "PLLA": "Poly-L-Lactic Acid (PLLA)",
    "US": "United States",
    "USA": "United States",
    "UK": "United Kingdom",
}

# Options for every delimited-text read (uploads, files, URLs, inline text)
READ_CSV_OPTIONS = {
    "dtype": str,
    "keep_default_na": False,
    "skip_blank_lines": True,
}


@dataclass
class ParseResult:
    """Records kept from one source plus the rows that needed attention."""

    records: List[Record] = field(default_factory=list)
    warnings: List[ParseWarning] = field(default_factory=list)
    row_count: int = 0

    @property
    def dropped_count(self) -> int:
        return self.row_count - len(self.records)


# ==============================================================================
# UTILITIES
# ==============================================================================

def normalize_header(name) -> str:
    """Trim, strip punctuation and collapse whitespace: 'Value (USD Thousand)' -> 'Value USD Thousand'."""
    s = str(name).strip()
    s = re.sub(r"[^\w\s]", "", s)
    return re.sub(r"\s+", " ", s).strip()


def clean_text(x) -> str:
    if x is None:
        return ""
    return str(x).strip()


def to_number_series(s: pd.Series) -> pd.Series:
    """Numeric coercion that strips commas, dollar signs and whitespace. Bad cells become NaN."""
    s2 = s.astype(str).str.replace(r"[,$\s]", "", regex=True)
    out = pd.to_numeric(s2, errors="coerce").astype(float)
    return out.where(np.isfinite(out))


def normalize_names(region: str, segment_type: str, segment_name: str) -> Tuple[str, str, str]:
    return (
        REGION_ALIASES.get(region, region),
        SEGMENT_TYPE_ALIASES.get(segment_type, segment_type),
        SEGMENT_NAME_ALIASES.get(segment_name, segment_name),
    )


# ==============================================================================
# COLUMN MAPPING
# ==============================================================================

def canonicalize_columns(df: pd.DataFrame) -> Tuple[pd.DataFrame, float]:
    """
    Map raw headers to Record fields and keep only those columns.

    Returns:
        (frame with columns named after RECORD_FIELDS, value scale to millions)

    Raises:
        SourceError: If a required column is missing
    """
    mapping: Dict[str, str] = {}
    scale: Optional[float] = None

    for col in df.columns:
        key = normalize_header(col).upper()
        field_name = CANON_COLS.get(key)
        if field_name is None or field_name in mapping.values():
            continue
        mapping[col] = field_name
        if field_name == "value":
            scale = VALUE_SCALES[key]

    missing = [COLUMN_LABELS[f] for f in RECORD_FIELDS if f not in mapping.values()]
    if missing:
        raise SourceError(f"Missing required columns: {', '.join(missing)}")

    out = df[list(mapping)].rename(columns=mapping)
    return out, scale


# ==============================================================================
# PARSING
# ==============================================================================

def parse_frame(df: pd.DataFrame, config: Optional[PipelineConfig] = None) -> ParseResult:
    """
    Convert a raw table into Records.

    Rows with a blank region/segment field or a non-integer year are dropped;
    non-numeric values default to 0. Each case adds a ParseWarning whose row
    is the 1-based data row (header excluded).

    Args:
        df: Raw table, one column per header (strings preferred)
        config: Pipeline settings (alias normalization)

    Returns:
        ParseResult with records in input order
    """
    config = config or PipelineConfig()
    frame, scale = canonicalize_columns(df)
    result = ParseResult(row_count=len(frame))

    regions = frame["region"].map(clean_text).tolist()
    segment_types = frame["segment_type"].map(clean_text).tolist()
    segment_names = frame["segment_name"].map(clean_text).tolist()
    raw_years = frame["year"].tolist()
    raw_values = frame["value"].tolist()
    years = to_number_series(frame["year"]).tolist()
    values = to_number_series(frame["value"]).tolist()

    for i in range(len(frame)):
        row_no = i + 1
        text_fields = (
            ("region", regions[i]),
            ("segment_type", segment_types[i]),
            ("segment_name", segment_names[i]),
        )
        blank = next((name for name, v in text_fields if not v), None)
        if blank is not None:
            _warn(result, row_no, blank, None, f"Missing {COLUMN_LABELS[blank]}; row dropped")
            continue

        year = years[i]
        if pd.isna(year) or not float(year).is_integer():
            _warn(result, row_no, "year", raw_years[i], f"Invalid year {raw_years[i]!r}; row dropped")
            continue

        value = values[i]
        if pd.isna(value):
            _warn(result, row_no, "value", raw_values[i], f"Invalid value {raw_values[i]!r}; defaulted to 0")
            value = 0.0

        region, segment_type, segment_name = regions[i], segment_types[i], segment_names[i]
        if config.normalize_names:
            region, segment_type, segment_name = normalize_names(region, segment_type, segment_name)

        result.records.append(
            Record(region, segment_type, segment_name, int(year), float(value) * scale, row=row_no)
        )

    logger.info(
        "Parsed %d of %d rows (%d warnings)",
        len(result.records), result.row_count, len(result.warnings),
    )
    return result


def read_csv_text(text: str) -> pd.DataFrame:
    """Read delimited text into a string-typed DataFrame."""
    try:
        return pd.read_csv(io.StringIO(text), **READ_CSV_OPTIONS)
    except pd.errors.EmptyDataError as e:
        raise SourceError("Source is empty") from e
    except pd.errors.ParserError as e:
        raise SourceError(f"Source is not valid delimited text: {e}") from e


def parse_csv_text(text: str, config: Optional[PipelineConfig] = None) -> ParseResult:
    return parse_frame(read_csv_text(text), config)


def _warn(result: ParseResult, row: int, column: str, value, message: str) -> None:
    raw = None if value is None else str(value)
    result.warnings.append(ParseWarning(row=row, column=COLUMN_LABELS[column], value=raw, message=message))
    logger.warning("Row %d: %s", row, message)
