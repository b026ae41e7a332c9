"""Unit tests for header mapping and row parsing."""

from __future__ import annotations

import pandas as pd
import pytest

from skin_market.config import PipelineConfig
from skin_market.errors import SourceError
from skin_market.parser import (
    canonicalize_columns,
    normalize_header,
    parse_csv_text,
    parse_frame,
    read_csv_text,
    to_number_series,
)

HEADER = "Region,Segment Type,Segment Name,Year,Value (USD Thousand)"


def test_normalize_header_strips_punctuation_and_spaces() -> None:
    """Parentheses vanish and inner whitespace collapses."""
    assert normalize_header("  Value  (USD Thousand) ") == "Value USD Thousand"
    assert normalize_header("Segment Type") == "Segment Type"


def test_canonicalize_columns_is_case_insensitive_and_ignores_extras() -> None:
    """Mixed-case headers map to fields; unknown columns are dropped."""
    df = pd.DataFrame(columns=["REGION", "segment type", "Segment name", "year", "value (usd thousand)", "Notes"])
    frame, scale = canonicalize_columns(df)
    assert list(frame.columns) == ["region", "segment_type", "segment_name", "year", "value"]
    assert scale == pytest.approx(0.001)


def test_canonicalize_columns_accepts_million_values() -> None:
    """A Value (USD Million) column is taken as-is."""
    df = pd.DataFrame(columns=["Region", "Segment Type", "Segment Name", "Year", "Value (USD Million)"])
    _, scale = canonicalize_columns(df)
    assert scale == 1.0


def test_canonicalize_columns_missing_column_raises() -> None:
    """A missing Year column is a source error naming the column."""
    df = pd.DataFrame(columns=["Region", "Segment Type", "Segment Name", "Value (USD Thousand)"])
    with pytest.raises(SourceError, match="Year"):
        canonicalize_columns(df)


def test_to_number_series_strips_currency_and_commas() -> None:
    """Formatted numbers parse; garbage becomes NaN."""
    out = to_number_series(pd.Series(["$1,234.5", " 42 ", "abc", "inf"]))
    assert out.iloc[0] == pytest.approx(1234.5)
    assert out.iloc[1] == pytest.approx(42.0)
    assert pd.isna(out.iloc[2])
    assert pd.isna(out.iloc[3])


def test_parse_divides_thousands_into_millions() -> None:
    """Values are stored in USD millions."""
    result = parse_csv_text(f"{HEADER}\nGlobal,Type,Mesotherapy,2024,823932.7502\n")
    assert len(result.records) == 1
    record = result.records[0]
    assert record.year == 2024
    assert record.value == pytest.approx(823.9327502)
    assert result.warnings == []


def test_parse_keeps_large_decimal_values_intact() -> None:
    """Values with three decimals are not mistaken for thousands separators."""
    result = parse_csv_text(f"{HEADER}\nGlobal,Type,Micro-needle,2032,1187917.396\n")
    assert result.records[0].value == pytest.approx(1187.917396)


def test_parse_invalid_year_drops_row_with_warning() -> None:
    """Non-numeric year drops the row and reports its 1-based number."""
    text = f"{HEADER}\nGlobal,Type,A,2024,100\nGlobal,Type,B,abc,200\n"
    result = parse_csv_text(text)
    assert [r.segment_name for r in result.records] == ["A"]
    assert len(result.warnings) == 1
    warning = result.warnings[0]
    assert warning.row == 2
    assert warning.column == "Year"
    assert warning.value == "abc"
    assert result.dropped_count == 1


def test_parse_fractional_year_drops_row() -> None:
    """2024.5 is not a valid year."""
    result = parse_csv_text(f"{HEADER}\nGlobal,Type,A,2024.5,100\n")
    assert result.records == []
    assert len(result.warnings) == 1


def test_parse_invalid_value_defaults_to_zero() -> None:
    """Non-numeric value keeps the row with value 0 and a warning."""
    result = parse_csv_text(f"{HEADER}\nGlobal,Type,A,2024,n/a\n")
    assert len(result.records) == 1
    assert result.records[0].value == 0.0
    assert result.warnings[0].column == "Value (USD Thousand)"


def test_parse_blank_segment_name_drops_row() -> None:
    """Rows without a segment name cannot be grouped."""
    result = parse_csv_text(f"{HEADER}\nGlobal,Type,,2024,100\n")
    assert result.records == []
    assert result.warnings[0].column == "Segment Name"


def test_parse_skips_blank_lines() -> None:
    """Empty lines are not rows and produce no warnings."""
    text = f"{HEADER}\n\nGlobal,Type,A,2024,100\n\n\nGlobal,Type,A,2025,110\n"
    result = parse_csv_text(text)
    assert len(result.records) == 2
    assert result.warnings == []


def test_parse_normalizes_aliases() -> None:
    """Region and segment name aliases map to canonical names."""
    result = parse_csv_text(f"{HEADER}\nNA,Country,US,2024,100\nAPAC,Product Type,Mesotherapy,2024,5\n")
    first, second = result.records
    assert (first.region, first.segment_name) == ("North America", "United States")
    assert (second.region, second.segment_type) == ("Asia Pacific", "Type")


def test_parse_without_normalization_keeps_raw_names() -> None:
    """normalize_names=False leaves names untouched."""
    config = PipelineConfig(normalize_names=False)
    result = parse_csv_text(f"{HEADER}\nNA,Country,US,2024,100\n", config)
    assert result.records[0].region == "NA"
    assert result.records[0].segment_name == "US"


def test_parse_trims_whitespace_around_names() -> None:
    """Surrounding whitespace is not part of a name."""
    result = parse_csv_text(f"{HEADER}\n Global , Type , Mesotherapy ,2024,100\n")
    record = result.records[0]
    assert (record.region, record.segment_type, record.segment_name) == ("Global", "Type", "Mesotherapy")


def test_parse_frame_accepts_numeric_columns() -> None:
    """Already-typed frames (e.g. from parquet) parse the same way."""
    df = pd.DataFrame({
        "Region": ["Global"],
        "Segment Type": ["Type"],
        "Segment Name": ["A"],
        "Year": [2024],
        "Value (USD Million)": [12.5],
    })
    result = parse_frame(df)
    assert result.records[0].year == 2024
    assert result.records[0].value == pytest.approx(12.5)


def test_read_csv_text_empty_raises() -> None:
    """Empty input is a source error."""
    with pytest.raises(SourceError):
        read_csv_text("")
