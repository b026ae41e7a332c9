"""End-to-end tests for the transformation pipeline."""

from __future__ import annotations

import io
from pathlib import Path

import pandas as pd
import pytest

from skin_market.errors import SourceError
from skin_market.pipeline import run_pipeline, transform_frame, transform_text

HEADER = "Region,Segment Type,Segment Name,Year,Value (USD Thousand)"


def test_bundled_dataset_totals(bundled_result) -> None:
    """The bundled sample reproduces the published market figures."""
    ov = bundled_result.model.overview
    assert ov.market_size_base == pytest.approx(1358.25, abs=0.01)
    assert ov.market_size_forecast == pytest.approx(3203.44, abs=0.01)
    assert ov.cagr == pytest.approx(11.3, abs=0.1)
    assert bundled_result.parse_warnings == []


def test_bundled_dataset_sections(bundled_result) -> None:
    """Every section of the model is populated from the sample."""
    model = bundled_result.model
    assert [p.name for p in model.product_types] == ["Mesotherapy", "Micro-needle"]
    assert model.product_types[0].market_share_base == pytest.approx(60.7, abs=0.1)
    assert [g.name for g in model.gender] == ["Female", "Male"]
    assert set(model.countries) == {"United States", "Canada", "Mexico"}
    assert [r.name for r in model.regions] == ["North America"]
    assert model.regions[0].key_markets == ("United States", "Canada", "Mexico")
    assert len(model.time_series["Global"]["Type"]["Mesotherapy"]) == 9


def test_bundled_dataset_reports_regional_share_gap(bundled_result) -> None:
    """Regions without Type rows have no share, which validation flags."""
    codes = [w.code for w in bundled_result.validation_warnings]
    assert "regional_share_sum" in codes


def test_bundled_dataset_metadata(bundled_result, bundled_csv: Path) -> None:
    """Metadata reflects the source and its coverage."""
    meta = bundled_result.metadata
    assert meta["totalRecords"] == 81
    assert meta["coverage"]["yearRange"] == {"start": 2024, "end": 2032}
    assert meta["dataSource"] == str(bundled_csv)
    assert bundled_result.source == str(bundled_csv)


def test_malformed_year_row_is_reported_not_fatal() -> None:
    """A bad year drops one row; the model is still produced."""
    text = "\n".join([
        HEADER,
        "Global,Type,Mesotherapy,2024,100000",
        "Global,Type,Mesotherapy,abc,150000",
        "Global,Type,Mesotherapy,2032,200000",
    ])
    result = transform_text(text)
    assert result.model is not None
    assert len(result.parse_warnings) == 1
    assert result.parse_warnings[0].row == 2
    assert result.has_warnings
    assert result.totals.market_size_forecast == pytest.approx(200.0)


def test_missing_column_raises_source_error() -> None:
    """Structural problems abort the call."""
    with pytest.raises(SourceError):
        transform_text("Region,Segment Type,Year\nGlobal,Type,2024\n")


def test_missing_file_raises_source_error(tmp_path: Path) -> None:
    """No partial model for a missing source."""
    with pytest.raises(SourceError):
        run_pipeline(tmp_path / "nope.csv")


def test_results_are_independent(small_csv_path: Path) -> None:
    """Each call returns a fresh result."""
    first = run_pipeline(small_csv_path)
    second = run_pipeline(small_csv_path)
    assert first is not second
    assert first.model == second.model
    first.parse_warnings.append("x")
    assert second.parse_warnings == []


def test_transform_frame_label_and_validation_results(small_csv_path: Path) -> None:
    """Source labels and diagnostics flow into the result."""
    df = pd.read_csv(small_csv_path, dtype=str, keep_default_na=False)
    result = transform_frame(df, source_label="frame-test")
    assert result.source == "frame-test"
    diag = result.validation_results()
    assert set(diag) >= {"parseWarnings", "validationWarnings", "totalRows", "quality"}


def test_duplicates_last_wins_end_to_end() -> None:
    """The later duplicate row defines the value and is warned about."""
    text = "\n".join([
        HEADER,
        "Global,Type,Mesotherapy,2024,100000",
        "Global,Type,Mesotherapy,2024,300000",
        "Global,Type,Mesotherapy,2032,600000",
    ])
    result = transform_text(text)
    assert result.totals.market_size_base == pytest.approx(300.0)
    assert len(result.quality.warnings) == 1


def test_default_source_labels(small_csv_path: Path, small_csv: str) -> None:
    """Paths keep their full text; uploads use their file name."""
    assert run_pipeline(small_csv_path).source == str(small_csv_path)
    assert run_pipeline(str(small_csv_path)).source == str(small_csv_path)
    assert run_pipeline(small_csv.encode("utf-8")).source == "bytes"

    upload = io.BytesIO(small_csv.encode("utf-8"))
    upload.name = "upload.csv"
    assert run_pipeline(upload).source == "upload.csv"
