"""Unit tests for whole-source readers."""

from __future__ import annotations

import io
from pathlib import Path
from urllib.error import URLError

import pandas as pd
import pytest

from skin_market import sources
from skin_market.errors import SourceError
from skin_market.sources import frame_from_bytes, read_source


class FakeUpload(io.BytesIO):
    """Stand-in for a Streamlit UploadedFile."""

    def __init__(self, data: bytes, name: str) -> None:
        super().__init__(data)
        self.name = name


def test_read_source_path_returns_string_frame(small_csv_path: Path) -> None:
    """A CSV path is read fully, every cell as a string."""
    df = read_source(small_csv_path)
    assert len(df) == 22
    assert df["Year"].iloc[0] == "2024"


def test_read_source_missing_file_raises(tmp_path: Path) -> None:
    """A path that does not exist is a source error."""
    with pytest.raises(SourceError, match="not found"):
        read_source(tmp_path / "missing.csv")


def test_read_source_bytes(small_csv: str) -> None:
    """Raw bytes are decoded as CSV."""
    df = read_source(small_csv.encode("utf-8"))
    assert list(df.columns)[0] == "Region"


def test_read_source_uploaded_file(small_csv: str) -> None:
    """File-like uploads use their name to pick the reader."""
    df = read_source(FakeUpload(small_csv.encode("utf-8"), "upload.csv"))
    assert len(df) == 22


def test_read_source_parquet(tmp_path: Path) -> None:
    """Parquet input is converted to strings like CSV input."""
    path = tmp_path / "market.parquet"
    pd.DataFrame({
        "Region": ["Global"],
        "Segment Type": ["Type"],
        "Segment Name": ["Mesotherapy"],
        "Year": [2024],
        "Value (USD Thousand)": [823932.75],
    }).to_parquet(path)
    df = read_source(path)
    assert df["Region"].iloc[0] == "Global"
    assert df["Year"].iloc[0] == "2024"


def test_frame_from_bytes_rejects_unknown_suffix() -> None:
    """Only CSV/text and parquet inputs are accepted."""
    with pytest.raises(SourceError, match="Unsupported"):
        frame_from_bytes(b"irrelevant", "report.xlsx")


def test_frame_from_bytes_empty_raises() -> None:
    """An empty payload is a source error."""
    with pytest.raises(SourceError, match="empty"):
        frame_from_bytes(b"", "empty.csv")


def test_read_source_url_failure_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    """Network failures surface as SourceError."""

    def fail(url: str, timeout: int = 30) -> bytes:
        raise URLError("offline")

    monkeypatch.setattr(sources, "_download_bytes", fail)
    with pytest.raises(SourceError, match="Could not download"):
        read_source("https://example.com/market-data.csv")


def test_read_source_url_success(monkeypatch: pytest.MonkeyPatch, small_csv: str) -> None:
    """Downloaded bytes are parsed with the reader of the URL path suffix."""
    monkeypatch.setattr(sources, "_download_bytes", lambda url, timeout=30: small_csv.encode("utf-8"))
    df = read_source("https://example.com/data/market-data.csv")
    assert len(df) == 22


def test_read_source_rejects_other_types() -> None:
    """Integers are not a source."""
    with pytest.raises(SourceError):
        read_source(42)
