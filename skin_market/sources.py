# -*- coding: utf-8 -*-
"""
Skin Market Suite | Source Readers

Materializes a whole input (local file, uploaded file, raw bytes or URL)
into a string-typed DataFrame before any parsing happens.
"""

from __future__ import annotations
import io
import logging
from pathlib import Path
from typing import Union
from urllib.error import URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

import pandas as pd

from skin_market.errors import SourceError
from skin_market.parser import READ_CSV_OPTIONS

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".csv", ".txt", ""}
PARQUET_SUFFIXES = {".parquet", ".pq"}
SUPPORTED_SUFFIXES = TEXT_SUFFIXES | PARQUET_SUFFIXES


def _download_bytes(url: str, timeout: int = 30) -> bytes:
    """Download file from URL with basic UA."""
    req = Request(url, headers={"User-Agent": "Mozilla/5.0"})
    with urlopen(req, timeout=timeout) as resp:
        return resp.read()


def frame_from_bytes(data: bytes, name: str = "upload.csv") -> pd.DataFrame:
    """
    Decode a CSV or parquet payload, picking the reader from the file suffix.

    Raises:
        SourceError: If the suffix is unsupported or the payload cannot be read
    """
    suffix = Path(name).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise SourceError(f"Unsupported input type '{suffix}' ({name}); expected .csv or .parquet")

    try:
        if suffix in PARQUET_SUFFIXES:
            df = pd.read_parquet(io.BytesIO(data))
            return df.astype(object).where(df.notna(), "").astype(str)
        return pd.read_csv(io.BytesIO(data), **READ_CSV_OPTIONS)
    except pd.errors.EmptyDataError as e:
        raise SourceError(f"Source {name} is empty") from e
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError, OSError) as e:
        raise SourceError(f"Could not read {name}: {e}") from e


def read_source(source: Union[str, Path, bytes, bytearray, io.IOBase], timeout: int = 30) -> pd.DataFrame:
    """
    Read an entire source into memory.

    Args:
        source: Filesystem path, http(s) URL, raw CSV bytes, or a file-like
            object (e.g. a Streamlit UploadedFile) whose .name carries the suffix
        timeout: Network timeout in seconds for URLs

    Returns:
        DataFrame of strings, one column per header

    Raises:
        SourceError: Missing file, network failure, unsupported or unreadable input
    """
    if isinstance(source, (bytes, bytearray)):
        return frame_from_bytes(bytes(source))

    if hasattr(source, "read"):
        name = getattr(source, "name", None) or "upload.csv"
        data = source.getvalue() if hasattr(source, "getvalue") else source.read()
        if isinstance(data, str):
            data = data.encode("utf-8")
        return frame_from_bytes(data, name)

    if not isinstance(source, (str, Path)):
        raise SourceError(f"Unsupported source type: {type(source).__name__}")

    text = str(source)
    if text.startswith(("http://", "https://")):
        logger.info("Downloading %s", text)
        try:
            data = _download_bytes(text, timeout=timeout)
        except (URLError, OSError, ValueError) as e:
            logger.error("Download failed for %s: %s", text, e)
            raise SourceError(f"Could not download {text}: {e}") from e
        return frame_from_bytes(data, urlparse(text).path or "download.csv")

    path = Path(text).expanduser()
    if not path.is_file():
        logger.error("Source file not found: %s", path)
        raise SourceError(f"Source file not found: {path}")
    return frame_from_bytes(path.read_bytes(), path.name)
