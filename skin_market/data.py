# -*- coding: utf-8 -*-
"""
Skin Market Suite | Data Layer

Chooses the active source for the dashboard and runs the pipeline on it
through Streamlit's data cache. Source priority:

1) Uploaded file (CSV or parquet)
2) DATA_PATH environment variable
3) DATA_URL from st.secrets, or the URL typed in the sidebar
4) Bundled sample data/market-data.csv
"""

from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import MutableMapping, Optional, Tuple

import streamlit as st
from streamlit.errors import StreamlitAPIException

from skin_market.config import CACHE_TTL_SECONDS, DEFAULT_DATA_FILE, PipelineConfig
from skin_market.errors import ConfigError, SourceError
from skin_market.pipeline import PipelineResult, run_pipeline, transform_frame
from skin_market.sources import frame_from_bytes
from skin_market.state import (
    KEY_DATA_URL,
    KEY_SOURCE_MODE,
    KEY_UPLOAD,
    clear_last_error,
    get_cached_result,
    get_session,
    set_last_error,
    store_result,
)

logger = logging.getLogger(__name__)

BUNDLED_DATA_PATH = Path(__file__).resolve().parent.parent / DEFAULT_DATA_FILE

MODE_UPLOAD = "UPLOAD"
MODE_LOCAL = "LOCAL"
MODE_URL = "URL"
MODE_SAMPLE = "SAMPLE"
MODE_NO_DATA = "NO_DATA"


# ==============================================================================
# DATA LOADERS (cached)
# ==============================================================================

@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def load_result_from_bytes(data: bytes, name: str) -> PipelineResult:
    return transform_frame(frame_from_bytes(data, name), PipelineConfig.from_env(), source_label=name)


@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def load_result_from_path(path: str, mtime: float) -> PipelineResult:
    # mtime is part of the cache key so an edited file is re-read
    return run_pipeline(path, PipelineConfig.from_env())


@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def load_result_from_url(url: str) -> PipelineResult:
    return run_pipeline(url, PipelineConfig.from_env(), source_label=url)


# ==============================================================================
# SOURCE RESOLUTION
# ==============================================================================

def _secret_url() -> str:
    try:
        return st.secrets.get("DATA_URL", "")
    except (FileNotFoundError, StreamlitAPIException):
        return ""


def resolve_source(session: MutableMapping, environ=None) -> Tuple[str, Optional[object]]:
    """
    Pick the highest-priority source that is configured.

    Returns:
        (mode, source) where source is an upload dict, path or URL
    """
    environ = os.environ if environ is None else environ

    upload = session.get(KEY_UPLOAD)
    if upload is not None:
        return MODE_UPLOAD, upload

    local_path = environ.get("DATA_PATH", "")
    if local_path:
        return MODE_LOCAL, local_path

    url = _secret_url() or session.get(KEY_DATA_URL, "")
    if url:
        return MODE_URL, url

    if BUNDLED_DATA_PATH.is_file():
        return MODE_SAMPLE, str(BUNDLED_DATA_PATH)
    return MODE_NO_DATA, None


def _load(mode: str, source) -> PipelineResult:
    if mode == MODE_UPLOAD:
        return load_result_from_bytes(source["data"], source["name"])
    if mode == MODE_URL:
        return load_result_from_url(source)
    path = Path(source)
    if not path.is_file():
        raise SourceError(f"Source file not found: {path}")
    return load_result_from_path(str(path), path.stat().st_mtime)


def load_data_flow(session: Optional[MutableMapping] = None) -> Tuple[Optional[PipelineResult], str]:
    """
    Resolve, load and cache the active dataset.

    A failed load records the message in last_error and keeps serving the
    previously cached result, if any.

    Returns:
        (result or None, source mode); failed modes carry an _ERROR suffix
    """
    s = get_session(session)
    mode, source = resolve_source(s)
    s[KEY_SOURCE_MODE] = mode
    if mode == MODE_NO_DATA:
        return get_cached_result(s), mode

    try:
        result = _load(mode, source)
    except (SourceError, ConfigError) as e:
        logger.error("Loading %s source failed: %s", mode, e)
        set_last_error(str(e), s)
        return get_cached_result(s), f"{mode}_ERROR"

    store_result(result, s)
    clear_last_error(s)
    return result, mode
