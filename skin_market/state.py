# -*- coding: utf-8 -*-
"""
Skin Market Suite | State Management Module

Session-scoped cache of the last processed dataset plus the last load
error. Every helper takes the session mapping explicitly and falls back
to st.session_state, so pages and tests share one code path.
"""

from __future__ import annotations
import time
from typing import Any, Dict, MutableMapping, Optional

import streamlit as st

from skin_market.config import CACHE_TTL_SECONDS
from skin_market.grouping import count_points

# ==============================================================================
# STATE KEYS
# ==============================================================================

KEY_RESULT = "market_result"
KEY_LOADED_AT = "market_loaded_at"
KEY_LAST_ERROR = "last_error"
KEY_DATA_URL = "data_url"
KEY_SOURCE_MODE = "data_source_mode"
KEY_UPLOAD = "uploaded_source"
KEY_UPLOADER_GEN = "uploader_generation"

DEFAULTS = {
    KEY_RESULT: None,
    KEY_LOADED_AT: None,
    KEY_LAST_ERROR: "",
    KEY_DATA_URL: "",
    KEY_SOURCE_MODE: "AUTO",
    KEY_UPLOAD: None,
    KEY_UPLOADER_GEN: 0,
}


def get_session(session: Optional[MutableMapping] = None) -> MutableMapping:
    return st.session_state if session is None else session


# ==============================================================================
# SESSION STATE INITIALIZATION
# ==============================================================================

def init_session_state(session: Optional[MutableMapping] = None) -> None:
    """Initialize all required session state variables."""
    s = get_session(session)
    for key, value in DEFAULTS.items():
        if key not in s:
            s[key] = value


# ==============================================================================
# RESULT CACHE
# ==============================================================================

def store_result(result, session: Optional[MutableMapping] = None, now: Optional[float] = None) -> None:
    """Replace the cached result and stamp it."""
    s = get_session(session)
    s[KEY_RESULT] = result
    s[KEY_LOADED_AT] = time.time() if now is None else now


def get_cached_result(session: Optional[MutableMapping] = None, max_age: float = CACHE_TTL_SECONDS,
                      now: Optional[float] = None):
    """
    Cached result while younger than max_age seconds.

    Returns:
        PipelineResult or None when empty or expired
    """
    s = get_session(session)
    result = s.get(KEY_RESULT)
    loaded_at = s.get(KEY_LOADED_AT)
    if result is None or loaded_at is None:
        return None
    now = time.time() if now is None else now
    if now - loaded_at > max_age:
        return None
    return result


def clear_data(session: Optional[MutableMapping] = None) -> None:
    s = get_session(session)
    s[KEY_RESULT] = None
    s[KEY_LOADED_AT] = None
    s[KEY_LAST_ERROR] = ""


# ==============================================================================
# UPLOADS
# ==============================================================================

def uploader_key(session: Optional[MutableMapping] = None) -> str:
    """Widget key for the file uploader; changes whenever the upload is cleared."""
    return f"uploader_{get_session(session).get(KEY_UPLOADER_GEN, 0)}"


def remember_upload(name: str, data: bytes, session: Optional[MutableMapping] = None) -> bool:
    """
    Store an uploaded file as the active source.

    Returns:
        True when the stored upload changed and the page should rerun
    """
    s = get_session(session)
    current = s.get(KEY_UPLOAD)
    if current is not None and current.get("name") == name and current.get("data") == data:
        return False
    s[KEY_UPLOAD] = {"name": name, "data": data}
    return True


def clear_upload(session: Optional[MutableMapping] = None) -> None:
    """Drop the stored upload and retire the uploader widget holding it."""
    s = get_session(session)
    s[KEY_UPLOAD] = None
    s[KEY_UPLOADER_GEN] = s.get(KEY_UPLOADER_GEN, 0) + 1


# ==============================================================================
# ERROR HANDLING
# ==============================================================================

def set_last_error(msg: str, session: Optional[MutableMapping] = None) -> None:
    """Set last error message in session state."""
    get_session(session)[KEY_LAST_ERROR] = msg


def get_last_error(session: Optional[MutableMapping] = None) -> str:
    return get_session(session).get(KEY_LAST_ERROR, "")


def clear_last_error(session: Optional[MutableMapping] = None) -> None:
    get_session(session)[KEY_LAST_ERROR] = ""


# ==============================================================================
# STATS
# ==============================================================================

def data_stats(result) -> Optional[Dict[str, Any]]:
    """Counts shown in the sidebar for a loaded result."""
    if result is None or result.model is None:
        return None
    model = result.model
    return {
        "totalDataPoints": count_points(model.time_series),
        "regions": len(model.regions),
        "countries": len(model.countries),
        "lastUpdated": result.processed_at.isoformat(),
        "dataSource": result.source,
    }


# ==============================================================================
# THEME HELPERS
# ==============================================================================

def inject_custom_css() -> None:
    """Inject custom CSS for styling."""
    st.markdown(
        """
        <style>
        .block-container { padding-top: 1.2rem; padding-bottom: 2rem; }
        div[data-testid="stMetricValue"] { font-size: 1.55rem; }
        .stDataFrame { border-radius: 8px; overflow: hidden; }
        .stButton>button { border-radius: 10px; }
        </style>
        """,
        unsafe_allow_html=True,
    )
