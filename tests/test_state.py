"""Unit tests for session-state helpers and the data load flow."""

from __future__ import annotations

from pathlib import Path

import pytest

from skin_market import data
from skin_market.state import (
    KEY_DATA_URL,
    KEY_LAST_ERROR,
    KEY_RESULT,
    KEY_UPLOAD,
    clear_data,
    clear_last_error,
    clear_upload,
    data_stats,
    get_cached_result,
    get_last_error,
    init_session_state,
    remember_upload,
    set_last_error,
    store_result,
    uploader_key,
)


@pytest.fixture
def session() -> dict:
    s: dict = {}
    init_session_state(s)
    return s


@pytest.fixture
def no_secrets(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(data, "_secret_url", lambda: "")
    monkeypatch.delenv("DATA_PATH", raising=False)


def test_init_session_state_keeps_existing_values() -> None:
    """Defaults never overwrite values already in the session."""
    s = {KEY_DATA_URL: "https://example.com/x.csv"}
    init_session_state(s)
    assert s[KEY_DATA_URL] == "https://example.com/x.csv"
    assert s[KEY_RESULT] is None
    assert s[KEY_LAST_ERROR] == ""


def test_cached_result_expires(session: dict) -> None:
    """Results older than the TTL are not served."""
    store_result("result", session, now=1000.0)
    assert get_cached_result(session, max_age=3600, now=1000.0 + 3599) == "result"
    assert get_cached_result(session, max_age=3600, now=1000.0 + 3601) is None


def test_store_result_replaces_previous(session: dict) -> None:
    """A new load replaces the cached result."""
    store_result("old", session, now=1.0)
    store_result("new", session, now=2.0)
    assert get_cached_result(session, now=3.0) == "new"


def test_clear_data(session: dict) -> None:
    """Clearing drops the result and the error."""
    store_result("result", session, now=1.0)
    set_last_error("boom", session)
    clear_data(session)
    assert get_cached_result(session, now=1.0) is None
    assert get_last_error(session) == ""


def test_last_error_roundtrip(session: dict) -> None:
    """Errors are stored until cleared."""
    set_last_error("boom", session)
    assert get_last_error(session) == "boom"
    clear_last_error(session)
    assert get_last_error(session) == ""


def test_data_stats(small_result) -> None:
    """Stats count points, regions and countries."""
    stats = data_stats(small_result)
    assert stats["totalDataPoints"] == 22
    assert stats["regions"] == 2
    assert stats["countries"] == 2
    assert stats["dataSource"] == small_result.source
    assert data_stats(None) is None


def test_resolve_source_priority(session: dict, no_secrets, tmp_path: Path) -> None:
    """Upload beats DATA_PATH, which beats URL, which beats the sample."""
    upload = {"name": "u.csv", "data": b""}
    session[KEY_UPLOAD] = upload
    session[KEY_DATA_URL] = "https://example.com/x.csv"
    env = {"DATA_PATH": str(tmp_path / "local.csv")}

    assert data.resolve_source(session, env) == (data.MODE_UPLOAD, upload)
    session[KEY_UPLOAD] = None
    assert data.resolve_source(session, env) == (data.MODE_LOCAL, env["DATA_PATH"])
    assert data.resolve_source(session, {}) == (data.MODE_URL, "https://example.com/x.csv")
    session[KEY_DATA_URL] = ""
    assert data.resolve_source(session, {}) == (data.MODE_SAMPLE, str(data.BUNDLED_DATA_PATH))


def test_load_data_flow_uses_bundled_sample(session: dict, no_secrets) -> None:
    """With nothing configured the bundled dataset is loaded and cached."""
    result, mode = data.load_data_flow(session)
    assert mode == data.MODE_SAMPLE
    assert result.model.overview.market_size_base == pytest.approx(1358.25, abs=0.01)
    assert get_cached_result(session) is result


def test_load_data_flow_upload(session: dict, no_secrets, small_csv: str) -> None:
    """Uploaded bytes take priority."""
    session[KEY_UPLOAD] = {"name": "upload.csv", "data": small_csv.encode("utf-8")}
    result, mode = data.load_data_flow(session)
    assert mode == data.MODE_UPLOAD
    assert result.source == "upload.csv"
    assert len(result.model.regions) == 2


def test_failed_load_keeps_previous_result(session: dict, no_secrets, tmp_path: Path,
                                           monkeypatch: pytest.MonkeyPatch) -> None:
    """A broken source records the error and serves the prior result."""
    previous, _ = data.load_data_flow(session)
    monkeypatch.setenv("DATA_PATH", str(tmp_path / "missing.csv"))

    result, mode = data.load_data_flow(session)
    assert mode == "LOCAL_ERROR"
    assert result is previous
    assert "not found" in get_last_error(session)


def test_remember_upload_only_reports_changes(session: dict) -> None:
    """Re-submitting the same file does not trigger another rerun."""
    assert remember_upload("u.csv", b"a", session) is True
    assert remember_upload("u.csv", b"a", session) is False
    assert remember_upload("u.csv", b"b", session) is True
    assert session[KEY_UPLOAD] == {"name": "u.csv", "data": b"b"}


def test_clear_upload_retires_the_uploader(session: dict, no_secrets, small_csv: str) -> None:
    """After Clear the old widget's file no longer feeds the load flow."""
    old_key = uploader_key(session)
    remember_upload("upload.csv", small_csv.encode("utf-8"), session)
    assert data.load_data_flow(session)[1] == data.MODE_UPLOAD

    clear_upload(session)
    clear_data(session)

    # The next run renders a fresh uploader with no file, so nothing is re-stored
    assert uploader_key(session) != old_key
    assert session[KEY_UPLOAD] is None
    _, mode = data.load_data_flow(session)
    assert mode == data.MODE_SAMPLE
