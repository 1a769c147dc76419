from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from attendance_sheet.services.fetch import (
    BASE_URL,
    PLACEHOLDER_SHEET_ID,
    FetchError,
    build_candidate_urls,
    fetch_sheet_text,
)

"""Unit tests for candidate export URLs and sheet retrieval."""


def _response(status_code: int, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    return resp


def test_candidate_urls_with_gid_try_gid_specific_endpoints_first():
    urls = build_candidate_urls("abc123", "42")
    assert urls == [
        f"{BASE_URL}/abc123/gviz/tq?tqx=out:csv&gid=42",
        f"{BASE_URL}/abc123/export?format=csv&gid=42",
        f"{BASE_URL}/abc123/export?format=csv",
        f"{BASE_URL}/abc123/gviz/tq?tqx=out:csv",
    ]


def test_candidate_urls_without_gid():
    urls = build_candidate_urls("abc123")
    assert urls == [
        f"{BASE_URL}/abc123/export?format=csv",
        f"{BASE_URL}/abc123/gviz/tq?tqx=out:csv",
    ]


def test_published_token_has_single_endpoint():
    assert build_candidate_urls("2PACX-xyz", "7") == [f"{BASE_URL}/e/2PACX-xyz/pub?output=csv&gid=7"]
    assert build_candidate_urls("2PACX-xyz") == [f"{BASE_URL}/e/2PACX-xyz/pub?output=csv"]


@pytest.mark.parametrize("sheet_id", [None, "", PLACEHOLDER_SHEET_ID])
def test_unconfigured_sheet_has_no_candidates(sheet_id):
    assert build_candidate_urls(sheet_id, "0") == []


def test_first_non_blank_200_wins():
    session = MagicMock()
    session.get.side_effect = [
        _response(403),
        _response(200, "   \n"),
        _response(200, "E.ID,Name\nE1,Ann\n"),
        _response(200, "never reached"),
    ]
    result = fetch_sheet_text(["u1", "u2", "u3", "u4"], session=session, timeout=3)

    assert result.url == "u3"
    assert result.text == "E.ID,Name\nE1,Ann\n"
    assert [a.status for a in result.attempts] == [403, "no-data", 200]
    assert session.get.call_count == 3
    session.get.assert_any_call("u1", timeout=3)


def test_request_exception_is_recorded_and_next_url_tried():
    session = MagicMock()
    session.get.side_effect = [requests.ConnectionError("boom"), _response(200, "x,y\n")]
    result = fetch_sheet_text(["u1", "u2"], session=session)
    assert result.url == "u2"
    assert result.attempts[0].status == "ERR"


def test_all_candidates_failing_raises_with_last_status():
    session = MagicMock()
    session.get.side_effect = [_response(404), _response(401)]
    with pytest.raises(FetchError) as exc_info:
        fetch_sheet_text(["u1", "u2"], session=session)
    assert "(HTTP 401)" in str(exc_info.value)
    assert [a.url for a in exc_info.value.attempts] == ["u1", "u2"]


def test_empty_candidate_list_raises():
    with pytest.raises(FetchError, match="no candidate URLs"):
        fetch_sheet_text([])


def test_owned_session_is_closed():
    http = MagicMock()
    http.get.return_value = _response(200, "a,b\n")
    with patch("attendance_sheet.services.fetch.requests.Session") as mock_session_cls:
        mock_session_cls.return_value.__enter__.return_value = http
        result = fetch_sheet_text(["u1"])
    assert result.url == "u1"
    mock_session_cls.return_value.__exit__.assert_called_once()


def test_caller_session_is_left_open():
    session = MagicMock()
    session.get.return_value = _response(200, "a,b\n")
    fetch_sheet_text(["u1"], session=session)
    session.close.assert_not_called()
    session.__exit__.assert_not_called()
