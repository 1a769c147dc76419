from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

"""Spreadsheet export retrieval.

The sheet is published as CSV under several endpoints; which one works
depends on sharing/publishing settings, so a list of candidate URLs is tried
in order and the first 200 response with a non-blank body wins.

This is the only place in the package that talks to the network. The
ingestion core only ever sees the returned text.
"""

__all__ = [
    "PLACEHOLDER_SHEET_ID",
    "FetchAttempt",
    "FetchError",
    "FetchResult",
    "build_candidate_urls",
    "fetch_sheet_text",
]

logger = logging.getLogger(__name__)

BASE_URL = "https://docs.google.com/spreadsheets/d"
PLACEHOLDER_SHEET_ID = "REPLACE_WITH_SHEET_ID"
PUBLISHED_TOKEN_PREFIX = "2PACX"
DEFAULT_TIMEOUT = 15.0


@dataclass(frozen=True)
class FetchAttempt:
    url: str
    status: int | str  # HTTP status, "no-data" or "ERR"


@dataclass(frozen=True)
class FetchResult:
    text: str
    url: str
    attempts: tuple[FetchAttempt, ...] = ()


class FetchError(Exception):
    """Every candidate URL failed; `attempts` lists what was tried."""

    def __init__(self, message: str, attempts: list[FetchAttempt] | None = None) -> None:
        super().__init__(message)
        self.attempts = attempts or []


def build_candidate_urls(sheet_id: str | None, gid: str | None = None) -> list[str]:
    """Export URLs to try, most specific first.

    A ``2PACX`` token is a published sheet and has a single endpoint. A plain
    spreadsheet id gets the gid-specific gviz/export endpoints (when a gid is
    given) followed by the first-tab variants.
    """
    if not sheet_id or sheet_id == PLACEHOLDER_SHEET_ID:
        return []
    gid_part = f"&gid={gid}" if gid else ""
    if sheet_id.startswith(PUBLISHED_TOKEN_PREFIX):
        return [f"{BASE_URL}/e/{sheet_id}/pub?output=csv{gid_part}"]
    urls: list[str] = []
    if gid:
        urls.append(f"{BASE_URL}/{sheet_id}/gviz/tq?tqx=out:csv&gid={gid}")
        urls.append(f"{BASE_URL}/{sheet_id}/export?format=csv&gid={gid}")
    urls.append(f"{BASE_URL}/{sheet_id}/export?format=csv")
    urls.append(f"{BASE_URL}/{sheet_id}/gviz/tq?tqx=out:csv")
    return urls


def fetch_sheet_text(
    urls: list[str],
    session: requests.Session | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> FetchResult:
    """Return the first non-blank 200 response body among `urls`.

    Raises:
        FetchError: no candidates, or every candidate failed
    """
    if not urls:
        raise FetchError("no candidate URLs (is the sheet id configured?)")

    if session is not None:
        return _try_candidates(session, urls, timeout)
    with requests.Session() as http:
        return _try_candidates(http, urls, timeout)


def _try_candidates(http: requests.Session, urls: list[str], timeout: float) -> FetchResult:
    attempts: list[FetchAttempt] = []
    last_status: int | None = None
    for url in urls:
        try:
            response = http.get(url, timeout=timeout)
        except requests.RequestException as e:
            logger.debug(f"fetch {url} failed: {e}")
            attempts.append(FetchAttempt(url, "ERR"))
            continue
        last_status = response.status_code
        if response.status_code == 200 and response.text and response.text.strip():
            attempts.append(FetchAttempt(url, response.status_code))
            return FetchResult(text=response.text, url=url, attempts=tuple(attempts))
        attempts.append(FetchAttempt(url, response.status_code if response.status_code != 200 else "no-data"))

    status_part = f" (HTTP {last_status})" if last_status is not None and last_status != 200 else ""
    raise FetchError(
        f"Failed to load sheet{status_part}. Check: 1) the Spreadsheet ID (not the full URL); "
        "2) the sheet is shared as 'Anyone with link (Viewer)'; "
        "3) a 2PACX token requires File > Share > Publish to web.",
        attempts,
    )
