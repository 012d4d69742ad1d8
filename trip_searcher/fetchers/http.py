from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse

import requests
from urllib3.exceptions import ReadTimeoutError

from ..models import FetchError, FetchErrorKind, FetchOk, FetchResult
from ..utils.logging import get_logger

logger = get_logger("ts.fetchers.http")

DEFAULT_CONNECT_TIMEOUT_MS = 5000
DEFAULT_READ_TIMEOUT_MS = 5000


def _validated_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid URL for HTTP fetch: {url}")
    return url


def _is_timeout(exc: requests.RequestException) -> bool:
    # ConnectTimeout is also a ConnectionError; a read timeout while the body
    # is downloaded surfaces as a ConnectionError wrapping urllib3's error.
    if isinstance(exc, requests.Timeout):
        return True
    return bool(exc.args) and isinstance(exc.args[0], ReadTimeoutError)


def fetch_content(
    endpoint: str,
    *,
    connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS,
    read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS,
    session: Optional[requests.Session] = None,
) -> FetchResult:
    """Issue a single GET against ``endpoint`` and return the body or a failure.

    Only HTTP 200 counts as success. Timeouts, other statuses and transport
    errors come back as ``FetchError`` values instead of exceptions. There is
    exactly one attempt; the response and any session opened here are closed
    before returning.
    """
    if connect_timeout_ms <= 0 or read_timeout_ms <= 0:
        raise ValueError("connect_timeout_ms and read_timeout_ms must be > 0")
    url = _validated_url(endpoint)
    timeout = (connect_timeout_ms / 1000.0, read_timeout_ms / 1000.0)

    owns_session = session is None
    sess = session or requests.Session()
    logger.debug("Fetching content from %s (timeout=%s)", url, timeout)
    try:
        with sess.get(url, timeout=timeout) as resp:
            if resp.status_code != 200:
                logger.warning("Content fetch failed (%s): %s", resp.status_code, url)
                return FetchError(FetchErrorKind.HTTP_STATUS, status_code=resp.status_code)
            resp.encoding = "utf-8"
            text = resp.text
    except requests.RequestException as exc:
        if _is_timeout(exc):
            logger.warning("Content fetch timed out for %s: %s", url, exc)
            return FetchError(FetchErrorKind.TIMEOUT, detail=str(exc))
        logger.warning("Content request error for %s: %s", url, exc)
        return FetchError(FetchErrorKind.NETWORK_FAILURE, detail=str(exc))
    finally:
        if owns_session:
            sess.close()

    logger.info("Fetched %d characters from %s", len(text), url)
    return FetchOk(text)
