"""Shared HTTP helpers used by metadata providers.

Requests go through ``requests`` with a fixed timeout, a small retry loop
and a TTL cache. Failures surface as MetadataRetrievalError; nothing here
exits the process.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from versioning.errors import MetadataRetrievalError

logger = logging.getLogger(__name__)

# In-memory response cache: key -> ((status, headers, text), stored_at).
_http_cache: Dict[str, Tuple[Tuple[int, Dict[str, str], str], float]] = {}
_http_cache_lock = threading.Lock()


def _get_cache_key(method: str, url: str, headers: Optional[Dict[str, str]] = None) -> str:
    """Generate cache key from request parameters."""
    headers_str = str(sorted(headers.items())) if headers else ""
    return f"{method}:{url}:{headers_str}"


def _is_cache_valid(stored_at: float) -> bool:
    return time.time() - stored_at < Constants.HTTP_CACHE_TTL_SEC


def clear_cache() -> None:
    """Drop every cached response."""
    with _http_cache_lock:
        _http_cache.clear()


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """GET with timeout, retries on network errors and 5xx, and caching.

    Returns:
        (status_code, headers, text). After the last failed attempt the
        status is 0 and the text describes the failure.
    """
    cache_key = _get_cache_key("GET", url, headers)
    safe_target = safe_url(url)

    with _http_cache_lock:
        entry = _http_cache.get(cache_key)
    if entry is not None and _is_cache_valid(entry[1]):
        if is_debug_enabled(logger):
            logger.debug("HTTP cache hit", extra=extra_context(
                event="cache_hit", component="http_client", action="GET", target=safe_target
            ))
        return entry[0]

    last_failure = None
    for attempt in range(Constants.HTTP_RETRY_MAX):
        if attempt:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 1)))
        with Timer() as t:
            try:
                response = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, headers=headers, **kwargs)
            except requests.Timeout:
                last_failure = f"timed out after {Constants.REQUEST_TIMEOUT} seconds"
            except requests.RequestException as exc:  # includes ConnectionError
                last_failure = f"connection error: {exc}"
            else:
                if is_debug_enabled(logger):
                    logger.debug("HTTP response", extra=extra_context(
                        event="http_response", component="http_client", action="GET",
                        status_code=response.status_code, duration_ms=t.duration_ms(),
                        target=safe_target, attempt=attempt + 1
                    ))
                result = (response.status_code, dict(response.headers), response.text)
                if response.status_code < 500:
                    with _http_cache_lock:
                        _http_cache[cache_key] = (result, time.time())
                    return result
                last_failure = f"server error (HTTP {response.status_code})"
                continue

        if is_debug_enabled(logger):
            logger.debug("HTTP request failed", extra=extra_context(
                event="http_exception", component="http_client", action="GET",
                outcome=last_failure, attempt=attempt + 1, target=safe_target
            ))

    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_failure}"


def fetch_text(url: str, *, coordinate: str, headers: Optional[Dict[str, str]] = None) -> str:
    """Return the body of a successful GET.

    Raises:
        MetadataRetrievalError: on network failure or a non-200 status
    """
    status, _, text = robust_get(url, headers=headers)
    if status == 0:
        raise MetadataRetrievalError(coordinate, text)
    if status == 404:
        raise MetadataRetrievalError(coordinate, f"not found at {safe_url(url)} (HTTP 404)")
    if status != 200:
        raise MetadataRetrievalError(coordinate, f"unexpected HTTP {status} from {safe_url(url)}")
    return text
