"""Shared HTTP helpers used by the registry drivers.

Encapsulates request/timeout error handling, retries and an in-memory
response cache so drivers avoid duplicating try/except blocks. Cached
helpers are used for index pages and podspecs; archive downloads go through
``get_bytes`` which is never cached and raises on non-success responses.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"User-Agent": Constants.USER_AGENT}


class FetchError(Exception):
    """Raised when a cached fetch cannot produce a usable document."""

    def __init__(self, url: str, status_code: int, message: str = ""):
        self.url = url
        self.status_code = status_code
        self.message = message
        super().__init__(f"GET {safe_url(url)} failed (status {status_code}): {message}")


# Simple in-memory cache for HTTP responses
_http_cache: Dict[str, Tuple[Any, float]] = {}


def _get_cache_key(method: str, url: str, headers: Optional[Dict[str, str]] = None) -> str:
    """Generate cache key from request parameters."""
    headers_str = str(sorted(headers.items())) if headers else ""
    return f"{method}:{url}:{headers_str}"


def _is_cache_valid(cache_entry: Tuple[Any, float]) -> bool:
    """Check if cache entry is still valid."""
    _, cached_time = cache_entry
    return time.time() - cached_time < Constants.HTTP_CACHE_TTL_SEC


def clear_cache() -> None:
    """Drop every cached response."""
    _http_cache.clear()


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout, retries, and caching with DEBUG traces.

    Returns:
        Tuple of (status_code, headers_dict, text). A status of 0 means every
        attempt failed at the transport level; the text then carries the reason.
    """
    cache_key = _get_cache_key('GET', url, headers)
    safe_target = safe_url(url)

    # Check cache first
    if cache_key in _http_cache and _is_cache_valid(_http_cache[cache_key]):
        cached_data, _ = _http_cache[cache_key]
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP cache hit",
                extra=extra_context(
                    event="cache_hit",
                    component="http_client",
                    action="GET",
                    target=safe_target
                )
            )
        return cached_data

    request_headers = dict(DEFAULT_HEADERS)
    if headers:
        request_headers.update(headers)

    last_exception = None

    for attempt in range(Constants.HTTP_RETRY_MAX):
        if attempt:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 1)))
        with Timer() as t:
            try:
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request",
                        extra=extra_context(
                            event="http_request",
                            component="http_client",
                            action="GET",
                            target=safe_target,
                            attempt=attempt + 1
                        )
                    )

                response = requests.get(
                    url,
                    timeout=Constants.REQUEST_TIMEOUT,
                    headers=request_headers,
                    **kwargs
                )

                if response.status_code >= 500:
                    # Server errors are retried and never cached
                    last_exception = f"HTTP {response.status_code}"
                    if attempt + 1 < Constants.HTTP_RETRY_MAX:
                        continue
                    return response.status_code, dict(response.headers), response.text

                cache_data = (response.status_code, dict(response.headers), response.text)
                _http_cache[cache_key] = (cache_data, time.time())

                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP response ok",
                        extra=extra_context(
                            event="http_response",
                            component="http_client",
                            action="GET",
                            outcome="success",
                            status_code=response.status_code,
                            duration_ms=t.duration_ms(),
                            target=safe_target
                        )
                    )
                return cache_data

            except requests.Timeout:
                last_exception = "timeout"
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP timeout",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="timeout",
                            attempt=attempt + 1,
                            target=safe_target
                        )
                    )
                continue
            except requests.RequestException as exc:
                last_exception = str(exc)
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request exception",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="request_exception",
                            attempt=attempt + 1,
                            target=safe_target
                        )
                    )
                continue

    # All retries failed
    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}"


def get_text(url: str, *, context: str, headers: Optional[Dict[str, str]] = None) -> str:
    """Fetch ``url`` through the cache and return the body text.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "cocoapods").
        headers: Optional request headers.

    Raises:
        FetchError: On transport failure or any non-200 status.
    """
    status_code, _, text = robust_get(url, headers=headers)
    if status_code != 200:
        logger.debug(
            "%s fetch returned status %s",
            context,
            status_code,
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="get_text",
                outcome="failure",
                status_code=status_code,
                target=safe_url(url)
            )
        )
        raise FetchError(url, status_code, text if status_code == 0 else f"{context} responded {status_code}")
    return text


def get_json(url: str, *, context: str, headers: Optional[Dict[str, str]] = None) -> Any:
    """Fetch ``url`` through the cache and parse the body as JSON.

    Raises:
        FetchError: On transport failure, non-200 status, or invalid JSON.
    """
    merged = {"Accept": "application/json"}
    if headers:
        merged.update(headers)
    text = get_text(url, context=context, headers=merged)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="get_json",
                    outcome="json_decode_error",
                    target=safe_url(url)
                )
            )
        raise FetchError(url, 200, f"invalid JSON from {context}: {exc}") from exc
    return parsed


def get_bytes(url: str, *, context: str, **kwargs: Any) -> bytes:
    """Download ``url`` without caching and return the raw body.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "cocoapods").
        **kwargs: Passed through to requests.get.

    Raises:
        requests.HTTPError: For any non-success status.
        requests.RequestException: For transport failures.
    """
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context
                )
            )
        try:
            res = requests.get(
                url,
                timeout=Constants.REQUEST_TIMEOUT,
                headers=dict(DEFAULT_HEADERS),
                **kwargs
            )
            res.raise_for_status()
        except requests.Timeout:
            logger.error(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
            )
            raise
        except requests.RequestException as exc:  # includes HTTPError and ConnectionError
            logger.error("%s download error: %s", context, exc)
            raise
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context
                )
            )
        return res.content
