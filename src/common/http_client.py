"""Shared HTTP helpers used by version sources.

Encapsulates request/timeout error handling so callers avoid
duplicating try/except blocks. Transport failures are retried here;
anything that survives the retries is raised as FetchError for the
command layer to report.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from errors import FetchError

logger = logging.getLogger(__name__)


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout and retries with DEBUG traces.

    Returns:
        Tuple of (status_code, headers_dict, body_text)

    Raises:
        FetchError: if every attempt timed out or failed to connect.
    """
    safe_target = safe_url(url)
    last_exception = None

    attempts = max(1, Constants.HTTP_RETRY_MAX)
    for attempt in range(attempts):
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
                    headers=headers,
                    **kwargs
                )

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
                return response.status_code, dict(response.headers), response.text

            except requests.Timeout:
                last_exception = f"timed out after {Constants.REQUEST_TIMEOUT} seconds"
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

    raise FetchError(
        f"GET {safe_target} failed after {attempts} attempts: {last_exception}",
        url=url,
    )


def get_text(url: str, *, context: str, headers: Optional[Dict[str, str]] = None) -> str:
    """GET url and return its body, raising FetchError unless the status is 200.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "pkgsite").
        headers: Optional request headers.
    """
    status_code, _, text = robust_get(url, headers=headers)
    if status_code != 200:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP status not ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="bad_status",
                    status_code=status_code,
                    target=safe_url(url),
                    context=context
                )
            )
        raise FetchError(
            f"{context} returned HTTP {status_code} for {safe_url(url)}",
            url=url,
            status_code=status_code,
        )
    return text
