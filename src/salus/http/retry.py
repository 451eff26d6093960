# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry helper for HttpClient implementations."""

from __future__ import annotations

import logging
import time

from ..config import load_http_settings
from ..errors import categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse, RetryConfig

logger = logging.getLogger(__name__)


def build_default_retry_config() -> RetryConfig:
    """Create a RetryConfig from environment-backed HttpSettings."""
    return RetryConfig.from_settings(load_http_settings())


def send_with_retries(
    client: HttpClient,
    request: HttpRequest,
    *,
    retry_config: RetryConfig | None = None,
) -> HttpResponse:
    """
    Execute a request, retrying only transport-level failures.

    A response that carries a status code is returned as-is, whatever the status:
    re-posting a report the server already answered could duplicate it.
    """
    cfg = retry_config or build_default_retry_config()
    max_attempts = max(1, cfg.max_attempts)

    attempt = 0
    delay = cfg.initial_delay
    last_response: HttpResponse | None = None

    while attempt < max_attempts:
        try:
            response = client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc),
                error_type=exc.__class__.__name__,
                meta={"error_category": categorize_exception(exc).value},
            )
        last_response = response

        if response.ok or response.status_code is not None:
            if attempt:
                response.meta["retry_count"] = attempt
            return response

        attempt += 1
        if attempt >= max_attempts:
            break
        logger.info("Retrying %s %s after transport error: %s", request.method, request.url, response.error_message)
        time.sleep(delay)
        delay *= cfg.backoff_factor

    if last_response is not None:
        last_response.meta.setdefault("retry_count", attempt)
        last_response.meta.setdefault("retry_exhausted", True)
        return last_response

    return HttpResponse(ok=False, url=request.url, meta={"retry_count": attempt, "retry_exhausted": True})
