# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by report delivery."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..config import HttpSettings

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "POST"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    ``ok`` reports whether the transport completed; a completed request with a 4xx/5xx
    status is still ``ok`` here and is judged by ``is_success``.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.ok and self.status_code is not None and 200 <= self.status_code < 300


@dataclass
class RetryConfig:
    """Retry policy for transport failures derived from HttpSettings."""

    max_attempts: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0

    @classmethod
    def from_settings(cls, settings: HttpSettings) -> RetryConfig:
        """Build a retry config from the shared HttpSettings."""
        return cls(
            max_attempts=max(1, settings.max_retries),
            backoff_factor=settings.backoff_factor,
            initial_delay=settings.initial_delay,
        )
