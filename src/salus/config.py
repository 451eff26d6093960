# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for report export."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"Salus/{__version__} (report exporter)"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def parse_bool(value: object, default: bool = False) -> bool:
    """Interpret env/YAML style flags ("1", "true", "yes", "on"); non-strings use truthiness."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _bool_env(name: str, default: bool) -> bool:
    return parse_bool(os.getenv(name), default)


@dataclass
class HttpSettings:
    """Transport defaults used when posting reports."""

    timeout: float = 30.0
    max_retries: int = 2
    backoff_factor: float = 2.0
    initial_delay: float = 1.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = True
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("SALUS_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            max_retries=_int_env("SALUS_HTTP_RETRIES", cls.max_retries),
            backoff_factor=_float_env("SALUS_HTTP_BACKOFF", cls.backoff_factor),
            initial_delay=_float_env("SALUS_HTTP_INITIAL_DELAY", cls.initial_delay),
            user_agent=os.getenv("SALUS_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("SALUS_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("SALUS_HTTP_VERIFY_SSL", cls.verify_ssl),
        )


@dataclass
class ExportSettings:
    """Policy for delivering one report to several destinations."""

    # Stop at the first failing destination instead of attempting all of them.
    fail_fast: bool = False

    @classmethod
    def from_env(cls) -> "ExportSettings":
        return cls(fail_fast=_bool_env("SALUS_EXPORT_FAIL_FAST", cls.fail_fast))


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


def load_export_settings() -> ExportSettings:
    return ExportSettings.from_env()
