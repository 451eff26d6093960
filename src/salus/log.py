# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for report rendering and export."""

from __future__ import annotations

import logging
import os
from typing import TextIO

LOG_LEVEL_ENV = "SALUS_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# httpx logs every request at INFO; report uploads only need failures.
_NOISY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(level: str | None = None) -> int:
    """Translate a level name (or $SALUS_LOG_LEVEL) into a logging constant."""
    name = (level or os.getenv(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None, *, stream: TextIO | None = None) -> None:
    """Configure standard logging for library or wrapper-script use."""
    effective_level = resolve_log_level(level)
    logging.basicConfig(level=effective_level, format=LOG_FORMAT, stream=stream)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective_level, logging.WARNING))


__all__ = ["LOG_LEVEL_ENV", "resolve_log_level", "setup_logging"]
