# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""SARIF rendering: normalizers, registry and document builders."""

from .base import SARIF_SCHEMA, SARIF_VERSION, BaseSarif, MalformedFinding
from .registry import get_normalizer, register_normalizer, registered_scanners, unregister_normalizer
from .report import build_sarif, build_sarif_diff, sarif_diff
from .semgrep import SemgrepSarif

__all__ = [
    "BaseSarif",
    "MalformedFinding",
    "SARIF_SCHEMA",
    "SARIF_VERSION",
    "SemgrepSarif",
    "build_sarif",
    "build_sarif_diff",
    "get_normalizer",
    "register_normalizer",
    "registered_scanners",
    "sarif_diff",
    "unregister_normalizer",
]
