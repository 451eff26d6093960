# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Data model exports."""

from .destination import Destination, PostSpec, ReportFormat, parse_destinations
from .issue import CanonicalIssue
from .report import Report, ScanEntry
from .scan_result import ScanResult, Verdict

__all__ = [
    "CanonicalIssue",
    "Destination",
    "PostSpec",
    "Report",
    "ReportFormat",
    "ScanEntry",
    "ScanResult",
    "Verdict",
    "parse_destinations",
]
