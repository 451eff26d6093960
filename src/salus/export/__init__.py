# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Report export exports."""

from .exporter import ReportExporter, export_report
from .request import build_body, build_http_request, report_headers, x_scanner_type

__all__ = [
    "ReportExporter",
    "build_body",
    "build_http_request",
    "export_report",
    "report_headers",
    "x_scanner_type",
]
