# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Salus report aggregation and export.

Scanner adapters fill in one ScanResult each; a Report collects them with
top-level errors, derives the overall verdict and renders as JSON, YAML, plain
text or SARIF. ReportExporter delivers rendered reports to HTTP endpoints or
local files. HTTP behavior is abstracted behind an injectable client interface.
"""

from .config import ExportSettings, HttpSettings, load_export_settings, load_http_settings
from .errors import (
    ConfigurationError,
    DeliveryError,
    DuplicateScanResultError,
    ErrorCategory,
    RenderError,
    SalusError,
    ScanResultContractError,
)
from .export import ReportExporter, export_report
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    RetryConfig,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import CanonicalIssue, Destination, PostSpec, Report, ReportFormat, ScanResult, Verdict
from .render import RenderedReport, ReportFilters, render_report
from .render.sarif import BaseSarif, SemgrepSarif, register_normalizer
from .version import __version__

__all__ = [
    "BaseSarif",
    "CanonicalIssue",
    "ConfigurationError",
    "DeliveryError",
    "Destination",
    "DuplicateScanResultError",
    "ErrorCategory",
    "ExportSettings",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "PostSpec",
    "RenderError",
    "RenderedReport",
    "Report",
    "ReportExporter",
    "ReportFilters",
    "ReportFormat",
    "RetryConfig",
    "SalusError",
    "ScanResult",
    "ScanResultContractError",
    "SemgrepSarif",
    "StubHttpClient",
    "Verdict",
    "create_default_http_client",
    "export_report",
    "load_export_settings",
    "load_http_settings",
    "register_normalizer",
    "render_report",
    "setup_logging",
    "__version__",
]
