# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Format dispatch for report rendering."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..errors import RenderError
from ..models.destination import ReportFormat
from .base import DEFAULT_FILTERS, RenderedReport, ReportFilters, pretty_json, serialize
from .sarif import build_sarif, build_sarif_diff
from .structured import render_json, render_yaml
from .text import render_text

if TYPE_CHECKING:
    from ..models.report import Report


def render_report(
    report: Report,
    fmt: ReportFormat,
    options: Mapping[str, Any] | None = None,
    *,
    filters: ReportFilters | None = None,
) -> RenderedReport:
    """Render ``report`` as ``fmt`` and run the matching filter hook over the result."""
    active = filters or DEFAULT_FILTERS
    opts = dict(options or {})

    if fmt is ReportFormat.JSON:
        value, text = render_json(report, active)
    elif fmt is ReportFormat.YAML:
        value, text = render_yaml(report, active)
    elif fmt is ReportFormat.TXT:
        value, text = render_text(report, active, verbose=bool(opts.get("verbose", False)))
    elif fmt is ReportFormat.SARIF:
        value = active.sarif(build_sarif(report, opts))
        text = pretty_json(value)
    elif fmt is ReportFormat.SARIF_DIFF:
        value = active.sarif(build_sarif_diff(report, opts))
        text = pretty_json(value)
    else:  # pragma: no cover - ReportFormat is closed
        raise RenderError(f"No renderer for format {fmt!r}")
    return RenderedReport(format=fmt, value=value, text=text)


__all__ = [
    "DEFAULT_FILTERS",
    "RenderedReport",
    "ReportFilters",
    "render_report",
    "serialize",
]
