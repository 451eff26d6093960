# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON and YAML renderers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import ReportFilters, dump_yaml, pretty_json

if TYPE_CHECKING:
    from ..models.report import Report


def build_report_dict(report: Report, filters: ReportFilters) -> Any:
    return filters.structured(report.to_dict())


def render_json(report: Report, filters: ReportFilters) -> tuple[Any, str]:
    value = build_report_dict(report, filters)
    return value, pretty_json(value)


def render_yaml(report: Report, filters: ReportFilters) -> tuple[Any, str]:
    value = build_report_dict(report, filters)
    return value, dump_yaml(value)
