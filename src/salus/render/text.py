# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Human-readable plain-text renderer."""

from __future__ import annotations

import textwrap
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from .base import ReportFilters, pretty_json

if TYPE_CHECKING:
    from ..models.report import Report

TABLE_HEADINGS = ("Scanner", "Running Time", "Required", "Passed")


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def _config_sources(config: Any) -> list[str]:
    if not isinstance(config, Mapping):
        return []
    sources = config.get("sources")
    if not isinstance(sources, Mapping):
        return []
    valid = sources.get("valid") or []
    return [str(path) for path in valid]


def render_table(rows: Sequence[Sequence[str]], headings: Sequence[str] = TABLE_HEADINGS) -> str:
    """
    Box-drawn table. Each column is as wide as its longest cell (heading included),
    so long scanner names widen the table instead of being truncated.
    """
    widths = [len(heading) for heading in headings]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    def border(left: str, middle: str, right: str) -> str:
        return left + middle.join("─" * (width + 2) for width in widths) + right

    def line(cells: Sequence[str]) -> str:
        return "│" + "│".join(f" {cell.ljust(width)} " for cell, width in zip(cells, widths)) + "│"

    parts = [
        border("┌", "┬", "┐"),
        line(headings),
        border("├", "┼", "┤"),
        "\n".join(line(row) for row in rows),
        border("└", "┴", "┘"),
    ]
    return "\n".join(parts)


def _scan_rows(report: Report) -> list[list[str]]:
    rows = []
    for entry in report:
        result = entry.result
        running_time = f"{result.running_time}s" if result.running_time is not None else ""
        rows.append([result.scanner_name, running_time, _yes_no(entry.required), _yes_no(result.passed())])
    return rows


def _verbose_sections(report: Report) -> list[str]:
    sections = []
    for entry in report:
        result = entry.result
        body = pretty_json({"info": result.info, "warn": result.warn})
        sections.append(f"==== {result.scanner_name}\n\n{textwrap.indent(body, '  ')}\n")
    return sections


def build_text(report: Report, *, verbose: bool = False) -> str:
    """
    Plain-text report: header, configuration sources, errors, overall status and
    the scanner table.

    With ``verbose`` each scanner's info and warnings follow as a separate
    ``==== <scanner>`` section after the whole table, in table order, rather than
    beneath the scanner's row. The table itself stays identical in both modes.
    """
    header = f"==== Salus Scan v{report.version}"
    if report.project_name is not None:
        header += f" for {report.project_name}"

    sections = [header]
    config_lines = "".join(f"  {path}\n" for path in _config_sources(report.config))
    sections.append(f"==== Salus Configuration Files Used:\n\n{config_lines}")
    if report.errors:
        sections.append(f"==== Salus Errors\n\n{textwrap.indent(pretty_json(report.errors), '  ')}\n")
    sections.append(f"Overall scan status: {'PASSED' if report.passed() else 'FAILED'}")
    sections.append(render_table(_scan_rows(report)))
    if verbose:
        sections.extend(_verbose_sections(report))
    return "\n\n".join(sections)


def render_text(report: Report, filters: ReportFilters, *, verbose: bool = False) -> tuple[str, str]:
    text = filters.text(build_text(report, verbose=verbose))
    return text, text
