# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Aggregated report over every scanner run in one invocation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..errors import DuplicateScanResultError
from ..version import __version__
from .destination import Destination, ReportFormat, parse_destinations
from .scan_result import ScanResult

if TYPE_CHECKING:
    from ..render.base import RenderedReport, ReportFilters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanEntry:
    result: ScanResult
    required: bool


class Report:
    """
    Collection of ScanResults plus top-level errors and project metadata.

    The report passes iff every required scan passed; optional scans never affect
    the verdict, and a report without scans passes.
    """

    def __init__(
        self,
        *,
        project_name: str | None = None,
        custom_info: Any = None,
        config: Any = None,
        report_uris: list[Mapping[str, Any] | Destination] | None = None,
        version: str = __version__,
    ):
        self.project_name = project_name
        self.custom_info = custom_info
        self.config = config
        self.version = version
        self.report_uris: list[Destination] = parse_destinations(report_uris)
        self.errors: list[dict[str, Any]] = []
        self._scans: dict[str, ScanEntry] = {}
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Report(project_name={self.project_name!r}, scans={list(self._scans)!r})"

    def __len__(self) -> int:
        return len(self._scans)

    def __iter__(self) -> Iterator[ScanEntry]:
        return iter(list(self._scans.values()))

    def add_scan_result(self, result: ScanResult, required: bool = False, *, replace: bool = False) -> None:
        """
        Take ownership of a finished ScanResult.

        A second result under an existing scanner name raises DuplicateScanResultError
        unless ``replace=True`` (a scanner that was deliberately re-run).
        """
        with self._lock:
            if result.scanner_name in self._scans and not replace:
                raise DuplicateScanResultError(result.scanner_name)
            result.freeze()
            self._scans[result.scanner_name] = ScanEntry(result=result, required=bool(required))
        logger.debug("Added scan result %s (required=%s)", result.scanner_name, required)

    def add_error(self, fields: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self.errors.append({**dict(fields or {}), **kwargs})

    def scan_result(self, scanner_name: str) -> ScanResult:
        return self._scans[scanner_name].result

    def is_required(self, scanner_name: str) -> bool:
        return self._scans[scanner_name].required

    def passed(self) -> bool:
        return all(entry.result.passed() for entry in self._scans.values() if entry.required)

    def to_dict(self) -> dict[str, Any]:
        """Unfiltered structured form; key order is part of the output contract."""
        data: dict[str, Any] = {"version": self.version}
        if self.project_name is not None:
            data["project_name"] = self.project_name
        data["passed"] = self.passed()
        data["scans"] = {name: entry.result.to_dict() for name, entry in self._scans.items()}
        data["errors"] = [dict(error) for error in self.errors]
        if self.custom_info is not None:
            data["custom_info"] = self.custom_info
        if self.config is not None:
            data["config"] = self.config
        return data

    def render(
        self,
        fmt: ReportFormat | str,
        options: Mapping[str, Any] | None = None,
        *,
        filters: ReportFilters | None = None,
    ) -> RenderedReport:
        from ..render import render_report

        return render_report(self, ReportFormat.parse(fmt), options, filters=filters)

    def to_json(self, *, filters: ReportFilters | None = None) -> str:
        return self.render(ReportFormat.JSON, filters=filters).text

    def to_yaml(self, *, filters: ReportFilters | None = None) -> str:
        return self.render(ReportFormat.YAML, filters=filters).text

    def to_txt(self, verbose: bool = False, *, filters: ReportFilters | None = None) -> str:
        return self.render(ReportFormat.TXT, {"verbose": verbose}, filters=filters).text

    def to_sarif(self, options: Mapping[str, Any] | None = None, *, filters: ReportFilters | None = None) -> str:
        return self.render(ReportFormat.SARIF, options, filters=filters).text


__all__ = ["Report", "ScanEntry"]
