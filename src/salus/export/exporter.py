# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Delivery of rendered reports to HTTP endpoints and local files."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from contextlib import suppress
from pathlib import Path
from typing import Any

from ..config import ExportSettings, HttpSettings, load_export_settings, load_http_settings
from ..errors import DeliveryError, ErrorCategory, categorize_exception, category_from_name
from ..http.client import HttpClient, create_default_http_client
from ..http.models import RetryConfig
from ..http.retry import send_with_retries
from ..models.destination import Destination, parse_destinations
from ..models.report import Report
from ..render.base import RenderedReport, ReportFilters
from .request import build_http_request

logger = logging.getLogger(__name__)


class ReportExporter:
    """
    Renders a report per destination and delivers it.

    Destinations are attempted sequentially and independently. By default every
    destination is attempted and the first DeliveryError is raised afterwards with
    all failures attached as ``failures``; ``fail_fast`` stops at the first one.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        http_settings: HttpSettings | None = None,
        export_settings: ExportSettings | None = None,
        filters: ReportFilters | None = None,
        retry_config: RetryConfig | None = None,
    ):
        self.http_settings = http_settings or load_http_settings()
        self.export_settings = export_settings or load_export_settings()
        self.filters = filters
        self.retry_config = retry_config or RetryConfig.from_settings(self.http_settings)
        self._http_client = http_client

    @property
    def http_client(self) -> HttpClient:
        if self._http_client is None:
            self._http_client = create_default_http_client(self.http_settings)
        return self._http_client

    def render_for(self, report: Report, destination: Destination) -> RenderedReport:
        return report.render(destination.format, destination.render_options(), filters=self.filters)

    def deliver(self, rendered: RenderedReport, destination: Destination) -> None:
        if destination.is_http:
            self._deliver_http(rendered, destination)
        else:
            self._deliver_file(rendered, destination)

    def _deliver_http(self, rendered: RenderedReport, destination: Destination) -> None:
        request = build_http_request(rendered, destination)
        logger.info("Posting %s report to %s", rendered.format.value, destination.uri)
        response = send_with_retries(self.http_client, request, retry_config=self.retry_config)

        if response.status_code is None:
            raise DeliveryError(
                f"Salus report to {destination.uri} could not be sent: {response.error_message or 'unknown transport error'}",
                uri=destination.uri,
                category=category_from_name(response.meta.get("error_category")),
            )
        if not response.is_success:
            raise DeliveryError(
                f"Salus report to {destination.uri} had response status {response.status_code}.",
                uri=destination.uri,
                status_code=response.status_code,
                category=ErrorCategory.HTTP_STATUS,
            )

    def _deliver_file(self, rendered: RenderedReport, destination: Destination) -> None:
        path = destination.path
        logger.info("Writing %s report to %s", rendered.format.value, path)
        try:
            Path(path).write_bytes(rendered.content)
        except OSError as exc:
            raise DeliveryError(
                f"Cannot write file {path} - {type(exc).__name__}: {exc}",
                uri=path,
                category=categorize_exception(exc),
            ) from exc

    def export_report(
        self,
        report: Report,
        destinations: Sequence[Mapping[str, Any] | Destination] | None = None,
    ) -> None:
        """
        Deliver ``report`` to ``destinations`` (default: ``report.report_uris``).

        Every payload is rendered before the first delivery, so a render problem is
        raised before anything leaves the process.
        """
        targets = parse_destinations(list(destinations)) if destinations is not None else list(report.report_uris)
        rendered = [(destination, self.render_for(report, destination)) for destination in targets]

        failures: list[DeliveryError] = []
        for destination, payload in rendered:
            try:
                self.deliver(payload, destination)
            except DeliveryError as exc:
                logger.error("Report export failed: %s", exc)
                if self.export_settings.fail_fast:
                    raise
                failures.append(exc)

        if failures:
            first = failures[0]
            first.failures = failures
            raise first

    def close(self) -> None:
        with suppress(Exception):
            if self._http_client is not None and hasattr(self._http_client, "close"):
                self._http_client.close()

    def __enter__(self) -> ReportExporter:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


def export_report(
    report: Report,
    destinations: Sequence[Mapping[str, Any] | Destination] | None = None,
    *,
    http_client: HttpClient | None = None,
    filters: ReportFilters | None = None,
) -> None:
    """One-shot helper: export with a short-lived exporter."""
    with ReportExporter(http_client, filters=filters) as exporter:
        exporter.export_report(report, destinations)


__all__ = ["ReportExporter", "export_report"]
