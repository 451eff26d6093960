# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Building the HTTP request that carries a rendered report."""

from __future__ import annotations

from typing import Any

from ..http.models import HttpRequest
from ..models.destination import Destination, ReportFormat
from ..render.base import RenderedReport, pretty_json, serialize


def x_scanner_type(fmt: ReportFormat | str) -> str:
    return ReportFormat.parse(fmt).x_scanner


def report_headers(fmt: ReportFormat) -> dict[str, str]:
    return {"Content-Type": fmt.content_type, "X-Scanner": fmt.x_scanner}


def build_body(rendered: RenderedReport, destination: Destination) -> bytes:
    """
    Raw rendered payload, or ``additional_params + {param_name: payload}`` when the
    destination asks for a wrapped post.

    The wrapper nests the structured value for json/yaml/sarif and the rendered
    string for txt; a wrapped txt report is sent as JSON.
    """
    if destination.post is None:
        return rendered.content

    wrapped: dict[str, Any] = dict(destination.post.additional_params)
    wrapped[destination.post.param_name] = rendered.value
    if rendered.format is ReportFormat.TXT:
        return pretty_json(wrapped).encode("utf-8")
    return serialize(rendered.format, wrapped).encode("utf-8")


def build_http_request(rendered: RenderedReport, destination: Destination) -> HttpRequest:
    return HttpRequest(
        url=destination.uri,
        method="POST",
        headers=report_headers(rendered.format),
        body=build_body(rendered, destination),
    )


__all__ = ["build_body", "build_http_request", "report_headers", "x_scanner_type"]
