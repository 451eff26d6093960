# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Report formats and export destination directives."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlparse

from ..config import parse_bool
from ..errors import ConfigurationError


class ReportFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    TXT = "txt"
    SARIF = "sarif"
    SARIF_DIFF = "sarif_diff"

    @classmethod
    def parse(cls, value: Any) -> ReportFormat:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = ", ".join(fmt.value for fmt in cls)
            raise ConfigurationError(f"Unsupported report format {value!r} (expected one of: {supported})") from None

    @property
    def is_structured(self) -> bool:
        return self is not ReportFormat.TXT

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES[self]

    @property
    def x_scanner(self) -> str:
        return _X_SCANNER_TYPES[self]


_CONTENT_TYPES = {
    ReportFormat.JSON: "application/json",
    ReportFormat.YAML: "text/x-yaml",
    ReportFormat.TXT: "text/plain",
    ReportFormat.SARIF: "application/json",
    ReportFormat.SARIF_DIFF: "application/json",
}

_X_SCANNER_TYPES = {
    ReportFormat.JSON: "salus",
    ReportFormat.YAML: "salus",
    ReportFormat.TXT: "salus",
    ReportFormat.SARIF: "salus_sarif",
    ReportFormat.SARIF_DIFF: "salus_sarif_diff",
}


@dataclass(frozen=True)
class PostSpec:
    """Wrap the rendered report as ``additional_params + {param_name: report}`` before posting."""

    param_name: str
    additional_params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PostSpec:
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"'post' must be a mapping, got {type(data).__name__}")
        param_name = data.get("salus_report_param_name") or data.get("param_name")
        if not param_name or not isinstance(param_name, str):
            raise ConfigurationError("'post' requires a 'salus_report_param_name' string")
        additional = data.get("additional_params") or {}
        if not isinstance(additional, Mapping):
            raise ConfigurationError("'post.additional_params' must be a mapping")
        return cls(param_name=param_name, additional_params=dict(additional))


@dataclass(frozen=True)
class Destination:
    """
    Where one rendered report is delivered.

    ``uri`` is either an http(s) URL (report is POSTed) or a local file path
    (``file://`` prefix optional).
    """

    uri: str
    format: ReportFormat
    post: PostSpec | None = None
    verbose: bool = False
    sarif_options: dict[str, Any] = field(default_factory=dict)

    @property
    def is_http(self) -> bool:
        return urlparse(self.uri).scheme in {"http", "https"}

    @property
    def path(self) -> str:
        if self.uri.startswith("file://"):
            return self.uri[len("file://"):]
        return self.uri

    def render_options(self) -> dict[str, Any]:
        """Format-specific options handed to ``Report.render``."""
        if self.format is ReportFormat.TXT:
            return {"verbose": self.verbose}
        if self.format in (ReportFormat.SARIF, ReportFormat.SARIF_DIFF):
            return dict(self.sarif_options)
        return {}

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Destination:
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Report destination must be a mapping, got {type(data).__name__}")
        # Directives may come from YAML with string or symbol-like keys.
        normalized = {str(key).lstrip(":"): value for key, value in data.items()}
        uri = normalized.get("uri")
        if not uri or not isinstance(uri, str):
            raise ConfigurationError("Report destination requires a 'uri' string")
        if "format" not in normalized:
            raise ConfigurationError(f"Report destination {uri} requires a 'format'")
        fmt = ReportFormat.parse(normalized["format"])

        post = normalized.get("post")
        sarif_options = normalized.get("sarif_options") or {}
        if not isinstance(sarif_options, Mapping):
            raise ConfigurationError("'sarif_options' must be a mapping")
        return cls(
            uri=uri,
            format=fmt,
            post=PostSpec.from_mapping(post) if post is not None else None,
            verbose=parse_bool(normalized.get("verbose"), False),
            sarif_options=dict(sarif_options),
        )


def parse_destinations(directives: list[Mapping[str, Any] | Destination] | None) -> list[Destination]:
    """Parse destination directives, rejecting unknown formats before any rendering happens."""
    return [d if isinstance(d, Destination) else Destination.from_mapping(d) for d in directives or []]


__all__ = ["Destination", "PostSpec", "ReportFormat", "parse_destinations"]
