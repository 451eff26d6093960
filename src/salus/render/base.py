# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared rendering types: rendered payloads, filter hooks and serializers."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import yaml

from ..errors import RenderError
from ..models.destination import ReportFormat

StructuredFilter = Callable[[dict[str, Any]], Any]
TextFilter = Callable[[str], str]


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class ReportFilters:
    """
    Post-render hooks a deployment can use to redact or augment a report.

    ``structured`` sees the report mapping for json/yaml, ``sarif`` sees the SARIF
    document for sarif/sarif_diff, ``text`` sees the rendered txt string. Each hook
    returns a value of the same shape.
    """

    structured: StructuredFilter = field(default=_identity)
    sarif: StructuredFilter = field(default=_identity)
    text: TextFilter = field(default=_identity)


DEFAULT_FILTERS = ReportFilters()


@dataclass(frozen=True)
class RenderedReport:
    """A report rendered in one format: the filtered value and its serialized text."""

    format: ReportFormat
    value: Any
    text: str

    @property
    def content(self) -> bytes:
        return self.text.encode("utf-8")


def pretty_json(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise RenderError(f"Report contains a value that cannot be serialized to JSON: {exc}") from exc


def dump_yaml(value: Any) -> str:
    try:
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True, default_flow_style=False)
    except yaml.YAMLError as exc:
        raise RenderError(f"Report contains a value that cannot be serialized to YAML: {exc}") from exc


def serialize(fmt: ReportFormat, value: Any) -> str:
    """Serialize a structured value (or pass through text) for ``fmt``."""
    if fmt is ReportFormat.YAML:
        return dump_yaml(value)
    if fmt is ReportFormat.TXT and isinstance(value, str):
        return value
    return pretty_json(value)


__all__ = [
    "DEFAULT_FILTERS",
    "RenderedReport",
    "ReportFilters",
    "dump_yaml",
    "pretty_json",
    "serialize",
]
