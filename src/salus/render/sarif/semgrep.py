# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""SARIF normalizer for Semgrep pattern hits and non-fatal Semgrep warnings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ...models.issue import CanonicalIssue
from .base import SARIF_LEVELS, BaseSarif, MalformedFinding
from .registry import register_normalizer

SEMGREP_URI = "https://semgrep.dev/"
SEMGREP_RULE_SYNTAX_URL = "https://semgrep.dev/docs/writing-rules/rule-syntax/"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_line(value: Any) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise MalformedFinding(f"invalid line number {value!r}") from None


@register_normalizer("Semgrep")
class SemgrepSarif(BaseSarif):
    tool_name = "Semgrep"
    uri = SEMGREP_URI

    def raw_findings(self) -> list[Mapping[str, Any]]:
        hits = self.scan_result.info.get("hits") or []
        warnings = self.scan_result.warn.get("semgrep_non_fatal") or []
        return [*hits, *warnings]

    def parse_issue(self, finding: Mapping[str, Any]) -> CanonicalIssue | None:
        if not isinstance(finding, Mapping):
            raise MalformedFinding(f"expected a mapping, got {type(finding).__name__}")
        if "type" in finding:
            return self.parse_warning(finding)
        return self.parse_hit(finding)

    def parse_hit(self, hit: Mapping[str, Any]) -> CanonicalIssue | None:
        key = hit.get("pattern") or hit.get("msg")
        if not key:
            raise MalformedFinding("hit has neither a pattern nor a message")
        key = str(key)
        if self.seen(key):
            return None

        raw_hit = hit.get("hit")
        if not isinstance(raw_hit, str):
            raise MalformedFinding(f"hit {key!r} has no location string")
        # "<file>:<line>:<code preview>"; the preview may itself contain colons.
        location = raw_hit.split(":", 2)
        if len(location) < 2:
            raise MalformedFinding(f"hit location {raw_hit!r} has no line number")
        issue = CanonicalIssue(
            id=key,
            name=key,
            level="HIGH",
            details=(
                f"Pattern: {_text(hit.get('pattern'))}\nMessage:{_text(hit.get('msg'))}"
                f"\nForbidden:{_text(hit.get('forbidden'))}\nRequired:{_text(hit.get('required'))}"
                f"\nHit: {raw_hit}"
            ),
            uri=location[0],
            start_line=_parse_line(location[1]),
            start_column=1,
            help_url=SEMGREP_RULE_SYNTAX_URL,
            code=location[2] if len(location) > 2 else None,
        )
        self.emitted.add(key)
        return issue

    def parse_warning(self, warning: Mapping[str, Any]) -> CanonicalIssue | None:
        key = str(warning["type"])
        if self.seen(key):
            return None

        spans = warning.get("spans") or []
        if not spans:
            raise MalformedFinding(f"warning {key!r} has no source spans")
        span = spans[0]
        start = span.get("start") or span
        issue = CanonicalIssue(
            id=key,
            name=key,
            level=self.sarif_level(warning.get("level", warning.get("severity"))),
            details=_text(warning.get("message")),
            uri=str(span["file"]),
            start_line=_parse_line(start["line"]),
            start_column=_parse_line(start.get("col", start.get("column"))),
            help_url=SEMGREP_RULE_SYNTAX_URL,
        )
        self.emitted.add(key)
        return issue

    def sarif_level(self, severity: Any) -> str:
        if severity in ("warning", "warn"):
            return SARIF_LEVELS["warning"]
        return super().sarif_level(severity)


__all__ = ["SEMGREP_RULE_SYNTAX_URL", "SEMGREP_URI", "SemgrepSarif"]
