# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Base class for per-scanner SARIF issue normalizers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ...models.issue import CanonicalIssue
from ...models.scan_result import ScanResult
from ..base import pretty_json

logger = logging.getLogger(__name__)

SARIF_VERSION = "2.1.0"
SARIF_SCHEMA = "https://docs.oasis-open.org/sarif/sarif/v2.1.0/csprd01/schemas/sarif-schema-2.1.0"
SRCROOT = "SRCROOT"

SARIF_LEVELS = {"error": "error", "warning": "warning", "note": "note"}

_DEFAULT_SEVERITY_LEVELS = {
    "CRITICAL": "error",
    "HIGH": "error",
    "ERROR": "error",
    "MEDIUM": "warning",
    "MODERATE": "warning",
    "WARNING": "warning",
    "LOW": "note",
    "NOTE": "note",
    "INFO": "note",
}


class MalformedFinding(ValueError):
    """Raised inside a normalizer when one raw finding lacks required fields."""


class BaseSarif(ABC):
    """
    Converts one ScanResult into a SARIF run.

    A normalizer instance is built for a single render call: ``emitted`` holds the
    identity keys seen during that pass and is never reused.
    """

    tool_name: str = ""
    uri: str = ""

    def __init__(self, scan_result: ScanResult, *, base_uri: str | None = None):
        self.scan_result = scan_result
        self.base_uri = base_uri
        self.emitted: set[str] = set()

    @abstractmethod
    def raw_findings(self) -> list[Mapping[str, Any]]:
        """Raw findings in emission order."""

    @abstractmethod
    def parse_issue(self, finding: Mapping[str, Any]) -> CanonicalIssue | None:
        """Normalize one finding; ``None`` when its identity key was already emitted."""

    def seen(self, key: str) -> bool:
        return key in self.emitted

    def sarif_level(self, severity: Any) -> str:
        return _DEFAULT_SEVERITY_LEVELS.get(str(severity or "").strip().upper(), SARIF_LEVELS["note"])

    def issues(self) -> list[CanonicalIssue]:
        issues: list[CanonicalIssue] = []
        for finding in self.raw_findings():
            try:
                issue = self.parse_issue(finding)
            except (MalformedFinding, AttributeError, KeyError, IndexError, TypeError, ValueError) as exc:
                logger.warning("Omitting malformed %s finding from SARIF output: %s", self.tool_name, exc)
                continue
            if issue is not None:
                issues.append(issue)
        return issues

    def build_invocations(self) -> list[dict[str, Any]]:
        errors = self.scan_result.errors
        invocation: dict[str, Any] = {"executionSuccessful": self.scan_result.passed()}
        if errors:
            invocation["toolExecutionNotifications"] = [
                {
                    "descriptor": {"id": ""},
                    "level": SARIF_LEVELS["error"],
                    "message": {"text": f"==== Salus Errors\n{pretty_json(errors)}"},
                }
            ]
        return [invocation]

    def build_rule(self, issue: CanonicalIssue) -> dict[str, Any]:
        return {
            "id": issue.id,
            "name": issue.name,
            "fullDescription": {"text": issue.details},
            "helpUri": issue.help_url,
        }

    def build_result(self, issue: CanonicalIssue, rule_index: int) -> dict[str, Any]:
        artifact: dict[str, Any] = {"uri": issue.uri}
        if self.base_uri:
            artifact["uriBaseId"] = SRCROOT
        region: dict[str, Any] = {"startLine": issue.start_line, "startColumn": issue.start_column}
        if issue.code is not None:
            region["snippet"] = {"text": issue.code}
        return {
            "ruleId": issue.id,
            "ruleIndex": rule_index,
            "level": self.sarif_level(issue.level),
            "message": {"text": issue.details},
            "locations": [{"physicalLocation": {"artifactLocation": artifact, "region": region}}],
        }

    def build_run(self) -> dict[str, Any]:
        issues = self.issues()
        run: dict[str, Any] = {
            "tool": {
                "driver": {
                    "name": self.tool_name,
                    "informationUri": self.uri,
                    "rules": [self.build_rule(issue) for issue in issues],
                }
            },
            "results": [self.build_result(issue, index) for index, issue in enumerate(issues)],
            "invocations": self.build_invocations(),
        }
        if self.base_uri:
            run["originalUriBaseIds"] = {SRCROOT: {"uri": self.base_uri}}
        return run


__all__ = ["BaseSarif", "MalformedFinding", "SARIF_LEVELS", "SARIF_SCHEMA", "SARIF_VERSION"]
