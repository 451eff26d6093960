# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""SARIF document assembly and baseline diffing."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ...errors import RenderError
from .base import SARIF_SCHEMA, SARIF_VERSION
from .registry import get_normalizer

if TYPE_CHECKING:
    from ...models.report import Report

logger = logging.getLogger(__name__)

RESERVED_KEYS = frozenset({"version", "$schema", "runs"})
KNOWN_OPTIONS = frozenset({"extra_fields", "include_non_enforced", "base_uri", "baseline"})


def build_sarif(report: Report, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Build the SARIF log for ``report``.

    Only scanners with a registered normalizer contribute a run. Every call builds
    fresh normalizers, so findings deduplicated in one call are emitted again by the next.
    """
    opts = dict(options or {})
    for key in opts.keys() - KNOWN_OPTIONS:
        logger.debug("Ignoring unknown SARIF option %r", key)

    include_non_enforced = bool(opts.get("include_non_enforced", True))
    base_uri = opts.get("base_uri")
    extra_fields = opts.get("extra_fields") or {}
    if not isinstance(extra_fields, Mapping):
        raise RenderError("SARIF option 'extra_fields' must be a mapping")

    runs = []
    for entry in report:
        if not entry.required and not include_non_enforced:
            continue
        normalizer_cls = get_normalizer(entry.result.scanner_name)
        if normalizer_cls is None:
            logger.debug("No SARIF normalizer for %s; omitting it from runs", entry.result.scanner_name)
            continue
        runs.append(normalizer_cls(entry.result, base_uri=base_uri).build_run())

    document: dict[str, Any] = {"version": SARIF_VERSION, "$schema": SARIF_SCHEMA, "runs": runs}
    for key, value in extra_fields.items():
        if key in RESERVED_KEYS:
            logger.warning("SARIF extra field %r would overwrite the envelope; skipping it", key)
            continue
        document[key] = value
    return document


def _result_key(result: Mapping[str, Any]) -> tuple[str, str, str]:
    uri = snippet = ""
    locations = result.get("locations") or []
    if locations:
        physical = locations[0].get("physicalLocation") or {}
        uri = (physical.get("artifactLocation") or {}).get("uri") or ""
        snippet = ((physical.get("region") or {}).get("snippet") or {}).get("text") or ""
    return (str(result.get("ruleId") or ""), str(uri), str(snippet))


def _tool_name(run: Mapping[str, Any]) -> str:
    return str(((run.get("tool") or {}).get("driver") or {}).get("name") or "")


def _load_baseline(baseline: Any) -> Mapping[str, Any]:
    if isinstance(baseline, (str, bytes)):
        try:
            baseline = json.loads(baseline)
        except ValueError as exc:
            raise RenderError(f"SARIF baseline is not valid JSON: {exc}") from exc
    if not isinstance(baseline, Mapping) or not isinstance(baseline.get("runs"), list):
        raise RenderError("SARIF baseline must be a SARIF document with a 'runs' list")
    return baseline


def sarif_diff(current: Mapping[str, Any], baseline: Any) -> dict[str, Any]:
    """
    Keep only results of ``current`` that do not appear in ``baseline``.

    Results are matched per tool on (ruleId, artifact uri, code snippet). Line numbers
    and messages (which embed the hit location) are ignored, so edits that only shift
    code do not resurface old findings.
    """
    baseline_doc = _load_baseline(baseline)
    known: dict[str, set[tuple[str, str, str]]] = {}
    for run in baseline_doc["runs"]:
        known.setdefault(_tool_name(run), set()).update(_result_key(r) for r in run.get("results") or [])

    diff = copy.deepcopy(dict(current))
    for run in diff.get("runs") or []:
        seen = known.get(_tool_name(run), set())
        results = [r for r in run.get("results") or [] if _result_key(r) not in seen]
        driver = (run.get("tool") or {}).get("driver") or {}
        rules = driver.get("rules") or []
        kept_rules: list[dict[str, Any]] = []
        index_by_id: dict[str, int] = {}
        for result in results:
            rule_id = result.get("ruleId")
            if rule_id not in index_by_id:
                rule = next((r for r in rules if r.get("id") == rule_id), None)
                if rule is not None:
                    index_by_id[rule_id] = len(kept_rules)
                    kept_rules.append(rule)
            if rule_id in index_by_id:
                result["ruleIndex"] = index_by_id[rule_id]
            else:
                result.pop("ruleIndex", None)
        if "rules" in driver:
            driver["rules"] = kept_rules
        run["results"] = results
    return diff


def build_sarif_diff(report: Report, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    opts = dict(options or {})
    if "baseline" not in opts:
        raise RenderError("sarif_diff rendering requires a 'baseline' SARIF document option")
    return sarif_diff(build_sarif(report, opts), opts["baseline"])


__all__ = ["build_sarif", "build_sarif_diff", "sarif_diff"]
