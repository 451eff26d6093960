# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import time

import pytest

from salus.errors import ScanResultContractError
from salus.models import Report, ScanResult, Verdict


def test_record_info_and_warnings_append_in_order():
    result = ScanResult("Semgrep")
    result.record_info("hits", {"msg": "a"})
    result.record_info("hits", {"msg": "b"})
    result.record_info("stats", 3)
    result.record_warning("semgrep_non_fatal", {"type": "Lexical error"})

    assert list(result.info) == ["hits", "stats"]
    assert result.info["hits"] == [{"msg": "a"}, {"msg": "b"}]
    assert result.warn == {"semgrep_non_fatal": [{"type": "Lexical error"}]}


def test_errors_do_not_change_verdict():
    result = ScanResult("BundleAudit")
    result.record_error(message="tool crashed", data={"exit": 2})
    result.record_error({"message": "second"})
    result.mark_pass()
    assert result.passed() is True
    assert result.errors == [{"message": "tool crashed", "data": {"exit": 2}}, {"message": "second"}]


def test_verdict_read_before_set_raises():
    result = ScanResult("Brakeman")
    assert result.verdict is Verdict.UNSET
    with pytest.raises(ScanResultContractError):
        result.passed()


@pytest.mark.parametrize("first,second", [("mark_pass", "mark_fail"), ("mark_fail", "mark_pass"), ("mark_pass", "mark_pass")])
def test_verdict_can_only_be_set_once(first, second):
    result = ScanResult("Brakeman")
    getattr(result, first)()
    with pytest.raises(ScanResultContractError):
        getattr(result, second)()


def test_frozen_result_rejects_mutation():
    result = ScanResult("Gosec")
    result.mark_fail()
    result.freeze()
    with pytest.raises(ScanResultContractError):
        result.record_info("hits", {})
    with pytest.raises(ScanResultContractError):
        result.record_dependency(name="lodash")


def test_reported_result_cannot_be_edited_through_properties():
    result = ScanResult("Semgrep")
    result.record_info("hits", {"pattern": "eval(...)", "hit": "app.rb:12:x = eval(input)"})
    result.record_error(message="partial run")
    result.record_dependency(name="lodash")
    result.mark_fail()
    report = Report()
    report.add_scan_result(result, required=True)
    before = report.to_json()

    result.info["hits"].append({"pattern": "exec(...)"})
    result.info["hits"][0]["pattern"] = "changed"
    result.warn["semgrep_non_fatal"] = [{"type": "Syntax error"}]
    result.errors.append({"message": "injected"})
    result.dependencies.clear()
    report.to_dict()["scans"]["Semgrep"]["errors"].clear()

    assert report.to_json() == before
    assert result.info == {"hits": [{"pattern": "eval(...)", "hit": "app.rb:12:x = eval(input)"}]}
    assert result.errors == [{"message": "partial run"}]


def test_unfrozen_result_exposes_live_collections():
    result = ScanResult("Semgrep")
    result.record_info("hits", {"msg": "a"})
    assert result.info is result.info


def test_to_dict_includes_optional_fields_only_when_present():
    bare = ScanResult("NPMAudit")
    bare.mark_pass()
    assert bare.to_dict() == {"scanner_name": "NPMAudit", "passed": True, "warn": {}, "info": {}, "errors": []}

    full = ScanResult("NPMAudit")
    full.record_dependency(dependency_file="package-lock.json", name="lodash", version="4.17.20")
    full.record_running_time(1.234)
    full.mark_fail()
    data = full.to_dict()
    assert list(data) == ["scanner_name", "passed", "warn", "info", "errors", "dependencies", "running_time"]
    assert data["dependencies"] == [{"dependency_file": "package-lock.json", "name": "lodash", "version": "4.17.20"}]
    assert data["running_time"] == 1.23


def test_timed_records_running_time(monkeypatch):
    ticks = iter([10.0, 12.5])
    monkeypatch.setattr(time, "monotonic", lambda: next(ticks, 12.5))
    result = ScanResult("Semgrep")
    with result.timed():
        result.mark_pass()
    assert result.running_time == 2.5


def test_empty_scanner_name_rejected():
    with pytest.raises(ValueError):
        ScanResult("")
