# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Per-scanner outcome record filled in by scanner adapters."""

from __future__ import annotations

import copy
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from enum import Enum
from typing import Any

from ..errors import ScanResultContractError


class Verdict(str, Enum):
    UNSET = "UNSET"
    PASS = "PASS"
    FAIL = "FAIL"


class ScanResult:
    """
    Outcome of one scanner run.

    A scanner adapter owns the result while it runs: it appends info, warnings,
    errors and dependencies, then sets the verdict exactly once. Handing the result
    to a Report freezes it; from then on it is read-only.
    """

    def __init__(self, scanner_name: str):
        if not scanner_name:
            raise ValueError("scanner_name must be a non-empty string")
        self.scanner_name = scanner_name
        self._verdict = Verdict.UNSET
        self._info: dict[str, list[Any]] = {}
        self._warn: dict[str, list[Any]] = {}
        self._errors: list[dict[str, Any]] = []
        self._dependencies: list[dict[str, Any]] = []
        self._running_time: float | None = None
        self._frozen = False

    def __repr__(self) -> str:
        return f"ScanResult({self.scanner_name!r}, verdict={self._verdict.value})"

    # -- producer interface -------------------------------------------------

    def record_info(self, category: str, value: Any) -> None:
        self._ensure_mutable()
        self._info.setdefault(category, []).append(value)

    def record_warning(self, category: str, value: Any) -> None:
        self._ensure_mutable()
        self._warn.setdefault(category, []).append(value)

    def record_error(self, fields: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Append an error record. Scanner errors are report data; they never change the verdict."""
        self._ensure_mutable()
        self._errors.append({**dict(fields or {}), **kwargs})

    def record_dependency(self, info: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self._ensure_mutable()
        self._dependencies.append({**dict(info or {}), **kwargs})

    def record_running_time(self, seconds: float) -> None:
        self._ensure_mutable()
        self._running_time = round(float(seconds), 2)

    @contextmanager
    def timed(self) -> Iterator[ScanResult]:
        """Record the wall-clock duration of the enclosed block as the running time."""
        start = time.monotonic()
        try:
            yield self
        finally:
            self.record_running_time(time.monotonic() - start)

    def mark_pass(self) -> None:
        self._set_verdict(Verdict.PASS)

    def mark_fail(self) -> None:
        self._set_verdict(Verdict.FAIL)

    def _set_verdict(self, verdict: Verdict) -> None:
        self._ensure_mutable()
        if self._verdict is not Verdict.UNSET:
            raise ScanResultContractError(
                f"Verdict for {self.scanner_name} already set to {self._verdict.value}; cannot set it to {verdict.value}"
            )
        self._verdict = verdict

    def freeze(self) -> None:
        self._frozen = True

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise ScanResultContractError(f"Scan result for {self.scanner_name} is read-only once added to a report")

    # -- read interface -----------------------------------------------------

    def _view(self, value: Any) -> Any:
        # Once frozen, callers only ever see copies of the recorded data.
        return copy.deepcopy(value) if self._frozen else value

    @property
    def verdict(self) -> Verdict:
        return self._verdict

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def info(self) -> dict[str, list[Any]]:
        return self._view(self._info)

    @property
    def warn(self) -> dict[str, list[Any]]:
        return self._view(self._warn)

    @property
    def errors(self) -> list[dict[str, Any]]:
        return self._view(self._errors)

    @property
    def dependencies(self) -> list[dict[str, Any]]:
        return self._view(self._dependencies)

    @property
    def running_time(self) -> float | None:
        return self._running_time

    def passed(self) -> bool:
        if self._verdict is Verdict.UNSET:
            raise ScanResultContractError(f"Verdict for {self.scanner_name} was read before it was set")
        return self._verdict is Verdict.PASS

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "scanner_name": self.scanner_name,
            "passed": self.passed(),
            "warn": copy.deepcopy(self._warn),
            "info": copy.deepcopy(self._info),
            "errors": copy.deepcopy(self._errors),
        }
        if self._dependencies:
            data["dependencies"] = copy.deepcopy(self._dependencies)
        if self._running_time is not None:
            data["running_time"] = self._running_time
        return data


__all__ = ["ScanResult", "Verdict"]
