# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Normalized finding used by the SARIF renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CanonicalIssue:
    id: str
    name: str
    level: str
    details: str
    uri: str
    start_line: int
    start_column: int
    help_url: str
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "details": self.details,
            "start_line": self.start_line,
            "start_column": self.start_column,
            "uri": self.uri,
            "help_url": self.help_url,
        }
        if self.code is not None:
            data["code"] = self.code
        return data
