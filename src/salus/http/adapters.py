# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations."""

from __future__ import annotations

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests and dry runs."""

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if request.url in self._responses:
            return self._responses[request.url]
        return HttpResponse(ok=False, status_code=None, url=request.url, error_message="No stubbed response configured")

    def close(self) -> None:
        self.closed = True
