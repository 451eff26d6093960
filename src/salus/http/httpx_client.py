# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
            )
        except httpx.HTTPError as exc:
            return HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
                meta={"error_category": categorize_exception(exc).value},
            )

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            text=resp.text,
            url=str(resp.url),
        )

    def close(self) -> None:
        self._client.close()
