# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import time

import httpx

from salus.config import HttpSettings
from salus.http import HttpxClient, create_default_http_client
from salus.http.models import HttpRequest, HttpResponse, RetryConfig
from salus.http.retry import build_default_retry_config, send_with_retries


class SequenceHttpClient:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = 0

    def request(self, request: HttpRequest) -> HttpResponse:  # noqa: ARG002
        self.calls += 1
        return self._responses[min(self.calls - 1, len(self._responses) - 1)]

    def close(self) -> None:  # pragma: no cover - not exercised
        self.closed = True


def test_retry_config_from_settings_clamps_minimum():
    settings = HttpSettings(max_retries=0)
    retry = RetryConfig.from_settings(settings)
    assert retry.max_attempts == 1
    assert retry.backoff_factor == settings.backoff_factor


def test_build_default_retry_config_sets_expected_defaults():
    assert build_default_retry_config().max_attempts >= 1


def test_send_with_retries_success_after_transport_error(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda _: None)
    client = SequenceHttpClient([HttpResponse(ok=False, error_message="timeout"), HttpResponse(ok=True, status_code=200)])
    result = send_with_retries(client, HttpRequest(url="http://example"), retry_config=RetryConfig(max_attempts=3))
    assert result.ok is True
    assert result.meta["retry_count"] == 1
    assert client.calls == 2


def test_send_with_retries_does_not_retry_status_code_failures(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda _: None)
    client = SequenceHttpClient([HttpResponse(ok=True, status_code=500), HttpResponse(ok=True, status_code=200)])
    result = send_with_retries(client, HttpRequest(url="http://example"), retry_config=RetryConfig(max_attempts=3))
    assert result.status_code == 500
    assert result.is_success is False
    assert client.calls == 1


def test_send_with_retries_converts_exceptions_and_exhausts(monkeypatch):
    sleeps = []
    monkeypatch.setattr(time, "sleep", sleeps.append)

    class Exploding:
        calls = 0

        def request(self, request: HttpRequest) -> HttpResponse:  # noqa: ARG002
            self.calls += 1
            raise httpx.ConnectError("refused")

    client = Exploding()
    result = send_with_retries(
        client,
        HttpRequest(url="http://example"),
        retry_config=RetryConfig(max_attempts=3, backoff_factor=2.0, initial_delay=0.5),
    )
    assert result.ok is False
    assert result.error_type == "ConnectError"
    assert result.meta["error_category"] == "CONNECTION_ERROR"
    assert result.meta["retry_exhausted"] is True
    assert client.calls == 3
    assert sleeps == [0.5, 1.0]


def test_send_with_retries_returns_last_transport_failure(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda _: None)
    client = SequenceHttpClient([HttpResponse(ok=False, error_message="reset")])
    result = send_with_retries(client, HttpRequest(url="http://example"), retry_config=RetryConfig(max_attempts=2))
    assert result.ok is False
    assert result.error_message == "reset"
    assert result.meta == {"retry_count": 2, "retry_exhausted": True}
    assert client.calls == 2


def test_send_with_retries_zero_attempts_still_sends_once():
    client = SequenceHttpClient([HttpResponse(ok=True, status_code=204)])
    result = send_with_retries(client, HttpRequest(url="http://example"), retry_config=RetryConfig(max_attempts=0))
    assert result.status_code == 204
    assert client.calls == 1


def test_httpx_client_posts_body_and_headers():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["headers"] = dict(request.headers)
        seen["body"] = request.content
        return httpx.Response(404, text="missing")

    settings = HttpSettings(user_agent="Salus/test")
    client = HttpxClient(settings, client=httpx.Client(transport=httpx.MockTransport(handler)))
    response = client.request(
        HttpRequest(url="https://reports.test/upload", headers={"Content-Type": "application/json"}, body=b"{}")
    )
    client.close()

    assert response.ok is True
    assert response.status_code == 404
    assert response.is_success is False
    assert response.text == "missing"
    assert seen["method"] == "POST"
    assert seen["body"] == b"{}"
    assert seen["headers"]["content-type"] == "application/json"
    assert seen["headers"]["user-agent"] == "Salus/test"


def test_httpx_client_transport_error_is_categorized():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = HttpxClient(HttpSettings(), client=httpx.Client(transport=httpx.MockTransport(handler)))
    response = client.request(HttpRequest(url="https://reports.test/upload", body=b"{}"))

    assert response.ok is False
    assert response.status_code is None
    assert response.error_type == "ReadTimeout"
    assert response.meta["error_category"] == "TIMEOUT"


def test_create_default_http_client_uses_settings():
    settings = HttpSettings(timeout=3.0, verify_ssl=False)
    client = create_default_http_client(settings)
    try:
        assert isinstance(client, HttpxClient)
        assert client.settings is settings
    finally:
        client.close()
