# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import logging
import socket
import ssl

import httpx
import pytest

from salus import config
from salus.config import DEFAULT_USER_AGENT
from salus.errors import (
    DeliveryError,
    ErrorCategory,
    SalusError,
    categorize_exception,
    category_from_name,
)
from salus.log import resolve_log_level, setup_logging


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("SALUS_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("SALUS_HTTP_RETRIES", "0")
    monkeypatch.setenv("SALUS_HTTP_BACKOFF", "1.5")
    monkeypatch.setenv("SALUS_HTTP_INITIAL_DELAY", "0.1")
    monkeypatch.setenv("SALUS_USER_AGENT", "CustomAgent/1.0")
    monkeypatch.setenv("SALUS_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("SALUS_HTTP_VERIFY_SSL", "0")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.max_retries == 0  # retry config clamps later
    assert settings.backoff_factor == 1.5
    assert settings.initial_delay == 0.1
    assert settings.user_agent == "CustomAgent/1.0"
    assert settings.allow_redirects is False
    assert settings.verify_ssl is False


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("SALUS_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("SALUS_HTTP_RETRIES", "ten")
    monkeypatch.setenv("SALUS_HTTP_BACKOFF", "")
    monkeypatch.delenv("SALUS_USER_AGENT", raising=False)

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout
    assert settings.max_retries == config.HttpSettings.max_retries
    assert settings.backoff_factor == config.HttpSettings.backoff_factor
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_non_positive_timeout_falls_back(monkeypatch):
    monkeypatch.setenv("SALUS_HTTP_TIMEOUT", "0")
    assert config.load_http_settings().timeout == config.HttpSettings.timeout


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("SALUS_HTTP_TIMEOUT", "7.7")
    assert config.load_http_settings().timeout == 7.7
    monkeypatch.setenv("SALUS_HTTP_TIMEOUT", "8.8")
    assert config.load_http_settings().timeout == 8.8


@pytest.mark.parametrize("raw,expected", [("1", True), ("on", True), ("false", False), ("", False)])
def test_export_settings_fail_fast(monkeypatch, raw, expected):
    monkeypatch.setenv("SALUS_EXPORT_FAIL_FAST", raw)
    assert config.load_export_settings().fail_fast is expected


def test_export_settings_default(monkeypatch):
    monkeypatch.delenv("SALUS_EXPORT_FAIL_FAST", raising=False)
    assert config.load_export_settings().fail_fast is False


@pytest.mark.parametrize(
    "exc,category",
    [
        (httpx.ReadTimeout("slow"), ErrorCategory.TIMEOUT),
        (httpx.ConnectError("refused"), ErrorCategory.CONNECTION_ERROR),
        (ssl.SSLError("bad cert"), ErrorCategory.SSL_ERROR),
        (socket.gaierror("no host"), ErrorCategory.DNS_ERROR),
        (ConnectionResetError("reset"), ErrorCategory.CONNECTION_ERROR),
        (FileNotFoundError(2, "No such file or directory"), ErrorCategory.FILESYSTEM),
        (PermissionError(13, "Permission denied"), ErrorCategory.FILESYSTEM),
        (RuntimeError("???"), ErrorCategory.UNKNOWN_ERROR),
    ],
)
def test_categorize_exception(exc, category):
    assert categorize_exception(exc) is category


def test_category_from_name():
    assert category_from_name("TIMEOUT") is ErrorCategory.TIMEOUT
    assert category_from_name("bogus") is ErrorCategory.UNKNOWN_ERROR
    assert category_from_name(None) is ErrorCategory.UNKNOWN_ERROR


def test_delivery_error_to_dict():
    error = DeliveryError("boom", uri="https://x.test", status_code=404, category=ErrorCategory.HTTP_STATUS)
    assert isinstance(error, SalusError)
    assert error.failures == [error]
    assert error.to_dict() == {"message": "boom", "uri": "https://x.test", "category": "HTTP_STATUS", "status_code": 404}


def test_resolve_log_level(monkeypatch):
    monkeypatch.setenv("SALUS_LOG_LEVEL", "debug")
    assert resolve_log_level() == logging.DEBUG
    assert resolve_log_level("error") == logging.ERROR
    assert resolve_log_level("nonsense") == logging.WARNING


def test_setup_logging_quiets_httpx(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    setup_logging("info")
    assert calls["level"] == logging.INFO
    assert logging.getLogger("httpx").level == logging.WARNING
