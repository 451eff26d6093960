# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy and error categorization helpers."""

from __future__ import annotations

import socket
import ssl
from enum import Enum
from typing import Any

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    FILESYSTEM = "FILESYSTEM"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class SalusError(Exception):
    """Base class for every error raised by this package."""


class ScanResultContractError(SalusError):
    """A ScanResult was used against its lifecycle contract (verdict unset, set twice, mutated after hand-off)."""


class DuplicateScanResultError(ScanResultContractError):
    def __init__(self, scanner_name: str):
        super().__init__(f"Report already contains a scan result for {scanner_name!r}")
        self.scanner_name = scanner_name


class RenderError(SalusError):
    """A report could not be rendered in the requested format."""


class ConfigurationError(SalusError, ValueError):
    """A destination directive or render option is malformed."""


class DeliveryError(SalusError):
    """
    A rendered report could not be delivered to one destination.

    ``uri`` always names the failing destination; ``status_code`` is set for HTTP
    responses outside the 2xx range.
    """

    def __init__(
        self,
        message: str,
        *,
        uri: str,
        status_code: int | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        failures: list[DeliveryError] | None = None,
    ):
        super().__init__(message)
        self.uri = uri
        self.status_code = status_code
        self.category = category
        self.failures: list[DeliveryError] = failures if failures is not None else [self]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"message": str(self), "uri": self.uri, "category": self.category.value}
        if self.status_code is not None:
            data["status_code"] = self.status_code
        return data


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCategory.HTTP_STATUS

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, TimeoutError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, OSError):
        return ErrorCategory.FILESYSTEM

    return ErrorCategory.UNKNOWN_ERROR


def category_from_name(value: str | None) -> ErrorCategory:
    """Inverse of ``ErrorCategory.value``; unknown names map to UNKNOWN_ERROR."""
    try:
        return ErrorCategory(value) if value else ErrorCategory.UNKNOWN_ERROR
    except ValueError:
        return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "DuplicateScanResultError",
    "ErrorCategory",
    "RenderError",
    "SalusError",
    "ScanResultContractError",
    "categorize_exception",
    "category_from_name",
]
