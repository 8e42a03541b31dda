# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class NagprobeError(Exception):
    """Base class for all errors raised by nagprobe."""


class CheckResolutionError(NagprobeError):
    """The configured check could not be mapped to an executable."""


class CheckExecutionError(NagprobeError):
    """The resolved check binary could not be started."""


class SiteAccountsError(NagprobeError):
    """Base class for site accounts (credential broker) failures."""


class SiteAccountsConfigError(SiteAccountsError):
    """The site accounts service is not (fully) configured."""


class SiteAccountsRequestError(SiteAccountsError):
    """The site accounts endpoint could not be read."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.category = category


class SiteAccountsResponseError(SiteAccountsError):
    """The site accounts endpoint returned an unusable payload."""


class CredentialsDecryptionError(SiteAccountsError):
    """Stored test client credentials could not be decrypted."""


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    cause = exc.__cause__ or exc.__context__
    if isinstance(exc, httpx.ConnectError) and isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, ConnectionError):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "CheckExecutionError",
    "CheckResolutionError",
    "CredentialsDecryptionError",
    "ErrorCategory",
    "NagprobeError",
    "SiteAccountsConfigError",
    "SiteAccountsError",
    "SiteAccountsRequestError",
    "SiteAccountsResponseError",
    "categorize_exception",
]
