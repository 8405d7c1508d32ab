"""Exception hierarchy for turboclient.

All exceptions inherit from :class:`TurboClientError` so that callers can
catch every failure raised by the library with a single ``except`` clause,
while still being able to distinguish the failure class when they need to.

Subclass hierarchy::

    TurboClientError
    +-- ConfigurationError          (no usable credentials, bad role, bad config)
    +-- UnsupportedEntityTypeError  (search-by-name on an unmapped entity type)
    +-- TransportError              (network, DNS, TLS, timeout)
    +-- AuthenticationRejected      (login / token endpoint returned >= 400)
    +-- ResponseDecodeError         (successful response with malformed JSON)
    +-- RequestFailed               (authenticated call returned >= 400)
"""

from __future__ import annotations

from typing import Optional


class TurboClientError(Exception):
    """Base exception for all turboclient errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(TurboClientError):
    """Raised when the connection parameters cannot be used.

    Always raised before any network I/O takes place, e.g. when neither a
    username/password pair nor a complete OAuth credential set is supplied,
    or when a role name is not recognised.
    """


class UnsupportedEntityTypeError(TurboClientError):
    """Raised when a search-by-name targets an entity type with no filter mapping."""


class TransportError(TurboClientError):
    """Raised on network-level failures (timeout, DNS resolution, TLS, connection refused).

    The originating :mod:`httpx` exception is chained as ``__cause__``.
    """


class AuthenticationRejected(TurboClientError):
    """Raised when the login or OAuth token endpoint answers with status >= 400.

    Args:
        status_line: The HTTP status line, e.g. ``"401 Unauthorized"``.
        status_code: The numeric HTTP status.
    """

    def __init__(self, status_line: str, status_code: Optional[int] = None):
        super().__init__(status_line)
        self.status_line = status_line
        self.status_code = status_code


class ResponseDecodeError(TurboClientError):
    """Raised when a successful response body is not the expected JSON shape.

    The underlying decode/validation error is chained as ``__cause__``.
    """


class RequestFailed(TurboClientError):
    """Raised when an authenticated API call returns status >= 400.

    The message is the response body decoded as text.  The raw bytes are kept
    on :attr:`body` so callers can still extract structured error details
    the API may have returned.

    Args:
        body: Raw response body.
        status_code: The numeric HTTP status.
    """

    def __init__(self, body: bytes, status_code: int):
        super().__init__(body.decode("utf-8", errors="replace"))
        self.body = body
        self.status_code = status_code
