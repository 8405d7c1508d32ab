"""Authentication layer for turboclient.

- :func:`build_session` -- prepares the transport and the :class:`AuthRequest`.
- :class:`Authenticator` -- runs the login handshake and yields an
  :class:`AuthResult` (bearer token or cookie session).

Typical usage::

    from turboclient.auth import Authenticator, build_session

    http, auth_request = build_session(params)
    result = Authenticator(auth_request, log_config).authenticate()
"""

from turboclient.auth.authenticator import (
    AuthMethod,
    AuthResult,
    Authenticator,
    HandshakeState,
)
from turboclient.auth.session import AuthRequest, build_session, build_transport

__all__ = [
    "AuthMethod",
    "AuthRequest",
    "AuthResult",
    "Authenticator",
    "HandshakeState",
    "build_session",
    "build_transport",
]
