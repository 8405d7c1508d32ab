"""Client construction.

:func:`new_client` is the usual entry point: it builds the transport, runs
the login handshake and returns a :class:`~turboclient.client.turbo.TurboClient`
whose default headers carry the bearer token (OAuth) and ``User-Agent``.
A username/password session lives in the transport's cookie jar instead.

:func:`client_from_session` skips the handshake for callers that already
hold a bearer token or session cookies.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional, Union

import httpx

from turboclient.auth.authenticator import Authenticator
from turboclient.auth.session import AuthRequest, build_session
from turboclient.client.turbo import TurboClient
from turboclient.exceptions import ConfigurationError
from turboclient.logger import LogConfig, LogContext, Logger, set_log_config
from turboclient.models import ConnectionParameters


def new_client(
    params: ConnectionParameters,
    *,
    logger: Optional[Logger] = None,
    ctx: Optional[LogContext] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> TurboClient:
    """Authenticate against the instance described by *params*.

    Args:
        params: Host, credentials, TLS setting and caller identity.
        logger: Logger for diagnostics.  Defaults to a
            :class:`~turboclient.logger.RichLogger`.
        ctx: Correlation fields attached to every log message.
        transport: Optional httpx transport override (e.g.
            :class:`httpx.MockTransport` in tests).

    Returns:
        An authenticated :class:`TurboClient`.

    Raises:
        ConfigurationError: If the credentials are unusable (no I/O happens).
        AuthenticationRejected: If the instance refuses the credentials.
        TransportError: If the instance cannot be reached.
        ResponseDecodeError: If the OAuth token response is malformed.

    Example::

        params = ConnectionParameters(
            hostname="turbo.example.com", username="admin", password="secret"
        )
        with new_client(params) as client:
            client.get_entity(EntityRequest(uuid="75941320319680"))
    """
    log_config = set_log_config(logger, ctx)
    http, auth_request = build_session(params, transport=transport)
    try:
        result = Authenticator(auth_request, log_config).authenticate()
    except Exception:
        http.close()
        raise

    return _assemble(auth_request, log_config, token=result.token)


def client_from_session(
    params: ConnectionParameters,
    *,
    bearer_token: Optional[str] = None,
    cookies: Optional[Union[httpx.Cookies, Mapping[str, str]]] = None,
    logger: Optional[Logger] = None,
    ctx: Optional[LogContext] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> TurboClient:
    """Build a client around an already established session.

    Credentials in *params* are ignored; only the host, base path, TLS
    setting and caller identity are used.

    Args:
        params: Connection parameters.
        bearer_token: OAuth access token to send as ``Authorization: Bearer``.
        cookies: Session cookies from an earlier username/password login.

    Raises:
        ConfigurationError: Unless exactly one of *bearer_token* and
            *cookies* is given.
    """
    if (bearer_token is None) == (cookies is None):
        raise ConfigurationError("provide exactly one of bearer_token or cookies")
    if bearer_token is not None and not bearer_token:
        raise ConfigurationError("bearer_token must not be empty")

    log_config = set_log_config(logger, ctx)
    http, auth_request = build_session(params, transport=transport)
    if cookies is not None:
        http.cookies.update(cookies)
    log_config.debug("reusing an existing Turbonomic session")
    return _assemble(auth_request, log_config, token=bearer_token)


def _assemble(
    auth_request: AuthRequest,
    log_config: LogConfig,
    token: Optional[str] = None,
) -> TurboClient:
    headers: dict[str, str] = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    user_agent = auth_request.api_info.user_agent
    if user_agent:
        headers["User-Agent"] = user_agent
    return TurboClient(
        base_url=auth_request.base_url,
        http=auth_request.http,
        headers=headers,
        log_config=log_config,
    )
