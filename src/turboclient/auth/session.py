"""Session builder: transport and unauthenticated request descriptor.

:func:`build_session` turns :class:`~turboclient.models.ConnectionParameters`
into the two inputs the :class:`~turboclient.auth.authenticator.Authenticator`
needs:

* an :class:`httpx.Client` carrying the TLS-verification setting, a cookie
  jar and the fixed client-wide timeout, and
* an :class:`AuthRequest` describing where and with what credentials to log in.

No network activity happens here.
"""

from __future__ import annotations

from typing import Optional

import httpx

from turboclient.models import ApiInfo, ConnectionParameters, OAuthCredentials

REQUEST_TIMEOUT = 60.0
"""Seconds allowed for every call made through the transport, handshake included."""


class AuthRequest:
    """Parameters of the login handshake.

    Args:
        hostname: Host (and optional port) of the Turbonomic instance.
        base_path: Resolved API base path.
        username: Login user name (may be empty).
        password: Login password (may be empty).
        oauth_creds: OAuth client credentials (may be incomplete).
        api_info: Identity used for the ``User-Agent`` header.
        http: The transport the handshake and later calls go through.
    """

    def __init__(
        self,
        hostname: str,
        base_path: str,
        username: str,
        password: str,
        oauth_creds: OAuthCredentials,
        api_info: ApiInfo,
        http: httpx.Client,
    ):
        self.hostname = hostname
        self.base_path = base_path
        self.username = username
        self.password = password
        self.oauth_creds = oauth_creds
        self.api_info = api_info
        self.http = http

    @property
    def base_url(self) -> str:
        """``https://<hostname><base_path>``."""
        return f"https://{self.hostname}{self.base_path}"

    @property
    def login_url(self) -> str:
        return f"{self.base_url}/login"

    @property
    def token_url(self) -> str:
        """The OAuth endpoint sits at the host root, outside the API base path."""
        return f"https://{self.hostname}/oauth2/token"

    @property
    def has_login_credentials(self) -> bool:
        """Whether both username and password are non-empty."""
        return bool(self.username and self.password)


def build_transport(
    skip_verify: bool = False,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Client:
    """Create the shared :class:`httpx.Client`.

    Args:
        skip_verify: Disable TLS certificate verification when ``True``.
        transport: Optional transport override (e.g. :class:`httpx.MockTransport`).

    Returns:
        A client with its own cookie jar and a :data:`REQUEST_TIMEOUT`
        second timeout.
    """
    return httpx.Client(
        verify=not skip_verify,
        timeout=httpx.Timeout(REQUEST_TIMEOUT),
        cookies=httpx.Cookies(),
        transport=transport,
    )


def build_session(
    params: ConnectionParameters,
    transport: Optional[httpx.BaseTransport] = None,
) -> tuple[httpx.Client, AuthRequest]:
    """Prepare the transport and handshake descriptor for *params*.

    Args:
        params: Caller-supplied connection parameters.
        transport: Optional transport override passed to :func:`build_transport`.

    Returns:
        A ``(http_client, auth_request)`` tuple.
    """
    http = build_transport(params.skip_verify, transport=transport)
    auth_request = AuthRequest(
        hostname=params.hostname,
        base_path=params.effective_base_path,
        username=params.username,
        password=params.password,
        oauth_creds=params.oauth_creds,
        api_info=params.api_info,
        http=http,
    )
    return http, auth_request
