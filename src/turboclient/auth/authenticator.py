"""Login handshake against the Turbonomic API.

The :class:`Authenticator` runs a small, explicit state machine::

    UNAUTHENTICATED -> ATTEMPTING_PRIMARY -> SUCCESS
                                          -> ATTEMPTING_FALLBACK -> SUCCESS
                                                                 -> FAILED
                                          -> FAILED

Method selection happens before any I/O:

* ``username`` + ``password`` -> form login at ``<base>/login``; the session
  lives in the transport's cookie jar.
* complete OAuth credentials -> client-credentials grant at
  ``<host>/oauth2/token`` with the secret in a Basic ``Authorization`` header
  (``client_secret_basic``).  If the server answers exactly 401, the grant is
  retried once with the secret in the form body (``client_secret_post``).

Anything else is a :class:`~turboclient.exceptions.ConfigurationError`.
"""

from __future__ import annotations

import base64
import enum
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from turboclient.auth.session import AuthRequest
from turboclient.exceptions import (
    AuthenticationRejected,
    ConfigurationError,
    ResponseDecodeError,
    TransportError,
)
from turboclient.logger import LogConfig
from turboclient.models import TokenResponse

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class AuthMethod(str, enum.Enum):
    """Credential submission styles, named as they are logged."""

    USERNAME_PASSWORD = "username/password"
    CLIENT_SECRET_BASIC = "client_secret_basic"
    CLIENT_SECRET_POST = "client_secret_post"


class HandshakeState(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    ATTEMPTING_PRIMARY = "attempting_primary"
    ATTEMPTING_FALLBACK = "attempting_fallback"
    SUCCESS = "success"
    FAILED = "failed"


class AuthResult:
    """Outcome of a successful handshake.

    Exactly one of :attr:`token` and :attr:`cookies` is set: a bearer token
    for OAuth, the populated cookie jar for a username/password login.

    Args:
        method: The submission style that succeeded.
        token: OAuth access token, or ``None``.
        cookies: Session cookie jar, or ``None``.
    """

    def __init__(
        self,
        method: AuthMethod,
        token: Optional[str] = None,
        cookies: Optional[httpx.Cookies] = None,
    ):
        if token is not None and cookies is not None:
            raise ValueError("an AuthResult carries a bearer token or a cookie session, not both")
        self.method = method
        self.token = token
        self.cookies = cookies


class Authenticator:
    """Performs one login handshake for an :class:`~turboclient.auth.session.AuthRequest`.

    An instance is single-use: call :meth:`authenticate` once and inspect
    :attr:`state` and :attr:`attempts` afterwards if needed.

    Args:
        auth_request: Where and with what credentials to log in.
        log_config: Logger and correlation context for diagnostics.
    """

    def __init__(self, auth_request: AuthRequest, log_config: LogConfig):
        self._req = auth_request
        self._log = log_config
        self.state = HandshakeState.UNAUTHENTICATED
        self.attempts: list[AuthMethod] = []

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def select_method(self) -> AuthMethod:
        """Choose the credential method for the primary attempt.

        Returns:
            :attr:`AuthMethod.USERNAME_PASSWORD` or
            :attr:`AuthMethod.CLIENT_SECRET_BASIC`.

        Raises:
            ConfigurationError: If no method, or more than one, is fully
                populated.
        """
        has_login = self._req.has_login_credentials
        has_oauth = self._req.oauth_creds.is_complete
        if has_login and has_oauth:
            raise ConfigurationError(
                "ambiguous credentials; provide either username/password or oauth2, not both"
            )
        if has_login:
            return AuthMethod.USERNAME_PASSWORD
        if has_oauth:
            return AuthMethod.CLIENT_SECRET_BASIC
        raise ConfigurationError(
            "please provide valid credentials; username/password or oauth2"
        )

    def authenticate(self) -> AuthResult:
        """Run the handshake.

        Returns:
            The :class:`AuthResult` of the successful attempt.

        Raises:
            ConfigurationError: Before any I/O, if the credentials are unusable.
            TransportError: If the remote host cannot be reached.
            AuthenticationRejected: If the final attempt returns status >= 400.
            ResponseDecodeError: If an OAuth token response is not valid JSON.
        """
        method = self.select_method()

        self.state = HandshakeState.ATTEMPTING_PRIMARY
        response = self._primary_attempt(method)

        if method is AuthMethod.CLIENT_SECRET_BASIC and response.status_code == 401:
            self._log.debug(
                "authentication failed for client_secret_basic method, trying client_secret_post"
            )
            self.state = HandshakeState.ATTEMPTING_FALLBACK
            method = AuthMethod.CLIENT_SECRET_POST
            response = self._fallback_attempt()

        if response.status_code >= 400:
            self.state = HandshakeState.FAILED
            status_line = _status_line(response)
            self._log.error(
                "failed to establish a connection with the Turbonomic instance",
                status=status_line,
            )
            raise AuthenticationRejected(status_line, response.status_code)

        try:
            result = self._result_from_response(method, response)
        except ResponseDecodeError as exc:
            self.state = HandshakeState.FAILED
            self._log.error(str(exc))
            raise

        self.state = HandshakeState.SUCCESS
        self._log.debug(
            f"successfully logged into Turbonomic using {method.value} authentication method"
        )
        return result

    # ------------------------------------------------------------------ #
    # Attempts
    # ------------------------------------------------------------------ #

    def _primary_attempt(self, method: AuthMethod) -> httpx.Response:
        """POST the credentials in the style chosen by :meth:`select_method`."""
        headers = {"Content-Type": FORM_CONTENT_TYPE}
        user_agent = self._req.api_info.user_agent
        if user_agent:
            headers["User-Agent"] = user_agent

        if method is AuthMethod.USERNAME_PASSWORD:
            url = self._req.login_url
            body = _form_encode(
                [("username", self._req.username), ("password", self._req.password)]
            )
        else:
            creds = self._req.oauth_creds
            url = self._req.token_url
            body = _form_encode(
                [("grant_type", "client_credentials"), ("scope", f"role:{creds.role}")]
            )
            headers["Authorization"] = _basic_auth(creds.client_id, creds.client_secret)

        return self._post(method, url, body, headers)

    def _fallback_attempt(self) -> httpx.Response:
        """Retry the OAuth grant with the client id and secret in the form body."""
        creds = self._req.oauth_creds
        body = _form_encode(
            [
                ("grant_type", "client_credentials"),
                ("scope", f"role:{creds.role}"),
                ("client_id", creds.client_id),
                ("client_secret", creds.client_secret),
            ]
        )
        headers = {"Content-Type": FORM_CONTENT_TYPE}
        return self._post(AuthMethod.CLIENT_SECRET_POST, self._req.token_url, body, headers)

    def _post(
        self,
        method: AuthMethod,
        url: str,
        body: str,
        headers: dict[str, str],
    ) -> httpx.Response:
        self.attempts.append(method)
        try:
            return self._req.http.post(url, content=body.encode("utf-8"), headers=headers)
        except httpx.TransportError as exc:
            self.state = HandshakeState.FAILED
            self._log.error("failed to reach the Turbonomic instance", error=str(exc))
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Result
    # ------------------------------------------------------------------ #

    def _result_from_response(self, method: AuthMethod, response: httpx.Response) -> AuthResult:
        if method is AuthMethod.USERNAME_PASSWORD:
            return AuthResult(method, cookies=self._req.http.cookies)

        try:
            token = TokenResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise ResponseDecodeError(f"invalid OAuth token response: {exc}") from exc

        return AuthResult(method, token=token.access_token or None)


def _form_encode(fields: list[tuple[str, str]]) -> str:
    """Join *fields* as ``k=v&k=v``, escaping everything but ``:`` in values."""
    return "&".join(f"{key}={quote(value, safe=':')}" for key, value in fields)


def _basic_auth(client_id: str, client_secret: str) -> str:
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def _status_line(response: httpx.Response) -> str:
    """Render ``"<code> <reason>"``, e.g. ``"401 Unauthorized"``."""
    return f"{response.status_code} {response.reason_phrase}".strip()
