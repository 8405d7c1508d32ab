"""Core Pydantic models for connecting to and calling the Turbonomic API.

**Connection models** -- supplied by the caller before authentication:
    :class:`Role`, :class:`OAuthCredentials`, :class:`ApiInfo` and
    :class:`ConnectionParameters`.

**Request models** -- shared by every resource module:
    :class:`CommonReqParams` and :class:`RequestOptions`.

**Auth response models**:
    :class:`TokenResponse`.

Resource-specific request/response shapes live beside the methods that use
them in :mod:`turboclient.api`.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from turboclient.exceptions import ConfigurationError

DEFAULT_BASE_PATH = "/api/v3"
"""Base path of the v3 REST API, used when no override is given."""


# --- Roles ---


class Role(str, enum.Enum):
    """Roles an OAuth client can request via ``scope=role:<ROLE>``."""

    ADMINISTRATOR = "ADMINISTRATOR"
    SITE_ADMIN = "SITE_ADMIN"
    AUTOMATOR = "AUTOMATOR"
    DEPLOYER = "DEPLOYER"
    ADVISOR = "ADVISOR"
    OBSERVER = "OBSERVER"
    OPERATIONAL_OBSERVER = "OPERATIONAL_OBSERVER"
    SHARED_ADVISOR = "SHARED_ADVISOR"
    SHARED_OBSERVER = "SHARED_OBSERVER"
    REPORT_EDITOR = "REPORT_EDITOR"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: str) -> Role:
        """Parse a role name case-insensitively.

        Args:
            name: Role name such as ``"observer"`` or ``"SITE_ADMIN"``.

        Returns:
            The matching :class:`Role`.

        Raises:
            ConfigurationError: If *name* is not a known role.
        """
        try:
            return cls(name.strip().upper())
        except ValueError:
            valid = ", ".join(r.value for r in cls)
            raise ConfigurationError(
                f"unrecognized Turbonomic role '{name}'. Valid roles: {valid}"
            ) from None


# --- Connection parameters ---


class OAuthCredentials(BaseModel):
    """OAuth2 client-credentials set.

    ``role`` accepts either a :class:`Role` or its name in any case.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str = ""
    client_secret: str = Field(default="", repr=False)
    role: Optional[Role] = None

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, Role):
            if not value:
                return None
            return Role.parse(value)
        return value

    @property
    def is_complete(self) -> bool:
        """Whether role, client id and client secret are all populated."""
        return bool(self.role is not None and str(self.role) and self.client_id and self.client_secret)


class ApiInfo(BaseModel):
    """Identity of the calling integration, sent as ``User-Agent: <origin>/<version>``."""

    model_config = ConfigDict(frozen=True)

    origin: str = ""
    version: str = ""

    @property
    def user_agent(self) -> Optional[str]:
        """The ``User-Agent`` value, or ``None`` when no origin is set."""
        if not self.origin:
            return None
        return f"{self.origin}/{self.version}"


class ConnectionParameters(BaseModel):
    """Everything needed to authenticate against a Turbonomic instance.

    Exactly one credential method must be fully populated: either
    ``username`` + ``password``, or ``oauth_creds`` with role, client id and
    secret.  The check happens when authenticating, before any I/O.

    Example::

        ConnectionParameters(
            hostname="turbo.example.com",
            oauth_creds=OAuthCredentials(
                client_id="id", client_secret="secret", role="OBSERVER",
            ),
        )
    """

    model_config = ConfigDict(frozen=True)

    hostname: str
    base_path: str = Field(
        default="", description="API base path override; empty means /api/v3"
    )
    username: str = ""
    password: str = Field(default="", repr=False)
    oauth_creds: OAuthCredentials = Field(default_factory=OAuthCredentials)
    skip_verify: bool = Field(
        default=False, description="Disable TLS certificate verification"
    )
    api_info: ApiInfo = Field(default_factory=ApiInfo)

    @property
    def effective_base_path(self) -> str:
        """The caller's base path override, or :data:`DEFAULT_BASE_PATH`."""
        return self.base_path or DEFAULT_BASE_PATH


# --- Requests ---


class CommonReqParams(BaseModel):
    """Per-call headers and query parameters accepted by every resource method."""

    headers: dict[str, str] = Field(default_factory=dict)
    query_parameters: dict[str, str] = Field(default_factory=dict)


class RequestOptions(BaseModel):
    """A single call for the dispatcher.

    Built fresh by a resource method and consumed once by
    :meth:`~turboclient.client.dispatcher.AuthenticatedClient.request`.

    Attributes:
        method: HTTP method.
        path: Path relative to the client's base URL, e.g. ``/search``.
        body: Optional serialised JSON body.
        params: Header overrides and query parameters.
        timeout: Optional per-call timeout in seconds overriding the
            client-wide one.
    """

    method: str
    path: str
    body: Optional[bytes] = None
    params: CommonReqParams = Field(default_factory=CommonReqParams)
    timeout: Optional[float] = None


# --- Auth responses ---


class TokenResponse(BaseModel):
    """Body returned by ``/oauth2/token``.

    ``null`` values fall back to the field defaults.
    """

    access_token: str = ""
    scope: str = ""
    token_type: str = ""
    expires_in: int = 0

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data
