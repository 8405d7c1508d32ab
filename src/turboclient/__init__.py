"""turboclient -- a Python client for the Turbonomic REST API.

The library authenticates against a Turbonomic instance (username/password
session or OAuth2 client credentials) and then calls the entity, tag,
action, search and statistics endpoints through a single dispatcher.

Typical usage::

    from turboclient import ConnectionParameters, OAuthCredentials, new_client
    from turboclient.api import ActionsRequest

    params = ConnectionParameters(
        hostname="turbo.example.com",
        oauth_creds=OAuthCredentials(client_id="id", client_secret="secret", role="OBSERVER"),
    )
    with new_client(params) as client:
        actions = client.get_actions_by_uuid(
            ActionsRequest(uuid="75941320319680", action_state=["READY"])
        )

Modules:
    models: Connection and request models shared across the package.
    auth: Session builder and login handshake.
    client: Request dispatcher, the composed client and its factory.
    api: Resource operations and their request/response models.
    config: Connection parameters from the environment or a JSON file.
    logger: Injectable logging with Rich output.
    exceptions: Exception hierarchy rooted at :class:`TurboClientError`.
"""

from turboclient.client.factory import client_from_session, new_client
from turboclient.client.turbo import TurboClient
from turboclient.exceptions import (
    AuthenticationRejected,
    ConfigurationError,
    RequestFailed,
    ResponseDecodeError,
    TransportError,
    TurboClientError,
    UnsupportedEntityTypeError,
)
from turboclient.models import (
    ApiInfo,
    CommonReqParams,
    ConnectionParameters,
    OAuthCredentials,
    RequestOptions,
    Role,
)

__version__ = "0.1.0"

__all__ = [
    "ApiInfo",
    "AuthenticationRejected",
    "CommonReqParams",
    "ConfigurationError",
    "ConnectionParameters",
    "OAuthCredentials",
    "RequestFailed",
    "RequestOptions",
    "ResponseDecodeError",
    "Role",
    "TransportError",
    "TurboClient",
    "TurboClientError",
    "UnsupportedEntityTypeError",
    "client_from_session",
    "new_client",
]
