"""HTTP client layer for turboclient.

:class:`AuthenticatedClient` is the request dispatcher every resource call
goes through.  :class:`~turboclient.client.turbo.TurboClient` combines it
with the resource mixins from :mod:`turboclient.api`, and
:mod:`turboclient.client.factory` builds one from connection parameters.

Example::

    from turboclient import new_client

    with new_client(params) as client:
        entity = client.get_entity(EntityRequest(uuid="75941320319680"))
"""

from turboclient.client.dispatcher import AuthenticatedClient, request_options

__all__ = ["AuthenticatedClient", "request_options"]
