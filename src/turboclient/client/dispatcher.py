"""Request dispatcher: the single chokepoint for authenticated API calls.

:class:`AuthenticatedClient` holds what the handshake produced -- the base
URL, the shared :class:`httpx.Client` (cookie jar, TLS setting, timeout) and
the default headers -- and exposes :meth:`AuthenticatedClient.request`, which
every resource method goes through.

Each call:

1. joins the base URL and the request path and sets the query parameters,
2. layers headers: ``Content-Type: application/json``, then the client
   defaults, then the per-call overrides (later layers win),
3. sends the request and reads the whole body,
4. raises :class:`~turboclient.exceptions.RequestFailed` for status >= 400.

There is no retry, caching or deduplication: two identical calls are two
HTTP requests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import httpx

from turboclient.exceptions import RequestFailed, TransportError
from turboclient.logger import LogConfig, set_log_config
from turboclient.models import CommonReqParams, RequestOptions


class AuthenticatedClient:
    """Authenticated connection to one Turbonomic instance.

    The client is read-only after construction and may be shared between
    threads making independent calls.  Use it as a context manager (or call
    :meth:`close`) to release the transport.

    Args:
        base_url: ``https://<host><base_path>``.
        http: Transport shared by every call.
        headers: Default headers applied to every call.
        log_config: Logger and correlation context.  Defaults to
            :func:`~turboclient.logger.set_log_config` defaults.

    Example::

        with new_client(params) as client:
            body = client.request(RequestOptions(method="GET", path="/entities/123"))
    """

    def __init__(
        self,
        base_url: str,
        http: httpx.Client,
        headers: Optional[Mapping[str, str]] = None,
        log_config: Optional[LogConfig] = None,
    ) -> None:
        self._base_url = base_url
        self._http = http
        self._headers: dict[str, str] = dict(headers or {})
        self._log = log_config or set_log_config()

    # ------------------------------------------------------------------ #
    # Read-only state
    # ------------------------------------------------------------------ #

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def http(self) -> httpx.Client:
        """The underlying transport (carries the session cookie jar)."""
        return self._http

    @property
    def headers(self) -> dict[str, str]:
        """A copy of the default headers."""
        return dict(self._headers)

    @property
    def log(self) -> LogConfig:
        return self._log

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> AuthenticatedClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying transport."""
        self._http.close()

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def request(self, options: RequestOptions) -> bytes:
        """Send one request and return the raw response body.

        Args:
            options: Method, path, body, header/query overrides and an
                optional per-call timeout.

        Returns:
            The full response body.

        Raises:
            RequestFailed: If the response status is >= 400.  The exception
                carries the raw body on ``.body``.
            TransportError: On network-level failures.
        """
        url = self.build_url(options.path, options.params.query_parameters)
        headers = self.build_headers(options.params.headers)

        kwargs: dict[str, Any] = {
            "method": options.method,
            "url": url,
            "headers": headers,
            "content": options.body,
        }
        if options.timeout is not None:
            kwargs["timeout"] = options.timeout

        try:
            response = self._http.request(**kwargs)
        except httpx.TransportError as exc:
            self._log.error(
                "request to Turbonomic failed", method=options.method, path=options.path, error=str(exc)
            )
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        body = response.content
        if response.status_code >= 400:
            self._log.debug(
                "Turbonomic returned an error",
                method=options.method,
                path=options.path,
                status=response.status_code,
            )
            raise RequestFailed(body, response.status_code)

        return body

    def build_url(self, path: str, query_parameters: Optional[Mapping[str, str]] = None) -> httpx.URL:
        """Join the base URL with *path* and set each query parameter once.

        Parameters already present in *path* are overwritten by
        *query_parameters* with the same key.
        """
        url = httpx.URL(self._base_url + path)
        for key, value in (query_parameters or {}).items():
            url = url.copy_set_param(key, value)
        return url

    def build_headers(self, overrides: Optional[Mapping[str, str]] = None) -> httpx.Headers:
        """Layer ``Content-Type``, the client defaults and *overrides*, in that order."""
        headers = httpx.Headers({"Content-Type": "application/json"})
        for layer in (self._headers, overrides or {}):
            for key, value in layer.items():
                headers[key] = value
        return headers


def request_options(
    method: str,
    path: str,
    body: Optional[bytes] = None,
    params: Optional[CommonReqParams] = None,
) -> RequestOptions:
    """Shorthand used by resource methods to build a :class:`RequestOptions`."""
    return RequestOptions(
        method=method,
        path=path,
        body=body,
        params=params or CommonReqParams(),
    )
