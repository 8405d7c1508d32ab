"""Connection parameters from the environment or a JSON file.

* :func:`connection_parameters_from_env` -- builds
  :class:`~turboclient.models.ConnectionParameters` from ``T8C_*`` variables.
* :func:`load_connection_parameters` -- reads them from a JSON file whose
  secrets may be given indirectly as ``password_source`` /
  ``client_secret_source``.
* :func:`resolve_credential` -- turns such a source descriptor into the
  secret itself.
* :func:`get_log_level` -- the ``T8C_LOG`` level.

Nothing here is required: callers may always build ``ConnectionParameters``
directly.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from turboclient.exceptions import ConfigurationError
from turboclient.logger import LogLevel
from turboclient.models import ConnectionParameters

ENV_HOSTNAME = "T8C_HOSTNAME"
ENV_BASE_PATH = "T8C_BASE_PATH"
ENV_USERNAME = "T8C_USERNAME"
ENV_PASSWORD = "T8C_PASSWORD"
ENV_CLIENT_ID = "T8C_CLIENT_ID"
ENV_CLIENT_SECRET = "T8C_CLIENT_SECRET"
ENV_ROLE = "T8C_ROLE"
ENV_SKIP_VERIFY = "T8C_SKIP_VERIFY"
ENV_API_ORIGIN = "T8C_API_ORIGIN"
ENV_API_VERSION = "T8C_API_VERSION"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - anything else -- returned unchanged

    Raises:
        ConfigurationError: If the variable is unset or the file can't be read.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigurationError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigurationError(f"Cannot read credential file {path}: {exc}") from exc

    return source


def connection_parameters_from_env(
    environ: Optional[Mapping[str, str]] = None,
) -> ConnectionParameters:
    """Build connection parameters from ``T8C_*`` environment variables.

    Args:
        environ: Mapping to read instead of :data:`os.environ`.

    Raises:
        ConfigurationError: If ``T8C_HOSTNAME`` is missing or a value is
            invalid (e.g. an unknown ``T8C_ROLE``).
    """
    env = os.environ if environ is None else environ
    hostname = env.get(ENV_HOSTNAME, "")
    if not hostname:
        raise ConfigurationError(f"{ENV_HOSTNAME} is not set")

    data: dict[str, Any] = {
        "hostname": hostname,
        "base_path": env.get(ENV_BASE_PATH, ""),
        "username": env.get(ENV_USERNAME, ""),
        "password": env.get(ENV_PASSWORD, ""),
        "oauth_creds": {
            "client_id": env.get(ENV_CLIENT_ID, ""),
            "client_secret": env.get(ENV_CLIENT_SECRET, ""),
            "role": env.get(ENV_ROLE, ""),
        },
        "skip_verify": env.get(ENV_SKIP_VERIFY, "").strip().lower() in _TRUTHY,
        "api_info": {
            "origin": env.get(ENV_API_ORIGIN, ""),
            "version": env.get(ENV_API_VERSION, ""),
        },
    }
    return _validate(data, source="environment")


def load_connection_parameters(path: Union[str, Path]) -> ConnectionParameters:
    """Load connection parameters from a JSON file.

    The file holds the fields of
    :class:`~turboclient.models.ConnectionParameters`.  ``password_source``
    and ``oauth_creds.client_secret_source`` may replace the plain secrets
    and are passed through :func:`resolve_credential`.

    Example file::

        {
          "hostname": "turbo.example.com",
          "oauth_creds": {
            "client_id": "my-client",
            "client_secret_source": "env:TURBO_SECRET",
            "role": "OBSERVER"
          }
        }

    Raises:
        ConfigurationError: If the file does not exist, contains invalid
            JSON, or fails validation.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise ConfigurationError(f"Connection file not found at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigurationError(f"Invalid connection file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Invalid connection file {path}: expected a JSON object")

    password_source = data.pop("password_source", None)
    if password_source is not None:
        data["password"] = resolve_credential(password_source)

    oauth = data.get("oauth_creds")
    if isinstance(oauth, dict):
        oauth = dict(oauth)
        secret_source = oauth.pop("client_secret_source", None)
        if secret_source is not None:
            oauth["client_secret"] = resolve_credential(secret_source)
        data["oauth_creds"] = oauth

    return _validate(data, source=str(path))


def get_log_level(environ: Optional[Mapping[str, str]] = None) -> LogLevel:
    """Return the level named by ``T8C_LOG``, defaulting to ``INFO``."""
    return LogLevel.from_env(environ)


def _validate(data: dict[str, Any], source: str) -> ConnectionParameters:
    try:
        return ConnectionParameters.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid connection parameters from {source}: {exc}") from exc
