"""Shared building blocks for the resource modules.

* :class:`RequestBody` -- base for JSON request bodies.  Keys listed in
  ``omit_empty`` are dropped from the output when empty, everything else is
  always emitted.
* :class:`ResponseModel` -- base for decoded responses.  camelCase keys,
  unknown keys ignored, every field defaulted so partial payloads decode.
* Nested shapes that recur across entities, actions, search and stats.
* :func:`decode_json` -- validate a response body, mapping failures to
  :class:`~turboclient.exceptions.ResponseDecodeError`.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    TypeAdapter,
    ValidationError,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from turboclient.exceptions import ResponseDecodeError

T = TypeVar("T")


class RequestBody(BaseModel):
    """Base class for request bodies serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    omit_empty: ClassVar[frozenset[str]] = frozenset()
    """Serialised key names dropped when their value is empty."""

    @model_serializer(mode="wrap")
    def drop_empty_keys(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        return {
            key: value
            for key, value in data.items()
            if key not in self.omit_empty or not _is_empty(value)
        }

    def to_json(self) -> bytes:
        """Compact JSON encoding of this body."""
        return self.model_dump_json(by_alias=True).encode("utf-8")


class ResponseModel(BaseModel):
    """Base class for decoded API responses.

    A JSON ``null`` leaves the field at its default.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return drop_null_keys(data)


# --- Shared shapes ---


class DiscoveredBy(ResponseModel):
    """The target (probe) that discovered an entity."""

    uuid: str = ""
    display_name: str = ""
    category: str = ""
    is_probe_registered: bool = False
    type: str = ""
    readonly: bool = False


class EntityRef(ResponseModel):
    uuid: str = ""
    display_name: str = ""
    class_name: str = ""


class Filter(RequestBody):
    """A statistic filter such as ``{"type": "relation", "value": "sold"}``.

    Used in both requests and responses; ``displayName`` is always emitted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    type: str = ""
    value: str = ""
    display_name: Any = None

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return drop_null_keys(data)


class Template(ResponseModel):
    uuid: str = ""
    display_name: str = ""
    class_name: str = ""
    price: float = 0.0
    discovered: bool = False
    enable_match: bool = False


class Tag(RequestBody):
    """A tag key with its values, as read from or written to an entity."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    key: str
    values: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return drop_null_keys(data)


def decode_json(adapter: TypeAdapter[T], body: bytes) -> T:
    """Validate *body* against *adapter*.

    Raises:
        ResponseDecodeError: If *body* is not valid JSON of the expected shape.
    """
    try:
        return adapter.validate_json(body)
    except ValidationError as exc:
        raise ResponseDecodeError(f"unexpected response from Turbonomic: {exc}") from exc


def drop_null_keys(data: Any) -> Any:
    """Remove ``None``-valued keys from a raw mapping so field defaults apply."""
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if value is not None}
    return data


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, (str, list, dict)) and not value)
