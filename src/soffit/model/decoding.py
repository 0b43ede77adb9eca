"""Payload decoding by caller-declared type identifier.

The producer names the payload schema in a request header.  Each name
is looked up in a closed registry that maps it to a typed factory; an
unknown name is a decode failure, never an attempt to import something.

Conversion from parsed JSON to the payload dataclasses follows the field
annotations:

- ``str``, ``int``, ``bool`` (strict: ``"1"`` is not an ``int`` here)
- nested dataclasses (from JSON objects)
- ``tuple[str, ...]`` and ``frozenset[str]`` (from JSON arrays)
- ``Mapping[str, tuple[str, ...]]`` (from objects of arrays)
- ``X | None``

JSON keys are camelCase (``windowState``); snake_case keys are accepted
as well.  Unknown keys are ignored, missing keys use field defaults.
"""

from __future__ import annotations

import dataclasses
import json
import types
from collections.abc import Callable, Mapping
from typing import Any, Union, get_args, get_origin, get_type_hints

from soffit.errors import ConfigurationError, DecodeFailure
from soffit.model.payload import Payload

PAYLOAD_V1_0 = "org.apereo.portlet.soffit.model.v1_0.Payload"

PayloadFactory = Callable[[Mapping[str, Any]], object]


class ConversionError(ValueError):
    """A JSON value does not fit the annotated field type."""


def camel_case(name: str) -> str:
    """``window_state`` -> ``windowState``."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def from_json[T](cls: type[T], data: Mapping[str, Any]) -> T:
    """Build a dataclass instance of *cls* from a parsed JSON object."""
    if not isinstance(data, Mapping):
        raise ConversionError(f"expected an object for {cls.__name__}, got {type(data).__name__}")

    hints = get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):  # type: ignore[arg-type]
        key = camel_case(f.name)
        if key in data:
            raw = data[key]
        elif f.name in data:
            raw = data[f.name]
        else:
            continue
        try:
            kwargs[f.name] = _convert(raw, hints[f.name])
        except ConversionError as exc:
            raise ConversionError(f"{cls.__name__}.{key}: {exc}") from exc
    return cls(**kwargs)


def _convert(value: Any, target: Any) -> Any:
    """Convert a JSON value to *target*, raising ConversionError on mismatch."""
    origin = get_origin(target)

    if origin is Union or origin is types.UnionType:
        args = get_args(target)
        if value is None:
            if type(None) in args:
                return None
            raise ConversionError("null is not allowed")
        non_none = [a for a in args if a is not type(None)]
        return _convert(value, non_none[0])

    if value is None:
        raise ConversionError("null is not allowed")

    if target is str:
        if not isinstance(value, str):
            raise ConversionError(f"expected a string, got {type(value).__name__}")
        return value

    if target is bool:
        if not isinstance(value, bool):
            raise ConversionError(f"expected a boolean, got {type(value).__name__}")
        return value

    if target is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConversionError(f"expected an integer, got {type(value).__name__}")
        return value

    if isinstance(target, type) and dataclasses.is_dataclass(target):
        return from_json(target, value)

    if origin in (tuple, frozenset):
        if not isinstance(value, list):
            raise ConversionError(f"expected an array, got {type(value).__name__}")
        item_type = get_args(target)[0]
        return origin(_convert(item, item_type) for item in value)

    if origin is Mapping or origin is dict:
        if not isinstance(value, dict):
            raise ConversionError(f"expected an object, got {type(value).__name__}")
        _key_type, value_type = get_args(target)
        return {str(k): _convert(v, value_type) for k, v in value.items()}

    # Unannotated or unknown type: pass the raw value through
    return value


class PayloadDecoder:
    """Decode request bodies into typed payloads.

    The set of accepted type identifiers is fixed at construction.
    ``with_type()`` returns a new decoder with one more entry::

        decoder = PayloadDecoder().with_type("acme.Payload", AcmePayload.from_dict)
    """

    __slots__ = ("_types",)

    def __init__(self, types_: Mapping[str, PayloadFactory] | None = None) -> None:
        if types_ is None:
            types_ = {PAYLOAD_V1_0: lambda data: from_json(Payload, data)}
        self._types: Mapping[str, PayloadFactory] = types.MappingProxyType(dict(types_))

    @property
    def type_identifiers(self) -> frozenset[str]:
        return frozenset(self._types)

    def __contains__(self, type_identifier: object) -> bool:
        return type_identifier in self._types

    def with_type(self, type_identifier: str, factory: PayloadFactory) -> PayloadDecoder:
        """Return a new decoder that also accepts *type_identifier*."""
        if type_identifier in self._types:
            msg = f"Payload type {type_identifier!r} is already registered"
            raise ConfigurationError(msg)
        return PayloadDecoder({**self._types, type_identifier: factory})

    def decode(self, type_identifier: str, body: bytes | str) -> object:
        """Decode *body* as an instance of the type named *type_identifier*.

        Raises:
            DecodeFailure: Unknown identifier, undecodable or invalid JSON,
                or JSON that does not fit the payload type.
        """
        factory = self._types.get(type_identifier)
        if factory is None:
            msg = f"Unable to locate the specified PayloadClass: {type_identifier}"
            raise DecodeFailure(type_identifier, msg)

        try:
            text = body.decode("utf-8") if isinstance(body, bytes) else body
            # Deeply nested input raises RecursionError rather than JSONDecodeError
            data = json.loads(text)
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
            msg = f"Request body was not JSON or was not a valid {type_identifier}"
            raise DecodeFailure(type_identifier, msg, exc) from exc

        if not isinstance(data, dict):
            msg = f"Request body must be a JSON object for {type_identifier}"
            raise DecodeFailure(type_identifier, msg)

        try:
            return factory(data)
        except (ConversionError, TypeError, ValueError) as exc:
            msg = f"Request body was not a valid {type_identifier}: {exc}"
            raise DecodeFailure(type_identifier, msg, exc) from exc
