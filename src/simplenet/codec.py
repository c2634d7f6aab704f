# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response body codecs.

``decode`` is the schema-aware path: pydantic validates the JSON document against
the requested type (models, dataclasses, TypedDicts, containers). ``parse_generic``
and ``cast_json`` back the passthrough path, where the body is parsed as untyped
JSON and then only accepted if it already has the requested shape.
"""

from __future__ import annotations

import json
import types
import typing
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

JSON_NATIVE_TYPES = (dict, list, str, int, float, bool, type(None))


class CastError(TypeError):
    """Raised when a parsed JSON value does not have the requested shape."""


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def _type_adapter(target: Any) -> TypeAdapter[Any]:
    try:
        return _adapter(target)
    except TypeError:
        # unhashable annotations (e.g. Annotated with dict metadata)
        return TypeAdapter(target)


def decode(content: bytes, target: Any) -> Any:
    """Validate a JSON document into ``target``; raises ValueError on any mismatch."""
    return _type_adapter(target).validate_json(content)


def parse_generic(content: bytes) -> Any:
    """Parse a JSON document into plain Python values."""
    return json.loads(content)


def _is_json_native(target: Any) -> bool:
    origin = typing.get_origin(target)
    if origin is typing.Union or origin is types.UnionType:
        return all(_is_json_native(arg) for arg in typing.get_args(target))
    if origin is not None:
        return origin in JSON_NATIVE_TYPES
    return target in JSON_NATIVE_TYPES or target is None


def cast_json(value: Any, target: Any) -> Any:
    """
    Return ``value`` if it already is a ``target``.

    Only JSON-native targets (containers, scalars and unions of them) can match;
    ``Any``/``object`` accept every value. Nothing is converted: a JSON object
    never becomes a model instance here.
    """
    if target is Any or target is object:
        return value
    if not _is_json_native(target):
        raise CastError(f"{target!r} is not a JSON-native type")
    try:
        _type_adapter(target).validate_python(value, strict=True)
    except ValidationError as exc:
        raise CastError(str(exc)) from exc
    return value


__all__ = ["CastError", "JSON_NATIVE_TYPES", "cast_json", "decode", "parse_generic"]
