# src/ruletree/core/yaml_engine.py
"""YAML codec for tuple payloads.

Two-phase approach, mirroring how payloads are read back:
1. Dump: reduce the value to JSON-safe primitives (pydantic_core), dropping None
   model fields and emitting set members in a stable sorted order
2. Emit: block-style YAML via PyYAML ``safe_dump``, key order preserved

Unmarshalling runs ``yaml.safe_load`` and validates the result against the
requested type with a pydantic ``TypeAdapter``, so nested models, lists and
maps of models all come back typed.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ruletree.contracts.errors import ValueFormatError

T = TypeVar("T")


def _normalize(value: Any) -> Any:
    """Recursively turn models into dicts and sets into sorted lists.

    Set iteration order depends on the per-process hash seed, so members
    are ordered by their JSON text.
    """
    if isinstance(value, BaseModel):
        return _normalize(value.model_dump(exclude_none=True))
    if isinstance(value, dict):
        return {k: _normalize(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_normalize(v) for v in value]
    if isinstance(value, set | frozenset):
        return sorted((_normalize(v) for v in value), key=_member_sort_key)
    return value


def _member_sort_key(member: Any) -> str:
    return json.dumps(to_jsonable_python(member), sort_keys=True)


def to_primitive(value: Any) -> Any:
    """Reduce a value (models, enums, sets, ...) to YAML-safe primitives."""
    try:
        return to_jsonable_python(_normalize(value), exclude_none=True)
    except PydanticSerializationError as e:
        raise ValueFormatError(f"Cannot serialize value of type {type(value).__name__}: {e}") from e


def marshal(value: Any) -> str:
    """Serialize value to a YAML document.

    Args:
        value: Pydantic model, collection or scalar

    Returns:
        Block-style YAML text

    Raises:
        ValueFormatError: If value has no YAML representation
    """
    return yaml.safe_dump(to_primitive(value), sort_keys=False, default_flow_style=False, allow_unicode=True)


@lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def unmarshal(text: str, type_: type[T] | Any) -> T:
    """Parse a YAML document into type_.

    Args:
        text: YAML text
        type_: Target type (model class or typing construct like list[str])

    Returns:
        Validated instance of type_

    Raises:
        ValueFormatError: If text is not valid YAML or does not fit type_
    """
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueFormatError(f"Invalid YAML payload: {e}", value=text) from e
    try:
        result: T = _adapter(type_).validate_python(loaded)
    except ValidationError as e:
        raise ValueFormatError(f"Payload does not match {_type_name(type_)}: {e}", value=text) from e
    return result


def _type_name(type_: Any) -> str:
    return type_.__name__ if isinstance(type_, type) else repr(type_)
