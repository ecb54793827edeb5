# src/ruletree/core/descriptors.py
"""Static field descriptor tables for rule configuration models.

A configuration class opts into tuple conversion with ``@tuple_entity``.
The decorator inspects the class ONCE, at import time, and attaches an
immutable ``TupleEntity`` describing every tagged field: its tuple name,
emission order, closed ``FieldKind`` and declared value type. The swapper
engine then dispatches on that table and never inspects annotations per call.

Tagging a field:

    @tuple_entity("encrypt")
    class EncryptRuleConfiguration(RuleConfiguration):
        tables: Annotated[dict[str, EncryptTable], TupleField("tables", order=0)] = {}
        encryptors: Annotated[dict[str, AlgorithmConfiguration], TupleField("encryptors", order=1)] = {}

Whole-object singletons:

    @tuple_entity("single", singleton_item="tables")    # namespaced
    class SingleRuleConfiguration(RuleConfiguration): ...

    @tuple_entity("transaction")                        # global (GlobalRuleConfiguration subclass)
    class TransactionRuleConfiguration(GlobalRuleConfiguration): ...
"""

from __future__ import annotations

import collections.abc
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel

from ruletree.contracts.enums import FieldKind
from ruletree.contracts.errors import DescriptorDefinitionError
from ruletree.contracts.rule import GlobalRuleConfiguration, RuleConfiguration
from ruletree.core.paths import get_global_rule_path, require_segment

KeyGenerator = Callable[[Any], str]

C = TypeVar("C", bound=type[RuleConfiguration])

_ENTITY_ATTRIBUTE = "__tuple_entity__"

_COLLECTION_ORIGINS: frozenset[Any] = frozenset(
    {
        list,
        set,
        frozenset,
        tuple,
        collections.abc.Collection,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
    }
)
_MAPPING_ORIGINS: frozenset[Any] = frozenset({dict, collections.abc.Mapping, collections.abc.MutableMapping})


@dataclass(frozen=True, slots=True)
class TupleField:
    """Annotated marker tagging a model field for tuple conversion.

    Attributes:
        name: Item name used in the field's node path
        order: Emission order (ties keep declaration order)
        key_generator: Derives a node name per element; makes the field name-keyed
        kind: Force a kind instead of inferring it (only OBJECT may override)
    """

    name: str
    order: int = 0
    key_generator: KeyGenerator | None = None
    kind: FieldKind | None = None


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Resolved description of one tagged field.

    ``value_type`` is the type a stored value is unmarshalled into: the map
    value type for MAP, the element type for NAME_KEYED_LIST, the declared
    field type otherwise.
    """

    attribute: str
    tuple_name: str
    order: int
    kind: FieldKind
    value_type: Any
    key_generator: KeyGenerator | None = None


@dataclass(frozen=True, slots=True)
class TupleEntity:
    """Tuple metadata attached to a registered configuration class."""

    rule_type: str
    fields: tuple[FieldDescriptor, ...] = ()
    singleton_item: str | None = None
    is_global: bool = False

    @property
    def is_singleton(self) -> bool:
        """Whether the whole object is stored as one tuple."""
        return self.is_global or self.singleton_item is not None

    @property
    def singleton_path(self) -> str | None:
        """Fixed path of a global singleton (namespaced ones resolve via their schema)."""
        return get_global_rule_path(self.rule_type) if self.is_global else None


def get_tuple_entity(config_type: type[Any]) -> TupleEntity | None:
    """Return the TupleEntity registered on exactly this class, if any.

    Not inherited: a subclass of a registered configuration must register
    itself to take part in tuple conversion.
    """
    entity = vars(config_type).get(_ENTITY_ATTRIBUTE)
    return entity if isinstance(entity, TupleEntity) else None


def tuple_entity(rule_type: str, *, singleton_item: str | None = None) -> Callable[[C], C]:
    """Register a configuration class for tuple conversion.

    Args:
        rule_type: Rule type identifier (global rule name for GlobalRuleConfiguration)
        singleton_item: Store the whole object at this unique item of the rule root

    Raises:
        DescriptorDefinitionError: If the class or its tagged fields are malformed
    """

    def decorator(cls: C) -> C:
        if not (isinstance(cls, type) and issubclass(cls, RuleConfiguration)):
            raise DescriptorDefinitionError(f"@tuple_entity requires a RuleConfiguration subclass, got {cls!r}")
        setattr(cls, _ENTITY_ATTRIBUTE, _build_entity(cls, rule_type, singleton_item))
        return cls

    return decorator


def _build_entity(cls: type[RuleConfiguration], rule_type: str, singleton_item: str | None) -> TupleEntity:
    try:
        require_segment(rule_type, "rule type")
    except ValueError as e:
        raise DescriptorDefinitionError(f"{cls.__name__}: {e}") from e

    if issubclass(cls, GlobalRuleConfiguration):
        if singleton_item is not None:
            raise DescriptorDefinitionError(f"{cls.__name__}: global rules are stored at /rules/{rule_type}; singleton_item is not allowed")
        return TupleEntity(rule_type=rule_type, is_global=True)
    if singleton_item is not None:
        return TupleEntity(rule_type=rule_type, singleton_item=singleton_item)
    return TupleEntity(rule_type=rule_type, fields=build_field_descriptors(cls))


def build_field_descriptors(cls: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    """Build the ordered descriptor table of a model's tagged fields.

    Raises:
        DescriptorDefinitionError: On duplicate tuple names or a marker that
            does not fit its field's annotation
    """
    descriptors: list[FieldDescriptor] = []
    seen: dict[str, str] = {}
    for attribute, field_info in cls.model_fields.items():
        markers = [each for each in field_info.metadata if isinstance(each, TupleField)]
        if not markers:
            continue
        if len(markers) > 1:
            raise DescriptorDefinitionError(f"{cls.__name__}.{attribute}: more than one TupleField marker")
        marker = markers[0]
        if marker.name in seen:
            raise DescriptorDefinitionError(f"{cls.__name__}: tuple name '{marker.name}' used by both '{seen[marker.name]}' and '{attribute}'")
        seen[marker.name] = attribute
        kind, value_type = _resolve_kind(cls, attribute, field_info.annotation, marker)
        descriptors.append(
            FieldDescriptor(
                attribute=attribute,
                tuple_name=marker.name,
                order=marker.order,
                kind=kind,
                value_type=value_type,
                key_generator=marker.key_generator,
            )
        )
    # sorted() is stable: equal orders keep declaration order
    return tuple(sorted(descriptors, key=lambda each: each.order))


def _strip_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members = [each for each in typing.get_args(annotation) if each is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _infer_kind(annotation: Any) -> tuple[FieldKind, Any]:
    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)
    bare = annotation if isinstance(annotation, type) else None
    if bare in _MAPPING_ORIGINS or origin in _MAPPING_ORIGINS:
        return FieldKind.MAP, args[1] if len(args) == 2 else Any
    if bare in _COLLECTION_ORIGINS or origin in _COLLECTION_ORIGINS:
        return FieldKind.LIST, annotation
    # bool before int: bool is an int subclass
    if annotation is bool:
        return FieldKind.BOOL, bool
    if annotation is int:
        return FieldKind.INT, int
    if annotation is str:
        return FieldKind.STRING, str
    return FieldKind.OBJECT, annotation


def _resolve_kind(cls: type, attribute: str, annotation: Any, marker: TupleField) -> tuple[FieldKind, Any]:
    declared = _strip_optional(annotation)
    kind, value_type = _infer_kind(declared)
    where = f"{cls.__name__}.{attribute}"

    if marker.key_generator is not None:
        if kind is not FieldKind.LIST:
            raise DescriptorDefinitionError(f"{where}: key_generator requires a collection field, got {declared!r}")
        args = typing.get_args(declared)
        return FieldKind.NAME_KEYED_LIST, args[0] if args else Any

    if marker.kind is not None and marker.kind is not kind:
        if marker.kind is not FieldKind.OBJECT:
            raise DescriptorDefinitionError(f"{where}: cannot declare kind {marker.kind} on {declared!r}")
        return FieldKind.OBJECT, declared
    return kind, value_type
