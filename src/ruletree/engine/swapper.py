# src/ruletree/engine/swapper.py
"""Tuple swapper engine: rule configuration <-> repository tuples.

One generic algorithm driven by the static descriptor table of each
``@tuple_entity`` class and by the node path schema of its rule type.
The schema is the single source of truth for path shape: every template
the encoder writes through is the template the decoder matches against.

Both directions are pure over their arguments. The engine holds only the
(read-only) registry and settings, so one instance may be shared across
threads.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError

from ruletree.contracts.enums import FieldKind, ScalarParsePolicy
from ruletree.contracts.errors import SchemaResolutionError, ValueFormatError
from ruletree.contracts.rule import RuleConfiguration
from ruletree.contracts.tuples import RepositoryTuple
from ruletree.core import yaml_engine
from ruletree.core.config import RuleTreeSettings
from ruletree.core.descriptors import FieldDescriptor, TupleEntity, get_tuple_entity
from ruletree.core.logging import get_logger
from ruletree.core.paths import RuleNodePath, is_global_rule_path, split_version
from ruletree.plugins.manager import RuleNodePathRegistry

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

logger = get_logger(__name__)

R = TypeVar("R", bound=RuleConfiguration)

# Decimal text as written by the encoder (no underscores, ASCII digits only)
_DECIMAL = re.compile(r"[+-]?[0-9]+")


class TupleSwapperEngine:
    """Swaps rule configurations to repository tuples and back.

    Usage:
        registry = RuleNodePathRegistry()
        registry.register_builtin_rules()
        engine = TupleSwapperEngine(registry)

        tuples = engine.swap_to_tuples(sharding_config)
        restored = engine.swap_to_object(tuples, ShardingRuleConfiguration)
    """

    def __init__(self, registry: RuleNodePathRegistry, settings: RuleTreeSettings | None = None) -> None:
        self._registry = registry
        self._scalar_parse_policy = (settings or RuleTreeSettings()).scalar_parse_policy

    # =========================================================================
    # Encode
    # =========================================================================

    def swap_to_tuples(self, config: RuleConfiguration) -> list[RepositoryTuple]:
        """Swap a rule configuration to repository tuples.

        Fields that are None or empty produce no tuple: absence of a tuple
        means "field at default".

        Args:
            config: Rule configuration (never mutated)

        Returns:
            Tuples in field declaration order; empty if the type is not registered

        Raises:
            SchemaResolutionError: If the rule type has no registered node path schema
            ValueFormatError: If a value cannot be serialized or a generated name is unusable
        """
        entity = get_tuple_entity(type(config))
        if entity is None:
            return []
        if entity.is_singleton:
            return [RepositoryTuple(self._get_singleton_path(entity), yaml_engine.marshal(config))]
        rule_node_path = self._registry.get_rule_node_path(entity.rule_type)
        result: list[RepositoryTuple] = []
        for each in entity.fields:
            value = getattr(config, each.attribute)
            if value is None:
                continue
            result.extend(self._swap_field_to_tuples(rule_node_path, each, value))
        logger.debug("rule_tuples_encoded", rule_type=entity.rule_type, tuple_count=len(result))
        return result

    def _get_singleton_path(self, entity: TupleEntity) -> str:
        if entity.singleton_path is not None:
            return entity.singleton_path
        assert entity.singleton_item is not None
        return self._registry.get_rule_node_path(entity.rule_type).get_unique_item(entity.singleton_item).get_path()

    @staticmethod
    def _swap_field_to_tuples(rule_node_path: RuleNodePath, field: FieldDescriptor, value: Any) -> list[RepositoryTuple]:
        match field.kind:
            case FieldKind.NAME_KEYED_LIST:
                assert field.key_generator is not None
                named_item = rule_node_path.get_named_item(field.tuple_name)
                return [RepositoryTuple(named_item.get_path(field.key_generator(each)), str(each)) for each in value]
            case FieldKind.MAP:
                named_item = rule_node_path.get_named_item(field.tuple_name)
                return [RepositoryTuple(named_item.get_path(str(key)), yaml_engine.marshal(each)) for key, each in value.items()]
            case FieldKind.LIST:
                if not value:
                    return []
                return [RepositoryTuple(rule_node_path.get_unique_item(field.tuple_name).get_path(), yaml_engine.marshal(value))]
            case FieldKind.STRING:
                if not value:
                    return []
                return [RepositoryTuple(rule_node_path.get_unique_item(field.tuple_name).get_path(), value)]
            case FieldKind.BOOL:
                return [RepositoryTuple(rule_node_path.get_unique_item(field.tuple_name).get_path(), "true" if value else "false")]
            case FieldKind.INT:
                return [RepositoryTuple(rule_node_path.get_unique_item(field.tuple_name).get_path(), str(int(value)))]
            case FieldKind.OBJECT:
                return [RepositoryTuple(rule_node_path.get_unique_item(field.tuple_name).get_path(), yaml_engine.marshal(value))]

    # =========================================================================
    # Decode
    # =========================================================================

    def swap_to_object(self, tuples: Iterable[RepositoryTuple], config_type: type[R]) -> R | None:
        """Swap repository tuples to a rule configuration.

        Tuples outside the rule's subtree, and tuples under it that match no
        field, are ignored. When a node carries several ``/versions/<n>``
        children only the highest version is read. Input order does not matter.

        Args:
            tuples: Snapshot of tuples (may contain other rules' tuples)
            config_type: Configuration class to build

        Returns:
            Fully built configuration, or None when config_type is not
            registered or nothing is stored for it

        Raises:
            SchemaResolutionError: If the rule type has no registered schema or
                config_type cannot be default-constructed
            ValueFormatError: If any matched value cannot be parsed into its field
        """
        entity = get_tuple_entity(config_type)
        if entity is None:
            return None
        snapshot = _latest_versions(tuples)
        log = logger.bind(rule_type=entity.rule_type, config_type=config_type.__name__)
        if entity.is_global:
            return self._swap_to_global_singleton(snapshot, config_type, entity, log)
        if entity.is_singleton:
            return self._swap_to_namespaced_singleton(snapshot, config_type, entity, log)
        return self._swap_to_field_mapped(snapshot, config_type, entity, log)

    def _swap_to_global_singleton(self, tuples: list[RepositoryTuple], config_type: type[R], entity: TupleEntity, log: BoundLogger) -> R | None:
        for each in tuples:
            if each.value and is_global_rule_path(entity.rule_type, each.path):
                return self._unmarshal(each, config_type)
        log.debug("rule_configuration_absent")
        return None

    def _swap_to_namespaced_singleton(self, tuples: list[RepositoryTuple], config_type: type[R], entity: TupleEntity, log: BoundLogger) -> R | None:
        assert entity.singleton_item is not None
        rule_node_path = self._registry.get_rule_node_path(entity.rule_type)
        unique_item = rule_node_path.get_unique_item(entity.singleton_item)
        for each in tuples:
            if each.value and unique_item.is_validated_path(each.path):
                return self._unmarshal(each, config_type)
        log.debug("rule_configuration_absent")
        return None

    def _swap_to_field_mapped(self, tuples: list[RepositoryTuple], config_type: type[R], entity: TupleEntity, log: BoundLogger) -> R | None:
        try:
            default = config_type()
        except ValidationError as e:
            raise SchemaResolutionError(f"{config_type.__name__} cannot be default-constructed: {e}") from e
        rule_node_path = self._registry.get_rule_node_path(entity.rule_type)
        valid_tuples = [each for each in tuples if rule_node_path.root.is_validated_path(each.path)]
        if not valid_tuples:
            log.debug("rule_configuration_absent")
            return None

        # Values are collected here and the object is built once at the end
        values: dict[str, Any] = {}
        for each in valid_tuples:
            if not each.value:
                continue
            if not any(self._assign(rule_node_path, field, each, default, values) for field in entity.fields):
                log.debug("rule_tuple_unmatched", path=each.path)

        try:
            result = config_type.model_validate(values)
        except ValidationError as e:
            raise ValueFormatError(f"Decoded values do not form a valid {config_type.__name__}: {e}") from e
        log.debug("rule_configuration_decoded", tuple_count=len(valid_tuples))
        return result

    def _assign(
        self,
        rule_node_path: RuleNodePath,
        field: FieldDescriptor,
        repository_tuple: RepositoryTuple,
        default: RuleConfiguration,
        values: dict[str, Any],
    ) -> bool:
        """Route one tuple into values if it belongs to field. Returns whether it matched.

        Named fields start from a copy of their default on first match, so a
        field no tuple addresses keeps its default untouched.
        """
        if field.kind.is_named:
            name = rule_node_path.get_named_item(field.tuple_name).get_name(repository_tuple.path)
            if name is None:
                return False
            current = getattr(default, field.attribute)
            if field.kind is FieldKind.NAME_KEYED_LIST:
                values.setdefault(field.attribute, list(current or [])).append(repository_tuple.value)
            else:
                values.setdefault(field.attribute, dict(current or {}))[name] = self._unmarshal(repository_tuple, field.value_type)
            return True

        if not rule_node_path.get_unique_item(field.tuple_name).is_validated_path(repository_tuple.path):
            return False
        match field.kind:
            case FieldKind.STRING:
                values[field.attribute] = repository_tuple.value
            case FieldKind.BOOL:
                values[field.attribute] = self._parse_bool(repository_tuple)
            case FieldKind.INT:
                values[field.attribute] = _parse_int(repository_tuple)
            case FieldKind.LIST | FieldKind.OBJECT:
                values[field.attribute] = self._unmarshal(repository_tuple, field.value_type)
        return True

    def _parse_bool(self, repository_tuple: RepositoryTuple) -> bool:
        text = repository_tuple.value.strip().lower()
        if text == "true":
            return True
        if text == "false" or self._scalar_parse_policy is ScalarParsePolicy.LENIENT:
            return False
        raise ValueFormatError(
            f"Expected 'true' or 'false', got {repository_tuple.value!r}",
            path=repository_tuple.path,
            value=repository_tuple.value,
        )

    @staticmethod
    def _unmarshal(repository_tuple: RepositoryTuple, type_: Any) -> Any:
        try:
            return yaml_engine.unmarshal(repository_tuple.value, type_)
        except ValueFormatError as e:
            raise ValueFormatError(str(e), path=repository_tuple.path, value=repository_tuple.value) from e


def _parse_int(repository_tuple: RepositoryTuple) -> int:
    text = repository_tuple.value.strip()
    if not _DECIMAL.fullmatch(text):
        raise ValueFormatError(
            f"Expected an integer, got {repository_tuple.value!r}",
            path=repository_tuple.path,
            value=repository_tuple.value,
        )
    return int(text)


def _latest_versions(tuples: Iterable[RepositoryTuple]) -> list[RepositoryTuple]:
    """Drop every version of a node except the highest.

    A versioned tree keeps one ``<path>/versions/<n>`` child per revision.
    The highest n wins; an unversioned tuple at the same path counts as
    older than any versioned one. Survivors keep their input order.
    """
    snapshot = list(tuples)
    latest: dict[str, int] = {}
    for each in snapshot:
        path, version = split_version(each.path)
        if version is not None and version > latest.get(path, -1):
            latest[path] = version
    result: list[RepositoryTuple] = []
    for each in snapshot:
        path, version = split_version(each.path)
        if path in latest and version != latest[path]:
            continue
        result.append(each)
    return result
