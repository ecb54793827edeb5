# src/ruletree/core/__init__.py
"""Core infrastructure: node paths, descriptors, YAML codec, configuration, logging."""

from ruletree.core.config import RuleTreeSettings, load_settings
from ruletree.core.descriptors import (
    FieldDescriptor,
    TupleEntity,
    TupleField,
    get_tuple_entity,
    tuple_entity,
)
from ruletree.core.logging import configure_logging, get_logger
from ruletree.core.paths import (
    NamedRuleItemNodePath,
    RuleNodePath,
    RuleRootNodePath,
    UniqueRuleItemNodePath,
    get_global_rule_path,
    get_global_rule_version,
    is_global_rule_path,
    split_version,
)
from ruletree.core.yaml_engine import marshal, unmarshal

__all__ = [
    "FieldDescriptor",
    "NamedRuleItemNodePath",
    "RuleNodePath",
    "RuleRootNodePath",
    "RuleTreeSettings",
    "TupleEntity",
    "TupleField",
    "UniqueRuleItemNodePath",
    "configure_logging",
    "get_global_rule_path",
    "get_global_rule_version",
    "get_logger",
    "get_tuple_entity",
    "is_global_rule_path",
    "load_settings",
    "marshal",
    "split_version",
    "tuple_entity",
    "unmarshal",
]
