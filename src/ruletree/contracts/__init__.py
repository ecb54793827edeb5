"""Shared contracts: tuples, enums, errors and rule configuration bases."""

from ruletree.contracts.enums import FieldKind, ScalarParsePolicy
from ruletree.contracts.errors import (
    DescriptorDefinitionError,
    RuleTreeError,
    SchemaResolutionError,
    ValueFormatError,
)
from ruletree.contracts.rule import GlobalRuleConfiguration, RuleConfiguration
from ruletree.contracts.tuples import RepositoryTuple

__all__ = [
    "DescriptorDefinitionError",
    "FieldKind",
    "GlobalRuleConfiguration",
    "RepositoryTuple",
    "RuleConfiguration",
    "RuleTreeError",
    "ScalarParsePolicy",
    "SchemaResolutionError",
    "ValueFormatError",
]
