# src/ruletree/plugins/protocols.py
"""Protocols implemented by node path providers."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ruletree.core.paths import RuleNodePath


@runtime_checkable
class RuleNodePathProvider(Protocol):
    """Publishes the node path schema of one rule type.

    ``rule_type`` is the identifier configuration classes declare with
    ``@tuple_entity(rule_type)``.
    """

    rule_type: str

    @property
    def rule_node_path(self) -> "RuleNodePath":
        """Node path schema for rule_type."""
        ...
