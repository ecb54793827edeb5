# src/ruletree/plugins/base.py
"""Base implementation for node path providers."""

from dataclasses import dataclass

from ruletree.core.paths import RuleNodePath


@dataclass(frozen=True, slots=True)
class StaticRuleNodePathProvider:
    """Provider publishing a schema built once at import time.

    Example:
        SHARDING = StaticRuleNodePathProvider(
            RuleNodePath("sharding", named_items=["tables"], unique_items=["default_sharding_column"])
        )
    """

    rule_node_path: RuleNodePath

    @property
    def rule_type(self) -> str:
        return self.rule_node_path.root.rule_type
