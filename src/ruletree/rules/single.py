# src/ruletree/rules/single.py
"""Single-table rule configuration.

Stored whole at ``/rules/single/tables``: the table list is small and is
always rewritten together with the default data source.
"""

from pydantic import Field

from ruletree.contracts.rule import RuleConfiguration
from ruletree.core.descriptors import tuple_entity
from ruletree.core.paths import RuleNodePath
from ruletree.plugins.base import StaticRuleNodePathProvider

RULE_TYPE = "single"


@tuple_entity(RULE_TYPE, singleton_item="tables")
class SingleRuleConfiguration(RuleConfiguration):
    tables: list[str] = Field(default_factory=list)
    default_data_source: str | None = None


NODE_PATH_PROVIDER = StaticRuleNodePathProvider(RuleNodePath(RULE_TYPE, unique_items=["tables"]))
