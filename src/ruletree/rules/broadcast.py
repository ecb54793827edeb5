# src/ruletree/rules/broadcast.py
"""Broadcast rule configuration: tables replicated to every data source."""

from typing import Annotated

from pydantic import Field

from ruletree.contracts.rule import RuleConfiguration
from ruletree.core.descriptors import TupleField, tuple_entity
from ruletree.core.paths import RuleNodePath
from ruletree.plugins.base import StaticRuleNodePathProvider

RULE_TYPE = "broadcast"


@tuple_entity(RULE_TYPE)
class BroadcastRuleConfiguration(RuleConfiguration):
    tables: Annotated[list[str], TupleField("tables", order=0)] = Field(default_factory=list)


NODE_PATH_PROVIDER = StaticRuleNodePathProvider(RuleNodePath(RULE_TYPE, unique_items=["tables"]))
