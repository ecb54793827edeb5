# src/ruletree/rules/mask.py
"""Data masking rule configuration."""

from typing import Annotated

from pydantic import BaseModel, Field

from ruletree.contracts.rule import RuleConfiguration
from ruletree.core.descriptors import TupleField, tuple_entity
from ruletree.core.paths import RuleNodePath
from ruletree.plugins.base import StaticRuleNodePathProvider
from ruletree.rules.common import AlgorithmConfiguration

RULE_TYPE = "mask"


class MaskColumnRuleConfiguration(BaseModel):
    logic_column: str | None = None
    mask_algorithm: str


class MaskTableRuleConfiguration(BaseModel):
    name: str | None = None
    columns: dict[str, MaskColumnRuleConfiguration] = Field(default_factory=dict)


@tuple_entity(RULE_TYPE)
class MaskRuleConfiguration(RuleConfiguration):
    tables: Annotated[dict[str, MaskTableRuleConfiguration], TupleField("tables", order=0)] = Field(default_factory=dict)
    mask_algorithms: Annotated[dict[str, AlgorithmConfiguration], TupleField("mask_algorithms", order=1)] = Field(default_factory=dict)


NODE_PATH_PROVIDER = StaticRuleNodePathProvider(RuleNodePath(RULE_TYPE, named_items=["tables", "mask_algorithms"]))
