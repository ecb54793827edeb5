# src/ruletree/rules/readwrite_splitting.py
"""Read/write-splitting rule configuration."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from ruletree.contracts.rule import RuleConfiguration
from ruletree.core.descriptors import TupleField, tuple_entity
from ruletree.core.paths import RuleNodePath
from ruletree.plugins.base import StaticRuleNodePathProvider
from ruletree.rules.common import AlgorithmConfiguration

RULE_TYPE = "readwrite_splitting"


class ReadwriteSplittingDataSourceGroupConfiguration(BaseModel):
    write_data_source_name: str
    read_data_source_names: list[str] = Field(default_factory=list)
    transactional_read_query_strategy: Literal["PRIMARY", "FIXED", "DYNAMIC"] | None = None
    load_balancer_name: str | None = None


@tuple_entity(RULE_TYPE)
class ReadwriteSplittingRuleConfiguration(RuleConfiguration):
    data_source_groups: Annotated[
        dict[str, ReadwriteSplittingDataSourceGroupConfiguration],
        TupleField("data_source_groups", order=0),
    ] = Field(default_factory=dict)
    load_balancers: Annotated[dict[str, AlgorithmConfiguration], TupleField("load_balancers", order=1)] = Field(default_factory=dict)


NODE_PATH_PROVIDER = StaticRuleNodePathProvider(RuleNodePath(RULE_TYPE, named_items=["data_source_groups", "load_balancers"]))
