# src/ruletree/rules/sharding.py
"""Sharding rule configuration.

Tables, algorithms and generators are spread across named items so that a
change to one table rewrites one node. Binding table groups are stored one
node per group, named by ``binding_table_name``.
"""

from typing import Annotated

from pydantic import BaseModel, Field

from ruletree.contracts.rule import RuleConfiguration
from ruletree.core.descriptors import TupleField, tuple_entity
from ruletree.core.paths import RuleNodePath
from ruletree.plugins.base import StaticRuleNodePathProvider
from ruletree.rules.common import AlgorithmConfiguration

RULE_TYPE = "sharding"


class StandardShardingStrategyConfiguration(BaseModel):
    sharding_column: str | None = None
    sharding_algorithm_name: str


class ComplexShardingStrategyConfiguration(BaseModel):
    sharding_columns: str
    sharding_algorithm_name: str


class HintShardingStrategyConfiguration(BaseModel):
    sharding_algorithm_name: str


class NoneShardingStrategyConfiguration(BaseModel):
    pass


class ShardingStrategyConfiguration(BaseModel):
    """Exactly one of the strategy shapes is expected to be set."""

    standard: StandardShardingStrategyConfiguration | None = None
    complex: ComplexShardingStrategyConfiguration | None = None
    hint: HintShardingStrategyConfiguration | None = None
    none: NoneShardingStrategyConfiguration | None = None


class KeyGenerateStrategyConfiguration(BaseModel):
    column: str
    key_generator_name: str


class AuditStrategyConfiguration(BaseModel):
    auditor_names: list[str] = Field(default_factory=list)
    allow_hint_disable: bool = True


class ShardingTableRuleConfiguration(BaseModel):
    logic_table: str | None = None
    actual_data_nodes: str | None = None
    database_strategy: ShardingStrategyConfiguration | None = None
    table_strategy: ShardingStrategyConfiguration | None = None
    key_generate_strategy: KeyGenerateStrategyConfiguration | None = None
    audit_strategy: AuditStrategyConfiguration | None = None


class ShardingAutoTableRuleConfiguration(BaseModel):
    logic_table: str | None = None
    actual_data_sources: str | None = None
    sharding_strategy: ShardingStrategyConfiguration | None = None
    key_generate_strategy: KeyGenerateStrategyConfiguration | None = None
    audit_strategy: AuditStrategyConfiguration | None = None


def binding_table_name(binding_group: str) -> str:
    """Node name of a binding table group.

    ``"order_group:t_order,t_order_item"`` is named ``order_group``; an
    unnamed group ``"t_order, t_order_item"`` is named by its table list
    with whitespace removed.
    """
    if ":" in binding_group:
        return binding_group.split(":", 1)[0].strip()
    return "".join(binding_group.split())


@tuple_entity(RULE_TYPE)
class ShardingRuleConfiguration(RuleConfiguration):
    tables: Annotated[dict[str, ShardingTableRuleConfiguration], TupleField("tables", order=0)] = Field(default_factory=dict)
    auto_tables: Annotated[dict[str, ShardingAutoTableRuleConfiguration], TupleField("auto_tables", order=1)] = Field(default_factory=dict)
    binding_tables: Annotated[list[str], TupleField("binding_tables", order=2, key_generator=binding_table_name)] = Field(default_factory=list)
    default_database_strategy: Annotated[ShardingStrategyConfiguration | None, TupleField("default_database_strategy", order=3)] = None
    default_table_strategy: Annotated[ShardingStrategyConfiguration | None, TupleField("default_table_strategy", order=4)] = None
    default_key_generate_strategy: Annotated[KeyGenerateStrategyConfiguration | None, TupleField("default_key_generate_strategy", order=5)] = None
    default_audit_strategy: Annotated[AuditStrategyConfiguration | None, TupleField("default_audit_strategy", order=6)] = None
    default_sharding_column: Annotated[str | None, TupleField("default_sharding_column", order=7)] = None
    sharding_algorithms: Annotated[dict[str, AlgorithmConfiguration], TupleField("algorithms", order=8)] = Field(default_factory=dict)
    key_generators: Annotated[dict[str, AlgorithmConfiguration], TupleField("key_generators", order=9)] = Field(default_factory=dict)
    auditors: Annotated[dict[str, AlgorithmConfiguration], TupleField("auditors", order=10)] = Field(default_factory=dict)


NODE_PATH_PROVIDER = StaticRuleNodePathProvider(
    RuleNodePath(
        RULE_TYPE,
        named_items=["tables", "auto_tables", "binding_tables", "algorithms", "key_generators", "auditors"],
        unique_items=[
            "default_database_strategy",
            "default_table_strategy",
            "default_key_generate_strategy",
            "default_audit_strategy",
            "default_sharding_column",
        ],
    )
)
