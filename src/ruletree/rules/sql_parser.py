# src/ruletree/rules/sql_parser.py
"""Cluster-wide SQL parser settings (global rule at /rules/sql_parser)."""

from pydantic import BaseModel, Field

from ruletree.contracts.rule import GlobalRuleConfiguration
from ruletree.core.descriptors import tuple_entity


class CacheOptionConfiguration(BaseModel):
    initial_capacity: int = Field(default=128, ge=0)
    maximum_size: int = Field(default=1024, ge=0)


@tuple_entity("sql_parser")
class SQLParserRuleConfiguration(GlobalRuleConfiguration):
    parse_tree_cache: CacheOptionConfiguration | None = None
    sql_statement_cache: CacheOptionConfiguration | None = None
