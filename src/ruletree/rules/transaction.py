# src/ruletree/rules/transaction.py
"""Cluster-wide transaction settings (global rule at /rules/transaction)."""

from typing import Any, Literal

from pydantic import Field

from ruletree.contracts.rule import GlobalRuleConfiguration
from ruletree.core.descriptors import tuple_entity


@tuple_entity("transaction")
class TransactionRuleConfiguration(GlobalRuleConfiguration):
    default_type: Literal["LOCAL", "XA", "BASE"] = "LOCAL"
    provider_type: str | None = None
    props: dict[str, Any] = Field(default_factory=dict)
