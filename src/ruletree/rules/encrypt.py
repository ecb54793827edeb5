# src/ruletree/rules/encrypt.py
"""Encrypt rule configuration."""

from typing import Annotated

from pydantic import BaseModel, Field

from ruletree.contracts.rule import RuleConfiguration
from ruletree.core.descriptors import TupleField, tuple_entity
from ruletree.core.paths import RuleNodePath
from ruletree.plugins.base import StaticRuleNodePathProvider
from ruletree.rules.common import AlgorithmConfiguration

RULE_TYPE = "encrypt"


class EncryptColumnItemConfiguration(BaseModel):
    name: str
    encryptor_name: str


class EncryptColumnRuleConfiguration(BaseModel):
    name: str | None = None
    cipher: EncryptColumnItemConfiguration
    assisted_query: EncryptColumnItemConfiguration | None = None
    like_query: EncryptColumnItemConfiguration | None = None


class EncryptTableRuleConfiguration(BaseModel):
    name: str | None = None
    columns: dict[str, EncryptColumnRuleConfiguration] = Field(default_factory=dict)


@tuple_entity(RULE_TYPE)
class EncryptRuleConfiguration(RuleConfiguration):
    tables: Annotated[dict[str, EncryptTableRuleConfiguration], TupleField("tables", order=0)] = Field(default_factory=dict)
    encryptors: Annotated[dict[str, AlgorithmConfiguration], TupleField("encryptors", order=1)] = Field(default_factory=dict)


NODE_PATH_PROVIDER = StaticRuleNodePathProvider(RuleNodePath(RULE_TYPE, named_items=["tables", "encryptors"]))
