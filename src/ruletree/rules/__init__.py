# src/ruletree/rules/__init__.py
"""Built-in rule configurations and their node path providers.

Global rules (transaction, sql_parser) are addressed by a fixed global path
and publish no provider.
"""

from ruletree.contracts.rule import RuleConfiguration
from ruletree.plugins.hookspecs import hookimpl
from ruletree.plugins.protocols import RuleNodePathProvider
from ruletree.rules import broadcast, encrypt, mask, readwrite_splitting, sharding, single
from ruletree.rules.broadcast import BroadcastRuleConfiguration
from ruletree.rules.encrypt import EncryptRuleConfiguration
from ruletree.rules.mask import MaskRuleConfiguration
from ruletree.rules.readwrite_splitting import ReadwriteSplittingRuleConfiguration
from ruletree.rules.sharding import ShardingRuleConfiguration
from ruletree.rules.single import SingleRuleConfiguration
from ruletree.rules.sql_parser import SQLParserRuleConfiguration
from ruletree.rules.transaction import TransactionRuleConfiguration

# Rule type -> configuration class, for callers that only know the identifier
BUILTIN_RULE_CONFIGURATIONS: dict[str, type[RuleConfiguration]] = {
    "broadcast": BroadcastRuleConfiguration,
    "encrypt": EncryptRuleConfiguration,
    "mask": MaskRuleConfiguration,
    "readwrite_splitting": ReadwriteSplittingRuleConfiguration,
    "sharding": ShardingRuleConfiguration,
    "single": SingleRuleConfiguration,
    "sql_parser": SQLParserRuleConfiguration,
    "transaction": TransactionRuleConfiguration,
}


class BuiltinRuleNodePaths:
    """pluggy plugin publishing the built-in node path providers."""

    @hookimpl
    def ruletree_get_rule_node_paths(self) -> list[RuleNodePathProvider]:
        return [
            broadcast.NODE_PATH_PROVIDER,
            encrypt.NODE_PATH_PROVIDER,
            mask.NODE_PATH_PROVIDER,
            readwrite_splitting.NODE_PATH_PROVIDER,
            sharding.NODE_PATH_PROVIDER,
            single.NODE_PATH_PROVIDER,
        ]


__all__ = [
    "BUILTIN_RULE_CONFIGURATIONS",
    "BroadcastRuleConfiguration",
    "BuiltinRuleNodePaths",
    "EncryptRuleConfiguration",
    "MaskRuleConfiguration",
    "ReadwriteSplittingRuleConfiguration",
    "SQLParserRuleConfiguration",
    "ShardingRuleConfiguration",
    "SingleRuleConfiguration",
    "TransactionRuleConfiguration",
]
