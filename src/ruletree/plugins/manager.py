# src/ruletree/plugins/manager.py
"""Registry of rule node path schemas.

Uses pluggy for hook-based provider registration. The registry is an
explicit value: build it once at startup, register providers, then hand
it to the swapper engine. It is read-only from then on.
"""

from __future__ import annotations

from typing import Any

import pluggy

from ruletree.contracts.errors import SchemaResolutionError
from ruletree.core.logging import get_logger
from ruletree.core.paths import RuleNodePath
from ruletree.plugins.hookspecs import PROJECT_NAME, RuleTreeNodePathSpec
from ruletree.plugins.protocols import RuleNodePathProvider

logger = get_logger(__name__)


class RuleNodePathRegistry:
    """Resolves rule type identifiers to node path schemas.

    Usage:
        registry = RuleNodePathRegistry()
        registry.register_builtin_rules()

        schema = registry.get_rule_node_path("sharding")
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(RuleTreeNodePathSpec)
        self._providers: dict[str, RuleNodePathProvider] = {}

    def register_builtin_rules(self) -> None:
        """Register the node path providers of all built-in rule types."""
        from ruletree.rules import BuiltinRuleNodePaths

        self.register(BuiltinRuleNodePaths())

    def register(self, plugin: Any) -> None:
        """Register a plugin implementing ``ruletree_get_rule_node_paths``.

        Raises:
            SchemaResolutionError: If two providers claim the same rule type
        """
        self._pm.register(plugin)
        try:
            self._refresh_providers()
        except SchemaResolutionError:
            self._pm.unregister(plugin)
            raise

    def _refresh_providers(self) -> None:
        # Collect everything first, then swap in, so a duplicate leaves the cache untouched
        providers: dict[str, RuleNodePathProvider] = {}
        for batch in self._pm.hook.ruletree_get_rule_node_paths():
            for provider in batch:
                rule_type = provider.rule_type
                if rule_type in providers:
                    raise SchemaResolutionError(
                        f"Duplicate node path provider for rule type '{rule_type}'. "
                        f"Already registered by {type(providers[rule_type]).__name__}"
                    )
                providers[rule_type] = provider
        self._providers = providers
        logger.debug("rule_node_paths_registered", rule_types=sorted(providers))

    def get_rule_types(self) -> list[str]:
        """All registered rule types, sorted."""
        return sorted(self._providers)

    def get_rule_node_path(self, rule_type: str) -> RuleNodePath:
        """Look up the node path schema of a rule type.

        Raises:
            SchemaResolutionError: If no provider is registered for rule_type
        """
        try:
            provider = self._providers[rule_type]
        except KeyError:
            raise SchemaResolutionError(f"No node path provider registered for rule type '{rule_type}'") from None
        return provider.rule_node_path
