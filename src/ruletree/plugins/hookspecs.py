# src/ruletree/plugins/hookspecs.py
"""pluggy hook specifications for rule node path providers.

Rule modules implement these hooks to publish the node path schema of the
rule types they own. The registry calls them during registration.

Usage (publishing a provider):
    from ruletree.plugins.hookspecs import hookimpl

    class MyRules:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def ruletree_get_rule_node_paths(self):
            return [MyRuleNodePathProvider()]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from ruletree.plugins.protocols import RuleNodePathProvider

# Project name for pluggy
PROJECT_NAME = "ruletree"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for rule modules to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class RuleTreeNodePathSpec:
    """Hook specifications for node path providers."""

    @hookspec
    def ruletree_get_rule_node_paths(self) -> list["RuleNodePathProvider"]:  # type: ignore[empty-body]
        """Return node path providers.

        Returns:
            List of provider instances, one per rule type
        """
