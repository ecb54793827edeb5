"""Node path provider registration (pluggy)."""

from ruletree.plugins.hookspecs import hookimpl
from ruletree.plugins.manager import RuleNodePathRegistry
from ruletree.plugins.protocols import RuleNodePathProvider

__all__ = [
    "RuleNodePathProvider",
    "RuleNodePathRegistry",
    "hookimpl",
]
