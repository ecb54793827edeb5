# tests/conftest.py
"""Shared test fixtures.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from ruletree.core.config import RuleTreeSettings
from ruletree.engine import TupleSwapperEngine
from ruletree.plugins import RuleNodePathRegistry
from tests.fixtures.rules import FixtureRuleNodePaths


@pytest.fixture
def registry() -> RuleNodePathRegistry:
    """Registry with built-in rules plus the fixture schemas."""
    result = RuleNodePathRegistry()
    result.register_builtin_rules()
    result.register(FixtureRuleNodePaths())
    return result


@pytest.fixture
def engine(registry: RuleNodePathRegistry) -> TupleSwapperEngine:
    """Engine with the default (strict) scalar parse policy."""
    return TupleSwapperEngine(registry)


@pytest.fixture
def lenient_engine(registry: RuleNodePathRegistry) -> TupleSwapperEngine:
    return TupleSwapperEngine(registry, RuleTreeSettings(scalar_parse_policy="lenient"))


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
