# tests/fixtures/rules.py
"""Fixture rule configurations covering every field kind.

Registered under the rule type "fixture" through FixtureRuleNodePaths, so
tests exercise the engine with a schema of their own instead of the
built-in rules.
"""

from typing import Annotated, Any

from pydantic import BaseModel, Field

from ruletree.contracts import RuleConfiguration
from ruletree.core.descriptors import TupleField, tuple_entity
from ruletree.core.paths import RuleNodePath
from ruletree.plugins.base import StaticRuleNodePathProvider
from ruletree.plugins.hookspecs import hookimpl
from ruletree.plugins.protocols import RuleNodePathProvider


class FixtureEntry(BaseModel):
    target: str
    weight: int = 1


def prefix_name(value: Any) -> str:
    """Name an element by the text before its first ':'."""
    return str(value).split(":", 1)[0]


@tuple_entity("fixture")
class FixtureRuleConfiguration(RuleConfiguration):
    groups: Annotated[list[str], TupleField("groups", order=0, key_generator=prefix_name)] = Field(default_factory=list)
    entries: Annotated[dict[str, FixtureEntry], TupleField("entries", order=1)] = Field(default_factory=dict)
    labels: Annotated[list[str], TupleField("labels", order=2)] = Field(default_factory=list)
    description: Annotated[str | None, TupleField("description", order=3)] = None
    enabled: Annotated[bool | None, TupleField("enabled", order=4)] = None
    max_connections: Annotated[int | None, TupleField("max_connections", order=5)] = None
    retention: Annotated[FixtureEntry | None, TupleField("retention", order=6)] = None
    untagged: str | None = None


@tuple_entity("fixture_raw")
class RawElementRuleConfiguration(RuleConfiguration):
    """Name-keyed list of non-string elements (encode stringifies, decode keeps text)."""

    ports: Annotated[list[Any], TupleField("ports", key_generator=lambda port: f"port_{port}")] = Field(default_factory=list)


@tuple_entity("fixture_required")
class RequiredFieldRuleConfiguration(RuleConfiguration):
    """Cannot be default-constructed."""

    owner: Annotated[str, TupleField("owner")]


@tuple_entity("fixture_tags")
class TagSetRuleConfiguration(RuleConfiguration):
    """List field backed by an unordered set."""

    tags: Annotated[set[str], TupleField("tags")] = Field(default_factory=set)


@tuple_entity("unregistered")
class UnregisteredRuleConfiguration(RuleConfiguration):
    """Tagged, but no provider publishes its schema."""

    name: Annotated[str | None, TupleField("name")] = None


class UntaggedRuleConfiguration(RuleConfiguration):
    name: str | None = None


FIXTURE_PROVIDERS: list[RuleNodePathProvider] = [
    StaticRuleNodePathProvider(
        RuleNodePath(
            "fixture",
            named_items=["groups", "entries"],
            unique_items=["labels", "description", "enabled", "max_connections", "retention"],
        )
    ),
    StaticRuleNodePathProvider(RuleNodePath("fixture_raw", named_items=["ports"])),
    StaticRuleNodePathProvider(RuleNodePath("fixture_required", unique_items=["owner"])),
    StaticRuleNodePathProvider(RuleNodePath("fixture_tags", unique_items=["tags"])),
]


class FixtureRuleNodePaths:
    """pluggy plugin publishing the fixture schemas."""

    @hookimpl
    def ruletree_get_rule_node_paths(self) -> list[RuleNodePathProvider]:
        return list(FIXTURE_PROVIDERS)
