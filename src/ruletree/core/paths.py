# src/ruletree/core/paths.py
"""Node path schemas for rule configurations.

Every rule type owns a subtree of the coordination tree:

    /rules/<rule_type>                      root
    /rules/<rule_type>/<item>               unique item (whole field value)
    /rules/<rule_type>/<item>/<name>        named item (one entry per name)

Global rules live directly at ``/rules/<name>``.

Predicates accept two decorations that the coordination layer adds when it
persists tuples, so that paths read back from the tree decode the same way
as paths fresh out of the encoder:

- a scope prefix before ``/rules`` (e.g. ``/metadata/foo_db/rules/sharding/...``)
- a ``/versions/<n>`` suffix on item paths

Bookkeeping nodes like ``.../active_version`` match nothing. When several
versions of one node are present, decoders keep the highest (see
``split_version``).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from ruletree.contracts.errors import SchemaResolutionError, ValueFormatError

RULES_NODE = "rules"

_SEGMENT = re.compile(r"^[\w\-]+$")
_ITEM = re.compile(r"^[\w\-]+(?:/[\w\-]+)*$")
_SCOPE_PREFIX = r"^(?:/[^/]+)*?"
_VERSION_SUFFIX = r"(?:/versions/[0-9]+)?$"
_VERSIONED_PATH = re.compile(r"^(.+)/versions/([0-9]+)$")


def require_segment(value: str, what: str) -> str:
    """Return value if it is a single path segment, else raise ValueError."""
    if not _SEGMENT.match(value):
        raise ValueError(f"Invalid {what} {value!r}: must match [\\w-]+")
    return value


class RuleRootNodePath:
    """Root of one rule type's subtree."""

    def __init__(self, rule_type: str) -> None:
        self._rule_type = require_segment(rule_type, "rule type")
        self._path = f"/{RULES_NODE}/{rule_type}"
        self._prefix_pattern = _SCOPE_PREFIX + re.escape(self._path)
        self._pattern = re.compile(self._prefix_pattern + r"(?:/|$)")

    @property
    def rule_type(self) -> str:
        return self._rule_type

    @property
    def path(self) -> str:
        return self._path

    @property
    def prefix_pattern(self) -> str:
        """Regex fragment matching this root, including any scope prefix."""
        return self._prefix_pattern

    def is_validated_path(self, path: str) -> bool:
        """Whether path lies under this root."""
        return self._pattern.match(path) is not None

    def __repr__(self) -> str:
        return f"RuleRootNodePath({self._rule_type!r})"


class UniqueRuleItemNodePath:
    """Fixed path holding the entire value of one field."""

    def __init__(self, root: RuleRootNodePath, item: str) -> None:
        if not _ITEM.match(item):
            raise ValueError(f"Invalid unique item {item!r}")
        self._item = item
        self._path = f"{root.path}/{item}"
        self._pattern = re.compile(root.prefix_pattern + "/" + re.escape(item) + _VERSION_SUFFIX)

    @property
    def item(self) -> str:
        return self._item

    def get_path(self) -> str:
        return self._path

    def is_validated_path(self, path: str) -> bool:
        return self._pattern.match(path) is not None


class NamedRuleItemNodePath:
    """Path template with one variable name segment.

    Example:
        >>> tables = NamedRuleItemNodePath(RuleRootNodePath("encrypt"), "tables")
        >>> tables.get_path("t_user")
        '/rules/encrypt/tables/t_user'
        >>> tables.get_name("/metadata/foo_db/rules/encrypt/tables/t_user/versions/0")
        't_user'
    """

    def __init__(self, root: RuleRootNodePath, item: str) -> None:
        if not _ITEM.match(item):
            raise ValueError(f"Invalid named item {item!r}")
        self._item = item
        self._parent_path = f"{root.path}/{item}"
        self._pattern = re.compile(root.prefix_pattern + "/" + re.escape(item) + r"/([^/]+)" + _VERSION_SUFFIX)

    @property
    def item(self) -> str:
        return self._item

    def get_path(self, name: str) -> str:
        """Build the path for one named entry.

        Raises:
            ValueFormatError: If name is empty or contains '/'
        """
        if not name or "/" in name:
            raise ValueFormatError(f"Invalid node name {name!r} for item '{self._item}'")
        return f"{self._parent_path}/{name}"

    def get_name(self, path: str) -> str | None:
        """Extract the entry name from path, or None if path is not one of ours."""
        matched = self._pattern.match(path)
        return None if matched is None else matched.group(1)


class RuleNodePath:
    """Node path schema of one rule type.

    Immutable after construction. Looking up an item the schema does not
    declare is a wiring defect between a configuration class and its
    provider, so it raises rather than returning None.
    """

    def __init__(
        self,
        rule_type: str,
        *,
        named_items: Iterable[str] = (),
        unique_items: Iterable[str] = (),
    ) -> None:
        self._root = RuleRootNodePath(rule_type)
        self._named_items = {each: NamedRuleItemNodePath(self._root, each) for each in named_items}
        self._unique_items = {each: UniqueRuleItemNodePath(self._root, each) for each in unique_items}
        overlap = self._named_items.keys() & self._unique_items.keys()
        if overlap:
            raise ValueError(f"Items declared both named and unique for rule '{rule_type}': {sorted(overlap)}")

    @property
    def root(self) -> RuleRootNodePath:
        return self._root

    @property
    def named_items(self) -> frozenset[str]:
        return frozenset(self._named_items)

    @property
    def unique_items(self) -> frozenset[str]:
        return frozenset(self._unique_items)

    def get_named_item(self, item: str) -> NamedRuleItemNodePath:
        try:
            return self._named_items[item]
        except KeyError:
            raise SchemaResolutionError(f"Rule '{self._root.rule_type}' declares no named item '{item}'") from None

    def get_unique_item(self, item: str) -> UniqueRuleItemNodePath:
        try:
            return self._unique_items[item]
        except KeyError:
            raise SchemaResolutionError(f"Rule '{self._root.rule_type}' declares no unique item '{item}'") from None


# =============================================================================
# Global rules
# =============================================================================


def _global_rule_pattern(rule_name: str) -> re.Pattern[str]:
    return re.compile(rf"^/{RULES_NODE}/{re.escape(rule_name)}(?:/versions/([0-9]+))?$")


def get_global_rule_path(rule_name: str) -> str:
    """Fixed path of a global rule node."""
    return f"/{RULES_NODE}/{require_segment(rule_name, 'global rule name')}"


def is_global_rule_path(rule_name: str, path: str) -> bool:
    """Whether path designates the node (or one version) of a global rule."""
    return _global_rule_pattern(rule_name).match(path) is not None


def get_global_rule_version(rule_name: str, path: str) -> int | None:
    """Version number carried by a global rule path, None when unversioned or unrelated."""
    matched = _global_rule_pattern(rule_name).match(path)
    if matched is None or matched.group(1) is None:
        return None
    return int(matched.group(1))


def split_version(path: str) -> tuple[str, int | None]:
    """Split a ``/versions/<n>`` suffix off path.

    Example:
        >>> split_version("/rules/sharding/tables/t_order/versions/3")
        ('/rules/sharding/tables/t_order', 3)
        >>> split_version("/rules/sharding/tables/t_order")
        ('/rules/sharding/tables/t_order', None)
    """
    matched = _VERSIONED_PATH.match(path)
    if matched is None:
        return path, None
    return matched.group(1), int(matched.group(2))
