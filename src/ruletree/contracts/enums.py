"""Closed enumerations shared across the swapper."""

from enum import StrEnum


class FieldKind(StrEnum):
    """Shape of a tagged field, chosen once when its descriptor is built.

    Values:
        STRING: Unique item, raw text passes through verbatim
        BOOL: Unique item, "true"/"false"
        INT: Unique item, decimal text (covers both int and long)
        LIST: Unique item, whole collection as one YAML payload
        MAP: Named items, one tuple per entry keyed by the map key
        NAME_KEYED_LIST: Named items, one tuple per element keyed by a generated name
        OBJECT: Unique item, YAML payload of any other declared type
    """

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    LIST = "list"
    MAP = "map"
    NAME_KEYED_LIST = "name_keyed_list"
    OBJECT = "object"

    @property
    def is_named(self) -> bool:
        """Whether values of this kind are spread across named items."""
        return self in (FieldKind.MAP, FieldKind.NAME_KEYED_LIST)


class ScalarParsePolicy(StrEnum):
    """How boolean tuple values are parsed on decode.

    STRICT rejects anything but "true"/"false" (case-insensitive).
    LENIENT maps anything other than "true" to False.
    """

    STRICT = "strict"
    LENIENT = "lenient"
