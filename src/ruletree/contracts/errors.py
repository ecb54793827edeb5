"""Exception hierarchy for tuple swapping.

Absence is never an error here: an untagged type or a rule type with no
tuples under its root is reported as ``None`` / ``[]`` by the engine.
"""


class RuleTreeError(Exception):
    """Base class for all ruletree errors."""


class SchemaResolutionError(RuleTreeError):
    """Raised when a rule type cannot be wired to its node path schema.

    This occurs when:
    - No RuleNodePathProvider is registered for the rule type
    - Two providers claim the same rule type
    - The target configuration type cannot be default-constructed

    Indicates a packaging/wiring defect. Callers must not retry.
    """


class ValueFormatError(RuleTreeError):
    """Raised when a tuple value cannot be turned into the declared type.

    Decoding stops at the first malformed value. A single corrupted field
    most likely means the whole snapshot is corrupted, so nothing is
    coerced to a default and nothing is skipped.

    Attributes:
        path: Tuple path that carried the bad value (None when not tuple-bound)
        value: The offending raw value
    """

    def __init__(self, message: str, *, path: str | None = None, value: str | None = None) -> None:
        self.path = path
        self.value = value
        super().__init__(message if path is None else f"{message} (path: {path})")


class DescriptorDefinitionError(RuleTreeError, TypeError):
    """Raised at registration time when a @tuple_entity class is malformed."""
