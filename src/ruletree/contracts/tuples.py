"""The wire unit exchanged with the coordination tree."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RepositoryTuple:
    """One leaf of configuration state.

    Attributes:
        path: '/'-delimited position in the coordination tree
        value: Raw scalar text or a YAML document
    """

    path: str
    value: str
