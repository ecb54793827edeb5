"""Configuration pieces shared by several rule types."""

from typing import Any

from pydantic import BaseModel, Field


class AlgorithmConfiguration(BaseModel):
    """A named SPI algorithm: its type plus free-form properties.

    Example YAML:
        type: INLINE
        props:
          algorithm-expression: t_order_${order_id % 2}
    """

    type: str
    props: dict[str, Any] = Field(default_factory=dict)
