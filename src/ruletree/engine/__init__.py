"""Tuple swapper engine."""

from ruletree.engine.swapper import TupleSwapperEngine

__all__ = ["TupleSwapperEngine"]
