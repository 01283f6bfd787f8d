"""Top-level package for the poker grid puzzle engine."""

from . import cards, conditions, grid, layout, puzzle, puzzles, validation

__all__ = [
    "cards",
    "conditions",
    "grid",
    "layout",
    "puzzle",
    "puzzles",
    "validation",
]
