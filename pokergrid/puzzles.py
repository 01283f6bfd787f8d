"""Authored puzzle fixtures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Mapping, Sequence

from .cards import Card
from .conditions import CardCondition
from .grid import Grid, copy_grid, flatten, grid_from_codes

__all__ = ["PuzzleDefinition", "PROTOTYPE_PUZZLE", "PUZZLES", "get_puzzle"]


@dataclass(frozen=True, slots=True)
class PuzzleDefinition:
    """A solved layout together with its row and column conditions."""

    name: str
    solution: tuple[tuple[Card | None, ...], ...]
    row_conditions: tuple[CardCondition, ...]
    column_conditions: tuple[CardCondition, ...]

    @classmethod
    def from_codes(
        cls,
        name: str,
        rows: Sequence[Sequence[str | None]],
        row_conditions: Sequence[CardCondition],
        column_conditions: Sequence[CardCondition],
    ) -> "PuzzleDefinition":
        layout = grid_from_codes(rows)
        return cls(
            name=name,
            solution=tuple(tuple(row) for row in layout),
            row_conditions=tuple(row_conditions),
            column_conditions=tuple(column_conditions),
        )

    def solution_grid(self) -> Grid:
        return copy_grid(self.solution)

    def cards(self) -> list[Card]:
        """Return the fixture's cards in row-major order."""

        return flatten(self.solution)


PROTOTYPE_PUZZLE: Final[PuzzleDefinition] = PuzzleDefinition.from_codes(
    "prototype",
    [
        ["AS", "KS", "QS", "JS", "10S"],  # all spades
        ["8S", "8H", "8D", "2H", "3H"],  # three 8s
        ["8C", "KH", "QH", "JH", "4H"],  # royal court
        ["KD", "9H", "9D", "6H", "7H"],  # pair of 9s
        ["10H", "10D", "9C", "6C", "7C"],  # pair of 10s
    ],
    row_conditions=[
        CardCondition.ALL_SAME_SUIT,
        CardCondition.THREE_OF_A_KIND,
        CardCondition.ROYAL_COURT,
        CardCondition.PAIR,
        CardCondition.PAIR,
    ],
    column_conditions=[CardCondition.PAIR] * 5,
)

PUZZLES: Final[Mapping[str, PuzzleDefinition]] = {
    PROTOTYPE_PUZZLE.name: PROTOTYPE_PUZZLE,
}


def get_puzzle(name: str) -> PuzzleDefinition:
    """Return the puzzle registered under ``name``."""

    try:
        return PUZZLES[name]
    except KeyError:
        raise KeyError(f"unknown puzzle '{name}'; choose from {', '.join(sorted(PUZZLES))}") from None
