"""Helpers for the fixed 5x5 card grid."""

from __future__ import annotations

from typing import Final, Iterable, Iterator, List, Optional, Sequence

from .cards import Card

GRID_SIZE: Final[int] = 5
CELL_COUNT: Final[int] = GRID_SIZE * GRID_SIZE

Grid = List[List[Optional[Card]]]
Position = tuple[int, int]


def empty_grid() -> Grid:
    """Return a grid with every cell empty."""

    return [[None for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]


def copy_grid(grid: Sequence[Sequence[Card | None]]) -> Grid:
    return [list(row) for row in grid]


def get_row(grid: Sequence[Sequence[Card | None]], row: int) -> list[Card | None]:
    return list(grid[row])


def get_column(grid: Sequence[Sequence[Card | None]], column: int) -> list[Card | None]:
    return [grid[row][column] for row in range(GRID_SIZE)]


def place_row_major(cards: Sequence[Card]) -> Grid:
    """Lay ``cards`` out row by row; cells beyond the supplied cards stay empty."""

    layout = empty_grid()
    for index, card in enumerate(cards[:CELL_COUNT]):
        layout[index // GRID_SIZE][index % GRID_SIZE] = card
    return layout


def iter_cards(grid: Sequence[Sequence[Card | None]]) -> Iterator[Card]:
    """Yield the cards of ``grid`` in row-major order, skipping empty cells."""

    for row in grid:
        for card in row:
            if card is not None:
                yield card


def flatten(grid: Sequence[Sequence[Card | None]]) -> list[Card]:
    return list(iter_cards(grid))


def grid_from_codes(rows: Iterable[Sequence[str | None]]) -> Grid:
    """Build a grid from rows of card codes; ``None`` marks an empty cell."""

    layout = empty_grid()
    for row_index, row in enumerate(rows):
        for column_index, code in enumerate(row):
            layout[row_index][column_index] = None if code is None else Card.from_code(code)
    return layout


def in_bounds(position: Position) -> bool:
    row, column = position
    return 0 <= row < GRID_SIZE and 0 <= column < GRID_SIZE


def find_duplicate_cards(cards: Iterable[Card]) -> list[Card]:
    """Return every card that appears more than once, in first-repeat order."""

    seen: set[Card] = set()
    duplicates: list[Card] = []
    for card in cards:
        if card in seen and card not in duplicates:
            duplicates.append(card)
        seen.add(card)
    return duplicates
