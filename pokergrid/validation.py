"""Puzzle fixture validation."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .cards import Card
from .conditions import CardCondition, format_condition
from .grid import CELL_COUNT, GRID_SIZE, Grid, find_duplicate_cards, flatten
from .layout import satisfied_lines

logger = logging.getLogger(__name__)

__all__ = ["DuplicateCardError", "ensure_unique_cards", "validate_puzzle"]


class DuplicateCardError(ValueError):
    """Raised when a puzzle fixture contains the same card more than once."""

    def __init__(self, duplicates: Sequence[Card]) -> None:
        self.duplicates = tuple(duplicates)
        labels = ", ".join(card.label() for card in self.duplicates)
        super().__init__(f"puzzle setup contains duplicate cards: {labels}")


def ensure_unique_cards(cards: Iterable[Card]) -> None:
    """Raise :class:`DuplicateCardError` if any card repeats."""

    duplicates = find_duplicate_cards(cards)
    if duplicates:
        for card in duplicates:
            logger.error("duplicate card found in puzzle setup: %s", card.label())
        raise DuplicateCardError(duplicates)


def validate_puzzle(
    cards: Grid,
    row_conditions: Sequence[CardCondition],
    column_conditions: Sequence[CardCondition],
) -> tuple[bool, list[str]]:
    """Check that ``cards`` is a complete solved layout for the declared conditions.

    Returns ``(is_valid, issues)``; ``issues`` lists every problem found.
    """

    issues: list[str] = []
    if len(row_conditions) != GRID_SIZE:
        issues.append(f"expected {GRID_SIZE} row conditions, found {len(row_conditions)}")
    if len(column_conditions) != GRID_SIZE:
        issues.append(f"expected {GRID_SIZE} column conditions, found {len(column_conditions)}")
    if len(cards) != GRID_SIZE or any(len(row) != GRID_SIZE for row in cards):
        issues.append(f"grid must be {GRID_SIZE}x{GRID_SIZE}")
    if issues:
        return False, issues

    present = flatten(cards)
    if len(present) != CELL_COUNT:
        issues.append(f"expected {CELL_COUNT} cards, found {len(present)}")
    for card in find_duplicate_cards(present):
        issues.append(f"duplicate card: {card.label()}")

    rows, columns = satisfied_lines(cards, row_conditions, column_conditions)
    for row in range(GRID_SIZE):
        if row not in rows:
            issues.append(f"row {row} does not satisfy {format_condition(row_conditions[row])}")
    for column in range(GRID_SIZE):
        if column not in columns:
            issues.append(
                f"column {column} does not satisfy {format_condition(column_conditions[column])}"
            )

    return not issues, issues
