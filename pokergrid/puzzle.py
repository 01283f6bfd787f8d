"""Puzzle state container shared with the presentation layer."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Sequence

from . import conditions
from .cards import Card
from .conditions import CardCondition
from .grid import (
    GRID_SIZE,
    Grid,
    Position,
    copy_grid,
    flatten,
    get_column,
    get_row,
    in_bounds,
)
from .layout import LayoutSearchConfig, LayoutSearchResult, satisfied_lines, search_layout
from .puzzles import PROTOTYPE_PUZZLE, PuzzleDefinition
from .validation import ensure_unique_cards, validate_puzzle

logger = logging.getLogger(__name__)

__all__ = [
    "ConditionReport",
    "PuzzleEventKind",
    "PuzzleEvent",
    "PuzzleState",
    "condition_report",
    "witness_cells",
]


@dataclass(frozen=True, slots=True)
class ConditionReport:
    """Rows and columns of a grid whose declared condition currently holds."""

    satisfied_rows: frozenset[int]
    satisfied_columns: frozenset[int]

    @property
    def total(self) -> int:
        return len(self.satisfied_rows) + len(self.satisfied_columns)

    @property
    def all_satisfied(self) -> bool:
        return self.total == 2 * GRID_SIZE


class PuzzleEventKind(str, Enum):
    """Reasons for which the current grid was replaced."""

    RESET = "reset"
    SHUFFLE = "shuffle"
    MOVE = "move"
    REPLACE = "replace"


@dataclass(frozen=True, slots=True)
class PuzzleEvent:
    """Notification delivered to subscribers after the current grid changes."""

    kind: PuzzleEventKind
    state: "PuzzleState"


Listener = Callable[[PuzzleEvent], None]


def condition_report(
    grid: Grid,
    row_conditions: Sequence[CardCondition],
    column_conditions: Sequence[CardCondition],
) -> ConditionReport:
    """Return which rows and columns of ``grid`` meet their declared condition."""

    rows, columns = satisfied_lines(grid, row_conditions, column_conditions)
    return ConditionReport(satisfied_rows=frozenset(rows), satisfied_columns=frozenset(columns))


def witness_cells(
    grid: Grid,
    row_conditions: Sequence[CardCondition],
    column_conditions: Sequence[CardCondition],
) -> set[Position]:
    """Return grid positions of every card that witnesses a satisfied condition."""

    cells: set[Position] = set()
    for row in range(GRID_SIZE):
        witness = conditions.get_satisfying_cards(row_conditions[row], get_row(grid, row))
        cells.update((row, column) for column in witness)
    for column in range(GRID_SIZE):
        witness = conditions.get_satisfying_cards(column_conditions[column], get_column(grid, column))
        cells.update((row, column) for row in witness)
    return cells


class PuzzleState:
    """Owns the current, initial and solution grids of one puzzle.

    The current grid is only ever replaced wholesale: every operation builds a
    complete new grid, installs it and then notifies subscribers.
    """

    def __init__(
        self,
        definition: PuzzleDefinition = PROTOTYPE_PUZZLE,
        *,
        shuffle_cards: bool = True,
        rng: Any | None = None,
        search_config: LayoutSearchConfig | None = None,
    ) -> None:
        ensure_unique_cards(definition.cards())

        solution = definition.solution_grid()
        self.definition = definition
        self.row_conditions: tuple[CardCondition, ...] = tuple(definition.row_conditions)
        self.column_conditions: tuple[CardCondition, ...] = tuple(definition.column_conditions)

        is_valid, issues = validate_puzzle(solution, self.row_conditions, self.column_conditions)
        if is_valid:
            logger.info("puzzle '%s' validated", definition.name)
        else:
            logger.warning("puzzle '%s' failed validation", definition.name)
            for issue in issues:
                logger.warning("- %s", issue)

        self.search_config = search_config or LayoutSearchConfig()
        if rng is None:
            rng = random.Random(self.search_config.seed)
        self.rng = rng
        self.last_search: LayoutSearchResult | None = None

        self._solution: Grid = solution
        self._initial: Grid = copy_grid(solution)
        self._current: Grid = copy_grid(solution)
        self._listeners: List[Listener] = []

        if shuffle_cards:
            self.shuffle_initial_state()

    # ------------------------------------------------------------------
    # Grid snapshots
    # ------------------------------------------------------------------

    @property
    def current(self) -> Grid:
        return copy_grid(self._current)

    @property
    def initial(self) -> Grid:
        return copy_grid(self._initial)

    @property
    def solution(self) -> Grid:
        return copy_grid(self._solution)

    def row_cells(self, row: int) -> list[Card | None]:
        if not 0 <= row < GRID_SIZE:
            raise IndexError(f"row {row} outside the grid")
        return get_row(self._current, row)

    def column_cells(self, column: int) -> list[Card | None]:
        if not 0 <= column < GRID_SIZE:
            raise IndexError(f"column {column} outside the grid")
        return get_column(self._current, column)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _install(self, grid: Grid, kind: PuzzleEventKind) -> None:
        self._current = grid
        event = PuzzleEvent(kind=kind, state=self)
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def reset_to_initial_state(self) -> None:
        """Discard the in-progress arrangement and restore the initial grid."""

        logger.info("resetting to initial state")
        self._install(copy_grid(self._initial), PuzzleEventKind.RESET)

    def shuffle_initial_state(self) -> LayoutSearchResult:
        """Search for a new starting layout and install it as current and initial."""

        result = search_layout(
            flatten(self._current),
            self.row_conditions,
            self.column_conditions,
            rng=self.rng,
            config=self.search_config,
        )
        self.last_search = result
        self._initial = copy_grid(result.grid)
        self._install(copy_grid(result.grid), PuzzleEventKind.SHUFFLE)
        return result

    def swap_cells(self, first: Position, second: Position) -> None:
        """Exchange the contents of two cells (either may be empty)."""

        for position in (first, second):
            if not in_bounds(position):
                raise IndexError(f"cell {position} outside the grid")
        grid = copy_grid(self._current)
        (r1, c1), (r2, c2) = first, second
        grid[r1][c1], grid[r2][c2] = grid[r2][c2], grid[r1][c1]
        self._install(grid, PuzzleEventKind.MOVE)

    def set_current(self, grid: Sequence[Sequence[Card | None]]) -> None:
        """Replace the current grid with ``grid``."""

        if len(grid) != GRID_SIZE or any(len(row) != GRID_SIZE for row in grid):
            raise ValueError(f"grid must be {GRID_SIZE}x{GRID_SIZE}")
        self._install(copy_grid(grid), PuzzleEventKind.REPLACE)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    @staticmethod
    def is_condition_satisfied(cells: Sequence[Card | None], condition: CardCondition) -> bool:
        return conditions.is_condition_satisfied(cells, condition)

    @staticmethod
    def get_satisfying_cards(condition: CardCondition, cells: Sequence[Card | None]) -> set[int]:
        return conditions.get_satisfying_cards(condition, cells)

    @staticmethod
    def format_condition(condition: CardCondition) -> str:
        return conditions.format_condition(condition)

    def check_all_conditions(self) -> ConditionReport:
        """Evaluate every row and column condition against the current grid."""

        report = condition_report(self._current, self.row_conditions, self.column_conditions)
        logger.debug(
            "satisfied rows %s, columns %s",
            sorted(report.satisfied_rows),
            sorted(report.satisfied_columns),
        )
        return report

    def highlighted_cells(self) -> set[Position]:
        """Return grid positions of every card that witnesses a satisfied condition."""

        return witness_cells(self._current, self.row_conditions, self.column_conditions)

    def is_solved(self) -> bool:
        return self.check_all_conditions().all_satisfied
