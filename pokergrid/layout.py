"""Randomised layout search that turns a solved grid into a puzzle."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Sequence, cast

from .cards import Card, format_cards
from .conditions import CardCondition, format_condition, is_condition_satisfied
from .grid import GRID_SIZE, Grid, get_column, place_row_major

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_TRIALS",
    "LayoutSearchConfig",
    "LayoutSearchResult",
    "satisfied_lines",
    "count_satisfied_conditions",
    "search_layout",
    "search",
]

DEFAULT_TRIALS = 100


@dataclass(slots=True)
class LayoutSearchConfig:
    """Configuration values for the layout search."""

    trials: int = DEFAULT_TRIALS
    seed: int | None = None


@dataclass(frozen=True, slots=True)
class LayoutSearchResult:
    """Best layout found by :func:`search_layout` and how it was reached."""

    grid: Grid
    satisfied_count: int
    trial_index: int | None
    trials_run: int


def satisfied_lines(
    layout: Grid,
    row_conditions: Sequence[CardCondition],
    column_conditions: Sequence[CardCondition],
) -> tuple[list[int], list[int]]:
    """Return the row and column indices whose declared condition holds."""

    rows = [
        row
        for row in range(GRID_SIZE)
        if is_condition_satisfied(layout[row], row_conditions[row])
    ]
    columns = [
        column
        for column in range(GRID_SIZE)
        if is_condition_satisfied(get_column(layout, column), column_conditions[column])
    ]
    return rows, columns


def count_satisfied_conditions(
    layout: Grid,
    row_conditions: Sequence[CardCondition],
    column_conditions: Sequence[CardCondition],
) -> int:
    """Return how many of the ten declared conditions ``layout`` satisfies."""

    rows, columns = satisfied_lines(layout, row_conditions, column_conditions)
    return len(rows) + len(columns)


def _shuffler(rng: Any) -> Callable[[list[Card]], None]:
    if hasattr(rng, "shuffle") and callable(rng.shuffle):
        return cast(Callable[[list[Card]], None], rng.shuffle)
    raise TypeError("rng must provide a shuffle(list) method")


def _trace_satisfied(
    layout: Grid,
    rows: Sequence[int],
    columns: Sequence[int],
    row_conditions: Sequence[CardCondition],
    column_conditions: Sequence[CardCondition],
) -> None:
    for row in rows:
        logger.debug(
            "row %d satisfies %s: %s",
            row,
            format_condition(row_conditions[row]),
            format_cards(layout[row]),
        )
    for column in columns:
        logger.debug(
            "column %d satisfies %s: %s",
            column,
            format_condition(column_conditions[column]),
            format_cards(get_column(layout, column)),
        )


def search_layout(
    cards: Sequence[Card],
    row_conditions: Sequence[CardCondition],
    column_conditions: Sequence[CardCondition],
    *,
    rng: Any | None = None,
    config: LayoutSearchConfig | None = None,
) -> LayoutSearchResult:
    """Shuffle ``cards`` into the layout that satisfies the fewest conditions.

    Each trial shuffles the cards, lays them out row-major and counts the
    satisfied row and column conditions. The first layout reaching the lowest
    count wins; later ties do not replace it. When no trial runs at all a single
    random placement is returned.
    """

    if config is None:
        config = LayoutSearchConfig()
    if rng is None:
        rng = random.Random(config.seed)
    shuffle = _shuffler(rng)

    pool = list(cards)
    logger.debug("searching %d trial(s) over %d card(s)", config.trials, len(pool))

    best_layout: Grid | None = None
    best_count: int | None = None
    best_trial: int | None = None
    trials_run = 0

    for trial in range(max(0, config.trials)):
        shuffle(pool)
        candidate = place_row_major(pool)
        rows, columns = satisfied_lines(candidate, row_conditions, column_conditions)
        satisfied = len(rows) + len(columns)
        trials_run += 1

        if logger.isEnabledFor(logging.DEBUG):
            _trace_satisfied(candidate, rows, columns, row_conditions, column_conditions)
            logger.debug("trial %d: %d condition(s) satisfied", trial + 1, satisfied)

        if best_count is None or satisfied < best_count:
            best_layout = candidate
            best_count = satisfied
            best_trial = trial
            logger.debug("trial %d is the new best layout (%d satisfied)", trial + 1, satisfied)

    if best_layout is None or best_count is None:
        logger.info("no trial produced a layout; falling back to a random placement")
        shuffle(pool)
        fallback = place_row_major(pool)
        return LayoutSearchResult(
            grid=fallback,
            satisfied_count=count_satisfied_conditions(fallback, row_conditions, column_conditions),
            trial_index=None,
            trials_run=trials_run,
        )

    logger.info(
        "using layout from trial %d with %d satisfied condition(s)",
        cast(int, best_trial) + 1,
        best_count,
    )
    return LayoutSearchResult(
        grid=best_layout,
        satisfied_count=best_count,
        trial_index=best_trial,
        trials_run=trials_run,
    )


def search(
    cards: Sequence[Card],
    row_conditions: Sequence[CardCondition],
    column_conditions: Sequence[CardCondition],
    *,
    rng: Any | None = None,
    config: LayoutSearchConfig | None = None,
) -> Grid:
    """Return only the grid chosen by :func:`search_layout`."""

    return search_layout(cards, row_conditions, column_conditions, rng=rng, config=config).grid
