"""Composable view primitives for the poker grid CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence, Set

from rich import box
from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from ..cards import Card
from ..conditions import CardCondition, format_condition
from ..grid import GRID_SIZE, Grid, Position
from ..puzzle import ConditionReport

CellFormatter = Callable[[Card | None, bool], str]


def condition_markup(condition: CardCondition, satisfied: bool) -> str:
    """Return a condition label marked as satisfied or pending."""

    label = format_condition(condition)
    if satisfied:
        return f"[bold green]✓ {label}[/bold green]"
    return f"[dim]{label}[/dim]"


@dataclass(slots=True)
class GridView:
    """Renderable showing the grid with its row and column conditions."""

    grid: Grid
    row_conditions: Sequence[CardCondition]
    column_conditions: Sequence[CardCondition]
    report: ConditionReport
    highlights: Set[Position]
    cell_formatter: CellFormatter
    cursor: Position | None = None
    selected: Position | None = None

    def _cell_markup(self, position: Position) -> str:
        row, column = position
        markup = self.cell_formatter(self.grid[row][column], position in self.highlights)
        if position == self.selected:
            markup = f"[on yellow]{markup}[/on yellow]"
        if position == self.cursor:
            markup = f"[reverse]{markup}[/reverse]"
        return markup

    def render(self) -> RenderableType:
        table = Table(box=box.ROUNDED, show_lines=True, expand=False)
        table.add_column("", justify="left", style="bold")
        for column in range(GRID_SIZE):
            satisfied = column in self.report.satisfied_columns
            table.add_column(
                Text.from_markup(condition_markup(self.column_conditions[column], satisfied)),
                justify="center",
                min_width=6,
            )

        for row in range(GRID_SIZE):
            satisfied = row in self.report.satisfied_rows
            cells = [self._cell_markup((row, column)) for column in range(GRID_SIZE)]
            table.add_row(condition_markup(self.row_conditions[row], satisfied), *cells)

        summary = Text.from_markup(
            f"[cyan]Satisfied[/cyan]: {self.report.total} / {2 * GRID_SIZE}"
            + ("  [bold green]Solved![/bold green]" if self.report.all_satisfied else "")
        )
        return Group(table, summary)
