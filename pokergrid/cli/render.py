"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Suit
from ..grid import Position
from ..puzzle import PuzzleState, condition_report, witness_cells
from .views import GridView

_SUIT_COLORS = {
    Suit.SPADES: "cyan",
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "magenta",
    Suit.CLUBS: "green",
}


def format_card(card: Card | None, highlight: bool = False) -> str:
    """Return a Rich-rendered label for ``card``; empty cells render as a dot."""

    if card is None:
        return "[dim]·[/dim]"
    color = _SUIT_COLORS.get(card.suit, "white")
    label = f"[{color}]{card.label()}[/{color}]"
    if highlight:
        return f"[bold on dark_green]{label}[/bold on dark_green]"
    return label


def render_puzzle(
    puzzle: PuzzleState,
    *,
    show_solution: bool = False,
    cursor: Position | None = None,
    selected: Position | None = None,
    title: str = "Poker Grid",
) -> RenderableType:
    """Return a Rich panel showing the current grid (or the solution)."""

    grid = puzzle.solution if show_solution else puzzle.current
    view = GridView(
        grid=grid,
        row_conditions=puzzle.row_conditions,
        column_conditions=puzzle.column_conditions,
        report=condition_report(grid, puzzle.row_conditions, puzzle.column_conditions),
        highlights=witness_cells(grid, puzzle.row_conditions, puzzle.column_conditions),
        cell_formatter=format_card,
        cursor=cursor,
        selected=selected,
    )
    if show_solution:
        title = f"{title} (solution)"
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
