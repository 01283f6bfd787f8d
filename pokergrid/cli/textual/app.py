"""Textual-powered interactive poker grid board."""

from __future__ import annotations

from typing import Callable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from ...grid import GRID_SIZE, Position
from ...puzzle import PuzzleEvent, PuzzleEventKind, PuzzleState
from ..render import render_puzzle

MAX_EVENT_LINES = 14

_EVENT_MESSAGES = {
    PuzzleEventKind.RESET: "[yellow]Board reset to the starting layout.[/yellow]",
    PuzzleEventKind.SHUFFLE: "[cyan]New starting layout shuffled.[/cyan]",
    PuzzleEventKind.MOVE: "Cards swapped.",
    PuzzleEventKind.REPLACE: "Board replaced.",
}


class EventLog(Static):
    """Simple rolling log rendered inside a panel."""

    lines: reactive[tuple[str, ...]] = reactive((), init=False)

    def on_mount(self) -> None:  # pragma: no cover - widget lifecycle glue
        self._refresh()

    def add(self, message: str) -> None:
        log = list(self.lines)
        log.append(message)
        self.lines = tuple(log[-MAX_EVENT_LINES:])

    def watch_lines(self, value: tuple[str, ...]) -> None:
        self._refresh(value)

    def _refresh(self, lines: tuple[str, ...] | None = None) -> None:
        content = Table.grid(padding=(0, 1))
        content.expand = True
        content.add_column(justify="left")
        rows = lines if lines is not None else self.lines
        if rows:
            for line in rows:
                content.add_row(Text.from_markup(line))
        else:
            content.add_row(Text.from_markup("[dim]Event log will appear here[/dim]"))
        self.update(Panel(content, title="Events", border_style="magenta"))


class BoardPanel(Static):
    """Shows the grid for the current cursor and selection."""


class PokerGridApp(App):
    """Interactive board: move the cursor, pick two cells and swap them."""

    CSS = """
    Screen {
        layout: vertical;
    }

    #main {
        layout: horizontal;
        height: 1fr;
    }

    BoardPanel {
        width: 2fr;
        padding: 0 1;
    }

    EventLog {
        width: 1fr;
        min-height: 6;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("up", "move(-1, 0)", "Up", show=False),
        Binding("down", "move(1, 0)", "Down", show=False),
        Binding("left", "move(0, -1)", "Left", show=False),
        Binding("right", "move(0, 1)", "Right", show=False),
        Binding("space", "select", "Pick / swap"),
        Binding("r", "reset", "Reset"),
        Binding("s", "shuffle", "Reshuffle"),
        Binding("v", "toggle_solution", "Solution"),
    ]

    def __init__(self, state: PuzzleState) -> None:
        super().__init__()
        self.puzzle = state
        self.cursor_cell: Position = (0, 0)
        self.selected_cell: Position | None = None
        self.solution_visible = False
        self.board: BoardPanel | None = None
        self.event_log: EventLog | None = None
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        self.board = BoardPanel()
        self.event_log = EventLog()
        yield Horizontal(self.board, self.event_log, id="main")
        yield Footer()

    def on_mount(self) -> None:  # pragma: no cover - widget lifecycle glue
        self._unsubscribe = self.puzzle.subscribe(self._on_state_changed)
        self._refresh_board()

    def on_unmount(self) -> None:  # pragma: no cover - widget lifecycle glue
        if self._unsubscribe is not None:
            self._unsubscribe()

    def _on_state_changed(self, event: PuzzleEvent) -> None:
        if self.event_log is not None:
            self.event_log.add(_EVENT_MESSAGES[event.kind])
            if event.state.is_solved():
                self.event_log.add("[bold green]All conditions satisfied![/bold green]")
        self._refresh_board()

    def _refresh_board(self) -> None:
        if self.board is None:
            return
        self.board.update(
            render_puzzle(
                self.puzzle,
                show_solution=self.solution_visible,
                cursor=None if self.solution_visible else self.cursor_cell,
                selected=None if self.solution_visible else self.selected_cell,
                title=f"Poker Grid • {self.puzzle.definition.name}",
            )
        )

    def action_move(self, d_row: int, d_column: int) -> None:
        row, column = self.cursor_cell
        self.cursor_cell = ((row + d_row) % GRID_SIZE, (column + d_column) % GRID_SIZE)
        self._refresh_board()

    def action_select(self) -> None:
        if self.solution_visible:
            return
        if self.selected_cell is None:
            self.selected_cell = self.cursor_cell
            self._refresh_board()
            return
        first, self.selected_cell = self.selected_cell, None
        if first == self.cursor_cell:
            self._refresh_board()
            return
        self.puzzle.swap_cells(first, self.cursor_cell)

    def action_reset(self) -> None:
        self.selected_cell = None
        self.puzzle.reset_to_initial_state()

    def action_shuffle(self) -> None:
        self.selected_cell = None
        self.puzzle.shuffle_initial_state()

    def action_toggle_solution(self) -> None:
        self.solution_visible = not self.solution_visible
        self._refresh_board()


def run_textual_app(state: PuzzleState) -> None:
    """Launch the Textual UI."""

    app = PokerGridApp(state)
    app.run()
