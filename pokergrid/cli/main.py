"""Typer entry-point wiring for the poker grid CLI."""

from __future__ import annotations

import logging
import random
from statistics import mean
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..layout import DEFAULT_TRIALS, LayoutSearchConfig, search_layout
from ..puzzle import PuzzleState
from ..puzzles import PUZZLES, PuzzleDefinition, get_puzzle
from ..validation import DuplicateCardError, validate_puzzle
from .render import render_puzzle
from .textual import run_textual_app

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )


def _resolve_puzzle(name: str) -> PuzzleDefinition:
    try:
        return get_puzzle(name)
    except KeyError:
        raise typer.BadParameter(
            f"Unknown puzzle '{name}'. Available: {', '.join(sorted(PUZZLES))}."
        ) from None


def _build_state(definition: PuzzleDefinition, *, shuffle: bool, seed: int | None, trials: int) -> PuzzleState:
    try:
        return PuzzleState(
            definition,
            shuffle_cards=shuffle,
            search_config=LayoutSearchConfig(trials=trials, seed=seed),
        )
    except DuplicateCardError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Emit debug logging for evaluation and search."),
) -> None:
    """Poker grid puzzle engine."""

    _configure_logging(verbose)


@app.command()
def show(
    puzzle: str = typer.Option("prototype", help="Name of the puzzle to load."),
    seed: Optional[int] = typer.Option(None, help="Random seed for the layout search (omit for randomness)."),
    trials: int = typer.Option(DEFAULT_TRIALS, min=0, help="Shuffle trials used by the layout search."),
    shuffle: bool = typer.Option(True, "--shuffle/--no-shuffle", help="Shuffle the solved layout first."),
    solution: bool = typer.Option(False, "--solution", help="Show the authored solution instead."),
) -> None:
    """Render the puzzle board with satisfied conditions highlighted."""

    definition = _resolve_puzzle(puzzle)
    state = _build_state(definition, shuffle=shuffle, seed=seed, trials=trials)
    console.print(render_puzzle(state, show_solution=solution, title=f"Poker Grid • {definition.name}"))

    result = state.last_search
    if result is not None and not solution:
        trial = "fallback" if result.trial_index is None else f"trial {result.trial_index + 1}"
        console.print(
            f"[cyan]Layout search[/cyan]: {result.satisfied_count} condition(s) pre-satisfied "
            f"({trial} of {result.trials_run})."
        )


@app.command()
def check(
    puzzle: str = typer.Option("prototype", help="Name of the puzzle to validate."),
) -> None:
    """Validate that a puzzle's solution satisfies all of its conditions."""

    definition = _resolve_puzzle(puzzle)
    is_valid, issues = validate_puzzle(
        definition.solution_grid(), definition.row_conditions, definition.column_conditions
    )
    if is_valid:
        console.print(f"[green]Puzzle '{definition.name}' is valid.[/green]")
        return

    console.print(f"[red]Puzzle '{definition.name}' failed validation:[/red]")
    for issue in issues:
        console.print(f"  • {issue}")
    raise typer.Exit(code=1)


@app.command("search")
def search_cli(
    puzzle: str = typer.Option("prototype", help="Name of the puzzle to shuffle."),
    runs: int = typer.Option(20, min=1, help="Number of independent searches."),
    trials: int = typer.Option(DEFAULT_TRIALS, min=0, help="Shuffle trials per search."),
    seed: int = typer.Option(123, help="Random seed for the experiment."),
) -> None:
    """Compare the layout search against single random placements."""

    definition = _resolve_puzzle(puzzle)
    cards = definition.cards()
    rng = random.Random(seed)
    searched: list[int] = []
    baseline: list[int] = []
    for _ in range(runs):
        best = search_layout(
            cards,
            definition.row_conditions,
            definition.column_conditions,
            rng=rng,
            config=LayoutSearchConfig(trials=trials),
        )
        single = search_layout(
            cards,
            definition.row_conditions,
            definition.column_conditions,
            rng=rng,
            config=LayoutSearchConfig(trials=1),
        )
        searched.append(best.satisfied_count)
        baseline.append(single.satisfied_count)

    table = Table(title="Pre-satisfied Conditions", box=box.SIMPLE_HEAVY)
    table.add_column("Placement", justify="center")
    table.add_column("Mean", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_row(
        f"Search ({trials} trials)",
        f"{mean(searched):.2f}",
        str(min(searched)),
        str(max(searched)),
    )
    table.add_row(
        "Single random",
        f"{mean(baseline):.2f}",
        str(min(baseline)),
        str(max(baseline)),
    )
    console.print(table)
    console.print(f"[cyan]{runs} run(s) simulated.[/cyan]")


@app.command()
def play(
    puzzle: str = typer.Option("prototype", help="Name of the puzzle to play."),
    seed: Optional[int] = typer.Option(None, help="Random seed for the layout search (omit for randomness)."),
    trials: int = typer.Option(DEFAULT_TRIALS, min=0, help="Shuffle trials used by the layout search."),
) -> None:
    """Launch the interactive board."""

    definition = _resolve_puzzle(puzzle)
    state = _build_state(definition, shuffle=True, seed=seed, trials=trials)
    run_textual_app(state)


def main() -> None:
    """Entry-point for ``python -m pokergrid.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
