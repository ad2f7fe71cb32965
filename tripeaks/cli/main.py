"""Typer entry-point wiring for the tripeaks CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..cards import Position
from ..layout import Layout, LayoutError, default_layout, load_layout_file
from ..rules import RejectReason
from ..session import GameSession, TableConfig
from .render import format_card, render_session

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

UNDO_COMMANDS = {"u", "undo"}
QUIT_COMMANDS = {"q", "quit", "exit"}

_REASON_MESSAGES = {
    RejectReason.NOT_FOUND: "No such card.",
    RejectReason.OCCLUDED: "That card is covered and cannot move.",
    RejectReason.IN_DISCARD: "That card is already on the discard pile.",
    RejectReason.NO_MATCH: "That card does not match the discard top.",
    RejectReason.INVARIANT_VIOLATION: "Internal error; the move was rejected.",
}


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine decisions."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )


def _load(layout_path: Path | None) -> Layout:
    try:
        if layout_path is None:
            return default_layout()
        return load_layout_file(layout_path)
    except LayoutError as exc:
        console.print(f"[red]Invalid layout[/red] {exc}")
        raise typer.Exit(code=2) from exc
    except OSError as exc:
        console.print(f"[red]Cannot read layout[/red] {exc}")
        raise typer.Exit(code=2) from exc


def _start_session(
    layout_path: Path | None,
    card_width: float,
    card_height: float,
    fan_offset: float,
) -> GameSession:
    config = TableConfig(
        card_width=card_width,
        card_height=card_height,
        stock_fan_offset=fan_offset,
        discard_position=Position(0.0, 0.0),
    )
    session = GameSession(config)
    session.start(_load(layout_path))
    return session


def apply_command(session: GameSession, command: str) -> bool:
    """Apply one user command to ``session``; return ``False`` to stop playing."""

    token = command.strip().lower()
    if not token:
        return True
    if token in QUIT_COMMANDS:
        return False
    if token in UNDO_COMMANDS:
        record = session.undo()
        if record is None:
            console.print("[dim]Nothing to undo.[/dim]")
        else:
            console.print(f"Card {record.card_id} returned to {record.previous_zone.value}.")
        return True
    try:
        card_id = int(token)
    except ValueError:
        console.print(f"[red]Unknown command[/red] {command.strip()!r}: enter a card id, 'u' or 'q'.")
        return True

    outcome = session.request_move(card_id)
    if outcome.moved and outcome.card is not None:
        console.print(f"Moved {format_card(outcome.card)} (card {card_id}) to the discard pile.")
    elif outcome.decision.reason is not None:
        console.print(f"[yellow]{_REASON_MESSAGES[outcome.decision.reason]}[/yellow]")
    return True


def _run_script(session: GameSession, commands: Iterable[str]) -> None:
    for command in commands:
        if not apply_command(session, command):
            break


@app.command()
def show(
    layout: Optional[Path] = typer.Argument(None, help="Stage JSON file (defaults to the bundled stage)."),
    card_width: float = typer.Option(182.0, min=1.0, help="Card bounding-box width."),
    card_height: float = typer.Option(282.0, min=1.0, help="Card bounding-box height."),
    fan_offset: float = typer.Option(100.0, help="Horizontal spacing between stock cards."),
) -> None:
    """Print the dealt table and the cards that can currently be played."""

    session = _start_session(layout, card_width, card_height, fan_offset)
    try:
        console.print(render_session(session))
    finally:
        session.end()


@app.command()
def play(
    layout: Optional[Path] = typer.Argument(None, help="Stage JSON file (defaults to the bundled stage)."),
    moves: Optional[str] = typer.Option(
        None,
        help="Comma separated commands to run without prompting, e.g. '2,5,u'.",
    ),
    card_width: float = typer.Option(182.0, min=1.0, help="Card bounding-box width."),
    card_height: float = typer.Option(282.0, min=1.0, help="Card bounding-box height."),
    fan_offset: float = typer.Option(100.0, help="Horizontal spacing between stock cards."),
) -> None:
    """Play a stage: enter a card id to discard it, 'u' to undo, 'q' to quit."""

    session = _start_session(layout, card_width, card_height, fan_offset)
    try:
        if moves is not None:
            _run_script(session, moves.split(","))
            console.print(render_session(session))
            return

        while True:
            console.print(render_session(session))
            try:
                command = console.input("[bold]card id / u / q[/bold] > ")
            except EOFError:
                break
            if not apply_command(session, command):
                break
    finally:
        session.end()


def main() -> None:
    """Entry-point for the ``tripeaks`` console script."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
