"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Iterable

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card
from ..session import GameSession
from .views import TableView

_SUIT_SYMBOLS = {
    0: ("♣", "green"),
    1: ("♦", "red"),
    2: ("♥", "red"),
    3: ("♠", "cyan"),
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    symbol, color = _SUIT_SYMBOLS.get(card.suit, ("?", "white"))
    return f"[{color}]{card.face_label}{symbol}[/{color}]"


def render_session(
    session: GameSession,
    *,
    playable: Iterable[int] | None = None,
    title: str = "TriPeaks",
) -> RenderableType:
    """Return a Rich panel describing every zone of the session."""

    if playable is None:
        playable = (card.id for card in session.playable_cards())
    view = TableView(
        ledger=session.ledger,
        playable=set(playable),
        card_formatter=format_card,
    )
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")
