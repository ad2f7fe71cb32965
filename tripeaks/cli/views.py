"""Composable view primitives for the tripeaks CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Set

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, Zone
from ..ledger import Ledger

_ZONE_TITLES = {
    Zone.MAIN: "Tableau",
    Zone.STOCK: "Stock",
    Zone.DISCARD: "Discard",
}


@dataclass(slots=True)
class TableView:
    """Renderable summarising the three zones of a ledger."""

    ledger: Ledger
    playable: Set[int]
    card_formatter: Callable[[Card], str]

    def _zone_table(self, zone: Zone) -> Table:
        table = Table(box=box.MINIMAL, expand=True)
        table.add_column("Id", justify="right", style="bold")
        table.add_column("Card", justify="left")
        table.add_column("Position", justify="right")
        table.add_column("", justify="left")

        cards = self.ledger.cards_in_zone(zone)
        if zone == Zone.DISCARD:
            # newest first so the top card leads the pile
            cards = list(reversed(cards))
        for idx, card in enumerate(cards):
            marker = ""
            if card.id in self.playable:
                marker = "[bold green]playable[/bold green]"
            elif zone == Zone.DISCARD and idx == 0:
                marker = "[yellow]top[/yellow]"
            table.add_row(
                str(card.id),
                self.card_formatter(card),
                f"{card.position.x:g}, {card.position.y:g}",
                marker,
            )
        if not cards:
            table.add_row("", "—", "", "")
        return table

    def _history_panel(self) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Moves[/cyan]: {self.ledger.history_size}")
        last = self.ledger.last_move()
        if last is not None:
            grid.add_row(f"[cyan]Undo[/cyan]: card {last.card_id} back to {last.previous_zone.value}")
        else:
            grid.add_row("[cyan]Undo[/cyan]: —")
        return Panel(grid, title="History", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        components: list[RenderableType] = [
            Panel(self._zone_table(zone), title=title, box=box.SQUARE, border_style="green")
            for zone, title in _ZONE_TITLES.items()
        ]
        components.append(self._history_panel())
        return Group(*components)
