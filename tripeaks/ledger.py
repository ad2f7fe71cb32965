"""Authoritative card ledger: identities, zones, positions and stacking order."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .cards import Card, Position, Zone
from .history import MoveHistory, MoveRecord
from .layout import Layout

__all__ = ["Ledger"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _CardRecord:
    """Mutable placement of a card; never handed out to callers."""

    id: int
    face: int
    suit: int
    zone: Zone
    position: Position
    order: int

    def snapshot(self) -> Card:
        return Card(
            id=self.id,
            face=self.face,
            suit=self.suit,
            zone=self.zone,
            position=self.position,
            order=self.order,
        )


@dataclass(slots=True)
class Ledger:
    """Single source of truth for every card in a game session.

    The ledger is a mechanism only: :meth:`move` performs no legality checks,
    see :mod:`tripeaks.rules` for the policy.
    """

    _history: MoveHistory = field(default_factory=MoveHistory, init=False, repr=False)
    _cards: dict[int, _CardRecord] = field(default_factory=dict, init=False, repr=False)
    _next_order: int = field(default=0, init=False, repr=False)

    @classmethod
    def from_layout(cls, layout: Layout) -> "Ledger":
        ledger = cls()
        ledger.load(layout)
        return ledger

    def load(self, layout: Layout) -> None:
        """Replace the ledger contents with the cards described by ``layout``.

        Ids run from 0 over the tableau entries, then over the stack entries.
        The last stack entry starts face-up on the discard pile, the rest go to
        the stock. Any previous cards and move history are dropped.
        """

        cards: dict[int, _CardRecord] = {}
        card_id = 0
        for entry in layout.main:
            cards[card_id] = _CardRecord(card_id, entry.face, entry.suit, Zone.MAIN, entry.position, card_id)
            card_id += 1
        last_stack_index = len(layout.stack) - 1
        for idx, entry in enumerate(layout.stack):
            zone = Zone.DISCARD if idx == last_stack_index else Zone.STOCK
            cards[card_id] = _CardRecord(card_id, entry.face, entry.suit, zone, entry.position, card_id)
            card_id += 1

        self._cards = cards
        self._next_order = card_id
        self._history.clear()
        logger.debug(
            "loaded %d cards (%d main, %d stack)", len(cards), len(layout.main), len(layout.stack)
        )

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    def cards(self) -> list[Card]:
        """Return snapshots of every card ordered by id."""

        return [self._cards[card_id].snapshot() for card_id in sorted(self._cards)]

    def get(self, card_id: int) -> Card | None:
        """Return a snapshot of ``card_id`` or ``None`` when it is unknown."""

        record = self._cards.get(card_id)
        return record.snapshot() if record is not None else None

    def cards_in_zone(self, zone: Zone) -> list[Card]:
        """Return snapshots of the cards in ``zone``, bottom of the stack first."""

        records = [record for record in self._cards.values() if record.zone == zone]
        records.sort(key=lambda record: record.order)
        return [record.snapshot() for record in records]

    def top_of(self, zone: Zone) -> Card | None:
        """Return the most recently placed card in ``zone``."""

        top: _CardRecord | None = None
        for record in self._cards.values():
            if record.zone == zone and (top is None or record.order > top.order):
                top = record
        return top.snapshot() if top is not None else None

    def move(self, card_id: int, zone: Zone, position: Position) -> bool:
        """Place ``card_id`` on top of ``zone`` at ``position``.

        Returns ``False`` without touching the ledger or its history when the
        card does not exist.
        """

        record = self._cards.get(card_id)
        if record is None:
            logger.info("move ignored: card %d does not exist", card_id)
            return False

        self._history.push(
            MoveRecord(
                card_id=record.id,
                previous_zone=record.zone,
                previous_position=record.position,
                previous_order=record.order,
            )
        )
        record.zone = zone
        record.position = position
        record.order = self._next_order
        self._next_order += 1
        logger.debug("card %d moved to %s at (%s, %s)", card_id, zone.value, position.x, position.y)
        return True

    def undo(self) -> MoveRecord | None:
        """Revert the most recent move; ``None`` when there is nothing to undo."""

        return self._history.pop_and_restore(self._restore)

    @property
    def history_size(self) -> int:
        return len(self._history)

    def last_move(self) -> MoveRecord | None:
        """Return the record the next :meth:`undo` would consume."""

        return self._history.peek()

    def _restore(self, record: MoveRecord) -> bool:
        target = self._cards.get(record.card_id)
        if target is None:
            return False
        target.zone = record.previous_zone
        target.position = record.previous_position
        target.order = record.previous_order
        logger.debug("card %d restored to %s", record.card_id, record.previous_zone.value)
        return True
