"""Game session wiring the ledger, the rules and table geometry together."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from . import rules
from .cards import Card, Position, Zone
from .geometry import Rect
from .history import MoveRecord
from .layout import Layout
from .ledger import Ledger

__all__ = ["TableConfig", "MoveOutcome", "GameSession"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TableConfig:
    """Runtime configuration for table geometry."""

    card_width: float = 182.0
    card_height: float = 282.0
    stock_fan_offset: float = 100.0
    discard_position: Position = field(default_factory=lambda: Position(0.0, 0.0))

    def __post_init__(self) -> None:
        if self.card_width <= 0 or self.card_height <= 0:
            raise ValueError("card dimensions must be positive")


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of :meth:`GameSession.request_move`."""

    decision: rules.MoveDecision
    card: Card | None = None

    @property
    def moved(self) -> bool:
        return self.decision.allowed and self.card is not None


class GameSession:
    """One game from :meth:`start` to :meth:`end`.

    The session is the only owner of its :class:`Ledger`; presentation code
    reads snapshots through :attr:`ledger` queries and mutates state through
    :meth:`request_move` and :meth:`undo`.
    """

    def __init__(self, config: TableConfig | None = None) -> None:
        self.config = config or TableConfig()
        self._ledger: Ledger | None = None

    @property
    def started(self) -> bool:
        return self._ledger is not None

    @property
    def ledger(self) -> Ledger:
        if self._ledger is None:
            raise RuntimeError("game session has not been started")
        return self._ledger

    def start(self, layout: Layout) -> Ledger:
        """Deal ``layout``, fanning the stock cards out horizontally.

        The n-th stock entry is shifted right by ``n * stock_fan_offset``; the
        last stack entry opens the discard pile and keeps its position.
        """

        offset = self.config.stock_fan_offset
        *stock, opening = layout.stack
        fanned = tuple(
            replace(entry, position=entry.position.shifted(dx=idx * offset))
            for idx, entry in enumerate(stock)
        )
        fanned += (opening,)
        self._ledger = Ledger.from_layout(replace(layout, stack=fanned))
        logger.info("session started with %d cards", len(self._ledger))
        return self._ledger

    def end(self) -> None:
        self._ledger = None
        logger.info("session ended")

    def bounds(self, card: Card) -> Rect:
        return Rect.centered(card.position, self.config.card_width, self.config.card_height)

    def overlaps(self, lower: Card, upper: Card) -> bool:
        return self.bounds(lower).intersects(self.bounds(upper))

    def is_occluded(self, card_id: int) -> bool:
        card = self.ledger.get(card_id)
        if card is None:
            return False
        return rules.is_occluded(card, self.ledger.cards_in_zone(card.zone), self.overlaps)

    def playable_cards(self) -> list[Card]:
        """Return the cards a move request would currently accept."""

        return [
            card
            for card in self.ledger.cards()
            if rules.check_move(self.ledger, card.id, self.is_occluded(card.id)).allowed
        ]

    def request_move(self, card_id: int) -> MoveOutcome:
        """Move ``card_id`` onto the discard pile when the rules allow it."""

        decision = rules.check_move(self.ledger, card_id, self.is_occluded(card_id))
        if not decision.allowed:
            return MoveOutcome(decision)
        if not self.ledger.move(card_id, Zone.DISCARD, self.config.discard_position):
            return MoveOutcome(rules.MoveDecision.reject(card_id, rules.RejectReason.NOT_FOUND))
        return MoveOutcome(decision, self.ledger.get(card_id))

    def undo(self) -> MoveRecord | None:
        return self.ledger.undo()
