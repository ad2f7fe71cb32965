"""Match and visibility rules that gate card moves."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from .cards import Card, Zone, faces_adjacent
from .ledger import Ledger

__all__ = [
    "OverlapTest",
    "ActiveTest",
    "RejectReason",
    "MoveDecision",
    "is_occluded",
    "is_match",
    "check_move",
]

logger = logging.getLogger(__name__)

OverlapTest = Callable[[Card, Card], bool]
ActiveTest = Callable[[Card], bool]


class RejectReason(str, Enum):
    """Why a requested move was refused."""

    NOT_FOUND = "not_found"
    OCCLUDED = "occluded"
    IN_DISCARD = "in_discard"
    NO_MATCH = "no_match"
    INVARIANT_VIOLATION = "invariant_violation"


@dataclass(frozen=True, slots=True)
class MoveDecision:
    """Verdict returned by :func:`check_move`."""

    card_id: int
    allowed: bool
    reason: RejectReason | None = None

    @classmethod
    def allow(cls, card_id: int) -> "MoveDecision":
        return cls(card_id=card_id, allowed=True)

    @classmethod
    def reject(cls, card_id: int, reason: RejectReason) -> "MoveDecision":
        return cls(card_id=card_id, allowed=False, reason=reason)


def _always_active(_card: Card) -> bool:
    return True


def is_occluded(
    card: Card,
    zone_stack: Iterable[Card],
    overlaps: OverlapTest,
    is_active: ActiveTest | None = None,
) -> bool:
    """Return ``True`` when a later, active sibling overlaps ``card``.

    ``zone_stack`` holds the cards sharing ``card``'s zone; only those with a
    greater stacking order are considered. ``overlaps(lower, upper)`` and
    ``is_active`` are supplied by the presentation layer.
    """

    active = is_active or _always_active
    for other in zone_stack:
        if other.id == card.id or other.order <= card.order:
            continue
        if not active(other):
            continue
        if overlaps(card, other):
            return True
    return False


def is_match(ledger: Ledger, card_id: int) -> bool:
    """Return ``True`` when ``card_id`` is one rank away from the discard top."""

    top = ledger.top_of(Zone.DISCARD)
    if top is None:
        logger.warning("match check on card %d with an empty discard pile", card_id)
        return False
    card = ledger.get(card_id)
    if card is None:
        return False
    return faces_adjacent(card.face, top.face)


def check_move(ledger: Ledger, card_id: int, occluded: bool) -> MoveDecision:
    """Decide whether ``card_id`` may move onto the discard pile.

    Stock cards may always be turned over; tableau cards need a rank match with
    the discard top; covered cards and cards already discarded never move.
    """

    card = ledger.get(card_id)
    if card is None:
        logger.info("card %d does not exist", card_id)
        return MoveDecision.reject(card_id, RejectReason.NOT_FOUND)
    if occluded:
        logger.info("card %d is covered and cannot move", card_id)
        return MoveDecision.reject(card_id, RejectReason.OCCLUDED)

    if card.zone == Zone.DISCARD:
        logger.info("card %d is already on the discard pile", card_id)
        return MoveDecision.reject(card_id, RejectReason.IN_DISCARD)
    if card.zone == Zone.STOCK:
        return MoveDecision.allow(card_id)
    if card.zone == Zone.MAIN:
        if ledger.top_of(Zone.DISCARD) is None:
            logger.error("invariant violated: discard pile empty while playing card %d", card_id)
            return MoveDecision.reject(card_id, RejectReason.INVARIANT_VIOLATION)
        if is_match(ledger, card_id):
            return MoveDecision.allow(card_id)
        logger.info("card %d does not match the discard top", card_id)
        return MoveDecision.reject(card_id, RejectReason.NO_MATCH)

    logger.error("invariant violated: card %d is in unexpected zone %r", card_id, card.zone)
    return MoveDecision.reject(card_id, RejectReason.INVARIANT_VIOLATION)
