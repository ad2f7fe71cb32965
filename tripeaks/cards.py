"""Card abstractions and helpers for the tripeaks engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

FACE_LABELS: Final[list[str]] = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
SUIT_NAMES: Final[list[str]] = ["club", "diamond", "heart", "spade"]
RED_SUITS: Final[frozenset[int]] = frozenset({1, 2})
MAX_FACE: Final[int] = len(FACE_LABELS) - 1
MAX_SUIT: Final[int] = len(SUIT_NAMES) - 1


class Zone(str, Enum):
    """Logical areas a card can live in."""

    MAIN = "main"
    STOCK = "stock"
    DISCARD = "discard"


@dataclass(frozen=True, slots=True)
class Position:
    """Presentation-space coordinate of a card."""

    x: float
    y: float

    def shifted(self, dx: float = 0.0, dy: float = 0.0) -> "Position":
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True, slots=True)
class Card:
    """Value snapshot of a card handed out by the ledger."""

    id: int
    face: int
    suit: int
    zone: Zone
    position: Position
    order: int

    @property
    def is_red(self) -> bool:
        """Return ``True`` for diamonds and hearts."""

        return self.suit in RED_SUITS

    @property
    def face_label(self) -> str:
        return FACE_LABELS[self.face]

    @property
    def suit_name(self) -> str:
        return SUIT_NAMES[self.suit]

    def label(self) -> str:
        """Create a short label such as ``10 heart`` for logs."""

        return f"{self.face_label} {self.suit_name}"


def faces_adjacent(first: int, second: int) -> bool:
    """Return ``True`` when two ranks differ by exactly one.

    Ranks are compared on the linear A..K scale, so an ace and a king are not
    adjacent and equal ranks never match.
    """

    return abs(first - second) == 1
