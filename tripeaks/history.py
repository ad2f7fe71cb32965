"""Undo bookkeeping for card moves."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator

from .cards import Position, Zone

__all__ = ["MoveRecord", "MoveHistory"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """Placement of a card captured right before it was moved."""

    card_id: int
    previous_zone: Zone
    previous_position: Position
    previous_order: int


@dataclass(slots=True)
class MoveHistory:
    """LIFO stack of :class:`MoveRecord` entries, most recent last."""

    _records: list[MoveRecord] = field(default_factory=list, repr=False)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MoveRecord]:
        return iter(tuple(self._records))

    def push(self, record: MoveRecord) -> None:
        self._records.append(record)

    def peek(self) -> MoveRecord | None:
        """Return the record the next undo would consume."""

        return self._records[-1] if self._records else None

    def clear(self) -> None:
        self._records.clear()

    def pop_and_restore(self, restore: Callable[[MoveRecord], bool]) -> MoveRecord | None:
        """Pop the latest record and hand it to ``restore``.

        Returns ``None`` when there is nothing to undo. Otherwise the record is
        consumed and returned so the caller can reflect the restoration. When
        ``restore`` reports an unknown card the record is still discarded.
        """

        if not self._records:
            logger.debug("undo requested with an empty history")
            return None
        record = self._records.pop()
        if not restore(record):
            logger.error("undo record references unknown card %d; skipped restore", record.card_id)
        return record
