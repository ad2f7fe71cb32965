"""Axis-aligned bounding boxes used for occlusion checks."""

from __future__ import annotations

from dataclasses import dataclass

from .cards import Position


@dataclass(frozen=True, slots=True)
class Rect:
    """Rectangle described by its lower-left corner and size."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def centered(cls, center: Position, width: float, height: float) -> "Rect":
        """Build a box of ``width`` x ``height`` centred on ``center``."""

        return cls(center.x - width / 2, center.y - height / 2, width, height)

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_max(self) -> float:
        return self.y + self.height

    def intersects(self, other: "Rect") -> bool:
        """Return ``True`` when the two boxes overlap; shared edges count."""

        return not (
            self.x_max < other.x
            or other.x_max < self.x
            or self.y_max < other.y
            or other.y_max < self.y
        )
