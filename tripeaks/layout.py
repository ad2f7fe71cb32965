"""Parsing and validation of stage layout documents.

A stage document lists the tableau cards under ``Playfield`` and the reserve
pile under ``Stack``::

    {
        "Playfield": [{"CardFace": 12, "CardSuit": 0, "Position": {"x": 250, "y": 1000}}],
        "Stack": [{"CardFace": 2, "CardSuit": 0, "Position": {"x": 0, "y": 0}}]
    }
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Mapping, Sequence

from .cards import MAX_FACE, MAX_SUIT, Position

__all__ = [
    "MAIN_KEY",
    "STACK_KEY",
    "LayoutEntry",
    "Layout",
    "LayoutError",
    "LayoutResult",
    "parse_layout",
    "try_parse_layout",
    "load_layout_file",
    "default_layout",
]

MAIN_KEY = "Playfield"
STACK_KEY = "Stack"
_FACE_KEY = "CardFace"
_SUIT_KEY = "CardSuit"
_POSITION_KEY = "Position"


class LayoutError(ValueError):
    """Raised when a stage document is missing or has invalid fields."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


@dataclass(frozen=True, slots=True)
class LayoutEntry:
    """Single card description from a stage document."""

    face: int
    suit: int
    position: Position


@dataclass(frozen=True, slots=True)
class Layout:
    """Validated initial deal: tableau entries and stack entries in input order."""

    main: tuple[LayoutEntry, ...]
    stack: tuple[LayoutEntry, ...]

    def __post_init__(self) -> None:
        if not self.stack:
            raise LayoutError(STACK_KEY, "needs at least one card for the discard pile")

    @property
    def card_count(self) -> int:
        return len(self.main) + len(self.stack)


@dataclass(frozen=True, slots=True)
class LayoutResult:
    """Outcome of :func:`try_parse_layout`; exactly one field is set."""

    layout: Layout | None = None
    error: LayoutError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _require_int(value: Any, path: str, upper: int) -> int:
    # bool is an int subclass but never a valid face or suit
    if isinstance(value, bool) or not isinstance(value, int):
        raise LayoutError(path, f"expected an integer, got {value!r}")
    if not 0 <= value <= upper:
        raise LayoutError(path, f"{value} is outside 0..{upper}")
    return value


def _require_number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LayoutError(path, f"expected a number, got {value!r}")
    if not math.isfinite(value):
        raise LayoutError(path, "expected a finite number")
    return float(value)


def _parse_entry(raw: Any, path: str) -> LayoutEntry:
    if not isinstance(raw, Mapping):
        raise LayoutError(path, "expected an object")
    for key in (_FACE_KEY, _SUIT_KEY, _POSITION_KEY):
        if key not in raw:
            raise LayoutError(f"{path}.{key}", "missing field")
    face = _require_int(raw[_FACE_KEY], f"{path}.{_FACE_KEY}", MAX_FACE)
    suit = _require_int(raw[_SUIT_KEY], f"{path}.{_SUIT_KEY}", MAX_SUIT)
    raw_position = raw[_POSITION_KEY]
    position_path = f"{path}.{_POSITION_KEY}"
    if not isinstance(raw_position, Mapping):
        raise LayoutError(position_path, "expected an object with x and y")
    for axis in ("x", "y"):
        if axis not in raw_position:
            raise LayoutError(f"{position_path}.{axis}", "missing field")
    position = Position(
        _require_number(raw_position["x"], f"{position_path}.x"),
        _require_number(raw_position["y"], f"{position_path}.y"),
    )
    return LayoutEntry(face=face, suit=suit, position=position)


def _parse_entries(document: Mapping[str, Any], key: str) -> tuple[LayoutEntry, ...]:
    if key not in document:
        raise LayoutError(key, "missing list")
    raw_entries = document[key]
    if isinstance(raw_entries, (str, bytes)) or not isinstance(raw_entries, Sequence):
        raise LayoutError(key, "expected a list")
    return tuple(_parse_entry(raw, f"{key}[{idx}]") for idx, raw in enumerate(raw_entries))


def parse_layout(document: Any) -> Layout:
    """Validate ``document`` and return a :class:`Layout`.

    Raises :class:`LayoutError` naming the first offending field. The stack
    must hold at least one entry because its last entry seeds the discard pile.
    """

    if not isinstance(document, Mapping):
        raise LayoutError("$", "expected a JSON object")
    main = _parse_entries(document, MAIN_KEY)
    stack = _parse_entries(document, STACK_KEY)
    return Layout(main=main, stack=stack)


def try_parse_layout(document: Any) -> LayoutResult:
    """Result-returning variant of :func:`parse_layout`."""

    try:
        return LayoutResult(layout=parse_layout(document))
    except LayoutError as exc:
        return LayoutResult(error=exc)


def _decode(text: str, source: str) -> Layout:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LayoutError(source, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    return parse_layout(document)


def load_layout_file(path: str | Path) -> Layout:
    """Read and validate the stage document stored at ``path``."""

    file_path = Path(path)
    return _decode(file_path.read_text(encoding="utf-8"), str(file_path))


def default_layout() -> Layout:
    """Return the stage bundled with the package."""

    stage = resources.files("tripeaks") / "configs" / "stage.json"
    text = stage.read_text(encoding="utf-8")
    return _decode(text, "configs/stage.json")
