"""Top-level package for the tripeaks card-matching engine."""

from . import cards, geometry, history, layout, ledger, rules, session

__all__ = [
    "cards",
    "geometry",
    "history",
    "layout",
    "ledger",
    "rules",
    "session",
]
