"""Tests covering the card ledger."""

from __future__ import annotations

import pytest

from tripeaks.cards import Position, Zone
from tripeaks.layout import Layout, LayoutEntry
from tripeaks.ledger import Ledger


def _layout(main_faces: list[int], stack_faces: list[int]) -> Layout:
    return Layout(
        main=tuple(LayoutEntry(face, 0, Position(idx * 10, 0)) for idx, face in enumerate(main_faces)),
        stack=tuple(LayoutEntry(face, 1, Position(0, idx * 10)) for idx, face in enumerate(stack_faces)),
    )


def _placements(ledger: Ledger) -> dict[int, tuple[Zone, Position, int]]:
    return {card.id: (card.zone, card.position, card.order) for card in ledger.cards()}


@pytest.mark.parametrize(("main_count", "stack_count"), [(0, 1), (1, 2), (5, 4), (28, 24)])
def test_load_assigns_ids_and_zones(main_count: int, stack_count: int) -> None:
    ledger = Ledger.from_layout(_layout(list(range(main_count)), [1] * stack_count))

    cards = ledger.cards()
    assert len(ledger) == main_count + stack_count
    assert [card.id for card in cards] == list(range(main_count + stack_count))
    assert all(card.zone == Zone.MAIN for card in cards[:main_count])
    assert all(card.zone == Zone.STOCK for card in cards[main_count:-1])
    assert cards[-1].zone == Zone.DISCARD
    assert [card.face for card in cards[:main_count]] == list(range(main_count))


def test_load_replaces_previous_state() -> None:
    ledger = Ledger.from_layout(_layout([1, 2, 3], [4, 5]))
    ledger.move(0, Zone.DISCARD, Position(0, 0))

    ledger.load(_layout([9], [10]))

    assert len(ledger) == 2
    assert ledger.history_size == 0
    assert ledger.get(0) is not None and ledger.get(0).face == 9


def test_get_returns_none_for_unknown_id() -> None:
    ledger = Ledger.from_layout(_layout([3], [7, 8]))

    assert ledger.get(99) is None
    assert ledger.get(-1) is None
    assert 2 in ledger
    assert 3 not in ledger


def test_cards_in_zone_returns_snapshots_in_stacking_order() -> None:
    ledger = Ledger.from_layout(_layout([3, 4, 5], [7, 8]))

    stock = ledger.cards_in_zone(Zone.STOCK)
    assert [card.id for card in stock] == [3]

    ledger.move(1, Zone.DISCARD, Position(0, 0))
    ledger.move(3, Zone.DISCARD, Position(0, 0))

    assert [card.id for card in ledger.cards_in_zone(Zone.DISCARD)] == [4, 1, 3]
    assert ledger.cards_in_zone(Zone.STOCK) == []
    assert stock[0].zone == Zone.STOCK


def test_move_updates_zone_position_and_top() -> None:
    ledger = Ledger.from_layout(_layout([3], [7, 8]))
    target = Position(5, 6)

    assert ledger.move(1, Zone.DISCARD, target)

    moved = ledger.get(1)
    assert moved is not None
    assert moved.zone == Zone.DISCARD
    assert moved.position == target
    top = ledger.top_of(Zone.DISCARD)
    assert top is not None and top.id == 1
    assert ledger.history_size == 1


def test_move_unknown_card_is_atomic_noop() -> None:
    ledger = Ledger.from_layout(_layout([3, 4], [7, 8]))
    before = _placements(ledger)

    assert not ledger.move(42, Zone.DISCARD, Position(0, 0))

    assert _placements(ledger) == before
    assert ledger.history_size == 0


def test_moves_then_undos_restore_every_card() -> None:
    ledger = Ledger.from_layout(_layout([3, 4, 5, 6], [7, 8, 9]))
    before = _placements(ledger)
    sequence = [(4, Zone.DISCARD), (0, Zone.DISCARD), (5, Zone.DISCARD), (0, Zone.STOCK), (2, Zone.MAIN)]

    for card_id, zone in sequence:
        assert ledger.move(card_id, zone, Position(card_id, -1))
    assert _placements(ledger) != before

    for _ in sequence:
        assert ledger.undo() is not None

    assert _placements(ledger) == before
    assert ledger.history_size == 0


def test_undo_on_empty_history_is_repeatable_noop() -> None:
    ledger = Ledger.from_layout(_layout([3], [7, 8]))
    before = _placements(ledger)

    for _ in range(3):
        assert ledger.undo() is None

    assert _placements(ledger) == before


def test_reference_scenario() -> None:
    ledger = Ledger.from_layout(_layout([3], [7, 8]))

    assert ledger.get(0).zone == Zone.MAIN  # type: ignore[union-attr]
    assert ledger.get(1).zone == Zone.STOCK  # type: ignore[union-attr]
    assert ledger.get(2).zone == Zone.DISCARD  # type: ignore[union-attr]

    assert ledger.move(1, Zone.DISCARD, Position(0, 0))
    assert ledger.top_of(Zone.DISCARD).id == 1  # type: ignore[union-attr]

    record = ledger.undo()

    assert record is not None and record.card_id == 1
    assert ledger.get(1).zone == Zone.STOCK  # type: ignore[union-attr]
    assert ledger.top_of(Zone.DISCARD).id == 2  # type: ignore[union-attr]


def test_history_is_only_reachable_through_moves_and_undo() -> None:
    ledger = Ledger.from_layout(_layout([3], [7, 8]))

    assert not hasattr(ledger, "history")
    assert not hasattr(ledger, "restore")
    with pytest.raises(TypeError):
        Ledger(_history=None)  # type: ignore[call-arg]

    assert ledger.last_move() is None
    ledger.move(1, Zone.DISCARD, Position(4, 4))
    record = ledger.last_move()

    assert record is not None
    assert record.card_id == 1
    assert record.previous_zone == Zone.STOCK
    assert ledger.history_size == 1
