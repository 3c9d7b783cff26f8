from __future__ import annotations

import pytest

from pokesync.exceptions import DuplicateIdentityError
from pokesync.models.entity import Entity
from pokesync.sync.reconcile import Snapshot, SyncOpKind, reconcile


def _entity(entity_id: int, power_level: int = 10, name: str | None = None) -> Entity:
    return Entity(
        id=entity_id,
        name=name or f"mon-{entity_id}",
        image=f"https://img.example/{entity_id}.png",
        power_level=power_level,
    )


def test_bootstrap_creates_every_record_in_order() -> None:
    fresh = [_entity(1), _entity(4), _entity(7)]
    previous = Snapshot()

    ops = reconcile(previous, fresh)

    assert [op.op for op in ops] == [SyncOpKind.CREATE] * 3
    assert [op.record.id for op in ops] == [1, 4, 7]
    assert previous.records == fresh


def test_bootstrap_copies_instead_of_aliasing() -> None:
    fresh = [_entity(1)]
    previous = Snapshot()

    reconcile(previous, fresh)
    fresh.append(_entity(2))

    assert len(previous) == 1


def test_equal_content_in_different_order_emits_nothing() -> None:
    previous = Snapshot([_entity(1), _entity(2), _entity(3)])

    ops = reconcile(previous, [_entity(3), _entity(1), _entity(2)])

    assert ops == []
    assert [record.id for record in previous] == [1, 2, 3]


def test_changed_attribute_emits_update_and_replaces_in_place() -> None:
    previous = Snapshot([_entity(1, power_level=10)])

    ops = reconcile(previous, [_entity(1, power_level=11)])

    assert len(ops) == 1
    assert ops[0].op is SyncOpKind.UPDATE
    assert ops[0].record == _entity(1, power_level=11)
    assert previous.records == [_entity(1, power_level=11)]


def test_missing_record_emits_delete() -> None:
    previous = Snapshot([_entity(1)])

    ops = reconcile(previous, [])

    assert [(op.op, op.record) for op in ops] == [(SyncOpKind.DELETE, _entity(1))]
    assert len(previous) == 0


def test_new_record_emits_only_create() -> None:
    previous = Snapshot([_entity(1)])

    ops = reconcile(previous, [_entity(1), _entity(2)])

    assert [(op.op, op.record.id) for op in ops] == [(SyncOpKind.CREATE, 2)]
    assert [record.id for record in previous] == [1, 2]


def test_update_position_is_kept() -> None:
    previous = Snapshot([_entity(1), _entity(2), _entity(3)])

    reconcile(previous, [_entity(3), _entity(2, power_level=99), _entity(1)])

    assert [record.id for record in previous] == [1, 2, 3]
    assert previous[1].power_level == 99


def test_mixed_ops_follow_fresh_order_then_deletes() -> None:
    previous = Snapshot([_entity(1), _entity(2), _entity(3), _entity(4)])
    fresh = [_entity(5), _entity(3, power_level=0), _entity(1)]

    ops = reconcile(previous, fresh)

    assert [(op.op, op.record.id) for op in ops] == [
        (SyncOpKind.CREATE, 5),
        (SyncOpKind.UPDATE, 3),
        (SyncOpKind.DELETE, 2),
        (SyncOpKind.DELETE, 4),
    ]
    assert [record.id for record in previous] == [1, 3, 5]


def test_second_reconcile_with_same_input_is_a_no_op() -> None:
    previous = Snapshot([_entity(1), _entity(2)])
    fresh = [_entity(2, power_level=50), _entity(6)]

    first = reconcile(previous, fresh)
    second = reconcile(previous, fresh)

    assert first
    assert second == []


def test_everything_removed_then_repopulated_bootstraps_again() -> None:
    previous = Snapshot([_entity(1)])
    reconcile(previous, [])

    ops = reconcile(previous, [_entity(1), _entity(2)])

    assert [op.op for op in ops] == [SyncOpKind.CREATE, SyncOpKind.CREATE]


def test_duplicate_ids_are_rejected_without_mutation() -> None:
    previous = Snapshot([_entity(1)])

    with pytest.raises(DuplicateIdentityError) as excinfo:
        reconcile(previous, [_entity(2), _entity(2, power_level=3)])

    assert excinfo.value.entity_id == 2
    assert previous.records == [_entity(1)]


def test_merge_record_replaces_only_known_and_changed() -> None:
    snapshot = Snapshot([_entity(1)])

    assert not snapshot.merge_record(_entity(1))
    assert not snapshot.merge_record(_entity(9))
    assert snapshot.merge_record(_entity(1, power_level=42))
    assert snapshot.get(1) == _entity(1, power_level=42)
    assert snapshot.get(9) is None
