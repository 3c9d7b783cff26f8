"""Snapshot reconciliation.

Computes the minimal set of create/update/delete operations that moves a
held snapshot onto a freshly fetched one, and applies them to the held
snapshot in place (identity-aligned merge, not wholesale replacement).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from pokesync.exceptions import DuplicateIdentityError
from pokesync.models.entity import Entity
from pokesync.sync.equality import deep_equal


class SyncOpKind(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class SyncOp(BaseModel):
    """A single reconciliation edit."""

    model_config = ConfigDict(frozen=True)

    op: SyncOpKind
    record: Entity


class Snapshot:
    """Ordered collection of entities, looked up by identity key.

    A snapshot is owned by exactly one sync loop; nothing else mutates it.
    """

    def __init__(self, records: Iterable[Entity] = ()) -> None:
        self._records: list[Entity] = list(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._records)

    def __getitem__(self, index: int) -> Entity:
        return self._records[index]

    def __repr__(self) -> str:
        return f"Snapshot({self._records!r})"

    @property
    def records(self) -> list[Entity]:
        """Copy of the held records in snapshot order."""
        return list(self._records)

    def index_of(self, entity_id: int) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == entity_id:
                return index
        return None

    def get(self, entity_id: int) -> Entity | None:
        index = self.index_of(entity_id)
        return None if index is None else self._records[index]

    def replace_all(self, records: Iterable[Entity]) -> None:
        self._records = list(records)

    def replace_at(self, index: int, record: Entity) -> None:
        self._records[index] = record

    def append(self, record: Entity) -> None:
        self._records.append(record)

    def remove(self, entity_id: int) -> None:
        self._records = [record for record in self._records if record.id != entity_id]

    def merge_record(self, record: Entity) -> bool:
        """Replace the held record with the same id if it differs.

        Returns ``True`` when the snapshot changed. Unknown ids are ignored;
        they arrive through the next reconciliation instead.
        """
        index = self.index_of(record.id)
        if index is None or deep_equal(self._records[index], record):
            return False
        self._records[index] = record
        return True


def _check_unique_ids(records: Sequence[Entity]) -> None:
    seen: set[int] = set()
    for record in records:
        if record.id in seen:
            raise DuplicateIdentityError(record.id)
        seen.add(record.id)


def reconcile(previous: Snapshot, fresh: Sequence[Entity]) -> list[SyncOp]:
    """Diff *fresh* against *previous* and bring *previous* in line with it.

    CREATE and UPDATE ops follow the iteration order of *fresh*; DELETE ops
    come afterwards in the order of *previous* at delete-scan time.

    Raises
    ------
    DuplicateIdentityError
        *fresh* carries the same id twice. *previous* is left untouched.
    """
    _check_unique_ids(fresh)

    if not previous:
        previous.replace_all(fresh)
        return [SyncOp(op=SyncOpKind.CREATE, record=record) for record in fresh]

    ops: list[SyncOp] = []
    for record in fresh:
        index = previous.index_of(record.id)
        if index is None:
            ops.append(SyncOp(op=SyncOpKind.CREATE, record=record))
            previous.append(record)
            continue
        current = previous[index]
        if not deep_equal(current, record):
            ops.append(SyncOp(op=SyncOpKind.UPDATE, record=record))
            previous.replace_at(index, record)

    fresh_ids = {record.id for record in fresh}
    for record in previous.records:
        if record.id not in fresh_ids:
            ops.append(SyncOp(op=SyncOpKind.DELETE, record=record))
            previous.remove(record.id)

    return ops
