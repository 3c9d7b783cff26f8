"""View boundary driven by reconciliation ops."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from pokesync.models.entity import Entity
from pokesync.sync.reconcile import SyncOp, SyncOpKind

_logger = logging.getLogger(__name__)


class SyncView(Protocol):
    """Side-effecting callbacks a rendering surface implements.

    Each callback must tolerate being invoked twice in a row with the same
    record (no double insertion).
    """

    def on_create(self, record: Entity) -> None: ...

    def on_update(self, record: Entity) -> None: ...

    def on_delete(self, record: Entity) -> None: ...


def apply_ops(view: SyncView, ops: Iterable[SyncOp]) -> int:
    """Invoke exactly one view callback per op. Returns the number applied."""
    count = 0
    for sync_op in ops:
        if sync_op.op is SyncOpKind.CREATE:
            view.on_create(sync_op.record)
        elif sync_op.op is SyncOpKind.UPDATE:
            view.on_update(sync_op.record)
        else:
            view.on_delete(sync_op.record)
        count += 1
    return count


class CardBoard:
    """In-memory card board keyed by entity id.

    Cards keep insertion order so the rendered board stays stable between
    polls. Creating an existing card overwrites it in place; updating or
    deleting an unknown card is a no-op.
    """

    def __init__(self) -> None:
        self._cards: dict[int, Entity] = {}
        self.revision = 0

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._cards

    @property
    def cards(self) -> list[Entity]:
        return list(self._cards.values())

    def card(self, entity_id: int) -> Entity | None:
        return self._cards.get(entity_id)

    def on_create(self, record: Entity) -> None:
        if self._cards.get(record.id) == record:
            return
        self._cards[record.id] = record
        self.revision += 1

    def on_update(self, record: Entity) -> None:
        current = self._cards.get(record.id)
        if current is None:
            _logger.debug("Ignoring update for unknown card %d", record.id)
            return
        if current == record:
            return
        self._cards[record.id] = record
        self.revision += 1

    def on_delete(self, record: Entity) -> None:
        if self._cards.pop(record.id, None) is not None:
            self.revision += 1

    def render(self) -> str:
        """Render the board as a fixed-width text table."""
        if not self._cards:
            return "(no pokémon)"
        width = max(len(card.name) for card in self._cards.values())
        lines = [
            f"#{card.id:<4} {card.name:<{width}}  Power Level: {card.power_level}" for card in self._cards.values()
        ]
        return "\n".join(lines)
