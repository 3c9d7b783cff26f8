"""In-memory entity store backing the server routes."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pokesync._constants import POWER_LEVEL_MIN
from pokesync.models.entity import Entity

_logger = logging.getLogger(__name__)


class EntityStore:
    """Ordered, process-lifetime store of entities.

    Writes are last-write-wins; power levels never drop below zero.
    """

    def __init__(self, entities: Iterable[Entity] = ()) -> None:
        self._entities: list[Entity] = list(entities)

    def __len__(self) -> int:
        return len(self._entities)

    def entities(self) -> list[Entity]:
        return list(self._entities)

    def get(self, entity_id: int) -> Entity | None:
        for entity in self._entities:
            if entity.id == entity_id:
                return entity
        return None

    def replace_all(self, entities: Iterable[Entity]) -> None:
        self._entities = list(entities)
        _logger.info("Store now holds %d entities", len(self._entities))

    def change_power(self, entity_id: int, change: int) -> Entity | None:
        """Apply *change* to an entity's power level, clamped at zero.

        Returns the updated entity, or ``None`` when *entity_id* is unknown.
        """
        for index, entity in enumerate(self._entities):
            if entity.id != entity_id:
                continue
            power_level = max(POWER_LEVEL_MIN, entity.power_level + change)
            updated = entity.model_copy(update={"power_level": power_level})
            self._entities[index] = updated
            return updated
        return None
