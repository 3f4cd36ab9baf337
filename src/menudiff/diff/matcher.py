"""Entity matching across two versions of a collection.

Entities are paired by identical ids first. Left entities whose id is
missing on the right then fall back to the first unclaimed right entity
with exactly the same display name, in right-collection order. Pairs
found by name carry ``matched_by_id=False`` and the right-side id.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from menudiff.core.config import DiffConfig
from menudiff.diff.fields import diff_fields
from menudiff.diff.models import DiffStatus, EntityDiff

if TYPE_CHECKING:
    from collections.abc import Sequence

    from menudiff.core.types import Entity

logger = logging.getLogger(__name__)


def _compare(left: Entity, right: Entity, *, matched_by_id: bool, config: DiffConfig) -> EntityDiff:
    fields = tuple(diff_fields(left, right, config))
    return EntityDiff(
        id=left.id,
        display_name=left.label,
        status=DiffStatus.CHANGED if fields else DiffStatus.UNCHANGED,
        matched_by_id=matched_by_id,
        matched_right_id=None if matched_by_id else right.id,
        fields=fields,
    )


def match_entities(
    left: Sequence[Entity],
    right: Sequence[Entity],
    config: DiffConfig | None = None,
) -> list[EntityDiff]:
    """Pair and classify the entities of one collection.

    Args:
        left: Entities of the left dataset, in collection order.
        right: Entities of the right dataset, in collection order.
        config: Field schema passed on to the field differ.

    Returns:
        One EntityDiff per left entity, in left order, followed by one
        ``added`` EntityDiff per unconsumed right entity, in right order.
    """
    config = config or DiffConfig()
    right_by_id = {entity.id: entity for entity in right}
    id_matched = {entity.id for entity in left if entity.id in right_by_id}

    # Name candidates exclude every id-matched entity up front, so a name
    # match can never take an entity a later left entity pairs with by id.
    candidates: dict[str, deque[Entity]] = {}
    for entity in right_by_id.values():
        name = entity.display_name
        if entity.id not in id_matched and name is not None:
            candidates.setdefault(name, deque()).append(entity)

    consumed = set(id_matched)
    results: list[EntityDiff] = []

    for entity in left:
        counterpart = right_by_id.get(entity.id)
        if counterpart is not None:
            results.append(_compare(entity, counterpart, matched_by_id=True, config=config))
            continue

        queue = candidates.get(entity.display_name) if entity.display_name is not None else None
        if queue:
            counterpart = queue.popleft()
            consumed.add(counterpart.id)
            logger.debug("Matched %s to %s by display name %r", entity.id, counterpart.id, entity.display_name)
            results.append(_compare(entity, counterpart, matched_by_id=False, config=config))
            continue

        results.append(EntityDiff(id=entity.id, display_name=entity.label, status=DiffStatus.REMOVED))

    for entity in right_by_id.values():
        if entity.id not in consumed:
            results.append(EntityDiff(id=entity.id, display_name=entity.label, status=DiffStatus.ADDED))

    return results
