# backend/blueprint/services/ordering.py
"""Scenario event ordering.

Events of one MSEL are positioned by (delta_seconds, group_order). Authoring
can leave two events of the same delta with the same group order; the pass
below re-ranks only the partitions that contain such a collision, so running
it on an already-normalized MSEL changes nothing.
"""
import logging
from collections import defaultdict
from datetime import timezone
from typing import Dict, Iterable, List, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from blueprint.models.scenario_event import ScenarioEvent

logger = logging.getLogger(__name__)


def created_sort_key(event: ScenarioEvent) -> float:
    created = event.created_at
    if created is None:
        return 0.0
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created.timestamp()


def normalize_group_orders(events: Iterable[ScenarioEvent]) -> List[ScenarioEvent]:
    """
    Make group_order unique within each (msel_id, delta_seconds) partition.

    Returns the events whose group_order was changed.
    """
    partitions: Dict[Tuple[UUID, int], List[ScenarioEvent]] = defaultdict(list)
    for event in events:
        partitions[(event.msel_id, event.delta_seconds)].append(event)

    changed = []
    for (msel_id, delta_seconds), members in partitions.items():
        orders = [e.group_order for e in members]
        if len(set(orders)) == len(orders):
            continue

        ranked = sorted(members, key=lambda e: (e.group_order, created_sort_key(e), str(e.id)))
        for rank, event in enumerate(ranked):
            if event.group_order != rank:
                event.group_order = rank
                changed.append(event)
        logger.debug(f"Re-ranked {len(members)} events at delta {delta_seconds} of MSEL {msel_id}")

    return changed


class ScenarioEventOrderingService:
    def __init__(self, db: Session):
        self.db = db

    def normalize(self, msel_id: UUID) -> int:
        """Normalize and persist the ordering keys of one MSEL. Returns the number of events changed."""
        events = self.db.query(ScenarioEvent).filter(ScenarioEvent.msel_id == msel_id).all()
        changed = normalize_group_orders(events)
        if changed:
            self.db.commit()
            logger.info(f"Normalized group order of {len(changed)} scenario events for MSEL {msel_id}")
        return len(changed)
