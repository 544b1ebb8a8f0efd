# backend/blueprint/services/event_service.py
"""Progress log of MSEL pushes and pulls, one row per step."""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.orm import Session

from blueprint.models.event_log import IntegrationEvent, IntegrationEventType


class RunLog:
    """
    Writes the progress rows of one push or pull of an MSEL.

    ``for_target`` returns a log whose rows carry that target's name, so each
    push or pull stage binds its target once.
    """

    def __init__(
        self,
        service: "IntegrationEventService",
        msel_id: UUID,
        step_type: IntegrationEventType,
        target: Optional[str] = None,
    ):
        self.service = service
        self.msel_id = msel_id
        self.step_type = step_type
        self.target = target

    def for_target(self, target: str) -> "RunLog":
        return RunLog(self.service, self.msel_id, self.step_type, target)

    def record(self, event_type: IntegrationEventType, message: str) -> IntegrationEvent:
        return self.service.record(self.msel_id, event_type, message, self.target)

    def step(self, message: str) -> IntegrationEvent:
        return self.record(self.step_type, message)

    def delete_failed(self, message: str) -> IntegrationEvent:
        return self.record(IntegrationEventType.DELETE_FAILED, message)


class IntegrationEventService:
    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        msel_id: UUID,
        event_type: IntegrationEventType,
        message: str,
        target: Optional[str] = None,
    ) -> IntegrationEvent:
        """Append one row. It is committed at once so a failed run keeps its trail."""
        event = IntegrationEvent(msel_id=msel_id, event_type=event_type, target=target, message=message)
        self.db.add(event)
        self.db.commit()
        return event

    def push_log(self, msel_id: UUID) -> RunLog:
        return RunLog(self, msel_id, IntegrationEventType.PUSH_STEP)

    def pull_log(self, msel_id: UUID) -> RunLog:
        return RunLog(self, msel_id, IntegrationEventType.PULL_STEP)

    def get_events(
        self,
        msel_id: UUID,
        limit: int = 100,
        offset: int = 0,
        event_types: Optional[List[IntegrationEventType]] = None,
        target: Optional[str] = None,
    ) -> Tuple[List[IntegrationEvent], int]:
        """Newest first, with the total count before paging."""
        query = self.db.query(IntegrationEvent).filter(IntegrationEvent.msel_id == msel_id)
        if event_types:
            query = query.filter(IntegrationEvent.event_type.in_(event_types))
        if target:
            query = query.filter(IntegrationEvent.target == target)

        total = query.count()
        events = query.order_by(desc(IntegrationEvent.created_at)).offset(offset).limit(limit).all()
        return events, total
