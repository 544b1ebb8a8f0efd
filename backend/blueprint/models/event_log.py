# backend/blueprint/models/event_log.py
from enum import Enum
from typing import Optional
from uuid import UUID
from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin


class IntegrationEventType(str, Enum):
    PUSH_STARTED = "push_started"
    PUSH_STEP = "push_step"
    PUSH_COMPLETED = "push_completed"
    PUSH_FAILED = "push_failed"
    PULL_STARTED = "pull_started"
    PULL_STEP = "pull_step"
    PULL_COMPLETED = "pull_completed"
    DELETE_FAILED = "delete_failed"


class IntegrationEvent(Base, UUIDMixin, TimestampMixin):
    """Progress record for a push or pull of one MSEL."""
    __tablename__ = "integration_events"

    msel_id: Mapped[UUID] = mapped_column(ForeignKey("msels.id", ondelete="CASCADE"), index=True)
    event_type: Mapped[IntegrationEventType] = mapped_column(index=True)
    target: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # player, cite, ...
    message: Mapped[str] = mapped_column(Text)

    msel = relationship("Msel", back_populates="integration_events")
