# backend/blueprint/models/steamfitter_task.py
from enum import Enum
from typing import Optional, Dict, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, Text, Integer, Boolean, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.scenario_event import ScenarioEvent


class SteamfitterIntegrationType(str, Enum):
    NOTIFICATION = "Notification"
    HTTP_DELETE = "http_delete"
    HTTP_GET = "http_get"
    HTTP_PUT = "http_put"
    EMAIL = "Email"
    SITUATION_UPDATE = "SituationUpdate"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


class SteamfitterTaskAction(str, Enum):
    """Task actions understood by the Steamfitter API."""
    HTTP_GET = "http_get"
    HTTP_POST = "http_post"
    HTTP_PUT = "http_put"
    HTTP_DELETE = "http_delete"
    SEND_EMAIL = "send_email"


class SteamfitterTaskTrigger(str, Enum):
    TIME = "Time"
    SUCCESS = "Success"
    FAILURE = "Failure"
    COMPLETION = "Completion"
    EXPIRATION = "Expiration"
    MANUAL = "Manual"


class SteamfitterTask(Base, UUIDMixin, TimestampMixin):
    """Execution directive attached to a scenario event."""
    __tablename__ = "steamfitter_tasks"

    scenario_event_id: Mapped[UUID] = mapped_column(
        ForeignKey("scenario_events.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True
    )
    # Stored as text so that values this version does not know survive a round trip
    task_type: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    vm_mask: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    api_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    action_parameters: Mapped[Optional[Dict[str, str]]] = mapped_column(JSON, default=dict)
    expected_output: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    expiration_seconds: Mapped[int] = mapped_column(Integer, default=0)
    delay_seconds: Mapped[int] = mapped_column(Integer, default=0)
    interval_seconds: Mapped[int] = mapped_column(Integer, default=0)
    iterations: Mapped[int] = mapped_column(Integer, default=1)
    trigger_condition: Mapped[SteamfitterTaskTrigger] = mapped_column(
        default=SteamfitterTaskTrigger.COMPLETION
    )
    user_executable: Mapped[bool] = mapped_column(Boolean, default=False)
    repeatable: Mapped[bool] = mapped_column(Boolean, default=False)

    scenario_event: Mapped["ScenarioEvent"] = relationship(
        "ScenarioEvent", back_populates="steamfitter_task"
    )

    @property
    def integration_type(self) -> SteamfitterIntegrationType:
        return SteamfitterIntegrationType(self.task_type)
