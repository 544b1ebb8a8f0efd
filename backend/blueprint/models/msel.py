# backend/blueprint/models/msel.py
from datetime import datetime
from enum import Enum
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, Text, Integer, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.move import Move
    from blueprint.models.scenario_event import ScenarioEvent
    from blueprint.models.team import Team, UserMselRole
    from blueprint.models.data_field import DataField
    from blueprint.models.card import Card
    from blueprint.models.cite import CiteRole, CiteAction
    from blueprint.models.player_application import PlayerApplication
    from blueprint.models.event_log import IntegrationEvent


class IntegrationStatus(str, Enum):
    IDLE = "idle"
    PUSHING = "pushing"
    PULLING = "pulling"


# Remote ids owned by the MSEL itself, in the order they are created by a push
MSEL_REMOTE_ID_FIELDS = (
    "player_view_id",
    "gallery_collection_id",
    "gallery_exhibit_id",
    "cite_evaluation_id",
    "steamfitter_scenario_id",
)


class Msel(Base, UUIDMixin, TimestampMixin):
    """Master Scenario Events List - the authored timeline of an exercise."""
    __tablename__ = "msels"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    duration_seconds: Mapped[int] = mapped_column(Integer, default=0)

    # Integration flags
    use_player: Mapped[bool] = mapped_column(Boolean, default=True)
    use_cite: Mapped[bool] = mapped_column(Boolean, default=False)
    use_gallery: Mapped[bool] = mapped_column(Boolean, default=False)
    use_steamfitter: Mapped[bool] = mapped_column(Boolean, default=False)
    cite_scoring_model_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)

    # Remote ids, null until pushed and cleared on pull
    player_view_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)
    cite_evaluation_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)
    gallery_collection_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)
    gallery_exhibit_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)
    steamfitter_scenario_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)

    integration_status: Mapped[IntegrationStatus] = mapped_column(default=IntegrationStatus.IDLE)

    # Relationships
    moves: Mapped[List["Move"]] = relationship(
        "Move", back_populates="msel", cascade="all, delete-orphan", order_by="Move.move_number"
    )
    scenario_events: Mapped[List["ScenarioEvent"]] = relationship(
        "ScenarioEvent", back_populates="msel", cascade="all, delete-orphan"
    )
    teams: Mapped[List["Team"]] = relationship(
        "Team", back_populates="msel", cascade="all, delete-orphan"
    )
    data_fields: Mapped[List["DataField"]] = relationship(
        "DataField", back_populates="msel", cascade="all, delete-orphan"
    )
    cards: Mapped[List["Card"]] = relationship(
        "Card", back_populates="msel", cascade="all, delete-orphan"
    )
    cite_roles: Mapped[List["CiteRole"]] = relationship(
        "CiteRole", back_populates="msel", cascade="all, delete-orphan"
    )
    cite_actions: Mapped[List["CiteAction"]] = relationship(
        "CiteAction", back_populates="msel", cascade="all, delete-orphan"
    )
    player_applications: Mapped[List["PlayerApplication"]] = relationship(
        "PlayerApplication", back_populates="msel", cascade="all, delete-orphan"
    )
    user_msel_roles: Mapped[List["UserMselRole"]] = relationship(
        "UserMselRole", back_populates="msel", cascade="all, delete-orphan"
    )
    integration_events: Mapped[List["IntegrationEvent"]] = relationship(
        "IntegrationEvent", back_populates="msel", cascade="all, delete-orphan"
    )

    @property
    def is_pushed(self) -> bool:
        return any(getattr(self, field) is not None for field in MSEL_REMOTE_ID_FIELDS)
