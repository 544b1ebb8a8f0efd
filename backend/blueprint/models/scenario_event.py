# backend/blueprint/models/scenario_event.py
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import Text, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.msel import Msel
    from blueprint.models.inject import Inject
    from blueprint.models.data_field import DataValue
    from blueprint.models.steamfitter_task import SteamfitterTask


class ScenarioEvent(Base, UUIDMixin, TimestampMixin):
    """One planned occurrence, positioned by (delta_seconds, group_order)."""
    __tablename__ = "scenario_events"

    msel_id: Mapped[UUID] = mapped_column(
        ForeignKey("msels.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    delta_seconds: Mapped[int] = mapped_column(Integer, default=0)  # from the start of the MSEL
    group_order: Mapped[int] = mapped_column(Integer, default=0)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    inject_id: Mapped[Optional[UUID]] = mapped_column(
        ForeignKey("injects.id", ondelete="SET NULL"),
        nullable=True
    )

    # Relationships
    msel: Mapped["Msel"] = relationship("Msel", back_populates="scenario_events")
    inject: Mapped[Optional["Inject"]] = relationship("Inject")
    data_values: Mapped[List["DataValue"]] = relationship(
        "DataValue", back_populates="scenario_event", cascade="all, delete-orphan"
    )
    steamfitter_task: Mapped[Optional["SteamfitterTask"]] = relationship(
        "SteamfitterTask", back_populates="scenario_event", uselist=False, cascade="all, delete-orphan"
    )

    # Not unique: collisions are allowed until the ordering pass runs
    __table_args__ = (
        Index('ix_scenario_events_ordering', 'msel_id', 'delta_seconds', 'group_order'),
    )
