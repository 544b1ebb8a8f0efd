# backend/blueprint/models/move.py
from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, Text, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.msel import Msel


class Move(Base, UUIDMixin, TimestampMixin):
    """A numbered phase of the exercise."""
    __tablename__ = "moves"

    msel_id: Mapped[UUID] = mapped_column(
        ForeignKey("msels.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    move_number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    delta_seconds: Mapped[int] = mapped_column(Integer, default=0)  # offset from exercise start
    situation_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    situation_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    msel: Mapped["Msel"] = relationship("Msel", back_populates="moves")

    __table_args__ = (
        UniqueConstraint('msel_id', 'move_number', name='uq_move_msel_move_number'),
    )
