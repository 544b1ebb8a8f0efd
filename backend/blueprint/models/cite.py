# backend/blueprint/models/cite.py
from typing import Optional, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, Text, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.msel import Msel
    from blueprint.models.team import Team


class CiteRole(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "cite_roles"

    msel_id: Mapped[UUID] = mapped_column(ForeignKey("msels.id", ondelete="CASCADE"), index=True)
    team_id: Mapped[UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    msel: Mapped["Msel"] = relationship("Msel", back_populates="cite_roles")
    team: Mapped["Team"] = relationship("Team")


class CiteAction(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "cite_actions"

    msel_id: Mapped[UUID] = mapped_column(ForeignKey("msels.id", ondelete="CASCADE"), index=True)
    team_id: Mapped[UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    move_number: Mapped[int] = mapped_column(Integer, default=0)
    inject_number: Mapped[int] = mapped_column(Integer, default=0)
    action_number: Mapped[int] = mapped_column(Integer, default=0)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    msel: Mapped["Msel"] = relationship("Msel", back_populates="cite_actions")
    team: Mapped["Team"] = relationship("Team")
