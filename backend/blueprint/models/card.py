# backend/blueprint/models/card.py
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, Text, Integer, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.msel import Msel
    from blueprint.models.team import Team


class Card(Base, UUIDMixin, TimestampMixin):
    """Gallery card that articles are filed under."""
    __tablename__ = "cards"

    msel_id: Mapped[UUID] = mapped_column(
        ForeignKey("msels.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    move: Mapped[int] = mapped_column(Integer, default=0)
    inject: Mapped[int] = mapped_column(Integer, default=0)
    gallery_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)

    msel: Mapped["Msel"] = relationship("Msel", back_populates="cards")
    card_teams: Mapped[List["CardTeam"]] = relationship(
        "CardTeam", back_populates="card", cascade="all, delete-orphan"
    )


class CardTeam(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "card_teams"

    card_id: Mapped[UUID] = mapped_column(ForeignKey("cards.id", ondelete="CASCADE"), index=True)
    team_id: Mapped[UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    is_shown_on_wall: Mapped[bool] = mapped_column(Boolean, default=True)
    can_post_articles: Mapped[bool] = mapped_column(Boolean, default=False)

    card: Mapped["Card"] = relationship("Card", back_populates="card_teams")
    team: Mapped["Team"] = relationship("Team")
