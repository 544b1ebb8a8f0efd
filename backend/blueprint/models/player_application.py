# backend/blueprint/models/player_application.py
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, Integer, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.msel import Msel
    from blueprint.models.team import Team


class PlayerApplication(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "player_applications"

    msel_id: Mapped[UUID] = mapped_column(ForeignKey("msels.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # May contain {playerViewId}, {citeEvaluationId}, {galleryExhibitId}, {steamfitterScenarioId}
    url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    icon: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    embeddable: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    load_in_background: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    msel: Mapped["Msel"] = relationship("Msel", back_populates="player_applications")
    application_teams: Mapped[List["PlayerApplicationTeam"]] = relationship(
        "PlayerApplicationTeam", back_populates="player_application", cascade="all, delete-orphan"
    )


class PlayerApplicationTeam(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "player_application_teams"

    player_application_id: Mapped[UUID] = mapped_column(
        ForeignKey("player_applications.id", ondelete="CASCADE"), index=True
    )
    team_id: Mapped[UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    display_order: Mapped[int] = mapped_column(Integer, default=0)

    player_application: Mapped["PlayerApplication"] = relationship(
        "PlayerApplication", back_populates="application_teams"
    )
    team: Mapped["Team"] = relationship("Team")
