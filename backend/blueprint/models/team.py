# backend/blueprint/models/team.py
from enum import Enum
from typing import Optional, List, TYPE_CHECKING
from uuid import UUID
from sqlalchemy import String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blueprint.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from blueprint.models.msel import Msel


class TeamRole(str, Enum):
    OBSERVER = "observer"
    INVITER = "inviter"
    INCREMENTER = "incrementer"


class MselRole(str, Enum):
    OWNER = "owner"
    EDITOR = "editor"
    APPROVER = "approver"
    CITE_OBSERVER = "cite_observer"


# Remote ids owned by a team, one per target
TEAM_REMOTE_ID_FIELDS = ("player_team_id", "gallery_team_id", "cite_team_id")


class User(Base, UUIDMixin, TimestampMixin):
    """Exercise participant. The id is shared with every integration target."""
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    team_users = relationship("TeamUser", back_populates="user", cascade="all, delete-orphan")


class Team(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "teams"

    msel_id: Mapped[UUID] = mapped_column(
        ForeignKey("msels.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    short_name: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Cite artifacts are only created for teams with a Cite team type
    cite_team_type_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)

    player_team_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)
    gallery_team_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)
    cite_team_id: Mapped[Optional[UUID]] = mapped_column(nullable=True)

    msel: Mapped["Msel"] = relationship("Msel", back_populates="teams")
    team_users: Mapped[List["TeamUser"]] = relationship(
        "TeamUser", back_populates="team", cascade="all, delete-orphan"
    )
    user_team_roles: Mapped[List["UserTeamRole"]] = relationship(
        "UserTeamRole", back_populates="team", cascade="all, delete-orphan"
    )

    @property
    def users(self) -> List[User]:
        return [tu.user for tu in self.team_users]

    def has_role(self, user_id: UUID, role: TeamRole) -> bool:
        return any(r.user_id == user_id and r.role == role for r in self.user_team_roles)


class TeamUser(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "team_users"

    team_id: Mapped[UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    team = relationship("Team", back_populates="team_users")
    user = relationship("User", back_populates="team_users")

    __table_args__ = (
        UniqueConstraint('team_id', 'user_id', name='uq_team_user'),
    )


class UserTeamRole(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "user_team_roles"

    team_id: Mapped[UUID] = mapped_column(ForeignKey("teams.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    role: Mapped[TeamRole] = mapped_column()

    team = relationship("Team", back_populates="user_team_roles")


class UserMselRole(Base, UUIDMixin, TimestampMixin):
    __tablename__ = "user_msel_roles"

    msel_id: Mapped[UUID] = mapped_column(ForeignKey("msels.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    role: Mapped[MselRole] = mapped_column()

    msel = relationship("Msel", back_populates="user_msel_roles")
