# backend/blueprint/schemas/player.py
from typing import Optional
from uuid import UUID

from blueprint.schemas.common import RemoteModel


class ViewForm(RemoteModel):
    id: Optional[UUID] = None
    name: str
    description: Optional[str] = None
    status: str = "Active"
    create_admin_team: bool = True


class TeamForm(RemoteModel):
    name: str


class PlayerUser(RemoteModel):
    id: UUID
    name: Optional[str] = None


class Application(RemoteModel):
    id: Optional[UUID] = None
    name: str
    view_id: UUID
    url: Optional[str] = None
    icon: Optional[str] = None
    embeddable: Optional[bool] = None
    load_in_background: Optional[bool] = None


class ApplicationInstanceForm(RemoteModel):
    team_id: UUID
    application_id: UUID
    display_order: int = 0
