# backend/blueprint/schemas/cite.py
from datetime import datetime
from typing import Optional, List
from uuid import UUID

from blueprint.schemas.common import RemoteModel


class CiteMove(RemoteModel):
    id: Optional[UUID] = None
    evaluation_id: UUID
    description: Optional[str] = None
    move_number: int
    situation_time: Optional[datetime] = None
    situation_description: Optional[str] = None


class Evaluation(RemoteModel):
    id: Optional[UUID] = None
    description: str
    status: str = "Pending"
    current_move_number: int = 0
    scoring_model_id: Optional[UUID] = None
    gallery_exhibit_id: Optional[UUID] = None
    situation_description: Optional[str] = None
    situation_time: Optional[datetime] = None
    # Cite creates a default move 0 along with the evaluation
    moves: List[CiteMove] = []


class CiteTeam(RemoteModel):
    id: Optional[UUID] = None
    name: str
    short_name: Optional[str] = None
    evaluation_id: UUID
    team_type_id: UUID


class CiteUser(RemoteModel):
    id: UUID
    name: Optional[str] = None


class CiteTeamUser(RemoteModel):
    team_id: UUID
    user_id: UUID
    is_observer: bool = False


class CiteRoleForm(RemoteModel):
    evaluation_id: UUID
    team_id: UUID
    name: str


class CiteActionForm(RemoteModel):
    evaluation_id: UUID
    team_id: UUID
    move_number: int
    inject_number: int
    description: Optional[str] = None
