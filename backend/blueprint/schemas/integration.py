# backend/blueprint/schemas/integration.py
from datetime import datetime
from uuid import UUID
from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict

from blueprint.models.event_log import IntegrationEventType
from blueprint.models.msel import IntegrationStatus
from blueprint.models.steamfitter_task import SteamfitterTaskAction, SteamfitterTaskTrigger


class PushRequest(BaseModel):
    player_view_id: Optional[UUID] = None
    background: bool = False


class TeamIntegrationResponse(BaseModel):
    id: UUID
    name: str
    short_name: Optional[str] = None
    player_team_id: Optional[UUID] = None
    gallery_team_id: Optional[UUID] = None
    cite_team_id: Optional[UUID] = None

    model_config = ConfigDict(from_attributes=True)


class MselIntegrationResponse(BaseModel):
    id: UUID
    name: str
    use_player: bool
    use_cite: bool
    use_gallery: bool
    use_steamfitter: bool
    player_view_id: Optional[UUID] = None
    cite_evaluation_id: Optional[UUID] = None
    gallery_collection_id: Optional[UUID] = None
    gallery_exhibit_id: Optional[UUID] = None
    steamfitter_scenario_id: Optional[UUID] = None
    integration_status: IntegrationStatus
    is_pushed: bool
    teams: List[TeamIntegrationResponse] = []

    model_config = ConfigDict(from_attributes=True)


class QueuedResponse(BaseModel):
    msel_id: UUID
    status: str = "queued"


class NormalizeResponse(BaseModel):
    msel_id: UUID
    changed: int


class TaskDraftResponse(BaseModel):
    kind: str
    move: int
    group: int
    delta_seconds: int
    name: str
    action: SteamfitterTaskAction
    api_url: str
    action_parameters: Dict[str, str]
    trigger_condition: SteamfitterTaskTrigger
    delay_seconds: int
    scenario_event_id: Optional[UUID] = None


class TaskChainResponse(BaseModel):
    msel_id: UUID
    tasks: List[TaskDraftResponse]
    total: int


class IntegrationEventResponse(BaseModel):
    id: UUID
    msel_id: UUID
    event_type: IntegrationEventType
    target: Optional[str] = None
    message: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class IntegrationEventList(BaseModel):
    events: List[IntegrationEventResponse]
    total: int
