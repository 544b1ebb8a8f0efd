# backend/blueprint/schemas/steamfitter.py
from datetime import datetime
from typing import Optional, Dict
from uuid import UUID

from blueprint.models.steamfitter_task import SteamfitterTaskAction, SteamfitterTaskTrigger
from blueprint.schemas.common import RemoteModel


class ScenarioForm(RemoteModel):
    name: str
    description: Optional[str] = None
    status: str = "Active"
    start_date: datetime
    end_date: datetime
    view_id: Optional[UUID] = None


class TaskForm(RemoteModel):
    name: str
    description: Optional[str] = None
    scenario_id: UUID
    action: SteamfitterTaskAction
    vm_mask: Optional[str] = None
    api_url: str
    action_parameters: Dict[str, str] = {}
    expected_output: Optional[str] = None
    expiration_seconds: int = 0
    delay_seconds: int = 0
    interval_seconds: int = 0
    iterations: int = 1
    trigger_task_id: Optional[UUID] = None
    trigger_condition: SteamfitterTaskTrigger = SteamfitterTaskTrigger.MANUAL
    user_executable: bool = False
    repeatable: bool = False
