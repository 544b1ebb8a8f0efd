# backend/blueprint/clients/steamfitter.py
from uuid import UUID

from blueprint.clients.base import ApiClient, DeleteResult
from blueprint.schemas.common import RemoteEntity
from blueprint.schemas.steamfitter import ScenarioForm, TaskForm


class SteamfitterApiClient(ApiClient):
    """Steamfitter: scenarios and their tasks."""

    target = "steamfitter"

    def create_scenario(self, form: ScenarioForm) -> RemoteEntity:
        return self._post("/api/scenarios", form)

    def delete_scenario(self, scenario_id: UUID) -> DeleteResult:
        return self._delete(f"/api/scenarios/{scenario_id}")

    def create_task(self, form: TaskForm) -> RemoteEntity:
        return self._post("/api/tasks", form)
