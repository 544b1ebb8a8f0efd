# backend/blueprint/clients/player.py
from uuid import UUID

from blueprint.clients.base import ApiClient, DeleteResult
from blueprint.schemas.common import RemoteEntity
from blueprint.schemas.player import (
    ViewForm, TeamForm, PlayerUser, Application, ApplicationInstanceForm
)


class PlayerApiClient(ApiClient):
    """Player: views, teams, users and applications."""

    target = "player"

    def create_view(self, form: ViewForm) -> RemoteEntity:
        return self._post("/api/views", form)

    def delete_view(self, view_id: UUID) -> DeleteResult:
        return self._delete(f"/api/views/{view_id}")

    def create_team(self, view_id: UUID, form: TeamForm) -> RemoteEntity:
        return self._post(f"/api/views/{view_id}/teams", form)

    def create_user(self, user: PlayerUser) -> RemoteEntity:
        return self._post("/api/users", user)

    def add_user_to_team(self, team_id: UUID, user_id: UUID) -> None:
        self._post_no_content(f"/api/teams/{team_id}/users/{user_id}")

    def create_application(self, view_id: UUID, application: Application) -> RemoteEntity:
        return self._post(f"/api/views/{view_id}/applications", application)

    def create_application_instance(self, team_id: UUID, form: ApplicationInstanceForm) -> RemoteEntity:
        return self._post(f"/api/teams/{team_id}/application-instances", form)
