# backend/blueprint/clients/cite.py
from uuid import UUID

from blueprint.clients.base import ApiClient, DeleteResult
from blueprint.schemas.common import RemoteEntity
from blueprint.schemas.cite import (
    Evaluation, CiteMove, CiteTeam, CiteUser, CiteTeamUser, CiteRoleForm, CiteActionForm
)


class CiteApiClient(ApiClient):
    """Cite: evaluations, moves, teams, users, roles and actions."""

    target = "cite"

    def create_evaluation(self, evaluation: Evaluation) -> Evaluation:
        return self._post("/api/evaluations", evaluation, model=Evaluation)

    def delete_evaluation(self, evaluation_id: UUID) -> DeleteResult:
        return self._delete(f"/api/evaluations/{evaluation_id}")

    def create_move(self, move: CiteMove) -> RemoteEntity:
        return self._post("/api/moves", move)

    def delete_move(self, move_id: UUID) -> DeleteResult:
        return self._delete(f"/api/moves/{move_id}")

    def create_team(self, team: CiteTeam) -> RemoteEntity:
        return self._post("/api/teams", team)

    def create_user(self, user: CiteUser) -> RemoteEntity:
        return self._post("/api/users", user)

    def create_team_user(self, team_user: CiteTeamUser) -> RemoteEntity:
        return self._post("/api/teamusers", team_user)

    def create_role(self, role: CiteRoleForm) -> RemoteEntity:
        return self._post("/api/roles", role)

    def create_action(self, action: CiteActionForm) -> RemoteEntity:
        return self._post("/api/actions", action)
