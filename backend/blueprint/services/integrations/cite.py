# backend/blueprint/services/integrations/cite.py
import logging
from typing import List
from uuid import UUID

from blueprint.clients.base import DeleteResult
from blueprint.clients.cite import CiteApiClient
from blueprint.models.cite import CiteRole, CiteAction
from blueprint.models.move import Move
from blueprint.models.msel import Msel
from blueprint.models.team import Team, User, MselRole
from blueprint.schemas.cite import (
    Evaluation, CiteMove, CiteTeam, CiteUser, CiteTeamUser, CiteRoleForm, CiteActionForm
)
from blueprint.services.integrations.base import TargetAdapter, require

logger = logging.getLogger(__name__)

DEFAULT_SITUATION = "Preparing for the start of the exercise."


class CiteAdapter(TargetAdapter):
    target = "cite"
    root_field = "cite_evaluation_id"
    client: CiteApiClient

    def user_form(self, user: User) -> CiteUser:
        return CiteUser(id=user.id, name=user.name)

    def evaluation_form(self, msel: Msel) -> Evaluation:
        """The evaluation starts at move 0, with move 0's situation if there is one."""
        move0 = next((m for m in msel.moves if m.move_number == 0), None)
        evaluation = Evaluation(
            description=msel.name,
            status="Pending",
            current_move_number=0,
            scoring_model_id=require(msel, "cite_scoring_model_id"),
            gallery_exhibit_id=msel.gallery_exhibit_id,
            situation_description=DEFAULT_SITUATION,
        )
        if move0 is not None:
            evaluation.situation_description = move0.situation_description
            evaluation.situation_time = move0.situation_time
        return evaluation

    def create_evaluation(self, msel: Msel) -> Evaluation:
        """Returns the created evaluation, including the default moves Cite added to it."""
        evaluation = self.client.create_evaluation(self.evaluation_form(msel))
        logger.info(f"cite: created evaluation {evaluation.id} for MSEL {msel.name}")
        return evaluation

    def delete_default_moves(self, evaluation: Evaluation) -> List[DeleteResult]:
        return [self.client.delete_move(move.id) for move in evaluation.moves if move.id is not None]

    def delete_root(self, remote_id: UUID) -> DeleteResult:
        return self.client.delete_evaluation(remote_id)

    def create_move(self, msel: Msel, move: Move) -> UUID:
        form = CiteMove(
            evaluation_id=require(msel, "cite_evaluation_id"),
            description=move.description,
            move_number=move.move_number,
            situation_time=move.situation_time,
            situation_description=move.situation_description,
        )
        return self.client.create_move(form).id

    def create_team(self, msel: Msel, team: Team) -> UUID:
        form = CiteTeam(
            name=team.name,
            short_name=team.short_name,
            evaluation_id=require(msel, "cite_evaluation_id"),
            team_type_id=require(team, "cite_team_type_id"),
        )
        remote = self.client.create_team(form)
        logger.info(f"cite: created team {team.name} ({remote.id})")
        return remote.id

    @staticmethod
    def is_observer(msel: Msel, user: User) -> bool:
        return any(
            r.user_id == user.id and r.role == MselRole.CITE_OBSERVER
            for r in msel.user_msel_roles
        )

    def create_team_user(self, msel: Msel, team: Team, user: User) -> UUID:
        form = CiteTeamUser(
            team_id=require(team, "cite_team_id"),
            user_id=user.id,
            is_observer=self.is_observer(msel, user),
        )
        return self.client.create_team_user(form).id

    def create_role(self, msel: Msel, role: CiteRole) -> UUID:
        form = CiteRoleForm(
            evaluation_id=require(msel, "cite_evaluation_id"),
            team_id=require(role.team, "cite_team_id"),
            name=role.name,
        )
        return self.client.create_role(form).id

    def create_action(self, msel: Msel, action: CiteAction) -> UUID:
        form = CiteActionForm(
            evaluation_id=require(msel, "cite_evaluation_id"),
            team_id=require(action.team, "cite_team_id"),
            move_number=action.move_number,
            inject_number=action.inject_number,
            description=action.description,
        )
        return self.client.create_action(form).id
