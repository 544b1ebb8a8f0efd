# backend/blueprint/services/integrations/player.py
import logging
from typing import Optional
from uuid import UUID

from blueprint.clients.base import DeleteResult
from blueprint.clients.player import PlayerApiClient
from blueprint.config import Settings
from blueprint.models.msel import Msel
from blueprint.models.player_application import PlayerApplication, PlayerApplicationTeam
from blueprint.models.team import Team, User
from blueprint.schemas.player import (
    ViewForm, TeamForm, PlayerUser, Application, ApplicationInstanceForm
)
from blueprint.services.integrations.base import TargetAdapter, require
from blueprint.services.templating import msel_placeholders, render

logger = logging.getLogger(__name__)


class PlayerAdapter(TargetAdapter):
    target = "player"
    root_field = "player_view_id"

    def __init__(self, client: PlayerApiClient, settings: Settings):
        super().__init__(client)
        self.settings = settings

    def user_form(self, user: User) -> PlayerUser:
        return PlayerUser(id=user.id, name=user.name)

    def create_view(self, msel: Msel, view_id: Optional[UUID] = None) -> UUID:
        form = ViewForm(
            id=view_id,
            name=msel.name,
            description=msel.description,
            status="Active",
            create_admin_team=True,
        )
        view = self.client.create_view(form)
        logger.info(f"player: created view {view.id} for MSEL {msel.name}")
        return view.id

    def delete_root(self, remote_id: UUID) -> DeleteResult:
        return self.client.delete_view(remote_id)

    def create_team(self, msel: Msel, team: Team) -> UUID:
        view_id = require(msel, "player_view_id")
        remote = self.client.create_team(view_id, TeamForm(name=team.name))
        logger.info(f"player: created team {team.name} ({remote.id})")
        return remote.id

    def add_team_user(self, team: Team, user: User) -> None:
        team_id = require(team, "player_team_id")
        self.client.add_user_to_team(team_id, user.id)

    def application_url(self, msel: Msel, application: PlayerApplication) -> Optional[str]:
        """Fill in the remote ids; anything that does not end up an http(s) URL is dropped."""
        if not application.url:
            return None
        url = render(application.url, msel_placeholders(msel, self.settings))
        if not url.startswith(("http://", "https://")):
            logger.warning(f"player: application {application.name} has no usable URL ({url!r})")
            return None
        return url

    def create_application(self, msel: Msel, application: PlayerApplication) -> UUID:
        view_id = require(msel, "player_view_id")
        form = Application(
            name=application.name,
            view_id=view_id,
            url=self.application_url(msel, application),
            icon=application.icon,
            embeddable=application.embeddable,
            load_in_background=application.load_in_background,
        )
        remote = self.client.create_application(view_id, form)
        logger.info(f"player: created application {application.name} ({remote.id})")
        return remote.id

    def create_application_instance(self, application_team: PlayerApplicationTeam, application_id: UUID) -> UUID:
        team_id = require(application_team.team, "player_team_id")
        form = ApplicationInstanceForm(
            team_id=team_id,
            application_id=application_id,
            display_order=application_team.display_order,
        )
        return self.client.create_application_instance(team_id, form).id
