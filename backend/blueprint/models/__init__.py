from blueprint.models.base import Base
from blueprint.models.msel import Msel, IntegrationStatus, MSEL_REMOTE_ID_FIELDS
from blueprint.models.move import Move
from blueprint.models.scenario_event import ScenarioEvent
from blueprint.models.steamfitter_task import (
    SteamfitterTask, SteamfitterIntegrationType, SteamfitterTaskAction, SteamfitterTaskTrigger
)
from blueprint.models.team import (
    User, Team, TeamUser, UserTeamRole, UserMselRole, TeamRole, MselRole, TEAM_REMOTE_ID_FIELDS
)
from blueprint.models.inject import Inject, InjectType
from blueprint.models.data_field import DataField, DataValue, DataFieldType, GalleryArticleParameter
from blueprint.models.card import Card, CardTeam
from blueprint.models.cite import CiteRole, CiteAction
from blueprint.models.player_application import PlayerApplication, PlayerApplicationTeam
from blueprint.models.event_log import IntegrationEvent, IntegrationEventType

__all__ = [
    "Base",
    "Msel", "IntegrationStatus", "MSEL_REMOTE_ID_FIELDS",
    "Move",
    "ScenarioEvent",
    "SteamfitterTask", "SteamfitterIntegrationType", "SteamfitterTaskAction", "SteamfitterTaskTrigger",
    "User", "Team", "TeamUser", "UserTeamRole", "UserMselRole", "TeamRole", "MselRole", "TEAM_REMOTE_ID_FIELDS",
    "Inject", "InjectType",
    "DataField", "DataValue", "DataFieldType", "GalleryArticleParameter",
    "Card", "CardTeam",
    "CiteRole", "CiteAction",
    "PlayerApplication", "PlayerApplicationTeam",
    "IntegrationEvent", "IntegrationEventType",
]
