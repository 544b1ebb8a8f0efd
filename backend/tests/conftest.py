import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blueprint.main import app
from blueprint.database import get_db
from blueprint.api.deps import get_client_factory
from blueprint.clients import TargetClients
from blueprint.clients.base import DeleteResult
from blueprint.clients.cite import CiteApiClient
from blueprint.clients.gallery import GalleryApiClient
from blueprint.clients.player import PlayerApiClient
from blueprint.clients.steamfitter import SteamfitterApiClient
from blueprint.config import Settings, get_settings
from blueprint.models import (
    Base, Msel, Move, ScenarioEvent, SteamfitterTask, User, Team, TeamUser, UserTeamRole,
    UserMselRole, TeamRole, MselRole, DataField, DataValue, Card, CardTeam, CiteRole, CiteAction,
    PlayerApplication, PlayerApplicationTeam,
)
from blueprint.schemas.cite import Evaluation, CiteMove
from blueprint.schemas.common import RemoteEntity

EXERCISE_START = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        player_api_url="http://player.test",
        cite_api_url="http://cite.test",
        gallery_api_url="http://gallery.test",
        steamfitter_api_url="http://steamfitter.test",
    )


def _created(*args, **kwargs):
    return RemoteEntity(id=uuid4())


def _evaluation(form):
    evaluation_id = uuid4()
    return Evaluation(
        id=evaluation_id,
        description=form.description,
        moves=[CiteMove(id=uuid4(), evaluation_id=evaluation_id, move_number=0)],
    )


@pytest.fixture
def mock_clients():
    """Target clients that hand out fresh ids and report every delete as done."""
    player = MagicMock(spec=PlayerApiClient)
    cite = MagicMock(spec=CiteApiClient)
    gallery = MagicMock(spec=GalleryApiClient)
    steamfitter = MagicMock(spec=SteamfitterApiClient)

    for client in (player, cite, gallery, steamfitter):
        client.get_user_ids.return_value = set()

    for name in ("create_view", "create_team", "create_user",
                 "create_application", "create_application_instance"):
        getattr(player, name).side_effect = _created
    player.add_user_to_team.return_value = None
    player.delete_view.return_value = DeleteResult.OK

    cite.create_evaluation.side_effect = _evaluation
    for name in ("create_move", "create_team", "create_user", "create_team_user",
                 "create_role", "create_action"):
        getattr(cite, name).side_effect = _created
    cite.delete_move.return_value = DeleteResult.OK
    cite.delete_evaluation.return_value = DeleteResult.OK

    for name in ("create_collection", "create_exhibit", "create_team", "create_user",
                 "create_team_user", "create_card", "create_team_card",
                 "create_article", "create_team_article"):
        getattr(gallery, name).side_effect = _created
    gallery.delete_collection.return_value = DeleteResult.OK

    steamfitter.create_scenario.side_effect = _created
    steamfitter.create_task.side_effect = _created
    steamfitter.delete_scenario.return_value = DeleteResult.OK

    return TargetClients(player=player, cite=cite, gallery=gallery, steamfitter=steamfitter)


@pytest.fixture
def build_msel(db_session):
    """
    Persist a small exercise: moves 0-2, a Red team (Cite type, two users)
    and a Blue team (one user, no Cite type), five scenario events, a card,
    a Gallery article on the second event, Cite roles/actions and a Player app.
    """
    def _build(use_player=True, use_cite=True, use_gallery=True, use_steamfitter=True):
        alice = User(id=uuid4(), name="alice")
        bob = User(id=uuid4(), name="bob")
        msel = Msel(
            name="Exercise Alpha",
            description="Quarterly exercise",
            start_time=EXERCISE_START,
            duration_seconds=3600,
            use_player=use_player,
            use_cite=use_cite,
            use_gallery=use_gallery,
            use_steamfitter=use_steamfitter,
            cite_scoring_model_id=uuid4(),
        )
        msel.moves = [
            Move(move_number=0, delta_seconds=0, situation_description="Calm before the storm",
                 situation_time=EXERCISE_START),
            Move(move_number=1, delta_seconds=600, description="Escalation"),
            Move(move_number=2, delta_seconds=1200, description="Response"),
        ]

        red = Team(name="Red Cell", short_name="RED", email="red@example.com", cite_team_type_id=uuid4())
        red.team_users = [TeamUser(user=alice), TeamUser(user=bob)]
        red.user_team_roles = [UserTeamRole(user_id=bob.id, role=TeamRole.OBSERVER)]
        blue = Team(name="Blue Cell", short_name="BLUE")
        blue.team_users = [TeamUser(user=alice)]
        msel.teams = [red, blue]
        msel.user_msel_roles = [UserMselRole(user_id=bob.id, role=MselRole.CITE_OBSERVER)]

        delivery = DataField(name="Delivery", gallery_article_parameter="DeliveryMethod")
        title = DataField(name="Title", gallery_article_parameter="Name")
        to_org = DataField(name="To", gallery_article_parameter="ToOrg")
        msel.data_fields = [delivery, title, to_org]

        e1 = ScenarioEvent(delta_seconds=60, group_order=0, description="Kickoff notice")
        e1.steamfitter_task = SteamfitterTask(task_type="Notification", name="Notify players",
                                              description="Exercise {playerViewId} is live")
        e2 = ScenarioEvent(delta_seconds=60, group_order=1, description="News breaks")
        e2.data_values = [
            DataValue(data_field=delivery, value="Gallery, Email"),
            DataValue(data_field=title, value="Breaking news"),
            DataValue(data_field=to_org, value="RED"),
        ]
        e3 = ScenarioEvent(delta_seconds=700, group_order=0, description="Situation changes")
        e3.steamfitter_task = SteamfitterTask(task_type="SituationUpdate", description="Tensions rise")
        e4 = ScenarioEvent(delta_seconds=1300, group_order=0, description="Check exhibit")
        e4.steamfitter_task = SteamfitterTask(task_type="http_get",
                                              api_url="{galleryApiUrl}/api/exhibits/{galleryExhibitId}")
        e5 = ScenarioEvent(delta_seconds=1400, group_order=0, description="Late inject")
        msel.scenario_events = [e1, e2, e3, e4, e5]

        card = Card(name="Intel", move=1, inject=0)
        card.card_teams = [CardTeam(team=red, is_shown_on_wall=True, can_post_articles=True)]
        msel.cards = [card]

        msel.cite_roles = [CiteRole(team=red, name="Analyst")]
        msel.cite_actions = [
            CiteAction(team=red, move_number=1, inject_number=0, action_number=1, description="Assess"),
            CiteAction(team=blue, move_number=1, inject_number=0, action_number=1, description="Skipped"),
        ]

        app_ = PlayerApplication(name="Gallery", url="{galleryApiUrl}/?exhibit={galleryExhibitId}")
        app_.application_teams = [PlayerApplicationTeam(team=red, display_order=1)]
        msel.player_applications = [app_]

        db_session.add_all([alice, bob, msel])
        db_session.commit()
        return msel

    return _build


@pytest.fixture
def client(db_session, mock_clients, settings):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_client_factory] = lambda: lambda: mock_clients
    app.dependency_overrides[get_settings] = lambda: settings

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
