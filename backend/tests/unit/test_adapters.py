# backend/tests/unit/test_adapters.py
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from uuid import uuid4

from blueprint.clients.base import DeleteResult
from blueprint.exceptions import MissingPreconditionError
from blueprint.models import (
    Msel, Move, ScenarioEvent, Team, User, UserTeamRole, UserMselRole, TeamRole, MselRole,
    DataField, DataValue, Inject, InjectType, Card, PlayerApplication, GalleryArticleParameter,
)
from blueprint.schemas.common import RemoteEntity
from blueprint.schemas.gallery import ArticleStatus, SourceType
from blueprint.services.integrations import PlayerAdapter, CiteAdapter, GalleryAdapter, SteamfitterAdapter
from blueprint.services.integrations.cite import DEFAULT_SITUATION
from blueprint.services.integrations.gallery import article_values
from blueprint.services.timeline import Placement


@pytest.fixture
def remote_client():
    client = MagicMock()
    client.create_user.return_value = RemoteEntity(id=uuid4())
    return client


class TestUserDeduplication:
    def test_known_user_is_not_created(self, remote_client):
        adapter = CiteAdapter(remote_client)
        user = User(id=uuid4(), name="alice")

        assert adapter.ensure_user(user, {user.id}) is False
        remote_client.create_user.assert_not_called()

    def test_created_user_is_remembered(self, remote_client):
        adapter = GalleryAdapter(remote_client)
        user = User(id=uuid4(), name="alice")
        known = set()

        assert adapter.ensure_user(user, known) is True
        assert adapter.ensure_user(user, known) is False
        assert remote_client.create_user.call_count == 1
        assert known == {user.id}


class TestPull:
    def test_unpushed_msel_makes_no_call(self, remote_client):
        adapter = SteamfitterAdapter(remote_client)

        assert adapter.pull(Msel(name="x")) is None
        remote_client.delete_scenario.assert_not_called()

    def test_delete_result_is_reported(self, remote_client):
        remote_client.delete_evaluation.return_value = DeleteResult.NOT_FOUND
        msel = Msel(name="x", cite_evaluation_id=uuid4())

        assert CiteAdapter(remote_client).pull(msel) == DeleteResult.NOT_FOUND
        remote_client.delete_evaluation.assert_called_once_with(msel.cite_evaluation_id)


class TestPlayerAdapter:
    def test_team_requires_view(self, remote_client, settings):
        adapter = PlayerAdapter(remote_client, settings)

        with pytest.raises(MissingPreconditionError) as exc:
            adapter.create_team(Msel(name="x"), Team(name="Red"))
        assert exc.value.field == "player_view_id"
        remote_client.create_team.assert_not_called()

    def test_view_uses_supplied_id(self, remote_client, settings):
        view_id = uuid4()
        remote_client.create_view.return_value = RemoteEntity(id=view_id)

        result = PlayerAdapter(remote_client, settings).create_view(Msel(name="Alpha"), view_id)

        form = remote_client.create_view.call_args.args[0]
        assert result == view_id
        assert form.id == view_id
        assert form.create_admin_team is True

    def test_application_url_placeholders(self, remote_client, settings):
        msel = Msel(name="x", gallery_exhibit_id=uuid4())
        app = PlayerApplication(name="Gallery", url="{galleryApiUrl}/?exhibit={galleryExhibitId}")

        url = PlayerAdapter(remote_client, settings).application_url(msel, app)

        assert url == f"http://gallery.test/?exhibit={msel.gallery_exhibit_id}"

    @pytest.mark.parametrize("raw", ["{citeEvaluationId}", "ftp://files", ""])
    def test_non_http_url_is_dropped(self, remote_client, settings, raw):
        msel = Msel(name="x", cite_evaluation_id=uuid4())

        url = PlayerAdapter(remote_client, settings).application_url(msel, PlayerApplication(name="a", url=raw))

        assert url is None


class TestCiteAdapter:
    def test_evaluation_starts_from_move_zero(self, remote_client):
        when = datetime(2030, 1, 1, tzinfo=timezone.utc)
        msel = Msel(name="Alpha", cite_scoring_model_id=uuid4())
        msel.moves = [Move(move_number=0, situation_description="Calm", situation_time=when)]

        form = CiteAdapter(remote_client).evaluation_form(msel)

        assert form.description == "Alpha"
        assert form.situation_description == "Calm"
        assert form.situation_time == when
        assert form.current_move_number == 0

    def test_evaluation_default_situation(self, remote_client):
        msel = Msel(name="Alpha", cite_scoring_model_id=uuid4())

        form = CiteAdapter(remote_client).evaluation_form(msel)

        assert form.situation_description == DEFAULT_SITUATION

    def test_evaluation_requires_scoring_model(self, remote_client):
        with pytest.raises(MissingPreconditionError):
            CiteAdapter(remote_client).evaluation_form(Msel(name="Alpha"))

    def test_team_user_observer_flag(self, remote_client):
        remote_client.create_team_user.return_value = RemoteEntity(id=uuid4())
        observer = User(id=uuid4(), name="bob")
        msel = Msel(name="x")
        msel.user_msel_roles = [UserMselRole(user_id=observer.id, role=MselRole.CITE_OBSERVER)]
        team = Team(name="Red", cite_team_id=uuid4())
        adapter = CiteAdapter(remote_client)

        adapter.create_team_user(msel, team, observer)
        adapter.create_team_user(msel, team, User(id=uuid4(), name="alice"))

        flags = [c.args[0].is_observer for c in remote_client.create_team_user.call_args_list]
        assert flags == [True, False]


class TestGalleryAdapter:
    def make_event(self, msel, **values):
        fields = {f.gallery_article_parameter: f for f in msel.data_fields}
        event = ScenarioEvent(id=uuid4(), delta_seconds=0, group_order=0)
        event.data_values = [DataValue(data_field_id=fields[k].id, value=v) for k, v in values.items()]
        msel.scenario_events.append(event)
        return event

    def make_msel(self):
        msel = Msel(name="x", gallery_collection_id=uuid4(), gallery_exhibit_id=uuid4())
        msel.data_fields = [
            DataField(id=uuid4(), name=p, gallery_article_parameter=p)
            for p in ("DeliveryMethod", "Name", "Status", "SourceType", "DatePosted",
                      "OpenInNewTab", "CardId", "ToOrg")
        ]
        return msel

    def test_no_article_without_gallery_delivery(self, remote_client):
        msel = self.make_msel()
        event = self.make_event(msel, DeliveryMethod="Email", Name="n")

        assert GalleryAdapter(remote_client).article_form(msel, event, Placement(0, 0)) is None

    def test_article_fields(self, remote_client):
        msel = self.make_msel()
        card = Card(id=uuid4(), name="Intel", gallery_id=uuid4())
        msel.cards = [card]
        event = self.make_event(
            msel,
            DeliveryMethod="Gallery",
            Name="Breaking",
            Status="approved",
            SourceType="social",
            DatePosted="2030-01-01T10:00:00+00:00",
            OpenInNewTab="True",
            CardId=str(card.id),
        )

        article = GalleryAdapter(remote_client).article_form(msel, event, Placement(2, 3))

        assert article.name == "Breaking"
        assert (article.move, article.inject) == (2, 3)
        assert article.status == ArticleStatus.APPROVED
        assert article.source_type == SourceType.SOCIAL
        assert article.date_posted == datetime(2030, 1, 1, 10, tzinfo=timezone.utc)
        assert article.open_in_new_tab is True
        assert article.card_id == card.gallery_id
        assert article.collection_id == msel.gallery_collection_id

    def test_unparseable_values_fall_back(self, remote_client):
        msel = self.make_msel()
        event = self.make_event(
            msel, DeliveryMethod="Gallery", Status="??", SourceType="carrier pigeon",
            DatePosted="yesterday", OpenInNewTab="maybe", CardId="not-a-guid",
        )

        article = GalleryAdapter(remote_client).article_form(msel, event, Placement(0, 0))

        assert article.status == ArticleStatus.UNUSED
        assert article.source_type == SourceType.NEWS
        assert article.date_posted is None
        assert article.open_in_new_tab is False
        assert article.card_id is None

    def test_recipients_by_short_name_or_all(self, remote_client):
        msel = self.make_msel()
        red, blue, green = Team(name="Red", short_name="RED"), Team(name="Blue", short_name="BLUE"), Team(name="Green", short_name="GREEN")
        msel.teams = [red, blue, green]
        adapter = GalleryAdapter(remote_client)

        some = self.make_event(msel, ToOrg="RED, BLUE")
        everyone = self.make_event(msel, ToOrg="ALL")

        assert adapter.article_recipients(msel, some) == [red, blue]
        assert adapter.article_recipients(msel, everyone) == [red, blue, green]

    def test_event_value_overrides_inject_value(self):
        field = DataField(id=uuid4(), name="Name", gallery_article_parameter="Name")
        inject_type = InjectType(name="News")
        inject_type.data_fields = [field]
        inject = Inject(name="Template", inject_type=inject_type)
        inject.data_values = [DataValue(data_field_id=field.id, value="From inject")]
        msel = Msel(name="x")
        event = ScenarioEvent(id=uuid4(), inject=inject)

        assert article_values(msel, event)[GalleryArticleParameter.NAME] == "From inject"

        event.data_values = [DataValue(data_field_id=field.id, value="From event")]
        assert article_values(msel, event)[GalleryArticleParameter.NAME] == "From event"

    def test_unset_event_value_keeps_inject_value(self):
        name = DataField(id=uuid4(), name="Name", gallery_article_parameter="Name")
        url = DataField(id=uuid4(), name="Url", gallery_article_parameter="Url")
        inject_type = InjectType(name="News")
        inject_type.data_fields = [name, url]
        inject = Inject(name="Template", inject_type=inject_type)
        inject.data_values = [
            DataValue(data_field_id=name.id, value="From inject"),
            DataValue(data_field_id=url.id, value="https://news.test/a"),
        ]
        event = ScenarioEvent(id=uuid4(), inject=inject)
        event.data_values = [
            DataValue(data_field_id=name.id, value=None),
            DataValue(data_field_id=url.id, value=None),
        ]

        values = article_values(Msel(name="x"), event)

        assert values == {
            GalleryArticleParameter.NAME: "From inject",
            GalleryArticleParameter.URL: "https://news.test/a",
        }

    def test_team_user_observer_from_team_role(self, remote_client):
        remote_client.create_team_user.return_value = RemoteEntity(id=uuid4())
        observer = User(id=uuid4(), name="bob")
        team = Team(name="Red", gallery_team_id=uuid4())
        team.user_team_roles = [UserTeamRole(user_id=observer.id, role=TeamRole.OBSERVER)]

        GalleryAdapter(remote_client).create_team_user(team, observer)

        assert remote_client.create_team_user.call_args.args[0].is_observer is True


class TestSteamfitterAdapter:
    def test_scenario_window_starts_now_when_msel_is_past(self, remote_client):
        now = datetime(2030, 6, 1, tzinfo=timezone.utc)
        msel = Msel(name="x", start_time=now - timedelta(days=1), duration_seconds=3600, player_view_id=uuid4())

        form = SteamfitterAdapter(remote_client).scenario_form(msel, now)

        assert form.start_date == now
        assert form.end_date == now + timedelta(hours=1)
        assert form.view_id == msel.player_view_id

    def test_scenario_window_uses_future_start(self, remote_client):
        now = datetime(2030, 6, 1, tzinfo=timezone.utc)
        start = now + timedelta(days=2)
        msel = Msel(name="x", start_time=start, duration_seconds=60)

        form = SteamfitterAdapter(remote_client).scenario_form(msel, now)

        assert (form.start_date, form.end_date) == (start, start + timedelta(seconds=60))
