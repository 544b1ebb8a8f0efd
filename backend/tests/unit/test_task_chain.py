# backend/tests/unit/test_task_chain.py
import json
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

from blueprint.exceptions import MissingPreconditionError
from blueprint.models import (
    Msel, Move, ScenarioEvent, SteamfitterTask, SteamfitterTaskAction, SteamfitterTaskTrigger
)
from blueprint.services.task_chain import (
    TaskKind, compile_task_chain, emit_task_chain
)


def make_msel(moves=(0, 1, 2), use_cite=True, use_gallery=True, events=()):
    msel = Msel(
        name="Chain",
        start_time=datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc),
        use_cite=use_cite,
        use_gallery=use_gallery,
        player_view_id=uuid4(),
        cite_evaluation_id=uuid4(),
        gallery_exhibit_id=uuid4(),
        steamfitter_scenario_id=uuid4(),
    )
    msel.moves = [Move(move_number=n, delta_seconds=n * 600) for n in moves]
    msel.scenario_events = list(events)
    return msel


def event(delta, group=0, task_type=None, **task_fields):
    e = ScenarioEvent(id=uuid4(), delta_seconds=delta, group_order=group, description=f"event at {delta}")
    if task_type is not None:
        e.steamfitter_task = SteamfitterTask(task_type=task_type, **task_fields)
    return e


def test_cite_only_emits_move_changes_after_first_move(settings):
    msel = make_msel(use_cite=True, use_gallery=False)

    drafts = compile_task_chain(msel, settings)

    assert [d.kind for d in drafts] == [TaskKind.MOVE_CHANGE, TaskKind.MOVE_CHANGE]
    assert [d.placement.move for d in drafts] == [1, 2]
    assert all("Cite" in d.name for d in drafts)
    assert drafts[0].action_parameters["Url"] == (
        f"http://cite.test/api/evaluations/{msel.cite_evaluation_id}/move/1"
    )


def test_gallery_move_change_resets_inject(settings):
    msel = make_msel(moves=(0, 1), use_cite=False, use_gallery=True)

    drafts = compile_task_chain(msel, settings)

    assert len(drafts) == 1
    assert drafts[0].name == "01-00 Gallery move 1"
    assert drafts[0].action_parameters["Url"].endswith("/move/1/inject/0")


def test_group_changes_only_for_gallery(settings):
    def events():
        return [event(600), event(650), event(700)]

    with_gallery = compile_task_chain(make_msel(moves=(1,), use_gallery=True, use_cite=False, events=events()), settings)
    without = compile_task_chain(make_msel(moves=(1,), use_gallery=False, use_cite=True, events=events()), settings)

    assert [d.name for d in with_gallery] == ["01-01 Gallery inject 1", "01-02 Gallery inject 2"]
    assert without == []


def test_no_group_changes_before_exercise(settings):
    events = [event(10), event(20), event(30)]
    msel = make_msel(moves=(1,), use_gallery=True, use_cite=False, events=events)
    msel.moves[0].delta_seconds = 600

    assert compile_task_chain(msel, settings) == []


def test_chain_length_and_order(settings):
    events = [
        event(60, task_type="Notification", description="Hello {playerViewId}"),
        event(60, group=1),
        event(700, task_type="SituationUpdate", description="Worse"),
        event(1300, task_type="http_get", api_url="{galleryApiUrl}/api/exhibits/{galleryExhibitId}"),
        event(1400),
    ]
    msel = make_msel(events=events)

    drafts = compile_task_chain(msel, settings)

    move_changes = [d for d in drafts if d.kind == TaskKind.MOVE_CHANGE]
    group_changes = [d for d in drafts if d.kind == TaskKind.GROUP_CHANGE]
    directives = [d for d in drafts if d.kind == TaskKind.DIRECTIVE]
    assert (len(move_changes), len(group_changes), len(directives)) == (4, 1, 3)
    assert len(drafts) == 8

    keys = [(d.placement.move, d.delta_seconds) for d in drafts]
    assert keys == sorted(keys)
    assert [d.name[:5] for d in drafts] == ["00-00", "01-00", "01-00", "01-00", "02-00", "02-00", "02-00", "02-01"]


def test_first_task_is_manual_and_later_follow_directive(settings):
    events = [
        event(0, task_type="http_get", api_url="http://a", trigger_condition=SteamfitterTaskTrigger.SUCCESS),
        event(10, task_type="http_get", api_url="http://b", trigger_condition=SteamfitterTaskTrigger.SUCCESS),
    ]
    drafts = compile_task_chain(make_msel(moves=(0,), use_gallery=False, events=events), settings)

    assert drafts[0].trigger_condition == SteamfitterTaskTrigger.MANUAL
    assert drafts[1].trigger_condition == SteamfitterTaskTrigger.SUCCESS


def test_delays_follow_delta_gaps(settings):
    events = [
        event(0, task_type="http_get", api_url="http://a"),
        event(90, task_type="http_get", api_url="http://b", delay_seconds=5),
    ]
    drafts = compile_task_chain(make_msel(moves=(0,), use_gallery=False, events=events), settings)

    assert [d.delay_seconds for d in drafts] == [0, 95]


def test_notification_posts_to_player_view(settings):
    msel = make_msel(moves=(0,), events=[event(0, task_type="Notification", description="View {playerViewId}")])

    draft = compile_task_chain(msel, settings)[0]

    assert draft.action == SteamfitterTaskAction.HTTP_POST
    assert draft.api_url == "http"
    assert draft.action_parameters["Url"] == f"http://player.test/api/views/{msel.player_view_id}/notifications"
    assert json.loads(draft.action_parameters["Body"]) == {"text": f"View {msel.player_view_id}"}


def test_situation_update_puts_to_cite(settings):
    msel = make_msel(moves=(0,), events=[event(120, task_type="SituationUpdate", description="Worse")])

    draft = compile_task_chain(msel, settings)[0]

    assert draft.action == SteamfitterTaskAction.HTTP_PUT
    assert draft.action_parameters["Url"].endswith(f"/api/evaluations/{msel.cite_evaluation_id}/situation")
    body = json.loads(draft.action_parameters["Body"])
    assert body["situationDescription"] == "Worse"
    assert body["situationTime"].startswith("2030-01-01T12:02:00")


@pytest.mark.parametrize("task_type,action", [
    ("http_get", SteamfitterTaskAction.HTTP_GET),
    ("http_put", SteamfitterTaskAction.HTTP_PUT),
    ("http_delete", SteamfitterTaskAction.HTTP_DELETE),
])
def test_http_passthrough(settings, task_type, action):
    msel = make_msel(moves=(0,), events=[event(0, task_type=task_type, api_url="{citeApiUrl}/api/x")])

    draft = compile_task_chain(msel, settings)[0]

    assert draft.action == action
    assert draft.action_parameters["Url"] == "http://cite.test/api/x"


def test_email_goes_to_email_backend(settings):
    msel = make_msel(moves=(0,), events=[
        event(0, task_type="Email", description="Report in", action_parameters={"To": "red@example.com"})
    ])

    draft = compile_task_chain(msel, settings)[0]

    assert draft.action == SteamfitterTaskAction.SEND_EMAIL
    assert draft.api_url == settings.steamfitter_email_api_url
    assert draft.action_parameters == {"To": "red@example.com", "Body": "Report in"}


def test_unknown_task_type_falls_back_to_post(settings, caplog):
    msel = make_msel(moves=(0,), events=[event(0, task_type="Carrier pigeon", api_url="http://coop")])

    draft = compile_task_chain(msel, settings)[0]

    assert draft.action == SteamfitterTaskAction.HTTP_POST
    assert draft.action_parameters["Url"] == "http://coop"
    assert "unrecognized task type" in caplog.text


def test_strict_compile_requires_remote_ids(settings):
    msel = make_msel(use_cite=True, use_gallery=False)
    msel.cite_evaluation_id = None

    with pytest.raises(MissingPreconditionError):
        compile_task_chain(msel, settings)


def test_preview_keeps_placeholders(settings):
    msel = make_msel(use_cite=True, use_gallery=False)
    msel.cite_evaluation_id = None

    drafts = compile_task_chain(msel, settings, strict=False)

    assert "{citeEvaluationId}" in drafts[0].action_parameters["Url"]


def test_emit_links_each_task_to_previous(settings):
    msel = make_msel()
    drafts = compile_task_chain(msel, settings)
    created = [uuid4() for _ in drafts]
    create_task = MagicMock(side_effect=created)
    scenario_id = uuid4()

    task_ids = emit_task_chain(drafts, scenario_id, create_task)

    assert task_ids == created
    forms = [c.args[0] for c in create_task.call_args_list]
    assert [f.trigger_task_id for f in forms] == [None] + created[:-1]
    assert all(f.scenario_id == scenario_id for f in forms)
    # a strict path: nobody is triggered by the same task twice
    triggers = [f.trigger_task_id for f in forms if f.trigger_task_id]
    assert len(triggers) == len(set(triggers))


def test_emit_stops_at_checkpoint(settings):
    drafts = compile_task_chain(make_msel(), settings)
    create_task = MagicMock(side_effect=lambda form: uuid4())
    checkpoint = MagicMock(side_effect=[None, RuntimeError("cancelled")])

    with pytest.raises(RuntimeError):
        emit_task_chain(drafts, uuid4(), create_task, checkpoint=checkpoint)

    assert create_task.call_count == 1
