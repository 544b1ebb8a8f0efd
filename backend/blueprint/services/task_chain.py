# backend/blueprint/services/task_chain.py
"""Compile an MSEL timeline into a linear chain of Steamfitter tasks.

The chain is walked move by move. Entering any move after the first flips
the move pointer of Cite and Gallery, each new group inside a move flips
Gallery's inject pointer, and every scenario event that carries a
Steamfitter directive becomes one task. Each task is triggered by the one
emitted before it.
"""
import json
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional
from uuid import UUID

from blueprint.config import Settings
from blueprint.exceptions import MissingPreconditionError
from blueprint.models.msel import Msel
from blueprint.models.scenario_event import ScenarioEvent
from blueprint.models.steamfitter_task import (
    SteamfitterIntegrationType, SteamfitterTask, SteamfitterTaskAction, SteamfitterTaskTrigger
)
from blueprint.schemas.steamfitter import TaskForm
from blueprint.services.templating import msel_placeholders, render
from blueprint.services.timeline import BEFORE_EXERCISE, Placement, walk_timeline

logger = logging.getLogger(__name__)


class TaskKind(str, Enum):
    MOVE_CHANGE = "move_change"
    GROUP_CHANGE = "group_change"
    DIRECTIVE = "directive"


class DirectiveTemplate(NamedTuple):
    action: SteamfitterTaskAction
    # None: use the directive's own api_url
    url: Optional[str]
    # None: no body
    body: Optional[str]
    # Msel fields the url or body refers to
    requires: tuple = ()


DIRECTIVE_TEMPLATES: Dict[SteamfitterIntegrationType, DirectiveTemplate] = {
    SteamfitterIntegrationType.NOTIFICATION: DirectiveTemplate(
        SteamfitterTaskAction.HTTP_POST,
        "{playerApiUrl}/api/views/{playerViewId}/notifications",
        "notification",
        ("player_view_id",),
    ),
    SteamfitterIntegrationType.SITUATION_UPDATE: DirectiveTemplate(
        SteamfitterTaskAction.HTTP_PUT,
        "{citeApiUrl}/api/evaluations/{citeEvaluationId}/situation",
        "situation",
        ("cite_evaluation_id",),
    ),
    SteamfitterIntegrationType.HTTP_GET: DirectiveTemplate(SteamfitterTaskAction.HTTP_GET, None, None),
    SteamfitterIntegrationType.HTTP_PUT: DirectiveTemplate(SteamfitterTaskAction.HTTP_PUT, None, "passthrough"),
    SteamfitterIntegrationType.HTTP_DELETE: DirectiveTemplate(SteamfitterTaskAction.HTTP_DELETE, None, None),
    SteamfitterIntegrationType.EMAIL: DirectiveTemplate(SteamfitterTaskAction.SEND_EMAIL, None, "email"),
    # Unrecognized task types are sent as a POST of the directive as written.
    SteamfitterIntegrationType.UNKNOWN: DirectiveTemplate(SteamfitterTaskAction.HTTP_POST, None, "passthrough"),
}

CITE_MOVE_URL = "{citeApiUrl}/api/evaluations/{citeEvaluationId}/move/{moveNumber}"
GALLERY_POINTER_URL = "{galleryApiUrl}/api/exhibits/{galleryExhibitId}/move/{moveNumber}/inject/{injectNumber}"


@dataclass
class TaskDraft:
    """A task as compiled, before it is created in Steamfitter and linked to its predecessor."""
    kind: TaskKind
    placement: Placement
    delta_seconds: int
    name: str
    action: SteamfitterTaskAction
    api_url: str
    action_parameters: Dict[str, str] = field(default_factory=dict)
    description: Optional[str] = None
    trigger_condition: SteamfitterTaskTrigger = SteamfitterTaskTrigger.COMPLETION
    delay_seconds: int = 0
    expiration_seconds: int = 0
    interval_seconds: int = 0
    iterations: int = 1
    vm_mask: Optional[str] = None
    expected_output: Optional[str] = None
    user_executable: bool = False
    repeatable: bool = False
    scenario_event_id: Optional[UUID] = None

    def to_form(self, scenario_id: UUID, trigger_task_id: Optional[UUID]) -> TaskForm:
        return TaskForm(
            name=self.name,
            description=self.description,
            scenario_id=scenario_id,
            action=self.action,
            vm_mask=self.vm_mask,
            api_url=self.api_url,
            action_parameters=self.action_parameters,
            expected_output=self.expected_output,
            expiration_seconds=self.expiration_seconds,
            delay_seconds=self.delay_seconds,
            interval_seconds=self.interval_seconds,
            iterations=self.iterations,
            trigger_task_id=trigger_task_id,
            trigger_condition=self.trigger_condition,
            user_executable=self.user_executable,
            repeatable=self.repeatable,
        )


def task_name(placement: Placement, label: str) -> str:
    return f"{placement.tag} {label}"


class TaskChainCompiler:
    """
    Turns one MSEL into an ordered list of TaskDrafts. No remote calls are made.

    With ``strict`` set, a task that needs a remote id the MSEL does not have
    yet raises MissingPreconditionError. Previews compile with ``strict=False``
    and keep the unresolved {placeholders} in the output.
    """

    def __init__(self, settings: Settings, strict: bool = True):
        self.settings = settings
        self.strict = strict
        self._msel = None
        self._placeholders = {}

    def compile(self, msel: Msel) -> List[TaskDraft]:
        self._placeholders = msel_placeholders(msel, self.settings)
        self._msel = msel
        drafts: List[TaskDraft] = []

        moves = sorted(msel.moves, key=lambda m: m.move_number)
        first_move = moves[0].move_number if moves else None
        # Moves without events still flip the move pointers
        events_by_move: Dict[int, List] = {m.move_number: [] for m in moves}
        for event, placement in walk_timeline(msel):
            events_by_move.setdefault(placement.move, []).append((event, placement))

        for move_number in sorted(events_by_move):
            move_delta = next((m.delta_seconds for m in moves if m.move_number == move_number), 0)
            if move_number not in (BEFORE_EXERCISE, first_move):
                drafts.extend(self._move_change(msel, move_number, move_delta))

            last_group = None
            for event, placement in events_by_move[move_number]:
                if (
                    msel.use_gallery
                    and move_number != BEFORE_EXERCISE
                    and last_group is not None
                    and placement.group != last_group
                ):
                    drafts.append(self._gallery_pointer(move_number, placement.group, event.delta_seconds))
                last_group = placement.group

                if event.steamfitter_task is not None:
                    drafts.append(self._directive(event, placement))

        self._apply_delays(drafts)
        if drafts:
            drafts[0].trigger_condition = SteamfitterTaskTrigger.MANUAL
        logger.debug(f"Compiled {len(drafts)} tasks for MSEL {msel.name}")
        return drafts

    def _check(self, fields) -> None:
        if not self.strict:
            return
        for name in fields:
            if getattr(self._msel, name) is None:
                raise MissingPreconditionError("Msel", name)

    def _render(self, template: Optional[str], **extra) -> str:
        values = dict(self._placeholders)
        values.update({k: str(v) for k, v in extra.items()})
        return render(template, values)

    def _move_change(self, msel: Msel, move_number: int, delta_seconds: int) -> List[TaskDraft]:
        placement = Placement(move_number, 0)
        drafts = []
        if msel.use_cite:
            self._check(("cite_evaluation_id",))
            drafts.append(TaskDraft(
                kind=TaskKind.MOVE_CHANGE,
                placement=placement,
                delta_seconds=delta_seconds,
                name=task_name(placement, f"Cite move {move_number}"),
                action=SteamfitterTaskAction.HTTP_PUT,
                api_url=self.settings.steamfitter_http_api_url,
                action_parameters={"Url": self._render(CITE_MOVE_URL, moveNumber=move_number)},
            ))
        if msel.use_gallery:
            drafts.append(self._gallery_pointer(move_number, 0, delta_seconds, kind=TaskKind.MOVE_CHANGE))
        return drafts

    def _gallery_pointer(
        self,
        move_number: int,
        group: int,
        delta_seconds: int,
        kind: TaskKind = TaskKind.GROUP_CHANGE,
    ) -> TaskDraft:
        self._check(("gallery_exhibit_id",))
        placement = Placement(move_number, group)
        label = f"Gallery move {move_number}" if kind == TaskKind.MOVE_CHANGE else f"Gallery inject {group}"
        return TaskDraft(
            kind=kind,
            placement=placement,
            delta_seconds=delta_seconds,
            name=task_name(placement, label),
            action=SteamfitterTaskAction.HTTP_PUT,
            api_url=self.settings.steamfitter_http_api_url,
            action_parameters={
                "Url": self._render(GALLERY_POINTER_URL, moveNumber=move_number, injectNumber=group)
            },
        )

    def _directive(self, event: ScenarioEvent, placement: Placement) -> TaskDraft:
        task: SteamfitterTask = event.steamfitter_task
        integration_type = task.integration_type
        if integration_type == SteamfitterIntegrationType.UNKNOWN:
            logger.warning(
                f"Scenario event {event.id} has unrecognized task type {task.task_type!r}; sending as HTTP POST"
            )
        template = DIRECTIVE_TEMPLATES[integration_type]
        self._check(template.requires)

        description = self._render(task.description or event.description)
        parameters = {k: self._render(v) for k, v in (task.action_parameters or {}).items()}

        if template.action == SteamfitterTaskAction.SEND_EMAIL:
            api_url = self.settings.steamfitter_email_api_url
            parameters.setdefault("Body", description)
        else:
            api_url = self.settings.steamfitter_http_api_url
            parameters["Url"] = self._render(template.url or task.api_url)
            body = self._body(template.body, event, description, parameters)
            if body is not None:
                parameters["Body"] = body

        label = task.name or event.description or integration_type.value
        return TaskDraft(
            kind=TaskKind.DIRECTIVE,
            placement=placement,
            delta_seconds=event.delta_seconds,
            name=task_name(placement, label),
            description=description,
            action=template.action,
            api_url=api_url,
            action_parameters=parameters,
            trigger_condition=task.trigger_condition or SteamfitterTaskTrigger.COMPLETION,
            delay_seconds=task.delay_seconds or 0,
            expiration_seconds=task.expiration_seconds or 0,
            interval_seconds=task.interval_seconds or 0,
            iterations=task.iterations or 1,
            vm_mask=task.vm_mask,
            expected_output=task.expected_output,
            user_executable=bool(task.user_executable),
            repeatable=bool(task.repeatable),
            scenario_event_id=event.id,
        )

    def _body(self, kind: Optional[str], event: ScenarioEvent, description: str, parameters: Dict[str, str]):
        if kind == "notification":
            return json.dumps({"text": description})
        if kind == "situation":
            situation_time = parameters.get("SituationTime")
            if not situation_time and self._msel.start_time is not None:
                situation_time = (self._msel.start_time + timedelta(seconds=event.delta_seconds)).isoformat()
            return json.dumps({"situationTime": situation_time, "situationDescription": description})
        if kind == "passthrough":
            return parameters.get("Body")
        return None

    @staticmethod
    def _apply_delays(drafts: List[TaskDraft]) -> None:
        """Wait out the gap in delta_seconds since the previous task, on top of any delay of its own."""
        previous = None
        for draft in drafts:
            gap = 0 if previous is None else max(0, draft.delta_seconds - previous)
            draft.delay_seconds = gap + (draft.delay_seconds or 0)
            previous = draft.delta_seconds


def compile_task_chain(msel: Msel, settings: Settings, strict: bool = True) -> List[TaskDraft]:
    return TaskChainCompiler(settings, strict=strict).compile(msel)


def emit_task_chain(
    drafts: List[TaskDraft],
    scenario_id: UUID,
    create_task: Callable[[TaskForm], UUID],
    checkpoint: Optional[Callable[[], None]] = None,
) -> List[UUID]:
    """
    Create the drafts in order, each triggered by the task created before it.

    Returns the remote task ids in chain order.
    """
    tail: Optional[UUID] = None
    task_ids = []
    for draft in drafts:
        if checkpoint is not None:
            checkpoint()
        tail = create_task(draft.to_form(scenario_id, tail))
        task_ids.append(tail)
    return task_ids
