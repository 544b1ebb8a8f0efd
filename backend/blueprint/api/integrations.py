# backend/blueprint/api/integrations.py
import logging
from uuid import UUID
from typing import Optional, List

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse

from blueprint.api.deps import DBSession, ClientFactory, AppSettings
from blueprint.exceptions import (
    MselAlreadyPushedError, MselBusyError, MselNotFoundError, MissingPreconditionError
)
from blueprint.models.event_log import IntegrationEventType
from blueprint.models.msel import Msel
from blueprint.schemas.integration import (
    PushRequest, MselIntegrationResponse, QueuedResponse, NormalizeResponse,
    TaskDraftResponse, TaskChainResponse, IntegrationEventResponse, IntegrationEventList,
)
from blueprint.services.event_service import IntegrationEventService
from blueprint.services.integration_service import IntegrationService
from blueprint.services.ordering import ScenarioEventOrderingService
from blueprint.services.task_chain import compile_task_chain

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/msels", tags=["integrations"])


def get_msel_or_404(db, msel_id: UUID) -> Msel:
    msel = db.query(Msel).filter(Msel.id == msel_id).first()
    if not msel:
        raise HTTPException(status_code=404, detail="MSEL not found")
    return msel


def _queued(msel_id: UUID) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_202_ACCEPTED,
        content=QueuedResponse(msel_id=msel_id).model_dump(mode="json"),
    )


@router.get("/{msel_id}/integration", response_model=MselIntegrationResponse)
def get_integration(msel_id: UUID, db: DBSession):
    """Integration flags, remote ids and push/pull status of an MSEL."""
    return get_msel_or_404(db, msel_id)


@router.post("/{msel_id}/push", response_model=MselIntegrationResponse,
             responses={202: {"model": QueuedResponse}})
def push_msel(
    msel_id: UUID,
    db: DBSession,
    make_clients: ClientFactory,
    settings: AppSettings,
    data: Optional[PushRequest] = None,
):
    data = data or PushRequest()
    get_msel_or_404(db, msel_id)

    if data.background:
        from blueprint.tasks.integration import push_msel_task
        push_msel_task.send(str(msel_id), str(data.player_view_id) if data.player_view_id else None)
        logger.info(f"Queued push of MSEL {msel_id}")
        return _queued(msel_id)

    clients = make_clients()
    service = IntegrationService(db, clients, settings)
    try:
        return service.push(msel_id, data.player_view_id)
    except (MselAlreadyPushedError, MselBusyError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except MselNotFoundError:
        raise HTTPException(status_code=404, detail="MSEL not found")
    except Exception as e:
        logger.error(f"Push of MSEL {msel_id} failed at '{service.current_step}': {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to push MSEL to integrations",
        )
    finally:
        clients.close()


@router.post("/{msel_id}/pull", response_model=MselIntegrationResponse,
             responses={202: {"model": QueuedResponse}})
def pull_msel(msel_id: UUID, db: DBSession, make_clients: ClientFactory, settings: AppSettings, background: bool = False):
    get_msel_or_404(db, msel_id)

    if background:
        from blueprint.tasks.integration import pull_msel_task
        pull_msel_task.send(str(msel_id))
        logger.info(f"Queued pull of MSEL {msel_id}")
        return _queued(msel_id)

    clients = make_clients()
    try:
        return IntegrationService(db, clients, settings).pull(msel_id)
    except MselBusyError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    finally:
        clients.close()


@router.post("/{msel_id}/scenario-events/normalize", response_model=NormalizeResponse)
def normalize_scenario_events(msel_id: UUID, db: DBSession):
    get_msel_or_404(db, msel_id)
    changed = ScenarioEventOrderingService(db).normalize(msel_id)
    return NormalizeResponse(msel_id=msel_id, changed=changed)


@router.get("/{msel_id}/task-chain", response_model=TaskChainResponse)
def preview_task_chain(msel_id: UUID, db: DBSession, settings: AppSettings):
    """The Steamfitter task chain a push would create. Ids not pushed yet stay as {placeholders}."""
    msel = get_msel_or_404(db, msel_id)
    try:
        drafts = compile_task_chain(msel, settings, strict=False)
    except MissingPreconditionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    tasks = [
        TaskDraftResponse(
            kind=d.kind.value,
            move=d.placement.move,
            group=d.placement.group,
            delta_seconds=d.delta_seconds,
            name=d.name,
            action=d.action,
            api_url=d.api_url,
            action_parameters=d.action_parameters,
            trigger_condition=d.trigger_condition,
            delay_seconds=d.delay_seconds,
            scenario_event_id=d.scenario_event_id,
        )
        for d in drafts
    ]
    return TaskChainResponse(msel_id=msel_id, tasks=tasks, total=len(tasks))


@router.get("/{msel_id}/integration-events", response_model=IntegrationEventList)
def get_integration_events(
    msel_id: UUID,
    db: DBSession,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    event_types: Optional[List[IntegrationEventType]] = Query(None),
    target: Optional[str] = None,
):
    get_msel_or_404(db, msel_id)

    service = IntegrationEventService(db)
    events, total = service.get_events(msel_id, limit, offset, event_types, target)

    return IntegrationEventList(
        events=[IntegrationEventResponse.model_validate(e) for e in events],
        total=total
    )
