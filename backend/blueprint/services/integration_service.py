# backend/blueprint/services/integration_service.py
"""Push an MSEL to its integration targets, and pull it back out."""
import logging
import threading
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from blueprint.clients import TargetClients
from blueprint.clients.base import DeleteResult
from blueprint.config import Settings, get_settings
from blueprint.exceptions import (
    MselAlreadyPushedError, MselBusyError, MselNotFoundError, SyncCancelledError
)
from blueprint.models.event_log import IntegrationEventType
from blueprint.models.msel import Msel, IntegrationStatus, MSEL_REMOTE_ID_FIELDS
from blueprint.models.team import TEAM_REMOTE_ID_FIELDS
from blueprint.services.event_service import IntegrationEventService, RunLog
from blueprint.services.integrations import (
    TargetAdapter, PlayerAdapter, CiteAdapter, GalleryAdapter, SteamfitterAdapter
)
from blueprint.services.ordering import ScenarioEventOrderingService
from blueprint.services.task_chain import compile_task_chain, emit_task_chain
from blueprint.services.timeline import moves_and_groups

logger = logging.getLogger(__name__)


class IntegrationService:
    """
    Drives the target adapters for one MSEL.

    Every remote id returned by a create is committed before the next remote
    call, so an interrupted push leaves a consistent partial state that a pull
    can clean up. Nothing is rolled back automatically.
    """

    def __init__(
        self,
        db: Session,
        clients: TargetClients,
        settings: Optional[Settings] = None,
        cancel_event: Optional[threading.Event] = None,
        now: Optional[datetime] = None,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.cancel_event = cancel_event
        self.now = now
        self.player = PlayerAdapter(clients.player, self.settings)
        self.cite = CiteAdapter(clients.cite)
        self.gallery = GalleryAdapter(clients.gallery)
        self.steamfitter = SteamfitterAdapter(clients.steamfitter)
        self.events = IntegrationEventService(db)
        self.log: Optional[RunLog] = None
        self.current_step = ""

    # -- helpers -------------------------------------------------------------

    def get_msel(self, msel_id: UUID) -> Msel:
        msel = self.db.query(Msel).filter(Msel.id == msel_id).first()
        if not msel:
            raise MselNotFoundError(msel_id)
        return msel

    def checkpoint(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SyncCancelledError(f"Cancelled during: {self.current_step}")

    def _step(self, msel: Msel, log: RunLog, message: str) -> None:
        self.checkpoint()
        self.current_step = message
        logger.info(f"{message} for MSEL {msel.name} ({msel.id})")
        log.step(message)

    def _save(self, entity, field: str, value) -> None:
        setattr(entity, field, value)
        self.db.commit()
        self.checkpoint()

    def _acquire(self, msel: Msel, status: IntegrationStatus) -> None:
        result = self.db.execute(
            update(Msel)
            .where(Msel.id == msel.id, Msel.integration_status == IntegrationStatus.IDLE)
            .values(integration_status=status)
        )
        self.db.commit()
        if result.rowcount != 1:
            self.db.refresh(msel)
            raise MselBusyError(msel.id, msel.integration_status.value)
        self.db.refresh(msel)

    def _release(self, msel: Msel) -> None:
        self.db.rollback()
        msel.integration_status = IntegrationStatus.IDLE
        self.db.commit()

    # -- push ----------------------------------------------------------------

    def push(self, msel_id: UUID, player_view_id: Optional[UUID] = None) -> Msel:
        """
        Create the MSEL's resources in every enabled target.

        Order: Player view and teams, Gallery, Cite, Steamfitter, then Player
        applications, whose URLs may refer to ids from any target.
        Raises the first failure unchanged.
        """
        msel = self.get_msel(msel_id)
        self._acquire(msel, IntegrationStatus.PUSHING)
        self.current_step = "Begin processing"
        self.log = self.events.push_log(msel.id)
        try:
            if msel.is_pushed:
                raise MselAlreadyPushedError(msel.id)

            ScenarioEventOrderingService(self.db).normalize(msel.id)
            self.log.record(IntegrationEventType.PUSH_STARTED, f"Pushing MSEL {msel.name}")

            if msel.use_player:
                self._push_player(msel, player_view_id)
            if msel.use_gallery:
                self._push_gallery(msel)
            if msel.use_cite:
                self._push_cite(msel)
            if msel.use_steamfitter:
                self._push_steamfitter(msel)
            if msel.use_player:
                self._push_player_applications(msel)

            self.log.record(IntegrationEventType.PUSH_COMPLETED, f"Pushed MSEL {msel.name}")
            logger.info(f"Pushed MSEL {msel.name} ({msel.id})")
            return msel
        except MselAlreadyPushedError:
            raise
        except Exception as e:
            logger.error(f"{self.current_step} failed for MSEL {msel.name} ({msel.id}): {e}")
            self.db.rollback()
            self.log.record(IntegrationEventType.PUSH_FAILED, f"{self.current_step} failed: {e}")
            raise
        finally:
            self._release(msel)

    def _push_player(self, msel: Msel, player_view_id: Optional[UUID]) -> None:
        log = self.log.for_target("player")
        self._step(msel, log, "Pushing view to Player")
        self._save(msel, "player_view_id", self.player.create_view(msel, player_view_id))

        self._step(msel, log, "Pushing teams to Player")
        known_users = self.player.known_user_ids()
        for team in msel.teams:
            self._save(team, "player_team_id", self.player.create_team(msel, team))
            for user in team.users:
                self.checkpoint()
                self.player.ensure_user(user, known_users)
                self.player.add_team_user(team, user)

    def _push_gallery(self, msel: Msel) -> None:
        log = self.log.for_target("gallery")
        self._step(msel, log, "Pushing collection to Gallery")
        self._save(msel, "gallery_collection_id", self.gallery.create_collection(msel))

        self._step(msel, log, "Pushing exhibit to Gallery")
        self._save(msel, "gallery_exhibit_id", self.gallery.create_exhibit(msel))

        self._step(msel, log, "Pushing teams to Gallery")
        known_users = self.gallery.known_user_ids()
        for team in msel.teams:
            self._save(team, "gallery_team_id", self.gallery.create_team(msel, team))
            for user in team.users:
                self.checkpoint()
                self.gallery.ensure_user(user, known_users)
                self.gallery.create_team_user(team, user)

        self._step(msel, log, "Pushing cards to Gallery")
        for card in msel.cards:
            self._save(card, "gallery_id", self.gallery.create_card(msel, card))
            for card_team in card.card_teams:
                self.checkpoint()
                self.gallery.create_team_card(card, card_team)

        self._step(msel, log, "Pushing articles to Gallery")
        placements = moves_and_groups(msel)
        for event in msel.scenario_events:
            article = self.gallery.article_form(msel, event, placements[event.id])
            if article is None:
                continue
            self.checkpoint()
            article_id = self.gallery.create_article(article)
            for team in self.gallery.article_recipients(msel, event):
                self.checkpoint()
                self.gallery.create_team_article(msel, team, article_id)

    def _push_cite(self, msel: Msel) -> None:
        log = self.log.for_target("cite")
        self._step(msel, log, "Pushing evaluation to Cite")
        evaluation = self.cite.create_evaluation(msel)
        self._save(msel, "cite_evaluation_id", evaluation.id)
        for result in self.cite.delete_default_moves(evaluation):
            if result == DeleteResult.ERROR:
                log.delete_failed("Could not delete the default Cite move")

        self._step(msel, log, "Pushing moves to Cite")
        for move in msel.moves:
            self.checkpoint()
            self.cite.create_move(msel, move)

        self._step(msel, log, "Pushing teams to Cite")
        known_users = self.cite.known_user_ids()
        for team in msel.teams:
            if team.cite_team_type_id is None:
                continue
            self._save(team, "cite_team_id", self.cite.create_team(msel, team))
            for user in team.users:
                self.checkpoint()
                self.cite.ensure_user(user, known_users)
                self.cite.create_team_user(msel, team, user)

        self._step(msel, log, "Pushing roles to Cite")
        for role in msel.cite_roles:
            if role.team.cite_team_id is None:
                continue
            self.checkpoint()
            self.cite.create_role(msel, role)

        self._step(msel, log, "Pushing actions to Cite")
        for action in msel.cite_actions:
            if action.team.cite_team_id is None:
                continue
            self.checkpoint()
            self.cite.create_action(msel, action)

    def _push_steamfitter(self, msel: Msel) -> None:
        log = self.log.for_target("steamfitter")
        self._step(msel, log, "Pushing scenario to Steamfitter")
        self._save(msel, "steamfitter_scenario_id", self.steamfitter.create_scenario(msel, self.now))

        self._step(msel, log, "Pushing task chain to Steamfitter")
        drafts = compile_task_chain(msel, self.settings)
        task_ids = emit_task_chain(
            drafts, msel.steamfitter_scenario_id, self.steamfitter.create_task, checkpoint=self.checkpoint
        )
        logger.info(f"Created {len(task_ids)} Steamfitter tasks for MSEL {msel.name}")

    def _push_player_applications(self, msel: Msel) -> None:
        log = self.log.for_target("player")
        self._step(msel, log, "Pushing applications to Player")
        for application in msel.player_applications:
            self.checkpoint()
            application_id = self.player.create_application(msel, application)
            for application_team in sorted(application.application_teams, key=lambda at: at.display_order):
                self.checkpoint()
                self.player.create_application_instance(application_team, application_id)

    # -- pull ----------------------------------------------------------------

    def pull(self, msel_id: UUID) -> Msel:
        """
        Delete the MSEL's root resources from every target and clear all remote ids.

        Delete failures are recorded but never raised; the ids are cleared regardless.
        """
        msel = self.get_msel(msel_id)
        self._acquire(msel, IntegrationStatus.PULLING)
        self.current_step = "Begin pull"
        self.log = self.events.pull_log(msel.id)
        try:
            self.log.record(IntegrationEventType.PULL_STARTED, f"Pulling MSEL {msel.name}")

            self._pull_target(msel, self.cite, ("cite_evaluation_id",), ("cite_team_id",))
            self._pull_target(
                msel, self.gallery, ("gallery_collection_id", "gallery_exhibit_id"), ("gallery_team_id",)
            )
            for card in msel.cards:
                card.gallery_id = None
            self._pull_target(msel, self.steamfitter, ("steamfitter_scenario_id",), ())
            self._pull_target(msel, self.player, ("player_view_id",), ("player_team_id",))

            # Anything a partial push left behind
            for field in MSEL_REMOTE_ID_FIELDS:
                setattr(msel, field, None)
            for team in msel.teams:
                for field in TEAM_REMOTE_ID_FIELDS:
                    setattr(team, field, None)
            self.db.commit()

            self.log.record(IntegrationEventType.PULL_COMPLETED, f"Pulled MSEL {msel.name}")
            logger.info(f"Pulled MSEL {msel.name} ({msel.id})")
            return msel
        finally:
            self._release(msel)

    def _pull_target(self, msel: Msel, adapter: TargetAdapter, msel_fields, team_fields) -> Optional[DeleteResult]:
        self.checkpoint()
        self.current_step = f"Pulling from {adapter.target}"
        result = adapter.pull(msel)
        log = self.log.for_target(adapter.target)
        if result == DeleteResult.ERROR:
            message = f"Could not delete {adapter.target} resources; clearing ids anyway"
            logger.warning(f"{message} for MSEL {msel.name} ({msel.id})")
            log.delete_failed(message)
        elif result == DeleteResult.NOT_FOUND:
            log.step(f"{adapter.target} resources were already gone")
        elif result == DeleteResult.OK:
            log.step(f"Deleted {adapter.target} resources")

        for field in msel_fields:
            setattr(msel, field, None)
        for team in msel.teams:
            for field in team_fields:
                setattr(team, field, None)
        self.db.commit()
        return result
