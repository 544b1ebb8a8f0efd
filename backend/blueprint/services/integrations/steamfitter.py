# backend/blueprint/services/integrations/steamfitter.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from blueprint.clients.base import DeleteResult
from blueprint.clients.steamfitter import SteamfitterApiClient
from blueprint.models.msel import Msel
from blueprint.schemas.steamfitter import ScenarioForm, TaskForm
from blueprint.services.integrations.base import TargetAdapter

logger = logging.getLogger(__name__)


def utcnow():
    return datetime.now(timezone.utc)


class SteamfitterAdapter(TargetAdapter):
    target = "steamfitter"
    root_field = "steamfitter_scenario_id"
    client: SteamfitterApiClient

    def scenario_form(self, msel: Msel, now: Optional[datetime] = None) -> ScenarioForm:
        """The scenario starts at the MSEL start time, or now if that has already passed."""
        start = now or utcnow()
        if msel.start_time is not None:
            msel_start = msel.start_time
            if msel_start.tzinfo is None:
                msel_start = msel_start.replace(tzinfo=timezone.utc)
            start = max(start, msel_start)
        return ScenarioForm(
            name=msel.name,
            description=msel.description,
            status="Active",
            start_date=start,
            end_date=start + timedelta(seconds=msel.duration_seconds or 0),
            view_id=msel.player_view_id,
        )

    def create_scenario(self, msel: Msel, now: Optional[datetime] = None) -> UUID:
        scenario = self.client.create_scenario(self.scenario_form(msel, now))
        logger.info(f"steamfitter: created scenario {scenario.id} for MSEL {msel.name}")
        return scenario.id

    def delete_root(self, remote_id: UUID) -> DeleteResult:
        return self.client.delete_scenario(remote_id)

    def create_task(self, form: TaskForm) -> UUID:
        task = self.client.create_task(form)
        logger.info(f"steamfitter: created task {form.name} ({task.id})")
        return task.id
