# backend/blueprint/services/integrations/base.py
import logging
from typing import Optional, Set
from uuid import UUID

from blueprint.clients.base import ApiClient, DeleteResult
from blueprint.exceptions import MissingPreconditionError
from blueprint.models.msel import Msel
from blueprint.models.team import User
from blueprint.schemas.common import RemoteModel

logger = logging.getLogger(__name__)


def require(entity, field: str) -> UUID:
    """Return a prerequisite remote id, or fail if it has not been pushed yet."""
    value = getattr(entity, field)
    if value is None:
        raise MissingPreconditionError(type(entity).__name__, field)
    return value


class TargetAdapter:
    """
    Common behaviour of the four target adapters.

    ``create_*`` methods return the new remote id and never write it back;
    the orchestrator persists it. Failures propagate unchanged.
    """

    target = "target"
    # Msel field holding the root resource id, deleted on pull
    root_field = ""

    def __init__(self, client: ApiClient):
        self.client = client

    def known_user_ids(self) -> Set[UUID]:
        return self.client.get_user_ids()

    def user_form(self, user: User) -> RemoteModel:
        raise NotImplementedError

    def ensure_user(self, user: User, known: Set[UUID]) -> bool:
        """
        Create the user remotely unless ``known`` already has it.

        ``known`` is updated in place. Returns True when a user was created.
        """
        if user.id in known:
            return False
        self.client.create_user(self.user_form(user))
        known.add(user.id)
        logger.info(f"{self.target}: created user {user.name} ({user.id})")
        return True

    def delete_root(self, remote_id: UUID) -> DeleteResult:
        raise NotImplementedError

    def pull(self, msel: Msel) -> Optional[DeleteResult]:
        """Delete the root resource of ``msel``. Returns None when it was never pushed."""
        remote_id = getattr(msel, self.root_field)
        if remote_id is None:
            return None
        return self.delete_root(remote_id)
