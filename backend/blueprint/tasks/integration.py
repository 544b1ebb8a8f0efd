# blueprint/tasks/integration.py
"""Push and pull MSELs outside the request, using Dramatiq."""
import dramatiq
import logging
from typing import Optional
from uuid import UUID

from blueprint.clients import get_target_clients
from blueprint.database import get_session_local
from blueprint.exceptions import IntegrationError
from blueprint.services.integration_service import IntegrationService

logger = logging.getLogger(__name__)


# A failed push is resolved by an operator pull, never by a retry
@dramatiq.actor(max_retries=0)
def push_msel_task(msel_id: str, player_view_id: Optional[str] = None):
    logger.info(f"Starting async push for MSEL {msel_id}")

    db = get_session_local()()
    clients = None
    try:
        clients = get_target_clients()
        service = IntegrationService(db, clients)
        service.push(UUID(msel_id), UUID(player_view_id) if player_view_id else None)
        logger.info(f"MSEL {msel_id} pushed successfully")
    except IntegrationError as e:
        logger.warning(f"Push of MSEL {msel_id} not performed: {e}")
    except Exception as e:
        logger.error(f"Failed to push MSEL {msel_id}: {e}")
    finally:
        if clients is not None:
            clients.close()
        db.close()


@dramatiq.actor(max_retries=0)
def pull_msel_task(msel_id: str):
    logger.info(f"Starting async pull for MSEL {msel_id}")

    db = get_session_local()()
    clients = None
    try:
        clients = get_target_clients()
        IntegrationService(db, clients).pull(UUID(msel_id))
        logger.info(f"MSEL {msel_id} pulled successfully")
    except IntegrationError as e:
        logger.warning(f"Pull of MSEL {msel_id} not performed: {e}")
    except Exception as e:
        logger.error(f"Failed to pull MSEL {msel_id}: {e}")
    finally:
        if clients is not None:
            clients.close()
        db.close()
