# backend/blueprint/api/deps.py
from typing import Annotated, Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from blueprint.clients import TargetClients, get_target_clients
from blueprint.config import Settings, get_settings
from blueprint.database import get_db


def get_client_factory() -> Callable[[], TargetClients]:
    """
    Builder for the authenticated target clients.

    Routes call it only when they talk to the targets themselves, so a queued
    push or pull never authenticates on the request path.
    """
    return get_target_clients


# Type aliases for common dependencies
DBSession = Annotated[Session, Depends(get_db)]
ClientFactory = Annotated[Callable[[], TargetClients], Depends(get_client_factory)]
AppSettings = Annotated[Settings, Depends(get_settings)]
