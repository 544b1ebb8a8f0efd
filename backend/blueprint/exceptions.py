# backend/blueprint/exceptions.py
"""Errors raised by the integration core.

Remote-call failures are not wrapped: they surface as the ``httpx`` exception
raised by the target client.
"""
from uuid import UUID


class IntegrationError(Exception):
    """Base class for integration errors raised locally."""


class MissingPreconditionError(IntegrationError):
    """A dependent create was attempted before its prerequisite remote id existed."""

    def __init__(self, entity: str, field: str):
        self.entity = entity
        self.field = field
        super().__init__(f"{entity} has no {field}; it must be pushed first")


class MselAlreadyPushedError(IntegrationError):
    def __init__(self, msel_id: UUID):
        self.msel_id = msel_id
        super().__init__(f"MSEL {msel_id} is already pushed; pull it before pushing again")


class MselBusyError(IntegrationError):
    def __init__(self, msel_id: UUID, status: str):
        self.msel_id = msel_id
        self.status = status
        super().__init__(f"MSEL {msel_id} is busy ({status})")


class SyncCancelledError(IntegrationError):
    """Raised at the next checkpoint once cancellation has been requested."""


class MselNotFoundError(IntegrationError):
    def __init__(self, msel_id: UUID):
        self.msel_id = msel_id
        super().__init__(f"MSEL {msel_id} not found")
