# backend/blueprint/schemas/common.py
from uuid import UUID
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RemoteModel(BaseModel):
    """Base for payloads exchanged with the integration targets (camelCase on the wire)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RemoteEntity(RemoteModel):
    """Any created remote resource; only the assigned id is needed locally."""
    id: UUID
