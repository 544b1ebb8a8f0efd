# backend/blueprint/clients/base.py
"""Shared plumbing for the integration target REST clients."""
import logging
from enum import Enum
from typing import Any, Optional, Type, TypeVar
from uuid import UUID

import httpx

from blueprint.schemas.common import RemoteModel, RemoteEntity

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=RemoteModel)


class DeleteResult(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ERROR = "error"


def build_http_client(
    base_url: str,
    token: Optional[str] = None,
    token_type: str = "Bearer",
    timeout: float = 30.0,
) -> httpx.Client:
    """Create an httpx client for one target, authorized with the service token if given."""
    headers = {}
    if token:
        headers["Authorization"] = f"{token_type} {token}"
    return httpx.Client(base_url=base_url, headers=headers, timeout=timeout)


class ApiClient:
    """
    Base class for a target's REST client.

    Creates and reads raise ``httpx.HTTPStatusError`` / ``httpx.RequestError``
    unchanged. Deletes never raise; they report a ``DeleteResult``.
    """

    target = "api"

    def __init__(self, http: httpx.Client):
        self.http = http

    def _get(self, path: str) -> Any:
        response = self.http.get(path)
        response.raise_for_status()
        return response.json()

    def _post(self, path: str, body: Optional[RemoteModel] = None, model: Type[M] = RemoteEntity) -> M:
        response = self.http.post(path, json=body.to_wire() if body is not None else None)
        response.raise_for_status()
        return model.model_validate(response.json())

    def _post_no_content(self, path: str, body: Optional[RemoteModel] = None) -> None:
        response = self.http.post(path, json=body.to_wire() if body is not None else None)
        response.raise_for_status()

    def _delete(self, path: str) -> DeleteResult:
        try:
            response = self.http.delete(path)
        except httpx.HTTPError as e:
            logger.warning(f"{self.target}: DELETE {path} failed: {e}")
            return DeleteResult.ERROR

        if response.status_code == 404:
            logger.info(f"{self.target}: DELETE {path} - already gone")
            return DeleteResult.NOT_FOUND
        if response.is_error:
            logger.warning(f"{self.target}: DELETE {path} returned {response.status_code}")
            return DeleteResult.ERROR
        return DeleteResult.OK

    def get_user_ids(self) -> set[UUID]:
        """Ids of every user the target already knows about."""
        return {UUID(str(u["id"])) for u in self._get("/api/users")}

    def close(self) -> None:
        self.http.close()
