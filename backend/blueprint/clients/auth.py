# backend/blueprint/clients/auth.py
"""Service account token for the integration targets (OIDC password grant)."""
import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from blueprint.config import Settings

logger = logging.getLogger(__name__)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None


class TokenError(RuntimeError):
    pass


def discover_token_endpoint(settings: Settings, http: httpx.Client) -> str:
    authority = settings.identity_authority.rstrip("/")
    response = http.get(f"{authority}/.well-known/openid-configuration")
    response.raise_for_status()
    document = response.json()

    if settings.identity_validate_discovery:
        issuer = document.get("issuer", "").rstrip("/")
        if issuer != authority:
            raise TokenError(f"Discovery issuer {issuer!r} does not match authority {authority!r}")

    token_endpoint = document.get("token_endpoint")
    if not token_endpoint:
        raise TokenError("Discovery document has no token_endpoint")
    return token_endpoint


def request_token(settings: Settings, http: Optional[httpx.Client] = None) -> TokenResponse:
    """Request a token with the configured service account credentials."""
    owns_client = http is None
    http = http or httpx.Client(timeout=settings.http_timeout_seconds)
    try:
        token_endpoint = discover_token_endpoint(settings, http)
        form = {
            "grant_type": "password",
            "client_id": settings.identity_client_id,
            "username": settings.identity_username,
            "password": settings.identity_password,
            "scope": settings.identity_scope,
        }
        if settings.identity_client_secret:
            form["client_secret"] = settings.identity_client_secret

        response = http.post(token_endpoint, data=form)
        response.raise_for_status()
        token = TokenResponse.model_validate(response.json())
        logger.info(f"Obtained service token for {settings.identity_client_id}")
        return token
    finally:
        if owns_client:
            http.close()
