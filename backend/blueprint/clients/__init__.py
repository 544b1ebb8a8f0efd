# backend/blueprint/clients/__init__.py
"""REST clients for the four integration targets."""
from dataclasses import dataclass
from typing import Optional

from blueprint.clients.auth import request_token
from blueprint.clients.base import ApiClient, DeleteResult, build_http_client
from blueprint.clients.cite import CiteApiClient
from blueprint.clients.gallery import GalleryApiClient
from blueprint.clients.player import PlayerApiClient
from blueprint.clients.steamfitter import SteamfitterApiClient
from blueprint.config import Settings, get_settings


@dataclass
class TargetClients:
    player: PlayerApiClient
    cite: CiteApiClient
    gallery: GalleryApiClient
    steamfitter: SteamfitterApiClient

    def close(self) -> None:
        for client in (self.player, self.cite, self.gallery, self.steamfitter):
            client.close()


def get_target_clients(settings: Optional[Settings] = None) -> TargetClients:
    """Build an authenticated client for every target, sharing one service token."""
    settings = settings or get_settings()
    token = request_token(settings)

    def http(url: str):
        return build_http_client(
            url,
            token=token.access_token,
            token_type=token.token_type,
            timeout=settings.http_timeout_seconds,
        )

    return TargetClients(
        player=PlayerApiClient(http(settings.player_api_url)),
        cite=CiteApiClient(http(settings.cite_api_url)),
        gallery=GalleryApiClient(http(settings.gallery_api_url)),
        steamfitter=SteamfitterApiClient(http(settings.steamfitter_api_url)),
    )


__all__ = [
    "ApiClient", "DeleteResult", "build_http_client",
    "PlayerApiClient", "CiteApiClient", "GalleryApiClient", "SteamfitterApiClient",
    "TargetClients", "get_target_clients",
]
