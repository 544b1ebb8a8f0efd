# backend/blueprint/services/integrations/__init__.py
"""Target adapters: translate timeline entities into each target's resources."""
from blueprint.services.integrations.base import TargetAdapter
from blueprint.services.integrations.player import PlayerAdapter
from blueprint.services.integrations.cite import CiteAdapter
from blueprint.services.integrations.gallery import GalleryAdapter
from blueprint.services.integrations.steamfitter import SteamfitterAdapter

__all__ = [
    "TargetAdapter",
    "PlayerAdapter",
    "CiteAdapter",
    "GalleryAdapter",
    "SteamfitterAdapter",
]
