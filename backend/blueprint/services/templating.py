# backend/blueprint/services/templating.py
"""{placeholder} substitution for URLs and bodies sent to the targets."""
from typing import Dict, Optional

from blueprint.config import Settings
from blueprint.models.msel import Msel

MSEL_ID_PLACEHOLDERS = {
    "playerViewId": "player_view_id",
    "citeEvaluationId": "cite_evaluation_id",
    "galleryCollectionId": "gallery_collection_id",
    "galleryExhibitId": "gallery_exhibit_id",
    "steamfitterScenarioId": "steamfitter_scenario_id",
}


def msel_placeholders(msel: Msel, settings: Settings) -> Dict[str, str]:
    """Values for the API base URLs and for every remote id the MSEL has. Unset ids are left out."""
    values = {
        "playerApiUrl": settings.player_api_url.rstrip("/"),
        "citeApiUrl": settings.cite_api_url.rstrip("/"),
        "galleryApiUrl": settings.gallery_api_url.rstrip("/"),
        "steamfitterApiUrl": settings.steamfitter_api_url.rstrip("/"),
    }
    for placeholder, field in MSEL_ID_PLACEHOLDERS.items():
        value = getattr(msel, field)
        if value is not None:
            values[placeholder] = str(value)
    return values


def render(template: Optional[str], values: Dict[str, str]) -> str:
    """Replace each {key} in template. Unknown placeholders and other braces are left alone."""
    if not template:
        return ""
    result = template
    for key, value in values.items():
        result = result.replace("{" + key + "}", value)
    return result
