# backend/blueprint/services/integrations/gallery.py
import logging
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Type, TypeVar
from uuid import UUID

from blueprint.clients.base import DeleteResult
from blueprint.clients.gallery import GalleryApiClient
from blueprint.models.card import Card, CardTeam
from blueprint.models.data_field import GalleryArticleParameter
from blueprint.models.msel import Msel
from blueprint.models.scenario_event import ScenarioEvent
from blueprint.models.team import Team, User, TeamRole
from blueprint.schemas.gallery import (
    ArticleStatus, SourceType, Collection, Exhibit, GalleryTeam, GalleryUser,
    GalleryTeamUser, GalleryCard, TeamCard, Article, TeamArticle,
)
from blueprint.services.integrations.base import TargetAdapter, require
from blueprint.services.timeline import Placement

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

# ToOrg value that addresses every team
ALL_TEAMS = "ALL"


def parse_enum(enum_type: Type[E], value: str, default: E) -> E:
    wanted = value.strip().lower()
    for member in enum_type:
        if member.value.lower() == wanted:
            return member
    return default


def parse_datetime(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(value.strip())
    except ValueError:
        return None


def article_values(msel: Msel, event: ScenarioEvent) -> Dict[GalleryArticleParameter, str]:
    """
    Article parameters supplied by the event's data values.

    Data fields are looked up by their GalleryArticleParameter tag, on the MSEL
    and on the event's inject type. A value set on the event wins over the
    inject's value for the same field; an unset event value does not.
    """
    fields = list(msel.data_fields)
    if event.inject is not None and event.inject.inject_type is not None:
        fields.extend(event.inject.inject_type.data_fields)

    values = {}
    if event.inject is not None:
        values.update({dv.data_field_id: dv.value for dv in event.inject.data_values if dv.value is not None})
    values.update({dv.data_field_id: dv.value for dv in event.data_values if dv.value is not None})

    result = {}
    for field in fields:
        if not field.gallery_article_parameter:
            continue
        try:
            parameter = GalleryArticleParameter(field.gallery_article_parameter)
        except ValueError:
            logger.warning(f"Data field {field.name} has unknown article parameter {field.gallery_article_parameter}")
            continue
        value = values.get(field.id)
        if value is not None:
            result[parameter] = value
    return result


class GalleryAdapter(TargetAdapter):
    target = "gallery"
    # The exhibit belongs to the collection; deleting the collection removes both
    root_field = "gallery_collection_id"
    client: GalleryApiClient

    def user_form(self, user: User) -> GalleryUser:
        return GalleryUser(id=user.id, name=user.name)

    def create_collection(self, msel: Msel) -> UUID:
        collection = self.client.create_collection(
            Collection(name=msel.name, description=msel.description)
        )
        logger.info(f"gallery: created collection {collection.id} for MSEL {msel.name}")
        return collection.id

    def delete_root(self, remote_id: UUID) -> DeleteResult:
        return self.client.delete_collection(remote_id)

    def create_exhibit(self, msel: Msel) -> UUID:
        form = Exhibit(
            collection_id=require(msel, "gallery_collection_id"),
            scenario_id=msel.steamfitter_scenario_id,
            current_move=0,
            current_inject=0,
        )
        exhibit = self.client.create_exhibit(form)
        logger.info(f"gallery: created exhibit {exhibit.id} for MSEL {msel.name}")
        return exhibit.id

    def create_team(self, msel: Msel, team: Team) -> UUID:
        form = GalleryTeam(
            name=team.name,
            short_name=team.short_name,
            exhibit_id=require(msel, "gallery_exhibit_id"),
            email=team.email,
        )
        remote = self.client.create_team(form)
        logger.info(f"gallery: created team {team.name} ({remote.id})")
        return remote.id

    def create_team_user(self, team: Team, user: User) -> UUID:
        form = GalleryTeamUser(
            team_id=require(team, "gallery_team_id"),
            user_id=user.id,
            is_observer=team.has_role(user.id, TeamRole.OBSERVER),
        )
        return self.client.create_team_user(form).id

    def create_card(self, msel: Msel, card: Card) -> UUID:
        form = GalleryCard(
            collection_id=require(msel, "gallery_collection_id"),
            name=card.name,
            description=card.description,
            move=card.move,
            inject=card.inject,
        )
        return self.client.create_card(form).id

    def create_team_card(self, card: Card, card_team: CardTeam) -> UUID:
        form = TeamCard(
            team_id=require(card_team.team, "gallery_team_id"),
            card_id=require(card, "gallery_id"),
            is_shown_on_wall=card_team.is_shown_on_wall,
            can_post_articles=card_team.can_post_articles,
        )
        return self.client.create_team_card(form).id

    def article_form(self, msel: Msel, event: ScenarioEvent, placement: Placement) -> Optional[Article]:
        """Build the article for an event, or None when the event is not delivered through Gallery."""
        values = article_values(msel, event)

        def value(parameter: GalleryArticleParameter) -> str:
            return values.get(parameter) or ""

        if "Gallery" not in value(GalleryArticleParameter.DELIVERY_METHOD):
            return None

        gallery_card_id = None
        card_id = parse_uuid(value(GalleryArticleParameter.CARD_ID))
        if card_id is not None:
            card = next((c for c in msel.cards if c.id == card_id), None)
            gallery_card_id = card.gallery_id if card is not None else None

        return Article(
            collection_id=require(msel, "gallery_collection_id"),
            card_id=gallery_card_id,
            name=value(GalleryArticleParameter.NAME),
            summary=value(GalleryArticleParameter.SUMMARY),
            description=value(GalleryArticleParameter.DESCRIPTION),
            move=placement.move,
            inject=placement.group,
            status=parse_enum(ArticleStatus, value(GalleryArticleParameter.STATUS), ArticleStatus.UNUSED),
            source_type=parse_enum(SourceType, value(GalleryArticleParameter.SOURCE_TYPE), SourceType.NEWS),
            source_name=value(GalleryArticleParameter.SOURCE_NAME),
            url=value(GalleryArticleParameter.URL),
            date_posted=parse_datetime(value(GalleryArticleParameter.DATE_POSTED)),
            open_in_new_tab=value(GalleryArticleParameter.OPEN_IN_NEW_TAB).strip().lower() == "true",
        )

    def create_article(self, article: Article) -> UUID:
        remote = self.client.create_article(article)
        logger.info(f"gallery: created article {article.name} ({remote.id})")
        return remote.id

    def article_recipients(self, msel: Msel, event: ScenarioEvent) -> List[Team]:
        to_orgs = article_values(msel, event).get(GalleryArticleParameter.TO_ORG) or ""
        names = {name.strip() for name in to_orgs.split(",")}
        return [t for t in msel.teams if ALL_TEAMS in names or t.short_name in names]

    def create_team_article(self, msel: Msel, team: Team, article_id: UUID) -> UUID:
        form = TeamArticle(
            exhibit_id=require(msel, "gallery_exhibit_id"),
            team_id=require(team, "gallery_team_id"),
            article_id=article_id,
        )
        return self.client.create_team_article(form).id
