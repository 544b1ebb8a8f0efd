# backend/blueprint/schemas/gallery.py
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from blueprint.schemas.common import RemoteModel


class ArticleStatus(str, Enum):
    UNUSED = "Unused"
    ACTIVE = "Active"
    PENDING = "Pending"
    APPROVED = "Approved"
    COMPLETE = "Complete"
    ARCHIVED = "Archived"


class SourceType(str, Enum):
    NEWS = "News"
    SOCIAL = "Social"
    EMAIL = "Email"
    PHONE = "Phone"
    REPORTING = "Reporting"
    ORDERS = "Orders"
    INTEL = "Intel"


class Collection(RemoteModel):
    id: Optional[UUID] = None
    name: str
    description: Optional[str] = None


class Exhibit(RemoteModel):
    id: Optional[UUID] = None
    collection_id: UUID
    scenario_id: Optional[UUID] = None
    current_move: int = 0
    current_inject: int = 0


class GalleryTeam(RemoteModel):
    id: Optional[UUID] = None
    name: str
    short_name: Optional[str] = None
    exhibit_id: UUID
    email: Optional[str] = None


class GalleryUser(RemoteModel):
    id: UUID
    name: Optional[str] = None


class GalleryTeamUser(RemoteModel):
    team_id: UUID
    user_id: UUID
    is_observer: bool = False


class GalleryCard(RemoteModel):
    id: Optional[UUID] = None
    collection_id: UUID
    name: str
    description: Optional[str] = None
    move: int = 0
    inject: int = 0


class TeamCard(RemoteModel):
    team_id: UUID
    card_id: UUID
    is_shown_on_wall: bool = True
    can_post_articles: bool = False


class Article(RemoteModel):
    id: Optional[UUID] = None
    collection_id: UUID
    card_id: Optional[UUID] = None
    name: str = ""
    summary: str = ""
    description: str = ""
    move: int = 0
    inject: int = 0
    status: ArticleStatus = ArticleStatus.UNUSED
    source_type: SourceType = SourceType.NEWS
    source_name: str = ""
    url: str = ""
    date_posted: Optional[datetime] = None
    open_in_new_tab: bool = False


class TeamArticle(RemoteModel):
    exhibit_id: UUID
    team_id: UUID
    article_id: UUID
