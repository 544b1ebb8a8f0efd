# backend/blueprint/clients/gallery.py
from uuid import UUID

from blueprint.clients.base import ApiClient, DeleteResult
from blueprint.schemas.common import RemoteEntity
from blueprint.schemas.gallery import (
    Collection, Exhibit, GalleryTeam, GalleryUser, GalleryTeamUser,
    GalleryCard, TeamCard, Article, TeamArticle,
)


class GalleryApiClient(ApiClient):
    """Gallery: collections, exhibits, teams, users, cards and articles."""

    target = "gallery"

    def create_collection(self, collection: Collection) -> RemoteEntity:
        return self._post("/api/collections", collection)

    def delete_collection(self, collection_id: UUID) -> DeleteResult:
        return self._delete(f"/api/collections/{collection_id}")

    def create_exhibit(self, exhibit: Exhibit) -> RemoteEntity:
        return self._post("/api/exhibits", exhibit)

    def create_team(self, team: GalleryTeam) -> RemoteEntity:
        return self._post("/api/teams", team)

    def create_user(self, user: GalleryUser) -> RemoteEntity:
        return self._post("/api/users", user)

    def create_team_user(self, team_user: GalleryTeamUser) -> RemoteEntity:
        return self._post("/api/teamusers", team_user)

    def create_card(self, card: GalleryCard) -> RemoteEntity:
        return self._post("/api/cards", card)

    def create_team_card(self, team_card: TeamCard) -> RemoteEntity:
        return self._post("/api/teamcards", team_card)

    def create_article(self, article: Article) -> RemoteEntity:
        return self._post("/api/articles", article)

    def create_team_article(self, team_article: TeamArticle) -> RemoteEntity:
        return self._post("/api/teamarticles", team_article)
