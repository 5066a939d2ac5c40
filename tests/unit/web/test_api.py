"""
Tests des routes de l'API JSON.

L'application est construite avec un Container dont la configuration
pointe vers tmp_path et dont le service de vues est remplace par un mock.
"""

from unittest.mock import AsyncMock

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from mediacache.container import Container
from mediacache.core.exceptions import InvalidRequest, StorageUnavailable, UpstreamUnavailable
from mediacache.services.views import MediaViewService
from mediacache.web.app import create_app


@pytest.fixture
def views() -> AsyncMock:
    return AsyncMock(spec=MediaViewService)


@pytest.fixture
def container(test_settings, views) -> Container:
    container = Container()
    container.config.override(providers.Object(test_settings))
    container.view_service.override(providers.Object(views))
    return container


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as test_client:
        yield test_client


class TestRoutes:
    """Tests des routes nominales."""

    def test_health(self, client) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_home_passes_page(self, client, views) -> None:
        views.home.return_value = {"page": 3, "trending": [], "popular": [], "latest": []}

        response = client.get("/api/home", params={"page": 3})

        assert response.status_code == 200
        assert response.json()["page"] == 3
        views.home.assert_awaited_once_with(3)

    def test_trending_passes_type_and_page(self, client, views) -> None:
        views.trending.return_value = {"page": 1, "results": []}

        response = client.get("/api/trending", params={"type": "tv"})

        assert response.status_code == 200
        views.trending.assert_awaited_once_with("tv", 1)

    def test_search(self, client, views) -> None:
        views.search.return_value = {"query": "alpha", "results": [{"id": "101"}]}

        response = client.get("/api/search", params={"q": "alpha"})

        assert response.json()["results"] == [{"id": "101"}]
        views.search.assert_awaited_once_with("alpha")

    def test_list_passes_limit(self, client, views) -> None:
        views.list_page.return_value = {"page": 2, "per_page": 5, "total": 0, "results": []}

        client.get("/api/list", params={"page": 2, "limit": 5})

        views.list_page.assert_awaited_once_with(2, 5)

    def test_random(self, client, views) -> None:
        views.random_item.return_value = {"id": "42"}

        assert client.get("/api/random").json() == {"id": "42"}

    def test_embed_episode(self, client) -> None:
        response = client.get("/api/embed", params={"id": "1399", "season": 1, "episode": 2})

        assert response.status_code == 200
        assert response.json()["embed_url"] == "https://player.test/embed/?id=1399/1/2"

    def test_embed_missing_id(self, client) -> None:
        response = client.get("/api/embed")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing id"}


class TestErrors:
    """Tests de la traduction des exceptions."""

    def test_details_missing_id(self, client, views) -> None:
        views.details.side_effect = InvalidRequest("Missing id")

        response = client.get("/api/details")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing id"}
        views.details.assert_awaited_once_with(None)

    def test_upstream_unavailable_is_502(self, client, views) -> None:
        views.details.side_effect = UpstreamUnavailable("TMDB down")

        response = client.get("/api/details", params={"id": "550"})

        assert response.status_code == 502
        assert response.json() == {"error": "TMDB down"}

    def test_storage_unavailable_is_503(self, client, views) -> None:
        views.random_item.side_effect = StorageUnavailable("disk full")

        response = client.get("/api/random")

        assert response.status_code == 503
        assert response.json() == {"error": "disk full"}

    def test_invalid_parameter_is_400(self, client) -> None:
        response = client.get("/api/home", params={"page": "abc"})

        assert response.status_code == 400
        assert "page" in response.json()["error"]

    def test_unexpected_error_is_500(self, container, views) -> None:
        views.home.side_effect = RuntimeError("boom")

        with TestClient(create_app(container), raise_server_exceptions=False) as test_client:
            response = test_client.get("/api/home")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
