"""
Tests for GenreDirectoryService.

Verifies:
- movie names take precedence over tv names on id collision
- the directory is refreshed only when absent or stale
- a failed refresh keeps the previous directory
- concurrent callers share a single refresh
"""

import asyncio
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from mediacache.core.entities.media import GenreDirectory
from mediacache.core.exceptions import UpstreamUnavailable
from mediacache.core.ports.repositories import IGenreDirectoryRepository
from mediacache.core.value_objects import MediaKind
from mediacache.services.genre_directory import GenreDirectoryService, merge_genres

MOVIE_GENRES = {28: "Action", 18: "Drame"}
TV_GENRES = {18: "Drama", 10765: "Sci-Fi & Fantasy"}


def genres_by_kind(kind: MediaKind) -> dict[int, str]:
    return dict(MOVIE_GENRES) if kind is MediaKind.MOVIE else dict(TV_GENRES)


@pytest.fixture
def genre_repo() -> AsyncMock:
    repo = AsyncMock(spec=IGenreDirectoryRepository)
    repo.load.return_value = None
    return repo


@pytest.fixture
def directory(mock_provider, genre_repo, clock) -> GenreDirectoryService:
    mock_provider.get_genres.side_effect = genres_by_kind
    return GenreDirectoryService(mock_provider, genre_repo, ttl=timedelta(days=1), clock=clock)


class TestMergeGenres:
    """Tests for merge_genres()."""

    def test_movie_entry_wins_on_collision(self) -> None:
        merged = merge_genres(MOVIE_GENRES, TV_GENRES)
        assert merged[18] == "Drame"

    def test_tv_only_ids_are_added(self) -> None:
        merged = merge_genres(MOVIE_GENRES, TV_GENRES)
        assert merged[10765] == "Sci-Fi & Fantasy"
        assert len(merged) == 3


class TestGenreDirectoryService:
    """Tests for GenreDirectoryService."""

    @pytest.mark.asyncio
    async def test_first_use_refreshes_and_persists(self, directory, mock_provider, genre_repo):
        names = await directory.genre_names([18, 10765])

        assert names == ["Drame", "Sci-Fi & Fantasy"]
        assert mock_provider.get_genres.await_count == 2
        genre_repo.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_ids_are_dropped(self, directory):
        assert await directory.genre_names([28, 424242]) == ["Action"]

    @pytest.mark.asyncio
    async def test_empty_ids_do_not_touch_upstream(self, directory, mock_provider):
        assert await directory.genre_names([]) == []
        mock_provider.get_genres.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fresh_directory_is_reused(self, directory, mock_provider, clock):
        await directory.genre_names([28])
        clock.advance(hours=23)

        await directory.genre_names([18])

        assert mock_provider.get_genres.await_count == 2

    @pytest.mark.asyncio
    async def test_stale_directory_is_refreshed(self, directory, mock_provider, clock):
        await directory.genre_names([28])
        clock.advance(days=1)

        await directory.genre_names([18])

        assert mock_provider.get_genres.await_count == 4

    @pytest.mark.asyncio
    async def test_fresh_persisted_directory_is_loaded(
        self, directory, mock_provider, genre_repo, clock
    ):
        genre_repo.load.return_value = GenreDirectory(
            genres={99: "Documentaire"}, refreshed_at=clock()
        )

        assert await directory.genre_names([99]) == ["Documentaire"]
        mock_provider.get_genres.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_directory(
        self, directory, mock_provider, clock
    ):
        await directory.genre_names([28])
        clock.advance(days=2)
        mock_provider.get_genres.side_effect = UpstreamUnavailable("down")

        assert await directory.genre_names([28]) == ["Action"]

    @pytest.mark.asyncio
    async def test_failed_first_refresh_propagates(self, directory, mock_provider):
        mock_provider.get_genres.side_effect = UpstreamUnavailable("down")

        with pytest.raises(UpstreamUnavailable):
            await directory.genre_names([28])

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_refresh(self, directory, mock_provider):
        results = await asyncio.gather(*(directory.genre_names([28]) for _ in range(10)))

        assert all(names == ["Action"] for names in results)
        assert mock_provider.get_genres.await_count == 2

    @pytest.mark.asyncio
    async def test_forced_refresh_ignores_freshness(self, directory, mock_provider):
        await directory.genre_names([28])

        refreshed = await directory.refresh(force=True)

        assert refreshed.genres[18] == "Drame"
        assert mock_provider.get_genres.await_count == 4


class TestGenreDirectoryFailureBackoff:
    """A failed refresh is not repeated by waiting or later callers."""

    @staticmethod
    def failing_after(delay: float):
        async def _get_genres(kind):
            await asyncio.sleep(delay)
            raise UpstreamUnavailable("genre lists down")

        return _get_genres

    @pytest.mark.asyncio
    async def test_waiting_callers_reuse_previous_directory(
        self, directory, mock_provider, clock
    ):
        await directory.genre_names([28])
        clock.advance(days=2)
        mock_provider.get_genres.side_effect = self.failing_after(0.05)

        results = await asyncio.gather(*(directory.genre_names([28]) for _ in range(10)))

        assert all(names == ["Action"] for names in results)
        assert mock_provider.get_genres.await_count == 4

    @pytest.mark.asyncio
    async def test_waiting_callers_share_first_ever_failure(self, directory, mock_provider):
        mock_provider.get_genres.side_effect = self.failing_after(0.05)

        results = await asyncio.gather(
            *(directory.genre_names([28]) for _ in range(10)), return_exceptions=True
        )

        assert all(isinstance(result, UpstreamUnavailable) for result in results)
        assert mock_provider.get_genres.await_count == 2

    @pytest.mark.asyncio
    async def test_upstream_retried_after_backoff(self, directory, mock_provider, clock):
        mock_provider.get_genres.side_effect = UpstreamUnavailable("down")
        with pytest.raises(UpstreamUnavailable):
            await directory.genre_names([28])

        clock.advance(seconds=30)
        with pytest.raises(UpstreamUnavailable):
            await directory.genre_names([28])
        assert mock_provider.get_genres.await_count == 2

        clock.advance(seconds=31)
        mock_provider.get_genres.side_effect = genres_by_kind

        assert await directory.genre_names([28]) == ["Action"]
        assert mock_provider.get_genres.await_count == 4
