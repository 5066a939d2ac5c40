"""
Tests pour build_embed().
"""

import pytest

from mediacache.core.exceptions import InvalidRequest
from mediacache.services.embed import build_embed

BASE = "https://player.test/embed/"


class TestBuildEmbed:
    """Tests de construction des URLs du lecteur."""

    def test_movie_form(self) -> None:
        assert build_embed(BASE, "550") == {
            "success": True,
            "type": "movie",
            "tmdb_id": "550",
            "season": None,
            "episode": None,
            "embed_url": "https://player.test/embed/?id=550",
        }

    def test_episode_form(self) -> None:
        result = build_embed(BASE, "1399", season="2", episode="5")

        assert result["type"] == "tv"
        assert result["season"] == 2
        assert result["episode"] == 5
        assert result["embed_url"] == "https://player.test/embed/?id=1399/2/5"

    def test_season_without_episode_stays_movie_form(self) -> None:
        result = build_embed(BASE, "1399", season="2")

        assert result["type"] == "movie"
        assert result["season"] == 2
        assert result["embed_url"] == "https://player.test/embed/?id=1399"

    @pytest.mark.parametrize("media_id", [None, "", "   "])
    def test_missing_id_is_rejected(self, media_id) -> None:
        with pytest.raises(InvalidRequest, match="Missing id"):
            build_embed(BASE, media_id)

    def test_non_numeric_season_is_rejected(self) -> None:
        with pytest.raises(InvalidRequest):
            build_embed(BASE, "1399", season="deux", episode="1")
