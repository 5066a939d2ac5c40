"""
Tests for media entities (MediaRecord, GenreDirectory) and MediaKind.
"""

from datetime import datetime, timezone

from mediacache.core.entities.media import GenreDirectory, MediaRecord
from mediacache.core.value_objects import MediaKind


REFRESHED_AT = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestMediaKind:
    """Tests for MediaKind.parse()."""

    def test_parses_wire_values(self) -> None:
        assert MediaKind.parse("movie") is MediaKind.MOVIE
        assert MediaKind.parse("tv") is MediaKind.SERIES
        assert MediaKind.parse("unknown") is MediaKind.UNKNOWN

    def test_accepts_series_alias(self) -> None:
        assert MediaKind.parse("series") is MediaKind.SERIES

    def test_returns_none_for_unrecognized(self) -> None:
        assert MediaKind.parse("person") is None
        assert MediaKind.parse(None) is None


class TestMediaRecord:
    """Tests for MediaRecord."""

    def test_unknown_record_has_no_content(self) -> None:
        record = MediaRecord.unknown("999", REFRESHED_AT)

        assert record.is_unknown
        assert record.kind is MediaKind.UNKNOWN
        assert record.genres == ()
        assert record.poster_url is None
        assert record.raw is None
        assert record.refreshed_at == REFRESHED_AT

    def test_to_dict_wire_shape(self) -> None:
        record = MediaRecord(
            id="101",
            kind=MediaKind.MOVIE,
            title="Alpha",
            poster_url="https://image.tmdb.org/t/p/w500/a.jpg",
            rating=7.5,
            release_date="2020-01-01",
            genres=("Action",),
            refreshed_at=REFRESHED_AT,
            raw={"id": 101},
        )

        data = record.to_dict()

        assert data["id"] == "101"
        assert data["type"] == "movie"
        assert data["title"] == "Alpha"
        assert data["poster"] == "https://image.tmdb.org/t/p/w500/a.jpg"
        assert data["backdrop"] is None
        assert data["genres"] == ["Action"]
        assert data["updated_at"] == "2024-06-01T12:00:00+00:00"
        assert "raw_tmdb" not in data
        assert "error" not in data

    def test_to_dict_includes_raw_on_request(self) -> None:
        record = MediaRecord(id="101", kind=MediaKind.MOVIE, raw={"id": 101})
        assert record.to_dict(include_raw=True)["raw_tmdb"] == {"id": 101}

    def test_unknown_to_dict_carries_error(self) -> None:
        data = MediaRecord.unknown("999", REFRESHED_AT).to_dict()
        assert data["type"] == "unknown"
        assert data["error"] == "Not found"


class TestGenreDirectory:
    """Tests for GenreDirectory.names()."""

    def test_translates_in_order(self) -> None:
        directory = GenreDirectory(genres={28: "Action", 12: "Aventure"})
        assert directory.names([12, 28]) == ("Aventure", "Action")

    def test_unknown_ids_are_dropped(self) -> None:
        directory = GenreDirectory(genres={28: "Action"})
        assert directory.names([28, 9999]) == ("Action",)

    def test_duplicates_are_suppressed(self) -> None:
        directory = GenreDirectory(genres={28: "Action"})
        assert directory.names([28, 28]) == ("Action",)

    def test_empty_input(self) -> None:
        assert GenreDirectory(genres={28: "Action"}).names([]) == ()
