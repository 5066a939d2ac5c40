"""
Mock TMDB API responses for testing.

Contains realistic responses from the TMDB API for the detail, genre,
trending and multi-search endpoints. These fixtures are used with respx
to mock httpx calls and with AsyncMock providers in service tests.
"""

# GET /movie/550
TMDB_MOVIE_DETAILS_RESPONSE = {
    "adult": False,
    "backdrop_path": "/hZkgoQYus5vegHoetLkCJzb17zJ.jpg",
    "genres": [{"id": 18, "name": "Drame"}, {"id": 53, "name": "Thriller"}],
    "id": 550,
    "imdb_id": "tt0137523",
    "original_title": "Fight Club",
    "overview": "Le narrateur, sans identite precise, vit seul...",
    "poster_path": "/t1i10ptOivG4hV7erkX3tmKpiqm.jpg",
    "release_date": "1999-10-15",
    "runtime": 139,
    "title": "Fight Club",
    "vote_average": 8.4,
    "vote_count": 28000,
}

# GET /tv/1399
TMDB_TV_DETAILS_RESPONSE = {
    "backdrop_path": "/2OMB0ynKlyIenMJWI2Dy9IWT4c.jpg",
    "first_air_date": "2011-04-17",
    "genres": [{"id": 10765, "name": "Science-Fiction & Fantastique"}, {"id": 18, "name": "Drame"}],
    "id": 1399,
    "name": "Game of Thrones",
    "original_name": "Game of Thrones",
    "overview": "Il y a tres longtemps, a une epoque oubliee...",
    "poster_path": "/1XS1oqL89opfnbLl8WnZY1O1uJx.jpg",
    "vote_average": 8.4,
}

# GET /movie/{id} or /tv/{id} for an unknown id
TMDB_NOT_FOUND_RESPONSE = {
    "success": False,
    "status_code": 34,
    "status_message": "The resource you requested could not be found.",
}

# GET /genre/movie/list
TMDB_MOVIE_GENRES_RESPONSE = {
    "genres": [
        {"id": 28, "name": "Action"},
        {"id": 12, "name": "Aventure"},
        {"id": 18, "name": "Drame"},
        {"id": 53, "name": "Thriller"},
    ]
}

# GET /genre/tv/list
TMDB_TV_GENRES_RESPONSE = {
    "genres": [
        {"id": 18, "name": "Drama"},
        {"id": 10759, "name": "Action & Adventure"},
        {"id": 10765, "name": "Science-Fiction & Fantastique"},
    ]
}

# GET /trending/movie/week?page=1
TMDB_TRENDING_RESPONSE = {
    "page": 1,
    "results": [
        {"id": 550, "media_type": "movie", "title": "Fight Club"},
        {"id": 603, "media_type": "movie", "title": "Matrix"},
    ],
    "total_pages": 1,
    "total_results": 2,
}

# GET /search/multi?query=matrix
TMDB_SEARCH_MULTI_RESPONSE = {
    "page": 1,
    "results": [
        {"id": 603, "media_type": "movie", "title": "Matrix"},
        {"id": 6384, "media_type": "person", "name": "Keanu Reeves"},
        {"id": 1399, "media_type": "tv", "name": "Game of Thrones"},
    ],
}
