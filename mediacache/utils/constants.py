"""
Constantes globales pour MediaCache.

Ce module contient:
- URLs de base de l'API TMDB et du CDN d'images
- Tailles d'images utilisees pour les posters et backdrops
- URLs par defaut du flux catalogue et du lecteur integre
- Bornes des vues paginees
"""

TMDB_BASE_URL = "https://api.themoviedb.org/3"

# Gabarit: {base}/{size}{path}, path commence par "/"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
POSTER_SIZE = "w500"
BACKDROP_SIZE = "w780"

DEFAULT_CATALOG_URL = "https://letsembed.cc/list/movie.json"
DEFAULT_EMBED_BASE_URL = "https://letsembed.cc/embed/movie/"

# Vues
HOME_SECTION_SIZE = 10
HOME_SECTIONS = ("trending", "popular", "latest")
SEARCH_LIMIT = 20
SEARCH_FALLBACK_THRESHOLD = 5
LIST_DEFAULT_LIMIT = 20
LIST_MAX_LIMIT = 50
