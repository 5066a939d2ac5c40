"""
Clients API externes.

Ce module fournit les adaptateurs pour communiquer avec les API externes:
- TMDB: The Movie Database (films, series, genres, tendances, recherche)
- Catalogue: flux JSON listant les identifiants proposes

Infrastructure partagee:
- APICache: Cache disque des listes amont (tendances, recherche)
- RateLimitError: Exception pour les erreurs 429
- request_with_retry: Requete avec backoff exponentiel sur 429
"""

from mediacache.adapters.api.cache import APICache
from mediacache.adapters.api.retry import RateLimitError, request_with_retry, with_retry

__all__ = [
    "APICache",
    "RateLimitError",
    "with_retry",
    "request_with_retry",
]
