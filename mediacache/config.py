"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe MEDIACACHE_,
et peut optionnellement être fournie via un fichier .env.

La clé TMDB est optionnelle au chargement ; sans elle toute résolution amont
échoue en UpstreamUnavailable (les fiches déjà en base restent servies).
"""

from datetime import timedelta
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mediacache.utils.constants import (
    DEFAULT_CATALOG_URL,
    DEFAULT_EMBED_BASE_URL,
    TMDB_BASE_URL,
    TMDB_IMAGE_BASE_URL,
)

# Trouver le fichier .env à la racine du projet (parent de mediacache/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe MEDIACACHE_.
    Exemple : MEDIACACHE_RECORD_TTL_SECONDS=600
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIACACHE_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API TMDB (clé v3 ou jeton v4)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_base_url: str = Field(default=TMDB_BASE_URL)
    image_base_url: str = Field(default=TMDB_IMAGE_BASE_URL)
    probe_timeout_seconds: float = Field(default=10.0, gt=0)

    # Flux catalogue et lecteur intégré
    catalog_url: str = Field(default=DEFAULT_CATALOG_URL)
    embed_base_url: str = Field(default=DEFAULT_EMBED_BASE_URL)

    # Base de données
    database_url: str = Field(default="sqlite:///data/mediacache.db")

    # Fraîcheur
    record_ttl_seconds: int = Field(default=3600, ge=0)
    genre_ttl_seconds: int = Field(default=86400, ge=0)
    genre_retry_backoff_seconds: int = Field(default=60, ge=0)

    # Cache disque des réponses amont (tendances, recherche)
    api_cache_dir: Path = Field(default=Path(".cache/api"))
    api_cache_ttl_seconds: int = Field(default=600, ge=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/mediacache.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("api_cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def record_ttl(self) -> timedelta:
        return timedelta(seconds=self.record_ttl_seconds)

    @property
    def genre_ttl(self) -> timedelta:
        return timedelta(seconds=self.genre_ttl_seconds)

    @property
    def genre_retry_backoff(self) -> timedelta:
        return timedelta(seconds=self.genre_retry_backoff_seconds)
