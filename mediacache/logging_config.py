"""
Configuration du logging de MediaCache via loguru.

Deux sorties, configurees en une fois depuis Settings :
- stderr : lisible, colorée, au niveau MEDIACACHE_LOG_LEVEL
- fichier : JSON sérialisé, niveau DEBUG (appels amont, décisions de cache),
  avec rotation et rétention

Chaque enregistrement porte le contexte "service" et "version" ; les
modules ajoutent le leur par mots-clés (media_id, endpoint, source...).
"""

import sys

from loguru import logger

from mediacache import __version__
from mediacache.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level> {extra}"
)


def configure_logging(settings: Settings) -> None:
    """Remplace les handlers loguru par ceux de l'application.

    Args :
        settings : log_level, log_file, log_rotation_size, log_retention_count
    """
    settings.log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.configure(
        handlers=[
            {
                "sink": sys.stderr,
                "level": settings.log_level.upper(),
                "format": CONSOLE_FORMAT,
                "colorize": True,
            },
            {
                "sink": settings.log_file,
                "level": "DEBUG",
                "serialize": True,
                "rotation": settings.log_rotation_size,
                "retention": settings.log_retention_count,
                "compression": "zip",
                "enqueue": True,
            },
        ],
        extra={"service": "mediacache", "version": __version__},
    )

    logger.debug("Logging configuré", log_file=str(settings.log_file), level=settings.log_level)
