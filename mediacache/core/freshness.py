"""
Politique de fraicheur des donnees en cache.

Une donnee est fraiche tant que son age est strictement inferieur a son TTL.
Deux TTL sont utilises : court pour les fiches (1h par defaut), long pour
l'annuaire des genres (24h par defaut).
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """Horloge par defaut (UTC, avec fuseau)."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalise un horodatage : un datetime naif est lu comme UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_fresh(
    refreshed_at: Optional[datetime],
    ttl: timedelta,
    now: Optional[datetime] = None,
) -> bool:
    """
    Indique si une donnee rafraichie a refreshed_at est encore valide.

    Args:
        refreshed_at: Horodatage du dernier rafraichissement (None = jamais)
        ttl: Duree de validite
        now: Instant de reference (defaut: maintenant, UTC)

    Returns:
        True si (now - refreshed_at) < ttl
    """
    if refreshed_at is None:
        return False
    reference = as_utc(now) if now is not None else utc_now()
    return reference - as_utc(refreshed_at) < ttl
