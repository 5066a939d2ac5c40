"""
Point d'entrée CLI de MediaCache.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

import asyncio
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import Settings
from .container import Container
from .core.entities.media import MediaRecord
from .core.exceptions import MediaCacheError
from .logging_config import configure_logging

app = typer.Typer(
    name="mediacache",
    help="Proxy de cache des métadonnées TMDB",
)
container = Container()
console = Console()


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


async def _close_clients() -> None:
    await container.tmdb_client().close()
    await container.catalog_client().close()
    container.api_cache().close()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    count = asyncio.run(container.media_record_repository().count())
    logger.info("Configuration MediaCache")
    typer.echo(f"Base de données : {config.database_url}")
    typer.echo(f"Fiches en cache : {count}")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Catalogue : {config.catalog_url}")
    typer.echo(f"TTL fiches : {config.record_ttl_seconds}s")
    typer.echo(f"TTL genres : {config.genre_ttl_seconds}s")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"MediaCache v{__version__}")


def _records_table(records: list[MediaRecord]) -> Table:
    table = Table(title="Fiches résolues")
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Titre", style="bold")
    table.add_column("Date")
    table.add_column("Note", justify="right")
    table.add_column("Genres")
    for record in records:
        table.add_row(
            record.id,
            record.kind.value,
            record.title or "-",
            record.release_date or "-",
            f"{record.rating:.1f}" if record.rating is not None else "-",
            ", ".join(record.genres),
        )
    return table


@app.command()
def resolve(
    ids: Annotated[list[str], typer.Argument(help="Identifiants TMDB à résoudre")],
) -> None:
    """Résout des identifiants (cache puis TMDB) et affiche les fiches."""

    async def _resolve_async() -> list[MediaRecord]:
        try:
            return await container.coordinator().resolve_many(ids)
        finally:
            await _close_clients()

    try:
        records = asyncio.run(_resolve_async())
    except MediaCacheError as e:
        console.print(f"[red]Erreur :[/red] {e}")
        raise typer.Exit(code=1)

    console.print(_records_table(records))
    missing = len(ids) - len(records)
    if missing:
        console.print(f"[yellow]{missing} identifiant(s) non résolu(s) (API indisponible)[/yellow]")


@app.command(name="refresh-genres")
def refresh_genres() -> None:
    """Force le rafraîchissement de l'annuaire des genres."""

    async def _refresh_async():
        try:
            return await container.genre_directory().refresh(force=True)
        finally:
            await _close_clients()

    try:
        directory = asyncio.run(_refresh_async())
    except MediaCacheError as e:
        console.print(f"[red]Erreur :[/red] {e}")
        raise typer.Exit(code=1)

    console.print(f"[green]{len(directory.genres)} genres[/green] (mis à jour {directory.refreshed_at:%Y-%m-%d %H:%M} UTC)")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "0.0.0.0",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web MediaCache."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("mediacache.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    # Charge la configuration et configure le logging
    settings = container.config()
    configure_logging(settings)

    # Initialise la base de données (crée les tables si nécessaire)
    container.database.init()

    logger.info("Démarrage de MediaCache", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
