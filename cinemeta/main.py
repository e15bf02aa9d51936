"""
Point d'entree CLI de Cinemeta.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import artwork, compare, save, search
from .config import Settings
from .container import Container
from .logging_config import configure_logging, verbosity_to_level

app = typer.Typer(
    name="cinemeta",
    help="Metadonnees et illustrations TMDB des films de la videotheque",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """Cinemeta - Metadonnees TMDB et illustrations des films."""
    if quiet:
        state["quiet"] = True
    else:
        state["verbose"] = verbose

    if verbose or quiet:
        settings = get_config()
        configure_logging(
            log_level=verbosity_to_level(verbose, quiet, settings.log_level),
            log_file=settings.log_file,
            rotation_size=settings.log_rotation_size,
            retention_count=settings.log_retention_count,
        )


app.command()(search)
app.command()(compare)
app.command()(save)
app.command()(artwork)


def get_config() -> Settings:
    """Recupere les parametres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    typer.echo(f"Base de donnees : {config.database_url}")
    typer.echo(f"API TMDB : {'activee' if config.tmdb_enabled else 'desactivee'}")
    typer.echo(f"Langue : {config.tmdb_language} (images: {config.image_language})")
    typer.echo(f"Region : {config.region}")
    typer.echo(f"Cache metadonnees : {config.metadata_cache_dir}")
    typer.echo(f"Fraicheur du cache : {config.cache_max_age_days} jours")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"Cinemeta v{__version__}")


def main() -> None:
    """Point d'entree de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    logger.info("Demarrage de Cinemeta", version=__version__)

    app()


if __name__ == "__main__":
    main()
