"""
Utilitaires partages pour les commandes CLI de Cinemeta.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- require_tmdb : arret propre si la cle TMDB n'est pas configuree
"""

from contextlib import contextmanager
from functools import wraps

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from cinemeta.container import Container

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("cinemeta")
    try:
        yield
    finally:
        loguru_logger.enable("cinemeta")


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator


def require_tmdb(container) -> None:
    """Quitte avec le code 1 si aucune cle TMDB n'est configuree."""
    if not container.config().tmdb_enabled:
        console.print(
            "[red]Erreur: cle TMDB absente (definir CINEMETA_TMDB_API_KEY)[/red]"
        )
        raise typer.Exit(1)
