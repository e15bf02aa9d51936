"""
Commandes CLI des metadonnees (search, compare, save).
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.table import Table

from cinemeta.adapters.cli.helpers import console, require_tmdb, suppress_loguru, with_container
from cinemeta.core.entities.metadata import Comparison, MetadataRecord
from cinemeta.core.errors import CinemetaError


def _join(values: list[str], limit: int = 5) -> str:
    shown = ", ".join(values[:limit])
    if len(values) > limit:
        shown += f" (+{len(values) - limit})"
    return shown or "-"


def _fields(record: MetadataRecord) -> dict[str, str]:
    """Valeurs affichables d'un enregistrement, par libelle."""
    return {
        "Titre": record.title or "-",
        "Titres": _join(record.titles),
        "Collection": record.collection or "-",
        "Genres": _join(record.genres),
        "Duree": f"{record.runtime} min" if record.runtime else "-",
        "Certification": record.rating or "-",
        "Sortie": record.release_date.isoformat() if record.release_date else "-",
        "Distribution": _join([m.name for m in record.cast]),
        "Posters": str(len(record.poster_urls)),
        "Backdrops": str(len(record.backdrop_urls)),
    }


def _render_comparison(comparison: Comparison) -> Table:
    """Tableau cote a cote: valeurs actuelles et valeurs TMDB."""
    table = Table(title="Comparaison des metadonnees")
    table.add_column("Champ", style="bold")
    table.add_column("Actuel")
    table.add_column("TMDB")

    current = _fields(comparison.current)
    incoming = _fields(comparison.incoming)
    for label, value in current.items():
        other = incoming[label]
        style = "yellow" if value != other else None
        table.add_row(label, value, other, style=style)
    return table


def search(
    text: Annotated[str, typer.Argument(help="Titre a rechercher sur TMDB")],
) -> None:
    """Recherche un film sur TMDB."""
    asyncio.run(_search_async(text))


@with_container(requires_db=False)
async def _search_async(container, text: str) -> None:
    """Implementation async de la commande search."""
    require_tmdb(container)
    try:
        results = await container.metadata_cache().search(text)
    except CinemetaError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await container.tmdb_client().close()

    if not results:
        console.print(f"[yellow]Aucun resultat pour '{text}'.[/yellow]")
        return

    table = Table(title=f"Resultats TMDB pour '{text}'")
    table.add_column("ID TMDB", justify="right")
    table.add_column("Titre")
    table.add_column("Annee")
    for result in results:
        year = str(result.release_date.year) if result.release_date else "-"
        table.add_row(str(result.tmdb_id), result.title, year)
    console.print(table)


def compare(
    tmdb_id: Annotated[int, typer.Argument(help="ID TMDB de l'enregistrement entrant")],
    movie_id: Annotated[int, typer.Argument(help="ID du film dans le catalogue")],
) -> None:
    """Compare les metadonnees actuelles d'un film avec TMDB."""
    asyncio.run(_compare_async(tmdb_id, movie_id))


@with_container()
async def _compare_async(container, tmdb_id: int, movie_id: int) -> None:
    """Implementation async de la commande compare."""
    require_tmdb(container)
    service = container.comparison_service()
    try:
        comparison = await service.compare(tmdb_id, movie_id)
    except CinemetaError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await container.tmdb_client().close()

    with suppress_loguru():
        console.print(_render_comparison(comparison))


def save(
    tmdb_id: Annotated[int, typer.Argument(help="ID TMDB de l'enregistrement a appliquer")],
    movie_id: Annotated[int, typer.Argument(help="ID du film dans le catalogue")],
    max_backdrops: Annotated[
        Optional[int],
        typer.Option("--max-backdrops", min=0, help="Nombre maximum de backdrops a garder"),
    ] = None,
) -> None:
    """Applique l'enregistrement TMDB au dossier du film."""
    asyncio.run(_save_async(tmdb_id, movie_id, max_backdrops))


@with_container()
async def _save_async(
    container, tmdb_id: int, movie_id: int, max_backdrops: Optional[int]
) -> None:
    """Implementation async de la commande save."""
    require_tmdb(container)
    comparison_service = container.comparison_service()
    save_service = container.save_service()
    try:
        comparison = await comparison_service.compare(tmdb_id, movie_id)
        incoming = comparison.incoming
        if max_backdrops is not None:
            incoming.backdrop_urls = incoming.backdrop_urls[:max_backdrops]
        saved = await save_service.save(movie_id, incoming)
    except CinemetaError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await container.tmdb_client().close()
        await container.image_downloader().close()

    console.print(
        f"[green]Metadonnees enregistrees:[/green] {saved.title} "
        f"({len(saved.backdrops)} backdrop(s), poster {'oui' if saved.poster else 'non'})"
    )
