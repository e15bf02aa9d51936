"""Commande CLI artwork : illustrations locales d'une video."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.tree import Tree

from cinemeta.adapters.cli.helpers import console, with_container


def artwork(
    video_path: Annotated[
        Path,
        typer.Argument(help="Fichier video dont on cherche les illustrations"),
    ],
) -> None:
    """Liste les posters et backdrops trouves a cote d'une video."""
    asyncio.run(_artwork_async(video_path))


@with_container(requires_db=False)
async def _artwork_async(container, video_path: Path) -> None:
    """Implementation de la commande artwork (sans acces reseau ni BDD)."""
    if not video_path.parent.is_dir():
        console.print(f"[red]Erreur: Repertoire introuvable: {video_path.parent}[/red]")
        raise typer.Exit(1)

    discovery = container.artwork_discovery()
    posters = discovery.find_poster_paths(video_path)
    backdrops = discovery.find_backdrop_paths(video_path)

    tree = Tree(f"[bold blue]{video_path.name}[/bold blue]")
    for label, paths in (("Posters", posters), ("Backdrops", backdrops)):
        branch = tree.add(f"[bold cyan]{label}[/bold cyan] ({len(paths)})")
        for path in paths:
            branch.add(f"[green]{path.name}[/green]")
    console.print(tree)
