"""Sous-package CLI commands - re-exporte les commandes publiques."""

from cinemeta.adapters.cli.commands.artwork_command import artwork
from cinemeta.adapters.cli.commands.metadata_commands import compare, save, search

__all__ = [
    "artwork",
    "compare",
    "save",
    "search",
]
