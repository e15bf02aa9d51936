"""
Module de persistance SQLite pour Cinemeta.

- database.py : Configuration de l'engine SQLite, session factory, initialisation
- models.py : Modeles SQLModel des tables sources et movies

Les modeles ici sont des adapters de persistance, distincts des entites de
domaine (dataclass dans core/entities/). La conversion entre les deux se
fait dans les repositories.
"""

from cinemeta.infrastructure.persistence.database import get_engine, get_session, init_db
from cinemeta.infrastructure.persistence.models import MovieModel, SourceModel

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "MovieModel",
    "SourceModel",
]
