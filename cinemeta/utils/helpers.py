"""
Fonctions utilitaires partagees dans le projet Cinemeta.

- unique : deduplication ordonnee
- parse_iso_date : conversion tolerante d'une date ISO
"""

from datetime import date
from typing import Any, Iterable, Optional


def unique(values: Iterable[Optional[str]]) -> list[str]:
    """Retire les doublons et les valeurs vides en conservant l'ordre."""
    return list(dict.fromkeys(v for v in values if v))


def parse_iso_date(value: Any) -> Optional[date]:
    """
    Convertit "YYYY-MM-DD" en date.

    Accepte aussi un timestamp ISO complet ("2009-12-10T00:00:00.000Z") dont
    seule la partie date est conservee. Retourne None si invalide.
    """
    if not isinstance(value, str) or len(value) < 10:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None
