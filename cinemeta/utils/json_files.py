"""
Lecture et ecriture des documents JSON sur disque.

L'ecriture passe par un fichier temporaire puis ``replace`` : un document
n'est jamais laisse a moitie ecrit.
"""

import json
from pathlib import Path
from typing import Any

from cinemeta.core.errors import CacheCorruptError


def read_json_object(path: Path) -> dict[str, Any]:
    """
    Lit un document JSON dont la racine doit etre un objet.

    Raises:
        FileNotFoundError: si le fichier n'existe pas
        CacheCorruptError: si le contenu n'est pas un objet JSON valide
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CacheCorruptError(f"File is not valid UTF-8: {path}") from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CacheCorruptError(f"File is not valid JSON: {path}: {e}") from e
    if not isinstance(data, dict):
        raise CacheCorruptError(f"File must contain a JSON object: {path}")
    return data


def write_json_atomic(path: Path, data: Any) -> Path:
    """Ecrit ``data`` en JSON indente, en remplacant le fichier d'un bloc."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(
        json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    tmp.replace(path)
    return path
