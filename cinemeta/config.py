"""
Configuration de l'application via pydantic-settings.

La configuration est chargee depuis les variables d'environnement avec le prefixe CINEMETA_,
et peut optionnellement etre fournie via un fichier .env.

La cle TMDB est optionnelle - les commandes distantes echouent proprement si elle manque.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fichier .env a la racine du projet (parent de cinemeta/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Parametres de l'application avec support des variables d'environnement.

    Tous les parametres peuvent etre surcharges via des variables d'environnement
    avec le prefixe CINEMETA_.
    Exemple : CINEMETA_REGION=GB

    Les chemins sont automatiquement etendus (~ -> repertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix="CINEMETA_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base de donnees du catalogue
    database_url: str = Field(default="sqlite:///cinemeta.db")

    # TMDB (cle v3 ou jeton v4)
    tmdb_api_key: Optional[str] = Field(default=None)
    tmdb_language: str = Field(default="en-US")
    image_language: str = Field(default="en")
    region: str = Field(default="US", min_length=2, max_length=2)

    # Caches et fichiers temporaires
    metadata_cache_dir: Path = Field(default=Path(".cache/tmdb"))
    api_cache_dir: Path = Field(default=Path(".cache/api"))
    temp_dir: Path = Field(default=Path(".cache/tmp"))
    cache_max_age_days: int = Field(default=30, ge=0)

    # Acces distant
    remote_max_attempts: int = Field(default=10, ge=1)
    remote_max_wait: float = Field(default=60, gt=0)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de retention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cinemeta.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator(
        "metadata_cache_dir", "api_cache_dir", "temp_dir", "log_file", mode="before"
    )
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Etend ~ vers le repertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Verifie si l'API TMDB est configuree."""
        return bool(self.tmdb_api_key)
