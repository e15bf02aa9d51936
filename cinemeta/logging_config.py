"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console : coloree, pour suivre les telechargements en direct
- fichier : JSON avec rotation, pour l'analyse apres coup
"""

import sys
from pathlib import Path

from loguru import logger

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)


def verbosity_to_level(verbose: int = 0, quiet: bool = False, default: str = "INFO") -> str:
    """Traduit les options -v/-q de la CLI en niveau loguru."""
    if quiet:
        return "ERROR"
    if verbose >= 1:
        return "DEBUG"
    return default


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/cinemeta.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum de la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs a conserver
    """
    logger.remove()

    logger.add(sys.stderr, level=log_level, format=_CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",  # Hits/miss du cache en DEBUG
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), rotation=rotation_size)
