"""
Cinemeta - Enrichissement des metadonnees et illustrations d'une videotheque.

Ce package recupere les metadonnees d'un film depuis TMDB, les met en cache
sur disque, les compare a l'etat local d'un dossier de film et reconcilie
les illustrations (poster, backdrops) telechargees dans ce dossier.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, erreurs)
- services/ : Couche application (cache, comparaison, reconciliation)
- adapters/ : Couche infrastructure (CLI, clients API, fichiers sidecar)
- infrastructure/ : Lecture du catalogue (SQLModel)
"""

__version__ = "0.1.0"
