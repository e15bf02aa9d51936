"""
Constantes partagees du projet Cinemeta.

Conventions de nommage des fichiers dans un dossier de film et parametres
par defaut du fournisseur TMDB.
"""

# Extensions d'images reconnues, dans l'ordre de decouverte
IMAGE_EXTENSIONS: tuple[str, ...] = (".jpg", ".jpeg", ".png")

# Noms de base acceptes pour un poster (en plus du nom de la video)
POSTER_BASE_NAMES: tuple[str, ...] = ("cover", "default", "folder", "movie", "poster")

# Noms de base acceptes pour un backdrop (optionnellement prefixes par "<video>-")
BACKDROP_BASE_NAMES: tuple[str, ...] = ("art", "backdrop", "background", "fanart")

# Fichiers et dossiers conventionnels d'un dossier de film
SIDECAR_FILENAME = "movie.json"
POSTER_FILENAME = "poster.jpg"
BACKDROP_FOLDER = "backdrops"

# TMDB
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/original"
TMDB_MOVIE_APPENDS: tuple[str, ...] = (
    "alternative_titles",
    "credits",
    "images",
    "keywords",
    "releases",
    "release_dates",
    "videos",
)

# Fraicheur du cache des metadonnees (jours)
METADATA_CACHE_MAX_AGE_DAYS = 30

# Budget de tentatives du client distant
REMOTE_MAX_ATTEMPTS = 10
