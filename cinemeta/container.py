"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI: acces TMDB,
caches, sidecars, catalogue SQLModel et services de metadonnees.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.gate import RemoteGate
from .adapters.api.tmdb_client import TMDBClient
from .adapters.image_downloader import HttpImageDownloader
from .adapters.library_reprocessor import LoggingLibraryReprocessor
from .adapters.sidecar import MovieJsonStore
from .config import Settings
from .infrastructure.persistence.database import get_session, init_db
from .infrastructure.persistence.repositories import SQLModelCatalogRepository
from .services.artwork_discovery import ArtworkDiscoveryService
from .services.comparison import MetadataComparisonService
from .services.metadata_cache import MetadataCache
from .services.metadata_save import MetadataSaveService
from .services.reconciliation import AssetReconciler


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.database.init()  # Initialise la DB une fois
        comparison = container.comparison_service()
        result = await comparison.compare(tmdb_id=27205, movie_id=1)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Database - Resource pour initialisation unique
    database = providers.Resource(init_db)

    # Session factory - nouvelle session a chaque appel
    session = providers.Factory(lambda: next(get_session()))

    # Porte single-flight - une seule instance par processus
    remote_gate = providers.Singleton(RemoteGate)

    # Cache API - Singleton pour partage entre recherches
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.api_cache_dir,
    )

    # Client TMDB - Singleton avec api_key depuis config
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        language=config.provided.tmdb_language,
        image_language=config.provided.image_language,
        max_attempts=config.provided.remote_max_attempts,
        max_wait=config.provided.remote_max_wait,
    )

    # Adapters fichiers et reseau
    image_downloader = providers.Singleton(HttpImageDownloader)
    movie_json_store = providers.Singleton(MovieJsonStore)
    library_reprocessor = providers.Singleton(LoggingLibraryReprocessor)

    # Repository - Factory pour nouvelle instance avec session fraiche
    catalog_repository = providers.Factory(
        SQLModelCatalogRepository,
        session=session,
    )

    # Services
    metadata_cache = providers.Singleton(
        MetadataCache,
        provider=tmdb_client,
        gate=remote_gate,
        cache_dir=config.provided.metadata_cache_dir,
        search_cache=api_cache,
        max_age_days=config.provided.cache_max_age_days,
        region=config.provided.region,
        image_language=config.provided.image_language,
    )

    # Service stateless - sensibilite a la casse sondee au premier usage
    artwork_discovery = providers.Singleton(ArtworkDiscoveryService)

    asset_reconciler = providers.Factory(
        AssetReconciler,
        downloader=image_downloader,
        temp_dir=config.provided.temp_dir,
    )

    comparison_service = providers.Factory(
        MetadataComparisonService,
        catalog=catalog_repository,
        metadata_cache=metadata_cache,
        store=movie_json_store,
    )

    save_service = providers.Factory(
        MetadataSaveService,
        catalog=catalog_repository,
        store=movie_json_store,
        reconciler=asset_reconciler,
        reprocessor=library_reprocessor,
    )
