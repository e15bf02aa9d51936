"""
Couche application (cas d'utilisation).

Les services orchestrent la logique du domaine:
- metadata_cache : Cache disque des metadonnees TMDB et recherche
- metadata_projection : Projection TMDB brut -> MetadataRecord
- artwork_discovery : Posters et backdrops presents a cote d'une video
- comparison : Etat actuel d'un film face a un enregistrement TMDB
- reconciliation : Telechargement et ordre des illustrations
- metadata_save : Sauvegarde complete d'un film
"""
