"""
Couche domaine (core).

Contient les entites metier, les ports (interfaces abstraites) et la
hierarchie d'exceptions. Cette couche n'a AUCUNE dependance vers
l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entites metier (MetadataRecord, ImageRecord, Source, CatalogMovie)
- ports/ : Interfaces abstraites definissant les contrats pour les adaptateurs
"""
