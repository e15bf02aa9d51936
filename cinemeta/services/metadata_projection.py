"""
Projection d'un enregistrement brut TMDB vers MetadataRecord.

Chaque champ copie est enumere explicitement. Regles appliquees:
- note et date de sortie: entree la plus ancienne de la region (defaut US),
  absentes si la region n'a aucune entree
- titres: titre principal puis titres alternatifs de la meme region
- posters: poster principal puis posters de la langue d'image
- backdrops: backdrop principal puis backdrops de la langue d'image ou sans
  langue, du mieux note au moins bien note
"""

from datetime import date
from typing import Any, Callable, Optional

from cinemeta.core.entities.metadata import (
    CastMember,
    CrewMember,
    MetadataRecord,
    MovieSearchResult,
)
from cinemeta.utils.helpers import parse_iso_date, unique


def _same(code: Optional[str], expected: str) -> bool:
    return (code or "").lower() == expected.lower()


def find_regional_release(
    raw: dict[str, Any], region: str = "US"
) -> tuple[Optional[str], Optional[date]]:
    """
    Retourne la certification et la date de la plus ancienne sortie regionale.

    Utilise le bloc ``releases.countries``; si TMDB ne le fournit pas, se
    rabat sur ``release_dates.results``. Une certification vide vaut None.

    Returns:
        Tuple (certification, date de sortie), (None, None) si aucune entree
    """
    entries: list[tuple[Optional[str], Optional[date]]] = []

    countries = (raw.get("releases") or {}).get("countries")
    if countries is not None:
        for country in countries:
            if _same(country.get("iso_3166_1"), region):
                entries.append(
                    (country.get("certification"), parse_iso_date(country.get("release_date")))
                )
    else:
        for result in (raw.get("release_dates") or {}).get("results", []):
            if not _same(result.get("iso_3166_1"), region):
                continue
            for release in result.get("release_dates", []):
                entries.append(
                    (release.get("certification"), parse_iso_date(release.get("release_date")))
                )

    if not entries:
        return None, None
    # Les entrees sans date passent en dernier
    entries.sort(key=lambda entry: (entry[1] is None, entry[1] or date.min))
    certification, release_date = entries[0]
    return certification or None, release_date


def _backdrop_paths(raw: dict[str, Any], image_language: str) -> list[str]:
    backdrops = (raw.get("images") or {}).get("backdrops") or []
    kept = [
        b for b in backdrops
        if b.get("iso_639_1") is None or _same(b.get("iso_639_1"), image_language)
    ]
    # sorted() est stable: a note egale, l'ordre TMDB est conserve
    kept = sorted(kept, key=lambda b: b.get("vote_average") or 0, reverse=True)
    return [b["file_path"] for b in kept if b.get("file_path")]


def _poster_paths(raw: dict[str, Any], image_language: str) -> list[str]:
    posters = (raw.get("images") or {}).get("posters") or []
    return [
        p["file_path"]
        for p in posters
        if p.get("file_path") and _same(p.get("iso_639_1"), image_language)
    ]


def project_tmdb_movie(
    raw: dict[str, Any],
    image_url: Callable[[str], str],
    region: str = "US",
    image_language: str = "en",
) -> MetadataRecord:
    """
    Projette l'enregistrement brut /movie/{id} vers MetadataRecord.

    Args:
        raw: JSON brut TMDB (avec append_to_response)
        image_url: Fonction qui construit l'URL absolue d'un chemin d'image
        region: Code pays ISO 3166-1 des certifications et titres alternatifs
        image_language: Code langue ISO 639-1 des illustrations retenues

    Returns:
        MetadataRecord sans enregistrements d'images (backdrops, poster)
    """
    rating, release_date = find_regional_release(raw, region)

    credits = raw.get("credits") or {}
    cast = [
        CastMember(name=m["name"], character=m.get("character"), tmdb_id=m.get("id"))
        for m in credits.get("cast") or []
        if m.get("name")
    ]
    crew = [
        CrewMember(name=m["name"], job=m.get("job"), tmdb_id=m.get("id"))
        for m in credits.get("crew") or []
        if m.get("name")
    ]

    alternative_titles = [
        t.get("title")
        for t in (raw.get("alternative_titles") or {}).get("titles") or []
        if _same(t.get("iso_3166_1"), region)
    ]

    poster_paths = [raw.get("poster_path")] + _poster_paths(raw, image_language)
    backdrop_paths = [raw.get("backdrop_path")] + _backdrop_paths(raw, image_language)

    title = raw.get("title") or raw.get("original_title") or ""
    collection = raw.get("belongs_to_collection") or {}
    keywords = (raw.get("keywords") or {}).get("keywords") or []

    return MetadataRecord(
        tmdb_id=raw.get("id"),
        title=title,
        titles=unique([title, *alternative_titles]),
        summary=raw.get("overview"),
        description=raw.get("overview"),
        collection=collection.get("name"),
        genres=unique(g.get("name") for g in raw.get("genres") or []),
        keywords=unique(k.get("name") for k in keywords),
        runtime=raw.get("runtime"),
        rating=rating,
        release_date=release_date,
        cast=cast,
        crew=crew,
        poster_urls=unique(image_url(p) for p in poster_paths if p),
        backdrop_urls=unique(image_url(p) for p in backdrop_paths if p),
    )


def project_search_result(
    raw: dict[str, Any], image_url: Callable[[str], str]
) -> MovieSearchResult:
    """Projette un resultat brut de /search/movie."""
    poster_path = raw.get("poster_path")
    return MovieSearchResult(
        title=raw.get("title") or raw.get("original_title") or "",
        tmdb_id=raw["id"],
        poster_url=image_url(poster_path) if poster_path else None,
        overview=raw.get("overview"),
        release_date=parse_iso_date(raw.get("release_date")),
    )
