"""Trust ranking of candidate pages by static domain reputation."""

from __future__ import annotations

from collections.abc import Iterable

from artlens.evidence.models import WebPage

# Substrings matched against the full URL. Order does not matter.
TRUSTED_SOURCES: tuple[str, ...] = (
    # Encyclopedic
    "wikipedia.org",
    "wikimedia.org",
    "wikidata.org",
    "britannica.com",
    "larousse.fr",
    "treccani.it",
    "enciclopedia",
    # Art databases
    "wikiart.org",
    "artsy.net",
    "artuk.org",
    "googleartsandculture",
    "smarthistory.org",
    # Museums
    "museum",
    "museo",
    "musee",
    "musée",
    "moma.org",
    "louvre.fr",
    "metmuseum.org",
    "britishmuseum.org",
    "prado.es",
    "museodelprado",
    "guggenheim",
    "nationalgallery",
    "rijksmuseum.nl",
    "hermitagemuseum.org",
    "uffizi.it",
    "vam.ac.uk",
    "tate.org.uk",
    "orsay.fr",
    "artic.edu",
    # Heritage and religious architecture
    "unesco.org",
    "whc.unesco",
    "patrimonio",
    "patrimoine",
    "heritage",
    "catedral",
    "cathedral",
    "cathedrale",
    "basilica",
    "basilique",
    "iglesia",
    "eglise",
    "church",
    "chiesa",
    "monasterio",
    "monastery",
    "abbaye",
    "kirche",
    # Cultural tourism
    "turismo",
    "tourisme",
    "visit",
    "spain.info",
    "france.fr",
    "italia.it",
)


def is_trusted(url: str, trusted: Iterable[str] = TRUSTED_SOURCES) -> bool:
    lowered = url.lower()
    return any(marker in lowered for marker in trusted)


def rank_urls(pages: Iterable[WebPage], trusted: Iterable[str] = TRUSTED_SOURCES) -> list[str]:
    """Return page URLs with trusted sources first.

    Two-bucket stable sort: within each bucket the input order is kept.
    Duplicate URLs are dropped after their first occurrence.
    """
    markers = tuple(trusted)
    seen: set[str] = set()
    unique: list[str] = []
    for page in pages:
        if page.url and page.url not in seen:
            seen.add(page.url)
            unique.append(page.url)
    return sorted(unique, key=lambda url: not is_trusted(url, markers))
