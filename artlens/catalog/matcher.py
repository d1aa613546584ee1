"""Fuzzy cascade matching of an identification against the known catalog."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from fuzzywuzzy import fuzz

from artlens.catalog.models import CatalogEntry
from artlens.catalog.normalize import normalize

logger = logging.getLogger(__name__)

# Edit-distance ratio on sorted tokens, 0-100; word order is ignored.
Scorer = Callable[[str, str], int]


@dataclass
class _Candidate:
    entry: CatalogEntry
    title: str
    artist: str
    title_score: int = 0
    artist_score: int = 0


class CatalogMatcher:
    """Title first, then artist among the title survivors only.

    The winner is the closest title and, among those, the closest artist.
    Ties keep catalog order.
    """

    def __init__(self, min_similarity: float = 0.90, scorer: Scorer = fuzz.token_sort_ratio) -> None:
        if not 0.0 < min_similarity <= 1.0:
            raise ValueError("min_similarity must be in (0, 1]")
        self.min_similarity = min_similarity
        self._cutoff = round(min_similarity * 100)
        self._scorer = scorer

    def match(self, title: str, artist: str, entries: list[CatalogEntry]) -> CatalogEntry | None:
        query_title = normalize(title)
        query_artist = normalize(artist)
        logger.info("Catalog search: %r by %r among %d entries", query_title, query_artist, len(entries))
        if not query_title or not entries:
            return None

        candidates = [
            _Candidate(entry=e, title=normalize(e.title), artist=normalize(e.artist_name))
            for e in entries
        ]
        survivors = self._title_stage(query_title, candidates)
        if not survivors:
            logger.info("No title within %.0f%% similarity", self.min_similarity * 100)
            return None

        finalists = self._artist_stage(query_artist, survivors)
        if not finalists:
            logger.info("%d title matches, none with a matching artist", len(survivors))
            return None

        best = max(finalists, key=lambda c: c.artist_score)
        logger.info(
            "Catalog match %s: %r by %r (title %d%%, artist %d%%)",
            best.entry.id, best.entry.title, best.entry.artist_name, best.title_score, best.artist_score,
        )
        return best.entry

    def _title_stage(self, query: str, candidates: list[_Candidate]) -> list[_Candidate]:
        survivors = []
        for candidate in candidates:
            candidate.title_score = self._scorer(query, candidate.title)
            if candidate.title_score >= self._cutoff:
                survivors.append(candidate)
        return survivors

    def _artist_stage(self, query: str, survivors: list[_Candidate]) -> list[_Candidate]:
        finalists = []
        for candidate in survivors:
            candidate.artist_score = self._scorer(query, candidate.artist)
            if candidate.artist_score >= self._cutoff:
                finalists.append(candidate)
        return finalists
