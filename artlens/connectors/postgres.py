"""PostgreSQL catalog and collection store (asyncpg)."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

import asyncpg

from artlens.catalog.models import CatalogEntry
from artlens.connectors.base import CatalogStore, CollectionItem, CollectionStore, SnapshotFields
from artlens.types import Language

logger = logging.getLogger(__name__)

_CANDIDATES_SQL = """
    SELECT a.id, a.year, a.period, a.category_id, a.country,
           a.title AS base_title, a.description AS base_description,
           a.artist_name,
           t.title AS tr_title, t.description AS tr_description
    FROM artworks a
    LEFT JOIN artwork_translations t
           ON t.artwork_id = a.id AND t.language = $1
    WHERE a.is_active
"""


def _row_to_entry(row: Any) -> CatalogEntry:
    return CatalogEntry(
        id=str(row["id"]),
        title=row["tr_title"] or row["base_title"],
        artist_name=row["artist_name"] or "",
        year=row["year"],
        period=row["period"],
        description=row["tr_description"] or row["base_description"] or "",
        category_id=row["category_id"],
        country=row["country"],
    )


class PostgresStore(CatalogStore, CollectionStore):
    """Catalog reads and collection writes against the artlens schema.

    Expects ``artworks``, ``artwork_translations`` and ``collection_items``
    tables. Unlike the evidence sources, store failures propagate: a lost
    write is a boundary error, not a "not identified".
    """

    def __init__(self, postgres_url: str) -> None:
        self._url = postgres_url
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        self._pool = await asyncpg.create_pool(self._url, min_size=1, max_size=5)
        logger.info("PostgresStore connected to %s", self._url.split("@")[-1])

    async def disconnect(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None

    def _require_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("PostgresStore is not connected")
        return self._pool

    async def find_all_candidates(self, language: Language) -> list[CatalogEntry]:
        rows = await self._require_pool().fetch(_CANDIDATES_SQL, language.value)
        return [_row_to_entry(r) for r in rows]

    async def find_by_id(self, artwork_id: str, language: Language = Language.ES) -> CatalogEntry | None:
        row = await self._require_pool().fetchrow(
            _CANDIDATES_SQL + " AND a.id::text = $2", language.value, artwork_id,
        )
        return _row_to_entry(row) if row else None

    async def create_item(
        self,
        user_id: str,
        local_uri: str,
        linked_id: str | None,
        snapshot: SnapshotFields,
        confidence: float = 0.0,
    ) -> CollectionItem:
        item = CollectionItem(
            id=str(uuid.uuid4()),
            user_id=user_id,
            artwork_id=linked_id,
            local_uri=local_uri,
            confidence=confidence,
            is_custom=linked_id is None,
            snapshot=snapshot,
        )
        await self._require_pool().execute(
            """
            INSERT INTO collection_items
                (id, user_id, artwork_id, local_uri, confidence, is_custom,
                 custom_title, custom_author, custom_year, custom_technique,
                 custom_dimensions, custom_description, custom_country,
                 custom_category_id, tags, captured_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15::jsonb, $16)
            """,
            item.id, user_id, linked_id, local_uri, confidence, item.is_custom,
            snapshot.title, snapshot.author, snapshot.year, snapshot.technique,
            snapshot.dimensions, snapshot.description, snapshot.country,
            snapshot.category_id, json.dumps(snapshot.tags), item.captured_at,
        )
        logger.info("Saved collection item %s for user %s (custom=%s)", item.id, user_id, item.is_custom)
        return item

    async def health_check(self) -> dict:
        if not self._pool:
            return {"status": "unhealthy", "error": "not connected"}
        try:
            count = await self._pool.fetchval("SELECT count(*) FROM artworks WHERE is_active")
            return {"status": "healthy", "artworks": count}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e)}

    def name(self) -> str:
        return "postgres"
