"""In-process stores: catalog seeded from JSON, collection, per-user daily quota."""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from artlens.catalog.models import CatalogEntry
from artlens.connectors.base import CatalogStore, CollectionItem, CollectionStore, QuotaGate, SnapshotFields
from artlens.types import Language

logger = logging.getLogger(__name__)


def load_catalog(path: str | Path) -> list[CatalogEntry]:
    """Read catalog entries from a JSON file.

    Accepts either a top-level list or an object with an ``artworks`` list.
    Invalid entries are skipped with a warning.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    items = raw.get("artworks", []) if isinstance(raw, dict) else raw
    entries = []
    for i, item in enumerate(items):
        try:
            entries.append(CatalogEntry.model_validate(item))
        except ValueError as e:
            logger.warning("Skipping catalog item %d in %s: %s", i, path, e)
    logger.info("Loaded %d catalog entries from %s", len(entries), path)
    return entries


class InMemoryCatalog(CatalogStore):
    def __init__(self, entries: list[CatalogEntry] | None = None) -> None:
        self._entries: dict[str, CatalogEntry] = {e.id: e for e in entries or []}

    @classmethod
    def from_json(cls, path: str | Path) -> InMemoryCatalog:
        return cls(load_catalog(path))

    def add(self, entry: CatalogEntry) -> None:
        self._entries[entry.id] = entry

    async def find_all_candidates(self, language: Language) -> list[CatalogEntry]:
        return [e.localized(language.value) for e in self._entries.values()]

    async def find_by_id(self, artwork_id: str, language: Language = Language.ES) -> CatalogEntry | None:
        entry = self._entries.get(artwork_id)
        return entry.localized(language.value) if entry else None

    async def health_check(self) -> dict:
        return {"status": "healthy", "entries": len(self._entries)}

    def name(self) -> str:
        return "memory_catalog"


class InMemoryCollection(CollectionStore):
    def __init__(self) -> None:
        self.items: list[CollectionItem] = []

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
        self.items.append(item)
        return item

    def for_user(self, user_id: str) -> list[CollectionItem]:
        return [i for i in self.items if i.user_id == user_id]

    async def health_check(self) -> dict:
        return {"status": "healthy", "items": len(self.items)}

    def name(self) -> str:
        return "memory_collection"


@dataclass
class _UserDay:
    count: int = 0
    pending: int = 0
    day: date = field(default_factory=date.today)

    @property
    def used(self) -> int:
        return self.count + self.pending


class DailyQuotaGate(QuotaGate):
    """Per-user recognitions per calendar day. A limit of 0 means unlimited.

    In-flight recognitions hold a pending slot, so concurrent requests from
    one user cannot overshoot the limit between ``reserve`` and ``increment``.
    """

    def __init__(self, daily_limit: int = 5) -> None:
        self._limit = daily_limit
        self._usage: dict[str, _UserDay] = {}

    def _today(self, user_id: str) -> _UserDay:
        usage = self._usage.get(user_id)
        today = date.today()
        if usage is None or usage.day < today:
            usage = _UserDay(day=today)
            self._usage[user_id] = usage
        return usage

    async def check(self, user_id: str) -> bool:
        if not self._limit:
            return True
        return self._today(user_id).used < self._limit

    async def reserve(self, user_id: str) -> bool:
        usage = self._today(user_id)
        if self._limit and usage.used >= self._limit:
            return False
        usage.pending += 1
        return True

    async def release(self, user_id: str) -> None:
        usage = self._today(user_id)
        usage.pending = max(usage.pending - 1, 0)

    async def increment(self, user_id: str) -> None:
        usage = self._today(user_id)
        usage.pending = max(usage.pending - 1, 0)
        usage.count += 1
        if self._limit and usage.count >= self._limit:
            logger.info("User %s reached the daily limit of %d recognitions", user_id, self._limit)

    async def remaining(self, user_id: str) -> int | None:
        if not self._limit:
            return None
        return max(self._limit - self._today(user_id).used, 0)
