"""Store abstractions the recognition boundary depends on."""

from __future__ import annotations

import abc
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from artlens.catalog.models import CatalogEntry
from artlens.types import Language


class SnapshotFields(BaseModel):
    """Identification data copied onto a collection item.

    For catalog-linked items these mirror the catalog entry; for custom items
    they are the only record of what was identified.
    """

    title: Optional[str] = None
    author: Optional[str] = None
    year: Optional[str] = None
    technique: Optional[str] = None
    dimensions: Optional[str] = None
    description: Optional[str] = None
    country: Optional[str] = None
    category_id: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class CollectionItem(BaseModel):
    id: str
    user_id: str
    artwork_id: Optional[str] = None
    local_uri: str
    confidence: float = 0.0
    is_custom: bool = False
    snapshot: SnapshotFields = Field(default_factory=SnapshotFields)
    captured_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ServiceConnector(abc.ABC):
    @abc.abstractmethod
    async def health_check(self) -> dict:
        """Return health status."""

    @abc.abstractmethod
    def name(self) -> str:
        """Connector identifier."""

    async def connect(self) -> None:
        """Establish connection (optional override)."""

    async def disconnect(self) -> None:
        """Teardown (optional override)."""


class CatalogStore(ServiceConnector):
    @abc.abstractmethod
    async def find_all_candidates(self, language: Language) -> list[CatalogEntry]:
        """Every entry eligible for matching, titles localized to ``language``."""

    @abc.abstractmethod
    async def find_by_id(self, artwork_id: str, language: Language = Language.ES) -> CatalogEntry | None:
        ...


class CollectionStore(ServiceConnector):
    @abc.abstractmethod
    async def create_item(
        self,
        user_id: str,
        local_uri: str,
        linked_id: str | None,
        snapshot: SnapshotFields,
        confidence: float = 0.0,
    ) -> CollectionItem:
        """Persist one captured artwork; ``linked_id`` is None for custom snapshots."""


class QuotaGate(abc.ABC):
    @abc.abstractmethod
    async def check(self, user_id: str) -> bool:
        """True if the user may run another recognition."""

    @abc.abstractmethod
    async def increment(self, user_id: str) -> None:
        """Count one successful recognition against the user."""

    async def reserve(self, user_id: str) -> bool:
        """Hold a slot for an in-flight recognition; False when none is left.

        A held slot is settled by ``increment`` or returned by ``release``.
        Gates without reservations fall back to ``check``.
        """
        return await self.check(user_id)

    async def release(self, user_id: str) -> None:
        """Return a slot held by ``reserve`` without counting it."""

    async def remaining(self, user_id: str) -> int | None:
        """Recognitions left today, or None when unknown or unlimited."""
        return None
