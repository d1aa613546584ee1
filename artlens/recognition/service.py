"""Recognition boundary: validates a capture, runs the pipeline and stores the result.

Only failures of this layer (validation, quota) reach the caller as errors.
Everything that goes wrong inside the pipeline surfaces as "not identified".
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from artlens.catalog.categories import UNKNOWN_CATEGORY, map_period_to_category
from artlens.catalog.models import CatalogEntry
from artlens.connectors.base import CatalogStore, CollectionItem, CollectionStore, QuotaGate, SnapshotFields
from artlens.evidence.models import EvidenceResult
from artlens.observability.metrics import MetricsCollector
from artlens.pipeline.orchestrator import IdentificationPipeline
from artlens.recognition.messages import get_message
from artlens.types import Language, MessageKey

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 10 * 1024 * 1024
ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/heic",
    "image/heif",
})
UNKNOWN = "Unknown"


class RecognitionError(Exception):
    """A boundary failure with a localized, user-facing message."""

    status_code = 500

    def __init__(self, key: MessageKey, language: Language = Language.ES) -> None:
        self.key = key
        self.language = language
        super().__init__(get_message(language, key))

    @property
    def message(self) -> str:
        return str(self)


class InvalidRequestError(RecognitionError):
    status_code = 400


class ImageTooLargeError(InvalidRequestError):
    status_code = 413


class QuotaExceededError(RecognitionError):
    status_code = 429


class RecognitionRequest(BaseModel):
    user_id: str
    image: bytes = b""
    mime_type: str = ""
    filename: str = ""
    local_uri: str = ""
    language: Optional[str] = None


class ArtworkPayload(BaseModel):
    id: str
    title: str
    artist: str
    year: str
    period: str
    description: str = ""
    confidence: float
    tags: list[str] = Field(default_factory=list)
    captured_image_url: str
    identified_at: datetime
    is_monument: bool = False
    country: Optional[str] = None
    matched: bool = False
    artwork_id: Optional[str] = None


class RecognitionResponse(BaseModel):
    success: bool = True
    identified: bool = False
    artwork: Optional[ArtworkPayload] = None
    saved_to_collection: bool = False
    message: str = ""


def validate_request(request: RecognitionRequest, language: Language) -> None:
    """Raise ``InvalidRequestError`` for a capture the pipeline must not see."""
    if not request.image:
        raise InvalidRequestError(MessageKey.MISSING_IMAGE, language)
    if len(request.image) > MAX_IMAGE_BYTES:
        raise ImageTooLargeError(MessageKey.FILE_TOO_LARGE, language)
    if request.mime_type.lower() not in ALLOWED_MIME_TYPES:
        raise InvalidRequestError(MessageKey.INVALID_FORMAT, language)
    if not request.local_uri.strip():
        raise InvalidRequestError(MessageKey.MISSING_LOCAL_URI, language)


def build_snapshot(evidence: EvidenceResult, entry: CatalogEntry | None) -> SnapshotFields:
    """Fields stored on the collection item.

    Custom items keep the identification itself and get an inferred category;
    linked items only reference the catalog entry.
    """
    if entry is not None:
        return SnapshotFields(category_id=entry.category_id or UNKNOWN_CATEGORY, tags=evidence.tags)
    return SnapshotFields(
        title=evidence.title,
        author=evidence.artist,
        year=evidence.year,
        technique=evidence.technique,
        dimensions=evidence.dimensions,
        description=evidence.description,
        country=evidence.country,
        category_id=map_period_to_category(evidence.period),
        tags=evidence.tags,
    )


def build_artwork_payload(item: CollectionItem, evidence: EvidenceResult, entry: CatalogEntry | None) -> ArtworkPayload:
    if entry is not None:
        title = entry.title or evidence.title
        artist = entry.artist_name or evidence.artist
        year = entry.year or evidence.year
        period = entry.period or evidence.period
        description = entry.description or evidence.description
    else:
        title, artist, year = evidence.title, evidence.artist, evidence.year
        period, description = evidence.period, evidence.description
    return ArtworkPayload(
        id=item.id,
        title=title or UNKNOWN,
        artist=artist or UNKNOWN,
        year=year or UNKNOWN,
        period=period or UNKNOWN,
        description=description or "",
        confidence=evidence.confidence,
        tags=evidence.tags,
        captured_image_url=item.local_uri,
        identified_at=item.captured_at,
        is_monument=evidence.is_monument,
        country=evidence.country,
        matched=entry is not None,
        artwork_id=entry.id if entry is not None else None,
    )


class RecognitionService:
    def __init__(
        self,
        pipeline: IdentificationPipeline,
        catalog: CatalogStore,
        collection: CollectionStore,
        quota: QuotaGate,
        metrics: MetricsCollector | None = None,
        default_language: str = "es",
    ) -> None:
        self._pipeline = pipeline
        self._catalog = catalog
        self._collection = collection
        self._quota = quota
        self._metrics = metrics or MetricsCollector()
        self._default_language = default_language

    async def recognize(self, request: RecognitionRequest) -> RecognitionResponse:
        language = Language.resolve(request.language or self._default_language)
        validate_request(request, language)

        if not await self._quota.reserve(request.user_id):
            logger.info("Quota exhausted for user %s", request.user_id)
            raise QuotaExceededError(MessageKey.RATE_LIMIT, language)

        counted = False
        try:
            response = await self._recognize(request, language)
            counted = response.identified
            return response
        finally:
            if not counted:
                await self._quota.release(request.user_id)

    async def _recognize(self, request: RecognitionRequest, language: Language) -> RecognitionResponse:
        logger.info(
            "Recognition request from user %s: %s (%s, %d bytes), language=%s",
            request.user_id, request.filename or "<unnamed>", request.mime_type,
            len(request.image), language.value,
        )
        start = time.monotonic()
        run = await self._pipeline.identify(request.image, language)

        if run.accepted is None:
            self._metrics.record_recognition(
                run.final_stage.value, identified=False, latency_ms=_elapsed_ms(start),
            )
            return RecognitionResponse(
                success=True,
                identified=False,
                message=get_message(language, MessageKey.NOT_IDENTIFIED),
            )

        try:
            candidates = await self._catalog.find_all_candidates(language)
        except Exception:
            # unreachable catalog: keep the identification as a custom item
            logger.exception("Catalog lookup failed, saving %r unmatched", run.accepted.title)
            candidates = []
        outcome = self._pipeline.resolve(run, candidates)
        entry = outcome.matched_entry

        item = await self._collection.create_item(
            user_id=request.user_id,
            local_uri=request.local_uri,
            linked_id=entry.id if entry is not None else None,
            snapshot=build_snapshot(outcome.evidence, entry),
            confidence=outcome.evidence.confidence,
        )

        try:
            await self._quota.increment(request.user_id)
        except Exception:
            logger.exception("Failed to increment quota for user %s", request.user_id)

        self._metrics.record_recognition(
            run.final_stage.value, identified=True, matched=entry is not None,
            latency_ms=_elapsed_ms(start),
        )
        logger.info(
            "User %s: identified %r at %s, %s",
            request.user_id, outcome.evidence.title, run.final_stage.value,
            f"linked to {entry.id}" if entry is not None else "saved as custom snapshot",
        )
        return RecognitionResponse(
            success=True,
            identified=True,
            artwork=build_artwork_payload(item, outcome.evidence, entry),
            saved_to_collection=True,
            message=get_message(language, MessageKey.SUCCESS_IDENTIFIED),
        )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
