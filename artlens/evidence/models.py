"""Evidence types produced by the identification sources.

``EvidenceResult`` is the single contract every source returns; ``WebEvidence``
is the immutable bundle produced by one reverse-image search.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class EvidenceResult(BaseModel):
    """A candidate identification with a confidence score.

    ``confidence`` is only meaningful when ``identified`` is true. ``country``
    is kept only for monuments.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    identified: bool
    confidence: float = 0.0
    title: Optional[str] = None
    artist: Optional[str] = None
    year: Optional[str] = None
    period: Optional[str] = None
    technique: Optional[str] = None
    dimensions: Optional[str] = None
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    is_monument: bool = Field(default=False, alias="isMonument")
    country: Optional[str] = None
    source: str = ""

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value):
        if value is None:
            return 0.0
        try:
            confidence = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"confidence is not a number: {value!r}") from exc
        return min(max(confidence, 0.0), 1.0)

    @field_validator("title", "artist", "year", "period", "technique", "dimensions",
                     "description", "country", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)):
            return str(value)
        return None

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value):
        if not isinstance(value, list):
            return []
        return [str(tag) for tag in value if tag is not None]

    @model_validator(mode="after")
    def _country_only_for_monuments(self) -> EvidenceResult:
        if not self.is_monument:
            self.country = None
        return self

    @classmethod
    def negative(cls, source: str = "") -> EvidenceResult:
        return cls(identified=False, confidence=0.0, source=source)

    def accepts(self, threshold: float) -> bool:
        """True if this result is an identification at or above ``threshold``."""
        return self.identified and self.confidence >= threshold


class WebPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    page_title: Optional[str] = None


class SimilarImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class BestGuessLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    language_code: Optional[str] = None


class WebEntity(BaseModel):
    model_config = ConfigDict(frozen=True)

    entity_id: Optional[str] = None
    description: Optional[str] = None
    score: float = 0.0

    def as_hint(self) -> str:
        return f"{self.description} ({self.score:.2f})"


class WebEvidence(BaseModel):
    """Result of one reverse-image search. Constructed once per request, never mutated."""

    model_config = ConfigDict(frozen=True)

    pages: tuple[WebPage, ...] = ()
    similar_images: tuple[SimilarImage, ...] = ()
    labels: tuple[BestGuessLabel, ...] = ()
    entities: tuple[WebEntity, ...] = ()

    @classmethod
    def empty(cls) -> WebEvidence:
        return cls()

    def sorted_entities(self) -> list[WebEntity]:
        """Entities by score, highest first; equal scores keep their input order."""
        return sorted(self.entities, key=lambda e: e.score, reverse=True)

    def top_entity(self) -> Optional[WebEntity]:
        described = [e for e in self.sorted_entities() if e.description]
        return described[0] if described else None

    def label_texts(self) -> list[str]:
        return [label.label for label in self.labels]


@dataclass(frozen=True)
class ParseOk:
    result: EvidenceResult


@dataclass(frozen=True)
class ParseFailed:
    reason: str
    raw: str = ""


ParseOutcome = Union[ParseOk, ParseFailed]
