"""Evidence source abstractions.

Implementations must never raise into the pipeline: transport, timeout and
parse failures all degrade to ``EvidenceResult.negative()`` (or an empty
``WebEvidence``). Only cancellation propagates.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field

from artlens.evidence.models import EvidenceResult, WebEntity, WebEvidence
from artlens.types import Language


@dataclass
class TextHints:
    """Reverse-search context handed to the text source alongside the scraped pages."""

    urls: list[str] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    top_entity: WebEntity | None = None

    @classmethod
    def from_evidence(cls, evidence: WebEvidence, urls: list[str]) -> TextHints:
        return cls(urls=list(urls), labels=evidence.label_texts(), top_entity=evidence.top_entity())


class VisionSource(abc.ABC):
    @abc.abstractmethod
    async def identify(
        self, image: bytes, language: Language, hint: WebEntity | None = None,
    ) -> EvidenceResult:
        """Classify the image directly."""

    @abc.abstractmethod
    def name(self) -> str:
        """Source identifier."""


class TextSource(abc.ABC):
    @abc.abstractmethod
    async def extract(self, text: str, hints: TextHints, language: Language) -> EvidenceResult:
        """Extract artwork metadata from scraped page text."""

    @abc.abstractmethod
    def name(self) -> str:
        """Source identifier."""


class ReverseImageSearch(abc.ABC):
    @abc.abstractmethod
    async def search(self, image: bytes, language: Language = Language.ES) -> WebEvidence:
        """Find web pages, labels and entities for the image."""

    @abc.abstractmethod
    def name(self) -> str:
        """Source identifier."""
