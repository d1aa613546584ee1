"""Evidence sources: reverse image search, vision classification, web-text extraction."""

from artlens.evidence.base import ReverseImageSearch, TextHints, TextSource, VisionSource
from artlens.evidence.models import (
    BestGuessLabel,
    EvidenceResult,
    ParseFailed,
    ParseOk,
    WebEntity,
    WebEvidence,
    WebPage,
)

__all__ = [
    "BestGuessLabel",
    "EvidenceResult",
    "ParseFailed",
    "ParseOk",
    "ReverseImageSearch",
    "TextHints",
    "TextSource",
    "VisionSource",
    "WebEntity",
    "WebEvidence",
    "WebPage",
]
