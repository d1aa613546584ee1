"""Terminal values of the identification pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from artlens.evidence.models import EvidenceResult
from artlens.types import Stage

if TYPE_CHECKING:
    from artlens.catalog.models import CatalogEntry


@dataclass(frozen=True)
class NotIdentified:
    reason: str


@dataclass(frozen=True)
class Identified:
    evidence: EvidenceResult
    matched_entry: Optional[CatalogEntry] = None

    @property
    def is_custom(self) -> bool:
        """True when no catalog entry matched and the result must be stored as a snapshot."""
        return self.matched_entry is None


IdentificationOutcome = Union[Identified, NotIdentified]


@dataclass
class PipelineRun:
    """The accepted evidence (if any) plus the state trace that produced it."""

    accepted: Optional[EvidenceResult] = None
    stages: list[Stage] = field(default_factory=list)
    reason: str = ""
    pages_fetched: int = 0
    rendered: bool = False
    latency_ms: int = 0

    @property
    def final_stage(self) -> Stage:
        return self.stages[-1] if self.stages else Stage.START

    @property
    def identified(self) -> bool:
        return self.accepted is not None
