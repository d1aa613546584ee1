"""Decision orchestrator: sequences the evidence sources under confidence gates.

    START ─┬─> VISION_HIGH_CONF                          (accept, no web calls)
           └─> WEB_COLLECT ─> TEXT_ANALYSIS              (accept at base threshold)
                          └─> VISION_FALLBACK            (accept at fallback threshold)
                                         └─> NOT_IDENTIFIED

Direct vision answers are held to a stricter bar than web-corroborated ones.
Nothing below a gate is ever surfaced to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from artlens.catalog.matcher import CatalogMatcher
from artlens.evidence.base import ReverseImageSearch, TextHints, TextSource, VisionSource
from artlens.evidence.models import EvidenceResult, WebEvidence
from artlens.pipeline.outcome import Identified, IdentificationOutcome, NotIdentified, PipelineRun
from artlens.types import Language, Stage
from artlens.web.collector import WebEvidenceCollector

if TYPE_CHECKING:
    from artlens.catalog.models import CatalogEntry
    from artlens.config import ArtLensConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Thresholds:
    high_confidence: float = 0.99
    base: float = 0.6
    vision_fallback: float = 0.98

    @classmethod
    def from_config(cls, config: ArtLensConfig) -> Thresholds:
        return cls(
            high_confidence=config.high_confidence_threshold,
            base=config.min_confidence_threshold,
            vision_fallback=config.vision_fallback_threshold,
        )


class IdentificationPipeline:
    """Request-scoped: holds only collaborators and thresholds, never per-request state."""

    def __init__(
        self,
        reverse_search: ReverseImageSearch,
        vision: VisionSource,
        text: TextSource,
        collector: WebEvidenceCollector,
        thresholds: Thresholds | None = None,
        matcher: CatalogMatcher | None = None,
        reinvoke_vision_on_fallback: bool = False,
    ) -> None:
        self._reverse_search = reverse_search
        self._vision = vision
        self._text = text
        self._collector = collector
        self.thresholds = thresholds or Thresholds()
        self._matcher = matcher or CatalogMatcher()
        self._reinvoke_vision = reinvoke_vision_on_fallback

    async def identify(self, image: bytes, language: Language = Language.ES) -> PipelineRun:
        start = time.monotonic()
        run = PipelineRun(stages=[Stage.START])
        try:
            await self._run(image, language, run)
        finally:
            run.latency_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Pipeline finished at %s in %dms (identified=%s, pages=%d, rendered=%s)",
            run.final_stage.value, run.latency_ms, run.identified, run.pages_fetched, run.rendered,
        )
        return run

    async def _run(self, image: bytes, language: Language, run: PipelineRun) -> None:
        # Reverse search and vision are independent; start both before branching.
        search_task = asyncio.create_task(self._reverse_search.search(image, language))
        try:
            vision_result = await self._vision.identify(image, language)
            if vision_result.accepts(self.thresholds.high_confidence):
                self._accept(run, Stage.VISION_HIGH_CONF, vision_result)
                return
            evidence = await search_task
        finally:
            if not search_task.done():
                search_task.cancel()

        if await self._try_web(image, language, evidence, run):
            return

        run.stages.append(Stage.VISION_FALLBACK)
        fallback = vision_result
        top = evidence.top_entity()
        if self._reinvoke_vision and top is not None:
            logger.info("Re-running vision with web hint %r", top.description)
            fallback = await self._vision.identify(image, language, hint=top)
        if fallback.accepts(self.thresholds.vision_fallback):
            self._accept(run, Stage.VISION_FALLBACK, fallback)
            return

        run.stages.append(Stage.NOT_IDENTIFIED)
        run.reason = (
            f"no source reached its threshold "
            f"(vision={fallback.confidence:.2f}, fallback>={self.thresholds.vision_fallback})"
        )

    async def _try_web(
        self, image: bytes, language: Language, evidence: WebEvidence, run: PipelineRun,
    ) -> bool:
        run.stages.append(Stage.WEB_COLLECT)
        collected = await self._collector.collect(evidence)
        run.pages_fetched = collected.fetched
        run.rendered = collected.rendered
        if not collected.sufficient:
            logger.info("Insufficient web text (%d chars), skipping text analysis", len(collected.text))
            return False

        run.stages.append(Stage.TEXT_ANALYSIS)
        hints = TextHints.from_evidence(evidence, collected.urls)
        result = await self._text.extract(collected.text, hints, language)
        if result.accepts(self.thresholds.base):
            self._accept(run, Stage.TEXT_ANALYSIS, result)
            return True
        logger.info(
            "Text analysis rejected (identified=%s, confidence=%.2f < %.2f)",
            result.identified, result.confidence, self.thresholds.base,
        )
        return False

    @staticmethod
    def _accept(run: PipelineRun, stage: Stage, result: EvidenceResult) -> None:
        if run.stages[-1] != stage:
            run.stages.append(stage)
        run.accepted = result
        logger.info(
            "Accepted at %s: %r by %r (confidence=%.2f, source=%s)",
            stage.value, result.title, result.artist, result.confidence, result.source,
        )

    def resolve(self, run: PipelineRun, candidates: list[CatalogEntry]) -> IdentificationOutcome:
        """Turn a finished run into an outcome, linking the accepted result to the catalog."""
        if run.accepted is None:
            return NotIdentified(run.reason or "not identified")
        entry = self._matcher.match(run.accepted.title or "", run.accepted.artist or "", candidates)
        return Identified(evidence=run.accepted, matched_entry=entry)
