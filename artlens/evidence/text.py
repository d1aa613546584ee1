"""Text source: extracts artwork metadata from scraped web pages."""

from __future__ import annotations

import asyncio
import logging
import time

from artlens.evidence.base import TextHints, TextSource
from artlens.evidence.models import EvidenceResult
from artlens.evidence.parsing import parse_evidence, to_evidence
from artlens.llm.base import LLMProvider
from artlens.llm.prompts import build_web_analysis_prompt
from artlens.types import Language

logger = logging.getLogger(__name__)


class WebTextAnalyzer(TextSource):
    def __init__(self, provider: LLMProvider, timeout: float = 30.0, max_tokens: int = 1500) -> None:
        self._provider = provider
        self._timeout = timeout
        self._max_tokens = max_tokens

    async def extract(self, text: str, hints: TextHints, language: Language) -> EvidenceResult:
        source = self.name()
        if not text.strip():
            return EvidenceResult.negative(source)
        if not self._provider.is_available():
            logger.warning("Text provider %s has no credentials, skipping", self._provider.name())
            return EvidenceResult.negative(source)

        prompt = build_web_analysis_prompt(
            language,
            content=text,
            urls=hints.urls,
            labels=hints.labels,
            top_entity=hints.top_entity.as_hint() if hints.top_entity else None,
        )
        logger.info(
            "Text analysis: %d chars, %d urls, labels=%s",
            len(text), len(hints.urls), ", ".join(hints.labels) or "-",
        )

        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self._provider.complete(
                    [{"role": "user", "content": prompt}],
                    max_tokens=self._max_tokens,
                    temperature=0.1,
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Text analysis timed out after %.0fs (%s)", self._timeout, self._provider.name())
            return EvidenceResult.negative(source)
        except Exception:
            logger.exception("Text analysis failed (%s)", self._provider.name())
            return EvidenceResult.negative(source)

        result = to_evidence(parse_evidence(response.text, source), source)
        logger.info(
            "Text result: identified=%s confidence=%.2f title=%r latency=%dms",
            result.identified, result.confidence, result.title, int((time.monotonic() - start) * 1000),
        )
        return result

    def name(self) -> str:
        return f"text:{self._provider.name()}"
