"""Vision source: direct image classification by a vision-capable LLM."""

from __future__ import annotations

import asyncio
import logging
import time

from artlens.evidence.base import VisionSource
from artlens.evidence.models import EvidenceResult, WebEntity
from artlens.evidence.parsing import parse_evidence, to_evidence
from artlens.llm.base import LLMProvider
from artlens.llm.prompts import build_vision_prompt
from artlens.types import Language

logger = logging.getLogger(__name__)


class VisionIdentifier(VisionSource):
    def __init__(self, provider: LLMProvider, timeout: float = 30.0, max_tokens: int = 1500) -> None:
        if not provider.supports_vision():
            raise ValueError(f"Provider {provider.name()} does not accept images")
        self._provider = provider
        self._timeout = timeout
        self._max_tokens = max_tokens

    async def identify(
        self, image: bytes, language: Language, hint: WebEntity | None = None,
    ) -> EvidenceResult:
        source = self.name()
        if not self._provider.is_available():
            logger.warning("Vision provider %s has no credentials, skipping", self._provider.name())
            return EvidenceResult.negative(source)

        prompt = build_vision_prompt(language, hint.description if hint and hint.description else None)
        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self._provider.complete_with_vision(
                    [{"role": "user", "content": prompt}],
                    [image],
                    max_tokens=self._max_tokens,
                    temperature=0.1,
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("Vision call timed out after %.0fs (%s)", self._timeout, self._provider.name())
            return EvidenceResult.negative(source)
        except Exception:
            logger.exception("Vision call failed (%s, image=%dKB)", self._provider.name(), len(image) // 1024)
            return EvidenceResult.negative(source)

        result = to_evidence(parse_evidence(response.text, source), source)
        logger.info(
            "Vision result: identified=%s confidence=%.2f title=%r artist=%r latency=%dms",
            result.identified, result.confidence, result.title, result.artist,
            int((time.monotonic() - start) * 1000),
        )
        return result

    def name(self) -> str:
        return f"vision:{self._provider.name()}"
