"""Two-tier web evidence collection: plain HTTP first, headless render on low yield."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from artlens.evidence.models import WebEvidence
from artlens.web.extract import extract_text
from artlens.web.fetcher import PageFetcher
from artlens.web.ranking import rank_urls

if TYPE_CHECKING:
    from artlens.web.renderer import HeadlessRenderer

logger = logging.getLogger(__name__)


@dataclass
class CollectedText:
    text: str = ""
    urls: list[str] = field(default_factory=list)
    fetched: int = 0
    failed: int = 0
    rendered: bool = False
    sufficient: bool = False


class WebEvidenceCollector:
    def __init__(
        self,
        fetcher: PageFetcher,
        renderer: HeadlessRenderer | None = None,
        max_urls: int = 5,
        max_chars: int = 10_000,
        min_chars: int = 100,
    ) -> None:
        self._fetcher = fetcher
        self._renderer = renderer
        self._max_urls = max_urls
        self._max_chars = max_chars
        self._min_chars = min_chars

    async def collect(self, evidence: WebEvidence) -> CollectedText:
        urls = rank_urls(evidence.pages)[: self._max_urls]
        if not urls:
            logger.info("No candidate pages from reverse search")
            return CollectedText()

        start = time.monotonic()
        results = await self._fetcher.fetch_all(urls)
        texts = [extract_text(r.html, self._max_chars) for r in results if r.ok]
        combined = "\n\n".join(t for t in texts if t)
        collected = CollectedText(
            text=combined,
            urls=urls,
            fetched=sum(1 for r in results if r.ok),
            failed=sum(1 for r in results if not r.ok),
        )
        logger.info(
            "HTTP scraping: %d chars from %d/%d pages in %dms",
            len(combined), collected.fetched, len(urls), int((time.monotonic() - start) * 1000),
        )

        if len(combined) >= self._min_chars:
            collected.sufficient = True
            return collected

        if self._renderer is None:
            logger.info("HTTP yield below %d chars and rendering disabled", self._min_chars)
            return collected

        logger.info("HTTP yield below %d chars, rendering %s", self._min_chars, urls[0])
        rendered = await self._renderer.render_text(urls[0])
        if rendered and len(rendered) >= self._min_chars:
            collected.text = rendered[: self._max_chars]
            collected.rendered = True
            collected.sufficient = True
        else:
            logger.info("Render yield also insufficient (%d chars)", len(rendered or ""))
        return collected
