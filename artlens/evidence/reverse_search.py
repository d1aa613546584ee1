"""Reverse image search via Google Cloud Vision WEB_DETECTION (REST)."""

from __future__ import annotations

import base64
import logging
import time

import httpx

from artlens.evidence.base import ReverseImageSearch
from artlens.evidence.models import BestGuessLabel, SimilarImage, WebEntity, WebEvidence, WebPage
from artlens.types import Language

logger = logging.getLogger(__name__)

ANNOTATE_URL = "https://vision.googleapis.com/v1/images:annotate"


class GoogleWebDetector(ReverseImageSearch):
    """Web detection: pages with matching images, similar images, best-guess labels, entities."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        max_results: int = 20,
        blocked_hosts: list[str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._max_results = max_results
        self._blocked = blocked_hosts if blocked_hosts is not None else ["collinsdictionary"]
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if not self._client:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search(self, image: bytes, language: Language = Language.ES) -> WebEvidence:
        if not self._api_key:
            logger.warning("Google Vision API key not configured, skipping reverse search")
            return WebEvidence.empty()

        body = {
            "requests": [{
                "image": {"content": base64.b64encode(image).decode()},
                "features": [{"type": "WEB_DETECTION", "maxResults": self._max_results}],
                "imageContext": {"languageHints": [language.value]},
            }],
        }
        start = time.monotonic()
        try:
            resp = await self._get_client().post(
                ANNOTATE_URL, params={"key": self._api_key}, json=body, timeout=self._timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except httpx.TimeoutException:
            logger.warning("Reverse search timed out after %.0fs", self._timeout)
            return WebEvidence.empty()
        except Exception:
            logger.exception("Reverse search request failed")
            return WebEvidence.empty()

        try:
            evidence = self._parse(payload)
        except Exception:
            logger.exception("Reverse search returned an unexpected payload")
            return WebEvidence.empty()

        logger.info(
            "Reverse search in %dms: pages=%d similar=%d entities=%d labels=%s",
            int((time.monotonic() - start) * 1000),
            len(evidence.pages), len(evidence.similar_images), len(evidence.entities),
            ", ".join(evidence.label_texts()) or "-",
        )
        return evidence

    def _parse(self, payload: dict) -> WebEvidence:
        responses = payload.get("responses") or [{}]
        first = responses[0]
        if "error" in first:
            logger.warning("Reverse search error: %s", first["error"].get("message", first["error"]))
            return WebEvidence.empty()
        detection = first.get("webDetection") or {}

        return WebEvidence(
            pages=tuple(
                WebPage(url=p["url"], page_title=p.get("pageTitle"))
                for p in detection.get("pagesWithMatchingImages", [])
                if p.get("url") and not self._is_blocked(p["url"])
            ),
            similar_images=tuple(
                SimilarImage(url=img["url"])
                for img in detection.get("visuallySimilarImages", [])
                if img.get("url") and not self._is_blocked(img["url"])
            ),
            labels=tuple(
                BestGuessLabel(label=lbl["label"], language_code=lbl.get("languageCode"))
                for lbl in detection.get("bestGuessLabels", [])
                if lbl.get("label")
            ),
            entities=tuple(
                WebEntity(
                    entity_id=e.get("entityId"),
                    description=e.get("description"),
                    score=float(e.get("score") or 0.0),
                )
                for e in detection.get("webEntities", [])
            ),
        )

    def _is_blocked(self, url: str) -> bool:
        return any(host in url for host in self._blocked)

    def name(self) -> str:
        return "google_web_detection"
