"""Concurrent page fetching with settled-result semantics."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

_ACCEPTED_TYPES = ("text/html", "application/xhtml", "text/plain")


@dataclass
class FetchResult:
    """Outcome of one page fetch: exactly one of ``html`` / ``error`` is set."""

    url: str
    html: str | None = None
    error: str | None = None
    status_code: int = 0

    @property
    def ok(self) -> bool:
        return self.html is not None


class ContentTooLarge(Exception):
    pass


class PageFetcher:
    """Fetches candidate pages over plain HTTP.

    One failing URL never affects its siblings; each request has its own
    timeout and byte cap and is attempted once.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        max_bytes: int = 5_000_000,
        user_agent: str = "Mozilla/5.0 (compatible; ArtLens/0.3)",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._user_agent = user_agent
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if not self._client:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={"User-Agent": self._user_agent, "Accept": "text/html,application/xhtml+xml"},
            )
        return self._client

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_all(self, urls: list[str], limit: int | None = None) -> list[FetchResult]:
        """Fetch up to ``limit`` URLs concurrently; results keep the input order."""
        targets = urls[:limit] if limit is not None else list(urls)
        if not targets:
            return []

        start = time.monotonic()
        results = await asyncio.gather(*(self._fetch_one(url) for url in targets))
        ok = sum(1 for r in results if r.ok)
        logger.info(
            "Fetched %d/%d pages in %dms", ok, len(targets), int((time.monotonic() - start) * 1000),
        )
        return list(results)

    async def _fetch_one(self, url: str) -> FetchResult:
        try:
            return await asyncio.wait_for(self._download(url), timeout=self._timeout)
        except asyncio.TimeoutError:
            error = f"timed out after {self._timeout:.0f}s"
        except httpx.HTTPStatusError as e:
            error = f"HTTP {e.response.status_code}"
        except Exception as e:
            error = str(e) or type(e).__name__
        logger.warning("Failed to fetch %s: %s", url, error)
        return FetchResult(url=url, error=error)

    async def _download(self, url: str) -> FetchResult:
        client = self._get_client()
        async with client.stream("GET", url) as resp:
            resp.raise_for_status()

            content_type = resp.headers.get("content-type", "").lower()
            if content_type and not any(t in content_type for t in _ACCEPTED_TYPES):
                raise ValueError(f"unsupported content type {content_type.split(';')[0]}")

            declared = resp.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > self._max_bytes:
                raise ContentTooLarge(f"content-length {declared} exceeds {self._max_bytes} bytes")

            received = 0
            chunks: list[bytes] = []
            async for chunk in resp.aiter_bytes():
                received += len(chunk)
                if received > self._max_bytes:
                    raise ContentTooLarge(f"body exceeds {self._max_bytes} bytes")
                chunks.append(chunk)

            encoding = resp.charset_encoding or "utf-8"
            html = b"".join(chunks).decode(encoding, errors="replace")
            return FetchResult(url=url, html=html, status_code=resp.status_code)
