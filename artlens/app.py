"""FastAPI application factory: wires sources, pipeline, stores and the HTTP surface."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from artlens import __version__
from artlens.catalog.matcher import CatalogMatcher
from artlens.config import ArtLensConfig
from artlens.connectors.base import CatalogStore, CollectionStore, QuotaGate, ServiceConnector
from artlens.connectors.memory import DailyQuotaGate, InMemoryCatalog, InMemoryCollection
from artlens.evidence.reverse_search import GoogleWebDetector
from artlens.evidence.text import WebTextAnalyzer
from artlens.evidence.vision import VisionIdentifier
from artlens.gateway.http_api import router as api_router, set_auth, set_service
from artlens.llm.base import LLMProvider
from artlens.llm.providers.anthropic import AnthropicProvider
from artlens.llm.providers.qwen import QwenProvider
from artlens.observability.health import aggregate_health
from artlens.observability.metrics import MetricsCollector
from artlens.pipeline.orchestrator import IdentificationPipeline, Thresholds
from artlens.recognition.service import RecognitionService
from artlens.web.collector import WebEvidenceCollector
from artlens.web.fetcher import PageFetcher
from artlens.web.renderer import HeadlessRenderer

logger = logging.getLogger(__name__)


def build_provider(kind: str, config: ArtLensConfig, vision: bool) -> LLMProvider:
    if kind == "qwen":
        return QwenProvider(
            config.qwen_api_key,
            config.qwen_vl_model if vision else config.qwen_text_model,
            base_url=config.qwen_base_url,
            timeout=config.llm_timeout_s,
            vision=vision,
        )
    if kind == "anthropic":
        return AnthropicProvider(config.anthropic_api_key, config.anthropic_model, timeout=config.llm_timeout_s)
    raise ValueError(f"Unknown provider: {kind}")


@dataclass
class Components:
    """Everything one process shares across requests."""

    pipeline: IdentificationPipeline
    catalog: CatalogStore
    collection: CollectionStore
    quota: QuotaGate
    metrics: MetricsCollector
    service: RecognitionService
    sources: dict[str, bool] = field(default_factory=dict)
    fetcher: PageFetcher | None = None
    reverse_search: GoogleWebDetector | None = None
    renderer: HeadlessRenderer | None = None

    @property
    def connectors(self) -> dict[str, ServiceConnector]:
        # A single store may serve as both catalog and collection.
        return {self.catalog.name(): self.catalog, self.collection.name(): self.collection}

    async def close(self) -> None:
        if self.renderer is not None:
            await self.renderer.close()
        if self.fetcher is not None:
            await self.fetcher.close()
        if self.reverse_search is not None:
            await self.reverse_search.close()


def build_components(config: ArtLensConfig) -> Components:
    # -- Evidence sources --
    vision_provider = build_provider(config.vision_provider, config, vision=True)
    text_provider = build_provider(config.text_provider, config, vision=False)
    reverse_search = GoogleWebDetector(
        config.google_vision_api_key,
        timeout=config.reverse_search_timeout_s,
        blocked_hosts=config.blocked_result_hosts,
    )
    vision = VisionIdentifier(vision_provider, timeout=config.llm_timeout_s)
    text = WebTextAnalyzer(text_provider, timeout=config.llm_timeout_s)

    # -- Web collection --
    fetcher = PageFetcher(
        timeout=config.fetch_timeout_s,
        max_bytes=config.max_content_bytes,
        user_agent=config.user_agent,
    )
    renderer = None
    if config.playwright_enabled:
        renderer = HeadlessRenderer(
            timeout=config.render_timeout_s,
            headless=config.playwright_headless,
            block_resources=config.playwright_block_resources,
            user_agent=config.user_agent,
        )
    collector = WebEvidenceCollector(
        fetcher,
        renderer,
        max_urls=config.max_fetch_urls,
        max_chars=config.max_text_chars,
        min_chars=config.min_scraped_text_length,
    )

    pipeline = IdentificationPipeline(
        reverse_search,
        vision,
        text,
        collector,
        thresholds=Thresholds.from_config(config),
        matcher=CatalogMatcher(config.artwork_match_min_similarity),
        reinvoke_vision_on_fallback=config.vision_fallback_reinvoke,
    )

    # -- Stores --
    catalog: CatalogStore
    collection: CollectionStore
    if config.postgres_url:
        from artlens.connectors.postgres import PostgresStore
        store = PostgresStore(config.postgres_url)
        catalog, collection = store, store
    else:
        catalog = InMemoryCatalog.from_json(config.catalog_path) if config.catalog_path else InMemoryCatalog()
        collection = InMemoryCollection()
    quota = DailyQuotaGate(config.daily_recognition_limit)

    metrics = MetricsCollector()
    service = RecognitionService(
        pipeline, catalog, collection, quota, metrics, default_language=config.default_language,
    )
    return Components(
        pipeline=pipeline,
        catalog=catalog,
        collection=collection,
        quota=quota,
        metrics=metrics,
        service=service,
        sources={
            vision.name(): vision_provider.is_available(),
            text.name(): text_provider.is_available(),
            reverse_search.name(): bool(config.google_vision_api_key),
        },
        fetcher=fetcher,
        reverse_search=reverse_search,
        renderer=renderer,
    )


def create_app(config: ArtLensConfig | None = None, components: Components | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    if config is None:
        config = ArtLensConfig.from_yaml()
    if components is None:
        components = build_components(config)

    app = FastAPI(title="ArtLens", version=__version__, docs_url="/docs")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    # -- Wire HTTP API --
    set_service(components.service)
    set_auth(config.api_key, config.require_auth)
    app.include_router(api_router)

    @app.get("/health")
    async def health():
        return await aggregate_health(components.connectors, components.sources)

    @app.get("/metrics")
    async def get_metrics():
        return components.metrics.summary()

    @app.get("/")
    async def root():
        return {
            "name": "ArtLens",
            "version": __version__,
            "sources": list(components.sources.keys()),
            "thresholds": {
                "high_confidence": components.pipeline.thresholds.high_confidence,
                "base": components.pipeline.thresholds.base,
                "vision_fallback": components.pipeline.thresholds.vision_fallback,
            },
        }

    # -- Lifecycle --
    @app.on_event("startup")
    async def startup():
        for conn in components.connectors.values():
            try:
                await conn.connect()
            except Exception:
                logger.exception("Failed to connect %s", conn.name())

        logger.info("ArtLens %s started on %s:%d", __version__, config.host, config.port)
        logger.info("Sources: %s", ", ".join(
            f"{name}={'on' if ok else 'off'}" for name, ok in components.sources.items()
        ))
        logger.info("Stores: %s", ", ".join(components.connectors.keys()))

    @app.on_event("shutdown")
    async def shutdown():
        await components.close()
        for conn in components.connectors.values():
            await conn.disconnect()

    # Store references for testing
    app.state.config = config
    app.state.components = components

    return app
