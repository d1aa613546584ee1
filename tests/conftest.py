import pytest

from artlens.catalog.models import CatalogEntry, CatalogTranslation
from artlens.connectors.memory import DailyQuotaGate, InMemoryCatalog, InMemoryCollection
from artlens.observability.metrics import MetricsCollector
from artlens.pipeline import IdentificationPipeline
from artlens.recognition.service import RecognitionService
from artlens.web.collector import WebEvidenceCollector
from fakes import FakeReverseSearch, FakeText, FakeVision, evidence, mock_fetcher


@pytest.fixture
def catalog_entries():
    return [
        CatalogEntry(
            id="art-starry",
            title="The Starry Night",
            artist_name="Vincent van Gogh",
            year="1889",
            period="Post-Impressionism",
            description="Oil on canvas.",
            category_id="post-impressionismo",
            translations={"es": CatalogTranslation(title="La noche estrellada", description="Óleo sobre lienzo.")},
        ),
        CatalogEntry(id="art-guernica", title="Guernica", artist_name="Pablo Picasso", year="1937"),
    ]


@pytest.fixture
def make_service(catalog_entries):
    """Build a RecognitionService whose vision source returns ``vision_result``."""

    def factory(vision_result, daily_limit=5, catalog=None):
        fetcher, _ = mock_fetcher({})
        pipeline = IdentificationPipeline(
            FakeReverseSearch(),
            FakeVision(vision_result),
            FakeText(evidence(identified=False)),
            WebEvidenceCollector(fetcher),
        )
        collection = InMemoryCollection()
        quota = DailyQuotaGate(daily_limit)
        metrics = MetricsCollector()
        catalog = catalog or InMemoryCatalog(catalog_entries)
        service = RecognitionService(pipeline, catalog, collection, quota, metrics)
        return service, collection, quota, metrics

    return factory
