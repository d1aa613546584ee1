"""Test the HTTP surface with FastAPI's TestClient."""

from fastapi.testclient import TestClient

from artlens.app import Components, create_app
from artlens.config import ArtLensConfig
from artlens.connectors.memory import DailyQuotaGate, InMemoryCatalog, InMemoryCollection
from artlens.observability.metrics import MetricsCollector
from artlens.pipeline import IdentificationPipeline
from artlens.recognition.messages import get_message
from artlens.recognition.service import RecognitionService
from artlens.types import Language, MessageKey
from artlens.web.collector import WebEvidenceCollector
from fakes import FakeReverseSearch, FakeText, FakeVision, evidence, mock_fetcher

API_KEY = "secret"


class BrokenCollection(InMemoryCollection):
    async def create_item(self, user_id, local_uri, linked_id, snapshot, confidence=0.0):
        raise ConnectionError("collection unavailable")


def _client(vision_result, collection=None, daily_limit=5, require_auth=True):
    config = ArtLensConfig(api_key=API_KEY, require_auth=require_auth)
    fetcher, _ = mock_fetcher({})
    pipeline = IdentificationPipeline(
        FakeReverseSearch(), FakeVision(vision_result), FakeText(evidence(identified=False)),
        WebEvidenceCollector(fetcher),
    )
    catalog = InMemoryCatalog()
    collection = collection or InMemoryCollection()
    quota = DailyQuotaGate(daily_limit)
    metrics = MetricsCollector()
    components = Components(
        pipeline=pipeline,
        catalog=catalog,
        collection=collection,
        quota=quota,
        metrics=metrics,
        service=RecognitionService(pipeline, catalog, collection, quota, metrics),
        sources={"vision:fake": True},
    )
    return TestClient(create_app(config, components))


def _post(client, image=("photo.jpg", b"jpeg-bytes", "image/jpeg"), local_uri="file:///photo.jpg",
          language="en", api_key=API_KEY):
    headers = {"X-User-Id": "user-1"}
    if api_key:
        headers["X-API-Key"] = api_key
    files = {"image": image} if image else None
    return client.post(
        "/api/v1/recognize",
        params={"language": language},
        files=files,
        data={"local_uri": local_uri},
        headers=headers,
    )


def test_recognize_success():
    with _client(evidence(confidence=0.99, title="Guernica", artist="Pablo Picasso")) as client:
        resp = _post(client)
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["identified"] is True
    assert body["saved_to_collection"] is True
    assert body["artwork"]["title"] == "Guernica"
    assert body["artwork"]["captured_image_url"] == "file:///photo.jpg"
    assert body["message"] == get_message(Language.EN, MessageKey.SUCCESS_IDENTIFIED)


def test_recognize_not_identified():
    with _client(evidence(confidence=0.2)) as client:
        resp = _post(client, language="fr")
    assert resp.status_code == 200
    assert resp.json()["identified"] is False
    assert resp.json()["artwork"] is None


def test_missing_api_key():
    with _client(evidence(confidence=1.0)) as client:
        assert _post(client, api_key=None).status_code == 401
        assert _post(client, api_key="wrong").status_code == 401


def test_auth_disabled():
    with _client(evidence(confidence=1.0, title="X"), require_auth=False) as client:
        assert _post(client, api_key=None).status_code == 200


def test_missing_image():
    with _client(evidence(confidence=1.0)) as client:
        resp = _post(client, image=None, language="es")
    assert resp.status_code == 400
    assert resp.json()["detail"] == get_message(Language.ES, MessageKey.MISSING_IMAGE)


def test_invalid_format():
    with _client(evidence(confidence=1.0)) as client:
        resp = _post(client, image=("anim.gif", b"GIF89a", "image/gif"))
    assert resp.status_code == 400
    assert resp.json()["detail"] == get_message(Language.EN, MessageKey.INVALID_FORMAT)


def test_missing_local_uri():
    with _client(evidence(confidence=1.0)) as client:
        resp = _post(client, local_uri="")
    assert resp.status_code == 400


def test_quota_exceeded():
    with _client(evidence(confidence=1.0, title="X"), daily_limit=1) as client:
        assert _post(client).status_code == 200
        resp = _post(client)
    assert resp.status_code == 429
    assert resp.json()["detail"] == get_message(Language.EN, MessageKey.RATE_LIMIT)


def test_store_failure_is_processing_error():
    with _client(evidence(confidence=1.0, title="X"), collection=BrokenCollection()) as client:
        resp = _post(client)
    assert resp.status_code == 500
    assert resp.json()["detail"] == get_message(Language.EN, MessageKey.PROCESSING_ERROR)


def test_health_metrics_root():
    with _client(evidence(confidence=1.0, title="X")) as client:
        _post(client)
        health = client.get("/health").json()
        metrics = client.get("/metrics").json()
        root = client.get("/").json()
    assert health["status"] == "healthy"
    assert set(health["connectors"]) == {"memory_catalog", "memory_collection"}
    assert metrics["total_requests"] == 1
    assert metrics["final_stages"] == {"vision_high_conf": 1}
    assert root["name"] == "ArtLens"
    assert root["thresholds"]["high_confidence"] == 0.99
