"""Test evidence source adapters degrade instead of raising."""

import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest

from artlens.evidence.base import TextHints
from artlens.evidence.models import WebEntity
from artlens.evidence.reverse_search import GoogleWebDetector
from artlens.evidence.text import WebTextAnalyzer
from artlens.evidence.vision import VisionIdentifier
from artlens.llm.base import image_media_type
from artlens.llm.prompts import build_vision_prompt, build_web_analysis_prompt
from artlens.llm.providers.anthropic import AnthropicProvider
from artlens.types import Language
from fakes import FakeProvider

GOOD_REPLY = '```json\n{"identified": true, "confidence": 0.99, "title": "Guernica", "artist": "Picasso"}\n```'


def test_vision_parses_reply():
    provider = FakeProvider(GOOD_REPLY)
    result = asyncio.run(VisionIdentifier(provider).identify(b"img", Language.EN))
    assert result.identified
    assert result.title == "Guernica"
    assert result.source == "vision:fake"
    assert provider.calls[0]["images"] == [b"img"]


@pytest.mark.parametrize("provider", [
    FakeProvider("I think this is a painting by Picasso."),
    FakeProvider(error=httpx.ConnectError("boom")),
    FakeProvider(error=RuntimeError("bad gateway")),
])
def test_vision_degrades(provider):
    result = asyncio.run(VisionIdentifier(provider).identify(b"img", Language.ES))
    assert result.identified is False
    assert result.confidence == 0.0


@pytest.mark.parametrize("confidence", ["[0.9]", '{"v": 1}'])
def test_non_numeric_confidence_degrades(confidence):
    reply = '{"identified": true, "confidence": %s, "title": "Guernica"}' % confidence

    vision = asyncio.run(VisionIdentifier(FakeProvider(reply)).identify(b"img", Language.ES))
    text = asyncio.run(WebTextAnalyzer(FakeProvider(reply, vision=False)).extract(
        "Guernica es un cuadro...", TextHints(), Language.ES,
    ))

    for result in (vision, text):
        assert result.identified is False
        assert result.confidence == 0.0


def test_vision_timeout_degrades():
    provider = FakeProvider(GOOD_REPLY, delay=1.0)
    result = asyncio.run(VisionIdentifier(provider, timeout=0.05).identify(b"img", Language.ES))
    assert not result.identified


def test_vision_without_credentials_makes_no_call():
    provider = FakeProvider(GOOD_REPLY, available=False)
    result = asyncio.run(VisionIdentifier(provider).identify(b"img", Language.ES))
    assert not result.identified
    assert provider.calls == []


def test_vision_requires_vision_provider():
    with pytest.raises(ValueError):
        VisionIdentifier(FakeProvider(vision=False))


def test_vision_hint_reaches_prompt():
    provider = FakeProvider(GOOD_REPLY)
    hint = WebEntity(description="Sagrada Familia", score=0.8)
    asyncio.run(VisionIdentifier(provider).identify(b"img", Language.EN, hint=hint))
    prompt = provider.calls[0]["messages"][0]["content"]
    assert "Sagrada Familia" in prompt


def test_text_analyzer_uses_hints():
    provider = FakeProvider('{"identified": true, "confidence": 0.7, "title": "Guernica"}', vision=False)
    hints = TextHints(
        urls=["https://es.wikipedia.org/wiki/Guernica"],
        labels=["guernica picasso"],
        top_entity=WebEntity(description="Guernica", score=1.2),
    )
    result = asyncio.run(WebTextAnalyzer(provider).extract("Guernica es un cuadro...", hints, Language.ES))

    assert result.accepts(0.6)
    prompt = provider.calls[0]["messages"][0]["content"]
    assert "https://es.wikipedia.org/wiki/Guernica" in prompt
    assert "guernica picasso" in prompt
    assert "Guernica (1.20)" in prompt
    assert provider.calls[0]["images"] is None


def test_text_analyzer_skips_empty_text():
    provider = FakeProvider(GOOD_REPLY, vision=False)
    result = asyncio.run(WebTextAnalyzer(provider).extract("   ", TextHints(), Language.ES))
    assert not result.identified
    assert provider.calls == []


def test_prompts_per_language():
    for language in Language:
        assert '"identified"' in build_vision_prompt(language)
        prompt = build_web_analysis_prompt(language, "content", [], [], None)
        assert "content" in prompt
    assert "No disponible" in build_web_analysis_prompt(Language.ES, "x", [], [], None)


def _detector(payload, status=200, blocked=("collinsdictionary",)):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(status, json=payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleWebDetector("key", blocked_hosts=list(blocked), client=client), seen


def test_reverse_search_parses_web_detection():
    payload = {"responses": [{"webDetection": {
        "pagesWithMatchingImages": [
            {"url": "https://en.wikipedia.org/wiki/Guernica_(Picasso)", "pageTitle": "Guernica"},
            {"url": "https://www.collinsdictionary.com/guernica"},
        ],
        "visuallySimilarImages": [{"url": "https://img.example/1.jpg"}],
        "bestGuessLabels": [{"label": "guernica", "languageCode": "es"}],
        "webEntities": [
            {"entityId": "/m/a", "description": "Painting", "score": 0.4},
            {"entityId": "/m/b", "description": "Guernica", "score": 1.1},
            {"entityId": "/m/c", "score": 2.0},
        ],
    }}]}
    detector, seen = _detector(payload)

    evidence = asyncio.run(detector.search(b"img", Language.ES))

    assert [p.url for p in evidence.pages] == ["https://en.wikipedia.org/wiki/Guernica_(Picasso)"]
    assert evidence.label_texts() == ["guernica"]
    assert [e.entity_id for e in evidence.sorted_entities()] == ["/m/c", "/m/b", "/m/a"]
    assert evidence.top_entity().description == "Guernica"
    body = json.loads(seen[0].content)
    assert body["requests"][0]["features"][0]["type"] == "WEB_DETECTION"
    assert body["requests"][0]["imageContext"]["languageHints"] == ["es"]
    assert seen[0].url.params["key"] == "key"


def test_reverse_search_degrades():
    detector, _ = _detector({"error": "nope"}, status=403)
    assert asyncio.run(detector.search(b"img")).pages == ()

    detector, _ = _detector({"responses": [{"error": {"message": "bad image"}}]})
    assert asyncio.run(detector.search(b"img")).pages == ()


def test_reverse_search_without_key():
    detector = GoogleWebDetector("")
    assert asyncio.run(detector.search(b"img")).entities == ()


@pytest.mark.parametrize("data, expected", [
    (b"\x89PNG\r\n\x1a\n" + b"\x00" * 8, "image/png"),
    (b"\x00\x00\x00\x18ftypheic" + b"\x00" * 8, "image/heic"),
    (b"\x00\x00\x00\x18ftypmif1" + b"\x00" * 8, "image/heic"),
    (b"\xff\xd8\xff\xe0" + b"\x00" * 8, "image/jpeg"),
    (b"", "image/jpeg"),
])
def test_image_media_type(data, expected):
    assert image_media_type(data) == expected


class StubMessages:
    def __init__(self):
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(
            content=[SimpleNamespace(type="text", text=GOOD_REPLY)],
            usage=SimpleNamespace(input_tokens=30, output_tokens=12),
        )


def test_anthropic_vision_request():
    provider = AnthropicProvider("key")
    messages = StubMessages()
    provider._client = SimpleNamespace(messages=messages)
    png = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8

    result = asyncio.run(VisionIdentifier(provider).identify(png, Language.EN))

    assert result.title == "Guernica"
    assert result.source == "vision:anthropic"
    [call] = messages.calls
    [turn] = call["messages"]
    image, text = turn["content"]
    assert image["source"]["media_type"] == "image/png"
    assert text["type"] == "text"
    assert '"identified"' in text["text"]
    assert call["system"]


def test_anthropic_without_key_is_unavailable():
    provider = AnthropicProvider("")
    assert not provider.is_available()
    result = asyncio.run(VisionIdentifier(provider).identify(b"img", Language.ES))
    assert not result.identified
