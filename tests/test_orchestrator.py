"""Test the confidence-gated identification pipeline."""

import asyncio

import pytest

from artlens.catalog.models import CatalogEntry
from artlens.evidence.models import WebEntity
from artlens.pipeline import IdentificationPipeline, Identified, NotIdentified, Thresholds
from artlens.types import Stage
from artlens.web.collector import WebEvidenceCollector
from fakes import (
    FakeRenderer,
    FakeReverseSearch,
    FakeText,
    FakeVision,
    evidence,
    html_page,
    mock_fetcher,
    web_evidence,
)

STARRY_NIGHT = CatalogEntry(id="art-1", title="The Starry Night", artist_name="Vincent van Gogh")


def _pipeline(vision, text=None, search=None, routes=None, renderer=None, **kwargs):
    fetcher, requested = mock_fetcher(routes or {})
    collector = WebEvidenceCollector(fetcher, renderer)
    pipeline = IdentificationPipeline(
        search or FakeReverseSearch(),
        vision,
        text or FakeText(evidence(identified=False)),
        collector,
        **kwargs,
    )
    return pipeline, requested


@pytest.mark.parametrize("confidence", [0.99, 0.995, 1.0])
def test_high_confidence_vision_skips_web(confidence):
    search = FakeReverseSearch(web_evidence("https://en.wikipedia.org/wiki/x"))
    text = FakeText(evidence(confidence=0.9))
    pipeline, requested = _pipeline(FakeVision(evidence(confidence=confidence, title="X")), text, search)

    run = asyncio.run(pipeline.identify(b"img"))

    assert run.final_stage == Stage.VISION_HIGH_CONF
    assert run.stages == [Stage.START, Stage.VISION_HIGH_CONF]
    assert requested == []
    assert text.calls == []


def test_high_confidence_cancels_pending_reverse_search():
    search = FakeReverseSearch(delay=5)
    pipeline, _ = _pipeline(FakeVision(evidence(confidence=0.99)), search=search)

    async def scenario():
        run = await pipeline.identify(b"img")
        await asyncio.sleep(0)
        return run

    run = asyncio.run(scenario())
    assert run.identified
    assert search.calls == 1
    assert search.cancelled


def test_unidentified_vision_never_accepts_directly():
    vision = FakeVision(evidence(identified=False, confidence=1.0))
    pipeline, _ = _pipeline(vision)
    run = asyncio.run(pipeline.identify(b"img"))
    assert run.final_stage == Stage.NOT_IDENTIFIED


def test_starry_night_end_to_end():
    vision = FakeVision(evidence(confidence=0.99, title="Starry Night", artist="Van Gogh"))
    pipeline, requested = _pipeline(vision)

    run = asyncio.run(pipeline.identify(b"img"))
    outcome = pipeline.resolve(run, [
        CatalogEntry(id="art-0", title="Sunflowers", artist_name="Vincent van Gogh"),
        CatalogEntry(id="art-1", title="Starry Night", artist_name="Van Gogh"),
    ])

    assert run.final_stage == Stage.VISION_HIGH_CONF
    assert requested == []
    assert isinstance(outcome, Identified)
    assert outcome.matched_entry.id == "art-1"
    assert not outcome.is_custom


def test_text_analysis_accepts_at_base_threshold():
    ok_page = html_page("The Garden of Earthly Delights is a triptych by Hieronymus Bosch. " * 7)
    routes = {
        "https://en.wikipedia.org/wiki/Garden": (200, ok_page),
        "https://www.museodelprado.es/garden": (200, ok_page),
        "https://a.example/1": (500, ""),
        "https://blog.example/2": (200, ok_page),
        "https://b.example/3": (404, ""),
    }
    entity = WebEntity(entity_id="/m/1", description="The Garden of Earthly Delights", score=1.4)
    search = FakeReverseSearch(web_evidence(*routes, entities=(entity,)))
    text = FakeText(evidence(confidence=0.75, title="The Garden of Earthly Delights", artist="Bosch"))
    renderer = FakeRenderer("unused")
    pipeline, requested = _pipeline(FakeVision(evidence(confidence=0.4)), text, search, routes, renderer)

    run = asyncio.run(pipeline.identify(b"img"))

    assert run.stages == [Stage.START, Stage.WEB_COLLECT, Stage.TEXT_ANALYSIS]
    assert run.accepted.title == "The Garden of Earthly Delights"
    assert run.pages_fetched == 3
    assert len(requested) == 5
    assert renderer.calls == []
    [(scraped, hints)] = text.calls
    assert len(scraped) >= 1200
    assert hints.top_entity == entity
    assert hints.urls[:2] == ["https://en.wikipedia.org/wiki/Garden", "https://www.museodelprado.es/garden"]


def test_no_candidate_urls_ends_not_identified():
    text = FakeText(evidence(confidence=0.9))
    renderer = FakeRenderer("x" * 1000)
    pipeline, requested = _pipeline(
        FakeVision(evidence(confidence=0.3)), text, FakeReverseSearch(), renderer=renderer,
    )

    run = asyncio.run(pipeline.identify(b"img"))
    outcome = pipeline.resolve(run, [STARRY_NIGHT])

    assert run.final_stage == Stage.NOT_IDENTIFIED
    assert isinstance(outcome, NotIdentified)
    assert requested == []
    assert text.calls == []
    assert renderer.calls == []


def test_rejected_text_falls_back_to_vision():
    routes = {"https://en.wikipedia.org/wiki/x": (200, html_page("Some article text. " * 20))}
    text = FakeText(evidence(confidence=0.5))
    vision = FakeVision(evidence(confidence=0.985, title="Fallback"))
    pipeline, _ = _pipeline(vision, text, FakeReverseSearch(web_evidence(*routes)), routes)

    run = asyncio.run(pipeline.identify(b"img"))

    assert run.stages == [Stage.START, Stage.WEB_COLLECT, Stage.TEXT_ANALYSIS, Stage.VISION_FALLBACK]
    assert run.accepted.title == "Fallback"
    assert len(vision.calls) == 1


def test_fallback_below_threshold_not_identified():
    pipeline, _ = _pipeline(FakeVision(evidence(confidence=0.97)))
    run = asyncio.run(pipeline.identify(b"img"))
    assert run.stages == [Stage.START, Stage.WEB_COLLECT, Stage.VISION_FALLBACK, Stage.NOT_IDENTIFIED]
    assert run.accepted is None
    assert "vision=0.97" in run.reason


def test_fallback_threshold_is_tunable():
    thresholds = Thresholds(high_confidence=0.99, base=0.6, vision_fallback=0.99)
    pipeline, _ = _pipeline(FakeVision(evidence(confidence=0.985)), thresholds=thresholds)
    run = asyncio.run(pipeline.identify(b"img"))
    assert not run.identified


def test_fallback_reinvokes_vision_with_top_entity():
    entity = WebEntity(description="Sagrada Familia", score=0.9)
    search = FakeReverseSearch(web_evidence(entities=(entity,)))
    vision = FakeVision(
        evidence(confidence=0.5),
        hinted=evidence(confidence=0.99, title="Sagrada Familia", isMonument=True, country="Spain"),
    )
    pipeline, _ = _pipeline(vision, search=search, reinvoke_vision_on_fallback=True)

    run = asyncio.run(pipeline.identify(b"img"))

    assert vision.calls == [None, entity]
    assert run.final_stage == Stage.VISION_FALLBACK
    assert run.accepted.country == "Spain"
