"""Test tolerant parsing of model replies."""

import pytest

from artlens.evidence.models import EvidenceResult, ParseFailed, ParseOk
from artlens.evidence.parsing import extract_json_object, parse_evidence, strip_code_fences, to_evidence


def test_plain_json():
    outcome = parse_evidence('{"identified": true, "confidence": 0.92, "title": "Las Meninas"}')
    assert isinstance(outcome, ParseOk)
    assert outcome.result.title == "Las Meninas"
    assert outcome.result.confidence == 0.92
    assert outcome.result.is_monument is False


def test_fenced_json():
    reply = 'Here you go:\n```json\n{"identified": true, "confidence": 0.8}\n```\nThanks'
    outcome = parse_evidence(reply)
    assert isinstance(outcome, ParseOk)
    assert outcome.result.confidence == 0.8


def test_strip_code_fences_without_fence():
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_json_embedded_in_prose():
    reply = 'Sure! The artwork is {"identified": true, "confidence": 0.7, "artist": "Goya"} as requested.'
    outcome = parse_evidence(reply)
    assert isinstance(outcome, ParseOk)
    assert outcome.result.artist == "Goya"


def test_extract_json_object_raises_without_object():
    with pytest.raises(ValueError):
        extract_json_object("no json here")


def test_identified_must_be_boolean():
    assert isinstance(parse_evidence('{"identified": "yes", "confidence": 0.9}'), ParseFailed)
    assert isinstance(parse_evidence('{"confidence": 0.9}'), ParseFailed)


def test_non_object_payload():
    assert isinstance(parse_evidence("[1, 2, 3]"), ParseFailed)


def test_empty_reply():
    assert isinstance(parse_evidence(""), ParseFailed)
    assert isinstance(parse_evidence(None), ParseFailed)


def test_malformed_reply_degrades_to_negative():
    for reply in ["", "garbage", "{not json}", '{"identified": 1}', "```json\n{\n```"]:
        result = to_evidence(parse_evidence(reply, "vision:test"), "vision:test")
        assert result.identified is False
        assert result.confidence == 0.0


@pytest.mark.parametrize("confidence", ["[0.9]", '{"v": 1}', '"high"'])
def test_non_numeric_confidence_fails_parse(confidence):
    reply = '{"identified": true, "confidence": %s, "title": "X"}' % confidence
    outcome = parse_evidence(reply)
    assert isinstance(outcome, ParseFailed)
    assert outcome.reason.startswith("schema mismatch")


def test_numeric_string_confidence_is_accepted():
    outcome = parse_evidence('{"identified": true, "confidence": "0.95"}')
    assert isinstance(outcome, ParseOk)
    assert outcome.result.confidence == 0.95


def test_country_dropped_for_non_monument():
    outcome = parse_evidence('{"identified": true, "confidence": 0.9, "country": "Spain"}')
    assert isinstance(outcome, ParseOk)
    assert outcome.result.country is None


def test_country_kept_for_monument():
    outcome = parse_evidence(
        '{"identified": true, "confidence": 0.9, "isMonument": true, "country": "France"}'
    )
    assert isinstance(outcome, ParseOk)
    assert outcome.result.is_monument is True
    assert outcome.result.country == "France"


def test_non_boolean_is_monument_defaults_false():
    outcome = parse_evidence('{"identified": true, "confidence": 0.9, "isMonument": "yes"}')
    assert isinstance(outcome, ParseOk)
    assert outcome.result.is_monument is False


def test_field_coercion():
    outcome = parse_evidence(
        '{"identified": true, "confidence": 1.7, "year": 1889, "tags": ["night", 3], "title": {"x": 1}}'
    )
    assert isinstance(outcome, ParseOk)
    result = outcome.result
    assert result.confidence == 1.0
    assert result.year == "1889"
    assert result.tags == ["night", "3"]
    assert result.title is None


def test_source_is_set_by_caller():
    outcome = parse_evidence('{"identified": true, "confidence": 0.5, "source": "model"}', "text:qwen")
    assert isinstance(outcome, ParseOk)
    assert outcome.result.source == "text:qwen"


def test_negative_result():
    result = EvidenceResult.negative("x")
    assert not result.accepts(0.0)
    assert result.source == "x"
