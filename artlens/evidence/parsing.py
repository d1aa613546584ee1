"""Tolerant parsing of language-model replies into ``EvidenceResult``.

Model output format is not guaranteed, so parsing never raises: every reply
maps to either ``ParseOk`` or ``ParseFailed``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from artlens.evidence.models import EvidenceResult, ParseFailed, ParseOk, ParseOutcome

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(.*?)\s*```", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Return the body of the first markdown code block, or the trimmed text if there is none."""
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def extract_json_object(text: str) -> Any:
    """Decode ``text`` as JSON, retrying on the span from the first ``{`` to the last ``}``.

    Raises ``ValueError`` (``json.JSONDecodeError`` included) when neither attempt decodes.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("no JSON object in reply")
    return json.loads(text[start:end + 1])


def parse_evidence(text: str | None, source: str = "") -> ParseOutcome:
    if not text or not text.strip():
        return ParseFailed("empty reply")

    body = strip_code_fences(text)
    try:
        payload = extract_json_object(body)
    except ValueError as e:
        return ParseFailed(f"invalid JSON: {e}", raw=text[:200])

    if not isinstance(payload, dict):
        return ParseFailed("reply is not a JSON object", raw=text[:200])
    if not isinstance(payload.get("identified"), bool):
        return ParseFailed("'identified' is missing or not a boolean", raw=text[:200])
    if not isinstance(payload.get("isMonument"), bool):
        payload["isMonument"] = False

    payload.pop("source", None)
    try:
        result = EvidenceResult.model_validate({**payload, "source": source})
    except ValidationError as e:
        return ParseFailed(f"schema mismatch: {e.error_count()} errors", raw=text[:200])
    return ParseOk(result)


def to_evidence(outcome: ParseOutcome, source: str = "") -> EvidenceResult:
    """Collapse a parse outcome into an ``EvidenceResult``; failures become the negative result."""
    if isinstance(outcome, ParseOk):
        return outcome.result
    logger.warning("Unparseable %s reply (%s): %s", source or "model", outcome.reason, outcome.raw)
    return EvidenceResult.negative(source)
