"""HTTP REST API adapter: artwork recognition from an uploaded photo."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, Header, HTTPException, Query, UploadFile

from artlens.gateway.auth import is_authorized, resolve_user_id
from artlens.recognition.messages import get_message
from artlens.recognition.service import (
    RecognitionError,
    RecognitionRequest,
    RecognitionResponse,
    RecognitionService,
)
from artlens.types import Language, MessageKey

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["recognition"])

# The service and auth settings are injected at app startup
_service: RecognitionService | None = None
_api_key = ""
_require_auth = False


def set_service(service: RecognitionService | None) -> None:
    global _service
    _service = service


def set_auth(api_key: str, require_auth: bool) -> None:
    global _api_key, _require_auth
    _api_key = api_key
    _require_auth = require_auth


@router.post("/recognize", response_model=RecognitionResponse)
async def recognize(
    image: Optional[UploadFile] = File(None),
    local_uri: str = Form(""),
    language: Optional[str] = Query(None),
    x_user_id: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None),
):
    if _service is None:
        raise HTTPException(503, "Recognition service not initialized")
    if not is_authorized(x_api_key, _api_key, _require_auth):
        raise HTTPException(401, "Invalid or missing API key")

    request = RecognitionRequest(
        user_id=resolve_user_id(x_user_id),
        image=await image.read() if image is not None else b"",
        mime_type=(image.content_type or "") if image is not None else "",
        filename=(image.filename or "") if image is not None else "",
        local_uri=local_uri,
        language=language,
    )
    try:
        return await _service.recognize(request)
    except RecognitionError as e:
        logger.info("Recognition rejected (%s): %s", e.key.value, e.message)
        raise HTTPException(e.status_code, e.message) from e
    except Exception as e:
        logger.exception("Recognition failed for user %s", request.user_id)
        raise HTTPException(500, get_message(Language.resolve(language), MessageKey.PROCESSING_ERROR)) from e
