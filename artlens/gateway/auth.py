"""Authentication: API key and caller identity."""

from __future__ import annotations

import hmac

ANONYMOUS_USER = "anonymous"


def validate_api_key(provided: str, expected: str) -> bool:
    """Constant-time API key comparison."""
    return hmac.compare_digest(provided.encode(), expected.encode())


def is_authorized(provided: str | None, expected: str, require_auth: bool) -> bool:
    """Auth is skipped when disabled or when no key is configured."""
    if not require_auth or not expected:
        return True
    return bool(provided) and validate_api_key(provided, expected)


def resolve_user_id(header_value: str | None) -> str:
    user_id = (header_value or "").strip()
    return user_id or ANONYMOUS_USER
