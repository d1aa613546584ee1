"""Shared enums and type aliases."""

from enum import Enum


class Language(str, Enum):
    ES = "es"
    EN = "en"
    FR = "fr"

    @classmethod
    def resolve(cls, code: str | None) -> "Language":
        """Map a client-supplied language code to a supported language, defaulting to Spanish."""
        if code:
            try:
                return cls(code.strip().lower()[:2])
            except ValueError:
                pass
        return cls.ES


class Stage(str, Enum):
    """States of the identification pipeline."""

    START = "start"
    VISION_HIGH_CONF = "vision_high_conf"
    WEB_COLLECT = "web_collect"
    TEXT_ANALYSIS = "text_analysis"
    VISION_FALLBACK = "vision_fallback"
    NOT_IDENTIFIED = "not_identified"


class MessageKey(str, Enum):
    SUCCESS_IDENTIFIED = "SUCCESS_IDENTIFIED"
    NOT_IDENTIFIED = "NOT_IDENTIFIED"
    INVALID_FORMAT = "INVALID_FORMAT"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    MISSING_IMAGE = "MISSING_IMAGE"
    MISSING_LOCAL_URI = "MISSING_LOCAL_URI"
    PROCESSING_ERROR = "PROCESSING_ERROR"
    RATE_LIMIT = "RATE_LIMIT"
