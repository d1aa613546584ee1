"""Model provider interface shared by the vision and text sources."""

from __future__ import annotations

import abc
from dataclasses import dataclass

_HEIF_BRANDS = (b"heic", b"heix", b"hevc", b"heim", b"heis", b"mif1", b"msf1")


def image_media_type(data: bytes) -> str:
    """Sniff the MIME type of an uploaded photo; unknown payloads are sent as JPEG."""
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if data[4:8] == b"ftyp" and data[8:12] in _HEIF_BRANDS:
        return "image/heic"
    return "image/jpeg"


@dataclass
class LLMResponse:
    text: str
    model: str
    provider: str
    tokens_used: int = 0


class LLMProvider(abc.ABC):
    """A chat model reachable with one request per call.

    Providers are built with client retries disabled. A failed or slow call
    surfaces to the source, which degrades to a negative result.
    """

    @abc.abstractmethod
    async def complete(
        self,
        messages: list[dict],
        system_prompt: str = "",
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        """Answer a text-only conversation."""

    @abc.abstractmethod
    async def complete_with_vision(
        self,
        messages: list[dict],
        images: list[bytes],
        system_prompt: str = "",
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        """Answer the last user message about the attached images."""

    @abc.abstractmethod
    def name(self) -> str:
        """Short id used in source names and logs."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """True if credentials are configured."""

    def supports_vision(self) -> bool:
        return False
