"""Anthropic provider: Claude as an alternate vision or text identifier."""

from __future__ import annotations

import base64

import anthropic

from artlens.llm.base import LLMProvider, LLMResponse, image_media_type

DEFAULT_SYSTEM_PROMPT = "You are an expert art historian. Answer only with JSON."


def _image_block(data: bytes) -> dict:
    return {
        "type": "image",
        "source": {
            "type": "base64",
            "media_type": image_media_type(data),
            "data": base64.b64encode(data).decode(),
        },
    }


class AnthropicProvider(LLMProvider):
    def __init__(self, api_key: str, model: str = "claude-sonnet-4-20250514", timeout: float = 30.0) -> None:
        self._api_key = api_key
        self._model = model
        self._client = anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0) if api_key else None

    async def _send(self, messages: list[dict], system_prompt: str, max_tokens: int, temperature: float) -> LLMResponse:
        if self._client is None:
            raise RuntimeError("Anthropic API key is not configured")
        resp = await self._client.messages.create(
            model=self._model,
            max_tokens=max_tokens,
            system=system_prompt or DEFAULT_SYSTEM_PROMPT,
            messages=messages,
            temperature=temperature,
        )
        text = "".join(block.text for block in resp.content if block.type == "text")
        usage = resp.usage
        return LLMResponse(
            text=text,
            model=self._model,
            provider="anthropic",
            tokens_used=usage.input_tokens + usage.output_tokens if usage else 0,
        )

    async def complete(
        self,
        messages: list[dict],
        system_prompt: str = "",
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        return await self._send(messages, system_prompt, max_tokens, temperature)

    async def complete_with_vision(
        self,
        messages: list[dict],
        images: list[bytes],
        system_prompt: str = "",
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        prompt = messages[-1]["content"] if messages else ""
        content = [_image_block(img) for img in images]
        content.append({"type": "text", "text": prompt})
        return await self._send([{"role": "user", "content": content}], system_prompt, max_tokens, temperature)

    def name(self) -> str:
        return "anthropic"

    def is_available(self) -> bool:
        return self._client is not None

    def supports_vision(self) -> bool:
        return True
