"""Qwen provider: DashScope's OpenAI-compatible endpoint (qwen-vl for images, qwen-flash for text)."""

from __future__ import annotations

import base64

from openai import AsyncOpenAI

from artlens.llm.base import LLMProvider, LLMResponse, image_media_type


class QwenProvider(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "qwen-vl-max-latest",
        base_url: str = "https://dashscope-intl.aliyuncs.com/compatible-mode/v1",
        timeout: float = 30.0,
        vision: bool = True,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._timeout = timeout
        self._vision = vision
        self._client: AsyncOpenAI | None = None

    def _get_client(self) -> AsyncOpenAI:
        if not self._client:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout,
                max_retries=0,
            )
        return self._client

    async def complete(
        self,
        messages: list[dict],
        system_prompt: str = "",
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ) -> LLMResponse:
        client = self._get_client()
        all_messages = []
        if system_prompt:
            all_messages.append({"role": "system", "content": system_prompt})
        all_messages.extend(messages)

        resp = await client.chat.completions.create(
            model=self._model,
            messages=all_messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        choice = resp.choices[0]
        return LLMResponse(
            text=choice.message.content or "",
            model=self._model,
            provider="qwen",
            tokens_used=(resp.usage.total_tokens if resp.usage else 0),
        )

    async def complete_with_vision(
        self, messages: list[dict], images: list[bytes],
        system_prompt: str = "", max_tokens: int = 1024, temperature: float = 0.1,
    ) -> LLMResponse:
        client = self._get_client()
        content: list[dict] = []
        if messages:
            content.append({"type": "text", "text": messages[-1].get("content", "Analyze this image.")})
        for img in images:
            b64 = base64.b64encode(img).decode()
            url = f"data:{image_media_type(img)};base64,{b64}"
            content.append({"type": "image_url", "image_url": {"url": url}})

        all_messages = []
        if system_prompt:
            all_messages.append({"role": "system", "content": system_prompt})
        all_messages.append({"role": "user", "content": content})

        resp = await client.chat.completions.create(
            model=self._model, messages=all_messages, max_tokens=max_tokens, temperature=temperature,
        )
        choice = resp.choices[0]
        return LLMResponse(
            text=choice.message.content or "",
            model=self._model, provider="qwen",
            tokens_used=(resp.usage.total_tokens if resp.usage else 0),
        )

    def name(self) -> str:
        return "qwen"

    def is_available(self) -> bool:
        return bool(self._api_key)

    def supports_vision(self) -> bool:
        return self._vision
