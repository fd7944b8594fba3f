from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from ..config.models import Settings
from ..errors import ExternalCollaboratorError


@dataclass
class OpenAIClient:
    """Async client for the two OpenAI endpoints the tools need."""

    api_key: str
    base_url: str = "https://api.openai.com/v1"
    chat_model: str = "gpt-4"
    image_model: str = "dall-e-3"
    timeout: float = 60
    transport: httpx.AsyncBaseTransport | None = None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise ExternalCollaboratorError("openai", "Missing API key")
        url = self.base_url.rstrip("/") + path
        try:
            async with self._client() as client:
                resp = await client.post(url, json=payload, headers=self._headers())
        except httpx.HTTPError as e:
            raise ExternalCollaboratorError("openai", f"request to {path} failed: {e}") from e
        if resp.status_code >= 400:
            raise ExternalCollaboratorError(
                "openai",
                f"{path} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                detail=resp.text,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise ExternalCollaboratorError("openai", f"{path} returned invalid JSON", detail=resp.text) from e

    async def chat(self, prompt: str, *, max_tokens: int = 300, temperature: float = 0.7) -> str:
        obj = await self._post(
            "/chat/completions",
            {
                "model": self.chat_model,
                "messages": [{"role": "user", "content": prompt}],
                "max_tokens": max_tokens,
                "temperature": temperature,
            },
        )
        try:
            return (obj["choices"][0]["message"]["content"] or "").strip()
        except (KeyError, IndexError, TypeError) as e:
            raise ExternalCollaboratorError("openai", "unexpected chat completion shape", detail=str(obj)) from e

    async def generate_image(self, prompt: str, *, size: str = "1024x1024", quality: str = "standard") -> str:
        """Return the URL of one generated image."""
        obj = await self._post(
            "/images/generations",
            {
                "model": self.image_model,
                "prompt": prompt,
                "n": 1,
                "size": size,
                "quality": quality,
                "response_format": "url",
            },
        )
        try:
            return obj["data"][0]["url"]
        except (KeyError, IndexError, TypeError) as e:
            raise ExternalCollaboratorError("openai", "unexpected image generation shape", detail=str(obj)) from e

    async def download(self, url: str) -> bytes:
        try:
            async with self._client() as client:
                resp = await client.get(url, follow_redirects=True)
        except httpx.HTTPError as e:
            raise ExternalCollaboratorError("openai", f"download failed: {e}") from e
        if resp.status_code >= 400:
            raise ExternalCollaboratorError(
                "openai", f"download returned HTTP {resp.status_code}", status_code=resp.status_code
            )
        return resp.content

    @classmethod
    def from_settings(
        cls, api_key: str, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "OpenAIClient":
        return cls(
            api_key=api_key,
            base_url=settings.openai_base_url,
            chat_model=settings.openai_chat_model,
            image_model=settings.openai_image_model,
            timeout=settings.timeouts.http,
            transport=transport,
        )
