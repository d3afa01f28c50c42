from __future__ import annotations

import logging
from typing import Any

from openai import AsyncAzureOpenAI, AsyncOpenAI, OpenAIError

from mindcheck.core.config import AppSettings
from mindcheck.integrations.llm import (
    ContentRejectedError,
    InferenceClient,
    MalformedResponseError,
    TransportError,
)


logger = logging.getLogger(__name__)


class OpenAIChatClient(InferenceClient):
    """Chat completions adapter, Azure OpenAI when configured, else OpenAI."""

    name = "openai"

    def __init__(self, settings: AppSettings, *, client: Any | None = None):
        self._model = settings.openai_model
        self._client = client

        if self._client is not None:
            return
        if settings.azure_openai_api_key and settings.azure_openai_endpoint and settings.azure_openai_deployment:
            self._client = AsyncAzureOpenAI(
                api_key=settings.azure_openai_api_key.get_secret_value(),
                azure_endpoint=settings.azure_openai_endpoint,
                api_version=settings.azure_openai_api_version or "2024-02-15-preview",
            )
            self._model = settings.azure_openai_deployment
            self.name = "azure-openai"
        elif settings.openai_api_key:
            self._client = AsyncOpenAI(api_key=settings.openai_api_key.get_secret_value())
        else:
            raise ValueError("OpenAIChatClient requires OPENAI_API_KEY or Azure OpenAI settings.")

    async def generate(
        self,
        turns: list[dict[str, str]],
        instruction: str,
        *,
        structured: bool = False,
    ) -> str:
        request: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "system", "content": instruction}, *turns],
            "temperature": 0.1 if structured else 0.7,
            "max_tokens": 1024 if structured else 512,
        }
        if structured:
            request["response_format"] = {"type": "json_object"}

        try:
            response = await self._client.chat.completions.create(**request)
        except OpenAIError as exc:
            raise TransportError(f"{self.name} chat completion failed.") from exc

        choice = response.choices[0] if response.choices else None
        if choice is None:
            raise MalformedResponseError(f"{self.name} returned no choices.")
        if getattr(choice, "finish_reason", None) == "content_filter":
            raise ContentRejectedError(f"{self.name} filtered the completion.")

        content = choice.message.content if choice.message else None
        if not content:
            raise MalformedResponseError(f"{self.name} completion carried no content.")
        return content.strip()
