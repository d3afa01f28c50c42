from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from mindcheck.integrations.llm import (
    ContentRejectedError,
    InferenceClient,
    MalformedResponseError,
    TransportError,
)


logger = logging.getLogger(__name__)

HF_INFERENCE_BASE = "https://api-inference.huggingface.co/models"


class HuggingFaceClient(InferenceClient):
    """Hugging Face hosted text-generation adapter."""

    name = "huggingface"

    def __init__(
        self,
        api_key: str,
        *,
        model_id: str = "mistralai/Mixtral-8x7B-Instruct-v0.1",
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ):
        if not api_key:
            raise ValueError("HuggingFaceClient requires an API key.")
        self._api_key = api_key
        self._endpoint = f"{HF_INFERENCE_BASE}/{model_id}"
        self._client_factory = client_factory or (
            lambda: httpx.AsyncClient(timeout=httpx.Timeout(30.0))
        )

    async def generate(
        self,
        turns: list[dict[str, str]],
        instruction: str,
        *,
        structured: bool = False,
    ) -> str:
        prompt = self._serialize_prompt(turns, instruction)
        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": 1024 if structured else 150,
                "temperature": 0.1 if structured else 0.7,
                "return_full_text": False,
            },
        }

        try:
            async with self._client_factory() as client:
                response = await client.post(
                    self._endpoint,
                    json=payload,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                )
        except httpx.HTTPError as exc:
            raise TransportError("Failed to reach the Hugging Face inference API.") from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise TransportError(self._extract_error(response))

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Hugging Face returned a non-JSON body.") from exc

        generated = self._extract_generated_text(data)
        # Some deployments ignore return_full_text and echo the prompt.
        if prompt in generated:
            generated = generated.replace(prompt, "")
        return generated.strip()

    def _serialize_prompt(self, turns: list[dict[str, str]], instruction: str) -> str:
        lines = [instruction, ""]
        for turn in turns:
            role = "Assistant" if turn["role"] == "assistant" else "User"
            lines.append(f"{role}: {turn['content']}")
        lines.append("Assistant:")
        return "\n".join(lines)

    def _extract_generated_text(self, data: Any) -> str:
        if isinstance(data, dict) and data.get("error"):
            message = str(data["error"])
            if "safety" in message.lower() or "content" in message.lower():
                raise ContentRejectedError(f"Hugging Face rejected the request: {message}")
            raise MalformedResponseError(f"Hugging Face error payload: {message}")

        if isinstance(data, list) and data and isinstance(data[0], dict):
            text = data[0].get("generated_text")
        elif isinstance(data, dict):
            text = data.get("generated_text")
        else:
            text = None

        if not isinstance(text, str):
            logger.warning("Unexpected Hugging Face response structure: %s", data)
            raise MalformedResponseError("Hugging Face response did not include generated_text.")
        return text

    def _extract_error(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and payload.get("error"):
            return f"Hugging Face API error: {response.status_code} - {payload['error']}"
        return f"Hugging Face API error: {response.status_code}"
