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

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"
INSTRUCTION_ACKNOWLEDGEMENT = (
    "I understand. I'll be a compassionate mental health support friend, "
    "responding naturally and avoiding repetitive questions."
)
SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


class GeminiClient(InferenceClient):
    """Google Gemini ``generateContent`` adapter."""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-pro",
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ):
        if not api_key:
            raise ValueError("GeminiClient requires an API key.")
        self._api_key = api_key
        self._endpoint = f"{GEMINI_API_BASE}/{model}:generateContent"
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
        payload = self._build_payload(turns, instruction, structured=structured)

        try:
            async with self._client_factory() as client:
                response = await client.post(
                    self._endpoint,
                    json=payload,
                    headers={"x-goog-api-key": self._api_key},
                )
        except httpx.HTTPError as exc:
            raise TransportError("Failed to reach the Gemini API.") from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise TransportError(self._extract_error(response))

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError("Gemini returned a non-JSON body.") from exc

        return self._extract_text(data)

    def _build_payload(
        self,
        turns: list[dict[str, str]],
        instruction: str,
        *,
        structured: bool,
    ) -> dict[str, Any]:
        # generateContent has no system role here, so the instruction leads as a user turn.
        contents = [
            {"role": "user", "parts": [{"text": instruction}]},
            {"role": "model", "parts": [{"text": INSTRUCTION_ACKNOWLEDGEMENT}]},
        ]
        for turn in turns:
            contents.append(
                {
                    "role": "model" if turn["role"] == "assistant" else "user",
                    "parts": [{"text": turn["content"]}],
                }
            )

        return {
            "contents": contents,
            "generationConfig": {
                "temperature": 0.1 if structured else 0.7,
                "topP": 0.95,
                "topK": 40,
                "maxOutputTokens": 1024 if structured else 512,
                "candidateCount": 1,
            },
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
                for category in SAFETY_CATEGORIES
            ],
        }

    def _extract_text(self, data: Any) -> str:
        if not isinstance(data, dict):
            raise MalformedResponseError("Unexpected Gemini response structure.")

        feedback = data.get("promptFeedback") or {}
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            raise ContentRejectedError(f"Gemini blocked the prompt: {feedback['blockReason']}")

        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            raise MalformedResponseError("Gemini response contained no candidates.")

        candidate = candidates[0]
        content = candidate.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        first = parts[0] if isinstance(parts, list) and parts else None
        text = first.get("text") if isinstance(first, dict) else None
        if isinstance(text, str) and text:
            return text

        if candidate.get("finishReason") == "SAFETY":
            raise ContentRejectedError("Gemini withheld the response for safety reasons.")
        logger.warning("Unexpected Gemini response structure: %s", data)
        raise MalformedResponseError("Gemini response did not include generated text.")

    def _extract_error(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict) and error.get("message"):
                return f"Gemini API error: {response.status_code} - {error['message']}"

        return f"Gemini API error: {response.status_code} - {response.text}"
