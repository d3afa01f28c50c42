from __future__ import annotations

import json
import logging
from typing import Any

import aioboto3

from mindcheck.core.config import AppSettings
from mindcheck.integrations.llm import InferenceClient, MalformedResponseError, TransportError


logger = logging.getLogger(__name__)


class BedrockClient(InferenceClient):
    """AWS Bedrock ``invoke_model`` adapter using the Titan text body format."""

    name = "bedrock"

    def __init__(self, settings: AppSettings):
        if not (settings.bedrock_region and settings.bedrock_model_id):
            raise ValueError("BedrockClient requires BEDROCK_REGION and BEDROCK_MODEL_ID.")
        self._settings = settings

    async def generate(
        self,
        turns: list[dict[str, str]],
        instruction: str,
        *,
        structured: bool = False,
    ) -> str:
        body = json.dumps(
            {
                "inputText": self._serialize_history(turns, instruction),
                "textGenerationConfig": {
                    "maxTokenCount": 1024 if structured else 512,
                    "temperature": 0.1 if structured else 0.7,
                    "topP": 0.9,
                },
            }
        )

        try:
            async with self._bedrock_client() as client:
                response = await client.invoke_model(
                    modelId=self._settings.bedrock_model_id,
                    body=body,
                )
                payload = await response["body"].read()
        except Exception as exc:
            raise TransportError("Bedrock invocation failed.") from exc

        try:
            parsed = json.loads(payload)
        except (TypeError, ValueError) as exc:
            raise MalformedResponseError("Bedrock returned a non-JSON body.") from exc

        results = parsed.get("results") if isinstance(parsed, dict) else None
        first = results[0] if isinstance(results, list) and results else None
        text = first.get("outputText") if isinstance(first, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise MalformedResponseError("Bedrock response did not include outputText.")
        return text.strip()

    def _serialize_history(self, turns: list[dict[str, str]], instruction: str) -> str:
        lines = [instruction, "", "Transcript:"]
        for turn in turns:
            role = "User" if turn["role"] == "user" else "Assistant"
            lines.append(f"{role}: {turn['content']}")
        lines.append("Assistant:")
        return "\n".join(lines)

    def _bedrock_client(self):
        session_kwargs: dict[str, Any] = {"region_name": self._settings.bedrock_region}
        if self._settings.aws_access_key_id and self._settings.aws_secret_access_key:
            session_kwargs.update(
                {
                    "aws_access_key_id": self._settings.aws_access_key_id.get_secret_value(),
                    "aws_secret_access_key": self._settings.aws_secret_access_key.get_secret_value(),
                }
            )

        session = aioboto3.Session()
        return session.client("bedrock-runtime", **session_kwargs)
