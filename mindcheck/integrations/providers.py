from __future__ import annotations

import logging

from mindcheck.core.config import AppSettings
from mindcheck.integrations.bedrock import BedrockClient
from mindcheck.integrations.gemini import GeminiClient
from mindcheck.integrations.heuristic import HeuristicClient
from mindcheck.integrations.huggingface import HuggingFaceClient
from mindcheck.integrations.llm import FallbackInferenceClient, InferenceClient
from mindcheck.integrations.openai_chat import OpenAIChatClient


logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("gemini", "huggingface", "openai", "bedrock", "heuristic")


def build_inference_client(settings: AppSettings) -> InferenceClient:
    """Instantiate the provider adapter selected by ``INFERENCE_PROVIDER``."""
    provider = (settings.inference_provider or "").strip().lower()

    if provider == "gemini":
        if not settings.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is required for the gemini provider.")
        client: InferenceClient = GeminiClient(
            settings.gemini_api_key.get_secret_value(),
            model=settings.gemini_model,
        )
    elif provider == "huggingface":
        if not settings.hf_api_key:
            raise ValueError("HF_API_KEY is required for the huggingface provider.")
        client = HuggingFaceClient(
            settings.hf_api_key.get_secret_value(),
            model_id=settings.hf_model_id,
        )
    elif provider == "openai":
        client = OpenAIChatClient(settings)
    elif provider == "bedrock":
        client = BedrockClient(settings)
    elif provider == "heuristic":
        return HeuristicClient()
    else:
        raise ValueError(
            f"Unsupported inference provider {provider!r}; expected one of {', '.join(SUPPORTED_PROVIDERS)}."
        )

    if settings.inference_canned_fallback:
        client = FallbackInferenceClient(client, HeuristicClient())

    logger.info("Using %s inference backend", client.name)
    return client
