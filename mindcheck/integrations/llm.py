from __future__ import annotations

import logging


logger = logging.getLogger(__name__)


class InferenceError(RuntimeError):
    """Base error raised when a text-generation backend cannot produce a reply."""


class TransportError(InferenceError):
    """Network failure, timeout, or non-2xx status from the provider."""


class MalformedResponseError(InferenceError):
    """Provider answered successfully but without the expected text field."""


class ContentRejectedError(InferenceError):
    """Provider-side safety filtering blocked the prompt or the output."""


class InferenceClient:
    """Abstract text-generation capability shared by every provider adapter."""

    name = "abstract"

    async def generate(
        self,
        turns: list[dict[str, str]],
        instruction: str,
        *,
        structured: bool = False,
    ) -> str:
        """Return generated text for ``turns`` under ``instruction``.

        ``turns`` are ``{"role": "user" | "assistant", "content": str}`` dicts in
        transcript order. ``structured`` asks the backend for deterministic,
        machine-parseable output. Failures raise :class:`InferenceError`.
        """
        raise NotImplementedError


class FallbackInferenceClient(InferenceClient):
    """Try the primary provider and substitute canned output when it fails."""

    def __init__(self, primary: InferenceClient, fallback: InferenceClient):
        self._primary = primary
        self._fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    async def generate(
        self,
        turns: list[dict[str, str]],
        instruction: str,
        *,
        structured: bool = False,
    ) -> str:
        try:
            return await self._primary.generate(turns, instruction, structured=structured)
        except InferenceError as exc:
            logger.warning(
                "%s generation failed; substituting %s output",
                self._primary.name,
                self._fallback.name,
                exc_info=exc,
            )
        return await self._fallback.generate(turns, instruction, structured=structured)
