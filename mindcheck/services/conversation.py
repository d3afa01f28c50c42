from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from mindcheck.core.config import AppSettings
from mindcheck.integrations.llm import InferenceClient, TransportError
from mindcheck.integrations.storage import ReportSink
from mindcheck.schemas.conversation import ConversationState, Message, Sender
from mindcheck.schemas.reports import Report
from mindcheck.services.export import format_report, report_filename
from mindcheck.services.parsing import (
    ReportParseError,
    clean_chat_reply,
    degraded_report,
    parse_report,
)
from mindcheck.services.prompts import Prompt, build_chat_prompt, build_report_prompt


logger = logging.getLogger(__name__)

GREETING = "Hi there! How are you feeling today?"
CHAT_APOLOGY = "I'm sorry, I'm having trouble responding right now. Could you try again?"
CHAT_ERROR = "Failed to get response. Please try again."
REPORT_ERROR = "Failed to generate report. Please try again."
REPORT_PARSE_ERROR = "Failed to generate a valid report. Please try again."
SAVE_ERROR = "Failed to save report. Please try again."


class ConversationService:
    """Session state machine sequencing prompt building, inference and parsing.

    All state lives on this instance and is mutated from a single asyncio task
    flow. The inference call is the only suspension point of each operation.
    Chat turns are serialized: ``send_message`` is ignored while another turn
    is in flight.
    """

    def __init__(
        self,
        client: InferenceClient,
        settings: AppSettings,
        *,
        report_sink: ReportSink | None = None,
    ):
        self._client = client
        self._settings = settings
        self._sink = report_sink
        self._messages: list[Message] = []
        self._started = False
        self.is_loading = False
        self.is_report_generating = False
        self.current_report: Report | None = None
        self.last_error: str | None = None

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def snapshot(self) -> ConversationState:
        return ConversationState(
            messages=tuple(self._messages),
            is_loading=self.is_loading,
            is_report_generating=self.is_report_generating,
            current_report=self.current_report,
            last_error=self.last_error,
        )

    async def start(self) -> None:
        """Greet the user once, after a short typing delay."""
        if self._started:
            return
        self._started = True
        await asyncio.sleep(max(self._settings.greeting_delay_seconds, 0))
        self._append(GREETING, "bot")

    async def send_message(self, text: str) -> Message | None:
        """Run one chat turn and return the bot message it appended."""
        if not text or not text.strip():
            return None
        if self.is_loading:
            logger.info("Chat turn already in flight; ignoring new message.")
            return None

        self._append(text, "user")
        self.is_loading = True
        self.last_error = None
        try:
            # Built from the live transcript so the message appended above is included.
            prompt = build_chat_prompt(self._messages)
            raw_reply = await self._generate(prompt)
            return self._append(clean_chat_reply(raw_reply), "bot")
        except Exception as exc:
            logger.warning("Chat turn failed", exc_info=exc)
            self.last_error = CHAT_ERROR
            return self._append(CHAT_APOLOGY, "bot")
        finally:
            self.is_loading = False

    async def generate_report(self) -> Report:
        """Synthesize a report from the transcript; never leaves the slot empty."""
        self.is_report_generating = True
        self.last_error = None
        try:
            prompt = build_report_prompt(self._messages)
            raw_report = await self._generate(prompt)
            self.current_report = parse_report(raw_report)
        except ReportParseError as exc:
            logger.warning("Report response could not be parsed", exc_info=exc)
            self.last_error = REPORT_PARSE_ERROR
            self.current_report = degraded_report()
        except Exception as exc:
            logger.warning("Report generation failed", exc_info=exc)
            self.last_error = REPORT_ERROR
            self.current_report = degraded_report()
        finally:
            self.is_report_generating = False
        return self.current_report

    async def download_report(self) -> str | None:
        """Export the current report through the configured sink."""
        if self.current_report is None:
            return None
        if self._sink is None:
            logger.warning("No report sink configured; cannot save report.")
            self.last_error = SAVE_ERROR
            return None

        content = format_report(self.current_report)
        try:
            return await self._sink.save(report_filename(), content)
        except Exception as exc:
            logger.warning("Saving report failed", exc_info=exc)
            self.last_error = SAVE_ERROR
            return None

    def clear_error(self) -> None:
        self.last_error = None

    async def _generate(self, prompt: Prompt) -> str:
        try:
            return await asyncio.wait_for(
                self._client.generate(
                    prompt.turns,
                    prompt.instruction,
                    structured=prompt.structured,
                ),
                timeout=self._settings.inference_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"Inference call exceeded {self._settings.inference_timeout_seconds}s."
            ) from exc

    def _append(self, content: str, sender: Sender) -> Message:
        timestamp = datetime.now(timezone.utc)
        if self._messages and timestamp < self._messages[-1].timestamp:
            timestamp = self._messages[-1].timestamp
        message = Message(content=content, sender=sender, timestamp=timestamp)
        self._messages.append(message)
        logger.debug("Appended %s message %s", sender, message.id)
        return message
