from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

from pydantic import ValidationError

from mindcheck.schemas.reports import Report


logger = logging.getLogger(__name__)

EMPTY_REPLY_FALLBACK = "I'm glad to hear from you! How can I help you today?"
_ROLE_ARTIFACT = re.compile(r"^\s*(assistant:|let me respond naturally to that\.?)", re.IGNORECASE)


class ReportParseError(ValueError):
    """Report text was not valid JSON or lacked required fields."""


def clean_chat_reply(text: str) -> str:
    """Strip role-label artifacts from a generated chat reply."""
    cleaned = _ROLE_ARTIFACT.sub("", text or "", count=1).strip()
    return cleaned or EMPTY_REPLY_FALLBACK


def parse_report(text: str) -> Report:
    """Parse model output into a :class:`Report`, raising :class:`ReportParseError`."""
    sanitized = _strip_json_fences((text or "").strip())
    try:
        payload = json.loads(sanitized)
    except json.JSONDecodeError:
        payload = _parse_embedded_object(sanitized)

    if not isinstance(payload, dict):
        raise ReportParseError("Report payload is not a JSON object.")

    try:
        return Report.model_validate(payload)
    except ValidationError as exc:
        raise ReportParseError(f"Report payload failed validation: {exc.error_count()} error(s).") from exc


def degraded_report() -> Report:
    return Report(
        observed_patterns=["Error generating comprehensive report"],
        tentative_conditions=[],
        mood_score=5,
        sentiment_score=5,
        key_quotes=[],
        recommendations=["Consider a general wellness check-in"],
        analysis_date=datetime.now(timezone.utc),
    )


def _parse_embedded_object(value: str) -> object:
    start = value.find("{")
    end = value.rfind("}")
    if start == -1 or end <= start:
        raise ReportParseError("Report response contained no JSON object.")
    logger.debug("Report response wrapped in prose; parsing embedded object.")
    try:
        return json.loads(value[start : end + 1])
    except json.JSONDecodeError as exc:
        raise ReportParseError("Report response is not valid JSON.") from exc


def _strip_json_fences(value: str) -> str:
    if value.startswith("```"):
        if value.lower().startswith("```json"):
            value = value[7:]
        else:
            value = value[3:]
        if value.endswith("```"):
            value = value[:-3]
    return value.strip()
