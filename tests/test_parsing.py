from __future__ import annotations

import json

import pytest

from mindcheck.services.parsing import (
    EMPTY_REPLY_FALLBACK,
    ReportParseError,
    clean_chat_reply,
    degraded_report,
    parse_report,
)


def _payload(**overrides) -> dict[str, object]:
    payload: dict[str, object] = {
        "observedPatterns": ["Reports trouble sleeping", "Mentions supportive friends"],
        "tentativeConditions": ["Mild anxiety"],
        "moodScore": 6,
        "sentimentScore": 5,
        "keyQuotes": ["I can't switch off at night"],
        "recommendations": ["Sleep hygiene module"],
        "analysisDate": "2025-02-01T10:00:00+00:00",
    }
    payload.update(overrides)
    return payload


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Assistant: Take a slow breath with me.", "Take a slow breath with me."),
        ("assistant:Take a slow breath with me.", "Take a slow breath with me."),
        ("Let me respond naturally to that. How was today?", "How was today?"),
        ("  How was today?  \n", "How was today?"),
        ("Assistant:   ", EMPTY_REPLY_FALLBACK),
        ("", EMPTY_REPLY_FALLBACK),
    ],
)
def test_clean_chat_reply(raw: str, expected: str) -> None:
    assert clean_chat_reply(raw) == expected


def test_clean_chat_reply_keeps_inner_role_words() -> None:
    assert clean_chat_reply("My assistant: a dog.") == "My assistant: a dog."


def test_parse_report_reads_camel_case_payload() -> None:
    report = parse_report(json.dumps(_payload()))

    assert report.observed_patterns == ["Reports trouble sleeping", "Mentions supportive friends"]
    assert report.tentative_conditions == ["Mild anxiety"]
    assert report.mood_score == 6
    assert report.analysis_date.year == 2025


def test_parse_report_strips_markdown_fences() -> None:
    report = parse_report("```json\n" + json.dumps(_payload()) + "\n```")

    assert report.sentiment_score == 5


def test_parse_report_tolerates_prose_wrapper() -> None:
    report = parse_report("Sure! Here it is:\n" + json.dumps(_payload()) + "\nTake care.")

    assert report.recommendations == ["Sleep hygiene module"]


def test_parse_report_clamps_and_rounds_scores() -> None:
    report = parse_report(json.dumps(_payload(moodScore=14, sentimentScore=0.4)))

    assert report.mood_score == 10
    assert report.sentiment_score == 1


def test_parse_report_defaults_unparseable_analysis_date() -> None:
    report = parse_report(json.dumps(_payload(analysisDate="current date in ISO format")))

    assert report.analysis_date.tzinfo is not None


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        "[1, 2, 3]",
        "{broken json}",
        json.dumps({"observedPatterns": []}),
        json.dumps(_payload(moodScore="very low")),
    ],
)
def test_parse_report_rejects_invalid_payloads(raw: str) -> None:
    with pytest.raises(ReportParseError):
        parse_report(raw)


def test_degraded_report_is_fixed_placeholder() -> None:
    report = degraded_report()

    assert report.mood_score == 5
    assert report.sentiment_score == 5
    assert report.tentative_conditions == []
    assert report.key_quotes == []
    assert report.recommendations == ["Consider a general wellness check-in"]
