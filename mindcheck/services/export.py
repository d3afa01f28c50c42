"""Plain-text rendering of well-being reports.

The layout is stable so an exported document can be read back with
:func:`parse_exported_report`; every pattern, condition, quote and
recommendation is written verbatim on a ``- `` bullet line, with any further
lines of the same string indented by two spaces.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from mindcheck.schemas.reports import Report


REPORT_TITLE = "Mental Health Assessment Report"
SECTION_PATTERNS = "Observed Patterns"
SECTION_CONDITIONS = "Potential Conditions"
SECTION_QUOTES = "Key Quotes"
SECTION_RECOMMENDATIONS = "Recommendations"
_SECTIONS = (SECTION_PATTERNS, SECTION_CONDITIONS, SECTION_QUOTES, SECTION_RECOMMENDATIONS)
_BULLET = "- "
_CONTINUATION = "  "


def report_filename(today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"mental-health-report-{today.isoformat()}.txt"


def format_report(report: Report) -> str:
    generated = report.analysis_date.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    blocks = [
        f"{REPORT_TITLE}\nGenerated on: {generated}",
        f"Mood Score: {report.mood_score}/10\nSentiment Score: {report.sentiment_score}/10",
        _section(SECTION_PATTERNS, report.observed_patterns),
    ]
    if report.tentative_conditions:
        blocks.append(_section(SECTION_CONDITIONS, report.tentative_conditions))
    blocks.append(_section(SECTION_QUOTES, [f'"{quote}"' for quote in report.key_quotes]))
    blocks.append(_section(SECTION_RECOMMENDATIONS, report.recommendations))
    return "\n\n".join(blocks).strip()


def parse_exported_report(text: str) -> dict[str, list[str]]:
    """Recover the bulleted sections of a document produced by :func:`format_report`."""
    sections: dict[str, list[str]] = {}
    current: str | None = None
    for line in text.split("\n"):
        heading = line.rstrip(":")
        if line.endswith(":") and heading in _SECTIONS:
            current = heading
            sections[current] = []
        elif current and line.startswith(_BULLET):
            sections[current].append(line[len(_BULLET):])
        elif current and sections[current] and line.startswith(_CONTINUATION):
            sections[current][-1] += "\n" + line[len(_CONTINUATION):]
        elif not line.strip():
            current = None

    quotes = sections.get(SECTION_QUOTES)
    if quotes:
        sections[SECTION_QUOTES] = [
            quote[1:-1] if len(quote) >= 2 and quote[0] == quote[-1] == '"' else quote
            for quote in quotes
        ]
    return sections


def _section(title: str, items: list[str]) -> str:
    lines = [f"{title}:"]
    for item in items:
        first, *rest = item.split("\n")
        lines.append(f"{_BULLET}{first}")
        lines.extend(f"{_CONTINUATION}{continued}" for continued in rest)
    return "\n".join(lines)
