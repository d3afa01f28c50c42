from __future__ import annotations

import json
from datetime import datetime, timezone

from mindcheck.integrations.llm import InferenceClient


READING_KEYWORDS = ("book", "reading", "club")
CONNECTION_KEYWORDS = ("talk", "someone", "lonely", "alone")
STRESS_KEYWORDS = ("stress", "anxious", "worried", "overwhelm")


class HeuristicClient(InferenceClient):
    """Deterministic canned backend used offline and as a last-resort fallback."""

    name = "heuristic"

    async def generate(
        self,
        turns: list[dict[str, str]],
        instruction: str,
        *,
        structured: bool = False,
    ) -> str:
        last_user_message = next(
            (turn["content"] for turn in reversed(turns) if turn["role"] == "user"),
            "",
        )
        if structured:
            return self._canned_report(last_user_message)
        return self._heuristic_reply(last_user_message)

    def _heuristic_reply(self, last_user_message: str) -> str:
        content_lower = last_user_message.lower()

        def _matches(keywords: tuple[str, ...]) -> bool:
            return any(keyword in content_lower for keyword in keywords)

        if _matches(READING_KEYWORDS):
            return (
                "That's a great idea! Book clubs can be wonderful places to meet new people. "
                "Have you checked your local library for book club recommendations?"
            )
        if _matches(CONNECTION_KEYWORDS):
            return (
                "I understand the need for connection. Have you considered joining any hobby "
                "groups or volunteering? What activities do you enjoy?"
            )
        if _matches(STRESS_KEYWORDS):
            return (
                "I hear that you're feeling stressed. Deep breathing exercises can really help. "
                "What usually helps you feel more calm?"
            )
        return (
            "I understand. Would you like to tell me more about what's been on your mind lately? "
            "I'm here to listen."
        )

    def _canned_report(self, last_user_message: str) -> str:
        quote = (
            last_user_message
            if len(last_user_message) > 10
            else "I've been feeling a bit overwhelmed lately"
        )
        return json.dumps(
            {
                "observedPatterns": [
                    "Shows signs of moderate stress related to daily activities",
                    "Expresses desire for more social connection",
                    "Displays self-awareness about emotional states",
                ],
                "tentativeConditions": ["Mild anxiety", "Social isolation"],
                "moodScore": 6,
                "sentimentScore": 5,
                "keyQuotes": [quote],
                "recommendations": [
                    "Guided meditation sessions for stress reduction",
                    "Social connection exercises",
                ],
                "analysisDate": datetime.now(timezone.utc).isoformat(),
            },
            ensure_ascii=False,
        )
