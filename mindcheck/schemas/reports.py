from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

SCORE_MIN = 1
SCORE_MAX = 10


class Report(BaseModel):
    """Structured end-of-session well-being assessment.

    Field aliases follow the camelCase JSON schema requested from the model, so
    ``Report.model_validate(payload)`` accepts raw model output and
    ``report.model_dump(by_alias=True)`` reproduces it.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    observed_patterns: list[str] = Field(..., alias="observedPatterns")
    tentative_conditions: list[str] = Field(..., alias="tentativeConditions")
    mood_score: int = Field(..., alias="moodScore", ge=SCORE_MIN, le=SCORE_MAX)
    sentiment_score: int = Field(..., alias="sentimentScore", ge=SCORE_MIN, le=SCORE_MAX)
    key_quotes: list[str] = Field(..., alias="keyQuotes")
    recommendations: list[str] = Field(...)
    analysis_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="analysisDate"
    )

    @field_validator(
        "observed_patterns",
        "tentative_conditions",
        "key_quotes",
        "recommendations",
        mode="before",
    )
    @classmethod
    def _coerce_strings(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if not isinstance(value, (list, tuple)):
            raise ValueError("Expected a list of strings.")
        return [str(item) for item in value if item is not None]

    @field_validator("mood_score", "sentiment_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("Score must be numeric.")
        try:
            score = round(float(value))
        except (TypeError, ValueError, OverflowError) as exc:
            raise ValueError("Score must be numeric.") from exc
        return max(SCORE_MIN, min(SCORE_MAX, score))

    @field_validator("analysis_date", mode="before")
    @classmethod
    def _tolerate_date(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        if isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                return datetime.now(timezone.utc)
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc)
