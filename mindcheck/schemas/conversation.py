from datetime import datetime, timezone
from typing import Literal, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mindcheck.schemas.reports import Report

Sender = Literal["user", "bot"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """A single conversational turn; immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4, description="Opaque identifier, never reused.")
    content: str = Field(..., description="Message text.")
    sender: Sender = Field(..., description="Either user or bot.")
    timestamp: datetime = Field(default_factory=utcnow, description="Creation time (UTC).")

    @field_validator("content")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message content must not be blank.")
        return value


class ConversationState(BaseModel):
    """Point-in-time view of a conversation session.

    Serialized with the same camelCase aliases as :class:`Report`.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    messages: tuple[Message, ...] = Field(default_factory=tuple)
    is_loading: bool = Field(False, alias="isLoading")
    is_report_generating: bool = Field(False, alias="isReportGenerating")
    current_report: Optional[Report] = Field(None, alias="currentReport")
    last_error: Optional[str] = Field(None, alias="lastError")


class SendMessageRequest(BaseModel):
    content: str = Field(..., description="User input text.")


class SendMessageResponse(BaseModel):
    accepted: bool = Field(..., description="False when the message was blank or a turn was in flight.")
    reply: Optional[Message] = None
    state: ConversationState
