"""Pydantic models describing conversation state and reports."""

from mindcheck.schemas.conversation import ConversationState, Message, Sender  # noqa: F401
from mindcheck.schemas.reports import Report  # noqa: F401
