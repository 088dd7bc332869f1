# yarnbot/application/dto/chat_dto.py
from __future__ import annotations

from dataclasses import dataclass, field

from yarnbot.domain.models import ConversationContext


@dataclass(frozen=True)
class ChatRequest:
    """
    DTO for one chat turn.

    - text: raw user message (may be empty; never rejected here)
    - context: the caller-owned conversation state from the previous turn
    """

    text: str
    context: ConversationContext = field(default_factory=ConversationContext)


@dataclass(frozen=True)
class ChatAnswer:
    """Reply for one turn plus the context the caller must keep for the next one."""

    response_text: str
    topic: str
    suggested_questions: tuple[str, ...]
    updated_context: ConversationContext
    band: str = "low"
    top_score: float = 0.0
