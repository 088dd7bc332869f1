# yarnbot/domain/services/dialogue.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from yarnbot.domain.models import (
    MAX_HISTORY,
    MAX_RECENT_TOPICS,
    ConversationContext,
    HistoryEntry,
    UserPreferences,
)
from yarnbot.domain.services.normalization import STOPWORDS
from yarnbot.domain.services.patterns import first_match, search


@dataclass(frozen=True)
class TurnInfo:
    """What one answered turn contributes to the context. ``topic`` is None for non-answers."""

    topic: str | None
    user_name: str | None = None
    preferences: UserPreferences | None = None


def update_context(
    context: ConversationContext, turn: TurnInfo, now: datetime
) -> ConversationContext:
    """Return the next context snapshot; ``context`` itself is left untouched."""
    stamp = now.isoformat()
    recent = context.recent_topics
    history = context.conversation_history
    last_topic = context.last_topic
    if turn.topic:
        # newest first; dict.fromkeys keeps the first (newest) occurrence
        recent = tuple(dict.fromkeys((turn.topic, *recent)))[:MAX_RECENT_TOPICS]
        history = (*history, HistoryEntry(turn.topic, stamp))[-MAX_HISTORY:]
        last_topic = turn.topic

    return context.with_updates(
        last_topic=last_topic,
        recent_topics=recent,
        conversation_history=history,
        message_count=context.message_count + 1,
        user_name=turn.user_name or context.user_name,
        preferences=context.preferences.merged(turn.preferences),
        last_interaction=stamp,
        session_started=context.session_started or stamp,
    )


def reset_context(now: datetime | None = None) -> ConversationContext:
    """The explicit "clear conversation" action: a fresh session."""
    return ConversationContext.new(now)


NAME_PATTERNS: tuple[str, ...] = (
    r"\bmy name is (\w+)",
    r"\bi am (\w+)",
    r"\bi'm (\w+)",
    r"\bcall me (\w+)",
    r"\b(\w+) here\b",
)

# Words the broad patterns catch that are never names ("i am interested", "new here").
NOT_A_NAME: frozenset[str] = frozenset(
    """
    interested looking trying searching wondering planning going having getting
    new here from just also still not so very really curious happy sorry fine good
    great ok okay sure glad back ready unable able confused unsure asking
    writing calling contacting buying ordering hi hello hey thanks thank
    """.split()
) | STOPWORDS


def extract_user_name(text: str) -> str | None:
    """First plausible name introduced in ``text``, title-cased."""
    if not isinstance(text, str) or not text:
        return None
    for pattern in NAME_PATTERNS:
        match = first_match(pattern, text)
        if match is None:
            continue
        candidate = match.group(1)
        if len(candidate) < 2 or not candidate.isalpha() or candidate.lower() in NOT_A_NAME:
            continue
        return candidate[:1].upper() + candidate[1:].lower()
    return None


PREFERRED_YARN_TYPES: tuple[str, ...] = ("cotton", "polyester", "blend", "organic", "recycled")

_USAGE_RULES: tuple[tuple[str, str], ...] = (
    (r"\b(apparel|clothing|garment|fashion)\b", "apparel"),
    (r"\b(home textile|furnishing|upholstery)\b", "home-textile"),
    (r"\b(industrial|technical)\b", "industrial"),
)


def extract_preferences(text: str, existing: UserPreferences | None = None) -> UserPreferences:
    """Overlay preferences stated in ``text`` on ``existing``; unstated ones are kept."""
    existing = existing or UserPreferences()
    if not isinstance(text, str) or not text:
        return existing
    lowered = text.lower()

    yarn_type = None
    for candidate in PREFERRED_YARN_TYPES:
        if candidate in lowered:
            yarn_type = candidate  # last mentioned in table order wins

    usage = next((label for pattern, label in _USAGE_RULES if search(pattern, lowered)), None)

    sustainable = search(r"\b(eco|sustainable|organic|recycled|green)\b", lowered)
    sustainability = True if sustainable else None
    price_conscious = None
    quality_focused = None
    if search(r"\b(cheap|affordable|budget|economical)\b", lowered):
        price_conscious = True
    elif search(r"\b(premium|quality|best|high-end)\b", lowered):
        quality_focused = True

    return existing.merged(
        UserPreferences(
            sustainability_focused=sustainability,
            preferred_yarn_type=yarn_type,
            usage=usage,
            price_conscious=price_conscious,
            quality_focused=quality_focused,
        )
    )


NEW_VISITOR_PATTERNS: tuple[str, ...] = (
    r"first time",
    r"new here",
    r"never (been|visited|ordered) before",
    r"new customer",
)


def is_new_visitor(text: str) -> bool:
    if not isinstance(text, str):
        return False
    return any(search(p, text) for p in NEW_VISITOR_PATTERNS)
