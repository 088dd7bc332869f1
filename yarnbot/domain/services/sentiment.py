# yarnbot/domain/services/sentiment.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

import re

from yarnbot.domain.models import Sentiment

POSITIVE_WORDS: tuple[str, ...] = (
    "great", "good", "excellent", "amazing", "wonderful", "fantastic", "perfect",
    "love", "happy", "pleased", "satisfied", "thanks", "thank", "appreciate",
    "helpful", "awesome", "best", "nice", "brilliant", "superb",
)  # fmt: skip
NEGATIVE_WORDS: tuple[str, ...] = (
    "bad", "poor", "terrible", "awful", "horrible", "worst", "hate", "angry",
    "disappointed", "frustrated", "annoyed", "upset", "unhappy", "dissatisfied",
    "problem", "issue", "wrong", "broken", "defective", "complaint", "fail",
)  # fmt: skip
URGENT_WORDS: tuple[str, ...] = (
    "urgent", "immediately", "asap", "emergency", "critical", "now", "quickly",
    "fast", "hurry", "rush", "priority", "important",
)  # fmt: skip


def _word_start(word: str) -> re.Pattern[str]:
    # Anchored at a word start so "now" is not found inside "know".
    return re.compile(r"(?<!\w)" + re.escape(word))


_POSITIVE = tuple(_word_start(w) for w in POSITIVE_WORDS)
_NEGATIVE = tuple(_word_start(w) for w in NEGATIVE_WORDS)
_URGENT = tuple(_word_start(w) for w in URGENT_WORDS)


def analyze_sentiment(text: str) -> Sentiment:
    """Keyword-count polarity: ``score = positive hits - negative hits``."""
    if not isinstance(text, str) or not text:
        return Sentiment()
    lowered = text.lower()
    positive = sum(1 for p in _POSITIVE if p.search(lowered))
    negative = sum(1 for p in _NEGATIVE if p.search(lowered))
    urgent = any(p.search(lowered) for p in _URGENT)
    score = positive - negative
    if score > 0:
        label = "positive"
    elif score < 0:
        label = "negative"
    else:
        label = "neutral"
    return Sentiment(
        score=score,
        label=label,
        is_urgent=urgent,
        positive_count=positive,
        negative_count=negative,
    )
