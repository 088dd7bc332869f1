# yarnbot/domain/services/ranking.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import TypeVar

from yarnbot.domain.models import (
    ConversationContext,
    EntityBag,
    IntentResult,
    KnowledgeEntry,
    TopicScore,
)
from yarnbot.domain.services.normalization import normalize
from yarnbot.domain.services.relevance_scoring import (
    context_bonus,
    entity_bonus,
    index_entry,
    intent_bonus,
    preference_bonus,
    query_words,
    relevance_score,
    semantic_score,
)
from yarnbot.domain.value_objects import ScoringWeights

T = TypeVar("T")


class ConfidenceBand(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def score_entry(
    query_tokens: Sequence[str],
    entry: KnowledgeEntry,
    entities: EntityBag,
    intent: IntentResult,
    context: ConversationContext,
    weights: ScoringWeights,
    words: Sequence[str] | None = None,
) -> TopicScore:
    indexed = index_entry(entry)
    semantic = semantic_score(query_tokens, indexed)
    relevance = relevance_score(query_tokens, indexed, weights, semantic=semantic, words=words)
    # intent alone must not pull in a topic the query never touched
    i_bonus = intent_bonus(intent, entry) if (semantic > 0 or relevance > 0) else 0.0
    e_bonus = entity_bonus(entities, entry, weights)
    c_bonus = context_bonus(context.last_topic, entry, weights)
    p_bonus = preference_bonus(context.preferences, entry, weights)
    total = (
        weights.semantic * semantic
        + weights.relevance * relevance
        + e_bonus
        + i_bonus
        + c_bonus
        + p_bonus
    )
    return TopicScore(
        topic=entry.topic,
        score=total,
        semantic=semantic,
        relevance=relevance,
        entity_bonus=e_bonus,
        intent_bonus=i_bonus,
        context_bonus=c_bonus,
        preference_bonus=p_bonus,
    )


def score_topics(
    query: str,
    entities: EntityBag,
    intent: IntentResult,
    kb: Iterable[KnowledgeEntry],
    context: ConversationContext,
    weights: ScoringWeights | None = None,
) -> list[TopicScore]:
    """
    Score every knowledge entry against ``query`` and rank them.

    - Final score = 0.3 semantic + 0.35 relevance + entity, intent, context
      and preference bonuses (weights from ``ScoringWeights``).
    - The sum is NOT clamped; use ``clamp_unit`` where a probability is needed.
    - Ties keep knowledge-base order.
    """
    weights = weights or ScoringWeights()
    tokens = normalize(query)
    words = query_words(query)
    scores = [
        score_entry(tokens, entry, entities, intent, context, weights, words) for entry in kb
    ]
    return sort_by_scores_desc(scores, [s.score for s in scores])


def adaptive_threshold(
    scores: Sequence[TopicScore], weights: ScoringWeights | None = None
) -> float:
    """Lower bar when the top topic clearly beats the runner-up, higher when they are close."""
    weights = weights or ScoringWeights()
    if not scores:
        return weights.threshold_ambiguous
    top = scores[0].score
    second = scores[1].score if len(scores) > 1 else 0.0
    if top - second > weights.clear_winner_gap:
        return weights.threshold_clear
    return weights.threshold_ambiguous


def classify_confidence(
    scores: Sequence[TopicScore], weights: ScoringWeights | None = None
) -> ConfidenceBand:
    weights = weights or ScoringWeights()
    if not scores:
        return ConfidenceBand.LOW
    top = scores[0].score
    if top > adaptive_threshold(scores, weights):
        return ConfidenceBand.HIGH
    if top > weights.clarify_floor:
        return ConfidenceBand.MEDIUM
    return ConfidenceBand.LOW


def sort_by_scores_desc(items: Sequence[T], scores: Sequence[float]) -> list[T]:
    """Stable sort (descending) by scores; equal scores preserve input order.

    Examples:
        >>> sort_by_scores_desc(["a", "b", "c"], [0.2, 0.9, 0.5])
        ['b', 'c', 'a']
    """
    pairs: list[tuple[float, T]] = list(zip(scores, items, strict=False))
    pairs.sort(key=lambda p: p[0], reverse=True)
    return [it for _, it in pairs]
