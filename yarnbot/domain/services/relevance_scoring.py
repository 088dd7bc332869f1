# yarnbot/domain/services/relevance_scoring.py
# Pure domain services: no I/O, deterministic, no external libraries.
"""Per-entry sub-scores of the topic scorer.

Every lexical match adds a fixed amount to the relevance score, so a
query that shares more keywords with an entry never scores it lower.
A query token counts as matched when the token itself or one of its
synonyms matches.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from yarnbot.domain.models import (
    EntityBag,
    IntentResult,
    IntentTag,
    KnowledgeEntry,
    UserPreferences,
)
from yarnbot.domain.services.normalization import (
    STOPWORDS,
    correct_spelling,
    normalize,
    stem,
    synonyms_of,
)
from yarnbot.domain.similarity import fuzzy_match_word, token_similarity
from yarnbot.domain.types import Score, Token
from yarnbot.domain.value_objects import ScoringWeights

POSITION_DECAY = 0.05
POSITION_FLOOR = 0.5

_WORD_RE = re.compile(r"[\w-]+")


@dataclass(frozen=True)
class IndexedEntry:
    """Token views of one knowledge entry, built once per scoring pass."""

    entry: KnowledgeEntry
    keyword_tokens: frozenset[Token]
    raw_keywords: frozenset[str]
    topic_tokens: frozenset[Token]
    document_tokens: tuple[Token, ...]


def index_entry(entry: KnowledgeEntry) -> IndexedEntry:
    keyword_tokens: set[Token] = set()
    for keyword in entry.keywords:
        keyword_tokens.update(normalize(keyword))
    return IndexedEntry(
        entry=entry,
        keyword_tokens=frozenset(keyword_tokens),
        raw_keywords=frozenset(k.lower() for k in entry.keywords),
        topic_tokens=frozenset(normalize(entry.matching_text)),
        document_tokens=tuple(normalize(entry.document_text)),
    )


def token_variants(token: Token) -> frozenset[Token]:
    """The token plus its single-word synonyms, stemmed like the index."""
    variants = {token}
    variants.update(stem(s) for s in synonyms_of(token) if " " not in s and "-" not in s)
    return frozenset(variants)


def query_words(text: str) -> list[str]:
    """Spelling-corrected, unstemmed content words: what exact keyword matching compares."""
    words = _WORD_RE.findall(correct_spelling(text))
    return [w for w in words if len(w) > 1 and w not in STOPWORDS]


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def position_weight(index: int) -> float:
    return max(1.0 - POSITION_DECAY * index, POSITION_FLOOR)


def semantic_score(query_tokens: Sequence[Token], indexed: IndexedEntry) -> Score:
    """0.7 cosine + 0.3 Jaccard of the non-keyword query tokens against the entry text.

    Keyword hits are left to ``relevance_score`` so that adding a keyword to
    a query can only add evidence, never dilute the cosine.
    """
    return token_similarity(unmatched_tokens(query_tokens, indexed), indexed.document_tokens)


def is_keyword_hit(token: Token, indexed: IndexedEntry) -> bool:
    return bool(token_variants(token) & indexed.keyword_tokens)


def unmatched_tokens(query_tokens: Sequence[Token], indexed: IndexedEntry) -> list[Token]:
    return [t for t in query_tokens if not is_keyword_hit(t, indexed)]


def keyword_hits(query_tokens: Sequence[Token], indexed: IndexedEntry) -> float:
    """Position-weighted count of query tokens hitting a keyword."""
    return sum(
        position_weight(i) for i, token in enumerate(query_tokens) if is_keyword_hit(token, indexed)
    )


def exact_hits(words: Sequence[str], indexed: IndexedEntry) -> int:
    return sum(1 for w in words if w in indexed.raw_keywords)


def fuzzy_hits(query_tokens: Sequence[Token], indexed: IndexedEntry, threshold: float) -> int:
    return sum(
        1
        for t in query_tokens
        if any(fuzzy_match_word(t, k, threshold) for k in indexed.keyword_tokens)
    )


def topic_hits(query_tokens: Sequence[Token], indexed: IndexedEntry) -> int:
    return sum(1 for t in query_tokens if token_variants(t) & indexed.topic_tokens)


def relevance_score(
    query_tokens: Sequence[Token],
    indexed: IndexedEntry,
    weights: ScoringWeights,
    semantic: Score | None = None,
    words: Sequence[str] | None = None,
) -> Score:
    """Semantic share plus a fixed amount per keyword/exact/fuzzy/topic match, clamped to [0, 1]."""
    if not query_tokens:
        return 0.0
    if semantic is None:
        semantic = semantic_score(query_tokens, indexed)
    exact_words = query_tokens if words is None else words
    raw = (
        weights.relevance_semantic * semantic
        + weights.relevance_keyword * keyword_hits(query_tokens, indexed)
        + weights.relevance_fuzzy * fuzzy_hits(query_tokens, indexed, weights.fuzzy_threshold)
        + weights.relevance_topic * topic_hits(query_tokens, indexed)
        + weights.relevance_exact * exact_hits(exact_words, indexed)
    )
    return clamp_unit(raw)


def entity_bonus(entities: EntityBag, entry: KnowledgeEntry, weights: ScoringWeights) -> Score:
    bonus = 0.0
    keywords = tuple(k.lower() for k in entry.keywords)
    if any(yt in kw for yt in entities.yarn_types for kw in keywords):
        bonus += weights.yarn_type_bonus
    if any(cert in kw for cert in entities.certifications for kw in keywords):
        bonus += weights.certification_bonus
    if entities.colors and entry.topic == "colors":
        bonus += weights.color_bonus
    return bonus


@dataclass(frozen=True)
class IntentTopicBonus:
    intent: IntentTag
    topic_terms: tuple[str, ...]
    bonus: float


# First matching row wins.
INTENT_TOPIC_BONUSES: tuple[IntentTopicBonus, ...] = (
    IntentTopicBonus(IntentTag.PURCHASE, ("order", "price"), 0.2),
    IntentTopicBonus(IntentTag.INFORMATION, ("company",), 0.15),
    IntentTopicBonus(IntentTag.SPECIFICATION, ("specification", "quality"), 0.25),
    IntentTopicBonus(IntentTag.COMPARISON, ("yarn",), 0.15),
    IntentTopicBonus(IntentTag.SHIPPING, ("shipping",), 0.25),
    IntentTopicBonus(IntentTag.SUSTAINABILITY, ("sustainability", "eco"), 0.25),
    IntentTopicBonus(IntentTag.SAMPLES, ("sample",), 0.25),
    IntentTopicBonus(IntentTag.CONTACT, ("contact",), 0.25),
    IntentTopicBonus(IntentTag.CANCELLATION, ("cancel", "return"), 0.25),
)


def intent_bonus(
    intent: IntentResult,
    entry: KnowledgeEntry,
    table: tuple[IntentTopicBonus, ...] = INTENT_TOPIC_BONUSES,
) -> Score:
    for row in table:
        if row.intent == intent.name and any(term in entry.topic for term in row.topic_terms):
            return row.bonus
    return 0.0


def context_bonus(last_topic: str | None, entry: KnowledgeEntry, weights: ScoringWeights) -> Score:
    return weights.context_bonus if last_topic is not None and last_topic == entry.topic else 0.0


_SUSTAINABLE_TOPIC_TERMS = ("sustainability", "recycled", "organic")


def preference_bonus(
    preferences: UserPreferences, entry: KnowledgeEntry, weights: ScoringWeights
) -> Score:
    bonus = 0.0
    if preferences.sustainability_focused and any(
        term in entry.topic for term in _SUSTAINABLE_TOPIC_TERMS
    ):
        bonus += weights.preference_bonus
    preferred = preferences.preferred_yarn_type
    if preferred and any(preferred.lower() in kw.lower() for kw in entry.keywords):
        bonus += weights.preference_bonus
    return bonus
