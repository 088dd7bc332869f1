"""Domain tests for topic scoring, ranking and the confidence gate."""

import pytest

from yarnbot.domain.knowledge_base import KnowledgeBase
from yarnbot.domain.models import (
    ConversationContext,
    EntityBag,
    IntentResult,
    IntentTag,
    KnowledgeEntry,
    StaticTemplate,
    TopicScore,
    UserPreferences,
)
from yarnbot.domain.services.entities import extract_entities
from yarnbot.domain.services.intents import detect_intent
from yarnbot.domain.services.normalization import correct_spelling, normalize
from yarnbot.domain.services.ranking import (
    ConfidenceBand,
    adaptive_threshold,
    classify_confidence,
    score_entry,
    score_topics,
    sort_by_scores_desc,
)
from yarnbot.domain.services.relevance_scoring import (
    clamp_unit,
    context_bonus,
    entity_bonus,
    exact_hits,
    index_entry,
    keyword_hits,
    position_weight,
    preference_bonus,
    query_words,
    relevance_score,
    semantic_score,
    unmatched_tokens,
)
from yarnbot.domain.value_objects import ScoringWeights

WEIGHTS = ScoringWeights()

ORGANIC = KnowledgeEntry(
    topic="organic_cotton",
    keywords=("cotton", "yarn", "organic"),
    template=StaticTemplate("We sell organic cotton yarn."),
    text="Organic cotton yarn for apparel.",
)


def _entry(topic: str, *keywords: str, text: str = "Details follow.") -> KnowledgeEntry:
    return KnowledgeEntry(topic=topic, keywords=keywords, template=StaticTemplate(text))


class TestRelevance:
    def test_clamp_and_position_weight(self) -> None:
        assert clamp_unit(-1.0) == 0.0
        assert clamp_unit(2.0) == 1.0
        assert clamp_unit(0.4) == 0.4
        assert position_weight(0) == 1.0
        assert position_weight(1) == pytest.approx(0.95)
        assert position_weight(40) == 0.5

    def test_query_words_are_corrected_but_unstemmed(self) -> None:
        assert query_words("Cancle my oredr please") == ["cancel", "order", "please"]
        assert query_words("") == []

    def test_keyword_hits_are_position_weighted(self) -> None:
        indexed = index_entry(ORGANIC)
        assert keyword_hits(["cotton", "price"], indexed) == pytest.approx(1.0)
        assert keyword_hits(["price", "cotton"], indexed) == pytest.approx(0.95)
        assert keyword_hits(["cotton", "organic"], indexed) == pytest.approx(1.95)
        assert keyword_hits([], indexed) == 0.0

    def test_keyword_hits_count_synonyms(self) -> None:
        indexed = index_entry(ORGANIC)
        assert keyword_hits(["thread"], indexed) == 1.0

    def test_exact_hits_use_raw_keywords(self) -> None:
        indexed = index_entry(_entry("cancellation", "cancel"))
        assert exact_hits(["cancel", "order"], indexed) == 1
        assert exact_hits([], indexed) == 0

    def test_semantic_score_ignores_keyword_hits(self) -> None:
        indexed = index_entry(ORGANIC)
        assert unmatched_tokens(["cotton", "apparel"], indexed) == ["apparel"]
        assert semantic_score(["cotton", "apparel"], indexed) == semantic_score(
            ["apparel"], indexed
        )
        assert semantic_score(["cotton"], indexed) == 0.0

    def test_relevance_is_bounded(self) -> None:
        for entry in KnowledgeBase():
            value = relevance_score(["cotton", "yarn", "price"], index_entry(entry), WEIGHTS)
            assert 0.0 <= value <= 1.0
        assert relevance_score([], index_entry(ORGANIC), WEIGHTS) == 0.0

    def test_relevance_is_monotonic_in_matching_tokens(self) -> None:
        """Swapping a non-matching token for a matching one never lowers relevance."""
        indexed = index_entry(ORGANIC)
        weaker = relevance_score(["cotton", "zzz"], indexed, WEIGHTS)
        stronger = relevance_score(["cotton", "organic"], indexed, WEIGHTS)
        assert stronger > weaker

    def test_appending_a_keyword_never_lowers_relevance(self) -> None:
        indexed = index_entry(ORGANIC)
        base = relevance_score(["cotton", "apparel"], indexed, WEIGHTS)
        longer = relevance_score(["cotton", "apparel", "organic"], indexed, WEIGHTS)
        assert longer > base

    def test_appending_a_keyword_never_lowers_the_topic_score(self) -> None:
        """Checked for every knowledge entry with two plain one-word keywords."""
        checked = 0
        for entry in KnowledgeBase():
            plain = [k for k in entry.keywords if k.isalpha() and normalize(k)]
            if len(plain) < 2:
                continue
            for prefix in ("", "soft "):
                shorter = f"{prefix}{plain[0]}"
                longer = f"{shorter} {plain[1]}"
                before, after = (
                    score_entry(
                        normalize(text),
                        entry,
                        EntityBag(),
                        IntentResult.general(),
                        ConversationContext(),
                        WEIGHTS,
                        query_words(text),
                    )
                    for text in (shorter, longer)
                )
                assert after.score >= before.score, (entry.topic, shorter, longer)
                assert after.relevance >= before.relevance
            checked += 1
        assert checked >= 10


class TestBonuses:
    def test_entity_bonus(self) -> None:
        entry = _entry("organic", "organic cotton", "gots certified")
        bag = EntityBag(yarn_types=("cotton",), certifications=("gots",))
        assert entity_bonus(bag, entry, WEIGHTS) == pytest.approx(0.45)
        assert entity_bonus(EntityBag(colors=("red",)), _entry("colors", "dye"), WEIGHTS) == 0.15
        assert entity_bonus(EntityBag(), entry, WEIGHTS) == 0.0

    def test_context_bonus(self) -> None:
        entry = _entry("price", "price")
        assert context_bonus("price", entry, WEIGHTS) == 0.05
        assert context_bonus(None, entry, WEIGHTS) == 0.0

    def test_preference_bonus(self) -> None:
        entry = _entry("sustainability", "organic cotton")
        prefs = UserPreferences(sustainability_focused=True, preferred_yarn_type="cotton")
        assert preference_bonus(prefs, entry, WEIGHTS) == pytest.approx(0.2)
        assert preference_bonus(UserPreferences(), entry, WEIGHTS) == 0.0

    def test_intent_bonus_needs_some_lexical_match(self) -> None:
        entry = _entry("order", "order", text="Orders ship weekly.")
        purchase = IntentResult(name=IntentTag.PURCHASE, confidence=0.8)
        ctx = ConversationContext()
        untouched = score_entry(["zzz"], entry, EntityBag(), purchase, ctx, WEIGHTS)
        touched = score_entry(["order"], entry, EntityBag(), purchase, ctx, WEIGHTS)
        assert untouched.intent_bonus == 0.0
        assert untouched.score == 0.0
        assert touched.intent_bonus == 0.2
        assert touched.score > touched.intent_bonus


class TestRanking:
    def test_misspelled_cancellation_ranks_first_with_high_confidence(self) -> None:
        query = "cancle my oredr"
        scores = score_topics(
            query,
            extract_entities(correct_spelling(query)),
            detect_intent(query),
            KnowledgeBase(),
            ConversationContext(),
        )
        assert scores[0].topic == "cancellation"
        assert all(a.score >= b.score for a, b in zip(scores, scores[1:]))
        assert classify_confidence(scores) is ConfidenceBand.HIGH

    def test_ties_keep_knowledge_base_order(self) -> None:
        kb = [_entry("first", "alpha"), _entry("second", "beta")]
        scores = score_topics(
            "zzz qqq", EntityBag(), IntentResult.general(), kb, ConversationContext()
        )
        assert [s.topic for s in scores] == ["first", "second"]
        assert all(s.score == 0.0 for s in scores)

    def test_empty_query_scores_zero_everywhere(self) -> None:
        scores = score_topics(
            "", EntityBag(), IntentResult.general(), KnowledgeBase(), ConversationContext()
        )
        assert len(scores) == 41
        assert all(s.score == 0.0 for s in scores)
        assert classify_confidence(scores) is ConfidenceBand.LOW


class TestConfidenceGate:
    def test_adaptive_threshold(self) -> None:
        clear = [TopicScore("a", 0.5), TopicScore("b", 0.1)]
        close = [TopicScore("a", 0.3), TopicScore("b", 0.25)]
        assert adaptive_threshold(clear) == WEIGHTS.threshold_clear
        assert adaptive_threshold(close) == WEIGHTS.threshold_ambiguous
        assert adaptive_threshold([]) == WEIGHTS.threshold_ambiguous

    @pytest.mark.parametrize(
        ("values", "band"),
        [
            ([0.3, 0.25], ConfidenceBand.HIGH),
            ([0.2], ConfidenceBand.HIGH),
            ([0.2, 0.19], ConfidenceBand.MEDIUM),
            ([0.05], ConfidenceBand.LOW),
            ([], ConfidenceBand.LOW),
        ],
    )
    def test_classify_confidence(self, values, band) -> None:
        scores = [TopicScore(f"t{i}", v) for i, v in enumerate(values)]
        assert classify_confidence(scores) is band



def test_sort_by_scores_desc_is_stable():
    assert sort_by_scores_desc(["a", "b", "c"], [0.2, 0.9, 0.5]) == ["b", "c", "a"]
    assert sort_by_scores_desc(["x", "y"], [0.1, 0.1]) == ["x", "y"]
