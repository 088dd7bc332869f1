"""Tests for the static knowledge base and its lookup tables."""

from datetime import datetime, timezone

import pytest

from yarnbot.domain.errors import UnknownTopicError
from yarnbot.domain.knowledge_base import (
    COMPARISON_RULES,
    DEFAULT_SUGGESTIONS,
    ENTRIES,
    FOLLOW_UP_SENTENCES,
    INTENT_SUGGESTIONS,
    YARN_PROFILES,
    KnowledgeBase,
    suggestions_for_intent,
)
from yarnbot.domain.models import (
    ConversationContext,
    IntentTag,
    KnowledgeEntry,
    StaticTemplate,
    TemplateContext,
    render_template,
)


def _at(hour: int, **context) -> TemplateContext:
    return TemplateContext(
        conversation=ConversationContext(**context),
        now=datetime(2025, 3, 10, hour, 0, tzinfo=timezone.utc),
    )


class TestKnowledgeBase:
    def test_ships_every_topic_once(self) -> None:
        kb = KnowledgeBase()
        assert len(kb) == 41
        assert len({e.topic for e in kb}) == 41
        assert kb.entries[0].topic == "products"

    def test_every_entry_has_keywords(self) -> None:
        assert all(entry.keywords for entry in ENTRIES)

    def test_get_unknown_topic_raises(self) -> None:
        kb = KnowledgeBase()
        with pytest.raises(UnknownTopicError) as exc:
            kb.get("unicorns")
        assert exc.value.topic == "unicorns"

    def test_find_and_contains(self) -> None:
        kb = KnowledgeBase()
        assert "price" in kb
        assert "unicorns" not in kb
        assert kb.find(None) is None
        assert kb.find("unicorns") is None
        assert kb.find("price") is kb.get("price")

    def test_duplicate_topics_rejected(self) -> None:
        entry = KnowledgeEntry(topic="dup", keywords=("x",), template=StaticTemplate("X."))
        with pytest.raises(ValueError, match="duplicate"):
            KnowledgeBase([entry, entry])


class TestGreeting:
    def test_time_of_day(self) -> None:
        greeting = KnowledgeBase().get("greeting").template
        assert render_template(greeting, _at(9)).startswith("Good morning! Welcome to KSP Yarns.")
        assert render_template(greeting, _at(14)).startswith("Good afternoon!")
        assert render_template(greeting, _at(20)).startswith("Good evening!")

    def test_known_name(self) -> None:
        greeting = KnowledgeBase().get("greeting").template
        text = render_template(greeting, _at(15, user_name="Priya"))
        assert text.startswith("Good afternoon, Priya! Welcome back to KSP Yarns.")

    def test_returning_visitor(self) -> None:
        greeting = KnowledgeBase().get("greeting").template
        text = render_template(greeting, _at(9, message_count=6))
        assert text == "Good morning! Great to see you again. What can I help you with today?"


def test_small_talk_depends_on_recent_topics():
    general = KnowledgeBase().get("general").template
    fresh = render_template(general, _at(9))
    again = render_template(general, _at(9, recent_topics=("general",)))
    assert fresh.startswith("I'm KSP's virtual assistant")
    assert again.startswith("I'm doing well")


def test_tables_are_consistent():
    for rule in COMPARISON_RULES:
        assert all(item in YARN_PROFILES for item in rule.items)
    kb = KnowledgeBase()
    assert all(topic in kb for topic in FOLLOW_UP_SENTENCES)


def test_suggestions_for_intent():
    assert suggestions_for_intent(IntentTag.PURCHASE) == INTENT_SUGGESTIONS[IntentTag.PURCHASE]
    assert suggestions_for_intent(IntentTag.GREETING) == DEFAULT_SUGGESTIONS
