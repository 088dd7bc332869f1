"""Tests for domain models and the caller-side context format."""

from datetime import datetime, timezone

import pytest

from yarnbot.domain.models import (
    MAX_RECENT_TOPICS,
    ConversationContext,
    DynamicTemplate,
    EntityBag,
    HistoryEntry,
    KnowledgeEntry,
    StaticTemplate,
    UserPreferences,
    render_template,
)


def test_context_round_trips_through_dict():
    ctx = ConversationContext(
        last_topic="price",
        recent_topics=("price", "products"),
        message_count=3,
        user_name="Priya",
        preferences=UserPreferences(sustainability_focused=True, preferred_yarn_type="organic"),
        conversation_history=(
            HistoryEntry("products", "2025-03-10T09:00:00+05:30"),
            HistoryEntry("price", "2025-03-10T09:01:00+05:30"),
        ),
        last_interaction="2025-03-10T09:01:00+05:30",
        session_started="2025-03-10T09:00:00+05:30",
    )
    data = ctx.to_dict()
    assert data["recentTopics"] == ["price", "products"]
    assert data["preferences"] == {"sustainabilityFocused": True, "preferredYarnType": "organic"}
    assert ConversationContext.from_dict(data) == ctx


def test_malformed_context_degrades_to_defaults():
    data = {
        "recentTopics": "price",
        "messageCount": -3,
        "conversationHistory": [1, {"topic": 2}],
        "userName": 5,
        "preferences": "eco",
    }
    assert ConversationContext.from_dict(data) == ConversationContext()
    assert ConversationContext.from_dict(None) == ConversationContext()
    assert ConversationContext.from_dict([]) == ConversationContext()  # type: ignore[arg-type]


def test_from_dict_enforces_recent_topic_bounds():
    data = {"recentTopics": ["a", "b", "a", "c", "d", "e", "f", "g"]}
    ctx = ConversationContext.from_dict(data)
    assert ctx.recent_topics == ("a", "b", "c", "d", "e")
    assert len(ctx.recent_topics) == MAX_RECENT_TOPICS


def test_new_context_stamps_session_start():
    now = datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc)
    assert ConversationContext.new(now).session_started == now.isoformat()
    assert ConversationContext.new().session_started is None


def test_preferences_merge_never_erases():
    base = UserPreferences(usage="apparel", price_conscious=True)
    merged = base.merged(UserPreferences(preferred_yarn_type="cotton"))
    assert merged == UserPreferences(
        usage="apparel", price_conscious=True, preferred_yarn_type="cotton"
    )
    assert base.merged(None) is base


def test_render_template_dispatch():
    static = StaticTemplate("Hello.")
    dynamic = DynamicTemplate(lambda ctx: "rendered")
    assert render_template(static, None) == "Hello."  # type: ignore[arg-type]
    assert render_template(dynamic, None) == "rendered"  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        render_template("Hello.", None)  # type: ignore[arg-type]


def test_knowledge_entry_texts():
    entry = KnowledgeEntry(
        topic="colors",
        keywords=("color", "shade"),
        template=StaticTemplate("We dye to order."),
        text="Pantone matching available.",
    )
    assert entry.static_text == "We dye to order."
    assert entry.matching_text == "color shade Pantone matching available. We dye to order."
    assert entry.document_text == "Pantone matching available. We dye to order."

    dynamic = KnowledgeEntry(topic="hi", keywords=("hi",), template=DynamicTemplate(str))
    assert dynamic.static_text == ""
    assert dynamic.document_text == ""


def test_entity_bag_has_any():
    assert not EntityBag.empty().has_any()
    assert EntityBag(colors=("red",)).has_any()
