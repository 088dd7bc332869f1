# yarnbot/domain/models.py
# Domain models must be pure (no I/O, no external libs)
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

MAX_RECENT_TOPICS = 5
MAX_HISTORY = 10


@dataclass(frozen=True)
class EntityBag:
    """
    Domain-specific entities found in one user message.

    - products:        generic product words (yarn, thread, fibre, ...)
    - yarn_types:      yarn families and spinning processes (cotton, open end, ...)
    - counts:          yarn counts such as "ne 40" or "count 20-30"
    - numbers:         numbers with an optional unit ("5 kg", "40")
    - dates:           "12/03/2025" or "12th march 2025" style dates
    - locations:       places the company operates from
    - colors:          color names
    - certifications:  certification labels (gots, grs, oeko-tex, iso ...)

    Every field keeps matches in rule-evaluation order; duplicates are allowed.
    """

    products: tuple[str, ...] = ()
    yarn_types: tuple[str, ...] = ()
    counts: tuple[str, ...] = ()
    numbers: tuple[str, ...] = ()
    dates: tuple[str, ...] = ()
    locations: tuple[str, ...] = ()
    colors: tuple[str, ...] = ()
    certifications: tuple[str, ...] = ()

    @staticmethod
    def empty() -> EntityBag:
        return EntityBag()

    def has_any(self) -> bool:
        return any(
            (
                self.products,
                self.yarn_types,
                self.counts,
                self.numbers,
                self.dates,
                self.locations,
                self.colors,
                self.certifications,
            )
        )


class IntentTag(str, Enum):
    GREETING = "greeting"
    FAREWELL = "farewell"
    INFORMATION = "information"
    PURCHASE = "purchase"
    COMPLAINT = "complaint"
    GRATITUDE = "gratitude"
    CANCELLATION = "cancellation"
    CONFIRMATION = "confirmation"
    NEGATION = "negation"
    COMPARISON = "comparison"
    SPECIFICATION = "specification"
    SHIPPING = "shipping"
    SUSTAINABILITY = "sustainability"
    SAMPLES = "samples"
    CONTACT = "contact"
    GENERAL = "general"


@dataclass(frozen=True)
class IntentResult:
    """Best intent, its runner-up and the top three raw scores."""

    name: IntentTag
    confidence: float
    secondary: IntentTag | None = None
    ranked: tuple[tuple[IntentTag, float], ...] = ()

    @staticmethod
    def general() -> IntentResult:
        return IntentResult(name=IntentTag.GENERAL, confidence=0.0)


@dataclass(frozen=True)
class Sentiment:
    score: int = 0
    label: str = "neutral"
    is_urgent: bool = False
    positive_count: int = 0
    negative_count: int = 0

    @property
    def is_negative(self) -> bool:
        return self.label == "negative"


@dataclass(frozen=True)
class UserPreferences:
    sustainability_focused: bool | None = None
    preferred_yarn_type: str | None = None
    usage: str | None = None
    price_conscious: bool | None = None
    quality_focused: bool | None = None

    def merged(self, other: UserPreferences | None) -> UserPreferences:
        """Overlay ``other`` on top of self; ``None`` never erases a known value."""
        if other is None:
            return self
        return UserPreferences(
            sustainability_focused=_pick(other.sustainability_focused, self.sustainability_focused),
            preferred_yarn_type=_pick(other.preferred_yarn_type, self.preferred_yarn_type),
            usage=_pick(other.usage, self.usage),
            price_conscious=_pick(other.price_conscious, self.price_conscious),
            quality_focused=_pick(other.quality_focused, self.quality_focused),
        )

    def to_dict(self) -> dict[str, Any]:
        raw = {
            "sustainabilityFocused": self.sustainability_focused,
            "preferredYarnType": self.preferred_yarn_type,
            "usage": self.usage,
            "priceConscious": self.price_conscious,
            "qualityFocused": self.quality_focused,
        }
        return {k: v for k, v in raw.items() if v is not None}

    @staticmethod
    def from_dict(data: Mapping[str, Any] | None) -> UserPreferences:
        if not isinstance(data, Mapping):
            return UserPreferences()
        return UserPreferences(
            sustainability_focused=_as_bool(data.get("sustainabilityFocused")),
            preferred_yarn_type=_as_str(data.get("preferredYarnType")),
            usage=_as_str(data.get("usage")),
            price_conscious=_as_bool(data.get("priceConscious")),
            quality_focused=_as_bool(data.get("qualityFocused")),
        )


@dataclass(frozen=True)
class HistoryEntry:
    topic: str
    timestamp: str


@dataclass(frozen=True)
class ConversationContext:
    """
    Per-session dialogue state. Owned by the caller and threaded through turns.

    - recent_topics:         most recent first, no duplicates, at most 5
    - conversation_history:  oldest first, at most 10
    - message_count:         never decreases within a session
    """

    last_topic: str | None = None
    recent_topics: tuple[str, ...] = ()
    message_count: int = 0
    user_name: str | None = None
    preferences: UserPreferences = field(default_factory=UserPreferences)
    conversation_history: tuple[HistoryEntry, ...] = ()
    last_interaction: str | None = None
    session_started: str | None = None

    @staticmethod
    def new(now: datetime | None = None) -> ConversationContext:
        return ConversationContext(session_started=now.isoformat() if now else None)

    def with_updates(self, **changes: Any) -> ConversationContext:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "lastTopic": self.last_topic,
            "recentTopics": list(self.recent_topics),
            "messageCount": self.message_count,
            "userName": self.user_name,
            "preferences": self.preferences.to_dict(),
            "conversationHistory": [
                {"topic": h.topic, "timestamp": h.timestamp} for h in self.conversation_history
            ],
            "lastInteraction": self.last_interaction,
            "sessionStarted": self.session_started,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any] | None) -> ConversationContext:
        """Rebuild a context from its stored form. Malformed parts fall back to defaults."""
        if not isinstance(data, Mapping):
            return ConversationContext()

        recent: list[str] = []
        raw_recent = data.get("recentTopics")
        if isinstance(raw_recent, list | tuple):
            for topic in raw_recent:
                if isinstance(topic, str) and topic not in recent:
                    recent.append(topic)

        history: list[HistoryEntry] = []
        raw_history = data.get("conversationHistory")
        if isinstance(raw_history, list | tuple):
            for item in raw_history:
                if isinstance(item, Mapping) and isinstance(item.get("topic"), str):
                    history.append(HistoryEntry(item["topic"], str(item.get("timestamp") or "")))

        count = data.get("messageCount")
        return ConversationContext(
            last_topic=_as_str(data.get("lastTopic")),
            recent_topics=tuple(recent[:MAX_RECENT_TOPICS]),
            message_count=count if isinstance(count, int) and count > 0 else 0,
            user_name=_as_str(data.get("userName")),
            preferences=UserPreferences.from_dict(data.get("preferences")),
            conversation_history=tuple(history[-MAX_HISTORY:]),
            last_interaction=_as_str(data.get("lastInteraction")),
            session_started=_as_str(data.get("sessionStarted")),
        )


@dataclass(frozen=True)
class TemplateContext:
    """What a dynamic response template may look at when rendering."""

    conversation: ConversationContext
    now: datetime


@dataclass(frozen=True)
class StaticTemplate:
    text: str


@dataclass(frozen=True)
class DynamicTemplate:
    render: Callable[[TemplateContext], str]


ResponseTemplate = StaticTemplate | DynamicTemplate


def render_template(template: ResponseTemplate, ctx: TemplateContext) -> str:
    match template:
        case StaticTemplate(text=text):
            return text
        case DynamicTemplate(render=render):
            return render(ctx)
    raise TypeError(f"unsupported template: {template!r}")


@dataclass(frozen=True)
class KnowledgeEntry:
    """A knowledge-base topic: keywords to match on and the reply to give."""

    topic: str
    keywords: tuple[str, ...]
    template: ResponseTemplate
    follow_up_questions: tuple[str, ...] = ()
    text: str = ""
    page: str | None = None

    @property
    def static_text(self) -> str:
        return self.template.text if isinstance(self.template, StaticTemplate) else ""

    @property
    def matching_text(self) -> str:
        """Keywords, descriptive text and static reply joined for topic-token overlap."""
        parts = (" ".join(self.keywords), self.text, self.static_text)
        return " ".join(part for part in parts if part)

    @property
    def document_text(self) -> str:
        """Descriptive text the semantic score compares against (keywords excluded)."""
        return " ".join(part for part in (self.text, self.static_text) if part)


@dataclass(frozen=True)
class TopicScore:
    topic: str
    score: float
    semantic: float = 0.0
    relevance: float = 0.0
    entity_bonus: float = 0.0
    intent_bonus: float = 0.0
    context_bonus: float = 0.0
    preference_bonus: float = 0.0


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: float
    stock: int
    category: str = ""
    description: str = ""


def _pick(new: Any, old: Any) -> Any:
    return old if new is None else new


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _as_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None
