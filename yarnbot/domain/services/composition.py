# yarnbot/domain/services/composition.py
# Pure domain services: no I/O, no external libraries. Randomness is injected.
"""Response composition.

``compose`` is a small state machine over the confidence band:

    HIGH    render the winning entry, then enrich it (empathy, urgency,
            yarn types, counts/colors/certifications, name, follow-up, "Yes!")
    MEDIUM  ask a clarifying question, or hint at the tentative topic
    LOW     cancellation rescue, new-visitor welcome, then entity-aware,
            context-aware and finally generic fallbacks

FAQ answers, comparisons and the fixed-intent short-circuits (greeting,
farewell, gratitude, complaint) run before scoring and live here too.
Every user-facing string goes through the injected ``translate``.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, TypeVar

from yarnbot.domain.knowledge_base import (
    COMPANY_EMAIL,
    COMPANY_PHONE,
    COMPARISON_RULES,
    COMPARISON_SUGGESTIONS,
    COMPLAINT_SUGGESTIONS,
    FAQ_ENTRIES,
    FAQ_SUGGESTIONS,
    FOLLOW_UP_SENTENCES,
    GRATITUDE_VARIANTS,
    YARN_PROFILES,
    ComparisonRule,
    FaqEntry,
    KnowledgeBase,
    suggestions_for_intent,
)
from yarnbot.domain.models import (
    ConversationContext,
    EntityBag,
    IntentResult,
    IntentTag,
    KnowledgeEntry,
    Product,
    Sentiment,
    StaticTemplate,
    TemplateContext,
    TopicScore,
    render_template,
)
from yarnbot.domain.services.dialogue import is_new_visitor
from yarnbot.domain.services.entities import extract_entities
from yarnbot.domain.services.intents import detect_intent, detect_question_type
from yarnbot.domain.services.normalization import correct_spelling
from yarnbot.domain.services.patterns import search
from yarnbot.domain.services.ranking import ConfidenceBand
from yarnbot.domain.services.sentiment import analyze_sentiment

T = TypeVar("T")

NAMESPACE = "chatbot"
SHORT_CIRCUIT_CONFIDENCE = 0.6
COMPLAINT_CONFIDENCE = 0.5
MAX_CLARIFY_TOPICS = 3

Translate = Callable[[str, str], str]


class Randomness(Protocol):
    def random(self) -> float: ...

    def choice(self, options: Sequence[T]) -> T: ...


def identity_translate(text: str, namespace: str = NAMESPACE) -> str:
    return text


@dataclass(frozen=True)
class ComposedReply:
    """Reply text plus the topic to record in the context (None for non-answers)."""

    text: str
    suggested_questions: tuple[str, ...] = ()
    topic: str | None = None


@dataclass(frozen=True)
class TurnAnalysis:
    """Everything derived from one raw user message before scoring."""

    text: str
    corrected: str
    entities: EntityBag
    intent: IntentResult
    sentiment: Sentiment
    question_type: str


def analyze_turn(text: str) -> TurnAnalysis:
    raw = text if isinstance(text, str) else ""
    corrected = correct_spelling(raw)
    return TurnAnalysis(
        text=raw,
        corrected=corrected,
        entities=extract_entities(corrected),
        intent=detect_intent(raw),
        sentiment=analyze_sentiment(raw),
        question_type=detect_question_type(raw),
    )


def _humanize(topic: str) -> str:
    return topic.replace("_", " ")


def _tr(translate: Translate, texts: Sequence[str]) -> tuple[str, ...]:
    return tuple(translate(t, NAMESPACE) for t in texts)


# ---------------------------------------------------------------------------
# Pre-scoring paths
# ---------------------------------------------------------------------------


def match_faq(text: str) -> FaqEntry | None:
    for faq in FAQ_ENTRIES:
        if any(search(p, text) for p in faq.patterns):
            return faq
    return None


def faq_reply(faq: FaqEntry, translate: Translate = identity_translate) -> ComposedReply:
    return ComposedReply(
        text=translate(faq.answer, NAMESPACE),
        suggested_questions=_tr(translate, FAQ_SUGGESTIONS),
        topic="faq",
    )


def match_comparison(text: str) -> ComparisonRule | None:
    for rule in COMPARISON_RULES:
        if any(search(p, text) for p in rule.patterns):
            return rule
    return None


def comparison_reply(
    rule: ComparisonRule, translate: Translate = identity_translate
) -> ComposedReply:
    first, second = (YARN_PROFILES[key] for key in rule.items)
    lines = [f"Here's how {first.name.lower()} and {second.name.lower()} yarns compare:", ""]
    for profile in (first, second):
        lines.append(f"{profile.name}:")
        lines.extend(f"• {point}" for point in profile.strengths)
        lines.append(f"Best for: {profile.best_for}")
        lines.append("")
    lines.append(f"Recommendation: {rule.recommendation}")
    return ComposedReply(
        text=translate("\n".join(lines), NAMESPACE),
        suggested_questions=_tr(translate, COMPARISON_SUGGESTIONS),
        topic="comparison",
    )


COMPLAINT_TEXT = (
    "I'm sorry to hear you're experiencing issues. Let me help you resolve this. "
    "Could you please tell me more about the issue? You can also contact our support "
    f"team at {COMPANY_EMAIL} or {COMPANY_PHONE} for immediate assistance."
)


def quick_reply(
    analysis: TurnAnalysis,
    kb: KnowledgeBase,
    tctx: TemplateContext,
    rng: Randomness,
    translate: Translate = identity_translate,
) -> ComposedReply | None:
    """Fixed-intent short-circuits; None when the turn should go on to scoring."""
    intent = analysis.intent
    if intent.confidence > SHORT_CIRCUIT_CONFIDENCE:
        if intent.name is IntentTag.GREETING and "greeting" in kb:
            return render_entry(kb.get("greeting"), tctx, translate)
        if intent.name is IntentTag.FAREWELL and "goodbye" in kb:
            return render_entry(kb.get("goodbye"), tctx, translate)
        if intent.name is IntentTag.GRATITUDE and "thanks" in kb:
            thanks = kb.get("thanks")
            pool = (render_template(thanks.template, tctx), *GRATITUDE_VARIANTS)
            return ComposedReply(
                text=translate(rng.choice(pool), NAMESPACE),
                suggested_questions=_tr(translate, thanks.follow_up_questions),
                topic=thanks.topic,
            )
    if (
        intent.name is IntentTag.COMPLAINT
        and intent.confidence > COMPLAINT_CONFIDENCE
        and analysis.sentiment.is_negative
    ):
        return ComposedReply(
            text=translate(COMPLAINT_TEXT, NAMESPACE),
            suggested_questions=_tr(translate, COMPLAINT_SUGGESTIONS),
            topic="complaint",
        )
    return None


def render_entry(
    entry: KnowledgeEntry, tctx: TemplateContext, translate: Translate = identity_translate
) -> ComposedReply:
    return ComposedReply(
        text=translate(render_template(entry.template, tctx), NAMESPACE),
        suggested_questions=_tr(translate, entry.follow_up_questions),
        topic=entry.topic,
    )


# ---------------------------------------------------------------------------
# HIGH band enrichment
# ---------------------------------------------------------------------------

EMPATHY_PHRASES: tuple[str, ...] = (
    "I understand your concern. ",
    "I'm sorry to hear that. ",
    "I appreciate you bringing this to our attention. ",
)
URGENCY_PREFIX = "I understand this is urgent. "
RETURNING_PREFIX = "Great to continue our conversation! "

NAME_CHANCE = 0.6
RETURNING_CHANCE = 0.8
FOLLOW_UP_CHANCE = 0.7
RETURNING_AFTER = 10
FOLLOW_UP_AFTER = 2

_PRODUCT_PHRASE = re.compile(r"\b(our yarns|our products|yarns|products)\b", re.IGNORECASE)
_FIRST_SENTENCE_END = re.compile(r"\.\s")
_YES_NO_QUERY = r"\b(can|could|do|does|is|are|will|would)\b.*\?"
_AFFIRMING = r"\b(offer|provide|have|available|yes|certainly|absolutely)\b"


def enrich(
    text: str,
    analysis: TurnAnalysis,
    context: ConversationContext,
    rng: Randomness,
    translate: Translate = identity_translate,
) -> str:
    """Personalize a rendered answer. Steps run in a fixed order; some are random draws."""
    entities = analysis.entities
    sentiment = analysis.sentiment

    if sentiment.is_negative:
        text = translate(rng.choice(EMPATHY_PHRASES), NAMESPACE) + text
    if sentiment.is_urgent:
        text = translate(URGENCY_PREFIX, NAMESPACE) + text

    if entities.yarn_types and entities.yarn_types[0].lower() not in text.lower():
        joined = " and ".join(entities.yarn_types)
        text = _PRODUCT_PHRASE.sub(lambda m: f"our {joined} {m.group(1)}", text, count=1)

    if entities.counts:
        counts = ", ".join(entities.counts)
        if counts not in text:
            text += translate(f" We offer these in various counts including {counts}.", NAMESPACE)
    if entities.colors and "color" not in text.lower():
        colors = ", ".join(entities.colors)
        text += translate(f" We offer various color options including {colors}.", NAMESPACE)
    if entities.certifications:
        certs = ", ".join(entities.certifications).upper()
        if certs.lower() not in text.lower():
            text += translate(f" Our products carry {certs} certifications.", NAMESPACE)

    if context.user_name and rng.random() > NAME_CHANCE and "." in text:
        text = _FIRST_SENTENCE_END.sub(f", {context.user_name}. ", text, count=1)

    if (
        context.message_count > RETURNING_AFTER
        and "returning" not in text
        and rng.random() > RETURNING_CHANCE
    ):
        text = translate(RETURNING_PREFIX, NAMESPACE) + text

    follow_up = FOLLOW_UP_SENTENCES.get(context.last_topic or "")
    if (
        follow_up
        and context.message_count > FOLLOW_UP_AFTER
        and not text.endswith("?")
        and rng.random() > FOLLOW_UP_CHANCE
    ):
        text += translate(follow_up, NAMESPACE)

    if (
        analysis.question_type == "yes-no"
        and not text.startswith(("Yes", "No"))
        and search(_YES_NO_QUERY, analysis.text)
        and search(_AFFIRMING, text)
    ):
        text = translate("Yes! ", NAMESPACE) + text
    return text


# ---------------------------------------------------------------------------
# MEDIUM / LOW band texts
# ---------------------------------------------------------------------------

YARN_TYPE_QUESTION = (
    "What type of yarn are you interested in? We offer cotton, polyester, blended, "
    "and specialty yarns."
)
COUNT_QUESTION = "What yarn count (Ne) are you looking for?"
NEW_VISITOR_TEXT = (
    "Welcome to KSP Yarns! We're a leading manufacturer of high-quality yarns with a focus "
    "on sustainability. How can I help you today?"
)
CAPABILITY_MENU = (
    "I'd be happy to help! Could you please specify what you're looking for? I can assist "
    "with:\n\n• Yarn products (cotton, polyester, blends)\n• Pricing and ordering\n"
    "• Shipping information\n• Quality certifications\n• Sustainability practices\n\n"
    "Just let me know your requirements!"
)
UNKNOWN_TOPIC_TEXT = (
    "I'm not sure I have information about that. Could you please ask something else?"
)
CANCELLATION_RESCUE = r"canc|cncl|cansl|ordr|orer|oredr|refun"


def clarifying_question(candidates: Sequence[TopicScore], entities: EntityBag) -> str | None:
    named = [c.topic for c in candidates if c.score > 0][:MAX_CLARIFY_TOPICS]
    if len(named) > 1:
        topics = ", ".join(_humanize(t) for t in named)
        question = f"I found information about {topics}. Which one interests you most?"
        if not entities.yarn_types:
            question = f"{question} {YARN_TYPE_QUESTION}"
        return question
    if not entities.yarn_types:
        return YARN_TYPE_QUESTION
    if entities.products and not entities.counts:
        return COUNT_QUESTION
    return None


def _first_sentence(entry: KnowledgeEntry) -> str:
    if isinstance(entry.template, StaticTemplate):
        return entry.template.text.split(".")[0] + "."
    return _humanize(entry.topic)


def entity_fallback(entities: EntityBag) -> str:
    yarns = ", ".join(entities.yarn_types) or "specific"
    counts = ", ".join(entities.counts)
    count_part = f" (counts: {counts})" if counts else ""
    return (
        f"I see you're interested in {yarns} yarns{count_part}. To give you the best "
        "information, please let me know:\n• Required yarn count (Ne)\n• Quantity needed\n"
        "• Delivery destination\n• Any specific certifications (GOTS, GRS, etc.)\n\n"
        "I can then provide detailed pricing and availability."
    )


def context_fallback(last_topic: str) -> str:
    return (
        "I'm not quite sure what you're asking. Were you still interested in "
        f"{_humanize(last_topic)}? Or try asking about:\n• Our yarn products and "
        "specifications\n• Pricing and bulk orders\n• Shipping and delivery\n"
        "• Quality certifications"
    )


def unknown_topic_reply(translate: Translate = identity_translate) -> ComposedReply:
    return ComposedReply(
        text=translate(UNKNOWN_TOPIC_TEXT, NAMESPACE),
        suggested_questions=_tr(translate, suggestions_for_intent(IntentTag.GENERAL)),
        topic=None,
    )


def compose(
    band: ConfidenceBand,
    candidates: Sequence[TopicScore],
    analysis: TurnAnalysis,
    context: ConversationContext,
    kb: KnowledgeBase,
    rng: Randomness,
    now: datetime,
    translate: Translate = identity_translate,
) -> ComposedReply:
    """Turn a scored query into a reply.

    Raises:
        UnknownTopicError: If a candidate topic is missing from ``kb``
    """
    tctx = TemplateContext(conversation=context, now=now)

    if band is ConfidenceBand.HIGH:
        entry = kb.get(candidates[0].topic)
        rendered = translate(render_template(entry.template, tctx), NAMESPACE)
        if isinstance(entry.template, StaticTemplate):
            rendered = enrich(rendered, analysis, context, rng, translate)
        follow_ups = entry.follow_up_questions or suggestions_for_intent(analysis.intent.name)
        return ComposedReply(rendered, _tr(translate, follow_ups), entry.topic)

    if band is ConfidenceBand.MEDIUM:
        entry = kb.get(candidates[0].topic)
        question = clarifying_question(candidates, analysis.entities)
        if question is None:
            question = (
                f"I think you're asking about {_humanize(entry.topic)}. {_first_sentence(entry)} "
                "Could you please provide more details like yarn type, count, or quantity so I "
                "can give you a more precise answer?"
            )
        return ComposedReply(
            translate(question, NAMESPACE), _tr(translate, entry.follow_up_questions)
        )

    return _low_confidence(analysis, context, kb, translate)


def _low_confidence(
    analysis: TurnAnalysis,
    context: ConversationContext,
    kb: KnowledgeBase,
    translate: Translate,
) -> ComposedReply:
    if "cancellation" in kb and search(CANCELLATION_RESCUE, analysis.text.lower()):
        entry = kb.get("cancellation")
        return ComposedReply(
            translate(entry.static_text or UNKNOWN_TOPIC_TEXT, NAMESPACE),
            _tr(translate, entry.follow_up_questions),
            entry.topic,
        )
    if is_new_visitor(analysis.text):
        return ComposedReply(translate(NEW_VISITOR_TEXT, NAMESPACE), (), "greeting")

    suggestions = _tr(translate, suggestions_for_intent(analysis.intent.name))
    entities = analysis.entities
    if entities.yarn_types or entities.counts:
        return ComposedReply(translate(entity_fallback(entities), NAMESPACE), suggestions)

    last = kb.find(context.last_topic)
    if last is not None and last.follow_up_questions:
        return ComposedReply(translate(context_fallback(last.topic), NAMESPACE), suggestions)

    return ComposedReply(translate(CAPABILITY_MENU, NAMESPACE), suggestions)


# ---------------------------------------------------------------------------
# Live catalog
# ---------------------------------------------------------------------------

CATALOG_TOPICS: frozenset[str] = frozenset(
    {"products", "price", "cotton_yarns", "polyester_yarns", "blended_yarns", "specialty_yarns"}
)


def catalog_summary(products: Sequence[Product], translate: Translate = identity_translate) -> str:
    """One sentence listing in-stock products; empty when there is nothing to show."""
    listed = [p for p in products if p.stock > 0]
    if not listed:
        return ""
    items = "; ".join(f"{p.name} (₹{p.price:,.2f}, {p.stock} in stock)" for p in listed)
    return translate(f" Currently available: {items}.", NAMESPACE)
