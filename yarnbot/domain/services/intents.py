# yarnbot/domain/services/intents.py
# Pure domain services: no I/O, deterministic, no external libraries.
"""Rule-table intent classification.

Each ``IntentRule`` scores independently:

    final = priority (if any pattern matched)
          + min(0.5 * keyword hits, 2)
          + 1 (if more than one pattern matched)

Confidence is ``min(final / 12, 1)``. Rules are ranked by a stable
descending sort, so on equal scores the rule declared first wins.
"""

from __future__ import annotations

from dataclasses import dataclass

from yarnbot.domain.models import IntentResult, IntentTag
from yarnbot.domain.services.normalization import correct_spelling
from yarnbot.domain.services.patterns import search

CONFIDENCE_SCALE = 12.0
KEYWORD_WEIGHT = 0.5
KEYWORD_CAP = 2.0
MULTI_MATCH_BONUS = 1.0


@dataclass(frozen=True)
class IntentRule:
    tag: IntentTag
    patterns: tuple[str, ...]
    priority: float
    keywords: tuple[str, ...] = ()

    def score(self, text: str) -> float:
        matched = sum(1 for p in self.patterns if search(p, text))
        pattern_score = self.priority if matched else 0.0
        hits = sum(1 for kw in self.keywords if kw in text)
        keyword_bonus = min(KEYWORD_WEIGHT * hits, KEYWORD_CAP)
        multi = MULTI_MATCH_BONUS if matched > 1 else 0.0
        return pattern_score + keyword_bonus + multi


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        IntentTag.GREETING,
        (
            r"^(hi|hello|hey|greetings|good morning|good afternoon|good evening"
            r"|howdy|sup|hiya|yo)\b",
            r"^(what'?s up|what is up|how are you|how'?s it going)",
        ),
        10,
        ("hello", "hi", "hey", "morning", "afternoon", "evening"),
    ),
    IntentRule(
        IntentTag.FAREWELL,
        (
            r"^(bye|goodbye|see you|farewell|have a good day|talk to you later"
            r"|catch you later|take care)\b",
            r"\b(gotta go|got to go|leaving now|signing off)\b",
        ),
        10,
        ("bye", "goodbye", "farewell", "later"),
    ),
    IntentRule(
        IntentTag.INFORMATION,
        (
            r"^(what|how|which|where|when|why|who|can you tell)\b",
            r"tell me (about|more)|can you explain|i need to know|i want to know"
            r"|i'm looking for|looking for",
            r"about your company|about ksp|company details|company information",
            r"do you (have|offer|provide|sell|make|manufacture)",
            r"\b(learn|know|understand|find out|discover)\b.*\b(about|more)\b",
        ),
        8,
        ("what", "how", "tell", "explain", "about", "info", "information", "details"),
    ),
    IntentRule(
        IntentTag.PURCHASE,
        (
            r"\b(buy|purchase|order|ordering|checkout|cart|payment|pay for|shop)\b",
            r"\b(price|pricing|cost|costs|how much|rate|rates|quote|quotation|estimate)\b",
            r"i want to (buy|purchase|order|get|place)",
            r"place an order|make an order|submit order",
            r"\b(moq|minimum order|bulk order|wholesale)\b",
            r"add to cart|proceed to checkout",
        ),
        9,
        ("buy", "purchase", "order", "price", "cost", "quote", "payment", "checkout", "moq"),
    ),
    IntentRule(
        IntentTag.COMPLAINT,
        (
            r"\b(complaint|complain|issue|problem|trouble|difficulty|concern)\b",
            r"not (happy|satisfied|working|good|pleased)|dissatisfied|disappointed",
            r"\b(poor|bad|terrible|awful|horrible|worst|unacceptable)\b",
            r"\b(damaged|defective|broken|wrong|incorrect|missing|late|delayed)\b",
            r"\b(frustrated|annoyed|upset|angry)\b",
            r"what went wrong|something's wrong|doesn't work",
        ),
        9,
        ("problem", "issue", "complaint", "damaged", "wrong", "bad", "frustrated"),
    ),
    IntentRule(
        IntentTag.GRATITUDE,
        (
            r"\b(thanks|thank you|thx|ty|appreciate|grateful|helpful)\b",
            r"\b(great help|very helpful|much appreciated|cheers)\b",
        ),
        10,
        ("thanks", "thank", "appreciate", "grateful", "helpful"),
    ),
    IntentRule(
        IntentTag.CANCELLATION,
        (
            r"\b(cancel|cancellation|refund|return|stop order)\b",
            r"\b(cancel|stop|withdraw)\b.*\b(order|orders|purchase|shipment)\b",
            r"(don't|do not|dont) want|changed my mind|no longer (need|want)",
            r"\b(exchange|send back|give back|money back)\b",
            r"want (my money back|to cancel|to return)",
        ),
        9,
        ("cancel", "refund", "return", "exchange", "money back"),
    ),
    IntentRule(
        IntentTag.CONFIRMATION,
        (
            r"^(confirm|verify|check|validate|yes|yep|yeah|sure|right|correct|ok|okay"
            r"|affirmative|absolutely)\b",
            r"^(that's right|exactly|precisely|indeed)\b",
            r"sounds good|works for me|go ahead",
        ),
        7,
        ("yes", "confirm", "correct", "right", "okay", "sure"),
    ),
    IntentRule(
        IntentTag.NEGATION,
        (
            r"^(no|nope|nah|not really|don't think so|negative|never)\b",
            r"^(that's wrong|incorrect|not what i meant)\b",
            r"not interested|don't need",
        ),
        7,
        ("no", "nope", "not", "never", "wrong"),
    ),
    IntentRule(
        IntentTag.COMPARISON,
        (
            r"\b(difference|compare|comparison|versus|vs|better|best|prefer)\b",
            r"which (one|is|are) (better|best|recommended|preferred)",
            r"\b(pros and cons|advantages|disadvantages)\b",
            r"should i (choose|pick|select|go with)",
            r"what'?s the difference|what is the difference|how does .* compare",
        ),
        8,
        ("difference", "compare", "better", "best", "versus", "prefer"),
    ),
    IntentRule(
        IntentTag.SPECIFICATION,
        (
            r"\b(specification|specs|details|technical|parameters|properties|features)\b",
            r"\b(count|counts|thickness|strength|quality|grade|gsm|denier)\b",
            r"\b(ne \d+|yarn count|thread count)\b",
            r"what are the specs|technical details",
        ),
        8,
        ("specification", "specs", "technical", "count", "quality", "grade", "strength"),
    ),
    IntentRule(
        IntentTag.SHIPPING,
        (
            r"\b(ship|shipping|delivery|deliver|dispatch|courier|track|tracking)\b",
            r"\b(when will|how long|estimated|eta|arrival)\b",
            r"where is my (order|package|shipment)",
            r"shipping (cost|rate|time|method)",
        ),
        9,
        ("shipping", "delivery", "track", "dispatch", "courier", "arrival"),
    ),
    IntentRule(
        IntentTag.SUSTAINABILITY,
        (
            r"\b(sustainable|sustainability|eco|eco-friendly|green|environment|organic)\b",
            r"\b(recycled|recyclable|carbon|footprint|ethical)\b",
            r"\b(gots|grs|oeko-tex|certified organic)\b",
        ),
        8,
        ("sustainable", "eco", "organic", "recycled", "green", "environment", "gots", "grs"),
    ),
    IntentRule(
        IntentTag.SAMPLES,
        (
            r"\b(sample|samples|swatch|trial|test|demo|specimen)\b",
            r"can i (see|get|try|have) (a |some )?(sample|swatch)",
            r"before (ordering|buying|purchasing)",
        ),
        8,
        ("sample", "swatch", "trial", "test", "demo"),
    ),
    IntentRule(
        IntentTag.CONTACT,
        (
            r"\b(contact|reach|call|email|phone|speak|talk)\b",
            r"how (can|do) i (contact|reach|call|email)",
            r"\b(customer service|support|helpline|representative)\b",
            r"want to (speak|talk) (to|with)",
        ),
        8,
        ("contact", "call", "email", "phone", "support", "reach"),
    ),
)


def detect_intent(text: str, rules: tuple[IntentRule, ...] = INTENT_RULES) -> IntentResult:
    """Classify ``text`` against the rule table; nothing scoring yields ``general`` at 0."""
    if not isinstance(text, str) or not text.strip():
        return IntentResult.general()

    lowered = correct_spelling(text)
    scored = [(rule.tag, rule.score(lowered)) for rule in rules]
    # sorted() is stable: declaration order decides ties
    ranked = sorted((pair for pair in scored if pair[1] > 0), key=lambda p: p[1], reverse=True)
    if not ranked:
        return IntentResult.general()

    primary_tag, primary_score = ranked[0]
    return IntentResult(
        name=primary_tag,
        confidence=min(primary_score / CONFIDENCE_SCALE, 1.0),
        secondary=ranked[1][0] if len(ranked) > 1 else None,
        ranked=tuple(ranked[:3]),
    )


_QUESTION_TYPES: tuple[tuple[str, str], ...] = (
    (r"^(what|what's|whats)\b", "what"),
    (r"^(how|how's|hows)\b", "how"),
    (r"^(why)\b", "why"),
    (r"^(when|when's)\b", "when"),
    (r"^(where|where's)\b", "where"),
    (r"^(who|who's)\b", "who"),
    (r"^(which)\b", "which"),
    (r"^(can|could|would|will|do|does|is|are|have|has)\b", "yes-no"),
)


def detect_question_type(text: str) -> str:
    """Coarse question shape used to phrase replies (e.g. a leading "Yes!")."""
    if not isinstance(text, str):
        return "statement"
    stripped = text.strip()
    lowered = stripped.lower()
    for pattern, kind in _QUESTION_TYPES:
        if search(pattern, lowered):
            return kind
    if stripped.endswith("?"):
        return "general-question"
    return "statement"
