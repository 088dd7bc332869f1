# yarnbot/application/use_cases/answer_query.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from yarnbot.application.dto.chat_dto import ChatAnswer, ChatRequest
from yarnbot.application.ports.catalog_port import ProductCatalogPort, ProductFilter
from yarnbot.application.ports.clock_port import ClockPort
from yarnbot.application.ports.random_port import RandomSource
from yarnbot.application.ports.telemetry_port import TelemetryPort
from yarnbot.application.ports.translator_port import TranslatorPort
from yarnbot.domain.errors import CatalogError, UnknownTopicError
from yarnbot.domain.knowledge_base import KnowledgeBase
from yarnbot.domain.models import ConversationContext, TemplateContext, TopicScore
from yarnbot.domain.services.composition import (
    CATALOG_TOPICS,
    ComposedReply,
    TurnAnalysis,
    analyze_turn,
    catalog_summary,
    comparison_reply,
    compose,
    faq_reply,
    match_comparison,
    match_faq,
    quick_reply,
    unknown_topic_reply,
)
from yarnbot.domain.services.dialogue import (
    TurnInfo,
    extract_preferences,
    extract_user_name,
    reset_context,
    update_context,
)
from yarnbot.domain.services.ranking import (
    ConfidenceBand,
    classify_confidence,
    score_topics,
)
from yarnbot.domain.services.relevance_scoring import clamp_unit
from yarnbot.domain.value_objects import ScoringWeights

logger = logging.getLogger(__name__)

GENERAL_TOPIC = "general"


class AnswerQuery:
    """
    Application use case: answer one chat turn against the knowledge base.

    Pure orchestration over domain services and ports. ``execute`` never
    raises: any failure becomes the generic reply and the context still
    advances by one message.
    """

    def __init__(
        self,
        kb: KnowledgeBase,
        clock: ClockPort,
        rng: RandomSource,
        translator: TranslatorPort,
        catalog: ProductCatalogPort | None = None,
        telemetry: TelemetryPort | None = None,
        weights: ScoringWeights | None = None,
    ) -> None:
        self.kb = kb
        self.clock = clock
        self.rng = rng
        self.translator = translator
        self.catalog = catalog
        self.telemetry = telemetry
        self.weights = weights or ScoringWeights()

    def execute(self, req: ChatRequest) -> ChatAnswer:
        now = self.clock.now()
        context = req.context
        if not isinstance(context, ConversationContext):
            context = ConversationContext()
        try:
            return self._answer(req.text, context, now)
        except UnknownTopicError as ex:
            logger.warning("Scored topic missing from knowledge base: %s", ex)
            return self._degraded(context, now, ex)
        except Exception as ex:
            logger.exception("Chat pipeline failed; replying with the generic fallback")
            return self._degraded(context, now, ex)

    def reset(self, context: ConversationContext | None = None) -> ConversationContext:
        """User-initiated clear: drop topics, history, name and preferences."""
        if context is not None and context.message_count:
            logger.info("Resetting conversation after %d messages", context.message_count)
        return reset_context(self.clock.now())

    # ------------------------------------------------------------------

    def _answer(self, raw: Any, context: ConversationContext, now: datetime) -> ChatAnswer:
        text = raw if isinstance(raw, str) else ""
        user_name = extract_user_name(text)
        preferences = extract_preferences(text, context.preferences)
        # a name or preference stated in this message already applies to this reply
        working = context.with_updates(
            user_name=user_name or context.user_name, preferences=preferences
        )
        analysis = analyze_turn(text)
        tctx = TemplateContext(conversation=working, now=now)

        band = "shortcut"
        top_score = 0.0
        reply = self._pre_scoring(analysis, tctx)
        if reply is None:
            scores = score_topics(
                analysis.text, analysis.entities, analysis.intent, self.kb, working, self.weights
            )
            confidence = classify_confidence(scores, self.weights)
            band = confidence.value
            top_score = scores[0].score if scores else 0.0
            self._log_candidates(scores)
            reply = compose(
                confidence, scores[:3], analysis, working, self.kb, self.rng, now, self.translator.t
            )
            if confidence is ConfidenceBand.HIGH:
                reply = self._with_catalog(reply, analysis)

        updated = update_context(
            context,
            TurnInfo(topic=reply.topic, user_name=user_name, preferences=preferences),
            now,
        )
        topic = reply.topic or GENERAL_TOPIC
        logger.info("Answered turn: band=%s topic=%s score=%.3f", band, topic, top_score)
        self._incr("chat.queries.total", {"band": band, "topic": topic})
        self._observe("chat.top_score", clamp_unit(top_score))
        return ChatAnswer(
            response_text=reply.text,
            topic=topic,
            suggested_questions=reply.suggested_questions,
            updated_context=updated,
            band=band,
            top_score=top_score,
        )

    def _pre_scoring(self, analysis: TurnAnalysis, tctx: TemplateContext) -> ComposedReply | None:
        t = self.translator.t
        faq = match_faq(analysis.corrected)
        if faq is not None:
            return faq_reply(faq, t)
        comparison = match_comparison(analysis.corrected)
        if comparison is not None:
            return comparison_reply(comparison, t)
        return quick_reply(analysis, self.kb, tctx, self.rng, t)

    def _with_catalog(self, reply: ComposedReply, analysis: TurnAnalysis) -> ComposedReply:
        if self.catalog is None or reply.topic not in CATALOG_TOPICS:
            return reply
        yarn_types = analysis.entities.yarn_types
        product_filter = ProductFilter(query=yarn_types[0] if yarn_types else None)
        try:
            products = self.catalog.find_products(product_filter)
        except CatalogError as ex:
            logger.warning("Catalog lookup failed: %s", ex)
            self._incr("chat.errors.total", {"error_type": type(ex).__name__})
            return reply
        summary = catalog_summary(products, self.translator.t)
        if not summary:
            return reply
        return ComposedReply(reply.text + summary, reply.suggested_questions, reply.topic)

    def _degraded(self, context: ConversationContext, now: datetime, ex: Exception) -> ChatAnswer:
        self._incr("chat.errors.total", {"error_type": type(ex).__name__})
        reply = unknown_topic_reply(self.translator.t)
        try:
            updated = update_context(context, TurnInfo(topic=None), now)
        except Exception:
            logger.exception("Could not advance the conversation context")
            updated = context
        return ChatAnswer(
            response_text=reply.text,
            topic=GENERAL_TOPIC,
            suggested_questions=reply.suggested_questions,
            updated_context=updated,
        )

    def _log_candidates(self, scores: list[TopicScore]) -> None:
        if not logger.isEnabledFor(logging.DEBUG) or not scores:
            return
        for s in scores[:3]:
            logger.debug(
                "candidate topic=%s score=%.3f semantic=%.3f relevance=%.3f",
                s.topic,
                s.score,
                s.semantic,
                s.relevance,
            )

    def _incr(self, name: str, tags: dict[str, Any]) -> None:
        if self.telemetry is not None:
            self.telemetry.incr(name, tags)

    def _observe(self, name: str, value: float) -> None:
        if self.telemetry is not None:
            self.telemetry.observe(name, value)
