"""Composition root: builds adapters from settings and wires the use case."""

import logging
from zoneinfo import ZoneInfo

from yarnbot.application.ports.catalog_port import ProductCatalogPort
from yarnbot.application.ports.clock_port import ClockPort
from yarnbot.application.ports.random_port import RandomSource
from yarnbot.application.ports.telemetry_port import TelemetryPort
from yarnbot.application.ports.translator_port import TranslatorPort
from yarnbot.application.use_cases.answer_query import AnswerQuery
from yarnbot.config.settings import AppSettings
from yarnbot.domain.knowledge_base import KnowledgeBase
from yarnbot.infrastructure.catalog.in_memory_catalog import InMemoryProductCatalog
from yarnbot.infrastructure.randomness.system_random import SystemRandom
from yarnbot.infrastructure.telemetry.otel_adapter import (
    NoopTelemetry,
    OpenTelemetryAdapter,
    OtelConfig,
)
from yarnbot.infrastructure.time.system_clock import SystemClock
from yarnbot.infrastructure.translation.identity_translator import (
    DictionaryTranslator,
    IdentityTranslator,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: AppSettings) -> None:
    """Root logging for the interface entry points (CLI, HTTP). Library code never calls this."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


def build_clock(settings: AppSettings) -> ClockPort:
    """Build clock adapter for time operations.

    Returns:
        SystemClock in the configured shop timezone.

    Note:
        Tests should inject a fixed clock instead.
    """
    return SystemClock(ZoneInfo(settings.timezone))


def build_random(settings: AppSettings) -> RandomSource:
    return SystemRandom(settings.random_seed)


def build_translator(settings: AppSettings) -> TranslatorPort:
    if settings.translations_path:
        return DictionaryTranslator.from_json(settings.translations_path)
    return IdentityTranslator()


def build_catalog(settings: AppSettings) -> ProductCatalogPort | None:
    """Build the product catalog if a catalog file is configured.

    Raises:
        CatalogError: If the configured file is unreadable or malformed
    """
    if not settings.catalog_path:
        return None
    return InMemoryProductCatalog.from_json(settings.catalog_path)


def build_telemetry(settings: AppSettings) -> TelemetryPort:
    """Build telemetry adapter for metrics.

    Returns:
        OpenTelemetryAdapter when enabled (degrades to no-op without opentelemetry-sdk),
        NoopTelemetry otherwise.
    """
    if not settings.telemetry_enabled:
        return NoopTelemetry()
    cfg = OtelConfig(
        service_name="yarnbot",
        otlp_endpoint=settings.otlp_endpoint or None,
        environment=settings.telemetry_environment,
        enable_console=False,
    )
    return OpenTelemetryAdapter(cfg)


def build_answer_query_use_case(
    settings: AppSettings | None = None,
    kb: KnowledgeBase | None = None,
) -> AnswerQuery:
    """Build the chat use case with all dependencies wired from ``settings``."""
    settings = settings or AppSettings()
    return AnswerQuery(
        kb=kb or KnowledgeBase(),
        clock=build_clock(settings),
        rng=build_random(settings),
        translator=build_translator(settings),
        catalog=build_catalog(settings),
        telemetry=build_telemetry(settings),
        weights=settings.scoring_weights(),
    )
