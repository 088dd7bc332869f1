"""Tests for the composition root (dependency wiring).

The composition root is the ONLY place that instantiates concrete
infrastructure adapters and wires them into the use case.
"""

import json
import logging
from datetime import timedelta

import pytest

from yarnbot.application.dto.chat_dto import ChatRequest
from yarnbot.application.use_cases.answer_query import AnswerQuery
from yarnbot.config.composition import (
    build_answer_query_use_case,
    build_catalog,
    build_clock,
    build_random,
    build_telemetry,
    build_translator,
    configure_logging,
)
from yarnbot.config.settings import AppSettings
from yarnbot.domain.errors import CatalogError
from yarnbot.domain.knowledge_base import KnowledgeBase
from yarnbot.infrastructure.catalog.in_memory_catalog import InMemoryProductCatalog
from yarnbot.infrastructure.randomness.system_random import SystemRandom
from yarnbot.infrastructure.telemetry.otel_adapter import NoopTelemetry, OpenTelemetryAdapter
from yarnbot.infrastructure.translation.identity_translator import (
    DictionaryTranslator,
    IdentityTranslator,
)


def make_settings(**overrides) -> AppSettings:
    values = {
        "random_seed": 3,
        "timezone": "Asia/Kolkata",
        "catalog_path": "",
        "translations_path": "",
        "telemetry_enabled": False,
    }
    values.update(overrides)
    return AppSettings(**values)


class TestCompositionRoot:
    def test_builds_a_working_use_case(self) -> None:
        uc = build_answer_query_use_case(make_settings())
        assert isinstance(uc, AnswerQuery)
        assert uc.catalog is None
        assert isinstance(uc.telemetry, NoopTelemetry)
        assert isinstance(uc.translator, IdentityTranslator)
        answer = uc.execute(ChatRequest(text="hi"))
        assert answer.topic == "greeting"

    def test_custom_knowledge_base(self) -> None:
        kb = KnowledgeBase()
        assert build_answer_query_use_case(make_settings(), kb=kb).kb is kb

    def test_weights_come_from_settings(self) -> None:
        uc = build_answer_query_use_case(make_settings(threshold_clear=0.2))
        assert uc.weights.threshold_clear == 0.2

    def test_clock_uses_configured_timezone(self) -> None:
        now = build_clock(make_settings()).now()
        assert now.utcoffset() == timedelta(hours=5, minutes=30)

    def test_seeded_random_is_reproducible(self) -> None:
        a = build_random(make_settings(random_seed=5))
        b = build_random(make_settings(random_seed=5))
        assert isinstance(a, SystemRandom)
        assert a.random() == b.random()

    def test_translator_from_file(self, tmp_path) -> None:
        path = tmp_path / "ta.json"
        path.write_text(json.dumps({"chatbot": {"Hello": "Vanakkam"}}), encoding="utf-8")
        tr = build_translator(make_settings(translations_path=str(path)))
        assert isinstance(tr, DictionaryTranslator)
        assert tr.t("Hello") == "Vanakkam"

    def test_catalog_from_file(self, tmp_path) -> None:
        path = tmp_path / "products.json"
        path.write_text(
            json.dumps([{"id": "1", "name": "Slub Yarn", "price": 199.0, "stock": 3}]),
            encoding="utf-8",
        )
        catalog = build_catalog(make_settings(catalog_path=str(path)))
        assert isinstance(catalog, InMemoryProductCatalog)

    def test_broken_catalog_file_fails_fast(self, tmp_path) -> None:
        path = tmp_path / "products.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(CatalogError):
            build_answer_query_use_case(make_settings(catalog_path=str(path)))

    def test_telemetry_switch(self) -> None:
        assert isinstance(build_telemetry(make_settings()), NoopTelemetry)
        enabled = build_telemetry(make_settings(telemetry_enabled=True, otlp_endpoint=""))
        assert isinstance(enabled, OpenTelemetryAdapter)


def test_configure_logging_uses_settings_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    configure_logging(make_settings(log_level="WARNING"))
    assert calls["level"] == "WARNING"
