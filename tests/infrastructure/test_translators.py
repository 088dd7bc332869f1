"""Tests for translator adapters."""

import json

import pytest

from yarnbot.infrastructure.translation.identity_translator import (
    DictionaryTranslator,
    IdentityTranslator,
)


def test_identity_translator():
    assert IdentityTranslator().t("Hello") == "Hello"
    assert IdentityTranslator().t("Hello", namespace="other") == "Hello"


def test_dictionary_translator_lookup():
    tr = DictionaryTranslator({"chatbot": {"Hello": "Vanakkam"}})
    assert tr.t("Hello") == "Vanakkam"
    assert tr.t("Goodbye") == "Goodbye"
    assert tr.t("Hello", namespace="admin") == "Hello"


def test_dictionary_translator_from_json(tmp_path):
    path = tmp_path / "ta.json"
    path.write_text(
        json.dumps({"chatbot": {"Hello": "Vanakkam"}, "ignored": "not a table"}),
        encoding="utf-8",
    )
    assert DictionaryTranslator.from_json(path).t("Hello") == "Vanakkam"


def test_dictionary_translator_rejects_non_object(tmp_path):
    path = tmp_path / "ta.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        DictionaryTranslator.from_json(path)
