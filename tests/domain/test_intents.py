"""Domain tests for intent classification."""

import pytest

from yarnbot.domain.models import IntentTag
from yarnbot.domain.services.intents import IntentRule, detect_intent, detect_question_type


def test_plain_greeting_is_confident():
    result = detect_intent("hi")
    assert result.name is IntentTag.GREETING
    assert result.confidence > 0.6


def test_misspelled_cancellation_beats_purchase():
    """"cancle my oredr" is corrected first; cancellation outranks the order keyword."""
    result = detect_intent("cancle my oredr")
    assert result.name is IntentTag.CANCELLATION
    assert result.secondary is IntentTag.PURCHASE
    assert result.confidence == pytest.approx(10.5 / 12)


def test_empty_or_blank_text_is_general():
    for text in ("", "   ", None):
        result = detect_intent(text)  # type: ignore[arg-type]
        assert result.name is IntentTag.GENERAL
        assert result.confidence == 0.0
        assert result.secondary is None


def test_gibberish_is_general():
    assert detect_intent("xyzzy qwerty").name is IntentTag.GENERAL


@pytest.mark.parametrize(
    "text",
    [
        "hello, I want to buy cotton yarn and check the price and shipping cost",
        "thank you so much",
        "I have a problem, the yarn arrived damaged and I am frustrated",
        "what is the difference between cotton and polyester",
    ],
)
def test_confidence_is_bounded(text):
    result = detect_intent(text)
    assert 0.0 <= result.confidence <= 1.0
    assert len(result.ranked) <= 3


def test_ties_go_to_the_rule_declared_first():
    rules = (
        IntentRule(IntentTag.PURCHASE, (r"abc",), 5),
        IntentRule(IntentTag.SHIPPING, (r"abc",), 5),
    )
    result = detect_intent("abc", rules=rules)
    assert result.name is IntentTag.PURCHASE
    assert result.secondary is IntentTag.SHIPPING


def test_rule_score_components():
    rule = IntentRule(IntentTag.SAMPLES, (r"\bsample\b", r"\bswatch\b"), 8, ("sample", "swatch"))
    # priority + two keyword hits + multi-pattern bonus
    assert rule.score("can i get a sample swatch") == pytest.approx(8 + 1.0 + 1.0)
    assert rule.score("nothing relevant") == 0.0


@pytest.mark.parametrize(
    ("text", "kind"),
    [
        ("Do you offer organic cotton?", "yes-no"),
        ("What is your MOQ?", "what"),
        ("how long does shipping take", "how"),
        ("Price list?", "general-question"),
        ("hello", "statement"),
    ],
)
def test_detect_question_type(text, kind):
    assert detect_question_type(text) == kind
