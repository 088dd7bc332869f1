"""Tests for the scoring weights value object."""

from dataclasses import FrozenInstanceError

import pytest

from yarnbot.domain.value_objects import ScoringWeights


def test_defaults_are_valid():
    w = ScoringWeights()
    assert w.semantic == 0.3
    assert w.relevance == 0.35
    assert w.clarify_floor <= min(w.threshold_clear, w.threshold_ambiguous)


def test_relevance_gives_keyword_hits_the_largest_per_token_weight():
    w = ScoringWeights()
    assert w.relevance_keyword >= max(w.relevance_fuzzy, w.relevance_topic, w.relevance_exact)
    assert w.relevance_semantic + w.relevance_keyword <= 1.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"semantic": -0.1},
        {"threshold_clear": 1.5},
        {"fuzzy_threshold": 2.0},
        {"clarify_floor": 0.2, "threshold_clear": 0.15},
    ],
)
def test_invalid_weights_rejected(kwargs):
    with pytest.raises(ValueError):
        ScoringWeights(**kwargs)


def test_weights_are_immutable():
    w = ScoringWeights()
    with pytest.raises(FrozenInstanceError):
        w.semantic = 0.5  # type: ignore[misc]
