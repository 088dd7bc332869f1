"""Domain tests for similarity functions."""

import pytest

from yarnbot.domain.similarity import (
    cosine_tf,
    fuzzy_match_word,
    jaccard,
    levenshtein,
    term_frequencies,
    text_similarity,
    token_similarity,
)


def test_term_frequencies():
    tf = term_frequencies(["a", "a", "b"])
    assert tf["a"] == pytest.approx(2 / 3)
    assert tf["b"] == pytest.approx(1 / 3)
    assert term_frequencies([]) == {}


def test_cosine_tf_identical_and_disjoint():
    assert cosine_tf(["cotton", "yarn"], ["cotton", "yarn"]) == pytest.approx(1.0)
    assert cosine_tf(["cotton"], ["polyest"]) == 0.0
    assert cosine_tf([], ["cotton"]) == 0.0


def test_jaccard_overlap():
    assert jaccard(["a", "b"], ["b", "c"]) == pytest.approx(1 / 3)
    assert jaccard([], []) == 0.0


def test_levenshtein():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("yarn", "yarn") == 0


def test_fuzzy_match_word():
    assert fuzzy_match_word("colour", "color", 0.25)
    assert fuzzy_match_word("yarn", "yarns")  # substring
    assert not fuzzy_match_word("cotton", "polyester")
    assert not fuzzy_match_word("", "yarn")


def test_token_similarity_blend():
    assert token_similarity(["cotton", "yarn"], ["cotton", "yarn"]) == pytest.approx(1.0)
    assert token_similarity([], ["cotton"]) == 0.0


def test_text_similarity_normalizes_both_sides():
    assert text_similarity("Cotton yarns", "cotton yarn") == pytest.approx(1.0)
    assert text_similarity("cotton", "shipping") == 0.0
