"""Domain tests for the normalizer.

Why: every score downstream compares normalized tokens; a query and a
knowledge-base text must land on the same tokens.
"""

from yarnbot.domain.knowledge_base import KnowledgeBase
from yarnbot.domain.services.normalization import (
    correct_spelling,
    expand_with_synonyms,
    normalize,
    stem,
    synonyms_of,
)


def test_stem_irregular_forms_map_to_their_root():
    assert stem("orders") == "order"
    assert stem("shipping") == "ship"
    assert stem("yarns") == "yarn"
    assert stem("best") == "good"


def test_stem_keeps_irregular_roots_stable():
    """Roots of the irregular table are fixed points, so "order" never becomes "ord"."""
    assert stem("order") == "order"
    assert stem("quality") == "quality"
    assert stem(stem("orders")) == stem("orders")


def test_stem_suffix_rules():
    assert stem("colors") == "color"
    assert stem("friendly") == "friend"
    assert stem("cotton") == "cotton"


def test_stem_leaves_short_words_and_bare_suffixes_alone():
    assert stem("ab") == "ab"
    assert stem("able") == "able"
    assert stem("") == ""


def test_correct_spelling_rewrites_whole_words_only():
    assert correct_spelling("Cancle my OREDR") == "cancel my order"
    assert correct_spelling("r u ok") == "are you ok"
    # "r" inside a word is not a misspelling of "are"
    assert correct_spelling("turn") == "turn"


def test_correct_spelling_may_expand_to_two_words():
    assert correct_spelling("whats up") == "what is up"


def test_correct_spelling_non_string_is_empty():
    assert correct_spelling(None) == ""
    assert correct_spelling(42) == ""


def test_normalize_drops_stopwords_punctuation_and_short_tokens():
    assert normalize("The cotton yarns!") == ["cotton", "yarn"]
    assert normalize("a b c") == []


def test_normalize_splits_hyphenated_words():
    assert normalize("eco-friendly") == ["eco", "friend"]


def test_normalize_empty_and_non_string_input():
    assert normalize("") == []
    assert normalize(None) == []
    assert normalize(3.14) == []


def test_stem_reaches_a_fixed_point():
    assert stem("specifications") == "specific"
    assert stem("customers") == "custom"
    assert stem("speeds") == "speed"
    for word in ("things", "specifications", "customers", "certifications", "speeds", "offers"):
        assert stem(stem(word)) == stem(word)


def test_stem_refuses_stopword_and_misspelling_roots():
    assert stem("things") == "thing"
    assert stem("offers") == "offer"
    assert stem("others") == "others"
    assert stem("pricing") == "pricing"


def test_normalize_is_idempotent_on_its_own_output():
    first = normalize("cotton yarn price shipping quality")
    assert first == ["cotton", "yarn", "price", "ship", "quality"]
    assert normalize(" ".join(first)) == first

    tricky = normalize(
        "things specifications customers certifications speeds offers pricing others"
    )
    assert normalize(" ".join(tricky)) == tricky

    for entry in KnowledgeBase():
        tokens = normalize(entry.matching_text)
        assert normalize(" ".join(tokens)) == tokens, entry.topic


def test_normalize_can_skip_spelling_fixes():
    assert normalize("cancle", fix_spelling=False) == ["cancle"]
    assert normalize("cancle") == ["cancel"]


def test_synonyms_work_in_both_directions():
    assert "purchase" in synonyms_of("buy")
    assert synonyms_of("purchase") == ("buy",)
    assert synonyms_of("unobtainium") == ()


def test_expand_with_synonyms_keeps_originals_first_without_duplicates():
    expanded = normalize("buy yarn", expand_synonyms=True)
    assert expanded[:2] == ["buy", "yarn"]
    assert "purchase" in expanded
    assert "thread" in expanded
    assert len(expanded) == len(set(expanded))


def test_expand_with_synonyms_empty():
    assert expand_with_synonyms([]) == []
