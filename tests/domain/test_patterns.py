"""A malformed rule pattern costs one rule, never the reply."""

import logging

from yarnbot.domain.errors import PatternError
from yarnbot.domain.services.patterns import (
    compile_pattern,
    find_all,
    first_match,
    search,
    term_pattern,
)


def test_bad_pattern_is_reported_not_raised():
    compiled = compile_pattern("([")
    assert not compiled.ok
    assert isinstance(compiled.error, PatternError)
    assert compiled.error.pattern == "(["


def test_bad_pattern_never_matches():
    assert search("([", "anything") is False
    assert find_all("([", "anything") == []
    assert first_match("([", "anything") is None


def test_search_is_case_insensitive():
    assert search(r"\bcotton\b", "COTTON yarn")


def test_find_all_strips_matches():
    assert find_all(r"\d+\s*", "ne 40 and 20 ") == ["40", "20"]


def test_term_pattern_matches_whole_terms_only():
    assert not search(term_pattern("red"), "one hundred kg")
    assert search(term_pattern("red"), "red yarn")
    assert search(term_pattern("oeko-tex"), "oeko-tex certified")


def test_first_match_groups():
    match = first_match(r"my name is (\w+)", "Hello, my name is Priya")
    assert match is not None
    assert match.group(1) == "Priya"


def test_every_bad_pattern_evaluation_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="yarnbot.domain.services.patterns")
    compile_pattern("(?P<")
    compile_pattern("(?P<")
    skipped = [r for r in caplog.records if r.getMessage().startswith("Skipping malformed")]
    assert len(skipped) == 2
