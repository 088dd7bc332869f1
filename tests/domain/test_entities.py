"""Domain tests for entity extraction."""

from yarnbot.domain.models import EntityBag
from yarnbot.domain.services.entities import EntityRule, extract_entities


def test_extracts_every_category_from_a_product_question():
    bag = extract_entities("Ne 40 cotton yarn in blue, GOTS certified")
    assert bag.counts == ("ne 40",)
    assert bag.numbers == ("40",)
    assert bag.yarn_types == ("cotton",)
    assert bag.products == ("yarn",)
    assert bag.colors == ("blue",)
    assert bag.certifications == ("gots",)
    assert bag.locations == ()
    assert bag.has_any()


def test_empty_and_non_string_input_give_empty_bag():
    assert extract_entities("") == EntityBag()
    assert extract_entities(None) == EntityBag()  # type: ignore[arg-type]
    assert not extract_entities("").has_any()


def test_terms_match_on_word_boundaries():
    bag = extract_entities("I need a hundred kg")
    assert bag.colors == ()


def test_dates_and_locations():
    bag = extract_entities("Deliver to Karur, India by 12/03/2025")
    assert bag.dates == ("12/03/2025",)
    assert bag.locations == ("india", "karur")


def test_custom_rule_table():
    rules = (EntityRule("colors", terms=("teal",)),)
    bag = extract_entities("Teal and red", rules=rules)
    assert bag.colors == ("teal",)
    assert bag.yarn_types == ()
