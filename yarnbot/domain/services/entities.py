# yarnbot/domain/services/entities.py
# Pure domain services: no I/O, deterministic, no external libraries.
from __future__ import annotations

from dataclasses import dataclass

from yarnbot.domain.models import EntityBag
from yarnbot.domain.services.patterns import find_all, search, term_pattern


@dataclass(frozen=True)
class EntityRule:
    """
    One extraction rule per EntityBag field.

    - category:  EntityBag field name the matches go into
    - pattern:   regex whose full matches are collected (counts, numbers, dates)
    - terms:     literal vocabulary checked one by one (yarn types, colors, ...)

    Exactly one of ``pattern`` / ``terms`` is set.
    """

    category: str
    pattern: str | None = None
    terms: tuple[str, ...] = ()

    def extract(self, lowered: str) -> list[str]:
        if self.pattern is not None:
            return find_all(self.pattern, lowered)
        return [term for term in self.terms if search(term_pattern(term), lowered)]


YARN_TYPES: tuple[str, ...] = (
    "cotton", "polyester", "blended", "blend", "recycled", "organic",
    "vortex", "ring spun", "ring-spun", "open end", "open-end", "oe yarn",
    "combed cotton", "carded cotton", "melange", "mélange", "slub",
    "fancy yarn", "core-spun", "textured", "virgin polyester",
    "poly-cotton", "cotton-viscose", "viscose",
)  # fmt: skip
PRODUCT_TERMS: tuple[str, ...] = ("yarn", "yarns", "thread", "fiber", "fibre", "textile")
LOCATIONS: tuple[str, ...] = ("india", "karur", "tamil nadu", "sukkaliyur", "gandhi nagar")
COLORS: tuple[str, ...] = (
    "white", "black", "red", "blue", "green", "yellow", "pink", "grey", "gray",
    "brown", "orange", "purple", "maroon", "navy", "lavender", "rose",
)  # fmt: skip
CERTIFICATIONS: tuple[str, ...] = ("gots", "grs", "oeko-tex", "iso", "iso 9001", "iso 14001")

_MONTHS = "jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec"

ENTITY_RULES: tuple[EntityRule, ...] = (
    EntityRule("counts", pattern=r"\b(ne|count)\s*(\d+)\s*(to|-)?\s*(\d+)?\b"),
    EntityRule(
        "numbers",
        pattern=r"\b\d+(\.\d+)?\s*(kg|g|tons?|mm|cm|m|inch|inches|yards|counts?)?\b",
    ),
    EntityRule(
        "dates",
        pattern=(
            r"\b(?:\d{1,2}[-/]\d{1,2}[-/]\d{2,4}"
            rf"|\d{{1,2}}(?:st|nd|rd|th)?\s+(?:{_MONTHS})[a-z]*(?:\s+\d{{2,4}})?)\b"
        ),
    ),
    EntityRule("yarn_types", terms=YARN_TYPES),
    EntityRule("products", terms=PRODUCT_TERMS),
    EntityRule("locations", terms=LOCATIONS),
    EntityRule("colors", terms=COLORS),
    EntityRule("certifications", terms=CERTIFICATIONS),
)


def extract_entities(text: str, rules: tuple[EntityRule, ...] = ENTITY_RULES) -> EntityBag:
    """Pull domain vocabulary out of the lowercased raw text (no stemming, no spelling fixes)."""
    if not isinstance(text, str) or not text:
        return EntityBag.empty()
    lowered = text.lower()
    found: dict[str, list[str]] = {}
    for rule in rules:
        found.setdefault(rule.category, []).extend(rule.extract(lowered))
    return EntityBag(**{category: tuple(values) for category, values in found.items()})
