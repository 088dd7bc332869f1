# yarnbot/domain/services/normalization.py
# Pure domain services: no I/O, deterministic, no external libraries.
"""Lexical normalization: spelling fixes, tokenizing, stopwords, stemming, synonyms.

Pipeline (``normalize``):
    1. optional whole-word misspelling rewrite (may expand: "whats" -> "what is")
    2. lowercase; anything outside ``[\\w\\s-]`` and every hyphen becomes a space
    3. whitespace split, tokens of length <= 1 dropped
    4. stopwords dropped
    5. each token stemmed (irregular table first, then ordered suffix rules)
    6. optional bidirectional synonym expansion, first-seen order kept

The stemmer is deliberately crude. It only has to map a query and a
knowledge-base text onto the same tokens, not produce dictionary roots.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from yarnbot.domain.types import Token

STOPWORDS: frozenset[str] = frozenset(
    """
    a an the and or but is are was were be been being in on at to for with by about
    against between into through during before after above below from up down of off
    over under again further then once here there when where why how all any both each
    few more most other some such no nor not only own same so than too very can will
    just should now i me my myself we our ours ourselves you your yours yourself
    yourselves he him his himself she her hers herself it its itself they them their
    theirs themselves what which who whom this that these those do does did doing have
    has had having would could ought cannot
    i'm you're he's she's it's we're they're i've you've we've they've i'd you'd he'd
    she'd we'd they'd i'll you'll he'll she'll we'll they'll isn't aren't wasn't
    weren't hasn't haven't hadn't doesn't don't didn't won't wouldn't shan't shouldn't
    can't couldn't mustn't let's that's who's what's here's there's when's where's
    why's how's
    """.split()
)

SYNONYMS: dict[str, tuple[str, ...]] = {
    "buy": ("purchase", "order", "get", "acquire", "procure", "shop"),
    "price": ("cost", "rate", "pricing", "fee", "charge", "quote", "value"),
    "cheap": ("affordable", "budget", "economical", "inexpensive", "low-cost"),
    "expensive": ("costly", "premium", "high-end", "pricey"),
    "good": ("quality", "excellent", "great", "superior", "fine", "best"),
    "bad": ("poor", "inferior", "defective", "faulty", "substandard"),
    "fast": ("quick", "rapid", "speedy", "express", "urgent", "swift"),
    "slow": ("delayed", "late", "prolonged"),
    "help": ("assist", "support", "aid", "guide", "service"),
    "contact": ("reach", "call", "email", "message", "connect", "speak"),
    "ship": ("deliver", "send", "dispatch", "transport", "courier"),
    "return": ("refund", "exchange", "replace", "give back", "send back"),
    "cancel": ("stop", "abort", "terminate", "end", "revoke"),
    "yarn": ("thread", "fiber", "fibre", "string", "textile"),
    "cotton": ("natural fiber", "plant fiber"),
    "polyester": ("synthetic", "poly", "pet fiber"),
    "blend": ("mix", "combination", "composite", "hybrid"),
    "eco": ("sustainable", "green", "environmental", "eco-friendly", "organic"),
    "recycle": ("recycled", "reuse", "repurpose", "upcycle"),
    "thick": ("coarse", "heavy", "bulky", "dense"),
    "thin": ("fine", "light", "delicate", "lightweight"),
    "strong": ("durable", "sturdy", "tough", "resilient", "robust"),
    "soft": ("smooth", "gentle", "tender", "comfortable"),
    "color": ("colour", "shade", "dye", "hue", "tint", "tone"),
    "info": ("information", "details", "data", "specs", "specifications"),
    "company": ("business", "firm", "organization", "enterprise", "manufacturer"),
    "work": ("operate", "function", "run", "perform"),
    "make": ("produce", "manufacture", "create", "fabricate"),
    "use": ("utilize", "apply", "employ", "purpose", "application"),
    "sample": ("swatch", "test", "trial", "demo", "specimen"),
    "quantity": ("amount", "volume", "number", "bulk", "lot"),
    "discount": ("offer", "deal", "sale", "reduction", "savings", "promotion"),
}

# value -> keys it belongs to, in table order
_REVERSE_SYNONYMS: dict[str, tuple[str, ...]] = {}
for _key, _values in SYNONYMS.items():
    for _value in _values:
        _REVERSE_SYNONYMS[_value] = _REVERSE_SYNONYMS.get(_value, ()) + (_key,)

SPELLING_CORRECTIONS: dict[str, str] = {
    "cancle": "cancel", "cancell": "cancel", "canel": "cancel", "cncel": "cancel",
    "cacnel": "cancel", "cancellation": "cancel",
    "oredr": "order", "ordr": "order", "oder": "order", "ordder": "order", "oerder": "order",
    "refnd": "refund", "refudn": "refund", "rfund": "refund", "refaund": "refund",
    "retrun": "return", "retrn": "return", "reutrn": "return", "retunr": "return",
    "shiping": "shipping", "shippping": "shipping", "shpping": "shipping",
    "delivry": "delivery", "deliverry": "delivery", "delvery": "delivery",
    "pric": "price", "prise": "price", "pirce": "price",
    "prodict": "product", "prodct": "product", "proudct": "product",
    "cottan": "cotton", "coton": "cotton", "cottton": "cotton",
    "poylester": "polyester", "polyster": "polyester", "polester": "polyester",
    "qualty": "quality", "qulity": "quality", "qualiy": "quality",
    "certifcate": "certificate", "certifiate": "certificate", "certificat": "certificate",
    "sustainble": "sustainable", "sustainabel": "sustainable",
    "sustainibility": "sustainability",
    "recyceld": "recycled", "recyclled": "recycled", "recyled": "recycled",
    "orgainc": "organic", "orgnaic": "organic", "orgnic": "organic",
    "yran": "yarn", "yarrn": "yarn", "yern": "yarn",
    "conatct": "contact", "contct": "contact", "conact": "contact",
    "adress": "address", "addres": "address", "addrss": "address",
    "pament": "payment", "paymnt": "payment", "payemnt": "payment",
    "accont": "account", "acount": "account", "acconut": "account",
    "specifcation": "specification", "specfication": "specification",
    "manufacturr": "manufacturer", "manifacturer": "manufacturer",
    "thnks": "thanks", "thanx": "thanks", "thx": "thanks",
    "plz": "please", "pls": "please", "pleas": "please",
    "msg": "message", "messge": "message",
    "qty": "quantity", "quantiy": "quantity", "quantitiy": "quantity",
    "wht": "what", "whats": "what is", "whts": "what is",
    "hw": "how", "hwo": "how",
    "ur": "your", "u": "you", "r": "are",
    "bcoz": "because", "coz": "because", "bcz": "because",
    "abt": "about", "bt": "but",
    "n": "and", "nd": "and",
}  # fmt: skip

_SPELLING_RE = re.compile(
    r"\b(" + "|".join(sorted(map(re.escape, SPELLING_CORRECTIONS), key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)

IRREGULAR_STEMS: dict[str, str] = {
    "bought": "buy", "purchasing": "purchase",
    "shipping": "ship", "shipped": "ship", "ships": "ship",
    "ordering": "order", "ordered": "order", "orders": "order",
    "cancelled": "cancel", "cancelling": "cancel", "cancels": "cancel",
    "returned": "return", "returning": "return", "returns": "return",
    "refunded": "refund", "refunding": "refund", "refunds": "refund",
    "manufactured": "manufacture", "manufacturing": "manufacture",
    "certified": "certify", "certifying": "certify", "certifies": "certify",
    "produced": "produce", "producing": "produce", "produces": "produce",
    "delivered": "deliver", "delivering": "deliver", "delivers": "deliver",
    "contacted": "contact", "contacting": "contact", "contacts": "contact",
    "running": "run", "ran": "run",
    "better": "good", "best": "good",
    "worse": "bad", "worst": "bad",
    "companies": "company", "factories": "factory",
    "yarns": "yarn", "threads": "thread", "fibers": "fiber", "fibres": "fiber",
    "qualities": "quality", "quantities": "quantity",
}  # fmt: skip

# Irregular targets are roots themselves ("order" must not become "ord").
_IRREGULAR_ROOTS: frozenset[str] = frozenset(IRREGULAR_STEMS.values())

_NON_WORD_RE = re.compile(r"[^\w\s-]")


def _collapse_double(base: str) -> str:
    if len(base) > 1 and base[-1] == base[-2]:
        return base[:-1]
    return base


def _strip_es(word: str) -> str:
    if word.endswith(("ches", "shes", "sses", "xes", "zes")):
        return word[:-2]
    return word[:-1]


def _strip_ed(word: str) -> str:
    base = word[:-2]
    if len(base) > 1 and base[-1] == base[-2]:
        return base[:-1]
    if word.endswith("ied"):
        return word[:-3] + "y"
    return base


def _strip_s_ok(word: str) -> bool:
    return not word.endswith(("ss", "us", "is"))


def _strip_ed_ok(word: str) -> bool:
    return not word.endswith("eed")


def _is_root(candidate: str) -> bool:
    """A stripped form is kept only if it is still a content word nothing else rewrites."""
    return (
        len(candidate) >= 3
        and candidate not in STOPWORDS
        and candidate not in SPELLING_CORRECTIONS
    )


@dataclass(frozen=True)
class SuffixRule:
    """One stemming rule: fires on words ending in ``suffix`` longer than ``min_length``."""

    suffix: str
    min_length: int
    strip: Callable[[str], str]
    guard: Callable[[str], bool] | None = None


def _cut(n: int) -> Callable[[str], str]:
    return lambda word: word[:-n]


# Evaluated in order; the first rule that fires wins.
SUFFIX_RULES: tuple[SuffixRule, ...] = (
    SuffixRule("ation", 6, _cut(5)),
    SuffixRule("ment", 6, _cut(4)),
    SuffixRule("ness", 5, _cut(4)),
    SuffixRule("able", 0, _cut(4)),
    SuffixRule("ible", 0, _cut(4)),
    SuffixRule("ity", 5, _cut(3)),
    SuffixRule("ive", 5, _cut(3)),
    SuffixRule("ful", 5, _cut(3)),
    SuffixRule("less", 6, _cut(4)),
    SuffixRule("ing", 4, lambda w: _collapse_double(w[:-3])),
    SuffixRule("ly", 4, _cut(2)),
    SuffixRule("ies", 4, lambda w: w[:-3] + "y"),
    SuffixRule("es", 4, _strip_es),
    SuffixRule("s", 3, _cut(1), guard=_strip_s_ok),
    SuffixRule("ed", 4, _strip_ed, guard=_strip_ed_ok),
    SuffixRule("er", 4, _cut(2)),
    SuffixRule("est", 5, _cut(3)),
)


def _stem_step(word: str) -> str:
    irregular = IRREGULAR_STEMS.get(word)
    if irregular is not None:
        return irregular
    if word in _IRREGULAR_ROOTS:
        return word
    for rule in SUFFIX_RULES:
        if not word.endswith(rule.suffix) or len(word) <= rule.min_length:
            continue
        if rule.guard is not None and not rule.guard(word):
            continue
        candidate = rule.strip(word)
        # "things" must not fall through "thing" to "th"
        return candidate if _is_root(candidate) else word
    return word


def stem(word: str) -> str:
    """Reduce a lowercase word to its matching root. Words shorter than 3 are untouched.

    Rules are applied until the word stops changing, so every stem is a
    fixed point: ``stem(stem(w)) == stem(w)``.
    """
    if not word or len(word) < 3:
        return word
    word = word.lower()
    while True:
        stemmed = _stem_step(word)
        if stemmed == word:
            return word
        word = stemmed


def correct_spelling(text: Any) -> str:
    """Lowercase ``text`` and rewrite known misspellings (whole words only)."""
    if not isinstance(text, str) or not text:
        return ""
    return _SPELLING_RE.sub(lambda m: SPELLING_CORRECTIONS[m.group(1).lower()], text.lower())


def synonyms_of(token: Token) -> tuple[str, ...]:
    """Synonyms of one token in both directions (its values, then the keys it belongs to)."""
    return SYNONYMS.get(token, ()) + _REVERSE_SYNONYMS.get(token, ())


def expand_with_synonyms(tokens: Iterable[Token]) -> list[Token]:
    """Append synonyms of each token; duplicates removed, first occurrence kept."""
    base = list(tokens)
    expanded: list[Token] = list(base)
    for token in base:
        expanded.extend(synonyms_of(token))
    return list(dict.fromkeys(expanded))


def normalize(
    text: Any,
    *,
    expand_synonyms: bool = False,
    fix_spelling: bool = True,
) -> list[Token]:
    """Turn free text into matching tokens.

    Args:
        text: Raw user or knowledge-base text. Non-strings count as empty.
        expand_synonyms: Append synonym tokens after the stemmed ones
        fix_spelling: Rewrite known misspellings first

    Returns:
        Stemmed, stopword-free tokens (possibly empty).
    """
    if not isinstance(text, str) or not text:
        return []
    processed = correct_spelling(text) if fix_spelling else text.lower()
    cleaned = _NON_WORD_RE.sub(" ", processed).replace("-", " ")
    tokens = [
        stem(tok) for tok in cleaned.split() if len(tok) > 1 and tok not in STOPWORDS
    ]
    if expand_synonyms:
        tokens = expand_with_synonyms(tokens)
    return tokens
