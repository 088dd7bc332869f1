"""Pure similarity functions over token lists.

Term-frequency cosine, Jaccard overlap and Levenshtein-based fuzzy word
matching. No IDF weighting: the knowledge base is tiny and static, so raw
term frequency (count / length) is enough to rank it.
"""

from collections import Counter
from collections.abc import Sequence
from math import sqrt

from .services.normalization import normalize
from .types import Score, Token


def term_frequencies(tokens: Sequence[Token]) -> dict[Token, float]:
    """Compute raw term frequency (count / length) per distinct token.

    Args:
        tokens: Normalized tokens

    Returns:
        Mapping token -> frequency. Empty input returns an empty mapping.
    """
    if not tokens:
        return {}
    total = len(tokens)
    return {tok: count / total for tok, count in Counter(tokens).items()}


def cosine_tf(a: Sequence[Token], b: Sequence[Token]) -> Score:
    """Cosine similarity between the term-frequency vectors of two token lists.

    Args:
        a: First token list
        b: Second token list

    Returns:
        Similarity in [0, 1]; 0.0 when either side has no tokens.
    """
    ta = term_frequencies(a)
    tb = term_frequencies(b)
    if not ta or not tb:
        return 0.0
    dot = sum(freq * tb.get(tok, 0.0) for tok, freq in ta.items())
    na = sqrt(sum(f * f for f in ta.values()))
    nb = sqrt(sum(f * f for f in tb.values()))
    if na == 0 or nb == 0:
        return 0.0
    return dot / (na * nb)


def jaccard(a: Sequence[Token], b: Sequence[Token]) -> Score:
    """Jaccard overlap of the two token sets; 0.0 when both are empty."""
    sa, sb = set(a), set(b)
    union = sa | sb
    if not union:
        return 0.0
    return len(sa & sb) / len(union)


def levenshtein(a: str, b: str) -> int:
    """Edit distance (insert, delete, substitute; unit costs)."""
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def fuzzy_match_word(a: str, b: str, threshold: float = 0.3) -> bool:
    """Tell whether two words are close enough to count as the same word.

    Args:
        a: First word
        b: Second word
        threshold: Maximum tolerated distance / max length (0.25 means 75% similar)

    Returns:
        True for equal words, for a substring in either direction, or when
        ``1 - distance / max_len >= 1 - threshold``. Empty words never match.
    """
    if not a or not b:
        return False
    w1, w2 = a.lower(), b.lower()
    if w1 == w2 or w1 in w2 or w2 in w1:
        return True
    longest = max(len(w1), len(w2))
    # The distance is at least the length difference; skip hopeless pairs.
    if abs(len(w1) - len(w2)) / longest > threshold:
        return False
    return 1 - levenshtein(w1, w2) / longest >= 1 - threshold


def token_similarity(a: Sequence[Token], b: Sequence[Token]) -> Score:
    """Blend of cosine (0.7) and Jaccard (0.3) over already-normalized tokens."""
    if not a or not b:
        return 0.0
    return 0.7 * cosine_tf(a, b) + 0.3 * jaccard(a, b)


def text_similarity(text_a: str, text_b: str) -> Score:
    """``token_similarity`` over the normalized tokens of two raw texts."""
    return token_similarity(normalize(text_a), normalize(text_b))
