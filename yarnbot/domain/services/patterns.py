# yarnbot/domain/services/patterns.py
# Pure domain services: no I/O, deterministic, no external libraries.
"""Safe evaluation of rule-table regular expressions.

Rule tables are data: a malformed pattern added to one of them must cost
one rule, not the whole reply. Compilation failures are reported through
``PatternError`` and debug logging, never raised. Compiled patterns are
reused through the ``re`` module cache.
"""

from __future__ import annotations

import logging
import re

from yarnbot.domain.errors import PatternError
from yarnbot.domain.types import Result

logger = logging.getLogger(__name__)


def compile_pattern(
    pattern: str, flags: int = re.IGNORECASE
) -> Result[re.Pattern[str], PatternError]:
    try:
        return Result.success(re.compile(pattern, flags))
    except re.error as exc:
        logger.debug("Skipping malformed pattern %r: %s", pattern, exc)
        return Result.failure(PatternError(pattern=pattern, detail=str(exc)))


def search(pattern: str, text: str) -> bool:
    """True if ``pattern`` matches anywhere in ``text``; a bad pattern never matches."""
    compiled = compile_pattern(pattern)
    if not compiled.ok or compiled.value is None:
        return False
    return compiled.value.search(text) is not None


def find_all(pattern: str, text: str) -> list[str]:
    """Every full match of ``pattern`` in ``text``, stripped; a bad pattern finds nothing."""
    compiled = compile_pattern(pattern)
    if not compiled.ok or compiled.value is None:
        return []
    return [m.group(0).strip() for m in compiled.value.finditer(text)]


def term_pattern(term: str) -> str:
    """Whole-phrase pattern for a literal term ("red" must not match "hundred")."""
    return r"(?<!\w)" + re.escape(term) + r"(?!\w)"


def first_match(pattern: str, text: str) -> re.Match[str] | None:
    """The first match object, or ``None`` (also for a bad pattern)."""
    compiled = compile_pattern(pattern)
    if not compiled.ok or compiled.value is None:
        return None
    return compiled.value.search(text)
