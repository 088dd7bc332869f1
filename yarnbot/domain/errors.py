"""Domain errors (typed) for the matching engine.

None of these reach the caller of ``AnswerQuery``: the use case maps every
failure to a degraded reply. They exist so inner layers can report *what*
went wrong through ``Result`` values and logs.
"""

from dataclasses import dataclass


class DomainError(Exception):
    """Base class for domain-specific errors."""


@dataclass(frozen=True)
class UnknownTopicError(DomainError):
    """A scorer or classifier resolved to a topic the knowledge base lacks."""

    topic: str

    def __str__(self) -> str:
        return f"unknown knowledge base topic: {self.topic!r}"


@dataclass(frozen=True)
class PatternError(DomainError):
    """A rule pattern failed to compile or evaluate."""

    pattern: str
    detail: str = ""


class CatalogError(DomainError):
    """Product catalog collaborator failed or is misconfigured."""
