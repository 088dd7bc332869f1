from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(slots=True, frozen=True)
class ScoringWeights:
    """Tunable constants of the topic scorer and its acceptance gate.

    Defaults are the empirically chosen values the site shipped with; none
    of them has a derivation, so every one is overridable (see AppSettings).
    """

    semantic: float = 0.3
    relevance: float = 0.35

    # Relevance: share of the semantic score, then an amount per matching
    # query token (keyword hits decay with position); clamped to [0, 1]
    relevance_semantic: float = 0.2
    relevance_keyword: float = 0.2
    relevance_fuzzy: float = 0.1
    relevance_topic: float = 0.05
    relevance_exact: float = 0.1
    fuzzy_threshold: float = 0.25

    yarn_type_bonus: float = 0.25
    certification_bonus: float = 0.2
    color_bonus: float = 0.15
    context_bonus: float = 0.05
    preference_bonus: float = 0.1

    clear_winner_gap: float = 0.15
    threshold_clear: float = 0.18
    threshold_ambiguous: float = 0.25
    clarify_floor: float = 0.10

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0.0:
                raise ValueError(f"{f.name} must be non-negative")
        for name in ("threshold_clear", "threshold_ambiguous", "clarify_floor", "fuzzy_threshold"):
            if getattr(self, name) > 1.0:
                raise ValueError(f"{name} must be between 0 and 1")
        if self.clarify_floor > min(self.threshold_clear, self.threshold_ambiguous):
            raise ValueError("clarify_floor must not exceed the acceptance thresholds")
