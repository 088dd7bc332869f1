"""Application settings with environment-driven configuration.

Why: the only place that reads the environment; every other layer gets
its configuration injected.
"""

import os
from dataclasses import dataclass, field

from yarnbot.domain.value_objects import ScoringWeights


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


def _float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else default


_DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables.

    This is the ONLY place where environment variables are read.
    All other layers receive settings via dependency injection.
    """

    # ===== Conversation =====
    random_seed: int | None = field(default_factory=lambda: _optional_int("YARNBOT_RANDOM_SEED"))
    # Set for reproducible phrasing (tests, demos); unset = fresh entropy per process

    timezone: str = field(default_factory=lambda: os.getenv("YARNBOT_TIMEZONE", "Asia/Kolkata"))
    # Greeting time of day follows this zone

    catalog_path: str = field(default_factory=lambda: os.getenv("YARNBOT_CATALOG_PATH", ""))
    # Empty string = no live product data in answers

    translations_path: str = field(
        default_factory=lambda: os.getenv("YARNBOT_TRANSLATIONS_PATH", "")
    )
    # Empty string = identity translation (English)

    # ===== Scoring =====
    semantic_weight: float = field(
        default_factory=lambda: _float("YARNBOT_SEMANTIC_WEIGHT", _DEFAULT_WEIGHTS.semantic)
    )
    relevance_weight: float = field(
        default_factory=lambda: _float("YARNBOT_RELEVANCE_WEIGHT", _DEFAULT_WEIGHTS.relevance)
    )
    threshold_clear: float = field(
        default_factory=lambda: _float("YARNBOT_THRESHOLD_CLEAR", _DEFAULT_WEIGHTS.threshold_clear)
    )
    threshold_ambiguous: float = field(
        default_factory=lambda: _float(
            "YARNBOT_THRESHOLD_AMBIGUOUS", _DEFAULT_WEIGHTS.threshold_ambiguous
        )
    )
    clear_winner_gap: float = field(
        default_factory=lambda: _float(
            "YARNBOT_CLEAR_WINNER_GAP", _DEFAULT_WEIGHTS.clear_winner_gap
        )
    )
    clarify_floor: float = field(
        default_factory=lambda: _float("YARNBOT_CLARIFY_FLOOR", _DEFAULT_WEIGHTS.clarify_floor)
    )

    # ===== Telemetry Configuration =====
    telemetry_enabled: bool = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENABLED", "false").lower() == "true"
    )
    otlp_endpoint: str = field(default_factory=lambda: os.getenv("OTLP_ENDPOINT", ""))
    # Empty string = no OTLP export

    telemetry_environment: str = field(
        default_factory=lambda: os.getenv("TELEMETRY_ENVIRONMENT", "production")
    )

    # ===== Logging =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    def scoring_weights(self) -> ScoringWeights:
        """Domain weights with the env overrides applied (validated by ScoringWeights)."""
        return ScoringWeights(
            semantic=self.semantic_weight,
            relevance=self.relevance_weight,
            threshold_clear=self.threshold_clear,
            threshold_ambiguous=self.threshold_ambiguous,
            clear_winner_gap=self.clear_winner_gap,
            clarify_floor=self.clarify_floor,
        )
