"""
model/stress.py — Stress Level Classification
===============================================

⚠️  DISCLAIMER: This is a heuristic WELLNESS INDICATOR, not a validated
    clinical stress measure.  Psychological stress is multi-factorial and
    cannot be reliably inferred from a short camera recording.

────────────────────────────────────────────────────────────────────────
Scoring
────────────────────────────────────────────────────────────────────────
Four sub-scores in [0, 1] are combined with fixed weights:

    total = 0.4 · heart_rate + 0.3 · variability + 0.2 · quality + 0.1 · trend

The heart-rate sub-score comes from model.heart_rate; the other three are
supplied by the caller (typically from features.hrv, features.quality and
features.trend) and default to 0.5 / 0.8 / 0.5 when omitted.

The total is clamped to [0, 1] and bucketed:

    total ≤ 0.3   →  low
    total ≤ 0.6   →  medium
    otherwise     →  high
────────────────────────────────────────────────────────────────────────
"""

from enum import Enum
from typing import Mapping, Optional

from config import (
    DEFAULT_AGE,
    DEFAULT_QUALITY,
    DEFAULT_TREND,
    DEFAULT_VARIABILITY,
    STRESS_COLORS,
    STRESS_FACTORS,
    STRESS_THRESHOLD_LOW,
    STRESS_THRESHOLD_MEDIUM,
    UNKNOWN_STRESS_COLOR,
)
from model.heart_rate import age_range_for, heart_rate_score
from utils.logger import get_logger

logger = get_logger("model.stress")


class StressBucket(str, Enum):
    """Three ordered stress categories."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        """Legacy display label ("bajo" / "medio" / "alto")."""
        return _LEGACY_LABELS[self]

    @classmethod
    def parse(cls, value) -> "StressBucket":
        """
        Case-insensitive lookup accepting both the English values and the
        legacy labels.  Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown stress level '{value}'.") from None


_LEGACY_LABELS = {
    StressBucket.LOW: "bajo",
    StressBucket.MEDIUM: "medio",
    StressBucket.HIGH: "alto",
}

_ALIASES = {
    "low": StressBucket.LOW,
    "bajo": StressBucket.LOW,
    "medium": StressBucket.MEDIUM,
    "medio": StressBucket.MEDIUM,
    "moderate": StressBucket.MEDIUM,
    "moderado": StressBucket.MEDIUM,
    "high": StressBucket.HIGH,
    "alto": StressBucket.HIGH,
}


def parse_bucket(value, default: Optional[StressBucket] = None) -> Optional[StressBucket]:
    """Like StressBucket.parse, but return `default` for unknown labels."""
    try:
        return StressBucket.parse(value)
    except ValueError:
        return default


def bucket_for_score(score: float) -> StressBucket:
    """Apply the low / medium thresholds to a total score."""
    if score <= STRESS_THRESHOLD_LOW:
        return StressBucket.LOW
    if score <= STRESS_THRESHOLD_MEDIUM:
        return StressBucket.MEDIUM
    return StressBucket.HIGH


def _factor(factors: Mapping[str, Optional[float]], name: str, default: float) -> float:
    value = factors.get(name)
    return default if value is None else float(value)


def stress_score(
    heart_rate: float,
    age: Optional[float] = DEFAULT_AGE,
    factors: Optional[Mapping[str, Optional[float]]] = None,
) -> float:
    """
    Weighted total stress score in [0, 1].

    Parameters
    ----------
    heart_rate : float                 Heart rate in BPM, must lie in [40, 200].
    age        : float | None          Age in years (None → 30).
    factors    : mapping | None        Optional `variability`, `quality`, `trend`
                                       overrides, each in [0, 1].

    Raises
    ------
    InvalidHeartRate
        Propagated from the heart-rate scorer.
    """
    if age is None:
        age = DEFAULT_AGE
    factors = factors or {}

    age_range = age_range_for(age)
    hr_score = heart_rate_score(heart_rate, age_range)
    variability = _factor(factors, "variability", DEFAULT_VARIABILITY)
    quality = _factor(factors, "quality", DEFAULT_QUALITY)
    trend = _factor(factors, "trend", DEFAULT_TREND)

    total = (
        hr_score * STRESS_FACTORS["heart_rate"]
        + variability * STRESS_FACTORS["variability"]
        + quality * STRESS_FACTORS["quality"]
        + trend * STRESS_FACTORS["trend"]
    )
    total = max(0.0, min(1.0, total))

    logger.debug(
        "Stress score: hr=%.1f (%s → %.3f), var=%.2f, quality=%.2f, trend=%.2f → %.3f",
        heart_rate, age_range, hr_score, variability, quality, trend, total,
    )
    return total


def classify_stress(
    heart_rate: float,
    age: Optional[float] = DEFAULT_AGE,
    factors: Optional[Mapping[str, Optional[float]]] = None,
) -> StressBucket:
    """
    Classify a heart rate (plus optional factors) into a StressBucket.

    An invalid heart rate raises InvalidHeartRate; callers that need a
    fallback bucket must catch it themselves.
    """
    return bucket_for_score(stress_score(heart_rate, age, factors))


def color_for_bucket(bucket) -> str:
    """Hex colour token for a bucket; grey for unrecognised labels."""
    parsed = parse_bucket(bucket)
    if parsed is None:
        return UNKNOWN_STRESS_COLOR
    return STRESS_COLORS[parsed.value]


def measurement_reliability(heart_rate: float, quality: float, variability: float) -> float:
    """
    How much to trust a single measurement, in [0, 1].

        0.4 · quality + 0.3 · min(1, variability / 0.5) + 0.3 · hr_plausibility

    where hr_plausibility is 1.0 inside the 60–100 BPM resting band and 0.7
    outside it.
    """
    variability_score = min(1.0, variability / 0.5)
    hr_score = 1.0 if 60 <= heart_rate <= 100 else 0.7
    reliability = quality * 0.4 + variability_score * 0.3 + hr_score * 0.3
    return min(1.0, max(0.0, reliability))
