"""
model/heart_rate.py — Age buckets & heart-rate stress contribution
===================================================================

⚠️  DISCLAIMER: These are heuristic WELLNESS bands, not clinical ones.

────────────────────────────────────────────────────────────────────────
Age buckets
────────────────────────────────────────────────────────────────────────
Ages are mapped to one of six ranges:

    < 18, 18–25  →  "18-25"   (there is no separate bucket for minors)
    26–35        →  "26-35"
    36–45        →  "36-45"
    46–55        →  "46-55"
    56–65        →  "56-65"
    > 65         →  "65+"

Each range carries three (min, max) BPM pairs — normal, moderate, intense —
defined in config.HEART_RATE_RANGES.  The exercise bands shift down as age
increases.

────────────────────────────────────────────────────────────────────────
Heart-rate score
────────────────────────────────────────────────────────────────────────
Piecewise-linear contribution in [0, 1]:

    HR in normal band            →  0.2
    HR below normal.min          →  0.2 … 0.4   (capped at 0.4)
    normal.max < HR ≤ moderate.max →  0.2 … 0.5
    HR above moderate.max        →  0.5 … 1.0   (capped at 1.0)
────────────────────────────────────────────────────────────────────────
"""

import math
from dataclasses import dataclass
from numbers import Real

from config import AGE_RANGES, HEART_RATE_RANGES, HR_MIN_VALID_BPM, HR_MAX_VALID_BPM
from errors import InvalidHeartRate
from utils.logger import get_logger

logger = get_logger("model.heart_rate")


@dataclass(frozen=True)
class HeartRateBounds:
    """The three BPM bands for one age range."""
    normal: tuple[int, int]
    moderate: tuple[int, int]
    intense: tuple[int, int]


def bounds_for(age_range: str) -> HeartRateBounds:
    """Look up the BPM bands for an age-range key (KeyError if unknown)."""
    if age_range not in AGE_RANGES:
        raise KeyError(f"Unknown age range '{age_range}'. Choose from {list(AGE_RANGES)}.")
    return HeartRateBounds(
        normal=HEART_RATE_RANGES["normal"][age_range],
        moderate=HEART_RATE_RANGES["moderate"][age_range],
        intense=HEART_RATE_RANGES["intense"][age_range],
    )


def age_range_for(age: float) -> str:
    """Map any numeric age to one of the six age-range keys."""
    if age < 18:
        return "18-25"
    if age <= 25:
        return "18-25"
    if age <= 35:
        return "26-35"
    if age <= 45:
        return "36-45"
    if age <= 55:
        return "46-55"
    if age <= 65:
        return "56-65"
    return "65+"


def validate_heart_rate(heart_rate) -> float:
    """
    Return `heart_rate` as a float, or raise InvalidHeartRate.

    Booleans, None, strings, NaN/inf, and values outside [40, 200] are all
    rejected.
    """
    if isinstance(heart_rate, bool) or not isinstance(heart_rate, Real):
        raise InvalidHeartRate(heart_rate)
    value = float(heart_rate)
    if not math.isfinite(value) or value < HR_MIN_VALID_BPM or value > HR_MAX_VALID_BPM:
        raise InvalidHeartRate(heart_rate)
    return value


def heart_rate_score(heart_rate: float, age_range: str) -> float:
    """
    Convert a heart rate into a stress contribution in [0, 1].

    Parameters
    ----------
    heart_rate : float   Heart rate in BPM, must lie in [40, 200].
    age_range  : str     One of the six age-range keys.

    Raises
    ------
    InvalidHeartRate
        If `heart_rate` is not a finite number in [40, 200].
    """
    hr = validate_heart_rate(heart_rate)
    bounds = bounds_for(age_range)
    normal_min, normal_max = bounds.normal
    moderate_max = bounds.moderate[1]

    if normal_min <= hr <= normal_max:
        return 0.2

    if hr < normal_min:
        deviation = (normal_min - hr) / normal_min
        return min(0.4, 0.2 + deviation * 0.2)

    if hr <= moderate_max:
        span = moderate_max - normal_max
        if span <= 0:
            # Degenerate table row: no room to interpolate
            return 0.2
        deviation = (hr - normal_max) / span
        return 0.2 + deviation * 0.3

    deviation = (hr - moderate_max) / (moderate_max * 0.5)
    score = min(1.0, 0.5 + deviation * 0.5)
    logger.debug("HR %.1f above moderate band (%s) → score %.3f", hr, age_range, score)
    return score
