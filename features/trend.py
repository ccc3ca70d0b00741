"""
features/trend.py — Heart-rate trend via least-squares slope
=============================================================
Fits an ordinary least-squares line through the most recent (up to 10)
heart-rate samples, with x = sample index 0 … n−1:

    slope = (n·Σxy − Σx·Σy) / (n·Σx² − (Σx)²)

and maps it to [0, 1]:

    trend = clamp((slope + 5) / 10, 0, 1)

A rising heart rate gives trend > 0.5, a falling one < 0.5, a flat one
exactly 0.5.  Fewer than 5 samples also return the neutral 0.5.

`window_seconds` is accepted for API compatibility but does NOT filter
the samples; the window is always "last 10 samples".

NaN or infinite samples raise `InvalidSamples`, including ones that fall
outside the last-10 window.
"""

import numpy as np

from config import (
    TREND_DEFAULT_WINDOW_SECONDS,
    TREND_MAX_SAMPLES,
    TREND_MIN_SAMPLES,
    TREND_SLOPE_RANGE,
)
from features.series import as_finite_array
from utils.logger import get_logger

logger = get_logger("features.trend")


def trend_slope(samples) -> float:
    """Closed-form OLS slope of `samples` against their index."""
    y = as_finite_array(samples)
    n = len(y)
    x = np.arange(n, dtype=np.float64)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_x2 = (x * x).sum()

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return 0.0   # n ≤ 1
    return float((n * sum_xy - sum_x * sum_y) / denominator)


def analyze_trend(samples, window_seconds: float = TREND_DEFAULT_WINDOW_SECONDS) -> float:
    """
    Trend contribution in [0, 1] for a heart-rate series.

    Parameters
    ----------
    samples        : sequence of float   Heart-rate values, oldest first.
    window_seconds : float               Ignored (see module docstring).
    """
    if samples is None or len(samples) < TREND_MIN_SAMPLES:
        return 0.5

    values = as_finite_array(samples)
    recent = values[-min(TREND_MAX_SAMPLES, len(values)):]
    slope = trend_slope(recent)
    trend = (slope + TREND_SLOPE_RANGE) / (2 * TREND_SLOPE_RANGE)

    logger.debug("Trend over %d samples: slope=%.3f → %.3f", len(recent), slope, trend)
    return float(np.clip(trend, 0.0, 1.0))
