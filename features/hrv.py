"""
features/hrv.py — Normalised heart-rate variability
====================================================
A *variability statistic* over a heart-rate series, not clinical HRV.

    diffs = |hr[i] − hr[i−1]|           (successive absolute differences)
    hrv   = min(1, std(diffs) / 20)     (population std)

⚠️  This is NOT RMSSD or SDNN.  Series shorter than 10 samples return 0.0
    rather than raising — a short series simply carries no variability
    information.
"""

import numpy as np

from config import HRV_MIN_SAMPLES, HRV_STD_SCALE
from features.series import as_finite_array
from utils.logger import get_logger

logger = get_logger("features.hrv")


def estimate_hrv(samples) -> float:
    """
    Normalised variability of a heart-rate series, in [0, 1].

    Parameters
    ----------
    samples : sequence of float   Heart-rate values in insertion order.

    Returns
    -------
    float
        0.0 when fewer than 10 samples are available.

    Raises
    ------
    InvalidSamples
        If a sample is NaN or infinite.
    """
    if samples is None or len(samples) < HRV_MIN_SAMPLES:
        logger.debug(
            "HRV needs %d samples, got %d — returning 0.",
            HRV_MIN_SAMPLES, 0 if samples is None else len(samples),
        )
        return 0.0

    values = as_finite_array(samples)
    diffs = np.abs(np.diff(values))
    std = float(np.std(diffs))           # ddof=0, population std

    return min(1.0, std / HRV_STD_SCALE)
