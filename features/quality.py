"""
features/quality.py — Signal quality from raw intensity variance
=================================================================
In this heuristic a *more variable* intensity series means a *better*
signal: a fingertip pressed over the lens and flash produces a pulsatile
waveform riding on a steady baseline, whereas an uncovered or misplaced
finger gives a nearly flat trace.

    quality = min(1, std(samples) / 50)     (population std)

Series shorter than 10 samples return 0.0 (low confidence, not an error).
NaN or infinite samples in a scoreable series raise `InvalidSamples`.
"""

import numpy as np

from config import QUALITY_MIN_SAMPLES, QUALITY_STD_SCALE
from features.series import as_finite_array


def estimate_signal_quality(samples) -> float:
    """
    Quality score in [0, 1] for a raw light-intensity series.

    Parameters
    ----------
    samples : sequence of float   Raw per-frame intensities.

    Raises
    ------
    InvalidSamples
        If a sample is NaN or infinite.
    """
    if samples is None or len(samples) < QUALITY_MIN_SAMPLES:
        return 0.0

    values = as_finite_array(samples)
    return min(1.0, float(np.std(values)) / QUALITY_STD_SCALE)
