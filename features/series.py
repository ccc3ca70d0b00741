"""
features/series.py — Sample series conversion
==============================================
Every statistic in this package runs on a float64 array.  A single NaN
would otherwise flow through `np.std` and come out of `min(1, …)` as a
perfect score, so non-finite samples are rejected up front.
"""

import numpy as np

from errors import InvalidSamples


def as_finite_array(samples) -> np.ndarray:
    """
    Convert `samples` to a 1-D float64 array.

    Raises
    ------
    InvalidSamples
        If any value is NaN or ±inf.
    """
    values = np.asarray(samples, dtype=np.float64)
    bad = int(np.count_nonzero(~np.isfinite(values)))
    if bad:
        raise InvalidSamples(bad)
    return values
