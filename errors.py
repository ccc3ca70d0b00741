"""
errors.py — Exception types
============================
Validation failures surface to the immediate caller as typed exceptions.
Nothing in the scoring code catches them; deciding on a fallback (e.g.
showing a "medium" bucket) is the caller's job.
"""


class StressEstimatorError(Exception):
    """Base class for every error raised by this project."""


class InvalidHeartRate(StressEstimatorError, ValueError):
    """Heart rate is non-numeric, non-finite, or outside [40, 200] BPM."""

    def __init__(self, heart_rate):
        self.heart_rate = heart_rate
        super().__init__(
            f"Invalid heart rate {heart_rate!r}: expected a finite value in [40, 200] BPM."
        )


class InsufficientSamples(StressEstimatorError, ValueError):
    """A sample series is too short for the requested computation."""

    def __init__(self, got: int, need: int):
        self.got = got
        self.need = need
        super().__init__(f"Need at least {need} samples, got {got}.")


class WeakSignal(StressEstimatorError):
    """Live signal quality dropped below the acceptance threshold."""

    def __init__(self, quality: float, threshold: float):
        self.quality = quality
        self.threshold = threshold
        super().__init__(
            f"Signal quality {quality:.2f} is below the required {threshold:.2f}. "
            "Cover the camera and flash completely with your fingertip."
        )


class InvalidSamples(StressEstimatorError, ValueError):
    """A sample series contains NaN or infinite values."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Sample series contains {count} non-finite value(s).")
