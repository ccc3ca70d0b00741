"""
pulse/buffer.py — Intensity sample buffer with live quality gate
=================================================================
Accumulates per-frame intensities for one measurement and tracks the live
signal quality after every sample:

    add_sample(x)  →  quality recomputed over everything seen so far

Once more than `warmup` samples have arrived, `check_quality()` raises
WeakSignal if the live quality is below the acceptance threshold, so the
measurement can be aborted early instead of running to completion on a bad
signal.
"""

from config import MIN_QUALITY_THRESHOLD, QUALITY_WARMUP_SAMPLES, SAMPLES_PER_SECOND
from errors import WeakSignal
from features.hr import analyze_pulse
from features.quality import estimate_signal_quality
from utils.logger import get_logger

logger = get_logger("pulse.buffer")


class PulseBuffer:
    """
    Stateful collector of raw intensity samples.

    Parameters
    ----------
    sample_rate       : float   Samples per second.
    quality_threshold : float   Minimum live quality once warm-up is over.
    warmup            : int     Samples to accept before the quality gate applies.
    """

    def __init__(
        self,
        sample_rate: float = SAMPLES_PER_SECOND,
        quality_threshold: float = MIN_QUALITY_THRESHOLD,
        warmup: int = QUALITY_WARMUP_SAMPLES,
    ):
        self.sample_rate = sample_rate
        self.quality_threshold = quality_threshold
        self.warmup = warmup
        self._samples: list[float] = []
        self._quality = 0.0

    # ── Public API ───────────────────────────────────────────────────────────

    def add_sample(self, value: float) -> float:
        """Append one sample and return the updated live quality."""
        self._samples.append(float(value))
        self._quality = estimate_signal_quality(self._samples)
        return self._quality

    @property
    def samples(self) -> list[float]:
        return list(self._samples)

    @property
    def quality(self) -> float:
        return self._quality

    def __len__(self) -> int:
        return len(self._samples)

    @property
    def duration_seconds(self) -> float:
        return len(self._samples) / self.sample_rate

    def check_quality(self) -> None:
        """
        Raise WeakSignal if warm-up is over and the live quality is too low.
        """
        if len(self._samples) > self.warmup and self._quality < self.quality_threshold:
            logger.warning(
                "Live quality %.2f below %.2f after %d samples.",
                self._quality, self.quality_threshold, len(self._samples),
            )
            raise WeakSignal(self._quality, self.quality_threshold)

    def analyze(self) -> dict:
        """Run pulse analysis over the buffered samples (see features.hr)."""
        return analyze_pulse(self._samples, self.sample_rate)

    def reset(self) -> None:
        """Clear the buffer — call between measurements."""
        self._samples.clear()
        self._quality = 0.0
        logger.debug("Pulse buffer reset.")
