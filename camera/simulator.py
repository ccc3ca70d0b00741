"""
camera/simulator.py — Simulated fingertip-over-camera intensity source
========================================================================
Stands in for a real camera: each `read()` returns one average-pixel
light intensity, as if a fingertip were pressed over the lens and flash.

    intensity(t) = max(0, baseline + amplitude · sin(2π · f · t) + noise · U(0, 1))

with f = heart_rate_bpm / 60 and t = sample_index / sample_rate.  Time is
derived from the sample index (not the wall clock), so a source built with
a seeded generator always produces the same series.
"""

import numpy as np

from config import (
    SAMPLES_PER_SECOND,
    SIM_BASELINE_INTENSITY,
    SIM_HEART_RATE_BPM,
    SIM_NOISE_AMPLITUDE,
    SIM_PULSE_AMPLITUDE,
)
from utils.logger import get_logger

logger = get_logger("camera.simulator")


class SimulatedPulseSource:
    """Produces synthetic PPG-like intensity samples on demand."""

    def __init__(
        self,
        heart_rate_bpm: float = SIM_HEART_RATE_BPM,
        sample_rate: float = SAMPLES_PER_SECOND,
        baseline: float = SIM_BASELINE_INTENSITY,
        amplitude: float = SIM_PULSE_AMPLITUDE,
        noise: float = SIM_NOISE_AMPLITUDE,
        rng: np.random.Generator | None = None,
    ):
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}.")
        self.heart_rate_bpm = heart_rate_bpm
        self.sample_rate = sample_rate
        self.baseline = baseline
        self.amplitude = amplitude
        self.noise = noise
        self._rng = rng if rng is not None else np.random.default_rng()
        self._index = 0
        self.is_open = False

    # ── Public API ───────────────────────────────────────────────────────────

    def open(self) -> bool:
        """Start producing samples.  Always succeeds for the simulator."""
        if self.is_open:
            logger.warning("Source already open — ignoring duplicate open().")
            return True
        self._index = 0
        self.is_open = True
        logger.info(
            "Simulated source opened — %.0f BPM @ %.1f Hz (amplitude=%.1f, noise=%.1f)",
            self.heart_rate_bpm, self.sample_rate, self.amplitude, self.noise,
        )
        return True

    def release(self) -> None:
        self.is_open = False
        logger.info("Simulated source released after %d samples.", self._index)

    def read(self) -> float:
        """
        Return the next intensity sample.

        Raises
        ------
        RuntimeError
            If the source has not been opened.
        """
        if not self.is_open:
            raise RuntimeError("Source is not open. Call open() first.")
        t = self._index / self.sample_rate
        self._index += 1
        pulse = self.amplitude * np.sin(2 * np.pi * (self.heart_rate_bpm / 60.0) * t)
        jitter = self.noise * self._rng.random()
        return float(max(0.0, self.baseline + pulse + jitter))

    def read_many(self, count: int) -> list[float]:
        """Convenience: `count` consecutive samples."""
        return [self.read() for _ in range(count)]
