"""
api/session.py — Measurement Session Manager
==============================================
Owns the pulse source and buffer and orchestrates a single end-to-end
measurement in a background thread.  The FastAPI routes interact with
this object to start measurements, poll progress, and retrieve results.

Thread safety
-------------
All mutable state that is read by the FastAPI request handlers and
written by the measurement thread is protected by `_lock`.  The public
properties (`status`, `progress`, `error_message`) and `get_result()`
acquire the lock before reading.

Lifecycle
---------
    1. `set_profile(...)` — optional; age defaults to 30.
    2. `start_measurement(...)` — launches the background sampling thread.
    3. Poll `status` / `progress` from the client.
    4. When `status == "complete"`, call `get_result()`.
    5. `reset()` — prepare for the next measurement.

Every run is tagged with a generation number.  `start_measurement()` and
`reset()` bump it; a run whose generation is stale stops sampling at the
next sample and never writes progress, status or result.
"""

import threading
import time
from typing import Callable

import numpy as np

from api.schemas import UserProfile
from camera.simulator import SimulatedPulseSource
from config import MEASUREMENT_DURATION_SECONDS, SAMPLES_PER_SECOND, SIM_HEART_RATE_BPM
from errors import StressEstimatorError
from features.hrv import estimate_hrv
from features.trend import analyze_trend
from model.advice import advice_for_bucket, interpretation_for_bucket, measurement_recommendations
from model.measurement import MeasurementResult
from model.stress import classify_stress, color_for_bucket, measurement_reliability
from pulse.buffer import PulseBuffer
from utils.logger import get_logger

logger = get_logger("api.session")

# ── Disclaimer string injected into every response ──────────────────────────
DISCLAIMER = (
    "⚠️ This is a WELLNESS DEMO — NOT a medical device. "
    "Heart rate and stress values are heuristic ESTIMATES computed from a "
    "simulated camera light-intensity signal. "
    "Do NOT make medical decisions based on these readings."
)

SourceFactory = Callable[..., SimulatedPulseSource]


class MeasurementSession:
    """
    Manages the full lifecycle of one simulated measurement.

    Parameters
    ----------
    source_factory : callable   Builds the pulse source; receives
                                `heart_rate_bpm`, `sample_rate` and `rng`.
    sample_rate    : float      Samples per second.
    realtime       : bool       Pace sampling at `sample_rate` (False in tests).
    """

    def __init__(
        self,
        source_factory: SourceFactory = SimulatedPulseSource,
        sample_rate: float = SAMPLES_PER_SECOND,
        realtime: bool = True,
    ):
        self._lock = threading.Lock()
        self._source_factory = source_factory
        self._sample_rate = sample_rate
        self._realtime = realtime

        # State
        self._status = "idle"            # idle | measuring | complete | error
        self._progress = 0.0             # 0–100
        self._error_message = ""
        self._result: dict | None = None
        self._profile = UserProfile()
        self._thread: threading.Thread | None = None
        self._generation = 0

        logger.info("MeasurementSession initialised.")

    # ── Public API ─────────────────────────────────────────────────────────

    def set_profile(self, profile: UserProfile) -> None:
        """Store the user's age for heart-rate bucketing."""
        with self._lock:
            self._profile = profile
        logger.info("Profile set: age=%d", profile.age)

    @property
    def profile(self) -> UserProfile:
        with self._lock:
            return self._profile

    @property
    def status(self) -> str:
        with self._lock:
            return self._status

    @property
    def progress(self) -> float:
        with self._lock:
            return self._progress

    @property
    def error_message(self) -> str:
        with self._lock:
            return self._error_message

    def get_result(self) -> dict | None:
        with self._lock:
            return self._result

    def start_measurement(
        self,
        duration_seconds: int = MEASUREMENT_DURATION_SECONDS,
        simulated_heart_rate: float = SIM_HEART_RATE_BPM,
        seed: int | None = None,
    ) -> bool:
        """
        Launch the measurement in a background thread.

        Returns False if a measurement is already running.
        """
        with self._lock:
            if self._status == "measuring":
                logger.warning("Measurement already in progress.")
                return False
            self._generation += 1
            generation = self._generation
            self._status = "measuring"
            self._progress = 0.0
            self._result = None
            self._error_message = ""

        self._thread = threading.Thread(
            target=self._run_measurement,
            args=(duration_seconds, simulated_heart_rate, seed, generation),
            daemon=True,
        )
        self._thread.start()
        logger.info(
            "Measurement thread started (duration=%ds, simulated HR=%.0f BPM).",
            duration_seconds, simulated_heart_rate,
        )
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the measurement thread finishes; True if it did."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout=timeout)
        return not thread.is_alive()

    def reset(self) -> None:
        """Reset session to idle state, cancelling any running measurement."""
        with self._lock:
            self._generation += 1
            self._status = "idle"
            self._progress = 0.0
            self._result = None
            self._error_message = ""
        logger.info("Session reset.")

    def measure(
        self,
        duration_seconds: int = MEASUREMENT_DURATION_SECONDS,
        simulated_heart_rate: float = SIM_HEART_RATE_BPM,
        seed: int | None = None,
    ) -> dict | None:
        """
        Run one measurement synchronously and return the full payload.

        Raises
        ------
        WeakSignal
            If the live quality drops below the threshold after warm-up.
        InsufficientSamples
            If the recording is too short to find any peaks.

        Returns None if `reset()` or a new measurement cancels this one.
        """
        with self._lock:
            generation = self._generation
        return self._measure(duration_seconds, simulated_heart_rate, seed, generation)

    # ── Private ────────────────────────────────────────────────────────────

    def _measure(
        self,
        duration_seconds: int,
        simulated_heart_rate: float,
        seed: int | None,
        generation: int,
    ) -> dict | None:
        rng = np.random.default_rng(seed)
        source = self._source_factory(
            heart_rate_bpm=simulated_heart_rate,
            sample_rate=self._sample_rate,
            rng=rng,
        )
        buffer = PulseBuffer(sample_rate=self._sample_rate)
        total = max(1, int(duration_seconds * self._sample_rate))
        interval = 1.0 / self._sample_rate

        source.open()
        try:
            for i in range(total):
                buffer.add_sample(source.read())
                buffer.check_quality()

                pct = min((i + 1) / total * 100.0, 100.0)
                with self._lock:
                    if self._generation != generation:
                        logger.info("Measurement cancelled after %d samples.", len(buffer))
                        return None
                    self._progress = round(pct, 1)

                if self._realtime:
                    time.sleep(interval)
        finally:
            source.release()

        logger.info("Sampling complete (%d samples). Scoring…", len(buffer))
        return self._score(buffer, rng)

    def _score(self, buffer: PulseBuffer, rng: np.random.Generator) -> dict:
        """
        buffer → pulse rate → HRV / trend over beat rates → stress bucket
        → advice & interpretation.
        """
        pulse = buffer.analyze()
        heart_rate = pulse["hr_bpm"]
        rates = pulse["beat_rates"]

        quality = buffer.quality
        hrv = estimate_hrv(rates)
        trend = analyze_trend(rates)
        age = self.profile.age

        level = classify_stress(
            heart_rate,
            age,
            {"variability": hrv, "quality": quality, "trend": trend},
        )

        result = MeasurementResult.build(
            heart_rate=heart_rate,
            stress_level=level,
            hrv=round(hrv, 4),
            quality=round(quality, 4),
        )

        logger.info(
            "Measurement complete. HR=%d BPM, stress=%s, quality=%d%%",
            heart_rate, level.value, result.quality_percent,
        )

        return {
            "disclaimer": DISCLAIMER,
            "result": result,
            "label": level.label,
            "color": color_for_bucket(level),
            "advice": advice_for_bucket(level, rng=rng),
            "interpretation": interpretation_for_bucket(level, heart_rate, age),
            "recommendations": measurement_recommendations(quality, level),
            "reliability": round(measurement_reliability(heart_rate, quality, hrv), 4),
        }

    def _run_measurement(
        self,
        duration_seconds: int,
        simulated_heart_rate: float,
        seed: int | None,
        generation: int,
    ) -> None:
        try:
            payload = self._measure(duration_seconds, simulated_heart_rate, seed, generation)
        except StressEstimatorError as e:
            self._set_error(str(e), generation)
            return
        except Exception as e:
            self._set_error(f"Unexpected error during measurement: {e}", generation)
            logger.exception("Measurement failed with exception:")
            return

        if payload is None:
            return
        with self._lock:
            if self._generation != generation:
                logger.info("Discarding result of a cancelled measurement.")
                return
            self._status = "complete"
            self._progress = 100.0
            self._result = payload

    def _set_error(self, message: str, generation: int) -> None:
        with self._lock:
            if self._generation != generation:
                return
            self._status = "error"
            self._error_message = message
        logger.error("Measurement error: %s", message)
