"""
features/hr.py — Pulse rate from raw light intensity
=====================================================
The fingertip-over-camera trace is treated as a crude pulse waveform:
every local maximum is one beat.

Peak detection uses `scipy.signal.find_peaks` with

* a minimum spacing of 0.4 s (→ at most 150 BPM) so that sensor noise
  riding on the crest of a pulse is not counted twice, and
* an adaptive prominence of 0.3 × the signal range.

Two outputs are derived from the peaks:

1. **Pulse rate** — peaks counted over the whole recording, converted to
   BPM and clamped to the 60–120 BPM resting window.
2. **Beat rates** — instantaneous BPM from each inter-peak interval.  This
   is the heart-rate series that feeds features.hrv and features.trend.
"""

import numpy as np
from scipy.signal import find_peaks

from config import (
    PULSE_MIN_PEAK_SPACING_SECONDS,
    PULSE_RATE_MAX_BPM,
    PULSE_RATE_MIN_BPM,
)
from errors import InsufficientSamples
from features.series import as_finite_array
from utils.logger import get_logger

logger = get_logger("features.hr")

MIN_PULSE_SAMPLES = 3


def find_pulse_peaks(samples, fs: float) -> np.ndarray:
    """
    Indices of the beats in a raw intensity series.

    Raises
    ------
    InsufficientSamples
        If fewer than 3 samples are given (a peak needs two neighbours).
    InvalidSamples
        If a sample is NaN or infinite.
    """
    signal = as_finite_array(samples)
    if signal.size < MIN_PULSE_SAMPLES:
        raise InsufficientSamples(int(signal.size), MIN_PULSE_SAMPLES)

    prominence_threshold = 0.3 * (signal.max() - signal.min())
    distance = max(1, int(fs * PULSE_MIN_PEAK_SPACING_SECONDS))
    peaks, _ = find_peaks(signal, prominence=prominence_threshold, distance=distance)
    return peaks


def _rate_from_peaks(peaks: np.ndarray, num_samples: int, fs: float) -> int:
    duration_minutes = num_samples / fs / 60.0
    bpm = round(len(peaks) / duration_minutes)
    return int(np.clip(bpm, PULSE_RATE_MIN_BPM, PULSE_RATE_MAX_BPM))


def _rates_from_peaks(peaks: np.ndarray, fs: float) -> list[float]:
    if len(peaks) < 2:
        return []
    intervals = np.diff(peaks) / fs          # seconds between beats
    return [float(60.0 / interval) for interval in intervals]


def estimate_pulse_rate(samples, fs: float) -> int:
    """
    Whole-recording pulse rate in BPM, rounded and clamped to [60, 120].

    Parameters
    ----------
    samples : sequence of float   Raw intensities sampled at `fs` Hz.
    fs      : float               Sampling frequency (Hz).
    """
    return _rate_from_peaks(find_pulse_peaks(samples, fs), len(samples), fs)


def beat_rates(samples, fs: float) -> list[float]:
    """Instantaneous BPM for every pair of consecutive peaks (unclamped)."""
    return _rates_from_peaks(find_pulse_peaks(samples, fs), fs)


def analyze_pulse(samples, fs: float) -> dict:
    """
    Pulse rate plus the per-beat heart-rate series, from a single peak pass.

    Returns
    -------
    dict with keys:
        hr_bpm     : int           Clamped whole-recording pulse rate.
        num_peaks  : int           Beats detected.
        beat_rates : list[float]   Instantaneous BPM per beat interval.
    """
    peaks = find_pulse_peaks(samples, fs)
    hr_bpm = _rate_from_peaks(peaks, len(samples), fs)
    rates = _rates_from_peaks(peaks, fs)

    logger.info(
        "Pulse estimate: %d BPM from %d peaks over %.1f s",
        hr_bpm, len(peaks), len(samples) / fs,
    )

    return {
        "hr_bpm": hr_bpm,
        "num_peaks": int(len(peaks)),
        "beat_rates": [round(r, 2) for r in rates],
    }
