"""
Tests for the simulated source (`camera/simulator.py`), pulse-rate
estimation (`features/hr.py`) and the live-quality buffer (`pulse/buffer.py`).
"""

from __future__ import annotations

import numpy as np
import pytest

from camera.simulator import SimulatedPulseSource
from errors import InsufficientSamples, InvalidSamples, WeakSignal
from features import hr
from features.hr import analyze_pulse, beat_rates, estimate_pulse_rate, find_pulse_peaks
from pulse.buffer import PulseBuffer

FS = 30


def _clean_samples(bpm: float, seconds: int) -> list[float]:
    """Noise-free simulated samples."""
    source = SimulatedPulseSource(heart_rate_bpm=bpm, sample_rate=FS, noise=0.0)
    source.open()
    try:
        return source.read_many(seconds * FS)
    finally:
        source.release()


# ── Simulator ────────────────────────────────────────────────────────────────


def test_simulator_requires_open() -> None:
    source = SimulatedPulseSource()
    with pytest.raises(RuntimeError):
        source.read()


def test_simulator_is_reproducible_with_seed() -> None:
    a = SimulatedPulseSource(rng=np.random.default_rng(42))
    b = SimulatedPulseSource(rng=np.random.default_rng(42))
    a.open()
    b.open()
    assert a.read_many(100) == b.read_many(100)


def test_simulator_values_are_non_negative() -> None:
    source = SimulatedPulseSource(baseline=10.0, amplitude=80.0, rng=np.random.default_rng(0))
    source.open()
    assert min(source.read_many(300)) >= 0.0


def test_simulator_rejects_bad_sample_rate() -> None:
    with pytest.raises(ValueError):
        SimulatedPulseSource(sample_rate=0)


# ── Pulse rate ───────────────────────────────────────────────────────────────


def test_too_few_samples() -> None:
    with pytest.raises(InsufficientSamples):
        find_pulse_peaks([1.0, 2.0], FS)
    with pytest.raises(InsufficientSamples):
        estimate_pulse_rate([], FS)


def test_pulse_rate_from_clean_signal() -> None:
    samples = _clean_samples(72, 30)
    assert len(find_pulse_peaks(samples, FS)) == 36
    assert estimate_pulse_rate(samples, FS) == 72


def test_pulse_rate_is_clamped() -> None:
    # 40 BPM sine → 40 BPM counted → clamped up to 60
    assert estimate_pulse_rate(_clean_samples(40, 30), FS) == 60
    # Flat trace has no peaks at all
    assert estimate_pulse_rate([100.0] * 300, FS) == 60


def test_pulse_rate_with_noise() -> None:
    source = SimulatedPulseSource(heart_rate_bpm=90, sample_rate=FS, rng=np.random.default_rng(7))
    source.open()
    samples = source.read_many(30 * FS)
    assert 84 <= estimate_pulse_rate(samples, FS) <= 96


def test_beat_rates_clean_signal() -> None:
    rates = beat_rates(_clean_samples(72, 30), FS)
    assert len(rates) == 35
    assert rates == pytest.approx([72.0] * 35)


def test_beat_rates_without_peaks() -> None:
    assert beat_rates([100.0] * 50, FS) == []


def test_analyze_pulse_keys() -> None:
    result = analyze_pulse(_clean_samples(72, 10), FS)
    assert set(result) == {"hr_bpm", "num_peaks", "beat_rates"}
    assert result["hr_bpm"] == 72
    assert result["num_peaks"] == 12


def test_analyze_pulse_detects_peaks_once(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    original = hr.find_peaks

    def counting_find_peaks(*args, **kwargs):
        calls.append(1)
        return original(*args, **kwargs)

    monkeypatch.setattr(hr, "find_peaks", counting_find_peaks)
    result = analyze_pulse(_clean_samples(72, 10), FS)

    assert len(calls) == 1
    assert result["hr_bpm"] == 72
    assert len(result["beat_rates"]) == 11


def test_pulse_peaks_reject_nan() -> None:
    samples = _clean_samples(72, 5)
    samples[10] = float("nan")
    with pytest.raises(InvalidSamples):
        analyze_pulse(samples, FS)


# ── Buffer ───────────────────────────────────────────────────────────────────


def test_buffer_tracks_quality() -> None:
    buffer = PulseBuffer(sample_rate=FS)
    for value in _clean_samples(72, 2):
        quality = buffer.add_sample(value)
    assert len(buffer) == 60
    assert buffer.duration_seconds == pytest.approx(2.0)
    assert quality == buffer.quality
    assert buffer.quality > 0.7


def test_buffer_quality_gate_waits_for_warmup() -> None:
    buffer = PulseBuffer(sample_rate=FS, quality_threshold=0.7, warmup=30)
    for _ in range(30):
        buffer.add_sample(100.0)
        buffer.check_quality()

    buffer.add_sample(100.0)
    with pytest.raises(WeakSignal) as excinfo:
        buffer.check_quality()
    assert excinfo.value.quality == 0.0
    assert excinfo.value.threshold == 0.7


def test_buffer_good_signal_never_trips_gate() -> None:
    buffer = PulseBuffer(sample_rate=FS)
    source = SimulatedPulseSource(rng=np.random.default_rng(3))
    source.open()
    for _ in range(30 * FS):
        buffer.add_sample(source.read())
        buffer.check_quality()
    assert buffer.analyze()["hr_bpm"] == pytest.approx(72, abs=4)


def test_buffer_reset() -> None:
    buffer = PulseBuffer()
    buffer.add_sample(1.0)
    buffer.reset()
    assert len(buffer) == 0
    assert buffer.quality == 0.0
    assert buffer.samples == []
