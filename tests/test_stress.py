"""
Tests for the weighted stress classifier in `model/stress.py`.

Covers:
- Default factors and the documented example scores
- Explicit zero factors are honoured (only None means "absent")
- Threshold edges and score clamping
- Bucket parsing (English + legacy labels, case-insensitive) and colours
- InvalidHeartRate propagates out of the classifier
- Measurement reliability weighting
"""

from __future__ import annotations

import math

import pytest

from errors import InvalidHeartRate
from model.stress import (
    StressBucket,
    bucket_for_score,
    classify_stress,
    color_for_bucket,
    measurement_reliability,
    parse_bucket,
    stress_score,
)


def test_default_factors_medium() -> None:
    assert stress_score(75, 30) == pytest.approx(0.44)
    assert classify_stress(75, 30) is StressBucket.MEDIUM


def test_below_normal_medium() -> None:
    assert stress_score(45, 30) == pytest.approx(0.46)
    assert classify_stress(45, 30) is StressBucket.MEDIUM


def test_missing_age_defaults_to_thirty() -> None:
    assert stress_score(120, None) == stress_score(120, 30)
    assert stress_score(120) == stress_score(120, 30)


def test_explicit_zero_factors_are_used() -> None:
    factors = {"variability": 0.0, "quality": 0.3, "trend": 0.0}
    assert stress_score(75, 30, factors) == pytest.approx(0.08 + 0.06)
    assert classify_stress(75, 30, factors) is StressBucket.LOW


def test_none_factors_fall_back_to_defaults() -> None:
    factors = {"variability": None, "quality": None, "trend": None}
    assert stress_score(75, 30, factors) == pytest.approx(0.44)


def test_high_stress() -> None:
    factors = {"variability": 1.0, "quality": 1.0, "trend": 1.0}
    # 65+: 0.5 + (55 / 62.5) * 0.5 = 0.94
    assert stress_score(180, 70, factors) == pytest.approx(0.94 * 0.4 + 0.6)
    assert classify_stress(180, 70, factors) is StressBucket.HIGH


def test_score_is_clamped() -> None:
    factors = {"variability": 5.0, "quality": 5.0, "trend": 5.0}
    assert stress_score(75, 30, factors) == 1.0
    factors = {"variability": -5.0, "quality": -5.0, "trend": -5.0}
    assert stress_score(75, 30, factors) == 0.0


@pytest.mark.parametrize(
    "score, expected",
    [
        (0.0, StressBucket.LOW),
        (0.3, StressBucket.LOW),
        (0.3001, StressBucket.MEDIUM),
        (0.6, StressBucket.MEDIUM),
        (0.6001, StressBucket.HIGH),
        (1.0, StressBucket.HIGH),
    ],
)
def test_bucket_thresholds(score: float, expected: StressBucket) -> None:
    assert bucket_for_score(score) is expected


def test_classification_is_deterministic() -> None:
    factors = {"variability": 0.42, "quality": 0.9, "trend": 0.61}
    results = {classify_stress(133, 52, factors) for _ in range(20)}
    assert len(results) == 1


@pytest.mark.parametrize("bad", [math.nan, 300, 20, None])
def test_invalid_heart_rate_propagates(bad) -> None:
    with pytest.raises(InvalidHeartRate):
        classify_stress(bad)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("low", StressBucket.LOW),
        ("BAJO", StressBucket.LOW),
        ("Medio", StressBucket.MEDIUM),
        ("Moderado", StressBucket.MEDIUM),
        (" high ", StressBucket.HIGH),
        ("alto", StressBucket.HIGH),
        (StressBucket.MEDIUM, StressBucket.MEDIUM),
    ],
)
def test_parse_bucket(raw, expected: StressBucket) -> None:
    assert StressBucket.parse(raw) is expected


def test_parse_unknown_bucket() -> None:
    with pytest.raises(ValueError):
        StressBucket.parse("extreme")
    assert parse_bucket("extreme") is None
    assert parse_bucket("extreme", default=StressBucket.MEDIUM) is StressBucket.MEDIUM


def test_legacy_labels() -> None:
    assert [b.label for b in StressBucket] == ["bajo", "medio", "alto"]


def test_colors() -> None:
    assert color_for_bucket(StressBucket.LOW) == "#4CAF50"
    assert color_for_bucket("medio") == "#FF9800"
    assert color_for_bucket("ALTO") == "#F44336"
    assert color_for_bucket("unknown") == "#666666"


def test_measurement_reliability() -> None:
    assert measurement_reliability(75, 0.8, 0.25) == pytest.approx(0.32 + 0.15 + 0.3)
    assert measurement_reliability(130, 1.0, 1.0) == pytest.approx(0.4 + 0.3 + 0.21)
    assert 0.0 <= measurement_reliability(50, 0.0, 0.0) <= 1.0
