"""
model/advice.py — Advice, interpretation & measurement tips
============================================================
Maps a stress bucket to human-readable text.

Advice selection is random (uniform over a fixed per-bucket list).  Pass a
seeded `numpy.random.Generator` as `rng` to make it reproducible; without
one a fresh unseeded generator is used.
"""

import numpy as np

from model.stress import StressBucket, parse_bucket

_ADVICE = {
    StressBucket.LOW: (
        "Keep up your current routine, your wellbeing is in great shape.",
        "Carry on with the activities that relax you and make you happy.",
        "Practise gratitude daily to keep your positive state.",
        "Consider sharing your relaxation techniques with others.",
    ),
    StressBucket.MEDIUM: (
        "Identify the sources of stress in your daily life.",
        "Practise breathing exercises three times a day.",
        "Set healthy boundaries at work and in your relationships.",
        "Spend 20 minutes a day on relaxing activities.",
        "Consider cutting down on caffeine and alcohol.",
    ),
    StressBucket.HIGH: (
        "Make self-care and relaxation your priority right now.",
        "Consider seeking professional help if the stress persists.",
        "Use emergency breathing whenever you feel overwhelmed.",
        "Temporarily drop any responsibilities that are not essential.",
        "Keep a strict sleep routine of 7-8 hours.",
        "Remove or reduce toxic sources of stress in your life.",
    ),
}

_INTERPRETATIONS = {
    StressBucket.LOW: {
        "description": "Your stress level is within a healthy range.",
        "meaning": "Your nervous system appears to be working optimally.",
        "recommendation": "Keep your current habits and wellbeing routines.",
    },
    StressBucket.MEDIUM: {
        "description": "Your stress level is moderately elevated.",
        "meaning": "You may be facing some challenges in your life right now.",
        "recommendation": "Consider adopting regular relaxation techniques.",
    },
    StressBucket.HIGH: {
        "description": "Your stress level is significantly elevated.",
        "meaning": "Your body appears to be in a chronic stress response.",
        "recommendation": "Prioritise self-care and consider seeking professional support.",
    },
}

ELEVATED_HR_CONTEXT = (
    " Your elevated heart rate suggests your body is working harder than usual."
)
LOW_HR_CONTEXT = (
    " Your low heart rate may reflect good physical fitness or relaxation."
)


def advice_options(bucket) -> tuple[str, ...]:
    """All advice candidates for a bucket (unknown labels → medium)."""
    return _ADVICE[parse_bucket(bucket, default=StressBucket.MEDIUM)]


def advice_for_bucket(bucket, rng: np.random.Generator | None = None) -> str:
    """Pick one advice string uniformly at random from the bucket's list."""
    options = advice_options(bucket)
    rng = rng if rng is not None else np.random.default_rng()
    return options[int(rng.integers(len(options)))]


def interpretation_for_bucket(bucket, heart_rate: float, age: float | None = None) -> dict:
    """
    Structured interpretation of a stress bucket.

    Parameters
    ----------
    bucket     : StressBucket | str   Unknown labels fall back to medium.
    heart_rate : float                Adds a context sentence above 100 or below 60 BPM.
    age        : float | None         Accepted for call-site symmetry; not used yet.

    Returns
    -------
    dict with keys:
        description, meaning, recommendation : str
        heart_rate_context : str   Empty when the heart rate is 60–100 BPM.
        full_description   : str   description + heart_rate_context.
    """
    base = _INTERPRETATIONS[parse_bucket(bucket, default=StressBucket.MEDIUM)]

    if heart_rate > 100:
        context = ELEVATED_HR_CONTEXT
    elif heart_rate < 60:
        context = LOW_HR_CONTEXT
    else:
        context = ""

    return {
        **base,
        "heart_rate_context": context,
        "full_description": base["description"] + context,
    }


def measurement_recommendations(quality: float, bucket=None) -> list[str]:
    """Technique tips for the next measurement, based on signal quality."""
    if quality < 0.3:
        tips = [
            "Place your fingertip firmly over the camera and flash.",
            "Make sure your finger fully covers the lens.",
            "Keep your hand steady during the measurement.",
            "Avoid sudden movements or trembling.",
        ]
    elif quality < 0.7:
        tips = [
            "The signal is acceptable but could be improved.",
            "Try to keep a constant pressure.",
            "Avoid lighting changes during the measurement.",
        ]
    else:
        tips = [
            "Excellent signal quality.",
            "Keep using this technique for future measurements.",
        ]

    if parse_bucket(bucket) is StressBucket.HIGH:
        tips.append("Consider measuring at a calmer moment of the day.")
        tips.append("Take a few deep breaths before measuring.")

    return tips
