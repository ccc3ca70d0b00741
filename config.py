"""
config.py — Centralised configuration & scoring constants
==========================================================
Every tunable constant in the project lives here so that the rest of the
codebase can import from a single source of truth.
"""

import os

# ─── Sampling ────────────────────────────────────────────────────────────────
SAMPLES_PER_SECOND: int = 30          # Simulated camera frame rate (Hz)
MEASUREMENT_DURATION_SECONDS: int = 30
MIN_QUALITY_THRESHOLD: float = 0.7    # Live quality below this aborts a measurement
QUALITY_WARMUP_SAMPLES: int = 30      # One second of samples before the quality gate applies

# ─── Heart-rate validity ─────────────────────────────────────────────────────
HR_MIN_VALID_BPM: float = 40.0
HR_MAX_VALID_BPM: float = 200.0

# Peak-count heart rate is clamped to a realistic resting window
PULSE_RATE_MIN_BPM: int = 60
PULSE_RATE_MAX_BPM: int = 120
PULSE_MIN_PEAK_SPACING_SECONDS: float = 0.4   # → max 150 BPM between peaks

# ─── Age-bucketed heart-rate bounds (BPM) ────────────────────────────────────
# (min, max) pairs.  Normal resting range is the same for everyone; the
# exercise ranges relax with age.
AGE_RANGES = ("18-25", "26-35", "36-45", "46-55", "56-65", "65+")

HEART_RATE_RANGES = {
    "normal": {
        "18-25": (60, 100),
        "26-35": (60, 100),
        "36-45": (60, 100),
        "46-55": (60, 100),
        "56-65": (60, 100),
        "65+":   (60, 100),
    },
    "moderate": {
        "18-25": (100, 150),
        "26-35": (95, 145),
        "36-45": (90, 140),
        "46-55": (85, 135),
        "56-65": (80, 130),
        "65+":   (75, 125),
    },
    "intense": {
        "18-25": (150, 200),
        "26-35": (145, 195),
        "36-45": (140, 190),
        "46-55": (135, 185),
        "56-65": (130, 180),
        "65+":   (125, 175),
    },
}

DEFAULT_AGE: int = 30

# ─── Stress scoring ──────────────────────────────────────────────────────────
# Weights must sum to 1.0
STRESS_FACTORS = {
    "heart_rate": 0.4,
    "variability": 0.3,
    "quality": 0.2,
    "trend": 0.1,
}

# Values used when a factor is not supplied by the caller
DEFAULT_VARIABILITY: float = 0.5
DEFAULT_QUALITY: float = 0.8
DEFAULT_TREND: float = 0.5

STRESS_THRESHOLD_LOW: float = 0.3      # score ≤ 0.3 → low
STRESS_THRESHOLD_MEDIUM: float = 0.6   # score ≤ 0.6 → medium, else high

# ─── Sample statistics normalisers ───────────────────────────────────────────
QUALITY_MIN_SAMPLES: int = 10
QUALITY_STD_SCALE: float = 50.0    # std of 50 intensity units → quality 1.0

HRV_MIN_SAMPLES: int = 10
HRV_STD_SCALE: float = 20.0        # std of 20 BPM successive diffs → HRV 1.0

TREND_MIN_SAMPLES: int = 5
TREND_MAX_SAMPLES: int = 10        # Regression runs over the most recent samples
TREND_SLOPE_RANGE: float = 5.0     # slope ∈ [-5, 5] BPM/sample maps to [0, 1]
TREND_DEFAULT_WINDOW_SECONDS: int = 300

# ─── Presentation ────────────────────────────────────────────────────────────
STRESS_COLORS = {
    "low": "#4CAF50",      # green
    "medium": "#FF9800",   # orange
    "high": "#F44336",     # red
}
UNKNOWN_STRESS_COLOR = "#666666"

# ─── Simulated pulse source ──────────────────────────────────────────────────
SIM_HEART_RATE_BPM: float = 72.0
SIM_BASELINE_INTENSITY: float = 128.0   # Mid-grey, 8-bit scale
SIM_PULSE_AMPLITUDE: float = 80.0
SIM_NOISE_AMPLITUDE: float = 10.0

# ─── Logging ─────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("STRESS_LOG_LEVEL", "INFO").upper()

# ─── API ─────────────────────────────────────────────────────────────────────
API_TITLE = "Stress Pulse Estimation API"
API_VERSION = "0.1.0"
API_HOST: str = os.getenv("STRESS_API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("STRESS_API_PORT", "8000"))
