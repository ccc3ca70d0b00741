"""
api/schemas.py — Pydantic request & response models
=====================================================
Centralises all data-transfer objects so that FastAPI can auto-generate
OpenAPI docs and perform input validation for free.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from model.measurement import MeasurementResult
from model.stress import StressBucket


# ── Request Models ───────────────────────────────────────────────────────────


class UserProfile(BaseModel):
    """Demographics used to pick the heart-rate age bucket."""
    age: int = Field(30, ge=0, le=120, description="Age in years.")


class MeasurementRequest(BaseModel):
    """Optionally override the simulated measurement at start time."""
    duration_seconds: int = Field(30, ge=5, le=120)
    simulated_heart_rate: float = Field(72.0, ge=40, le=150)
    seed: Optional[int] = Field(None, description="Seed for a reproducible simulation.")


class StressFactors(BaseModel):
    variability: Optional[float] = Field(None, ge=0.0, le=1.0)
    quality: Optional[float] = Field(None, ge=0.0, le=1.0)
    trend: Optional[float] = Field(None, ge=0.0, le=1.0)


class ClassifyRequest(BaseModel):
    # Range is enforced by the classifier so that the InvalidHeartRate
    # message reaches the client unchanged.
    heart_rate: float
    age: Optional[float] = None
    factors: Optional[StressFactors] = None


class SamplesRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    samples: list[float] = Field(default_factory=list)


class TrendRequest(SamplesRequest):
    window_seconds: float = Field(300.0, gt=0)


class HistoryRequest(BaseModel):
    measurements: list[MeasurementResult] = Field(default_factory=list)
    days: int = Field(7, ge=1, le=365)


# ── Response Models ──────────────────────────────────────────────────────────


class ClassifyResponse(BaseModel):
    level: StressBucket
    label: str
    score: float
    color: str


class ScoreResponse(BaseModel):
    value: float
    num_samples: int


class AdviceResponse(BaseModel):
    level: StressBucket
    advice: str
    color: str


class InterpretationResponse(BaseModel):
    level: StressBucket
    description: str
    meaning: str
    recommendation: str
    heart_rate_context: str
    full_description: str


class DailyStat(BaseModel):
    date: str
    count: int
    average_heart_rate: int


class HistorySummaryResponse(BaseModel):
    count: int
    average_heart_rate: int
    counts: dict[str, int]
    dominant_level: Optional[StressBucket] = None
    daily: list[DailyStat]


class MeasurementResponse(BaseModel):
    """Full payload returned after a successful measurement."""
    disclaimer: str
    result: MeasurementResult
    label: str
    color: str
    advice: str
    interpretation: dict
    recommendations: list[str]
    reliability: float


class StatusResponse(BaseModel):
    status: str                          # "idle" | "measuring" | "complete" | "error"
    message: str
    progress_percent: Optional[float] = None   # 0–100 while measuring
