"""
api/routes.py — FastAPI route definitions
==========================================
All HTTP endpoints are defined here and wired into the app via
`app.include_router(router)` in `api/app.py`.

Endpoint summary
----------------
    GET  /health                     — Liveness probe
    POST /profile                    — Set user age
    POST /measurement/start          — Begin a simulated measurement (background thread)
    GET  /measurement/status         — Poll progress & state
    GET  /measurement/result         — Retrieve the result once complete
    POST /measurement/reset          — Reset session to idle
    POST /stress/classify            — Heart rate (+ age, factors) → stress bucket
    POST /signal/quality             — Raw intensities → quality
    POST /signal/hrv                 — Heart-rate series → normalised HRV
    POST /signal/trend               — Heart-rate series → trend
    GET  /advice/{level}             — Random advice for a bucket
    GET  /interpretation/{level}     — Structured interpretation for a bucket
    POST /history/summary            — Summary statistics over supplied results
    GET  /docs                       — Auto-generated Swagger UI (FastAPI built-in)
"""

from fastapi import APIRouter, HTTPException, Query

from api.schemas import (
    AdviceResponse,
    ClassifyRequest,
    ClassifyResponse,
    HistoryRequest,
    HistorySummaryResponse,
    InterpretationResponse,
    MeasurementRequest,
    MeasurementResponse,
    SamplesRequest,
    ScoreResponse,
    StatusResponse,
    TrendRequest,
    UserProfile,
)
from api.session import MeasurementSession
from features.hrv import estimate_hrv
from features.quality import estimate_signal_quality
from features.trend import analyze_trend
from model.advice import advice_for_bucket, interpretation_for_bucket
from model.history import summarize_history
from model.stress import StressBucket, bucket_for_score, color_for_bucket, stress_score
from utils.logger import get_logger

logger = get_logger("api.routes")

router = APIRouter()

# ── Global session instance ──────────────────────────────────────────────────
# One session for the entire application lifetime; replaced in tests via
# `set_session`.
_session = MeasurementSession()


def set_session(session: MeasurementSession) -> None:
    global _session
    _session = session


def _parse_level(level: str) -> StressBucket:
    try:
        return StressBucket.parse(level)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown stress level '{level}'.") from None


# ── Health ────────────────────────────────────────────────────────────────────

@router.get("/health")
async def health():
    """Simple liveness check."""
    return {"status": "ok", "service": "Stress Pulse Estimator"}


# ── Profile ───────────────────────────────────────────────────────────────────

@router.post("/profile")
async def set_profile(profile: UserProfile):
    """
    Store the user's age.  Optional — measurements default to age 30.

    Body (JSON):
        age : int   (0–120)
    """
    _session.set_profile(profile)
    return {"status": "ok", "message": "Profile stored."}


# ── Measurement Control ───────────────────────────────────────────────────────

@router.post("/measurement/start")
async def start_measurement(request: MeasurementRequest = MeasurementRequest()):
    """
    Begin a simulated measurement.  Sampling runs in a background thread
    so this endpoint returns immediately.

    Returns 409 if a measurement is already running.
    """
    started = _session.start_measurement(
        duration_seconds=request.duration_seconds,
        simulated_heart_rate=request.simulated_heart_rate,
        seed=request.seed,
    )
    if not started:
        raise HTTPException(status_code=409, detail="A measurement is already in progress.")

    return {
        "status": "measuring",
        "message": (
            f"Measurement started ({request.duration_seconds}s). "
            "Poll GET /measurement/status for progress."
        ),
    }


@router.get("/measurement/status")
async def measurement_status() -> StatusResponse:
    """Poll the current measurement state and progress percentage."""
    status = _session.status
    progress = _session.progress

    messages = {
        "idle":      "No measurement in progress. POST /measurement/start to begin.",
        "measuring": f"Measuring — {progress:.0f}% complete. Keep your finger on the camera.",
        "complete":  "Measurement complete! Retrieve results via GET /measurement/result.",
        "error":     f"Measurement failed: {_session.error_message}",
    }

    return StatusResponse(
        status=status,
        message=messages.get(status, "Unknown state."),
        progress_percent=progress if status == "measuring" else None,
    )


@router.get("/measurement/result")
async def measurement_result() -> MeasurementResponse:
    """
    Retrieve the full result after a successful measurement.

    Returns 409 while measuring, 404 before any measurement, 422 on failure.
    """
    status = _session.status

    if status == "measuring":
        raise HTTPException(status_code=409, detail="Measurement still in progress.")
    if status == "idle":
        raise HTTPException(status_code=404, detail="No measurement has been run yet.")
    if status == "error":
        raise HTTPException(status_code=422, detail=_session.error_message)

    result = _session.get_result()
    if result is None:
        raise HTTPException(status_code=500, detail="Result unavailable.")

    return MeasurementResponse(**result)


@router.post("/measurement/reset")
async def measurement_reset():
    """Reset the session to idle state so a new measurement can be started."""
    _session.reset()
    return {"status": "ok", "message": "Session reset. Ready for a new measurement."}


# ── Scoring ───────────────────────────────────────────────────────────────────

@router.post("/stress/classify")
async def classify(request: ClassifyRequest) -> ClassifyResponse:
    """Classify a heart rate; an out-of-range heart rate returns 422."""
    factors = request.factors.model_dump() if request.factors else None
    score = stress_score(request.heart_rate, request.age, factors)
    level = bucket_for_score(score)
    return ClassifyResponse(
        level=level,
        label=level.label,
        score=round(score, 4),
        color=color_for_bucket(level),
    )


@router.post("/signal/quality")
async def signal_quality(request: SamplesRequest) -> ScoreResponse:
    return ScoreResponse(
        value=estimate_signal_quality(request.samples),
        num_samples=len(request.samples),
    )


@router.post("/signal/hrv")
async def signal_hrv(request: SamplesRequest) -> ScoreResponse:
    return ScoreResponse(value=estimate_hrv(request.samples), num_samples=len(request.samples))


@router.post("/signal/trend")
async def signal_trend(request: TrendRequest) -> ScoreResponse:
    return ScoreResponse(
        value=analyze_trend(request.samples, request.window_seconds),
        num_samples=len(request.samples),
    )


# ── Advice ────────────────────────────────────────────────────────────────────

@router.get("/advice/{level}")
async def advice(level: str) -> AdviceResponse:
    bucket = _parse_level(level)
    return AdviceResponse(level=bucket, advice=advice_for_bucket(bucket), color=color_for_bucket(bucket))


@router.get("/interpretation/{level}")
async def interpretation(
    level: str,
    heart_rate: float = Query(..., ge=0),
    age: float | None = Query(None, ge=0),
) -> InterpretationResponse:
    bucket = _parse_level(level)
    return InterpretationResponse(level=bucket, **interpretation_for_bucket(bucket, heart_rate, age))


# ── History ───────────────────────────────────────────────────────────────────

@router.post("/history/summary")
async def history_summary(request: HistoryRequest) -> HistorySummaryResponse:
    summary = summarize_history(request.measurements, days=request.days)
    logger.info("History summary over %d measurements.", summary["count"])
    return HistorySummaryResponse(**summary)
