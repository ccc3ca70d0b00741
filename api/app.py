"""
api/app.py — FastAPI application factory
==========================================
Creates and configures the FastAPI instance.  All configuration is
centralised here so that `main.py` stays minimal.

Error mapping
-------------
Domain validation errors raised by the scoring code are turned into
HTTP 422 responses here, so route handlers never need to catch them.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import router
from config import API_TITLE, API_VERSION
from errors import InsufficientSamples, InvalidHeartRate, InvalidSamples
from utils.logger import get_logger

logger = get_logger("api.app")


async def _validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": type(exc).__name__})


def create_app() -> FastAPI:
    """
    Construct and return the configured FastAPI application.

    This is a *factory function* (rather than a module-level singleton)
    so that tests can create isolated app instances.
    """
    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        description=(
            "Heuristic stress-level estimation from a simulated camera pulse signal. "
            "⚠️ WELLNESS DEMO ONLY — not a medical device."
        ),
    )

    # ── CORS ────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],           # Restrict in production!
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Domain errors → 422 ─────────────────────────────────────────────
    app.add_exception_handler(InvalidHeartRate, _validation_error_handler)
    app.add_exception_handler(InsufficientSamples, _validation_error_handler)
    app.add_exception_handler(InvalidSamples, _validation_error_handler)

    # ── Mount routes ────────────────────────────────────────────────────
    app.include_router(router)

    return app
