#!/usr/bin/env python3
"""
Stress Pulse Estimator — Main Entry Point
==========================================
Launches the FastAPI backend with Uvicorn.
Run with:  python main.py

⚠️  DISCLAIMER: This is a WELLNESS DEMO, NOT a medical device.
    Heart rate and stress readings are heuristic ESTIMATES computed from a
    simulated camera signal.  Do NOT use them for diagnosis or treatment.
"""

import uvicorn

from api.app import create_app
from config import API_HOST, API_PORT, LOG_LEVEL

if __name__ == "__main__":
    app = create_app()
    uvicorn.run(
        app,
        host=API_HOST,
        port=API_PORT,
        reload=False,
        log_level=LOG_LEVEL.lower(),
    )
