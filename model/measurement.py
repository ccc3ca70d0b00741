"""
model/measurement.py — Measurement record
==========================================
The immutable record produced once per completed measurement.  Storage
and deletion of these records belong to the caller; nothing here writes
them anywhere.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from model.stress import StressBucket


class MeasurementResult(BaseModel):
    """One completed measurement (frozen once built)."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    heart_rate: float
    stress_level: StressBucket
    hrv: float = Field(..., ge=0.0, le=1.0)
    quality: float = Field(..., ge=0.0, le=1.0)
    quality_percent: int = Field(..., ge=0, le=100)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def build(
        cls,
        heart_rate: float,
        stress_level: StressBucket,
        hrv: float,
        quality: float,
        **kwargs,
    ) -> "MeasurementResult":
        """Create a record, deriving `quality_percent` from `quality`."""
        return cls(
            heart_rate=heart_rate,
            stress_level=stress_level,
            hrv=hrv,
            quality=quality,
            quality_percent=int(round(quality * 100)),
            **kwargs,
        )
