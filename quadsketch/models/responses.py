"""API response models."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class SketchResponse(BaseModel):
    sketch: str
    encoded_size: int
    leaf_count: int
    grid_size: int
    lossless_merges: int = 0
    lossy_merges: int = 0
    processing_time_ms: float = 0.0
