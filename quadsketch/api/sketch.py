"""POST /api/sketch — image to quadtree sketch."""

from __future__ import annotations

import base64
import binascii
import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from quadsketch.config import Settings
from quadsketch.dependencies import get_settings
from quadsketch.engine.errors import ConfigError, ImageDecodeError, TooComplexError
from quadsketch.engine.pipeline import sketch_image
from quadsketch.models.requests import SketchRequest
from quadsketch.models.responses import SketchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/sketch", response_model=SketchResponse)
def sketch(
    request: SketchRequest,
    app_settings: Settings = Depends(get_settings),
) -> SketchResponse:
    start = time.perf_counter()

    try:
        data = base64.b64decode(request.image_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"invalid base64 image: {e}") from e

    config = app_settings.sketch_config(
        minimum_cell_size=request.minimum_cell_size,
        encoded_size_budget=request.encoded_size_budget,
        seed=request.seed,
    )

    try:
        ctx = sketch_image(data, config)
    except (ConfigError, ImageDecodeError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except TooComplexError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    elapsed = (time.perf_counter() - start) * 1000
    report = ctx.simplify_report
    return SketchResponse(
        sketch=ctx.sketch,
        encoded_size=ctx.encoded_size,
        leaf_count=ctx.leaf_count,
        grid_size=ctx.grid_size,
        lossless_merges=ctx.lossless_merges,
        lossy_merges=report.merges if report else 0,
        processing_time_ms=round(elapsed, 1),
    )
