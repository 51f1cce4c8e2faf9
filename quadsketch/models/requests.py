"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SketchRequest(BaseModel):
    image_base64: str = Field(..., description="Base64-encoded image file (PNG, JPEG, ...)")
    minimum_cell_size: int | None = Field(
        default=None,
        description="Smallest region side before forced classification",
    )
    encoded_size_budget: int | None = Field(
        default=None,
        description="Ceiling for the tree's encoded size",
    )
    seed: int | None = Field(default=None, description="Seed for leaf selection")
