"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from quadsketch.engine.config import SketchConfig


class Settings(BaseSettings):
    quadsketch_log_level: str = "info"

    # Sketch defaults (overridable per CLI call / API request)
    quadsketch_min_cell_size: int = 64
    quadsketch_budget: int = 903
    quadsketch_seed: int | None = None

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def sketch_config(self, **overrides) -> SketchConfig:
        """SketchConfig from these defaults, with non-None overrides applied."""
        values = {
            "minimum_cell_size": self.quadsketch_min_cell_size,
            "encoded_size_budget": self.quadsketch_budget,
            "seed": self.quadsketch_seed,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SketchConfig(**values)


settings = Settings()
