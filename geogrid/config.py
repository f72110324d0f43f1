"""Environment-driven configuration for the grid core."""

from __future__ import annotations

import math
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env", override=False)


class GeoGridSettings(BaseSettings):
    """Tunables shared by grid construction and crop alignment."""

    model_config = SettingsConfigDict(
        env_file=None,
        case_sensitive=False,
        extra="ignore",
    )

    # Value for pixels of an aligned range that lie outside the source grid.
    fill_value: float = Field(default=math.nan, validation_alias="GEOGRID_FILL_VALUE")
    default_resolution: float = Field(
        default=0.01,
        validation_alias="GEOGRID_DEFAULT_RESOLUTION",
    )
    warn_out_of_bounds: bool = Field(
        default=True,
        validation_alias="GEOGRID_WARN_OUT_OF_BOUNDS",
    )

    @field_validator("default_resolution", mode="before")
    @classmethod
    def _validate_resolution(cls, value: object) -> float:
        val = float(value)  # raises if not numeric
        if not math.isfinite(val) or val <= 0:
            raise ValueError("GEOGRID_DEFAULT_RESOLUTION must be a positive finite number")
        return val


settings = GeoGridSettings()
