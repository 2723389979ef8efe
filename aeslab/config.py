from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    # Codec
    default_mode: Literal["cbc", "ecb"] = Field(default="cbc", description="Mode used when the caller picks none")
    workers: int = Field(default=1, ge=1, le=64, description="Thread pool size for ECB / CBC-decrypt")

    # Logging
    log_level: str = Field(default="INFO")

    # Self-test / reproducibility
    global_seed: int = Field(default=1337)
    roundtrip_vectors: int = Field(default=200, ge=1)
    sac_trials: int = Field(default=64, ge=1)

    # Paths
    runs_dir: str = Field(default="runs")

    @field_validator("default_mode", mode="before")
    @classmethod
    def _lower_mode(cls, v: str) -> str:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return v


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        default_mode=os.getenv("AESLAB_DEFAULT_MODE", "cbc"),
        workers=int(os.getenv("AESLAB_WORKERS", "1")),
        log_level=os.getenv("AESLAB_LOG_LEVEL", "INFO"),
        global_seed=int(os.getenv("AESLAB_SEED", "1337")),
        roundtrip_vectors=int(os.getenv("AESLAB_ROUNDTRIP_VECTORS", "200")),
        sac_trials=int(os.getenv("AESLAB_SAC_TRIALS", "64")),
        runs_dir=os.getenv("AESLAB_RUNS_DIR", "runs"),
    )
