from __future__ import annotations

import os
from typing import List, Optional

from pydantic import BaseModel, Field


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else None


class Settings(BaseModel):
    # App
    app_name: str = Field(
        default_factory=lambda: os.getenv("REALSTAT_APP_NAME", "Realstat API")
    )
    debug: bool = Field(
        default_factory=lambda: os.getenv("REALSTAT_DEBUG", "false").lower()
        in {"1", "true", "yes"}
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("REALSTAT_LOG_LEVEL", "INFO")
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: _env_list(
            "REALSTAT_CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        )
    )

    # Series generator; unset means fresh noise per process
    series_seed: Optional[int] = Field(
        default_factory=lambda: _env_optional_int("REALSTAT_SERIES_SEED")
    )

    # Annual return assumed on a held deposit (보증금 운용수익)
    deposit_yield: float = Field(
        default_factory=lambda: float(os.getenv("REALSTAT_DEPOSIT_YIELD", "0.03")),
        ge=0,
    )


def get_settings() -> Settings:
    # Module-level singleton, evaluated once per process
    global _SETTINGS_SINGLETON
    try:
        return _SETTINGS_SINGLETON
    except NameError:
        _SETTINGS_SINGLETON = Settings()  # type: ignore[reportPrivateUsage]
        return _SETTINGS_SINGLETON
