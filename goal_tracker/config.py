"""Runtime settings, read from the environment (and a local .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
)


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    default_inflation_rate: float = 0.02
    default_return_rate: float = 0.05
    default_tax_rate: float = 0.25

    monte_carlo_iterations: int = 1000
    monte_carlo_seed: Optional[int] = None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else default


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else default


def load_settings() -> Settings:
    """
    Build Settings from .env + environment variables.
    Unset variables fall back to the dataclass defaults.
    """
    load_dotenv()

    origins_raw = os.getenv("CORS_ORIGINS", "")
    origins = tuple(o.strip() for o in origins_raw.split(",") if o.strip()) or DEFAULT_CORS_ORIGINS

    return Settings(
        env=os.getenv("GOAL_TRACKER_ENV", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cors_origins=origins,
        default_inflation_rate=_env_float("DEFAULT_INFLATION_RATE", 0.02),
        default_return_rate=_env_float("DEFAULT_RETURN_RATE", 0.05),
        default_tax_rate=_env_float("DEFAULT_TAX_RATE", 0.25),
        monte_carlo_iterations=_env_int("MONTE_CARLO_ITERATIONS", 1000) or 1000,
        monte_carlo_seed=_env_int("MONTE_CARLO_SEED", None),
    )
