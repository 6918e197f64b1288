from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _optional_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    return int(value)


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class StoreConfig:
    """
    Runtime settings for the coffee shop store and its HTTP surface.
    """

    page_size: int = 10
    default_distance: float = 5.0
    mock_user_id: int = 1
    seed_sample_data: bool = True
    random_seed: int | None = _optional_int(os.getenv("STORE_RANDOM_SEED"))
    password_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    map_center: tuple[float, float] = (40.7128, -74.0060)
    cors_origins: tuple[str, ...] = _split_csv(os.getenv("CORS_ORIGINS", "*"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


DEFAULT_STORE_CONFIG = StoreConfig()
