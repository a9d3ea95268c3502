"""
Settings in one place.
- Load .env if present (dev convenience; in prod the platform injects env vars)
- Read everything the app needs with sensible defaults
"""

import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    app_env: str
    random_source: str          # "random_org" | "local"
    random_org_timeout: float   # seconds
    log_level: str
    cors_origins: List[str]


def get_settings() -> Settings:
    """Read env vars each call, so tests can monkeypatch os.environ."""
    random_source = os.getenv("RANDOM_SOURCE", "random_org").strip().lower()
    if random_source not in ("random_org", "local"):
        raise RuntimeError(
            f"RANDOM_SOURCE must be 'random_org' or 'local', got {random_source!r}."
        )

    timeout_text = os.getenv("RANDOM_ORG_TIMEOUT", "3.0")
    try:
        timeout = float(timeout_text)
    except ValueError:
        raise RuntimeError(f"RANDOM_ORG_TIMEOUT must be a number, got {timeout_text!r}.")

    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    return Settings(
        app_env=os.getenv("APP_ENV", "local"),
        random_source=random_source,
        random_org_timeout=timeout,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=origins or ["*"],
    )
