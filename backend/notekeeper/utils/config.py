from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# repository_root/data (we are in backend/notekeeper/utils)
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    store_backend: str = "file"
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_exp_minutes: int = 15
    bcrypt_rounds: Optional[int] = None
    lock_timeout_seconds: float = 5.0
    log_level: str = "INFO"
    log_format: str = "json"


def load_settings() -> Settings:
    """Build Settings from the process environment.

    JWT_SECRET has no default: a missing secret surfaces as a ConfigurationError
    the first time a token is issued or introspected, not at startup.
    """
    rounds_raw = os.getenv("BCRYPT_ROUNDS")
    rounds: Optional[int] = None
    if rounds_raw:
        try:
            rounds = int(rounds_raw)
        except ValueError:
            rounds = None

    return Settings(
        data_dir=Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR))),
        store_backend=os.getenv("APP_STORE", "file").lower(),
        jwt_secret=os.getenv("JWT_SECRET") or None,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_exp_minutes=_int_env("JWT_EXP_MINUTES", 15),
        bcrypt_rounds=rounds,
        lock_timeout_seconds=_float_env("STORE_LOCK_TIMEOUT_SECONDS", 5.0),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "json"),
    )
