"""Runtime settings.

Everything is read from environment variables so the API can be started with
no config file. Defaults mirror the values the hedging UI opens with.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_APP_NAME = "FX Hedge Lab API"
DEFAULT_PAIR = "EUR/USD"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    app_name: str = DEFAULT_APP_NAME
    log_level: str = "INFO"

    default_pair: str = DEFAULT_PAIR
    default_maturity: float = 1.0
    default_domestic_rate: float = 0.02
    default_foreign_rate: float = 0.03
    default_notional: float = 1_000_000.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_name=os.getenv("FXHEDGE_APP_NAME", DEFAULT_APP_NAME),
            log_level=os.getenv("FXHEDGE_LOG_LEVEL", "INFO").upper(),
            default_pair=os.getenv("FXHEDGE_DEFAULT_PAIR", DEFAULT_PAIR),
            default_maturity=_env_float("FXHEDGE_DEFAULT_MATURITY", 1.0),
            default_domestic_rate=_env_float("FXHEDGE_DEFAULT_DOMESTIC_RATE", 0.02),
            default_foreign_rate=_env_float("FXHEDGE_DEFAULT_FOREIGN_RATE", 0.03),
            default_notional=_env_float("FXHEDGE_DEFAULT_NOTIONAL", 1_000_000.0),
        )
