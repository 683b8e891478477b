from __future__ import annotations

import math
from typing import Literal

from fxhedge.services.errors import PricingDomainError
from fxhedge.services.stats import norm_cdf


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise PricingDomainError(f"{name} must be a finite number > 0 (got {value})")


def d1_d2(
    spot: float,
    strike: float,
    maturity: float,
    domestic_rate: float,
    foreign_rate: float,
    vol: float,
) -> tuple[float, float]:
    """Garman–Kohlhagen d1/d2.

    d1 = (ln(S/K) + (r1 − r2 + σ²/2)·T) / (σ√T),  d2 = d1 − σ√T
    """
    _require_positive("spot", spot)
    _require_positive("strike", strike)
    _require_positive("maturity", maturity)
    _require_positive("volatility", vol)

    sqrtT = math.sqrt(maturity)
    d1 = (math.log(spot / strike) + (domestic_rate - foreign_rate + 0.5 * vol * vol) * maturity) / (vol * sqrtT)
    return d1, d1 - vol * sqrtT


def call_price(
    spot: float,
    strike: float,
    maturity: float,
    domestic_rate: float,
    foreign_rate: float,
    vol: float,
) -> float:
    d1, d2 = d1_d2(spot, strike, maturity, domestic_rate, foreign_rate, vol)
    return spot * math.exp(-foreign_rate * maturity) * norm_cdf(d1) - strike * math.exp(
        -domestic_rate * maturity
    ) * norm_cdf(d2)


def put_price(
    spot: float,
    strike: float,
    maturity: float,
    domestic_rate: float,
    foreign_rate: float,
    vol: float,
) -> float:
    d1, d2 = d1_d2(spot, strike, maturity, domestic_rate, foreign_rate, vol)
    return strike * math.exp(-domestic_rate * maturity) * norm_cdf(-d2) - spot * math.exp(
        -foreign_rate * maturity
    ) * norm_cdf(-d1)


def vanilla_price(
    side: Literal["call", "put"],
    *,
    spot: float,
    strike: float,
    maturity: float,
    domestic_rate: float,
    foreign_rate: float,
    vol: float,
) -> float:
    """Garman–Kohlhagen premium for one unit of notional.

    Conventions:
      - domestic_rate (r1) and foreign_rate (r2) are continuously-compounded annual rates.
      - r1 discounts the strike leg, r2 discounts the spot leg.
      - vol is annualized as a decimal (0.10 for 10%).
      - maturity is in years.

    The result is in the same units as spot/strike; callers scale by quantity.
    """
    if side == "call":
        return call_price(spot, strike, maturity, domestic_rate, foreign_rate, vol)
    if side == "put":
        return put_price(spot, strike, maturity, domestic_rate, foreign_rate, vol)
    raise ValueError("side must be 'call' or 'put'")


def forward_rate(*, spot: float, maturity: float, domestic_rate: float, foreign_rate: float) -> float:
    """Outright forward F = S·e^{(r1 − r2)·T}."""
    return spot * math.exp((domestic_rate - foreign_rate) * maturity)
