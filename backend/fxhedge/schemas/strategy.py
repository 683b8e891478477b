from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from fxhedge.schemas.legs import LegOutcomeOut, OptionLeg, Strategy
from fxhedge.schemas.market import MarketContext


PresetKey = Literal[
    "forward",
    "collar",
    "strangle",
    "straddle",
    "put",
    "call",
    "seagull",
    "call_ko",
    "put_ki",
    "call_ko_put_ki",
]


class StrategyEvaluateRequest(BaseModel):
    market: MarketContext
    strategy: Strategy = Field(default_factory=Strategy)
    include_premium: bool = Field(default=True, description="Net premiums out of the hedged curve")


class PayoffPointOut(BaseModel):
    sweep_spot: float
    unhedged_rate: float
    hedged_rate: float
    reference_markers: dict[str, float] = Field(default_factory=dict)


class RiskRewardOut(BaseModel):
    best_case: float
    best_case_spot: float
    worst_case: float
    worst_case_spot: float
    # JSON has no infinity: an unbounded ratio is reported as null + flag.
    risk_reward_ratio: float | None
    risk_reward_unbounded: bool = False
    break_even_points: list[float]


class StrategyEvaluateResponse(BaseModel):
    name: str
    reference_spot: float
    forward_rate: float
    include_premium: bool

    total_premium: float
    total_premium_cash: float
    legs: list[LegOutcomeOut]

    curve: list[PayoffPointOut]
    summary: RiskRewardOut


class StrategyPresetRequest(BaseModel):
    """Build one of the named hedging strategies and evaluate it.

    Levels are absolute. Anything left out is derived from the pair catalog
    (when `pair` is given) or from the spot.
    """

    market: MarketContext
    preset: PresetKey
    pair: str | None = Field(default=None, description="Catalog symbol used for default strike/vol, e.g. EUR/USD")

    strike_upper: float | None = Field(default=None, gt=0)
    strike_lower: float | None = Field(default=None, gt=0)
    strike_mid: float | None = Field(default=None, gt=0)
    barrier_upper: float | None = Field(default=None, gt=0)
    barrier_lower: float | None = Field(default=None, gt=0)

    volatility_pct: float | None = Field(default=None, gt=0)
    quantity_pct: float = Field(default=100.0, gt=0)
    bid_spread_pct: float = Field(default=0.0, ge=0)
    ask_spread_pct: float = Field(default=0.0, ge=0)

    include_premium: bool = True


class StrategyPresetResponse(BaseModel):
    preset: str
    note: str
    legs: list[OptionLeg]
    evaluation: StrategyEvaluateResponse


class ZeroCostCollarRequest(BaseModel):
    market: MarketContext
    volatility_pct: float = Field(gt=0)
    call_strike: float | None = Field(default=None, gt=0)
    put_strike: float | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _check_strikes(self) -> "ZeroCostCollarRequest":
        if self.call_strike is not None and self.put_strike is not None:
            raise ValueError("give either call_strike or put_strike, not both")
        return self


class ZeroCostCollarResponse(BaseModel):
    put_strike: float
    call_strike: float
    put_price: float
    call_price: float
    net_premium: float
