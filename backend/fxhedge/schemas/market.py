from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MarketContext(BaseModel):
    """Market inputs shared by every leg of one evaluation."""

    model_config = ConfigDict(frozen=True)

    spot: float = Field(gt=0, description="Reference spot rate (also the centre of the payoff sweep)")
    maturity: float = Field(description="Time to maturity in years")
    domestic_rate: float = Field(default=0.0, description="r1: continuously-compounded base currency rate")
    foreign_rate: float = Field(default=0.0, description="r2: continuously-compounded quote currency rate")
    notional: float = Field(default=1_000_000.0, description="Notional used to report cash premiums")


class ForwardRateResponse(BaseModel):
    spot: float
    maturity: float
    forward_rate: float
