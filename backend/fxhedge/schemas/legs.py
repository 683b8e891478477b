from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fxhedge.schemas.market import MarketContext


Side = Literal["call", "put"]
BarrierMode = Literal["none", "knock_out", "knock_in"]
LevelMode = Literal["absolute", "percent"]

_CODE_RE = re.compile(r"^(call|put)(R)?(D)?(KO|KI)?$", re.IGNORECASE)


class OptionKind(BaseModel):
    """Closed description of an option leg.

    `double` and `reverse` only matter when `barrier` is not "none".
    """

    model_config = ConfigDict(frozen=True)

    side: Side
    barrier: BarrierMode = "none"
    double: bool = False
    reverse: bool = False

    @property
    def is_call(self) -> bool:
        return self.side == "call"

    @property
    def has_barrier(self) -> bool:
        return self.barrier != "none"

    @property
    def is_knock_out(self) -> bool:
        return self.barrier == "knock_out"

    @property
    def code(self) -> str:
        """Short code used by the UI catalog, e.g. "callKO" or "putRDKI"."""
        if not self.has_barrier:
            return self.side
        suffix = "KO" if self.is_knock_out else "KI"
        return f"{self.side}{'R' if self.reverse else ''}{'D' if self.double else ''}{suffix}"

    @classmethod
    def from_code(cls, code: str) -> "OptionKind":
        m = _CODE_RE.match(code.strip())
        if not m:
            raise ValueError(f"unknown option type code: {code!r}")
        side, reverse, double, barrier = m.groups()
        if barrier is None and (reverse or double):
            raise ValueError(f"reverse/double modifiers need KO or KI: {code!r}")
        mode: BarrierMode = "none"
        if barrier is not None:
            mode = "knock_out" if barrier.upper() == "KO" else "knock_in"
        return cls(side=side.lower(), barrier=mode, double=bool(double), reverse=bool(reverse))


class OptionLeg(BaseModel):
    """One leg as entered by the user.

    Strike and barriers may be given in absolute price units or as a percent of
    the reference spot. Nothing here is range-checked: a half-edited leg must
    still evaluate (it is skipped), and degenerate numbers surface as a leg error.
    """

    model_config = ConfigDict(frozen=True)

    leg_id: str | None = Field(default=None, description="Optional label used for reference markers")
    kind: OptionKind

    strike: float | None = None
    strike_mode: LevelMode = "percent"

    upper_barrier: float | None = None
    upper_barrier_mode: LevelMode = "percent"
    lower_barrier: float | None = None
    lower_barrier_mode: LevelMode = "percent"

    volatility_pct: float = Field(default=10.0, description="Annualized volatility in percent (10 = 10%)")
    quantity_pct: float = Field(default=100.0, description="Signed percent of notional (negative = short)")
    bid_spread_pct: float = Field(default=0.0, description="Markup on the premium paid when buying")
    ask_spread_pct: float = Field(default=0.0, description="Markdown on the premium received when selling")
    premium_override: float | None = Field(
        default=None,
        description="Quoted unit premium; replaces the model premium (before quantity scaling)",
    )

    @field_validator("kind", mode="before")
    @classmethod
    def _parse_kind(cls, v: Any) -> Any:
        if isinstance(v, str):
            return OptionKind.from_code(v)
        return v


class Strategy(BaseModel):
    name: str = Field(default="Custom")
    legs: list[OptionLeg] = Field(default_factory=list)


class LegPricingRequest(BaseModel):
    market: MarketContext
    leg: OptionLeg


class LegOutcomeOut(BaseModel):
    label: str
    kind: str
    status: Literal["ok", "skipped", "error"]
    error: str | None = None

    resolved_strike: float | None = None
    resolved_upper_barrier: float | None = None
    resolved_lower_barrier: float | None = None

    barrier_multiplier: float | None = None
    premium: float = 0.0
    premium_cash: float = 0.0


class LegPricingResponse(BaseModel):
    leg: LegOutcomeOut
