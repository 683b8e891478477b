from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from fxhedge.meta.currency_catalog import STRATEGIES, lookup_pair
from fxhedge.schemas.legs import OptionKind, OptionLeg, Strategy
from fxhedge.schemas.market import MarketContext
from fxhedge.schemas.strategy import StrategyPresetRequest, StrategyPresetResponse
from fxhedge.services.evaluation import evaluate_strategy, evaluation_response
from fxhedge.services.garman_kohlhagen import call_price, forward_rate, put_price

logger = logging.getLogger(__name__)

DEFAULT_VOLATILITY_PCT = 10.0


STRATEGY_NOTES: dict[str, str] = {
    "collar": "Long put below spot financed by a short call above spot: the hedged rate is held between the two strikes.",
    "strangle": "Long OTM put + long OTM call: protection against a large move either way.",
    "straddle": "Long put + long call at the money: pays on any move, costs the most.",
    "put": "Long put: floor on the rate, full participation above the strike.",
    "call": "Long call: pays above the strike, premium is the only cost.",
    "seagull": "Long put (mid) financed by a short call (high) and a short put (low); protection stops below the low strike.",
    "call_ko": "Call that is knocked out above the upper barrier; cheaper than the vanilla call.",
    "put_ki": "Put that only comes alive once the rate has fallen to the lower barrier; pays below the put strike from there.",
    "call_ko_put_ki": "Call KO on the upper barrier combined with a put KI on the lower barrier.",
    "forward": "Outright forward: long put + short call struck at the forward rate, the hedged rate is locked at F for no premium.",
}


@dataclass(frozen=True)
class PresetLevels:
    strike_upper: float
    strike_lower: float
    strike_mid: float
    barrier_upper: float
    barrier_lower: float


def default_levels(*, spot: float, default_strike: float | None = None) -> PresetLevels:
    """Absolute levels the calculator starts from for a pair.

    Without a catalog default strike the upper strike sits 5% above spot.
    """
    k_up = float(default_strike) if default_strike is not None else spot * 1.05
    return PresetLevels(
        strike_upper=k_up,
        strike_lower=k_up * 0.95,
        strike_mid=spot,
        barrier_upper=k_up * 1.05,
        barrier_lower=k_up * 0.9,
    )


def _leg(
    label: str,
    code: str,
    *,
    strike: float,
    qty: float,
    vol_pct: float,
    bid: float,
    ask: float,
    upper: float | None = None,
    lower: float | None = None,
    premium: float | None = None,
) -> OptionLeg:
    return OptionLeg(
        leg_id=label,
        kind=OptionKind.from_code(code),
        strike=float(strike),
        strike_mode="absolute",
        upper_barrier=upper,
        upper_barrier_mode="absolute",
        lower_barrier=lower,
        lower_barrier_mode="absolute",
        volatility_pct=vol_pct,
        quantity_pct=qty,
        bid_spread_pct=bid,
        ask_spread_pct=ask,
        premium_override=premium,
    )


def build_preset_legs(
    preset: str,
    *,
    spot: float,
    levels: PresetLevels,
    volatility_pct: float,
    quantity_pct: float = 100.0,
    bid_spread_pct: float = 0.0,
    ask_spread_pct: float = 0.0,
    forward: float | None = None,
) -> list[OptionLeg]:
    """Express a named hedging strategy as engine legs (absolute levels).

    The "forward" preset needs the outright forward rate; its two legs are
    quoted at a zero premium so spreads do not apply.
    """

    q = abs(float(quantity_pct))
    common = {"vol_pct": volatility_pct, "bid": bid_spread_pct, "ask": ask_spread_pct}
    lv = levels

    if preset == "collar":
        return [
            _leg("Long put", "put", strike=lv.strike_lower, qty=+q, **common),
            _leg("Short call", "call", strike=lv.strike_upper, qty=-q, **common),
        ]
    if preset == "strangle":
        return [
            _leg("Long put", "put", strike=lv.strike_lower, qty=+q, **common),
            _leg("Long call", "call", strike=lv.strike_upper, qty=+q, **common),
        ]
    if preset == "straddle":
        return [
            _leg("Long put", "put", strike=spot, qty=+q, **common),
            _leg("Long call", "call", strike=spot, qty=+q, **common),
        ]
    if preset == "put":
        return [_leg("Long put", "put", strike=lv.strike_lower, qty=+q, **common)]
    if preset == "call":
        return [_leg("Long call", "call", strike=lv.strike_upper, qty=+q, **common)]
    if preset == "seagull":
        return [
            _leg("Long put", "put", strike=lv.strike_mid, qty=+q, **common),
            _leg("Short call", "call", strike=lv.strike_upper, qty=-q, **common),
            _leg("Short put", "put", strike=lv.strike_lower, qty=-q, **common),
        ]
    if preset == "call_ko":
        return [_leg("Call KO", "callKO", strike=lv.strike_upper, qty=+q, upper=lv.barrier_upper, **common)]
    if preset == "put_ki":
        return [_leg("Put KI", "putKI", strike=lv.strike_lower, qty=+q, lower=lv.barrier_lower, **common)]
    if preset == "call_ko_put_ki":
        return [
            _leg("Call KO", "callKO", strike=lv.strike_upper, qty=+q, upper=lv.barrier_upper, **common),
            _leg("Put KI", "putKI", strike=lv.strike_lower, qty=+q, lower=lv.barrier_lower, **common),
        ]
    if preset == "forward":
        if forward is None:
            raise ValueError("forward preset needs the forward rate")
        # put(F) - call(F) pays F - E at expiry
        return [
            _leg("Long put", "put", strike=forward, qty=+q, premium=0.0, **common),
            _leg("Short call", "call", strike=forward, qty=-q, premium=0.0, **common),
        ]

    raise ValueError(f"Unknown preset: {preset}")


@dataclass(frozen=True)
class ZeroCostCollar:
    put_strike: float
    call_strike: float
    put_price: float
    call_price: float

    @property
    def net_premium(self) -> float:
        return self.put_price - self.call_price


def _bisect(fn: Callable[[float], float], lo: float, hi: float, tolerance: float) -> float:
    """Bisection on an increasing function for fn(x) == 0 over [lo, hi]."""
    mid = 0.5 * (lo + hi)
    while hi - lo > tolerance:
        mid = 0.5 * (lo + hi)
        if fn(mid) > 0:
            hi = mid
        else:
            lo = mid
    return mid


def solve_zero_cost_collar(
    market: MarketContext,
    *,
    vol: float,
    call_strike: float | None = None,
    put_strike: float | None = None,
    tolerance: float = 1e-4,
) -> ZeroCostCollar:
    """Find the missing strike of a collar whose put and call premiums match.

    Given the call strike, the put strike is searched in [0.8·S, K_call];
    given the put strike, the call strike is searched in [K_put, 1.2·S].
    With neither, the call strike defaults to 1.05·S.
    """

    S = market.spot
    args = (market.maturity, market.domestic_rate, market.foreign_rate, vol)

    if put_strike is not None and call_strike is None:
        target = put_price(S, put_strike, *args)
        # Call premium falls as the strike rises.
        k_call = _bisect(lambda k: target - call_price(S, k, *args), put_strike, 1.2 * S, tolerance)
        return ZeroCostCollar(
            put_strike=float(put_strike),
            call_strike=k_call,
            put_price=target,
            call_price=call_price(S, k_call, *args),
        )

    k_call = float(call_strike) if call_strike is not None else 1.05 * S
    target = call_price(S, k_call, *args)
    k_put = _bisect(lambda k: put_price(S, k, *args) - target, 0.8 * S, k_call, tolerance)
    return ZeroCostCollar(
        put_strike=k_put,
        call_strike=k_call,
        put_price=put_price(S, k_put, *args),
        call_price=target,
    )


def preset_strategy(req: StrategyPresetRequest) -> StrategyPresetResponse:
    """Build the legs of a named strategy and run them through the engine.

    Explicit levels in the request win over pair defaults. Raises KeyError for
    an unknown pair.
    """

    spot = req.market.spot
    quote = lookup_pair(req.pair) if req.pair else None

    base = default_levels(spot=spot, default_strike=quote.default_strike if quote else None)
    strike_mid = req.strike_mid or base.strike_mid
    # The seagull sells its low put below the bought (mid) put.
    low_default = strike_mid * 0.95 if req.preset == "seagull" else base.strike_lower
    levels = PresetLevels(
        strike_upper=req.strike_upper or base.strike_upper,
        strike_lower=req.strike_lower or low_default,
        strike_mid=strike_mid,
        barrier_upper=req.barrier_upper or base.barrier_upper,
        barrier_lower=req.barrier_lower or base.barrier_lower,
    )

    if req.volatility_pct is not None:
        vol_pct = req.volatility_pct
    elif quote is not None:
        vol_pct = quote.default_volatility * 100.0
    else:
        vol_pct = DEFAULT_VOLATILITY_PCT

    legs = build_preset_legs(
        req.preset,
        spot=spot,
        levels=levels,
        volatility_pct=vol_pct,
        quantity_pct=req.quantity_pct,
        bid_spread_pct=req.bid_spread_pct,
        ask_spread_pct=req.ask_spread_pct,
        forward=forward_rate(
            spot=spot,
            maturity=req.market.maturity,
            domestic_rate=req.market.domestic_rate,
            foreign_rate=req.market.foreign_rate,
        ),
    )
    name = str(STRATEGIES[req.preset]["name"])
    logger.info("Preset %s on spot %.6f: %d legs", req.preset, spot, len(legs))

    evaluation = evaluate_strategy(Strategy(name=name, legs=legs), req.market, include_premium=req.include_premium)
    return StrategyPresetResponse(
        preset=req.preset,
        note=STRATEGY_NOTES[req.preset],
        legs=legs,
        evaluation=evaluation_response(evaluation, name=name, include_premium=req.include_premium),
    )
