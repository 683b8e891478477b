from __future__ import annotations

from dataclasses import dataclass

from fxhedge.schemas.legs import LevelMode, OptionKind, OptionLeg
from fxhedge.schemas.market import MarketContext
from fxhedge.services import barrier, garman_kohlhagen


@dataclass(frozen=True)
class ResolvedLeg:
    """A leg with every level expressed in absolute price units.

    Levels are resolved once against the reference spot and reused by pricing,
    the payoff curve and the risk/reward sweep. `premium` is signed: the unit
    premium scaled by quantity_pct/100, so short legs carry a credit.
    """

    label: str
    kind: OptionKind
    strike: float | None
    upper_barrier: float | None
    lower_barrier: float | None
    volatility: float
    quantity_pct: float
    bid_spread_pct: float = 0.0
    ask_spread_pct: float = 0.0
    premium_override: float | None = None
    premium: float = 0.0

    @property
    def missing(self) -> str | None:
        """Name of the first level this leg still needs, or None if complete."""
        if self.strike is None:
            return "strike"
        if self.kind.has_barrier:
            if self.kind.double:
                if self.upper_barrier is None:
                    return "upper_barrier"
                if self.lower_barrier is None:
                    return "lower_barrier"
            elif self.upper_barrier is None and self.lower_barrier is None:
                return "barrier"
        return None

    @property
    def is_complete(self) -> bool:
        return self.missing is None


def _resolve_level(value: float | None, mode: LevelMode, reference_spot: float) -> float | None:
    if value is None:
        return None
    if mode == "percent":
        return reference_spot * (float(value) / 100.0)
    return float(value)


def resolve_leg(leg: OptionLeg, reference_spot: float, *, index: int = 0) -> ResolvedLeg:
    """Convert percent-of-spot levels to absolute levels.

    Always resolved against the reference spot, never against a sweep spot.
    """

    return ResolvedLeg(
        label=leg.leg_id or f"Option {index + 1}",
        kind=leg.kind,
        strike=_resolve_level(leg.strike, leg.strike_mode, reference_spot),
        upper_barrier=_resolve_level(leg.upper_barrier, leg.upper_barrier_mode, reference_spot),
        lower_barrier=_resolve_level(leg.lower_barrier, leg.lower_barrier_mode, reference_spot),
        volatility=float(leg.volatility_pct) / 100.0,
        quantity_pct=float(leg.quantity_pct),
        bid_spread_pct=float(leg.bid_spread_pct),
        ask_spread_pct=float(leg.ask_spread_pct),
        premium_override=None if leg.premium_override is None else float(leg.premium_override),
    )


def leg_multiplier(leg: ResolvedLeg, market: MarketContext) -> float:
    return barrier.barrier_multiplier(
        leg.kind,
        spot=market.spot,
        upper_barrier=leg.upper_barrier,
        lower_barrier=leg.lower_barrier,
        vol=leg.volatility,
        maturity=market.maturity,
    )


def price_leg(leg: ResolvedLeg, market: MarketContext) -> float:
    """Signed premium of one resolved leg.

    unit = GK vanilla × barrier multiplier, loaded with the bid spread when
    buying or reduced by the ask spread when selling; the result is
    unit × quantity_pct / 100. Incomplete legs price to 0.

    Raises PricingDomainError for degenerate spot/strike/maturity/volatility.
    """

    if not leg.is_complete:
        return 0.0

    if leg.premium_override is not None:
        unit = leg.premium_override
    else:
        unit = garman_kohlhagen.vanilla_price(
            leg.kind.side,
            spot=market.spot,
            strike=leg.strike,  # type: ignore[arg-type]
            maturity=market.maturity,
            domestic_rate=market.domestic_rate,
            foreign_rate=market.foreign_rate,
            vol=leg.volatility,
        )
        unit *= leg_multiplier(leg, market)

        if leg.quantity_pct > 0 and leg.bid_spread_pct:
            unit *= 1.0 + leg.bid_spread_pct / 100.0
        elif leg.quantity_pct < 0 and leg.ask_spread_pct:
            unit *= 1.0 - leg.ask_spread_pct / 100.0

    return unit * leg.quantity_pct / 100.0


def leg_payoff(leg: ResolvedLeg, expiry_spot: float, *, include_premium: bool = True) -> float:
    """P&L of one leg if the underlying fixes at `expiry_spot`.

    Incomplete legs contribute 0. A leg whose barrier condition leaves it
    inactive only loses its premium (when premiums are included).
    """

    if not leg.is_complete:
        return 0.0

    active = barrier.is_active(
        leg.kind,
        expiry_spot=expiry_spot,
        upper_barrier=leg.upper_barrier,
        lower_barrier=leg.lower_barrier,
    )
    if not active:
        return -leg.premium if include_premium else 0.0

    strike = leg.strike  # type: ignore[assignment]
    if leg.kind.is_call:
        intrinsic = max(0.0, expiry_spot - strike)
    else:
        intrinsic = max(0.0, strike - expiry_spot)

    sign = 1.0 if leg.quantity_pct > 0 else -1.0
    value = intrinsic * abs(leg.quantity_pct) / 100.0 * sign

    return value - leg.premium if include_premium else value
