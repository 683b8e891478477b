from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Literal, Sequence

from fxhedge.schemas.legs import Strategy
from fxhedge.schemas.market import MarketContext
from fxhedge.services.errors import PricingDomainError
from fxhedge.services.legs import ResolvedLeg, leg_multiplier, leg_payoff, price_leg, resolve_leg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LegOutcome:
    label: str
    status: Literal["ok", "skipped", "error"]
    error: str | None = None
    multiplier: float | None = None
    premium: float = 0.0


@dataclass(frozen=True)
class ComposedStrategy:
    """Resolved + priced legs for one evaluation pass.

    `legs` and `outcomes` are parallel and keep the input order. Only legs with
    an "ok" outcome take part in the payoff.
    """

    market: MarketContext
    legs: tuple[ResolvedLeg, ...]
    outcomes: tuple[LegOutcome, ...]

    @property
    def priced_legs(self) -> tuple[ResolvedLeg, ...]:
        return tuple(leg for leg, out in zip(self.legs, self.outcomes) if out.status == "ok")

    @property
    def total_premium(self) -> float:
        return sum(out.premium for out in self.outcomes)

    def payoff(self, expiry_spot: float, *, include_premium: bool = True) -> float:
        return strategy_payoff(self.priced_legs, expiry_spot, include_premium=include_premium)


def strategy_payoff(legs: Sequence[ResolvedLeg], expiry_spot: float, *, include_premium: bool = True) -> float:
    """Sum of leg payoffs at one expiry spot (0 for an empty strategy)."""
    total = 0.0
    for leg in legs:
        total += leg_payoff(leg, expiry_spot, include_premium=include_premium)
    return total


def compose_strategy(strategy: Strategy, market: MarketContext) -> ComposedStrategy:
    """Resolve every leg once against the reference spot, then price it.

    A leg that cannot be priced never aborts the evaluation: incomplete legs are
    skipped, degenerate ones are reported as errors and contribute nothing.
    """

    legs: list[ResolvedLeg] = []
    outcomes: list[LegOutcome] = []

    for i, raw in enumerate(strategy.legs):
        leg = resolve_leg(raw, market.spot, index=i)

        if not leg.is_complete:
            logger.debug("Skipping %s: missing %s", leg.label, leg.missing)
            legs.append(leg)
            outcomes.append(LegOutcome(label=leg.label, status="skipped", error=f"missing {leg.missing}"))
            continue

        try:
            premium = price_leg(leg, market)
            multiplier = leg_multiplier(leg, market) if leg.premium_override is None else None
        except PricingDomainError as e:
            logger.warning("Leg %s (%s) not priced: %s", leg.label, leg.kind.code, e)
            legs.append(leg)
            outcomes.append(LegOutcome(label=leg.label, status="error", error=str(e)))
            continue

        legs.append(replace(leg, premium=premium))
        outcomes.append(LegOutcome(label=leg.label, status="ok", multiplier=multiplier, premium=premium))

    return ComposedStrategy(market=market, legs=tuple(legs), outcomes=tuple(outcomes))
