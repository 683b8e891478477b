from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

from fxhedge.schemas.legs import LegOutcomeOut, OptionLeg, Strategy
from fxhedge.schemas.market import MarketContext
from fxhedge.schemas.strategy import PayoffPointOut, RiskRewardOut, StrategyEvaluateResponse
from fxhedge.services.garman_kohlhagen import forward_rate
from fxhedge.services.legs import ResolvedLeg, leg_multiplier, price_leg, resolve_leg
from fxhedge.services.payoff import PayoffPoint, payoff_curve
from fxhedge.services.risk_reward import RiskRewardSummary, analyze_risk_reward
from fxhedge.services.strategy import ComposedStrategy, LegOutcome, compose_strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyEvaluation:
    composed: ComposedStrategy
    curve: list[PayoffPoint]
    summary: RiskRewardSummary
    forward_rate: float


def evaluate_strategy(strategy: Strategy, market: MarketContext, include_premium: bool = True) -> StrategyEvaluation:
    """Resolve, price and sweep a strategy.

    Every call works on fresh values; nothing is shared between evaluations.
    """

    composed = compose_strategy(strategy, market)
    curve = payoff_curve(composed, include_premium=include_premium)
    summary = analyze_risk_reward(curve)

    logger.debug(
        "Evaluated %r: %d legs (%d priced), best=%.6f worst=%.6f, %d break-even(s)",
        strategy.name,
        len(composed.legs),
        len(composed.priced_legs),
        summary.best_case,
        summary.worst_case,
        len(summary.break_even_points),
    )

    return StrategyEvaluation(
        composed=composed,
        curve=curve,
        summary=summary,
        forward_rate=forward_rate(
            spot=market.spot,
            maturity=market.maturity,
            domestic_rate=market.domestic_rate,
            foreign_rate=market.foreign_rate,
        ),
    )


def price_single_leg(leg: OptionLeg, market: MarketContext) -> tuple[ResolvedLeg, LegOutcome]:
    """Resolve one leg against the market spot and price it.

    Unlike the composer this lets PricingDomainError propagate, so a caller
    pricing a lone leg sees why it failed.
    """

    resolved = resolve_leg(leg, market.spot)
    if not resolved.is_complete:
        return resolved, LegOutcome(label=resolved.label, status="skipped", error=f"missing {resolved.missing}")

    premium = price_leg(resolved, market)
    multiplier = leg_multiplier(resolved, market) if resolved.premium_override is None else None
    return replace(resolved, premium=premium), LegOutcome(
        label=resolved.label, status="ok", multiplier=multiplier, premium=premium
    )


def leg_outcome_out(leg: ResolvedLeg, outcome: LegOutcome, market: MarketContext) -> LegOutcomeOut:
    return LegOutcomeOut(
        label=leg.label,
        kind=leg.kind.code,
        status=outcome.status,
        error=outcome.error,
        resolved_strike=leg.strike,
        resolved_upper_barrier=leg.upper_barrier,
        resolved_lower_barrier=leg.lower_barrier,
        barrier_multiplier=outcome.multiplier,
        premium=outcome.premium,
        premium_cash=outcome.premium * market.notional,
    )


def _summary_out(summary: RiskRewardSummary) -> RiskRewardOut:
    unbounded = math.isinf(summary.risk_reward_ratio)
    return RiskRewardOut(
        best_case=summary.best_case,
        best_case_spot=summary.best_case_spot,
        worst_case=summary.worst_case,
        worst_case_spot=summary.worst_case_spot,
        risk_reward_ratio=None if unbounded else summary.risk_reward_ratio,
        risk_reward_unbounded=unbounded,
        break_even_points=list(summary.break_even_points),
    )


def evaluation_response(
    evaluation: StrategyEvaluation,
    *,
    name: str,
    include_premium: bool,
) -> StrategyEvaluateResponse:
    composed = evaluation.composed
    market = composed.market
    total = composed.total_premium

    return StrategyEvaluateResponse(
        name=name,
        reference_spot=market.spot,
        forward_rate=evaluation.forward_rate,
        include_premium=include_premium,
        total_premium=total,
        total_premium_cash=total * market.notional,
        legs=[leg_outcome_out(leg, out, market) for leg, out in zip(composed.legs, composed.outcomes)],
        curve=[
            PayoffPointOut(
                sweep_spot=p.sweep_spot,
                unhedged_rate=p.unhedged_rate,
                hedged_rate=p.hedged_rate,
                reference_markers=dict(p.reference_markers),
            )
            for p in evaluation.curve
        ],
        summary=_summary_out(evaluation.summary),
    )
