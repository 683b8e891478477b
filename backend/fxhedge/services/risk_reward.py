from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from fxhedge.services.payoff import PayoffPoint


@dataclass(frozen=True)
class RiskRewardSummary:
    best_case: float
    best_case_spot: float
    worst_case: float
    worst_case_spot: float
    risk_reward_ratio: float
    break_even_points: list[float] = field(default_factory=list)


def risk_reward_ratio(best_case: float, worst_case: float) -> float:
    """|best / worst|; with no downside the ratio is +inf if there is any upside, else 0."""
    if worst_case == 0:
        return math.inf if best_case > 0 else 0.0
    return abs(best_case / worst_case)


def break_even_points(spots: Sequence[float], relative: Sequence[float]) -> list[float]:
    """Linearly interpolated zero crossings of the relative payoff.

    A crossing is a move from < 0 to >= 0 or from > 0 to <= 0 between two
    consecutive samples; the samples must be in sweep order.
    """

    out: list[float] = []
    for i in range(1, len(relative)):
        prev = relative[i - 1]
        cur = relative[i]
        if (prev < 0 and cur >= 0) or (prev > 0 and cur <= 0):
            step = spots[i] - spots[i - 1]
            out.append(float(spots[i - 1] + step * (0.0 - prev) / (cur - prev)))
    return out


def analyze_risk_reward(curve: Sequence[PayoffPoint]) -> RiskRewardSummary:
    """Best/worst hedged-minus-unhedged outcome and break-even spots over the sweep."""
    if not curve:
        raise ValueError("curve must contain at least one point")

    spots = np.array([p.sweep_spot for p in curve], dtype=float)
    relative = np.array([p.hedged_rate - p.unhedged_rate for p in curve], dtype=float)

    # argmax/argmin return the first index on ties.
    i_best = int(np.argmax(relative))
    i_worst = int(np.argmin(relative))
    best = float(relative[i_best])
    worst = float(relative[i_worst])

    return RiskRewardSummary(
        best_case=best,
        best_case_spot=float(spots[i_best]),
        worst_case=worst,
        worst_case_spot=float(spots[i_worst]),
        risk_reward_ratio=risk_reward_ratio(best, worst),
        break_even_points=break_even_points(spots.tolist(), relative.tolist()),
    )
