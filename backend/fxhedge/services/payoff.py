from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from fxhedge.services.legs import ResolvedLeg
from fxhedge.services.strategy import ComposedStrategy

# Fixed sweep: ±30% around the reference spot, 100 equal steps (101 points).
SWEEP_LOW = 0.7
SWEEP_HIGH = 1.3
SWEEP_STEPS = 100


@dataclass(frozen=True)
class PayoffPoint:
    sweep_spot: float
    unhedged_rate: float
    hedged_rate: float
    reference_markers: dict[str, float] = field(default_factory=dict)

    @property
    def relative_payoff(self) -> float:
        return self.hedged_rate - self.unhedged_rate


def sweep_grid(reference_spot: float) -> np.ndarray:
    """The 101 expiry spots shared by the curve and the risk/reward sweep."""
    return np.linspace(SWEEP_LOW * reference_spot, SWEEP_HIGH * reference_spot, SWEEP_STEPS + 1)


def sweep_step(reference_spot: float) -> float:
    return (SWEEP_HIGH - SWEEP_LOW) * reference_spot / SWEEP_STEPS


def reference_markers(legs: Sequence[ResolvedLeg]) -> dict[str, float]:
    """Named strike/barrier levels for chart reference lines.

    Legs sharing a label are told apart by their 1-based position, e.g.
    "Hedge (2) Strike".
    """
    counts = Counter(leg.label for leg in legs)
    markers: dict[str, float] = {}
    for i, leg in enumerate(legs):
        name = leg.label if counts[leg.label] == 1 else f"{leg.label} ({i + 1})"
        if leg.strike is not None:
            markers[f"{name} Strike"] = leg.strike
        if leg.upper_barrier is not None:
            markers[f"{name} Upper Barrier"] = leg.upper_barrier
        if leg.lower_barrier is not None:
            markers[f"{name} Lower Barrier"] = leg.lower_barrier
    return markers


def payoff_curve(composed: ComposedStrategy, *, include_premium: bool = True) -> list[PayoffPoint]:
    """Unhedged vs hedged rate across the sweep.

    hedged = expiry spot + strategy payoff. Reference markers come from the
    composed (already resolved) legs and are attached to the first point only.
    """

    markers = reference_markers(composed.legs)

    points: list[PayoffPoint] = []
    for i, s in enumerate(sweep_grid(composed.market.spot)):
        spot = float(s)
        total = composed.payoff(spot, include_premium=include_premium)
        points.append(
            PayoffPoint(
                sweep_spot=spot,
                unhedged_rate=spot,
                hedged_rate=spot + total,
                reference_markers=markers if i == 0 else {},
            )
        )
    return points

