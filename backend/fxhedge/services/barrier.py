from __future__ import annotations

import math

from fxhedge.schemas.legs import OptionKind
from fxhedge.services.errors import PricingDomainError

MULTIPLIER_FLOOR = 0.1
MULTIPLIER_CAP = 0.9


def _clamp(x: float) -> float:
    return max(MULTIPLIER_FLOOR, min(MULTIPLIER_CAP, x))


def barrier_multiplier(
    kind: OptionKind,
    *,
    spot: float,
    upper_barrier: float | None,
    lower_barrier: float | None,
    vol: float,
    maturity: float,
) -> float:
    """Heuristic premium multiplier for barrier legs.

    This is not a closed-form barrier price. The barrier's effect is proxied by
    the distance between spot and the barrier, normalised by σ√T:

      - single barrier, KO:  clamp(d / σ√T)       (far from the barrier -> richer)
      - single barrier, KI:  clamp(1 − d / σ√T)   (close to the barrier -> richer)
      - double barrier:      clamp(w / (2σ√T))    with w = (upper − lower) / spot

    where d = |barrier − spot| / spot and clamp() bounds the result to [0.1, 0.9].
    Legs without a barrier (or without the barrier levels they need) return 1.0.
    """

    if not kind.has_barrier:
        return 1.0
    if upper_barrier is None and lower_barrier is None:
        return 1.0

    if not math.isfinite(spot) or spot <= 0:
        raise PricingDomainError(f"spot must be a finite number > 0 (got {spot})")
    if not math.isfinite(vol) or vol <= 0 or not math.isfinite(maturity) or maturity <= 0:
        raise PricingDomainError("volatility and maturity must be > 0 for a barrier adjustment")

    scale = vol * math.sqrt(maturity)

    if kind.double:
        if upper_barrier is None or lower_barrier is None:
            return 1.0
        width = (upper_barrier - lower_barrier) / spot
        return _clamp(width / (2.0 * scale))

    if upper_barrier is not None:
        distance = abs((upper_barrier - spot) / spot)
    else:
        distance = abs((spot - lower_barrier) / spot)  # type: ignore[operator]

    if kind.is_knock_out:
        return _clamp(distance / scale)
    return _clamp(1.0 - distance / scale)


def is_active(
    kind: OptionKind,
    *,
    expiry_spot: float,
    upper_barrier: float | None,
    lower_barrier: float | None,
) -> bool:
    """Whether a leg pays its intrinsic value at `expiry_spot`.

    Only the resolved barrier levels are used; the reference spot plays no part.
    A reverse leg inverts the result for any barrier configuration.
    """

    if not kind.has_barrier:
        return True

    e = expiry_spot
    if kind.double:
        if upper_barrier is None or lower_barrier is None:
            return False
        active = lower_barrier <= e <= upper_barrier
    elif upper_barrier is not None:
        active = e < upper_barrier if kind.is_knock_out else e >= upper_barrier
    elif lower_barrier is not None:
        if kind.is_knock_out:
            active = e > lower_barrier
        elif kind.is_call:
            active = e >= lower_barrier
        else:
            active = e <= lower_barrier
    else:
        return False

    return not active if kind.reverse else active
