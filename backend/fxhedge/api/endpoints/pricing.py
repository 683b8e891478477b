from __future__ import annotations

from fastapi import APIRouter, HTTPException

from fxhedge.schemas.legs import LegPricingRequest, LegPricingResponse
from fxhedge.schemas.market import ForwardRateResponse, MarketContext
from fxhedge.services.evaluation import leg_outcome_out, price_single_leg
from fxhedge.services.garman_kohlhagen import forward_rate


router = APIRouter()


@router.post("/leg", response_model=LegPricingResponse)
def price_leg(req: LegPricingRequest) -> LegPricingResponse:
    """Price a single leg (levels resolved against the market spot).

    A leg with no strike or a missing barrier comes back "skipped" with a zero
    premium; degenerate numbers are a 400.
    """
    try:
        resolved, outcome = price_single_leg(req.leg, req.market)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return LegPricingResponse(leg=leg_outcome_out(resolved, outcome, req.market))


@router.post("/forward", response_model=ForwardRateResponse)
def price_forward(market: MarketContext) -> ForwardRateResponse:
    try:
        fwd = forward_rate(
            spot=market.spot,
            maturity=market.maturity,
            domestic_rate=market.domestic_rate,
            foreign_rate=market.foreign_rate,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return ForwardRateResponse(spot=market.spot, maturity=market.maturity, forward_rate=fwd)
