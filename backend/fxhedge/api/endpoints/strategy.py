from __future__ import annotations

from fastapi import APIRouter, HTTPException

from fxhedge.schemas.strategy import (
    StrategyEvaluateRequest,
    StrategyEvaluateResponse,
    StrategyPresetRequest,
    StrategyPresetResponse,
    ZeroCostCollarRequest,
    ZeroCostCollarResponse,
)
from fxhedge.services.evaluation import evaluate_strategy, evaluation_response
from fxhedge.services.presets import preset_strategy, solve_zero_cost_collar


router = APIRouter()


@router.post("/evaluate", response_model=StrategyEvaluateResponse)
def api_strategy_evaluate(req: StrategyEvaluateRequest) -> StrategyEvaluateResponse:
    """Payoff curve, risk/reward summary and per-leg outcomes for a strategy.

    Legs that cannot be priced are reported in `legs` and left out of the curve.
    """
    evaluation = evaluate_strategy(req.strategy, req.market, include_premium=req.include_premium)
    return evaluation_response(evaluation, name=req.strategy.name, include_premium=req.include_premium)


@router.post("/preset", response_model=StrategyPresetResponse)
def api_strategy_preset(req: StrategyPresetRequest) -> StrategyPresetResponse:
    try:
        return preset_strategy(req)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"Unknown pair: {req.pair}") from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.post("/zero-cost-collar", response_model=ZeroCostCollarResponse)
def api_zero_cost_collar(req: ZeroCostCollarRequest) -> ZeroCostCollarResponse:
    try:
        res = solve_zero_cost_collar(
            req.market,
            vol=req.volatility_pct / 100.0,
            call_strike=req.call_strike,
            put_strike=req.put_strike,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return ZeroCostCollarResponse(
        put_strike=res.put_strike,
        call_strike=res.call_strike,
        put_price=res.put_price,
        call_price=res.call_price,
        net_premium=res.net_premium,
    )
