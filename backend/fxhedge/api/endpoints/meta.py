from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Request

from fxhedge.meta.currency_catalog import CATALOG, lookup_pair


router = APIRouter()


@router.get("/pairs")
def get_pair_catalog() -> dict[str, object]:
    """Return currency-pair and strategy metadata used by the frontend.

    This is static metadata: indicative spots/vols, categories, presets and option-type codes.
    """
    return CATALOG


@router.get("/pairs/lookup")
def get_pair(symbol: str) -> dict[str, object]:
    try:
        return asdict(lookup_pair(symbol))
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"Unknown pair: {symbol}") from e


@router.get("/defaults")
def get_defaults(request: Request) -> dict[str, object]:
    settings = request.app.state.settings
    return {
        "pair": settings.default_pair,
        "maturity": settings.default_maturity,
        "domestic_rate": settings.default_domestic_rate,
        "foreign_rate": settings.default_foreign_rate,
        "notional": settings.default_notional,
    }
