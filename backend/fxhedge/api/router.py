from fastapi import APIRouter

from fxhedge.api.endpoints import meta, pricing, strategy

api_router = APIRouter()

api_router.include_router(pricing.router, prefix="/v1/pricing", tags=["pricing"])
api_router.include_router(strategy.router, prefix="/v1/strategy", tags=["strategy"])
api_router.include_router(meta.router, prefix="/v1/meta", tags=["meta"])
