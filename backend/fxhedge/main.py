from __future__ import annotations

import logging

from fastapi import FastAPI

from fxhedge.api.router import api_router
from fxhedge.core.config import Settings
from fxhedge.core.log import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version="1.0.0")
    app.state.settings = settings

    # API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    logger.info("%s ready (default pair %s)", settings.app_name, settings.default_pair)
    return app


app = create_app()
