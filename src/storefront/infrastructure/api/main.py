"""Storefront HTTP entrypoint."""

from __future__ import annotations

from fastapi import FastAPI

from storefront.infrastructure.api.errors import register_error_handlers
from storefront.infrastructure.api.orders import router as orders_router
from storefront.infrastructure.config import Settings


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(title="Storefront Orders API")
    app.state.settings = settings or Settings.from_env()

    app.include_router(orders_router)
    register_error_handlers(app)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app
