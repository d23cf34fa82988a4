# storefront/api/__init__.py
import time

from fastapi import FastAPI, Request

from storefront.api.routers import carts, catalog, health, orders
from storefront.data.store import Store
from storefront.utils.logging import get_logger

logger = get_logger("storefront.api")


def create_app(store: Store | None = None) -> FastAPI:
    app = FastAPI(
        title="Storefront Cart Service",
        version="1.0.0",
    )
    # jeden store na proces, w testach swiezy per test
    app.state.store = store or Store()

    @app.middleware("http")
    async def log_api_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                f"{request.method} {request.url.path} {response.status_code} in {duration_ms:.0f}ms"
            )
        return response

    # Include routers
    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app
