"""FastAPI entry point for the revenue analytics API."""
from __future__ import annotations

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.logging_config import configure_logging

configure_logging(get_settings())

from interfaces import deps, health_router, revenue_router  # noqa: E402  # logging first
from interfaces.error_handlers import register_exception_handlers  # noqa: E402

logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - runtime wiring
    if deps.settings.seed_on_startup:
        deps.revenue_service.seed_sample_data()
    logger.info("Revenue API started (config %s)", deps.settings.version)
    yield
    deps.shutdown()
    logger.info("Revenue API stopped")


app = FastAPI(title="Revenue Analytics API", lifespan=lifespan)

app.include_router(revenue_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=deps.settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

register_exception_handlers(app)


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
