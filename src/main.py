"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from src.om_api.middleware.request_log import RequestLogMiddleware
from src.om_common.errors import AppError
from src.om_common.logging_config import configure_logging
from src.om_common.response import error_response
from src.om_matching.api.router import router as offer_router
from src.om_matching.application.service import close_exchange, get_exchange
from src.om_settlement.api.router import router as settlement_router
from src.om_trade.api.matches_router import router as matches_router
from src.om_trade.api.router import router as trade_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging + exchange wiring. Shutdown: close outbound HTTP clients."""
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    get_exchange()
    logger.info(
        "%s started: platform=%s ledger=%s",
        settings.APP_NAME,
        settings.PLATFORM_API_URL,
        settings.LEDGER_API_URL,
    )
    yield
    await close_exchange()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("[%s] %s failed: %s", request.method, request.url.path, exc.message)
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(offer_router, prefix="/api/v1")
app.include_router(trade_router, prefix="/api/v1")
app.include_router(settlement_router, prefix="/api/v1")
app.include_router(matches_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
