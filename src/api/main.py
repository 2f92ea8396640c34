import asyncio
import logging
import os
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.backend import BackendAPI
from api.metrics import ERRORS_TOTAL
from api.routers import ops, planner
from planner_ai.config import load_api_config
from planner_ai.errors import PlannerError, RateLimitError
from planner_ai.models import ApiConfig

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)


async def _planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
    ERRORS_TOTAL.labels(kind=exc.kind).inc()
    logger.error(f"{request.url.path} failed: {exc}")

    if isinstance(exc, RateLimitError):
        # Reported late, never retried: gives the upstream window a moment to reset.
        delay = request.app.state.api_config.rate_limit_report_delay_s
        if delay > 0:
            await asyncio.sleep(delay)

    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    ERRORS_TOTAL.labels(kind="invalid_request").inc()
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": details},
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}")
    what = "image" if request.url.path.endswith("generate-image") else "schedule"
    return JSONResponse(
        status_code=500,
        content={"error": f"Failed to generate {what}", "details": str(exc) or "Unknown error"},
    )


def create_app(
    config: Optional[ApiConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    backend: Optional[BackendAPI] = None,
) -> FastAPI:
    """Build the relay. Configuration is resolved here, once, and stored on app.state."""
    config = config or load_api_config()

    app = FastAPI(title="Planner AI relay")
    app.state.api_config = config
    app.state.backend = backend or BackendAPI(config, transport=transport)

    app.add_exception_handler(PlannerError, _planner_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(ops.router)
    app.include_router(planner.router)

    logger.info(
        f"Planner relay configured (provider={config.api_provider}, "
        f"mock_responses={config.use_mock_responses}, mock_images={config.use_mock_images})"
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "5000")))
