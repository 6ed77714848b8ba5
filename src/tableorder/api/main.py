from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from tableorder.api.error_handling import register_exception_handlers
from tableorder.api.middleware.request_id import RequestIDMiddleware
from tableorder.api.routes.health import router as health_router
from tableorder.api.routes.metrics import router as metrics_router
from tableorder.api.routes.orders import router as orders_router
from tableorder.infrastructure.config import Settings, get_cook_time_generator, get_settings
from tableorder.infrastructure.db.session import dispose_engine
from tableorder.infrastructure.observability.logging_config import configure_logging
from tableorder.infrastructure.observability.otel import configure_otel

logger = logging.getLogger("tableorder.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)


def _route_template(request: Request) -> str:
    # Label by route template so per-table paths do not explode cardinality.
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _cors_allow_origins(settings: Settings) -> list[str]:
    # Local and test runs accept any origin; credentials are never allowed.
    if settings.app_env in {"dev", "test"}:
        return ["*"]
    return list(settings.cors_allow_origins)


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method = request.method
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            path = _route_template(request)
            REQUEST_COUNT.labels(method=method, path=path, status_code="500").inc()
            REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
            logger.exception(
                "request_error",
                extra={
                    "method": method,
                    "path": request.url.path,
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        path = _route_template(request)
        REQUEST_COUNT.labels(method=method, path=path, status_code=str(response.status_code)).inc()
        REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000)
        logger.info(
            "request_complete",
            extra={
                "method": method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("service_starting")
    try:
        yield
    finally:
        dispose_engine()


def create_app() -> FastAPI:
    # Fails here, before any request is served, on a bad configuration.
    settings = get_settings()
    get_cook_time_generator()
    configure_logging(settings.log_level)

    app = FastAPI(title="Table Order Service", version="0.1.0", lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(orders_router)

    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(settings),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app, settings)
    return app


app = create_app()
