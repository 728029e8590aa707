"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.v1 import api_router
from core import settings
from services import RateLimitMiddleware, ServiceError, ValidationError, get_rate_limiter

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    payload = exc.to_dict()
    if isinstance(exc, ValidationError):
        payload["messages"] = exc.full_messages()
    if exc.status_code >= 403:
        logger.info(
            "Request rejected",
            extra={"path": request.url.path, "code": exc.code},
        )
    return JSONResponse(payload, status_code=exc.status_code)


def create_app() -> FastAPI:
    configure_logging()
    application = FastAPI(title=settings.app_name)

    if settings.cors_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Next-Offset", "X-Page", "X-Per-Page", "X-Total-Count", "X-Total-Pages"],
        )
    application.add_middleware(
        RateLimitMiddleware,
        limiter_factory=get_rate_limiter,
        exempt_paths={"/health"},
    )

    application.add_exception_handler(ServiceError, service_error_handler)
    application.include_router(api_router)

    @application.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
