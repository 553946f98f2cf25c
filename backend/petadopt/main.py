"""ASGI application for the PetAdopt API."""

import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis  # type: ignore[import-untyped]
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_limiter import FastAPILimiter
from redis.exceptions import RedisError
from secure import Secure

from petadopt.api.v1 import router as v1_router
from petadopt.core.config import get_settings
from petadopt.core.errors import DomainError
from petadopt.security.logging_filters import install_sensitive_filter
from petadopt.services.bootstrap_service import ensure_default_admin

logger = logging.getLogger(__name__)

settings = get_settings()
secure_headers = Secure.with_default_headers()


async def _start_rate_limiter() -> redis.Redis | None:
    if not settings.redis_url:
        logger.info("REDIS_URL not set; rate limiting disabled")
        return None
    client = redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
    try:
        await FastAPILimiter.init(client)
    except (RedisError, OSError):
        logger.exception("Rate limiter unavailable; continuing without it")
        await client.aclose()
        return None
    return client


@asynccontextmanager
async def lifespan(_: FastAPI):
    client = await _start_rate_limiter()
    await ensure_default_admin()
    try:
        yield
    finally:
        if client is not None:
            await FastAPILimiter.close()
            await client.aclose()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins or ["http://localhost:3000"],
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    secure_headers.set_headers(response)
    return response


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render workflow and permission failures as ``{error, detail, context}``."""
    level = logging.WARNING if exc.status_code == 409 else logging.INFO
    logger.log(
        level, "%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


install_sensitive_filter("", "uvicorn", "uvicorn.access", "uvicorn.error")

app.include_router(v1_router, prefix=settings.api_v1_prefix)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    return {"message": settings.app_name}
