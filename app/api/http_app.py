from __future__ import annotations

from contextlib import asynccontextmanager
from collections.abc import Awaitable, Callable
import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.handlers.deps import ApiDeps
from app.api.handlers.waitlist import COMPONENT_ID as JOIN_WAITLIST_COMPONENT_ID
from app.api.handlers.waitlist import join_waitlist_handler
from app.api.schemas import (
    METHOD_NOT_ALLOWED_MESSAGE,
    ErrorResponse,
    HealthResponse,
    ReadyResponse,
    WaitlistAcceptedResponse,
)
from app.domain.error_taxonomy import ErrorCode, public_error
from app.domain.errors import DomainValidationError
from app.domain.models import SubmissionOutcome

SERVICE_NAME = "waitlist-signup"
WAITLIST_PATH = "/api/waitlist"


def build_app(
    run_id: str,
    api_deps: ApiDeps,
    on_shutdown: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    logger = logging.getLogger("runtime")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        del app
        logger.info(
            "service started",
            extra={"service": SERVICE_NAME, "run_id": run_id},
        )

        yield

        if on_shutdown is not None:
            await on_shutdown()

        logger.info(
            "service stopped",
            extra={"service": SERVICE_NAME, "run_id": run_id},
        )

    app = FastAPI(title=SERVICE_NAME, version="0.1.0", lifespan=lifespan)

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service=SERVICE_NAME)

    @app.get("/ready", response_model=ReadyResponse, tags=["System"])
    async def ready() -> ReadyResponse:
        return ReadyResponse(
            status="ready",
            service=SERVICE_NAME,
            client_mode=api_deps.client_mode,
            concurrent_fanout=api_deps.concurrent_fanout,
        )

    @app.post(
        WAITLIST_PATH,
        response_model=WaitlistAcceptedResponse,
        responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        tags=["Waitlist"],
    )
    async def join_waitlist(request: Request) -> WaitlistAcceptedResponse | JSONResponse:
        try:
            body = await request.json()
            if not isinstance(body, dict):
                raise ValueError("request body must be a JSON object")
            return await join_waitlist_handler(email=body.get("email"), api_deps=api_deps)
        except DomainValidationError:
            logger.info(
                "waitlist submission rejected",
                extra={
                    "service": SERVICE_NAME,
                    "run_id": run_id,
                    "component": JOIN_WAITLIST_COMPONENT_ID,
                    "outcome": SubmissionOutcome.REJECTED,
                },
            )
            return _error_response("invalid_input")
        except Exception:
            logger.exception(
                "waitlist submission failed",
                extra={
                    "service": SERVICE_NAME,
                    "run_id": run_id,
                    "component": JOIN_WAITLIST_COMPONENT_ID,
                    "outcome": SubmissionOutcome.INTERNAL_ERROR,
                },
            )
            return _error_response("internal_error")

    @app.exception_handler(StarletteHTTPException)
    async def waitlist_http_error(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code != 405 or request.url.path != WAITLIST_PATH:
            return await http_exception_handler(request, exc)
        return JSONResponse(
            status_code=405,
            content=ErrorResponse(error=METHOD_NOT_ALLOWED_MESSAGE).model_dump(),
            headers={"Allow": "POST"},
        )

    return app


def _error_response(code: ErrorCode) -> JSONResponse:
    error = public_error(code)
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.message).model_dump(),
    )
