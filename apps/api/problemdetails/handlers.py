"""FastAPI exception handlers that reply with problem details."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from problemdetails.core.config import Settings, get_settings
from problemdetails.core.status import status_text
from problemdetails.domain.capabilities import SelfServing
from problemdetails.errors import ProblemDetailsError, StatusError, errorf
from problemdetails.rendering import serve_error
from problemdetails.schemas.problem import ErrorProblemDetails, ProblemDetails
from problemdetails.sentinels import release

STATUS_UNPROCESSABLE_ENTITY = 422

logger = logging.getLogger(__name__)


def _request_correlation_id(request: Request, header: str) -> str:
    """Return the request's correlation id, taking it from the configured header when present."""
    cached = getattr(request.state, "correlation_id", None)
    if isinstance(cached, str) and cached:
        return cached

    correlation_id = request.headers.get(header) or f"req-{uuid4()}"
    request.state.correlation_id = correlation_id
    return correlation_id


def _with_instance(err: Any, request: Request) -> Any:
    if isinstance(err, SelfServing):
        return err
    if isinstance(err, ProblemDetailsError):
        problem = err.details
    elif isinstance(err, ProblemDetails):
        problem = err
    else:
        problem = ErrorProblemDetails.from_error(err)
    if problem.instance:
        return problem
    return problem.model_copy(update={"instance": request.url.path})


def _log_problem(request: Request, exc: BaseException, status_code: int, settings: Settings) -> None:
    correlation_id = _request_correlation_id(request, settings.correlation_id_header)
    if status_code >= 500:
        logger.error(
            "problem.rendered correlation_id=%s method=%s path=%s status=%s error_type=%s",
            correlation_id,
            request.method,
            request.url.path,
            status_code,
            type(exc).__name__,
            exc_info=exc if settings.log_server_errors else None,
        )
        return

    logger.info(
        "problem.rendered correlation_id=%s method=%s path=%s status=%s error_type=%s",
        correlation_id,
        request.method,
        request.url.path,
        status_code,
        type(exc).__name__,
    )


def handle_problem(request: Request, exc: Any, settings: Settings | None = None) -> Response:
    """Render exc for the request, applying the configured instance and logging policy."""
    settings = settings or get_settings()
    err = _with_instance(exc, request) if settings.instance_from_path else exc
    response = serve_error(request, err)
    _log_problem(request, exc, response.status_code, settings)
    # A shared STATUS_* error must not keep this request's frames alive.
    release(exc)
    return response


def http_exception_error(exc: StarletteHTTPException) -> StatusError:
    detail = exc.detail if exc.detail is not None else status_text(exc.status_code)
    return errorf(exc.status_code, str(detail))


def validation_problem(exc: RequestValidationError) -> ProblemDetails:
    return ProblemDetails.from_error(
        errorf(STATUS_UNPROCESSABLE_ENTITY, "Request validation failed"),
        errors=jsonable_encoder(exc.errors()),
    )


def register_problem_handlers(app: FastAPI, settings: Settings | None = None) -> None:
    """Register problem details exception handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
        settings: Overrides the environment configuration.
    """

    def _settings() -> Settings:
        return settings or get_settings()

    @app.exception_handler(StatusError)
    async def handle_status_error(request: Request, exc: StatusError) -> Response:
        return handle_problem(request, exc, _settings())

    @app.exception_handler(ProblemDetailsError)
    async def handle_problem_details_error(request: Request, exc: ProblemDetailsError) -> Response:
        return handle_problem(request, exc, _settings())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
        response = handle_problem(request, http_exception_error(exc), _settings())
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
        return handle_problem(request, ProblemDetailsError(validation_problem(exc)), _settings())

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> Response:
        """Catch-all: status is inferred from the error chain, 500 when nothing matches."""
        return handle_problem(request, exc, _settings())


__all__ = [
    "handle_problem",
    "http_exception_error",
    "register_problem_handlers",
    "validation_problem",
]
