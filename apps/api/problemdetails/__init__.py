"""RFC 7807 problem details for FastAPI and Starlette applications.

Errors raised while handling a request are turned into machine-readable
problem responses. The status code is inferred from the error chain and the
body is rendered as JSON, XML or plain text depending on the Accept header.
"""

from .core.status import status_text
from .domain.inference import resolve
from .errors import InvalidEncodingError, ProblemDetailsError, StatusError, errorf, wrap
from .handlers import register_problem_handlers
from .rendering import method_not_allowed, not_found, render_error, serve_error
from .schemas.problem import ProblemDetails
from . import sentinels
from .sentinels import *  # noqa: F401,F403

__all__ = [
    "InvalidEncodingError",
    "ProblemDetails",
    "ProblemDetailsError",
    "StatusError",
    "errorf",
    "method_not_allowed",
    "not_found",
    "register_problem_handlers",
    "render_error",
    "resolve",
    "serve_error",
    "status_text",
    "wrap",
    *sentinels.__all__,
]
