"""Content-negotiated problem responses.

Errors are rendered as ``application/problem+json``,
``application/problem+xml`` or plain text depending on the request's Accept
header. Negotiation picks the first accepted media type that looks like JSON
or XML, in the order the client listed them. Quality values are ignored.
"""

from __future__ import annotations

import logging
from fnmatch import fnmatchcase
from typing import Any, Iterable, Literal

from pydantic_core import PydanticSerializationError
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from problemdetails.core.status import status_json
from problemdetails.domain.capabilities import SelfServing
from problemdetails.domain.inference import resolve
from problemdetails.errors import ProblemDetailsError
from problemdetails.schemas.problem import ErrorProblemDetails, ProblemDetails
from problemdetails.schemas.xml_codec import XML_HEADER
from problemdetails.sentinels import STATUS_METHOD_NOT_ALLOWED, STATUS_NOT_FOUND, STATUS_OK, is_sentinel

JSON_PATTERN = "*/*json"
XML_PATTERN = "*/*xml"

PROBLEM_JSON_CONTENT_TYPE = "application/problem+json; charset=utf-8"
PROBLEM_XML_CONTENT_TYPE = "application/problem+xml; charset=utf-8"

Representation = Literal["json", "xml"]

_SERIALIZATION_ERRORS = (PydanticSerializationError, TypeError, ValueError)

logger = logging.getLogger(__name__)


def match_media_type(pattern: str, media_type: str) -> bool:
    """Match a media type against a glob pattern where ``*`` never crosses ``/``."""
    pattern_parts = pattern.split("/")
    media_parts = media_type.strip().lower().split("/")
    if len(pattern_parts) != len(media_parts):
        return False
    return all(fnmatchcase(part, pattern_part) for part, pattern_part in zip(media_parts, pattern_parts))


def accepted_media_types(accept_values: Iterable[str]) -> list[str]:
    """Flatten Accept header values into media types in client order, without parameters."""
    media_types: list[str] = []
    for value in accept_values:
        for entry in value.split(","):
            media_type = entry.split(";", 1)[0].strip()
            if media_type:
                media_types.append(media_type)
    return media_types


def negotiate(accept_values: Iterable[str]) -> Representation | None:
    for media_type in accepted_media_types(accept_values):
        if match_media_type(JSON_PATTERN, media_type):
            return "json"
        if match_media_type(XML_PATTERN, media_type):
            return "xml"
    return None


def _problem_for(err: Any) -> ProblemDetails:
    if isinstance(err, ProblemDetails):
        return err
    if isinstance(err, ProblemDetailsError):
        return err.details
    return ErrorProblemDetails.from_error(err)


def _body_allowed(status_code: int) -> bool:
    """1xx, 204 and 304 responses never carry a body."""
    return not (100 <= status_code < 200 or status_code in (204, 304))


def _problem_headers(content_type: str) -> dict[str, str]:
    return {"Content-Type": content_type, "X-Content-Type-Options": "nosniff"}


def serve_json(problem: ProblemDetails, status_code: int) -> Response:
    body = b""
    if _body_allowed(status_code):
        try:
            body = problem.with_status(status_code).to_json() + b"\n"
        except _SERIALIZATION_ERRORS as exc:
            logger.warning("problem.serialization_failed format=json status=%s error=%s", status_code, exc)
    return Response(content=body, status_code=status_code, headers=_problem_headers(PROBLEM_JSON_CONTENT_TYPE))


def serve_xml(problem: ProblemDetails, status_code: int) -> Response:
    body = b""
    if _body_allowed(status_code):
        try:
            body = XML_HEADER.encode("utf-8") + problem.with_status(status_code).to_xml()
        except _SERIALIZATION_ERRORS as exc:
            logger.warning("problem.serialization_failed format=xml status=%s error=%s", status_code, exc)
    return Response(content=body, status_code=status_code, headers=_problem_headers(PROBLEM_XML_CONTENT_TYPE))


def serve_text(err: Any, status_code: int) -> Response:
    return PlainTextResponse(
        content=f"{err}\n" if _body_allowed(status_code) else "",
        status_code=status_code,
        headers={"X-Content-Type-Options": "nosniff"},
    )


def render_error(accept_values: Iterable[str], err: Any) -> Response:
    """Render err in the representation negotiated from the Accept header values."""
    if err is None:
        err = STATUS_OK

    representation = negotiate(accept_values)
    if representation is None:
        return serve_text(err, resolve(err))

    if representation == "json" and is_sentinel(err) and _body_allowed(err.status_code):
        canonical = status_json(err.status_code)
        if canonical is not None:
            headers = _problem_headers(PROBLEM_JSON_CONTENT_TYPE)
            return Response(content=canonical + b"\n", status_code=err.status_code, headers=headers)

    problem = _problem_for(err)
    # A record that already carries a status keeps it.
    status_code = problem.status or resolve(err)
    if representation == "json":
        return serve_json(problem, status_code)
    return serve_xml(problem, status_code)


def serve_error(request: Request, err: Any) -> Response:
    """Reply to the request by rendering err.

    An error implementing ``serve_http`` renders itself. Otherwise err is
    rendered as JSON, XML or plain text depending on the Accept header.
    A missing error is rendered as 200 OK.
    """
    if err is None:
        err = STATUS_OK

    if isinstance(err, SelfServing) and callable(err.serve_http):
        return err.serve_http(request)

    return render_error(request.headers.getlist("accept"), err)


def not_found(request: Request) -> Response:
    """Reply to the request with 404 Not Found."""
    return serve_error(request, STATUS_NOT_FOUND)


def method_not_allowed(request: Request) -> Response:
    """Reply to the request with 405 Method Not Allowed."""
    return serve_error(request, STATUS_METHOD_NOT_ALLOWED)


__all__ = [
    "JSON_PATTERN",
    "PROBLEM_JSON_CONTENT_TYPE",
    "PROBLEM_XML_CONTENT_TYPE",
    "XML_PATTERN",
    "accepted_media_types",
    "match_media_type",
    "method_not_allowed",
    "negotiate",
    "not_found",
    "render_error",
    "serve_error",
    "serve_json",
    "serve_text",
    "serve_xml",
]
