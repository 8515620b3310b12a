"""HTTP status code errors as registered with IANA."""

from types import MappingProxyType
from typing import Mapping

from problemdetails.core.status import status_text
from problemdetails.errors import StatusError, errorf

STATUS_CONTINUE = errorf(100, status_text(100))
STATUS_SWITCHING_PROTOCOLS = errorf(101, status_text(101))
STATUS_PROCESSING = errorf(102, status_text(102))
STATUS_EARLY_HINTS = errorf(103, status_text(103))
STATUS_OK = errorf(200, status_text(200))
STATUS_CREATED = errorf(201, status_text(201))
STATUS_ACCEPTED = errorf(202, status_text(202))
STATUS_NON_AUTHORITATIVE_INFO = errorf(203, status_text(203))
STATUS_NO_CONTENT = errorf(204, status_text(204))
STATUS_RESET_CONTENT = errorf(205, status_text(205))
STATUS_PARTIAL_CONTENT = errorf(206, status_text(206))
STATUS_MULTI_STATUS = errorf(207, status_text(207))
STATUS_ALREADY_REPORTED = errorf(208, status_text(208))
STATUS_IM_USED = errorf(226, status_text(226))
STATUS_MULTIPLE_CHOICES = errorf(300, status_text(300))
STATUS_MOVED_PERMANENTLY = errorf(301, status_text(301))
STATUS_FOUND = errorf(302, status_text(302))
STATUS_SEE_OTHER = errorf(303, status_text(303))
STATUS_NOT_MODIFIED = errorf(304, status_text(304))
STATUS_USE_PROXY = errorf(305, status_text(305))
STATUS_TEMPORARY_REDIRECT = errorf(307, status_text(307))
STATUS_PERMANENT_REDIRECT = errorf(308, status_text(308))
STATUS_BAD_REQUEST = errorf(400, status_text(400))
STATUS_UNAUTHORIZED = errorf(401, status_text(401))
STATUS_PAYMENT_REQUIRED = errorf(402, status_text(402))
STATUS_FORBIDDEN = errorf(403, status_text(403))
STATUS_NOT_FOUND = errorf(404, status_text(404))
STATUS_METHOD_NOT_ALLOWED = errorf(405, status_text(405))
STATUS_NOT_ACCEPTABLE = errorf(406, status_text(406))
STATUS_PROXY_AUTH_REQUIRED = errorf(407, status_text(407))
STATUS_REQUEST_TIMEOUT = errorf(408, status_text(408))
STATUS_CONFLICT = errorf(409, status_text(409))
STATUS_GONE = errorf(410, status_text(410))
STATUS_LENGTH_REQUIRED = errorf(411, status_text(411))
STATUS_PRECONDITION_FAILED = errorf(412, status_text(412))
STATUS_REQUEST_ENTITY_TOO_LARGE = errorf(413, status_text(413))
STATUS_REQUEST_URI_TOO_LONG = errorf(414, status_text(414))
STATUS_UNSUPPORTED_MEDIA_TYPE = errorf(415, status_text(415))
STATUS_REQUESTED_RANGE_NOT_SATISFIABLE = errorf(416, status_text(416))
STATUS_EXPECTATION_FAILED = errorf(417, status_text(417))
STATUS_TEAPOT = errorf(418, status_text(418))
STATUS_MISDIRECTED_REQUEST = errorf(421, status_text(421))
STATUS_UNPROCESSABLE_ENTITY = errorf(422, status_text(422))
STATUS_LOCKED = errorf(423, status_text(423))
STATUS_FAILED_DEPENDENCY = errorf(424, status_text(424))
STATUS_TOO_EARLY = errorf(425, status_text(425))
STATUS_UPGRADE_REQUIRED = errorf(426, status_text(426))
STATUS_PRECONDITION_REQUIRED = errorf(428, status_text(428))
STATUS_TOO_MANY_REQUESTS = errorf(429, status_text(429))
STATUS_REQUEST_HEADER_FIELDS_TOO_LARGE = errorf(431, status_text(431))
STATUS_UNAVAILABLE_FOR_LEGAL_REASONS = errorf(451, status_text(451))
STATUS_INTERNAL_SERVER_ERROR = errorf(500, status_text(500))
STATUS_NOT_IMPLEMENTED = errorf(501, status_text(501))
STATUS_BAD_GATEWAY = errorf(502, status_text(502))
STATUS_SERVICE_UNAVAILABLE = errorf(503, status_text(503))
STATUS_GATEWAY_TIMEOUT = errorf(504, status_text(504))
STATUS_HTTP_VERSION_NOT_SUPPORTED = errorf(505, status_text(505))
STATUS_VARIANT_ALSO_NEGOTIATES = errorf(506, status_text(506))
STATUS_INSUFFICIENT_STORAGE = errorf(507, status_text(507))
STATUS_LOOP_DETECTED = errorf(508, status_text(508))
STATUS_NOT_EXTENDED = errorf(510, status_text(510))
STATUS_NETWORK_AUTHENTICATION_REQUIRED = errorf(511, status_text(511))

STATUS_ERRORS_BY_NAME: Mapping[str, StatusError] = MappingProxyType(
    {name: value for name, value in dict(globals()).items() if name.startswith("STATUS_") and isinstance(value, StatusError)}
)
STATUS_ERRORS: Mapping[int, StatusError] = MappingProxyType(
    {value.status_code: value for value in STATUS_ERRORS_BY_NAME.values()}
)


def status_error(status_code: int) -> StatusError:
    """Return a new raisable error equal to the standard one for status_code.

    The module-level ``STATUS_*`` errors are shared values. Raising one
    directly attaches each request's traceback and context to the same
    object, so route handlers raise ``status_error(404)`` instead.
    """
    return errorf(status_code, status_text(status_code))


def is_sentinel(err: object) -> bool:
    """Report whether err is a bare status error carrying only its standard phrase."""
    if type(err) is not StatusError:
        return False
    standard = STATUS_ERRORS.get(err.status_code)
    if standard is None:
        return False
    if err is standard:
        return True
    return type(err.cause) is Exception and err.cause.args == standard.cause.args


def release(err: object) -> None:
    """Drop the per-raise state a shared ``STATUS_*`` error picked up when raised."""
    if not isinstance(err, StatusError) or STATUS_ERRORS.get(err.status_code) is not err:
        return
    err.__traceback__ = None
    err.__context__ = None
    err.__cause__ = err.cause


__all__ = [
    *STATUS_ERRORS_BY_NAME,
    "STATUS_ERRORS",
    "STATUS_ERRORS_BY_NAME",
    "is_sentinel",
    "release",
    "status_error",
]
