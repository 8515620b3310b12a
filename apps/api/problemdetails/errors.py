"""Library exception types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from problemdetails.schemas.problem import ProblemDetails


class InvalidEncodingError(ValueError):
    """Raised when a problem document is neither JSON nor XML."""

    def __init__(self, message: str = "problemdetails: invalid details error encoding") -> None:
        super().__init__(message)


class StatusError(Exception):
    """Error that associates an HTTP status code with its cause.

    The message is the cause's message. The cause is also stored as
    ``__cause__`` so tracebacks show where the status was attached.
    """

    def __init__(self, status_code: int, cause: BaseException) -> None:
        self.status_code = status_code
        self.cause = cause
        super().__init__(str(cause))
        self.__cause__ = cause

    def unwrap(self) -> BaseException:
        return self.cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.status_code!r}, {self.cause!r})"


class ProblemDetailsError(Exception):
    """Raisable carrier for a problem details record."""

    def __init__(self, details: ProblemDetails) -> None:
        self.details = details
        super().__init__(details.detail or "")

    @property
    def status_code(self) -> int | None:
        return self.details.status_code

    def unwrap(self) -> BaseException | None:
        return self.details.unwrap()


def wrap(status_code: int, err: BaseException) -> StatusError:
    """Associate an error with a status code."""
    return StatusError(status_code, err)


def errorf(status_code: int, message: str, *args: object) -> StatusError:
    """Shorthand for ``wrap(status_code, Exception(message % args))``."""
    if args:
        message = message % args
    return wrap(status_code, Exception(message))


__all__ = ["InvalidEncodingError", "ProblemDetailsError", "StatusError", "errorf", "wrap"]
