"""RFC 7807 problem details schema.

See: https://datatracker.ietf.org/doc/html/rfc7807

Additional members are added by subclassing. Extension fields serialize after
the standard members, in declaration order::

    class TraceProblemDetails(ProblemDetails):
        trace_id: str

    raise ProblemDetailsError(TraceProblemDetails.from_error(exc, trace_id="abc"))
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, SerializerFunctionWrapHandler, model_serializer

from problemdetails.core.status import status_text
from problemdetails.domain.inference import resolve
from problemdetails.errors import InvalidEncodingError
from problemdetails.schemas.xml_codec import decode_problem, encode_problem

ABOUT_BLANK = "about:blank"

# RFC 7807 members, in wire order.
_STANDARD_MEMBERS = ("detail", "instance", "status", "title", "type")


class ProblemDetails(BaseModel):
    """Problem details record that also behaves as an error value."""

    detail: str | None = Field(
        default=None,
        description="Human-readable explanation specific to this occurrence of the problem.",
    )
    instance: str | None = Field(
        default=None,
        description="URI reference that identifies the specific occurrence of the problem.",
    )
    status: int | None = Field(
        default=None,
        description="HTTP status code generated by the origin server for this occurrence.",
    )
    title: str | None = Field(
        default=None,
        description="Short, human-readable summary of the problem type.",
    )
    type: str | None = Field(
        default=None,
        description='URI reference that identifies the problem type. Absent means "about:blank".',
    )

    model_config = ConfigDict(extra="allow")

    # Members dropped from the output when empty.
    omit_when_empty: ClassVar[tuple[str, ...]] = _STANDARD_MEMBERS

    _cause: Any = PrivateAttr(default=None)

    @model_serializer(mode="wrap")
    def omit_empty_members(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name in self.omit_when_empty:
            if name in data and not data[name]:
                del data[name]
        return data

    def __str__(self) -> str:
        return self.detail or ""

    @property
    def status_code(self) -> int | None:
        return self.status

    @property
    def problem_type(self) -> str:
        return self.type or ABOUT_BLANK

    def unwrap(self) -> Any:
        return self._cause

    @classmethod
    def from_error(cls, err: Any, **extensions: Any) -> ProblemDetails:
        """Build a record with detail, status and title derived from err.

        err is kept as the record's cause but is never serialized.
        """
        status_code = resolve(err)
        details = cls(
            detail=str(err) if err is not None else "",
            status=status_code,
            title=status_text(status_code),
            **extensions,
        )
        details._cause = err
        return details

    def with_status(self, status_code: int) -> ProblemDetails:
        """Return a copy with status and title filled in when unset."""
        status = self.status or status_code
        update: dict[str, Any] = {}
        if not self.status:
            update["status"] = status
        if not self.title:
            update["title"] = status_text(status)
        if not update:
            return self
        return self.model_copy(update=update)

    def to_json(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    def to_xml(self) -> bytes:
        return encode_problem(self.model_dump(mode="json"))

    @classmethod
    def unmarshal(cls, data: bytes | str) -> ProblemDetails:
        """Parse a JSON or XML encoded problem details document.

        Only the first non-whitespace character is inspected to pick the
        decoder: ``{`` for JSON and ``<`` for XML. Anything else raises
        InvalidEncodingError. Decoder errors are raised unchanged.
        """
        data = _lstrip(data)
        if not data:
            raise InvalidEncodingError()

        if data[:1] == b"{":
            return cls.model_validate_json(data)
        if data[:1] == b"<":
            return cls.model_validate(decode_problem(data))
        raise InvalidEncodingError()


class ErrorProblemDetails(ProblemDetails):
    """Record rendered for an error that is not a problem details record.

    ``detail``, ``status`` and ``title`` are always emitted, even when empty.
    """

    omit_when_empty: ClassVar[tuple[str, ...]] = ("instance", "type")


def _lstrip(data: bytes | str) -> bytes:
    # Leading Unicode whitespace such as U+00A0 is skipped too.
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError:
            return data.lstrip()
    return data.lstrip().encode("utf-8")


__all__ = ["ABOUT_BLANK", "ErrorProblemDetails", "ProblemDetails"]
