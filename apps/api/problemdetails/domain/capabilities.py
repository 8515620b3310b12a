"""Optional behaviours an error value may implement.

None of these are required. Status inference and rendering look for them on
every error in a chain, so any exception class (or plain object) can opt in by
defining the attribute or method.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response


@runtime_checkable
class HasStatus(Protocol):
    """Carries an explicit HTTP status code."""

    @property
    def status_code(self) -> int: ...


@runtime_checkable
class HasTimeout(Protocol):
    def is_timeout(self) -> bool: ...


@runtime_checkable
class HasTemporary(Protocol):
    def is_temporary(self) -> bool: ...


@runtime_checkable
class HasCause(Protocol):
    def unwrap(self) -> object | None: ...


@runtime_checkable
class SelfServing(Protocol):
    """Renders its own response, bypassing content negotiation."""

    def serve_http(self, request: Request) -> Response: ...


__all__ = ["HasCause", "HasStatus", "HasTemporary", "HasTimeout", "SelfServing"]
