"""Error to HTTP status code inference."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterator

from problemdetails.core.config import get_settings
from problemdetails.domain.capabilities import HasCause, HasStatus, HasTemporary, HasTimeout

STATUS_OK = 200
STATUS_INTERNAL_SERVER_ERROR = 500
STATUS_SERVICE_UNAVAILABLE = 503
STATUS_GATEWAY_TIMEOUT = 504

# asyncio.TimeoutError is only an alias of TimeoutError from Python 3.11.
_TIMEOUT_TYPES: tuple[type[BaseException], ...] = (TimeoutError, asyncio.TimeoutError)

logger = logging.getLogger(__name__)


def unwrap(err: object) -> object | None:
    """Return the direct cause of err, or None at the end of a chain."""
    if isinstance(err, HasCause) and callable(err.unwrap):
        return err.unwrap()
    return getattr(err, "__cause__", None)


def iter_chain(err: object | None, max_depth: int | None = None) -> Iterator[object]:
    """Yield err followed by its causes.

    Stops at the end of the chain, when a node repeats or after max_depth nodes.
    """
    limit = max_depth if max_depth is not None else get_settings().max_chain_depth
    seen: set[int] = set()
    node = err
    while node is not None:
        if id(node) in seen:
            logger.warning("problem.chain_truncated reason=cycle depth=%s error_type=%s", len(seen), type(err).__name__)
            return
        if len(seen) >= limit:
            logger.warning("problem.chain_truncated reason=max_depth depth=%s error_type=%s", limit, type(err).__name__)
            return
        seen.add(id(node))
        yield node
        node = unwrap(node)


def explicit_status(err: object) -> int | None:
    if not isinstance(err, HasStatus):
        return None
    status_code = err.status_code
    if callable(status_code):
        status_code = status_code()
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        return None
    return status_code


def _is_timeout(err: object) -> bool:
    if isinstance(err, HasTimeout) and callable(err.is_timeout):
        return bool(err.is_timeout())
    return isinstance(err, _TIMEOUT_TYPES)


def _is_temporary(err: object) -> bool:
    return isinstance(err, HasTemporary) and callable(err.is_temporary) and bool(err.is_temporary())


def resolve(err: object | None, *, max_depth: int | None = None) -> int:
    """Report the HTTP status code associated with err.

    Each error in the chain is checked in turn for an explicit ``status_code``
    (returned as is), then a timeout (504 Gateway Timeout), then a temporary
    condition (503 Service Unavailable). The first match wins. An error chain
    with no match yields 500 Internal Server Error and a missing error yields
    200 OK. Status codes are not range checked.
    """
    if err is None:
        return STATUS_OK

    for node in iter_chain(err, max_depth):
        status_code = explicit_status(node)
        if status_code is not None:
            return status_code
        if _is_timeout(node):
            return STATUS_GATEWAY_TIMEOUT
        if _is_temporary(node):
            return STATUS_SERVICE_UNAVAILABLE

    return STATUS_INTERNAL_SERVER_ERROR


__all__ = ["explicit_status", "iter_chain", "resolve", "unwrap"]
