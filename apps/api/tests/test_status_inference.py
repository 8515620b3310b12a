"""Status code inference tests."""

from __future__ import annotations

import asyncio
import unittest

from problemdetails import STATUS_BAD_REQUEST, errorf, resolve, wrap
from problemdetails.domain.inference import iter_chain, unwrap


class _TemporaryError(Exception):
    def is_temporary(self) -> bool:
        return True


class _TimeoutError(Exception):
    def __init__(self, timeout: bool = True) -> None:
        super().__init__("timed out")
        self._timeout = timeout

    def is_timeout(self) -> bool:
        return self._timeout


class _CustomStatus(Exception):
    def __init__(self, status_code: object) -> None:
        super().__init__("custom")
        self.status_code = status_code


class _Link:
    """Plain object error value with an explicit cause link."""

    def __init__(self, cause: object | None = None) -> None:
        self.cause = cause

    def __str__(self) -> str:
        return "link"

    def unwrap(self) -> object | None:
        return self.cause


def _chained(outer: BaseException, cause: BaseException) -> BaseException:
    try:
        try:
            raise cause
        except BaseException as inner:
            raise outer from inner
    except BaseException as exc:
        return exc


class ResolveTests(unittest.TestCase):
    def test_reference_cases(self) -> None:
        cases = [
            (None, 200),
            (asyncio.TimeoutError(), 504),
            (TimeoutError(), 504),
            (_chained(RuntimeError("error"), _TemporaryError()), 503),
            (wrap(400, ValueError("bla")), 400),
            (ValueError("bla"), 500),
            (EOFError(), 500),
        ]
        for err, expected in cases:
            with self.subTest(err=repr(err)):
                self.assertEqual(resolve(err), expected)

    def test_explicit_status_wins_over_deeper_chain(self) -> None:
        err = wrap(418, wrap(404, _TimeoutError()))
        self.assertEqual(resolve(err), 418)

        timeout_with_status = _CustomStatus(409)
        timeout_with_status.is_timeout = lambda: True  # type: ignore[attr-defined]
        self.assertEqual(resolve(timeout_with_status), 409)

    def test_inner_heuristics_surface_through_plain_wrappers(self) -> None:
        self.assertEqual(resolve(_chained(RuntimeError("outer"), _TimeoutError())), 504)
        self.assertEqual(resolve(_Link(_Link(_TemporaryError()))), 503)

    def test_timeout_checked_before_temporary_on_the_same_error(self) -> None:
        class _Both(Exception):
            def is_timeout(self) -> bool:
                return True

            def is_temporary(self) -> bool:
                return True

        self.assertEqual(resolve(_Both()), 504)

    def test_false_heuristics_keep_walking(self) -> None:
        self.assertEqual(resolve(_TimeoutError(timeout=False)), 500)
        self.assertEqual(resolve(_chained(_TimeoutError(timeout=False), STATUS_BAD_REQUEST)), 400)

    def test_out_of_range_codes_pass_through(self) -> None:
        self.assertEqual(resolve(errorf(999, "weird")), 999)
        self.assertEqual(resolve(errorf(42, "weird")), 42)

    def test_non_integer_status_attributes_are_ignored(self) -> None:
        self.assertEqual(resolve(_CustomStatus(None)), 500)
        self.assertEqual(resolve(_CustomStatus(True)), 500)
        self.assertEqual(resolve(_CustomStatus("404")), 500)
        self.assertEqual(resolve(_CustomStatus(lambda: 451)), 451)

    def test_cycles_and_deep_chains_terminate_with_default(self) -> None:
        first = _Link()
        second = _Link(first)
        first.cause = second
        with self.assertLogs("problemdetails.domain.inference", level="WARNING") as logs:
            self.assertEqual(resolve(first), 500)
        self.assertIn("reason=cycle", logs.output[0])

        deep: object = _TimeoutError()
        for _ in range(20):
            deep = _Link(deep)
        with self.assertLogs("problemdetails.domain.inference", level="WARNING") as logs:
            self.assertEqual(resolve(deep, max_depth=5), 500)
        self.assertIn("reason=max_depth", logs.output[0])
        self.assertEqual(resolve(deep, max_depth=50), 504)


class ChainTests(unittest.TestCase):
    def test_unwrap_prefers_explicit_method_over_cause_attribute(self) -> None:
        cause = ValueError("inner")
        err = wrap(400, cause)
        self.assertIs(unwrap(err), cause)
        self.assertIsNone(unwrap(cause))
        self.assertIsNone(unwrap(object()))

    def test_iter_chain_yields_every_node_in_order(self) -> None:
        inner = KeyError("k")
        middle = _chained(RuntimeError("middle"), inner)
        outer = wrap(400, middle)
        self.assertEqual(list(iter_chain(outer, 10)), [outer, middle, inner])
        self.assertEqual(list(iter_chain(None, 10)), [])


if __name__ == "__main__":
    unittest.main()
