#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Callback shape detection and adaptation.

Every adapted callback takes exactly one string; these tests pin down what
the wrapped callable actually receives for each supported shape and which
shapes are refused at registration time.
"""
from __future__ import annotations

import functools
import sys
import unittest
from pathlib import Path
from typing import Iterable, List, Sequence

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from flagdispatch import (  # noqa: E402
    CallbackShape,
    FlagConfigurationError,
    MissingCallbackError,
    UnsupportedCallbackError,
    adapt_callback,
    bool_arg,
    detect_shape,
    list_arg,
    no_arg,
    text_arg,
)


class _Recorder:
    """Collects the positional arguments of every call."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def __call__(self, *args) -> None:
        self.calls.append(args)


# --------------------------------------------------------------------------- #
#  1. Shape detection                                                         #
# --------------------------------------------------------------------------- #
class DetectShapeTests(unittest.TestCase):
    def test_zero_arguments(self) -> None:
        def cb() -> None:
            pass

        self.assertIs(detect_shape(cb), CallbackShape.NO_ARG)
        self.assertIs(detect_shape(lambda: 1), CallbackShape.NO_ARG)

    def test_text_argument(self) -> None:
        def cb(value: str) -> str:
            return value

        self.assertIs(detect_shape(cb), CallbackShape.TEXT)

    def test_unannotated_argument_is_text(self) -> None:
        self.assertIs(detect_shape(lambda value: None), CallbackShape.TEXT)

    def test_bool_argument(self) -> None:
        def cb(flag: bool) -> None:
            pass

        self.assertIs(detect_shape(cb), CallbackShape.BOOL)

    def test_text_sequence_arguments(self) -> None:
        def builtin_list(items: list[str]) -> None:
            pass

        def typing_list(items: List[str]) -> None:
            pass

        def sequence(items: Sequence[str]) -> None:
            pass

        def iterable(items: Iterable[str]) -> None:
            pass

        for cb in (builtin_list, typing_list, sequence, iterable):
            with self.subTest(cb=cb.__name__):
                self.assertIs(detect_shape(cb), CallbackShape.TEXT_LIST)

    def test_callable_object_and_bound_method(self) -> None:
        class Handler:
            def __call__(self, value: str) -> None:
                pass

            def toggle(self, on: bool) -> None:
                pass

        handler = Handler()
        self.assertIs(detect_shape(handler), CallbackShape.TEXT)
        self.assertIs(detect_shape(handler.toggle), CallbackShape.BOOL)

    def test_partial_with_bound_leading_argument(self) -> None:
        def cb(prefix: str, value: str) -> None:
            pass

        self.assertIs(detect_shape(functools.partial(cb, "x")), CallbackShape.TEXT)

    def test_none_is_missing(self) -> None:
        with self.assertRaises(MissingCallbackError):
            detect_shape(None)

    def test_non_callable_is_unsupported(self) -> None:
        for value in (42, "callback", ["x"]):
            with self.subTest(value=value):
                with self.assertRaises(UnsupportedCallbackError):
                    detect_shape(value)

    def test_two_parameters_are_unsupported(self) -> None:
        def cb(a: str, b: str) -> None:
            pass

        with self.assertRaises(UnsupportedCallbackError):
            detect_shape(cb)
        with self.assertRaises(UnsupportedCallbackError):
            detect_shape(lambda a, b, c: None)

    def test_numeric_parameter_is_unsupported(self) -> None:
        def as_int(n: int) -> None:
            pass

        def as_float(n: float) -> None:
            pass

        for cb in (as_int, as_float):
            with self.subTest(cb=cb.__name__):
                with self.assertRaises(UnsupportedCallbackError):
                    detect_shape(cb)

    def test_list_of_non_text_is_unsupported(self) -> None:
        def cb(items: List[int]) -> None:
            pass

        with self.assertRaises(UnsupportedCallbackError):
            detect_shape(cb)

    def test_required_keyword_only_is_unsupported(self) -> None:
        def cb(*, value: str) -> None:
            pass

        with self.assertRaises(UnsupportedCallbackError):
            detect_shape(cb)

    def test_errors_share_a_value_error_base(self) -> None:
        self.assertTrue(issubclass(MissingCallbackError, FlagConfigurationError))
        self.assertTrue(issubclass(UnsupportedCallbackError, FlagConfigurationError))
        self.assertTrue(issubclass(FlagConfigurationError, ValueError))


# --------------------------------------------------------------------------- #
#  2. Adapted invocation                                                      #
# --------------------------------------------------------------------------- #
class AdaptCallbackTests(unittest.TestCase):
    def test_zero_arg_never_receives_the_value(self) -> None:
        calls = []

        def cb() -> int:
            calls.append("called")
            return 1

        adapted, shape = adapt_callback(cb)
        self.assertIs(shape, CallbackShape.NO_ARG)
        for value in ("", "hello", "true"):
            self.assertIsNone(adapted(value))
        self.assertEqual(calls, ["called", "called", "called"])

    def test_text_passes_value_through(self) -> None:
        seen = []

        def cb(value: str) -> None:
            seen.append(value)

        adapted, _ = adapt_callback(cb)
        adapted("hello")
        adapted("")
        self.assertEqual(seen, ["hello", ""])

    def test_bool_only_exact_true_is_true(self) -> None:
        seen = []

        def cb(flag: bool) -> None:
            seen.append(flag)

        adapted, _ = adapt_callback(cb)
        for value in ("true", "false", "", "TRUE", "True", "1", "yes"):
            adapted(value)
        self.assertEqual(seen, [True, False, False, False, False, False, False])

    def test_list_wraps_value_in_one_element_list(self) -> None:
        seen = []

        def cb(items: List[str]) -> None:
            seen.append(items)

        adapted, _ = adapt_callback(cb)
        adapted("x")
        self.assertEqual(seen, [["x"]])

    def test_return_values_are_discarded(self) -> None:
        def cb(value: str) -> str:
            return value.upper()

        adapted, _ = adapt_callback(cb)
        self.assertIsNone(adapted("abc"))


# --------------------------------------------------------------------------- #
#  3. Explicit adapters                                                       #
# --------------------------------------------------------------------------- #
class ExplicitAdapterTests(unittest.TestCase):
    def test_each_adapter_forwards_its_shape(self) -> None:
        rec = _Recorder()
        no_arg(rec)("ignored")
        text_arg(rec)("v")
        bool_arg(rec)("true")
        bool_arg(rec)("nope")
        list_arg(rec)("item")
        self.assertEqual(rec.calls, [(), ("v",), (True,), (False,), (["item"],)])

    def test_explicit_adapters_skip_inspection(self) -> None:
        rec = _Recorder()
        # *args-only declares no parameters, so inspection would drop the value.
        self.assertIs(detect_shape(rec), CallbackShape.NO_ARG)
        text_arg(rec)("x")
        self.assertEqual(rec.calls, [("x",)])

    def test_explicit_adapters_reject_none(self) -> None:
        for adapter in (no_arg, text_arg, bool_arg, list_arg):
            with self.subTest(adapter=adapter.__name__):
                with self.assertRaises(MissingCallbackError):
                    adapter(None)


if __name__ == "__main__":
    unittest.main()
