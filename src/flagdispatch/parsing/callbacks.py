from __future__ import annotations

"""
callbacks – Shape detection and adaptation of flag callbacks.

A flag callback may be any callable with one of four shapes:

    func()              called with no arguments, the flag value is dropped
    func(str)           receives the raw flag value (unannotated counts as str)
    func(bool)          receives ``value == "true"``
    func(list[str])     receives ``[value]``

`adapt_callback` inspects the callable once and returns a wrapper with the
uniform ``(value: str) -> None`` signature used by the dispatcher. Return
values of the wrapped callable are discarded. Anything outside the four
shapes is a configuration fault and raises `UnsupportedCallbackError`.

The explicit adapters `no_arg`, `text_arg`, `bool_arg` and `list_arg` build
the same wrappers without any inspection.
"""

import collections.abc
import inspect
import typing
from typing import Any, Callable, Dict, Optional, Tuple

from flagdispatch.constants import TRUE_LITERAL
from flagdispatch.core.interfaces.callbacks import AdaptedCallbackProtocol
from flagdispatch.core.models import CallbackShape


class FlagConfigurationError(ValueError):
    """A flag was registered with an unusable callback."""


class MissingCallbackError(FlagConfigurationError):
    """The callback passed at registration time was None."""


class UnsupportedCallbackError(FlagConfigurationError):
    """The callback does not match any supported shape."""


_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)

_SEQUENCE_ORIGINS = (
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
)

# Postponed annotations that could not be evaluated are matched by text.
_TEXT_ANNOTATIONS: Dict[str, CallbackShape] = {
    'str': CallbackShape.TEXT,
    'bool': CallbackShape.BOOL,
    'list[str]': CallbackShape.TEXT_LIST,
    'List[str]': CallbackShape.TEXT_LIST,
    'Sequence[str]': CallbackShape.TEXT_LIST,
    'MutableSequence[str]': CallbackShape.TEXT_LIST,
    'Iterable[str]': CallbackShape.TEXT_LIST,
    'Collection[str]': CallbackShape.TEXT_LIST,
}


def _describe(callback: Any) -> str:
    return getattr(callback, '__qualname__', None) or type(callback).__name__


def _require_callable(callback: Any) -> Callable[..., Any]:
    if callback is None:
        raise MissingCallbackError('callback cannot be None')
    if not callable(callback):
        raise UnsupportedCallbackError(
            f'unsupported callback type: {type(callback).__name__} (must be callable)'
        )
    return callback


# --------------------------------------------------------------------------- #
#  Explicit adapters                                                          #
# --------------------------------------------------------------------------- #
def no_arg(callback: Callable[[], Any]) -> AdaptedCallbackProtocol:
    """Wrap a zero-argument callable; the flag value is never forwarded."""
    fn = _require_callable(callback)

    def _adapted(value: str) -> None:
        fn()

    return _adapted


def text_arg(callback: Callable[[str], Any]) -> AdaptedCallbackProtocol:
    """Wrap a callable that takes the raw flag value."""
    fn = _require_callable(callback)

    def _adapted(value: str) -> None:
        fn(value)

    return _adapted


def bool_arg(callback: Callable[[bool], Any]) -> AdaptedCallbackProtocol:
    """Wrap a callable that takes a boolean.

    Only the exact text ``"true"`` maps to True; every other value,
    including ``"TRUE"`` and the empty string, maps to False.
    """
    fn = _require_callable(callback)

    def _adapted(value: str) -> None:
        fn(value == TRUE_LITERAL)

    return _adapted


def list_arg(callback: Callable[[list], Any]) -> AdaptedCallbackProtocol:
    """Wrap a callable that takes a list of strings; it receives ``[value]``."""
    fn = _require_callable(callback)

    def _adapted(value: str) -> None:
        fn([value])

    return _adapted


ADAPTERS: Dict[CallbackShape, Callable[[Callable[..., Any]], AdaptedCallbackProtocol]] = {
    CallbackShape.NO_ARG: no_arg,
    CallbackShape.TEXT: text_arg,
    CallbackShape.BOOL: bool_arg,
    CallbackShape.TEXT_LIST: list_arg,
}


# --------------------------------------------------------------------------- #
#  Shape detection                                                            #
# --------------------------------------------------------------------------- #
def _resolve_annotation(callback: Callable[..., Any], param: inspect.Parameter) -> Any:
    ann = param.annotation
    if not isinstance(ann, str):
        return ann
    target = callback if inspect.isroutine(callback) else getattr(callback, '__call__', callback)
    try:
        return typing.get_type_hints(target).get(param.name, ann)
    except (NameError, TypeError):
        return ann


def _shape_from_annotation(ann: Any) -> Optional[CallbackShape]:
    if ann is inspect.Parameter.empty or ann is str:
        return CallbackShape.TEXT
    if ann is bool:
        return CallbackShape.BOOL
    if isinstance(ann, str):
        key = ann.replace(' ', '')
        for prefix in ('typing.', 'collections.abc.'):
            if key.startswith(prefix):
                key = key[len(prefix):]
        return _TEXT_ANNOTATIONS.get(key)
    if typing.get_origin(ann) in _SEQUENCE_ORIGINS and typing.get_args(ann) == (str,):
        return CallbackShape.TEXT_LIST
    return None


def detect_shape(callback: Any) -> CallbackShape:
    """Return the shape of `callback` or raise a configuration error.

    Raises:
        MissingCallbackError: `callback` is None.
        UnsupportedCallbackError: not callable, not introspectable, more than
            one positional parameter, a required keyword-only parameter, or a
            single parameter whose annotation is not str, bool or a sequence
            of str.
    """
    fn = _require_callable(callback)
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError) as exc:
        raise UnsupportedCallbackError(
            f'unsupported callback type: {_describe(fn)} (signature unavailable: {exc})'
        ) from exc

    params = [p for p in sig.parameters.values() if p.kind in _POSITIONAL]
    kw_required = [
        p.name for p in sig.parameters.values()
        if p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty
    ]
    if kw_required:
        raise UnsupportedCallbackError(
            f'unsupported callback signature: {_describe(fn)}{sig} '
            f'(required keyword-only parameters: {", ".join(kw_required)})'
        )

    if not params:
        return CallbackShape.NO_ARG
    if len(params) > 1:
        raise UnsupportedCallbackError(f'unsupported callback signature: {_describe(fn)}{sig}')

    shape = _shape_from_annotation(_resolve_annotation(fn, params[0]))
    if shape is None:
        raise UnsupportedCallbackError(f'unsupported callback type: {_describe(fn)}{sig}')
    return shape


def adapt_callback(callback: Any) -> Tuple[AdaptedCallbackProtocol, CallbackShape]:
    """Inspect `callback` once and return its uniform wrapper with the detected shape."""
    shape = detect_shape(callback)
    return ADAPTERS[shape](callback), shape
