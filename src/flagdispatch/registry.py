from __future__ import annotations

import sys
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, TextIO

from flagdispatch.config import RegistryConfig
from flagdispatch.constants import TRUE_LITERAL
from flagdispatch.core.interfaces.callbacks import AdaptedCallbackProtocol
from flagdispatch.core.interfaces.logging import LoggerFactoryProtocol, LoggerLikeProtocol
from flagdispatch.core.interfaces.registry import FlagRegistryProtocol
from flagdispatch.core.models import CallbackShape, FlagDefinition, ParseResult
from flagdispatch.logging.factory import DefaultLoggerFactory
from flagdispatch.logging.helpers import trace_adaptation
from flagdispatch.parsing.callbacks import (
    ADAPTERS,
    FlagConfigurationError,
    adapt_callback,
)
from flagdispatch.parsing.parser import build_parser, scan_argv


def _noop() -> None:
    return None


class FlagRegistry(FlagRegistryProtocol):
    """Own a set of flag definitions, parse argv against them and dispatch.

    Callbacks are adapted once, at registration time. Registering the same
    shorthand twice keeps only the latest definition. Registration and
    parsing are expected to run sequentially during start-up; the registry
    holds no locks.

    Configuration faults (missing or unsupported callbacks) are logged and
    raised as `FlagConfigurationError` subclasses. Usage faults during
    `parse` are reported by argparse on stderr and end in `SystemExit(2)`
    before any callback runs.

    Args:
        debug: Echo one ``Wrapping action of type: ...`` line per adapted
            callback. None defers to ``FLAGDISPATCH_DEBUG``.
        prog: Program name shown in usage and error messages. None lets
            argparse use the basename of ``sys.argv[0]``.
        logger: Logger for registration faults and traces. Takes precedence
            over `logger_factory`.
        logger_factory: Source of the ``registry`` logger when `logger` is
            not given. Defaults to a DefaultLoggerFactory built from `config`.
        config: Explicit settings; built from the environment when omitted.
        trace_stream: Destination of the debug trace lines (stdout by default,
            resolved at write time).
    """

    def __init__(
        self,
        debug: Optional[bool] = None,
        *,
        prog: Optional[str] = None,
        logger: Optional[LoggerLikeProtocol] = None,
        logger_factory: Optional[LoggerFactoryProtocol] = None,
        config: Optional[RegistryConfig] = None,
        trace_stream: Optional[TextIO] = None,
    ) -> None:
        self._cfg = config or RegistryConfig.from_env(debug=debug)
        if logger is None:
            factory = logger_factory or DefaultLoggerFactory.from_config(self._cfg)
            logger = factory.get_logger('registry')
        self._log: LoggerLikeProtocol = logger
        self._prog = prog
        self._trace_stream = trace_stream
        self._definitions: Dict[str, FlagDefinition] = {}

    # ------------------------------------------------------------------ #
    #  Introspection                                                     #
    # ------------------------------------------------------------------ #
    @property
    def debug(self) -> bool:
        return self._cfg.debug

    @property
    def definitions(self) -> Dict[str, FlagDefinition]:
        """Snapshot of the registered definitions keyed by shorthand."""
        return dict(self._definitions)

    def get(self, shorthand: str) -> Optional[FlagDefinition]:
        return self._definitions.get(shorthand)

    def __contains__(self, shorthand: object) -> bool:
        return shorthand in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    # ------------------------------------------------------------------ #
    #  Registration                                                      #
    # ------------------------------------------------------------------ #
    def register(
        self,
        name: str,
        shorthand: str,
        required: bool,
        requires_value: bool,
        description: str,
        callback: Any,
    ) -> None:
        """Adapt `callback` and bind it to `shorthand`.

        `required` is recorded on the definition but never enforced.

        Raises:
            MissingCallbackError: `callback` is None.
            UnsupportedCallbackError: `callback` has no supported shape.
        """
        adapted, shape = self._adapt(callback)
        self._store(name, shorthand, required, requires_value, description, adapted, shape, None)

    def register_with_options(
        self,
        name: str,
        shorthand: str,
        required: bool,
        requires_value: bool,
        description: str,
        callback: Any,
        options: Sequence[str],
    ) -> None:
        """Same as `register`, attaching `options` as the allowed values.

        The allowed values are shown in usage output only; any value is
        accepted at parse time.
        """
        adapted, shape = self._adapt(callback)
        allowed = tuple(options) if options is not None else None
        self._store(name, shorthand, required, requires_value, description, adapted, shape, allowed)

    def add(self, name: str, shorthand: str, required: bool, requires_value: bool, description: str) -> None:
        """Register a flag without side effects; it still shows up in parse results."""
        self.register(name, shorthand, required, requires_value, description, _noop)

    def register_no_arg(self, name: str, shorthand: str, required: bool, requires_value: bool,
                        description: str, callback: Callable[[], Any]) -> None:
        self._register_as(CallbackShape.NO_ARG, name, shorthand, required, requires_value, description, callback)

    def register_text_arg(self, name: str, shorthand: str, required: bool, requires_value: bool,
                          description: str, callback: Callable[[str], Any]) -> None:
        self._register_as(CallbackShape.TEXT, name, shorthand, required, requires_value, description, callback)

    def register_bool_arg(self, name: str, shorthand: str, required: bool, requires_value: bool,
                          description: str, callback: Callable[[bool], Any]) -> None:
        self._register_as(CallbackShape.BOOL, name, shorthand, required, requires_value, description, callback)

    def register_list_arg(self, name: str, shorthand: str, required: bool, requires_value: bool,
                          description: str, callback: Callable[[list], Any]) -> None:
        self._register_as(CallbackShape.TEXT_LIST, name, shorthand, required, requires_value, description, callback)

    def _register_as(self, shape: CallbackShape, name: str, shorthand: str, required: bool,
                     requires_value: bool, description: str, callback: Any) -> None:
        try:
            adapted = ADAPTERS[shape](callback)
        except FlagConfigurationError as exc:
            self._log.error('cannot register flag %r: %s', shorthand, exc)
            raise
        trace_adaptation(self._log, callback, shape.value, echo=self.debug, stream=self._trace_stream)
        self._store(name, shorthand, required, requires_value, description, adapted, shape, None)

    def _adapt(self, callback: Any) -> tuple[AdaptedCallbackProtocol, CallbackShape]:
        try:
            adapted, shape = adapt_callback(callback)
        except FlagConfigurationError as exc:
            self._log.error('cannot register flag callback: %s', exc)
            raise
        trace_adaptation(self._log, callback, shape.value, echo=self.debug, stream=self._trace_stream)
        return adapted, shape

    def _store(
        self,
        name: str,
        shorthand: str,
        required: bool,
        requires_value: bool,
        description: str,
        adapted: AdaptedCallbackProtocol,
        shape: CallbackShape,
        allowed: Optional[tuple[str, ...]],
    ) -> None:
        if shorthand in self._definitions:
            self._log.debug('flag %r re-registered; previous definition replaced', shorthand)
        self._definitions[shorthand] = FlagDefinition(
            name=name,
            shorthand=shorthand,
            required=bool(required),
            requires_value=bool(requires_value),
            description=description,
            callback=adapted,
            shape=shape,
            allowed_values=allowed,
        )

    # ------------------------------------------------------------------ #
    #  Dispatch                                                          #
    # ------------------------------------------------------------------ #
    def parse(self, argv: Optional[Sequence[str]] = None) -> ParseResult:
        """Parse `argv` (default: ``sys.argv[1:]``) and dispatch matched flags.

        Matched flags are visited in lexicographic order of shorthand. Value
        flags record and forward their value; presence-only flags record
        ``"true"`` and forward the empty string, also when written with an
        attached boolean literal (``-v=false``). A value flag takes the next
        token even when it starts with a dash.

        Returns:
            Mapping of matched shorthand -> recorded value.
        """
        args = list(sys.argv[1:] if argv is None else argv)
        parser = build_parser(self._definitions, prog=self._prog)
        seen = scan_argv(parser, self._definitions, args)

        results: ParseResult = {}
        for shorthand in sorted(seen):
            definition = self._definitions[shorthand]
            if definition.requires_value:
                value = seen[shorthand]
                results[shorthand] = value
                definition.callback(value)
            else:
                results[shorthand] = TRUE_LITERAL
                definition.callback('')
        self._log.debug('parsed %d flag(s): %s', len(results), ', '.join(results) or '-')
        return results
