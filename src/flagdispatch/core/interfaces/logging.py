from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class LoggerLikeProtocol(Protocol):
    """Logging surface FlagRegistry writes to.

    ``debug`` carries adaptation traces and re-registration notices,
    ``error`` carries configuration faults just before they are raised.
    Keyword arguments such as ``extra`` are passed through unchanged.
    """

    def debug(self, msg: str, *args, **kwargs) -> None: ...

    def error(self, msg: str, *args, **kwargs) -> None: ...


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    """Supplies the logger a FlagRegistry uses when none is passed directly."""

    def get_logger(self, name: str) -> LoggerLikeProtocol:
        """Return the logger for component `name` (the registry asks for 'registry')."""
        ...
