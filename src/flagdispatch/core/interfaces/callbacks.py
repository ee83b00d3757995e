from __future__ import annotations
from typing import Protocol, runtime_checkable


@runtime_checkable
class AdaptedCallbackProtocol(Protocol):
    """Normalized callback invoked by the dispatcher.

    The single argument is the flag value for value-taking flags and the
    empty string for presence-only flags.
    """

    def __call__(self, value: str) -> None: ...
