from __future__ import annotations
from typing import Any, Dict, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class FlagRegistryProtocol(Protocol):
    """Register flags bound to callbacks and dispatch them from an argv."""

    def register(
        self,
        name: str,
        shorthand: str,
        required: bool,
        requires_value: bool,
        description: str,
        callback: Any,
    ) -> None:
        """Adapt `callback` and bind it to `shorthand`."""
        ...

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
        """Same as `register`, recording the allowed values for the flag."""
        ...

    def parse(self, argv: Optional[Sequence[str]] = None) -> Dict[str, str]:
        """Parse argv, invoke matched callbacks and return shorthand -> value."""
        ...
