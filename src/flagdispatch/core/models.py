from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from flagdispatch.core.interfaces.callbacks import AdaptedCallbackProtocol

# Shorthand -> observed value, rebuilt on every parse.
ParseResult = Dict[str, str]


class CallbackShape(str, Enum):
    """Closed set of callback signatures the dispatcher knows how to call."""
    NO_ARG = 'func()'
    TEXT = 'func(str)'
    BOOL = 'func(bool)'
    TEXT_LIST = 'func(list[str])'


@dataclass(frozen=True)
class FlagDefinition:
    """A registered flag and its adapted callback."""
    name: str
    shorthand: str
    required: bool
    requires_value: bool
    description: str
    callback: AdaptedCallbackProtocol
    shape: CallbackShape
    allowed_values: Optional[Tuple[str, ...]] = None

    @property
    def option_strings(self) -> Tuple[str, str]:
        return (f'-{self.shorthand}', f'--{self.shorthand}')
