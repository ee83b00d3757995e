from __future__ import annotations

"""Public surface for flagdispatch.core.

Exposes the data model and protocol types from a stable import location:

    from flagdispatch.core import FlagDefinition, CallbackShape, ParseResult
"""

from flagdispatch.core.interfaces import (
    AdaptedCallbackProtocol,
    FlagRegistryProtocol,
    LoggerFactoryProtocol,
    LoggerLikeProtocol,
)
from flagdispatch.core.models import CallbackShape, FlagDefinition, ParseResult

__all__ = [
    'AdaptedCallbackProtocol',
    'CallbackShape',
    'FlagDefinition',
    'FlagRegistryProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
    'ParseResult',
]
