from .callbacks import AdaptedCallbackProtocol
from .logging import LoggerFactoryProtocol, LoggerLikeProtocol
from .registry import FlagRegistryProtocol

__all__ = [
    'AdaptedCallbackProtocol',
    'FlagRegistryProtocol',
    'LoggerFactoryProtocol',
    'LoggerLikeProtocol',
]
