from __future__ import annotations

from flagdispatch.config import RegistryConfig
from flagdispatch.constants import TRUE_LITERAL
from flagdispatch.core.models import CallbackShape, FlagDefinition, ParseResult
from flagdispatch.parsing.callbacks import (
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
from flagdispatch.registry import FlagRegistry

__version__ = '0.1.0'

__all__ = [
    'CallbackShape',
    'FlagConfigurationError',
    'FlagDefinition',
    'FlagRegistry',
    'MissingCallbackError',
    'ParseResult',
    'RegistryConfig',
    'TRUE_LITERAL',
    'UnsupportedCallbackError',
    'adapt_callback',
    'bool_arg',
    'detect_shape',
    'list_arg',
    'no_arg',
    'text_arg',
]
