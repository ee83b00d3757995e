from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, TextIO

from flagdispatch.logging.helpers import setup_base_logger, get_logger

if TYPE_CHECKING:
    from flagdispatch.config import RegistryConfig


class DefaultLoggerFactory:
    """Hand out 'flagdispatch.*' loggers, configuring the base logger on first use.

    A FlagRegistry builds one of these from its RegistryConfig unless it is
    given a logger or another LoggerFactoryProtocol implementation.
    """

    def __init__(self, *, json_logs: bool = False, level: int = logging.WARNING, stream: Optional[TextIO] = None) -> None:
        self._json = bool(json_logs)
        self._level = int(level)
        self._stream: Optional[TextIO] = stream
        self._configured = False

    @classmethod
    def from_config(cls, cfg: 'RegistryConfig', *, stream: Optional[TextIO] = None) -> 'DefaultLoggerFactory':
        return cls(json_logs=cfg.json_logs, level=cfg.log_level, stream=stream)

    def get_logger(self, name: str) -> logging.Logger:
        if not self._configured:
            setup_base_logger(json_logs=self._json, level=self._level, stream=self._stream)
            self._configured = True
        return get_logger(name)
