from __future__ import annotations

"""Runtime configuration for FlagRegistry.

Values come from explicit constructor arguments first and the environment
second:

    FLAGDISPATCH_DEBUG=1        echo the adaptation trace to stdout
    FLAGDISPATCH_JSON_LOGS=1    JSON log formatting
    FLAGDISPATCH_LOG_LEVEL      base level name (default WARNING)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_DEBUG = 'FLAGDISPATCH_DEBUG'
ENV_JSON_LOGS = 'FLAGDISPATCH_JSON_LOGS'
ENV_LOG_LEVEL = 'FLAGDISPATCH_LOG_LEVEL'


def _env_flag(env: Mapping[str, str], key: str) -> bool:
    return (env.get(key) or '').strip() == '1'


def _env_level(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or '').strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class RegistryConfig:
    """Immutable settings consumed by FlagRegistry."""
    debug: bool = False
    json_logs: bool = False
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls, *, debug: Optional[bool] = None, env: Optional[Mapping[str, str]] = None) -> 'RegistryConfig':
        """Build a config, letting an explicit `debug` override the environment."""
        env = os.environ if env is None else env
        return cls(
            debug=_env_flag(env, ENV_DEBUG) if debug is None else bool(debug),
            json_logs=_env_flag(env, ENV_JSON_LOGS),
            log_level=_env_level(env, ENV_LOG_LEVEL, logging.WARNING),
        )
