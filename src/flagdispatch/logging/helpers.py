from __future__ import annotations

"""Small logging helpers to standardize flagdispatch logger names, configuration and tracing.

This module provides:
    - JsonLogFormatter: JSON log formatter with stable fields and optional context.
    - setup_base_logger: Root logger configuration for the 'flagdispatch' logger.
    - get_logger: Namespaced logger factory ('flagdispatch.*').
    - trace_adaptation: per-callback adaptation trace, echoed to stdout when
      the registry runs in debug mode.

Design notes:
    - The version is resolved when a formatter is built, not at import time,
      since this module is imported while the package itself is initialising.
"""

import logging
import sys
from typing import Optional, TextIO

from flagdispatch.core.interfaces.logging import LoggerLikeProtocol


class JsonLogFormatter(logging.Formatter):
    """Emit logs as compact JSON with a fixed schema.

    Fields:
        - ts: ISO-8601 timestamp in UTC with millisecond precision.
        - level: Log level name.
        - module: Logger name (e.g., 'flagdispatch.registry').
        - msg: Formatted message string.
        - version: flagdispatch.__version__ (fixed per formatter instance).
        - ctx: Optional dictionary attached to the record as 'context'.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = self._resolve_version()

    @staticmethod
    def _resolve_version() -> str:
        # Imported here: this module loads while flagdispatch/__init__ is still running.
        from flagdispatch import __version__
        return str(__version__)

    def format(self, record: logging.LogRecord) -> str:
        from datetime import datetime, timezone
        import json

        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        ts_str = ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")

        payload = {
            "ts": ts_str,
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }

        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx

        return json.dumps(payload, ensure_ascii=False)


def setup_base_logger(
    *, json_logs: bool = False, level: int = logging.WARNING, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Configure the base 'flagdispatch' logger once and return it.

    Args:
        json_logs: If True, configure a JSON formatter, else plain text.
        level: Logging level for the base logger.
        stream: Optional stream (stderr by default).

    Returns:
        The configured base logger.
    """
    base = logging.getLogger("flagdispatch")
    if base.handlers:
        base.setLevel(level)
        return base

    base.setLevel(level)
    base.propagate = False

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    base.addHandler(handler)

    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a namespaced logger under 'flagdispatch'."""
    if not name or name == "flagdispatch":
        return logging.getLogger("flagdispatch")
    if name.startswith("flagdispatch"):
        return logging.getLogger(name)
    return logging.getLogger(f"flagdispatch.{name}")


def trace_adaptation(
    logger: LoggerLikeProtocol,
    callback: object,
    shape: str,
    *,
    echo: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Record that `callback` was adapted as `shape`.

    Args:
        logger: Target logger; always receives a DEBUG record.
        callback: The caller-supplied callable.
        shape: Human-readable signature of the detected shape.
        echo: When True, also write the trace line to `stream` (stdout).
        stream: Destination for the echoed line.
    """
    logger.debug("adapted callback %r as %s", callback, shape, extra={"context": {"shape": shape}})
    if echo:
        print(f"Wrapping action of type: {shape}", file=stream or sys.stdout)
