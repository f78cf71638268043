"""Logging helpers for the ``fenwicktrace`` logger hierarchy.

Loggers take their level from `RuntimeConfig`. Traversals are logged through
:func:`log_traversal`, which also attaches the trace to the record so handlers
can highlight paths without parsing the message.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from . import config as fw_config

if TYPE_CHECKING:
    from .core.trace import TraversalTrace

_ROOT = "fenwicktrace"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``fenwicktrace.<name>`` at the configured level.

    Names that already carry the ``fenwicktrace`` prefix are used as-is, so
    ``get_logger(__name__)`` works from inside the package.
    """

    if name is None or name == _ROOT:
        logger_name = _ROOT
    elif name.startswith(_ROOT + "."):
        logger_name = name
    else:
        logger_name = f"{_ROOT}.{name}"
    runtime = fw_config.runtime_config()
    logger = logging.getLogger(logger_name)
    logger.setLevel(runtime.log_level)
    return logger


def log_traversal(
    logger: logging.Logger,
    operation: str,
    trace: "TraversalTrace",
    **fields: Any,
) -> None:
    """Log ``operation`` with ``key=value`` fields and the visited path at DEBUG.

    The record carries ``trace_kind`` and ``trace_indices`` attributes.
    """

    if not logger.isEnabledFor(logging.DEBUG):
        return
    parts = [operation, *(f"{key}={value}" for key, value in fields.items())]
    parts.append(f"path={trace.indices}")
    logger.debug(
        " ".join(parts),
        extra={"trace_kind": trace.kind, "trace_indices": trace.indices},
    )


__all__ = ["get_logger", "log_traversal"]
