from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Any, Dict


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid integer value '{raw}'") from exc


def _parse_max_length(raw: str | None) -> int | None:
    max_length = _parse_optional_int(raw)
    if max_length is not None and max_length < 1:
        raise ValueError(f"FENWICKTRACE_MAX_LENGTH must be positive, got {max_length}.")
    return max_length


def _normalise_log_level(raw: str | None) -> str:
    level = (raw or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unsupported log level '{level}'.")
    return level


@dataclass(frozen=True)
class RuntimeConfig:
    enable_numba: bool
    log_level: str
    max_length: int | None

    @property
    def kernel(self) -> str:
        return "numba" if self.enable_numba else "python"

    def allows_length(self, length: int) -> bool:
        return self.max_length is None or length <= self.max_length


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("fenwicktrace")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    enable_numba = _bool_from_env(os.getenv("FENWICKTRACE_ENABLE_NUMBA"), default=False)
    log_level = _normalise_log_level(os.getenv("FENWICKTRACE_LOG_LEVEL"))
    max_length = _parse_max_length(os.getenv("FENWICKTRACE_MAX_LENGTH"))

    config = RuntimeConfig(
        enable_numba=enable_numba,
        log_level=log_level,
        max_length=max_length,
    )
    _configure_logging(config.log_level)
    return config


def describe_runtime() -> Dict[str, Any]:
    """Return a JSON-friendly snapshot of the active runtime configuration."""

    config = runtime_config()
    snapshot = asdict(config)
    snapshot["kernel"] = config.kernel
    return snapshot


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()
