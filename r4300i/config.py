from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Optional


class ConfigError(ValueError):
    pass


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().casefold()
    return normalized not in {"0", "false", "off", ""}


def _env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip(), 0)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer literal, got {raw!r}") from exc


def _env_log_level(name: str, default: str) -> int:
    raw = (os.getenv(name) or default).strip().upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ConfigError(f"{name} is not a logging level: {raw!r}")
    return level


@dataclass(frozen=True)
class DisasmConfig:
    base: Optional[int]
    skip_unknown: bool
    log_level: int


def load_config() -> DisasmConfig:
    return DisasmConfig(
        base=_env_int("R4300I_BASE"),
        skip_unknown=_env_flag("R4300I_SKIP_UNKNOWN", default=False),
        log_level=_env_log_level("R4300I_LOG_LEVEL", "WARNING"),
    )


__all__ = ["ConfigError", "DisasmConfig", "load_config"]
