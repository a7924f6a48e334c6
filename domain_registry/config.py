"""
domain_registry.config — default fee and logging knobs.

Configuration precedence:
  1) Environment variables (DOMAIN_REGISTRY_*)
  2) Hardcoded defaults below

Key env vars:
  - DOMAIN_REGISTRY_DEFAULT_FEE   (int)   default: 5_000_000_000_000_000  (0.005 at 18 decimals)
  - DOMAIN_REGISTRY_LOG_LEVEL     (str)   default: INFO
  - DOMAIN_REGISTRY_LOG_FORMAT    (str)   default: plain   (plain | json)

Usage:
    from domain_registry.config import load_config
    CFG = load_config()
    registry = DomainRegistry(owner, fee=CFG.default_fee)

`load_config()` is cached; tests that tweak the environment call
`load_config.cache_clear()` first.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict

DEFAULT_FEE = 5 * 10**15
MAX_FEE_BITS = 256

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("plain", "json")


# ----------------------------- helpers ---------------------------------------


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        v = int(raw.strip().replace("_", ""), 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


def _env_choice(name: str, default: str, choices: tuple, *, upper: bool) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().upper() if upper else raw.strip().lower()
    return val if val in choices else default


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class RegistryConfig:
    default_fee: int
    log_level: str
    log_format: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "default_fee": self.default_fee,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


@lru_cache(maxsize=1)
def load_config() -> RegistryConfig:
    """
    Build and cache a RegistryConfig from environment + defaults.
    """
    return RegistryConfig(
        default_fee=_env_int(
            "DOMAIN_REGISTRY_DEFAULT_FEE",
            DEFAULT_FEE,
            min_v=0,
            max_v=(1 << MAX_FEE_BITS) - 1,
        ),
        log_level=_env_choice("DOMAIN_REGISTRY_LOG_LEVEL", "INFO", _LOG_LEVELS, upper=True),
        log_format=_env_choice("DOMAIN_REGISTRY_LOG_FORMAT", "plain", _LOG_FORMATS, upper=False),
    )


__all__ = ["RegistryConfig", "load_config", "DEFAULT_FEE", "MAX_FEE_BITS"]
