"""Configuration helpers for backend runtime."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .dice import DEFAULT_MAX_EXPLOSION_DEPTH


@dataclass(frozen=True)
class ResolutionSettings:
    host: str
    port: int
    seed: int | None
    max_explosion_depth: int
    log_level: str


def _optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


def load_settings() -> ResolutionSettings:
    port_raw = os.getenv("RPGRESOLVE_PORT", "8000")
    depth_raw = os.getenv("RPGRESOLVE_MAX_EXPLOSION_DEPTH", str(DEFAULT_MAX_EXPLOSION_DEPTH))
    max_explosion_depth = int(depth_raw)
    if max_explosion_depth < 0:
        raise ValueError(f"RPGRESOLVE_MAX_EXPLOSION_DEPTH must be >= 0, got {max_explosion_depth}")
    return ResolutionSettings(
        host=os.getenv("RPGRESOLVE_HOST", "127.0.0.1"),
        port=int(port_raw),
        seed=_optional_int(os.getenv("RPGRESOLVE_SEED")),
        max_explosion_depth=max_explosion_depth,
        log_level=os.getenv("RPGRESOLVE_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
