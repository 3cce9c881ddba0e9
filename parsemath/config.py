"""Runtime settings for parsemath, read from the environment.

    PARSEMATH_MAX_DEPTH   nesting limit enforced by the parser (default 100)
    PARSEMATH_PRECISION   significant digits the CLI prints (default: shortest repr)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_DEPTH = 100


@dataclass(frozen=True)
class Settings:
    """Parser limits and display options."""

    max_depth: int = DEFAULT_MAX_DEPTH
    precision: Optional[int] = None


def _positive_int(env: Mapping[str, str], key: str) -> Optional[int]:
    """Read a positive integer from env, or None if unset/empty."""
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{key} must be at least 1, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Raises:
        ValueError: If a variable is set but not a positive integer.
    """
    env = os.environ if env is None else env
    max_depth = _positive_int(env, "PARSEMATH_MAX_DEPTH")
    return Settings(
        max_depth=max_depth if max_depth is not None else DEFAULT_MAX_DEPTH,
        precision=_positive_int(env, "PARSEMATH_PRECISION"),
    )
