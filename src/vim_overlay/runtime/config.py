"""Environment helpers and the interpreter configuration object."""

from __future__ import annotations

import os
import string
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "VIM_OVERLAY_"

DEFAULT_OPERATOR_TIMEOUT_MS = 500
DEFAULT_LINE_HEIGHT = 20.0
DEFAULT_SUPPRESSED_CHARACTERS = (
    string.ascii_letters + string.digits + string.punctuation
)

_MODES = ("normal", "insert")


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_number(name: str, fallback: float) -> float:
    raw = env(name)
    if raw is None:
        return fallback
    try:
        return float(raw)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class OverlayConfig:
    """Tunables shared by every interpreter attached to a surface."""

    operator_timeout_ms: int = DEFAULT_OPERATOR_TIMEOUT_MS
    fallback_line_height: float = DEFAULT_LINE_HEIGHT
    initial_mode: str = "insert"
    suppressed_characters: str = DEFAULT_SUPPRESSED_CHARACTERS

    def __post_init__(self) -> None:
        if self.operator_timeout_ms <= 0:
            raise ValueError("operator_timeout_ms must be positive")
        if self.fallback_line_height <= 0:
            raise ValueError("fallback_line_height must be positive")
        if self.initial_mode not in _MODES:
            raise ValueError(f"Unknown initial mode '{self.initial_mode}'")

    @classmethod
    def from_env(cls, **overrides: object) -> "OverlayConfig":
        """Build a config from ``VIM_OVERLAY_*`` variables, then apply overrides."""

        base = cls(
            operator_timeout_ms=int(
                env_number("OPERATOR_TIMEOUT_MS", DEFAULT_OPERATOR_TIMEOUT_MS)
            ),
            fallback_line_height=env_number("LINE_HEIGHT", DEFAULT_LINE_HEIGHT),
            initial_mode=(env("INITIAL_MODE") or "insert").lower(),
        )
        if overrides:
            return replace(base, **overrides)
        return base


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_OPERATOR_TIMEOUT_MS",
    "DEFAULT_LINE_HEIGHT",
    "DEFAULT_SUPPRESSED_CHARACTERS",
    "OverlayConfig",
    "env",
    "env_flag",
    "env_number",
]
