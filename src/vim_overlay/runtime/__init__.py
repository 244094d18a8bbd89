"""Configuration and telemetry shared by every interpreter."""

from . import telemetry
from .config import OverlayConfig

__all__ = ["OverlayConfig", "telemetry"]
