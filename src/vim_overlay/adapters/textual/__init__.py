"""Textual host adapter; requires the ``textual`` extra."""

from .controller import TextualOverlayController, TextualUIHooks, textual_key_to_stroke
from .surface import TextAreaSurface

__all__ = [
    "TextAreaSurface",
    "TextualOverlayController",
    "TextualUIHooks",
    "textual_key_to_stroke",
]
