"""Host surface protocol and the in-memory reference host."""

from .memory import MemorySurface
from .protocol import (
    BlockLookupError,
    Coordinates,
    DocumentSurface,
    EventPipeline,
    InputInterceptor,
    InputRequest,
    KeyHandler,
    SurfaceError,
    is_paste_shortcut,
)

__all__ = [
    "BlockLookupError",
    "Coordinates",
    "DocumentSurface",
    "EventPipeline",
    "InputInterceptor",
    "InputRequest",
    "KeyHandler",
    "MemorySurface",
    "SurfaceError",
    "is_paste_shortcut",
]
