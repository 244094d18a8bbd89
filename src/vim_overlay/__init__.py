"""Modal Normal/Insert key interpreter for text editing surfaces."""

from .host import MemorySurface
from .keymaps import KeyStroke
from .modes import KeyDispatcher, KeyResult, Mode
from .runtime import OverlayConfig

__all__ = [
    "actions",
    "adapters",
    "host",
    "keymaps",
    "modes",
    "runtime",
    "KeyDispatcher",
    "KeyResult",
    "KeyStroke",
    "MemorySurface",
    "Mode",
    "OverlayConfig",
]

__version__ = "0.1.0"
