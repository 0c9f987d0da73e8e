"""Display module for vlsync notices."""

from .console import ConsoleNotifier, create_console, get_console
from .theme import DEFAULT_PALETTE, ColorPalette

__all__ = [
    "ColorPalette",
    "ConsoleNotifier",
    "DEFAULT_PALETTE",
    "create_console",
    "get_console",
]
