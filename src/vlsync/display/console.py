"""Console factory and console-backed notifier.

This module provides a singleton Console instance with the notice theme applied.
"""

from typing import Optional

from rich.console import Console
from rich.theme import Theme as RichTheme

from ..host import Notifier, NoticeLevel
from .theme import DEFAULT_PALETTE, ColorPalette

_console_instance: Optional[Console] = None


def get_console() -> Console:
    """Get the singleton Console instance with the notice theme applied."""
    global _console_instance
    if _console_instance is None:
        _console_instance = create_console()
    return _console_instance


def create_console(palette: ColorPalette = DEFAULT_PALETTE, **kwargs) -> Console:
    """Create a Console whose styles are named after notice levels."""
    rich_theme = RichTheme(
        {
            "success": palette.success,
            "error": palette.error,
            "info": palette.info,
        }
    )
    return Console(theme=rich_theme, **kwargs)


class ConsoleNotifier(Notifier):
    """Notifier that prints each notice on a rich console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or get_console()

    def notice(self, message: str, level: NoticeLevel = "info") -> None:
        # Notices are plain text; markup characters in links must not be interpreted
        self.console.print(message, style=level, markup=False, highlight=False)
