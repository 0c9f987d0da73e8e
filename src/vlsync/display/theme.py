"""Color palette for notices printed to the console."""

from dataclasses import dataclass


@dataclass
class ColorPalette:
    """Color palette for notice levels."""

    success: str = "green"
    error: str = "red"
    info: str = "cyan"


DEFAULT_PALETTE = ColorPalette()
