"""Timestamp parsing and formatting for timestamp markers."""

from typing import Optional


def parse_timestamp(text: Optional[str]) -> Optional[int]:
    """Parse ``s``, ``m:s`` or ``h:m:s`` text into a number of seconds.

    Every field must be a non-negative integer; empty fields, more than
    three fields or anything non-numeric yield ``None``.

    Args:
        text: Timestamp text, e.g. ``"1:23"`` or ``"00:01:23"``.

    Returns:
        Total seconds, or None if the text is not a valid timestamp.
    """
    if not text:
        return None

    parts = [part.strip() for part in text.strip().split(":")]
    if len(parts) > 3 or any(not part.isdigit() or not part.isascii() for part in parts):
        return None

    seconds = 0
    for part in parts:
        seconds = seconds * 60 + int(part)
    return seconds


def format_seconds(seconds: int) -> str:
    """Format seconds as ``mm:ss``, or ``hh:mm:ss`` once hours are involved."""
    total = max(int(seconds), 0)
    h, remainder = divmod(total, 3600)
    m, s = divmod(remainder, 60)
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"


MARKER_CLASS = "vls-ts"
SECONDS_ATTR = "data-vls-seconds"


def build_timestamp_marker(seconds: int, caption: str = "") -> str:
    """Build the list-item line holding a clickable timestamp marker.

    Example:
        ``- <span class="vls-ts" data-vls-seconds="83">[01:23]</span> hello``
    """
    line = (
        f'- <span class="{MARKER_CLASS}" {SECONDS_ATTR}="{seconds}">'
        f"[{format_seconds(seconds)}]</span>"
    )
    if caption:
        line += f" {caption}"
    return line
