"""Clipboard access and link extraction."""

import logging
import re
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)

_URL_PATTERN = re.compile(r"https?://[^\s]+")

# Paste utilities tried in order; the first one found on PATH is used
_PASTE_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbpaste",),
    ("wl-paste", "--no-newline"),
    ("xclip", "-selection", "clipboard", "-o"),
    ("xsel", "--clipboard", "--output"),
    ("powershell", "-NoProfile", "-Command", "Get-Clipboard"),
)
_PASTE_TIMEOUT_SECONDS = 5


class Clipboard(ABC):
    """Read-only view of the system clipboard."""

    @abstractmethod
    def read_text(self) -> Optional[str]:
        """Return the current clipboard text, or None if unavailable."""
        pass


class StaticClipboard(Clipboard):
    """Clipboard with fixed contents, for hosts that pass text in directly."""

    def __init__(self, text: Optional[str] = None) -> None:
        self.text = text

    def read_text(self) -> Optional[str]:
        return self.text


class SystemClipboard(Clipboard):
    """Clipboard backed by the platform's paste utility."""

    def __init__(self, commands: tuple[tuple[str, ...], ...] = _PASTE_COMMANDS) -> None:
        self.commands = commands

    def _find_command(self) -> Optional[tuple[str, ...]]:
        for command in self.commands:
            if shutil.which(command[0]):
                return command
        return None

    def read_text(self) -> Optional[str]:
        command = self._find_command()
        if command is None:
            logger.warning("No clipboard utility found (tried pbpaste, wl-paste, xclip, xsel).")
            return None

        result = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=_PASTE_TIMEOUT_SECONDS,
        )
        if result.returncode != 0:
            logger.debug(f"{command[0]} exited with {result.returncode}: {result.stderr.strip()}")
            return None
        return result.stdout


def extract_first_url(text: Optional[str]) -> Optional[str]:
    """Return the first ``http(s)://`` token in ``text``."""
    if not text:
        return None
    match = _URL_PATTERN.search(text)
    return match.group(0) if match else None


def read_url_from_clipboard(clipboard: Clipboard) -> Optional[str]:
    """Read one link from the clipboard; access faults yield None."""
    try:
        text = clipboard.read_text()
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        logger.warning(f"Failed to read clipboard: {e}")
        return None
    return extract_first_url(text)
