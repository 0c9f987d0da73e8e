"""Editor-side interfaces the commands work against.

Hosts embedding vlsync implement :class:`Editor` and :class:`Notifier` (or
use the in-memory versions below) and expose the active editor through a
:class:`Workspace`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Literal, Optional

NoticeLevel = Literal["info", "success", "error"]


@dataclass(frozen=True)
class EditorPosition:
    """Zero-based cursor position."""

    line: int
    ch: int


class Editor(ABC):
    """Abstract markdown editor."""

    @abstractmethod
    def get_cursor(self) -> EditorPosition:
        """Return the cursor position (the selection head)."""
        pass

    @abstractmethod
    def get_selection(self) -> str:
        """Return the selected text, or "" when nothing is selected."""
        pass

    @abstractmethod
    def replace_selection(self, text: str) -> None:
        """Replace the selection (or insert at the cursor) with ``text``."""
        pass

    @abstractmethod
    def replace_range(self, text: str, position: EditorPosition) -> None:
        """Insert ``text`` at ``position``."""
        pass


class TextEditor(Editor):
    """In-memory editor over a markdown string.

    Positions are converted to string offsets; the selection is kept as a
    half-open ``[start, end)`` offset range.
    """

    def __init__(self, text: str = "", cursor: Optional[int] = None) -> None:
        self.text = text
        self._cursor = len(text) if cursor is None else cursor
        self._anchor = self._cursor

    def select(self, start: int, end: int) -> None:
        """Select ``text[start:end]``; the cursor moves to ``end``."""
        self._anchor = max(0, min(start, len(self.text)))
        self._cursor = max(0, min(end, len(self.text)))

    def set_cursor(self, offset: int) -> None:
        """Move the cursor and clear the selection."""
        self.select(offset, offset)

    def get_cursor(self) -> EditorPosition:
        return self.offset_to_pos(self._cursor)

    def get_selection(self) -> str:
        start, end = sorted((self._anchor, self._cursor))
        return self.text[start:end]

    def replace_selection(self, text: str) -> None:
        start, end = sorted((self._anchor, self._cursor))
        self.text = self.text[:start] + text + self.text[end:]
        self.set_cursor(start + len(text))

    def replace_range(self, text: str, position: EditorPosition) -> None:
        offset = self.pos_to_offset(position)
        self.text = self.text[:offset] + text + self.text[offset:]

    def offset_to_pos(self, offset: int) -> EditorPosition:
        before = self.text[:offset]
        line = before.count("\n")
        return EditorPosition(line=line, ch=offset - (before.rfind("\n") + 1))

    def pos_to_offset(self, position: EditorPosition) -> int:
        lines = self.text.split("\n")
        line = max(0, min(position.line, len(lines) - 1))
        offset = sum(len(text) + 1 for text in lines[:line])
        return offset + max(0, min(position.ch, len(lines[line])))


@dataclass
class Workspace:
    """Holds whichever markdown editor is currently active."""

    active_editor: Optional[Editor] = None

    def get_active_editor(self) -> Optional[Editor]:
        return self.active_editor


class Notifier(ABC):
    """Channel for transient user-visible messages."""

    @abstractmethod
    def notice(self, message: str, level: NoticeLevel = "info") -> None:
        """Show ``message`` to the user."""
        pass


@dataclass
class RecordingNotifier(Notifier):
    """Notifier that keeps ``(level, message)`` pairs instead of displaying them."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def notice(self, message: str, level: NoticeLevel = "info") -> None:
        self.messages.append((level, message))

    @property
    def last(self) -> Optional[str]:
        return self.messages[-1][1] if self.messages else None
