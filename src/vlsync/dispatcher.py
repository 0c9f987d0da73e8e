"""Click handling for timestamp markers in the rendered document.

The rendered view is a BeautifulSoup tree. Each render pass hands the
freshly rendered element to :meth:`TimestampClickDispatcher.process`, which
binds a click handler to every timestamp marker exactly once; clicking a
bound marker rewrites the ``src`` of the first player frame in the same
reading view so the player seeks to the marker's offset.
"""

import logging
import weakref
from dataclasses import dataclass
from typing import Optional

from bs4 import Tag

from .embed import IFRAME_CLASS, with_start_offset
from .host import Notifier
from .timestamps import MARKER_CLASS, SECONDS_ATTR

logger = logging.getLogger(__name__)

BOUND_ATTR = "data-vls-bound"
READING_VIEW_CLASSES = ("markdown-reading-view", "markdown-preview-view")


@dataclass
class ClickEvent:
    """A click on a rendered element."""

    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class TimestampClickDispatcher:
    """Binds and runs click handlers for ``.vls-ts`` markers."""

    def __init__(self, notifier: Notifier) -> None:
        self.notifier = notifier
        # id(marker) -> marker; entries vanish once a rendered tree is discarded
        self._bound: "weakref.WeakValueDictionary[int, Tag]" = weakref.WeakValueDictionary()

    def process(self, element: Tag) -> int:
        """Bind every unbound marker below ``element``.

        Returns:
            Number of markers bound during this pass.
        """
        bound = 0
        for marker in element.select(f".{MARKER_CLASS}"):
            if marker.get(BOUND_ATTR) == "1":
                continue
            marker[BOUND_ATTR] = "1"
            self._bound[id(marker)] = marker
            bound += 1
        if bound:
            logger.debug(f"Bound {bound} timestamp marker(s)")
        return bound

    def is_bound(self, marker: Tag) -> bool:
        return self._bound.get(id(marker)) is marker

    def bound_count(self) -> int:
        """Number of bound markers still alive."""
        return len(self._bound)

    def click(self, marker: Tag, event: Optional[ClickEvent] = None) -> ClickEvent:
        """Deliver a click to ``marker``; unbound elements ignore it."""
        event = event or ClickEvent()
        if self.is_bound(marker):
            self._on_click(marker, event)
        return event

    def _on_click(self, marker: Tag, event: ClickEvent) -> None:
        event.prevent_default()
        event.stop_propagation()

        raw = marker.get(SECONDS_ATTR) or "0"
        try:
            seconds = int(str(raw).strip())
        except ValueError:
            seconds = -1
        if seconds < 0:
            self.notifier.notice("Invalid timestamp.", "error")
            return

        root = _reading_view(marker) or _document_root(marker)
        iframe = root.select_one(f"iframe.{IFRAME_CLASS}")
        if iframe is None:
            self.notifier.notice(
                f"No video player ({IFRAME_CLASS}) found on this page.", "error"
            )
            return

        old_src = iframe.get("src") or ""
        new_src = with_start_offset(old_src, seconds)
        if new_src and new_src != old_src:
            iframe["src"] = new_src
            logger.debug(f"Player seeked to {seconds}s: {new_src}")


def _reading_view(element: Tag) -> Optional[Tag]:
    """Nearest enclosing reading/preview container, if any."""
    return element.find_parent(
        lambda tag: any(cls in READING_VIEW_CLASSES for cls in tag.get("class") or [])
    )


def _document_root(element: Tag) -> Tag:
    root = element
    while root.parent is not None:
        root = root.parent
    return root
