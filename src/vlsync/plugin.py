"""Plugin entry point tying commands and click handling to a host editor."""

import logging
from typing import Optional

import httpx
from bs4 import Tag

from .clipboard import Clipboard, SystemClipboard
from .commands import COMMAND_REGISTRY, CommandContext, dispatch_command
from .config import Settings, get_settings
from .dispatcher import TimestampClickDispatcher
from .display import ConsoleNotifier
from .host import Notifier, Workspace

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for the plugin runtime."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
    )
    # Keep logs focused on plugin events
    for noisy_logger in ("httpx", "httpcore"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


class VideoTimestampPlugin:
    """Video embeds and clickable timestamps for a markdown editor.

    The host calls :meth:`onload` once, runs commands by id through
    :meth:`run_command` and passes every rendered element to
    :meth:`post_process`.
    """

    def __init__(
        self,
        workspace: Workspace,
        clipboard: Optional[Clipboard] = None,
        notifier: Optional[Notifier] = None,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.workspace = workspace
        self.clipboard = clipboard or SystemClipboard()
        self.notifier = notifier or ConsoleNotifier()
        self.settings = settings or get_settings()
        self.http_client = http_client
        self.dispatcher: Optional[TimestampClickDispatcher] = None

    def onload(self) -> None:
        configure_logging(self.settings.verbose)
        self.dispatcher = TimestampClickDispatcher(self.notifier)
        logger.info("VideoTimestampPlugin loaded")

    def onunload(self) -> None:
        self.dispatcher = None
        logger.info("VideoTimestampPlugin unloaded")

    def commands(self) -> dict[str, str]:
        """Command ids mapped to their palette names."""
        return {command_id: meta.name for command_id, meta in COMMAND_REGISTRY.items()}

    def run_command(self, command_id: str) -> bool:
        ctx = CommandContext(
            workspace=self.workspace,
            clipboard=self.clipboard,
            notifier=self.notifier,
            settings=self.settings,
            http_client=self.http_client,
        )
        return dispatch_command(ctx, command_id)

    def post_process(self, element: Tag) -> int:
        """Markdown post-processor: bind timestamp markers in ``element``."""
        if self.dispatcher is None:
            raise RuntimeError("Plugin is not loaded; call onload() first.")
        return self.dispatcher.process(element)
