"""Command registry and the two editor commands.

Commands read from the active editor and the clipboard, report every
outcome through the notifier and return True only when the document was
changed.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

import httpx

from .clipboard import Clipboard, read_url_from_clipboard
from .config import Settings
from .embed import build_embed_html
from .host import Editor, Notifier, Workspace
from .metadata import VideoMeta, render_meta_markdown
from .providers import BilibiliProvider, VideoProvider, provider_registry
from .timestamps import build_timestamp_marker, parse_timestamp

logger = logging.getLogger(__name__)

INSERT_VIDEO_COMMAND = "insert-video-iframe-from-clipboard"
TIMESTAMP_COMMAND = "selection-to-video-timestamp"

# Leading token is the timestamp, the rest of the line is the caption
_SELECTION_PATTERN = re.compile(r"(\S+)\s*(.*)\Z")


@dataclass
class CommandContext:
    """Everything a command handler needs from its host."""

    workspace: Workspace
    clipboard: Clipboard
    notifier: Notifier
    settings: Settings = field(default_factory=Settings)

    # Shared client; a short-lived one is created per fetch when None
    http_client: Optional[httpx.Client] = None

    def active_editor(self) -> Optional[Editor]:
        """Return the active editor, telling the user when there is none."""
        editor = self.workspace.get_active_editor()
        if editor is None:
            self.notifier.notice("No markdown document is open.", "error")
        return editor


@dataclass
class CommandMetadata:
    """Metadata for a registered editor command."""

    # Handler function: (ctx) -> bool (True = document changed)
    handler: Callable[[CommandContext], bool]

    # Name shown in the host's command palette
    name: str

    description: str = ""


# Global command registry, keyed by command id
COMMAND_REGISTRY: dict[str, CommandMetadata] = {}


def register_command(command_id: str, name: str, description: str = "") -> Callable:
    """Decorator to register a command handler under ``command_id``.

    Args:
        command_id: Stable id (e.g., "selection-to-video-timestamp")
        name: Palette name
        description: Longer help text
    """

    def decorator(handler: Callable[[CommandContext], bool]) -> Callable:
        COMMAND_REGISTRY[command_id] = CommandMetadata(
            handler=handler,
            name=name,
            description=description or name,
        )
        return handler

    return decorator


def dispatch_command(ctx: CommandContext, command_id: str) -> bool:
    """Run a registered command.

    Returns:
        The handler's result, or False for unknown commands.
    """
    metadata = COMMAND_REGISTRY.get(command_id)
    if metadata is None:
        ctx.notifier.notice(f"Unknown command: {command_id}", "error")
        return False
    return metadata.handler(ctx)


def list_commands() -> list[str]:
    """Get the ids of all registered commands."""
    return sorted(COMMAND_REGISTRY)


# =============================================================================
# Command Handlers
# =============================================================================


@register_command(
    command_id=INSERT_VIDEO_COMMAND,
    name="Insert video + metadata (YouTube/Bilibili link from clipboard)",
    description="Embed the video linked on the clipboard at the cursor, "
    "followed by a quoted citation with its title, author and description.",
)
def cmd_insert_video(ctx: CommandContext) -> bool:
    """Insert an embedded player and citation for the clipboard link."""
    editor = ctx.active_editor()
    if editor is None:
        return False

    url = read_url_from_clipboard(ctx.clipboard)
    if not url:
        ctx.notifier.notice(
            "No link found on the clipboard. Copy a YouTube or Bilibili video link first.",
            "error",
        )
        return False

    source_type = provider_registry.classify(url)
    provider = provider_registry.get_provider(source_type) if source_type else None
    if provider is None:
        ctx.notifier.notice("The link is not a YouTube or Bilibili video link.", "error")
        return False

    meta = fetch_metadata(ctx, provider, url)

    src = provider.build_embed_src(url)
    if not src:
        if isinstance(provider, BilibiliProvider):
            ctx.notifier.notice(
                "Could not extract a BV id from the link "
                "(expected https://www.bilibili.com/video/BV...).",
                "error",
            )
        else:
            ctx.notifier.notice("Could not build the player URL for this link.", "error")
        return False

    block = build_embed_html(src) + "\n\n" + render_meta_markdown(meta or VideoMeta())
    editor.replace_range(block, editor.get_cursor())

    ctx.notifier.notice(f"Inserted {provider.display_name} player and metadata.", "success")
    return True


@register_command(
    command_id=TIMESTAMP_COMMAND,
    name="Selection to video timestamp (controls the player on this page)",
    description="Turn a selection such as '1:23 some caption' into a clickable "
    "timestamp marker that seeks the embedded player.",
)
def cmd_selection_to_timestamp(ctx: CommandContext) -> bool:
    """Replace the selected "<time> <caption>" text with a timestamp marker line."""
    editor = ctx.active_editor()
    if editor is None:
        return False

    selection = editor.get_selection()
    if not selection or not selection.strip():
        ctx.notifier.notice("Select a line of text first, e.g. 1:23 some caption", "error")
        return False

    match = _SELECTION_PATTERN.match(selection.strip())
    if not match:
        ctx.notifier.notice(
            "Selection is not in the expected format, e.g. 1:23 I'm afraid I can't do that.",
            "error",
        )
        return False

    timestamp, caption = match.group(1), match.group(2)
    seconds = parse_timestamp(timestamp)
    if seconds is None:
        ctx.notifier.notice("Invalid time format, e.g. 1:23 or 00:01:23", "error")
        return False

    editor.replace_selection(build_timestamp_marker(seconds, caption))
    return True


def fetch_metadata(
    ctx: CommandContext, provider: VideoProvider, url: str
) -> Optional[VideoMeta]:
    """Fetch metadata for ``url``; any failure means "no metadata"."""
    api_urls = {
        "youtube": ctx.settings.youtube_oembed_url,
        "bilibili": ctx.settings.bilibili_view_api_url,
    }
    api_url = api_urls.get(provider.source_type)

    try:
        if ctx.http_client is not None:
            return provider.fetch_metadata(url, client=ctx.http_client, api_url=api_url)
        with httpx.Client(
            follow_redirects=True,
            headers={"User-Agent": ctx.settings.user_agent},
        ) as client:
            return provider.fetch_metadata(url, client=client, api_url=api_url)
    except Exception as e:
        logger.warning(f"Metadata fetch failed for {url}: {e}")
        return None
