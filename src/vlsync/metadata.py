"""Video metadata and its markdown citation block."""

import re
from dataclasses import dataclass
from typing import Optional

NO_DESCRIPTION_PLACEHOLDER = "(no description)"


@dataclass
class VideoMeta:
    """Metadata describing a single video."""

    title: str = ""
    author: str = ""
    description: str = ""
    url: str = ""  # Canonical watch URL
    provider: Optional[str] = None


def render_meta_markdown(meta: Optional[VideoMeta]) -> str:
    """Render metadata as a block-quoted citation.

    Title is always emitted; author, URL and provider only when present.
    Multi-line descriptions keep their line breaks, each line quoted.

    Args:
        meta: Metadata to render, or None.

    Returns:
        Markdown text ending in a blank line, or "" when meta is None.
    """
    if meta is None:
        return ""

    lines: list[str] = []
    lines.append(f"> **Title:** {meta.title or ''}")
    if meta.author:
        lines.append(f"> **Author:** {meta.author}")
    if meta.url:
        lines.append(f"> **URL:** {meta.url}")
    if meta.provider:
        lines.append(f"> **Source:** {meta.provider}")
    lines.append(">")

    if meta.description:
        lines.append("> **Description:**")
        lines.append(">")
        for desc_line in re.split(r"\r?\n", meta.description):
            lines.append(f"> {desc_line}")
    else:
        lines.append(f"> {NO_DESCRIPTION_PLACEHOLDER}")

    return "\n".join(lines) + "\n\n"
