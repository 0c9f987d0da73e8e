"""Embedded player markup and start-offset rewriting."""

import logging
import re
from typing import Optional
from urllib.parse import unquote_plus, urlunsplit

from .providers import provider_registry
from .providers.base import split_url

logger = logging.getLogger(__name__)

CONTAINER_CLASS = "vls-video-container"
IFRAME_CLASS = "vls-video-iframe"
IFRAME_ALLOW = "autoplay; encrypted-media; picture-in-picture; fullscreen"

# Offset key for hosts no provider claims
DEFAULT_START_PARAM = "t"


def build_embed_html(src: str) -> str:
    """Wrap a player URL in the container/iframe fragment inserted into notes."""
    return (
        f'<div class="{CONTAINER_CLASS}">'
        f'<iframe class="{IFRAME_CLASS}" src="{src}" '
        f'allow="{IFRAME_ALLOW}" '
        f'allowfullscreen frameborder="0"></iframe>'
        f"</div>"
    )


def start_param_for(url: str) -> str:
    """Return the start-offset query key the player behind ``url`` reads."""
    source_type = provider_registry.classify(url)
    provider = provider_registry.get_provider(source_type) if source_type else None
    return provider.start_param if provider else DEFAULT_START_PARAM


def with_start_offset(src: Optional[str], seconds: int) -> Optional[str]:
    """Return a copy of a player URL that starts playback at ``seconds``.

    The offset key (``start`` for YouTube, ``t`` otherwise) is replaced,
    never appended twice; every other query parameter is kept verbatim.
    URLs that cannot be parsed go through a narrower textual rewrite.

    Args:
        src: Current iframe ``src``.
        seconds: Start offset in seconds.

    Returns:
        The rewritten URL (``src`` itself when it is empty).
    """
    if not src:
        return src

    parsed = split_url(src)
    if parsed is None:
        logger.debug(f"Falling back to textual offset rewrite for {src!r}")
        return _rewrite_textually(src, start_param_for(src), seconds)

    key = start_param_for(parsed.hostname or "")
    query = _set_query_param(parsed.query, key, str(seconds))
    return urlunsplit((parsed.scheme, parsed.netloc, parsed.path, query, parsed.fragment))


def _set_query_param(query: str, key: str, value: str) -> str:
    """Set ``key`` in a raw query string, keeping other pairs untouched."""
    pairs = [pair for pair in query.split("&") if pair]
    result: list[str] = []
    replaced = False
    for pair in pairs:
        name = unquote_plus(pair.split("=", 1)[0])
        if name != key:
            result.append(pair)
        elif not replaced:
            result.append(f"{key}={value}")
            replaced = True
    if not replaced:
        result.append(f"{key}={value}")
    return "&".join(result)


def _rewrite_textually(src: str, key: str, seconds: int) -> str:
    """Strip existing ``key=`` pairs from unparseable text and append a new one."""
    body, hash_sep, fragment = src.partition("#")
    base, _, query = body.partition("?")
    query = re.sub(rf"(?:^|&){re.escape(key)}=[^&]*", "", query).lstrip("&")
    connector = "&" if query else ""
    return f"{base}?{query}{connector}{key}={seconds}{hash_sep}{fragment}"
