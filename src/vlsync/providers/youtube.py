"""YouTube provider.

Recognises ``youtube.com`` and ``youtu.be`` links, builds ``/embed/`` player
URLs and reads title/author from the public oEmbed endpoint. oEmbed carries
no description, so YouTube citations always fall back to the placeholder.
"""

import logging
from typing import Optional
from urllib.parse import parse_qs

import httpx

from ..metadata import VideoMeta
from .base import VideoProvider, get_json, split_url

logger = logging.getLogger(__name__)

OEMBED_URL = "https://www.youtube.com/oembed"
_EMBED_PREFIX = "/embed/"
_SHORT_HOST = "youtu.be"
_MAIN_HOST = "youtube.com"


class YouTubeProvider(VideoProvider):
    """Provider for YouTube videos."""

    source_type = "youtube"
    display_name = "YouTube"
    url_patterns = ["youtube.com", "youtu.be"]
    start_param = "start"

    def extract_id(self, source_url: str) -> Optional[str]:
        """Extract the YouTube video ID from a URL.

        Handles:
        - https://youtu.be/VIDEO_ID
        - https://www.youtube.com/watch?v=VIDEO_ID
        - https://www.youtube.com/embed/VIDEO_ID

        Args:
            source_url: YouTube URL.

        Returns:
            Video ID string, or None if the URL cannot be parsed.
        """
        parsed = split_url(source_url)
        if parsed is None:
            return None

        hostname = parsed.hostname or ""
        if hostname == _SHORT_HOST:
            video_id = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
            return video_id or None

        if _MAIN_HOST in hostname:
            ids = parse_qs(parsed.query).get("v")
            if ids and ids[0]:
                return ids[0]
            if parsed.path.startswith(_EMBED_PREFIX):
                return parsed.path[len(_EMBED_PREFIX) :] or None

        return None

    def build_embed_src(self, source_url: str) -> Optional[str]:
        video_id = self.extract_id(source_url)
        if not video_id:
            return None
        return build_youtube_embed_src(video_id)

    def fetch_metadata(
        self,
        source_url: str,
        client: Optional[httpx.Client] = None,
        api_url: Optional[str] = None,
    ) -> Optional[VideoMeta]:
        """Fetch title and channel name via oEmbed.

        Args:
            source_url: YouTube URL as pasted by the user.
            client: Optional shared HTTP client.
            api_url: Override for the oEmbed endpoint.

        Returns:
            VideoMeta with an empty description, or None on failure.
        """
        try:
            payload = get_json(
                api_url or OEMBED_URL,
                params={"url": source_url, "format": "json"},
                client=client,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"YouTube metadata lookup failed for {source_url}: {e}")
            return None

        if not isinstance(payload, dict):
            return None

        return VideoMeta(
            title=payload.get("title") or "",
            author=payload.get("author_name") or "",
            description="",
            url=source_url,
            provider=self.source_type,
        )


def build_youtube_embed_src(video_id: str) -> str:
    """Player URL for a video ID; the start offset is added on click."""
    return f"https://www.youtube.com/embed/{video_id}?rel=0&controls=1"
