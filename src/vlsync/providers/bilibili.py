"""Bilibili provider.

Works with BV ids taken from ``/video/BV...`` pages or from
``player.bilibili.com`` links, and queries the public ``web-interface/view``
API for metadata.
"""

import logging
from typing import Optional
from urllib.parse import parse_qs

import httpx

from ..metadata import VideoMeta
from .base import VideoProvider, get_json, split_url

logger = logging.getLogger(__name__)

VIEW_API_URL = "https://api.bilibili.com/x/web-interface/view"
PLAYER_HOST = "player.bilibili.com"
_VIDEO_SEGMENT = "video"
_SUCCESS_CODE = 0


class BilibiliProvider(VideoProvider):
    """Provider for Bilibili videos."""

    source_type = "bilibili"
    display_name = "Bilibili"
    url_patterns = ["bilibili.com"]
    start_param = "t"

    @staticmethod
    def is_player_url(source_url: str) -> bool:
        """True when the link already points at the embeddable player."""
        return PLAYER_HOST in source_url.lower()

    def extract_id(self, source_url: str) -> Optional[str]:
        """Get the BV id from a player link or a standard video page link.

        The player form (``?bvid=``) is tried first, then the path form
        (``/video/BV.../``).
        """
        parsed = split_url(source_url)
        if parsed is None:
            return None

        if PLAYER_HOST in (parsed.hostname or ""):
            bvids = parse_qs(parsed.query).get("bvid")
            if bvids and bvids[0]:
                return bvids[0]

        return _bvid_from_path(parsed.path)

    def build_embed_src(self, source_url: str) -> Optional[str]:
        if self.is_player_url(source_url):
            return source_url
        bvid = self.extract_id(source_url)
        if not bvid:
            return None
        return build_bilibili_embed_src(bvid)

    def fetch_metadata(
        self,
        source_url: str,
        client: Optional[httpx.Client] = None,
        api_url: Optional[str] = None,
    ) -> Optional[VideoMeta]:
        """Fetch title, uploader and description for a Bilibili video.

        Args:
            source_url: Any Bilibili video or player link.
            client: Optional shared HTTP client.
            api_url: Override for the view API endpoint.

        Returns:
            VideoMeta, or None if the id is missing or the API refuses.
        """
        bvid = self.extract_id(source_url)
        if not bvid:
            return None

        try:
            payload = get_json(api_url or VIEW_API_URL, params={"bvid": bvid}, client=client)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Bilibili metadata lookup failed for {bvid}: {e}")
            return None

        if not isinstance(payload, dict) or payload.get("code") != _SUCCESS_CODE:
            logger.debug(f"Bilibili API returned no data for {bvid}: {payload!r:.200}")
            return None
        data = payload.get("data")
        if not isinstance(data, dict):
            return None

        owner = data.get("owner")
        author = owner.get("name") if isinstance(owner, dict) else ""
        return VideoMeta(
            title=data.get("title") or "",
            author=author or "",
            description=data.get("desc") or "",
            url=f"https://www.bilibili.com/video/{data.get('bvid') or bvid}",
            provider=self.source_type,
        )


def _bvid_from_path(path: str) -> Optional[str]:
    """Return the segment following ``video`` in a URL path."""
    segments = [segment for segment in path.split("/") if segment]
    for index, segment in enumerate(segments):
        if segment.lower() == _VIDEO_SEGMENT:
            if index + 1 < len(segments):
                return segments[index + 1].split("?")[0] or None
            return None
    return None


def build_bilibili_embed_src(bvid: str) -> str:
    """Player URL for a BV id; the ``t`` offset is added on click."""
    return f"https://player.bilibili.com/player.html?bvid={bvid}&page=1&high_quality=1"
