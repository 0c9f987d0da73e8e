"""Base class for video providers."""

from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import SplitResult, urlsplit

import httpx

from ..metadata import VideoMeta

# Default user-agent for metadata requests
USER_AGENT = "vlsync/0.1"


class VideoProvider(ABC):
    """
    Base class for video hosting platforms.

    Subclasses know how to recognise their links, pull the video identifier
    out of them, build an embeddable player URL and look up metadata.
    """

    # Source type identifier (e.g., "youtube", "bilibili")
    source_type: str = ""

    # Human readable name used in notices
    display_name: str = ""

    # Host fragments this provider recognizes
    url_patterns: list[str] = []

    # Query parameter the embedded player reads its start offset from
    start_param: str = "t"

    def can_handle_source(self, source_url: str) -> bool:
        """
        Check if this provider can handle the given source URL.

        Args:
            source_url: URL to check.

        Returns:
            True if URL contains any of the url_patterns (case-insensitive).
        """
        url_lower = source_url.lower()
        return any(pattern.lower() in url_lower for pattern in self.url_patterns)

    @abstractmethod
    def extract_id(self, source_url: str) -> Optional[str]:
        """
        Extract the provider-specific video identifier.

        Args:
            source_url: Share link, short link or embed link.

        Returns:
            Identifier string, or None if the URL does not carry one.
        """
        pass

    @abstractmethod
    def build_embed_src(self, source_url: str) -> Optional[str]:
        """
        Build the player URL to put in the iframe ``src``.

        Returns:
            Embeddable URL without a start offset, or None on failure.
        """
        pass

    @abstractmethod
    def fetch_metadata(
        self,
        source_url: str,
        client: Optional[httpx.Client] = None,
        api_url: Optional[str] = None,
    ) -> Optional[VideoMeta]:
        """
        Look up title/author/description for a video.

        Faults never propagate: network errors and unexpected payloads
        yield None so the caller can insert the player without metadata.

        Args:
            source_url: Link the user pasted.
            client: Optional shared HTTP client.
            api_url: Override for the metadata endpoint.

        Returns:
            VideoMeta, or None when nothing could be fetched.
        """
        pass


def split_url(url: str) -> Optional[SplitResult]:
    """Split an absolute URL, returning None for anything malformed."""
    try:
        parts = urlsplit(url.strip())
        # Raises ValueError for out-of-range or non-numeric ports
        parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return parts


def get_json(
    url: str,
    params: Optional[dict] = None,
    client: Optional[httpx.Client] = None,
) -> object:
    """GET a URL and decode its JSON body.

    Uses the given client when one is provided, otherwise a short-lived
    client with the transport's default timeout.

    Raises:
        httpx.HTTPError: On transport failures or non-2xx responses.
        ValueError: When the body is not JSON.
    """
    if client is not None:
        response = client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    with httpx.Client(follow_redirects=True, headers={"User-Agent": USER_AGENT}) as own_client:
        response = own_client.get(url, params=params)
        response.raise_for_status()
        return response.json()
