"""Video providers (YouTube, Bilibili)."""

from .base import VideoProvider
from .bilibili import BilibiliProvider, build_bilibili_embed_src
from .registry import (
    ProviderRegistry,
    classify,
    provider_registry,
    register_provider,
)
from .youtube import YouTubeProvider, build_youtube_embed_src

__all__ = [
    "VideoProvider",
    "YouTubeProvider",
    "BilibiliProvider",
    "ProviderRegistry",
    "build_bilibili_embed_src",
    "build_youtube_embed_src",
    "classify",
    "provider_registry",
    "register_provider",
]


def _register_default_providers() -> None:
    """Register the built-in providers; YouTube is matched first."""
    register_provider(YouTubeProvider())
    register_provider(BilibiliProvider())


# Auto-register providers on import
_register_default_providers()
