"""Settings management for vlsync."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from ..providers.base import USER_AGENT
from ..providers.bilibili import VIEW_API_URL
from ..providers.youtube import OEMBED_URL
from .loader import ConfigPaths, get_config_paths

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


@dataclass
class Settings:
    """Settings loaded from config files and environment."""

    # Metadata endpoints
    youtube_oembed_url: str = OEMBED_URL
    bilibili_view_api_url: str = VIEW_API_URL
    user_agent: str = USER_AGENT

    # Runtime
    verbose: bool = False

    config_paths: Optional[ConfigPaths] = None


def load_config_file(config_file: Optional[Path]) -> dict[str, Any]:
    """Load config.yaml, returning {} when it is missing or unreadable."""
    if not config_file or not config_file.exists():
        return {}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config file {config_file}: {e}")
        return {}

    return data if isinstance(data, dict) else {}


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUE_VALUES


def load_settings() -> Settings:
    """
    Load settings from all configuration sources.

    Priority (highest to lowest):
    1. Environment variables (including from .env files)
    2. Local .vlsync/config.yaml
    3. User ~/.config/vlsync/config.yaml
    4. Package defaults
    """
    paths = get_config_paths()

    if paths.env_file:
        load_dotenv(paths.env_file, override=True)

    data = load_config_file(paths.config_file)
    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        metadata = {}

    return Settings(
        youtube_oembed_url=os.getenv(
            "VLSYNC_YOUTUBE_OEMBED_URL", metadata.get("youtube_oembed_url") or OEMBED_URL
        ),
        bilibili_view_api_url=os.getenv(
            "VLSYNC_BILIBILI_VIEW_API_URL",
            metadata.get("bilibili_view_api_url") or VIEW_API_URL,
        ),
        user_agent=os.getenv("VLSYNC_USER_AGENT", metadata.get("user_agent") or USER_AGENT),
        verbose=_parse_bool(os.getenv("VLSYNC_VERBOSE", data.get("verbose", False))),
        config_paths=paths,
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Reset global settings (useful for testing or directory change)."""
    global _settings
    _settings = None
