"""Configuration module for vlsync."""

from .loader import ConfigPaths, get_config_paths
from .settings import Settings, get_settings, load_settings, reset_settings

__all__ = [
    "ConfigPaths",
    "Settings",
    "get_config_paths",
    "get_settings",
    "load_settings",
    "reset_settings",
]
