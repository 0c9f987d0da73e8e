"""Configuration file discovery."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Package defaults directory
PACKAGE_DIR = Path(__file__).parent.parent
DEFAULTS_DIR = PACKAGE_DIR / "defaults"


@dataclass
class ConfigPaths:
    """Discovered configuration paths."""

    # Directories
    local_dir: Optional[Path] = None  # .vlsync/ in current directory
    user_dir: Optional[Path] = None  # ~/.config/vlsync/
    package_dir: Path = DEFAULTS_DIR  # Package defaults

    # Specific files (resolved from directories)
    env_file: Optional[Path] = None
    config_file: Optional[Path] = None

    def __post_init__(self):
        """Resolve file paths from directories."""
        # Priority: local > user > package
        self.env_file = self._find_file(".env")
        self.config_file = self._find_file("config.yaml")

    def _find_file(self, filename: str) -> Optional[Path]:
        """Find a config file in priority order."""
        for directory in (self.local_dir, self.user_dir, self.package_dir):
            if directory:
                candidate = directory / filename
                if candidate.exists():
                    return candidate
        return None


def get_config_paths() -> ConfigPaths:
    """
    Discover configuration paths.

    Priority order (highest to lowest):
    1. .vlsync/ in current directory
    2. ~/.config/vlsync/
    3. Package defaults

    Returns:
        ConfigPaths with discovered locations
    """
    local_dir = Path.cwd() / ".vlsync"
    local_dir = local_dir if local_dir.exists() else None

    user_dir = Path.home() / ".config" / "vlsync"
    user_dir = user_dir if user_dir.exists() else None

    return ConfigPaths(
        local_dir=local_dir,
        user_dir=user_dir,
        package_dir=DEFAULTS_DIR,
    )
