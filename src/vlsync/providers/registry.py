"""Provider registry for classifying video links."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .base import VideoProvider


class ProviderRegistry:
    """
    Singleton registry of video providers.

    Registration order matters: the first provider whose URL patterns
    match a link wins.
    """

    _instance: Optional["ProviderRegistry"] = None

    def __new__(cls) -> "ProviderRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._providers = {}
        return cls._instance

    def __init__(self) -> None:
        # Attributes initialized in __new__ for singleton pattern
        pass

    @property
    def providers(self) -> dict[str, "VideoProvider"]:
        """Get all registered providers, in registration order."""
        return self._providers

    def register(self, provider: "VideoProvider") -> None:
        """
        Register a provider under its source type.

        Args:
            provider: Provider instance with source_type defined.
        """
        self._providers[provider.source_type.lower()] = provider

    def get_provider(self, source_type: str) -> Optional["VideoProvider"]:
        """
        Get the provider for a source type.

        Args:
            source_type: Source type identifier (e.g., "youtube").

        Returns:
            Provider instance, or None if none registered.
        """
        return self._providers.get(source_type.lower())

    def classify(self, source_url: str) -> Optional[str]:
        """
        Identify which provider a link belongs to.

        Args:
            source_url: Any URL string; malformed input simply does not match.

        Returns:
            Source type of the first matching provider, or None.
        """
        if not source_url:
            return None
        for source_type, provider in self._providers.items():
            if provider.can_handle_source(source_url):
                return source_type
        return None

    def list_supported_sources(self) -> list[str]:
        """List registered source types in matching order."""
        return list(self._providers.keys())


# Global singleton instance
provider_registry = ProviderRegistry()


def register_provider(provider: "VideoProvider") -> None:
    """
    Register a provider in the global registry.

    Args:
        provider: Provider instance to register.
    """
    provider_registry.register(provider)


def classify(source_url: str) -> Optional[str]:
    """Classify a link using the global registry."""
    return provider_registry.classify(source_url)
