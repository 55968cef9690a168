"""Global state management for ssh_registry."""

from ssh_registry.config import Settings
from ssh_registry.services.registry import HostRegistry

# Global state (initialized on first access)
_settings: Settings | None = None
_registry: HostRegistry | None = None


def get_settings() -> Settings:
    """Get or create settings from the environment."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def get_registry() -> HostRegistry:
    """Get or create the host registry."""
    global _registry
    if _registry is None:
        _registry = HostRegistry(get_settings())
    return _registry


def reset_state() -> None:
    """Reset global state for testing.

    This function clears the singleton instances, allowing tests
    to start with fresh state. Should only be used in test fixtures.
    """
    global _settings, _registry
    _settings = None
    _registry = None


def set_settings(settings: Settings) -> None:
    """Set the global settings instance.

    Drops any registry built from previous settings.

    Args:
        settings: Settings instance to use globally.
    """
    global _settings, _registry
    _settings = settings
    _registry = None


def set_registry(registry: HostRegistry) -> None:
    """Set the global registry instance.

    Allows tests to inject a registry with mocked agent and clipboard.

    Args:
        registry: HostRegistry instance to use globally.
    """
    global _registry
    _registry = registry
