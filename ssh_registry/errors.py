"""Registry error types."""

from pathlib import Path


class RegistryError(Exception):
    """Base class for host registry failures."""


class InvalidHostEntryError(RegistryError, ValueError):
    """Host entry arguments cannot be written to an SSH config."""


class ConfigWriteError(RegistryError):
    """SSH config file or its directory could not be read or written."""

    def __init__(self, path: Path, original_error: Exception):
        """Initialize config write error.

        Args:
            path: Config file path
            original_error: Underlying OS error
        """
        self.path = path
        self.original_error = original_error
        super().__init__(f"Cannot update SSH config {path}: {original_error}")


class KeyGenerationError(RegistryError):
    """Keypair could not be generated or written."""

    def __init__(self, path: Path, original_error: Exception):
        """Initialize key generation error.

        Args:
            path: Private key path
            original_error: Underlying asyncssh or OS error
        """
        self.path = path
        self.original_error = original_error
        super().__init__(f"Cannot generate key {path}: {original_error}")
