"""Keypair generation with asyncssh."""

import logging
import os
from collections.abc import Callable
from datetime import date
from pathlib import Path

import asyncssh

from ssh_registry.errors import KeyGenerationError
from ssh_registry.models import KeyPair

logger = logging.getLogger(__name__)

KEY_ALGORITHM = "ssh-ed25519"

_KEY_ERRORS = (OSError, ValueError, asyncssh.KeyGenerationError, asyncssh.KeyExportError)


def _write_new(path: Path, data: bytes, mode: int) -> None:
    """Write data to a file that must not exist yet, created with mode."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
    with os.fdopen(fd, "wb") as fh:
        fh.write(data)


class KeyManager:
    """Creates passphrase-less keypairs on disk.

    Keys are created once and never rotated or deleted.
    """

    def __init__(
        self,
        comment_label: str = "ssh-registry",
        today: Callable[[], date] = date.today,
        algorithm: str = KEY_ALGORITHM,
    ):
        """Initialize key manager.

        Args:
            comment_label: Provenance label put in the key comment
            today: Clock used for the comment date
            algorithm: asyncssh key algorithm name
        """
        self.comment_label = comment_label
        self.today = today
        self.algorithm = algorithm

    def comment(self) -> str:
        """Key comment, e.g. ``ssh-registry-2026-10-18``."""
        return f"{self.comment_label}-{self.today():%Y-%m-%d}"

    def materialize(self, key: KeyPair) -> bool:
        """Make sure both halves of a keypair exist.

        Args:
            key: Keypair to check

        Returns:
            True if a new key was generated

        Raises:
            KeyGenerationError: If the key cannot be generated or written
        """
        try:
            present = key.exists()
            public_present = present and key.public_path.exists()
        except OSError as e:
            raise KeyGenerationError(key.private_path, e) from e

        if present:
            logger.info("Key %s already exists", key.private_path)
            if not public_present:
                self.derive_public(key)
            return False

        self.generate(key)
        return True

    def generate(self, key: KeyPair) -> None:
        """Generate a new keypair without passphrase.

        Raises:
            KeyGenerationError: On any generation or filesystem failure
        """
        path = key.private_path
        logger.info("Generating new %s key: %s", self.algorithm, path)
        try:
            if not path.parent.exists():
                path.parent.mkdir(mode=0o700, parents=True)
            private = asyncssh.generate_private_key(self.algorithm, comment=self.comment())
            _write_new(path, private.export_private_key("openssh"), 0o600)
            key.public_path.unlink(missing_ok=True)
            _write_new(key.public_path, private.export_public_key("openssh"), 0o644)
        except _KEY_ERRORS as e:
            raise KeyGenerationError(path, e) from e

    def derive_public(self, key: KeyPair) -> None:
        """Rebuild a missing .pub file from the private key.

        Raises:
            KeyGenerationError: If the private key cannot be read
        """
        logger.info("Public key missing, deriving %s", key.public_path)
        try:
            private = asyncssh.read_private_key(key.private_path)
            _write_new(key.public_path, private.export_public_key("openssh"), 0o644)
        except (asyncssh.KeyImportError, *_KEY_ERRORS) as e:
            raise KeyGenerationError(key.private_path, e) from e

    @staticmethod
    def read_public(key: KeyPair) -> str:
        """Return the public key line, or empty string if unreadable."""
        try:
            return key.public_path.read_text().strip()
        except OSError as e:
            logger.warning("Cannot read public key %s: %s", key.public_path, e)
            return ""
