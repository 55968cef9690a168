"""Locked read-modify-write access to the SSH config file."""

import fcntl
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from ssh_registry.config.document import SSHConfigDocument
from ssh_registry.errors import ConfigWriteError

logger = logging.getLogger(__name__)


class SSHConfigStore:
    """Owns the SSH config file on disk.

    Every mutation happens under an exclusive ``flock`` on the file itself
    and rewrites it in place, so symlinked configs keep pointing at the
    same target. Bytes that are not valid UTF-8 are carried through
    unchanged.
    """

    def __init__(self, config_path: Path):
        """Initialize store.

        Args:
            config_path: Path to SSH config file
        """
        self.config_path = Path(config_path)

    def ensure_exists(self) -> None:
        """Create the config directory (0700) and file (0600) if missing.

        Raises:
            ConfigWriteError: If either cannot be created
        """
        directory = self.config_path.parent
        try:
            if not directory.exists():
                directory.mkdir(mode=0o700, parents=True)
                logger.info("Created SSH directory %s", directory)
            if not self.config_path.exists():
                self.config_path.touch(mode=0o600)
                logger.info("Created SSH config %s", self.config_path)
            os.chmod(self.config_path, 0o600)
        except OSError as e:
            raise ConfigWriteError(self.config_path, e) from e

    def read(self) -> SSHConfigDocument:
        """Read the config under a shared lock.

        Returns:
            Parsed document, empty if the file does not exist

        Raises:
            ConfigWriteError: If the file exists but cannot be read
        """
        if not self.config_path.exists():
            return SSHConfigDocument()
        try:
            with open(self.config_path, encoding="utf-8", errors="surrogateescape") as fh:
                fcntl.flock(fh.fileno(), fcntl.LOCK_SH)
                try:
                    return SSHConfigDocument.parse(fh.read())
                finally:
                    fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
        except OSError as e:
            raise ConfigWriteError(self.config_path, e) from e

    @contextmanager
    def edit(self) -> Iterator[SSHConfigDocument]:
        """Yield the parsed config and write back changes on exit.

        The exclusive lock is held for the whole read-modify-write.
        Nothing is written if the body raises or leaves the text unchanged.

        Yields:
            Mutable document

        Raises:
            ConfigWriteError: If the file cannot be read or written
        """
        self.ensure_exists()
        try:
            fh = open(self.config_path, "r+", encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise ConfigWriteError(self.config_path, e) from e

        with fh:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
            try:
                original = fh.read()
                document = SSHConfigDocument.parse(original)
                yield document
                rendered = document.render()
                if rendered != original:
                    fh.seek(0)
                    fh.write(rendered)
                    fh.truncate()
                    fh.flush()
                    os.fsync(fh.fileno())
                    logger.debug("Wrote %d bytes to %s", len(rendered), self.config_path)
            except OSError as e:
                raise ConfigWriteError(self.config_path, e) from e
            finally:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
