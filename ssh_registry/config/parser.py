"""SSH config file parser.

Reads ~/.ssh/config and extracts concrete host aliases as HostEntry objects.
"""

import getpass
import logging
from pathlib import Path

from ssh_registry.config.document import SSHConfigDocument
from ssh_registry.models import HostEntry

logger = logging.getLogger(__name__)

WILDCARD_CHARS = ("*", "?", "!")


def expand_home(value: str, home: Path) -> Path:
    """Expand a leading ~ against an explicit home directory.

    Args:
        value: Path as written in the config
        home: Home directory to substitute

    Returns:
        Expanded path
    """
    if value == "~":
        return home
    if value.startswith("~/"):
        return home / value[2:]
    return Path(value)


class SSHConfigParser:
    """Parser for SSH config files.

    Reads SSH config format and extracts host definitions. ``Host *``
    values act as defaults for every later host.
    """

    def __init__(
        self,
        config_path: Path | str,
        home: Path | None = None,
        default_user: str | None = None,
    ):
        """Initialize SSH config parser.

        Args:
            config_path: Path to SSH config file
            home: Home directory for ~ expansion (default: current user's)
            default_user: User for hosts without a User line
        """
        self.config_path = Path(config_path)
        self.home = home if home is not None else Path.home()
        self.default_user = default_user

    def load(self) -> SSHConfigDocument:
        """Read the config file into a document.

        Returns:
            Parsed document, empty if the file is missing or unreadable
        """
        if not self.config_path.exists():
            logger.warning("SSH config not found: %s", self.config_path)
            return SSHConfigDocument()

        try:
            content = self.config_path.read_text(encoding="utf-8", errors="surrogateescape")
            logger.debug("Reading SSH config from %s", self.config_path)
        except OSError as e:
            logger.warning("Cannot read SSH config %s: %s", self.config_path, e)
            return SSHConfigDocument()

        return SSHConfigDocument.parse(content)

    def parse(self) -> dict[str, HostEntry]:
        """Parse SSH config and return host definitions.

        Returns:
            Dictionary mapping alias to HostEntry
        """
        document = self.load()
        hosts: dict[str, HostEntry] = {}
        global_defaults: dict[str, str] = {}

        for block in document.host_blocks():
            data = dict(block.directives())
            if block.patterns == ["*"]:
                global_defaults.update(data)
                continue

            merged = {**global_defaults, **data}
            if not merged.get("hostname"):
                continue

            identity = merged.get("identityfile")
            for alias in block.patterns:
                # Skip wildcards and negations
                if any(c in alias for c in WILDCARD_CHARS) or alias in hosts:
                    continue
                hosts[alias] = HostEntry(
                    alias=alias,
                    hostname=merged["hostname"],
                    user=merged.get("user") or self._default_user(),
                    identity_file=expand_home(identity, self.home) if identity else None,
                )

        logger.info("Parsed %d hosts from %s", len(hosts), self.config_path)
        return hosts

    def _default_user(self) -> str:
        if self.default_user is None:
            self.default_user = getpass.getuser()
        return self.default_user
