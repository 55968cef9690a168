"""Application settings from environment variables.

Centralized environment variable parsing and validation. Everything the
registry would otherwise read ad hoc (home directory, agent socket) is
resolved here once and passed in explicitly.
"""

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Filesystem layout
    home: Path = field(default_factory=Path.home)
    config_path: Path | None = None
    key_dir: Path | None = None

    # Keys and agent
    agent_socket: str | None = None
    key_comment: str = field(default="ssh-registry")

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)
    log_file: Path | None = None

    # MCP transport
    transport: str = field(default="stdio")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    # Connectivity probe
    check_timeout: float = field(default=2.0)

    def __post_init__(self) -> None:
        """Derive config and key locations from home when not given."""
        self.home = Path(self.home)
        if self.config_path is None:
            self.config_path = self.home / ".ssh" / "config"
        if self.key_dir is None:
            self.key_dir = self.home / ".ssh"
        self.config_path = Path(self.config_path)
        self.key_dir = Path(self.key_dir)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        Returns:
            Settings instance with values from environment
        """
        home_env = os.getenv("SSH_REGISTRY_HOME")
        home = Path(os.path.expanduser(home_env)) if home_env else Path.home()

        return cls(
            home=home,
            config_path=cls._get_path("SSH_REGISTRY_CONFIG", home),
            key_dir=cls._get_path("SSH_REGISTRY_KEY_DIR", home),
            agent_socket=os.getenv("SSH_AUTH_SOCK") or None,
            key_comment=os.getenv("SSH_REGISTRY_KEY_COMMENT", "ssh-registry"),
            log_level=os.getenv("SSH_REGISTRY_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("SSH_REGISTRY_LOG_COLORS", True),
            log_file=cls._get_log_file(),
            transport=cls._get_transport(),
            http_host=os.getenv("SSH_REGISTRY_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("SSH_REGISTRY_HTTP_PORT", 8000),
            check_timeout=cls._get_float("SSH_REGISTRY_CHECK_TIMEOUT", 2.0),
        )

    @staticmethod
    def _get_path(key: str, home: Path) -> Path | None:
        """Get a path from environment, expanding ~ against home.

        Args:
            key: Environment variable key
            home: Home directory used for ~ expansion

        Returns:
            Path or None if not set
        """
        value = os.getenv(key, "").strip()
        if not value:
            return None
        if value == "~" or value.startswith("~/"):
            return home / value[2:]
        return Path(value)

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Get float from environment, falling back to default."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid float for %s: %s, using default %s", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_log_file() -> Path | None:
        """Get log file path.

        ``auto`` picks a timestamped file under /tmp.

        Returns:
            Log file path or None to log to the console only
        """
        value = os.getenv("SSH_REGISTRY_LOG_FILE", "").strip()
        if not value:
            return None
        if value.lower() == "auto":
            return Path("/tmp") / f"ssh_registry_{int(time.time())}.log"
        return Path(os.path.expanduser(value))

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("http" or "stdio")
        """
        transport = os.getenv("SSH_REGISTRY_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "stdio"
