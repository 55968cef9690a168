"""Host credential registry.

Maps SSH host aliases to HostName/User/IdentityFile stanzas in the client
config and makes sure every referenced identity file exists, is loaded into
the agent and has its public half shown to the operator.
"""

import logging
from pathlib import Path

from ssh_registry.config import Settings, SSHConfigParser, SSHConfigStore, expand_home
from ssh_registry.errors import KeyGenerationError
from ssh_registry.models import HostEntry, KeyPair, KeyResult, RepairReport
from ssh_registry.services.agent import AgentSession
from ssh_registry.services.clipboard import Clipboard
from ssh_registry.services.keys import KeyManager
from ssh_registry.utils.ping import probe_hosts
from ssh_registry.utils.platform import detect_platform
from ssh_registry.utils.validation import validate_alias, validate_hostname, validate_value

logger = logging.getLogger(__name__)


class HostRegistry:
    """Alias to connection-parameter registry backed by ~/.ssh/config."""

    def __init__(
        self,
        settings: Settings,
        keys: KeyManager | None = None,
        agent: AgentSession | None = None,
        clipboard: Clipboard | None = None,
    ):
        """Initialize registry.

        Args:
            settings: Resolved settings (home, config path, key dir, agent socket)
            keys: Key generator, built from settings if omitted
            agent: Agent session, built from settings if omitted
            clipboard: Clipboard writer, built for the detected platform if omitted
        """
        self.settings = settings
        self.store = SSHConfigStore(settings.config_path)
        self.keys = keys or KeyManager(comment_label=settings.key_comment)
        self.agent = agent or AgentSession(socket_path=settings.agent_socket)
        self.clipboard = clipboard or Clipboard(detect_platform())

    def resolve_identity(self, identity_file: str | Path) -> Path:
        """Resolve an identity file argument to an absolute path.

        Absolute paths are kept, ``~`` is expanded against the configured
        home, anything else is placed under the default key directory.
        """
        value = str(identity_file)
        if value == "~" or value.startswith("~/"):
            return expand_home(value, self.settings.home)
        path = Path(value)
        if path.is_absolute():
            return path
        return self.settings.key_dir / path

    async def upsert(
        self,
        alias: str,
        hostname: str,
        user: str,
        identity_file: str | Path,
    ) -> KeyResult:
        """Add or replace the stanza for alias, then ensure its key.

        Any existing stanza for alias is removed and the new one appended at
        the end of the file. The config write is not rolled back if key
        generation fails afterwards.

        Args:
            alias: Host alias
            hostname: Real host name or address
            user: Login user
            identity_file: Bare key file name or absolute path

        Returns:
            Result of ensuring the identity file

        Raises:
            InvalidHostEntryError: If any argument is unusable
            ConfigWriteError: If the config cannot be written
            KeyGenerationError: If the key cannot be generated
        """
        validate_alias(alias)
        validate_hostname(hostname)
        validate_value("User", user)
        validate_value("Identity file", str(identity_file))

        entry = HostEntry(
            alias=alias,
            hostname=hostname,
            user=user,
            identity_file=self.resolve_identity(identity_file),
        )

        with self.store.edit() as document:
            replaced = document.remove_alias(alias)
            document.append(entry)

        if replaced:
            logger.info("Replaced Host %s -> %s@%s", alias, user, hostname)
        else:
            logger.info("Added Host %s -> %s@%s", alias, user, hostname)

        result = await self.ensure_key(entry.identity_file)
        logger.info("Host %s configured", alias)
        return result

    async def ensure_key(self, identity_path: str | Path) -> KeyResult:
        """Make sure a key exists, is in the agent and is shown to the operator.

        Args:
            identity_path: Private key path

        Returns:
            What was done for the key

        Raises:
            KeyGenerationError: If the key cannot be generated
        """
        key = KeyPair(private_path=Path(identity_path))
        result = KeyResult(key=key)
        result.created = self.keys.materialize(key)
        result.agent_loaded = await self.agent.add_key(key.private_path)

        result.public_key = self.keys.read_public(key)
        if result.public_key:
            logger.info("Public key for %s: %s", key.private_path, result.public_key)
            result.copied_to_clipboard = await self.clipboard.copy(result.public_key + "\n")
            if not result.copied_to_clipboard:
                logger.warning("Copy this public key manually: %s", key.public_path)
        return result

    def identity_paths(self) -> list[Path]:
        """Identity files referenced by the config, first occurrence order."""
        seen: dict[Path, None] = {}
        for value in self.store.read().identity_files():
            seen.setdefault(expand_home(value, self.settings.home), None)
        return list(seen)

    async def repair(self) -> RepairReport:
        """Ensure every identity file referenced by the config.

        Failures are logged and collected; the sweep always visits every
        entry.

        Returns:
            Report of ensured keys and failures

        Raises:
            ConfigWriteError: If the config exists but cannot be read
        """
        paths = self.identity_paths()
        logger.info(
            "Repair: scanning %s (%d identity file(s))",
            self.settings.config_path,
            len(paths),
        )

        report = RepairReport()
        for path in paths:
            try:
                report.results.append(await self.ensure_key(path))
            except KeyGenerationError as e:
                logger.warning("Repair failed for %s: %s", path, e.original_error)
                report.failures[path] = str(e.original_error)

        logger.info(
            "Repair complete: %d ensured, %d created, %d failed",
            len(report.results),
            len(report.created),
            len(report.failures),
        )
        return report

    def list_hosts(self) -> dict[str, HostEntry]:
        """Concrete aliases with a HostName, keyed by alias."""
        parser = SSHConfigParser(self.settings.config_path, home=self.settings.home)
        return parser.parse()

    async def check_hosts(self, timeout: float | None = None) -> dict[str, bool]:
        """Probe SSH port reachability of every configured alias.

        Never raises; unreachable hosts are logged as warnings.
        """
        hosts = self.list_hosts()
        status = await probe_hosts(
            {alias: entry.hostname for alias, entry in hosts.items()},
            timeout=timeout if timeout is not None else self.settings.check_timeout,
        )
        for alias, online in sorted(status.items()):
            if online:
                logger.info("Host %s reachable", alias)
            else:
                logger.warning("Host %s (%s) unreachable", alias, hosts[alias].hostname)
        return status
