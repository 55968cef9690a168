"""Host entry and keypair data models."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class HostEntry:
    """One alias in the SSH client config."""

    alias: str
    hostname: str
    user: str
    identity_file: Path | None = None

    def to_stanza(self) -> list[str]:
        """Render the four-line config stanza for this entry.

        Returns:
            Lines without trailing newlines

        Raises:
            ValueError: If the entry has no identity file
        """
        if self.identity_file is None:
            raise ValueError(f"Host {self.alias} has no identity file")
        return [
            f"Host {self.alias}",
            f"    HostName {self.hostname}",
            f"    User {self.user}",
            f"    IdentityFile {self.identity_file}",
        ]


@dataclass(frozen=True)
class KeyPair:
    """Private key path and its public counterpart."""

    private_path: Path

    @property
    def public_path(self) -> Path:
        """Path of the public half (private path + .pub)."""
        return self.private_path.with_name(self.private_path.name + ".pub")

    def exists(self) -> bool:
        """Check if the private key is on disk."""
        return self.private_path.is_file()


@dataclass
class KeyResult:
    """Outcome of ensuring one identity file."""

    key: KeyPair
    created: bool = False
    agent_loaded: bool = False
    copied_to_clipboard: bool = False
    public_key: str = ""


@dataclass
class RepairReport:
    """Outcome of a repair sweep over the config file."""

    results: list[KeyResult] = field(default_factory=list)
    failures: dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True if every referenced identity was materialized."""
        return not self.failures

    @property
    def created(self) -> list[Path]:
        """Private key paths generated during the sweep."""
        return [r.key.private_path for r in self.results if r.created]
