"""Data models for ssh_registry."""

from ssh_registry.models.host import HostEntry, KeyPair, KeyResult, RepairReport

__all__ = [
    "HostEntry",
    "KeyPair",
    "KeyResult",
    "RepairReport",
]
