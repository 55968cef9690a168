"""Configuration module for ssh_registry.

Provides focused classes for different configuration concerns:
- Settings: Environment variable configuration
- SSHConfigDocument: Lossless block view of an SSH config file
- SSHConfigParser: Extracts HostEntry objects from ~/.ssh/config
- SSHConfigStore: Locked read-modify-write of the config file
"""

from ssh_registry.config.document import ConfigBlock, SSHConfigDocument
from ssh_registry.config.parser import SSHConfigParser, expand_home
from ssh_registry.config.settings import Settings
from ssh_registry.config.store import SSHConfigStore

__all__ = [
    "ConfigBlock",
    "Settings",
    "SSHConfigDocument",
    "SSHConfigParser",
    "SSHConfigStore",
    "expand_home",
]
