"""Services for ssh_registry."""

from ssh_registry.services.agent import AgentSession, parse_agent_output
from ssh_registry.services.clipboard import Clipboard
from ssh_registry.services.keys import KeyManager
from ssh_registry.services.registry import HostRegistry
from ssh_registry.services.state import (
    get_registry,
    get_settings,
    reset_state,
    set_registry,
    set_settings,
)

__all__ = [
    "AgentSession",
    "Clipboard",
    "HostRegistry",
    "KeyManager",
    "get_registry",
    "get_settings",
    "parse_agent_output",
    "reset_state",
    "set_registry",
    "set_settings",
]
