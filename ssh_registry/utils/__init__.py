"""Utilities for ssh_registry."""

from ssh_registry.utils.console import ColorfulFormatter, configure_logging
from ssh_registry.utils.ping import probe_host, probe_hosts
from ssh_registry.utils.platform import Platform, detect_platform
from ssh_registry.utils.validation import validate_alias, validate_hostname, validate_value

__all__ = [
    "ColorfulFormatter",
    "configure_logging",
    "detect_platform",
    "Platform",
    "probe_host",
    "probe_hosts",
    "validate_alias",
    "validate_hostname",
    "validate_value",
]
