"""MCP resources for ssh_registry."""

from ssh_registry.resources.hosts import list_hosts_resource

__all__ = ["list_hosts_resource"]
