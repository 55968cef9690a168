"""MCP tools for ssh_registry."""

from ssh_registry.tools.registry import repair_keys, upsert_host

__all__ = ["repair_keys", "upsert_host"]
