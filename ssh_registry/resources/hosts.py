"""Hosts resource for listing registered SSH aliases."""

from ssh_registry.services import get_registry


async def list_hosts_resource() -> str:
    """List configured SSH aliases with reachability and identity files.

    Returns:
        Formatted host list
    """
    registry = get_registry()
    hosts = registry.list_hosts()

    if not hosts:
        return "No SSH hosts configured."

    online_status = await registry.check_hosts()

    lines = ["Registered SSH Hosts", "=" * 40, ""]

    for alias, entry in sorted(hosts.items()):
        online = online_status.get(alias)
        status_icon = "✓" if online else "✗"
        identity = entry.identity_file or "(agent default)"
        key_state = ""
        if entry.identity_file is not None and not entry.identity_file.exists():
            key_state = " [missing]"

        lines.append(f"[{status_icon}] {alias} ({'online' if online else 'offline'})")
        lines.append(f"    SSH:      {entry.user}@{entry.hostname}")
        lines.append(f"    Identity: {identity}{key_state}")
        lines.append("")

    return "\n".join(lines)
