"""MCP tools wrapping the host registry."""

import logging

from fastmcp.exceptions import ToolError

from ssh_registry.errors import RegistryError
from ssh_registry.services import get_registry

logger = logging.getLogger(__name__)


async def upsert_host(alias: str, hostname: str, user: str, identity_file: str) -> str:
    """Add or replace an SSH host alias and make sure its key exists.

    Args:
        alias: Host alias, e.g. "github"
        hostname: Real host name, e.g. "github.com"
        user: Login user, usually "git"
        identity_file: Key file name under ~/.ssh or an absolute path

    Returns:
        Summary including the public key to register with the provider
    """
    registry = get_registry()
    try:
        result = await registry.upsert(alias, hostname, user, identity_file)
    except RegistryError as e:
        raise ToolError(str(e)) from e

    lines = [
        f"Host {alias} configured ({user}@{hostname})",
        f"Identity: {result.key.private_path}"
        + (" (generated)" if result.created else " (existing)"),
        f"Agent: {'loaded' if result.agent_loaded else 'not loaded'}",
    ]
    if result.public_key:
        lines += ["", "Public key:", result.public_key]
    return "\n".join(lines)


async def repair_keys() -> str:
    """Re-create and load every identity file referenced by the SSH config.

    Returns:
        One line per identity plus a summary
    """
    registry = get_registry()
    try:
        report = await registry.repair()
    except RegistryError as e:
        raise ToolError(str(e)) from e

    if not report.results and not report.failures:
        return "No IdentityFile entries found."

    lines = []
    for r in report.results:
        state = "generated" if r.created else "ok"
        agent = "loaded" if r.agent_loaded else "agent failed"
        lines.append(f"[{state}] {r.key.private_path} ({agent})")
    for path, error in report.failures.items():
        lines.append(f"[FAILED] {path}: {error}")

    lines.append("")
    lines.append(
        f"{len(report.results)} ensured, {len(report.created)} generated, "
        f"{len(report.failures)} failed"
    )
    return "\n".join(lines)
