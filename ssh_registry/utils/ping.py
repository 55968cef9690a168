"""Reachability probe for configured SSH hosts."""

import asyncio
import logging

logger = logging.getLogger(__name__)

SSH_PORT = 22


async def probe_host(hostname: str, port: int = SSH_PORT, timeout: float = 2.0) -> bool:
    """Open and close a TCP connection to hostname:port.

    Args:
        hostname: Host to probe.
        port: TCP port, the SSH port by default.
        timeout: Seconds to wait for the connection.

    Returns:
        True if the connection was accepted.
    """
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(hostname, port),
            timeout=timeout,
        )
    except (TimeoutError, OSError) as e:
        logger.debug("Probe %s:%d failed: %s", hostname, port, str(e) or type(e).__name__)
        return False

    writer.close()
    await writer.wait_closed()
    return True


async def probe_hosts(
    hostnames: dict[str, str],
    port: int = SSH_PORT,
    timeout: float = 2.0,
) -> dict[str, bool]:
    """Probe several hosts at once.

    Args:
        hostnames: Mapping of alias to hostname.
        port: TCP port to probe on every host.
        timeout: Seconds to wait per host.

    Returns:
        Mapping of alias to reachability.
    """
    if not hostnames:
        return {}

    aliases = list(hostnames)
    results = await asyncio.gather(
        *(probe_host(hostnames[a], port, timeout) for a in aliases)
    )
    return dict(zip(aliases, results))
