"""ssh_registry FastMCP server.

Thin wrapper exposing the host registry as MCP tools and resources.
All business logic lives in services/.
"""

import logging

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from ssh_registry.config import Settings
from ssh_registry.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from ssh_registry.resources import list_hosts_resource
from ssh_registry.services import get_settings
from ssh_registry.tools import repair_keys, upsert_host

logger = logging.getLogger(__name__)


def create_server() -> FastMCP:
    """Create and configure the MCP server.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("ssh_registry")

    # First added = innermost
    server.add_middleware(ErrorHandlingMiddleware())
    server.add_middleware(LoggingMiddleware())

    server.tool()(upsert_host)
    server.tool()(repair_keys)
    server.resource("hosts://list")(list_hosts_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


def run_server(settings: Settings | None = None) -> None:
    """Run the MCP server with the configured transport."""
    settings = settings or get_settings()
    server = create_server()

    if settings.transport == "http":
        logger.info(
            "Starting ssh_registry server (transport=http, host=%s, port=%d)",
            settings.http_host,
            settings.http_port,
        )
        server.run(transport="http", host=settings.http_host, port=settings.http_port)
    else:
        logger.info("Starting ssh_registry server (transport=stdio)")
        server.run(transport="stdio")
