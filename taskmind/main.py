"""
Task Management MCP Server.

Main entry point. Serves MCP over HTTP (uvicorn) or over stdio depending
on MCP_TRANSPORT. All application wiring is in app/factory.py.
"""
import sys
import logging

import uvicorn

from taskmind.config import get_settings
from taskmind.middleware.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def run_http(settings) -> None:
    from taskmind.app import create_app

    app = create_app()
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
        timeout_keep_alive=30,
        timeout_graceful_shutdown=30,
    )
    server = uvicorn.Server(config)
    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, shutting down...")
    finally:
        logger.info("Service stopped")


def run_stdio(settings) -> None:
    from taskmind.dependencies.services import get_services
    from taskmind.mcp.stdio import run_stdio_server
    from taskmind.tracing import setup_tracing

    setup_tracing(settings)
    run_stdio_server(get_services().registry)


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, stream=sys.stderr)

    if settings.transport == "stdio":
        logger.info("Starting MCP server on stdio")
        run_stdio(settings)
    elif settings.transport == "http":
        logger.info(f"Starting MCP server on http://{settings.host}:{settings.port}")
        run_http(settings)
    else:
        logger.error(f"Unknown MCP_TRANSPORT '{settings.transport}'; expected 'http' or 'stdio'")
        sys.exit(2)


if __name__ == "__main__":
    main()
