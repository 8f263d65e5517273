"""
Command line entry point of the VFS Tools MCP server.

Loads the `.env` file, configures logging from `ServiceConfig` and starts the
FastMCP application on the configured transport.
"""

import logging
import sys

from dotenv import load_dotenv

from vfs_tools_mcp.utils.config import ServiceConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def configure_logging(config: ServiceConfig) -> None:
    """Configure root logging once for the whole process."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        # stdout carries the MCP protocol for the stdio transport
        stream=sys.stderr,
    )


def setup_environment() -> ServiceConfig:
    """
    Load `.env` into the process environment and configure logging.

    The configuration is read through the cached provider, so the server
    module picks up the same instance afterwards.

    Returns:
        The loaded service configuration.
    """
    load_dotenv()
    # Imported after load_dotenv so the cached config sees the .env values.
    from vfs_tools_mcp.utils.dependencies import get_base_config

    config = get_base_config()
    configure_logging(config)
    logger.info(
        "Configuration loaded: history=%s steps=%s log_level=%s",
        config.VFS_MAX_HISTORY,
        config.MAX_TOOL_STEPS,
        config.LOG_LEVEL,
    )
    return config


def run_server() -> None:
    """Set up the environment and run the MCP server until it exits."""
    try:
        config = setup_environment()
    except ValueError as e:
        # pydantic.ValidationError subclasses ValueError
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    from vfs_tools_mcp.server import mcp_app

    logger.info("--- VFS Tools MCP Server ---")
    logger.info("Starting server with transport: %s", config.MCP_TRANSPORT)
    if config.MCP_TRANSPORT != "stdio":
        logger.info("Server will listen on: %s:%s", config.MCP_HOST, config.MCP_PORT)

    mcp_app.run(transport=config.MCP_TRANSPORT)


if __name__ == "__main__":
    run_server()
