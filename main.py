# =============================================================================
# main.py  -  Entry Point for the Immich MCP Tool Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Loads settings from the environment / .env (immich_core/config.py)
#   2. Sends logs to stderr (stdout belongs to the MCP protocol)
#   3. Probes the Immich instance once; a failed probe is logged as a
#      warning and the server still starts, so tools report the real error
#   4. Serves every tool over MCP stdio (immich_tools/mcp_server.py)
#
# REQUIRED ENVIRONMENT:
#   IMMICH_INSTANCE_URL   e.g. https://photos.example.com
#   IMMICH_API_KEY        created under Account Settings -> API Keys
# =============================================================================

import asyncio
import logging
import sys

from dotenv import load_dotenv

# Load .env BEFORE reading settings.
load_dotenv()

from immich_core.client import get_client, reset_client
from immich_core.config import get_settings
from immich_core.errors import ConfigurationError
from immich_tools.mcp_server import ALL_TOOLS, configure_logging, mcp

logger = logging.getLogger("immich_mcp")


async def check_connection() -> bool:
    """Run the start-up connection probe against the configured instance.

    The probe runs on its own event loop, so its client is closed and
    dropped afterwards; the server builds a fresh one on its own loop.
    """
    client = get_client()
    try:
        return await client.validate_connection()
    finally:
        await client.aclose()
        reset_client()


def main() -> int:
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        configure_logging("INFO")
        logger.error("%s", exc)
        return 1

    configure_logging(settings.log_level)
    logger.info("Starting Immich MCP server for %s", settings.immich_instance_url)
    logger.info("Cache TTL: %ss, %d tools registered", settings.cache_ttl, len(ALL_TOOLS))

    if not asyncio.run(check_connection()):
        logger.warning(
            "Could not validate the connection to %s; tools will fail until it is reachable",
            settings.immich_instance_url,
        )

    mcp.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
