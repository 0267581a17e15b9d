# =============================================================================
# main.py  —  Entry Point for the MarineTraffic MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Environment variables are loaded from .env (MARINETRAFFIC_API_KEY, ...)
#   2. Logging is configured to stderr
#   3. The FastMCP server starts and speaks MCP over stdin/stdout
#
# The MarineTraffic client is NOT created here.  It is created on the first
# tool call, so a missing API key shows up as a configuration error in the
# tool response instead of a server that silently dies on startup.
# =============================================================================

from dotenv import load_dotenv

# Load environment variables from .env file.
# This must happen BEFORE the server reads its settings.
load_dotenv()

from mcp_tools.server import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
