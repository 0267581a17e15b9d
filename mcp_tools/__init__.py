# =============================================================================
# mcp_tools/__init__.py
# =============================================================================
# This package contains the FastMCP server.
#
# ARCHITECTURAL ROLE:
#   mcp_tools/ is the "translation layer" between MCP and the MarineTraffic
#   logic in marinetraffic/.  The server module:
#     1. Imports query functions from marinetraffic/vessels.py
#     2. Wraps them in FastMCP tool / resource decorators
#     3. Logs every call and response to stderr
#     4. Turns classified errors into error dicts (tools) or
#        ResourceErrors (resources)
#
# WHAT THE TOOLS DO NOT DO:
#   - They do NOT validate identifiers or coordinates (marinetraffic/ does)
#   - They do NOT talk HTTP (marinetraffic/client.py does)
#   - They do NOT format units (marinetraffic/formatting.py does)
# =============================================================================
