# =============================================================================
# marinetraffic/__init__.py
# =============================================================================
# This package contains ALL the logic for talking to the MarineTraffic API.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or anything from mcp_tools/.
#   The only third-party import is httpx (inside client.py).  Everything
#   else (identifier parsing, validation, formatting) is plain Python.
#
# LAYERS (in dependency order):
#   identifiers.py → models.py → client.py → formatting.py → lookup.py
#   → vessels.py (the call sites the MCP tools wrap)
# =============================================================================
