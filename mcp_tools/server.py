# =============================================================================
# mcp_tools/server.py  —  FastMCP Server (ALL tools and resources in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the MCP tools and resources that expose MarineTraffic.  Each one
#   is a thin wrapper around a marinetraffic/vessels.py function.  It handles
#   logging and turns classified errors into readable responses.
#
# HOW IT WORKS (the flow):
#   1. The MCP client decides it needs vessel data
#   2. It calls a tool by name (e.g., "get_vessel_position") or reads a
#      resource URI (e.g., "vessel://123456789")
#   3. FastMCP routes the call to the decorated function below
#   4. The function calls marinetraffic/ logic and returns the result
#
# TOOLS:
#   get_vessel_position   → latest AIS position for one vessel
#   get_vessel_details    → registry particulars for one vessel
#   search_vessels        → search by name / MMSI / IMO / ship type
#   get_vessels_in_area   → every vessel inside a circle
#
# RESOURCES:
#   vessel://{identifier}                  → position + details merged
#   vessels://area/{lat}/{lon}/{radius}    → area listing as JSON
#
# ERRORS:
#   Tools never raise for a classified failure.  They return a dict with
#   "error", "kind" and "category" so the caller can tell a bad identifier
#   (re-ask the user) from a bad API key (fix the config) from an upstream
#   outage (try later).  Resources have no such payload shape, so they raise
#   ResourceError with the same message.
#
# RUNNING THIS SERVER:
#     a) python main.py
#     b) python -m mcp_tools.server
#   Both speak MCP over stdio.
# =============================================================================

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ResourceError

# --- Import core logic ---
# The tools layer depends on marinetraffic/ and nothing else.
from marinetraffic import vessels
from marinetraffic.client import MarineTrafficClient
from marinetraffic.config import load_settings
from marinetraffic.errors import TrackingError

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because MCP uses STDOUT as its transport.  A log line on
# stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status/progress messages
#     - RED for classified errors
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logger = logging.getLogger("mcp_tools")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(name: str, **params) -> None:
    """Log an incoming call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(name: str, result: dict) -> dict:
    """Log the response as compact JSON in GREEN, then return it."""
    logger.info(
        f"{_GREEN}  ← {name} response: "
        f"{json.dumps(result, separators=(',', ':'), ensure_ascii=False)}{_RESET}"
    )
    return result


def _log_error(name: str, error: TrackingError) -> dict:
    """Log a classified failure in RED and return its tool-response dict."""
    logger.warning(f"{_RED}  ✗ {name} failed [{error.kind.value}]: {error.message}{_RESET}")
    return error.to_dict()


# =============================================================================
# The shared API client
# =============================================================================
# Created on first use and then kept for the life of the process.  If the
# API key is missing, every call reports MissingCredential (a configuration
# error) instead of the server refusing to start, and the server can still
# list its tools.
#
# A client built here is closed when the server shuts down.  A client handed
# in through set_client() belongs to whoever handed it in.
# =============================================================================
_client: Optional[MarineTrafficClient] = None
_owns_client = False


def get_client() -> MarineTrafficClient:
    global _client, _owns_client
    if _client is None:
        settings = load_settings()
        _client = MarineTrafficClient(
            settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )
        _owns_client = True
    return _client


def set_client(client: Optional[MarineTrafficClient]) -> None:
    """Replace the shared client (used by tests)."""
    global _client, _owns_client
    _client = client
    _owns_client = False


async def close_client() -> None:
    """Close the shared client if this module created it."""
    global _client, _owns_client
    if _client is not None and _owns_client:
        logger.info("Closing MarineTraffic client")
        await _client.aclose()
        _client = None
    _owns_client = False


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict]:
    try:
        yield {}
    finally:
        await close_client()


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("marinetraffic-server", lifespan=lifespan)


# =============================================================================
# TOOL 1: get_vessel_position
# =============================================================================
@mcp.tool()
async def get_vessel_position(identifier: str) -> dict:
    """Get the real-time position of a vessel by MMSI or IMO number.

    Args:
        identifier: MMSI (9 digits) or IMO number (7 digits, optionally
                    written as "IMO1234567").

    Returns:
        A dict with mmsi, imo, name, position (latitude/longitude), speed
        (knots), course, heading, status, last_update (UTC ISO-8601),
        destination and eta.

        On failure: a dict with "error", "kind" and "category".
    """
    _log_request("get_vessel_position", identifier=identifier)
    try:
        result = await vessels.vessel_position(get_client(), identifier)
    except TrackingError as exc:
        return _log_error("get_vessel_position", exc)
    _log_status(f"Position for {result['name']} ({result['mmsi']})")
    return _log_response("get_vessel_position", result)


# =============================================================================
# TOOL 2: get_vessel_details
# =============================================================================
@mcp.tool()
async def get_vessel_details(identifier: str) -> dict:
    """Get detailed information about a vessel by MMSI or IMO number.

    Args:
        identifier: MMSI (9 digits) or IMO number (7 digits, optionally
                    written as "IMO1234567").

    Returns:
        A dict with mmsi, imo, name, vessel_type (code + name), callsign,
        flag, dimensions (metres), tonnage (GT / t), year_built and
        home_port.

        On failure: a dict with "error", "kind" and "category".
    """
    _log_request("get_vessel_details", identifier=identifier)
    try:
        result = await vessels.vessel_details(get_client(), identifier)
    except TrackingError as exc:
        return _log_error("get_vessel_details", exc)
    _log_status(f"Details for {result['name']} ({result['vessel_type']['name']})")
    return _log_response("get_vessel_details", result)


# =============================================================================
# TOOL 3: search_vessels
# =============================================================================
@mcp.tool()
async def search_vessels(
    vessel_name: Optional[str] = None,
    mmsi: Optional[str] = None,
    imo: Optional[str] = None,
    ship_type: Optional[int] = None,
) -> dict:
    """Search for vessels by name, MMSI, IMO, or vessel type.

    At least ONE of the parameters must be given.

    Args:
        vessel_name: Name (or part of a name) of the vessel.
        mmsi: 9-digit MMSI number.
        imo: 7-digit IMO number, optionally prefixed with "IMO".
        ship_type: AIS ship type code (e.g., 7 for cargo, 8 for tanker).

    Returns:
        A dict with "count" and "vessels" (each with mmsi, imo, name,
        position, speed, course, status, type, destination, eta and
        last_update), in the order MarineTraffic returned them.
    """
    _log_request("search_vessels", vessel_name=vessel_name, mmsi=mmsi,
                 imo=imo, ship_type=ship_type)
    try:
        result = await vessels.search(
            get_client(),
            vessel_name=vessel_name,
            mmsi=mmsi,
            imo=imo,
            ship_type=ship_type,
        )
    except TrackingError as exc:
        return _log_error("search_vessels", exc)
    _log_status(f"Found {result['count']} vessels")
    return _log_response("search_vessels", result)


# =============================================================================
# TOOL 4: get_vessels_in_area
# =============================================================================
@mcp.tool()
async def get_vessels_in_area(
    latitude: float,
    longitude: float,
    radius: float,
    min_ship_type: Optional[int] = None,
    max_ship_type: Optional[int] = None,
) -> dict:
    """Get vessels in a circular geographic area.

    Args:
        latitude: Center latitude of the area (-90 to 90).
        longitude: Center longitude of the area (-180 to 180).
        radius: Radius of the area in nautical miles (1 to 100).
        min_ship_type: Only include ship type codes >= this.
        max_ship_type: Only include ship type codes <= this.

    Returns:
        A dict with "area" (center + radius), "count" and "vessels".
    """
    _log_request("get_vessels_in_area", latitude=latitude, longitude=longitude,
                 radius=radius, min_ship_type=min_ship_type,
                 max_ship_type=max_ship_type)
    try:
        result = await vessels.vessels_in_area(
            get_client(),
            latitude,
            longitude,
            radius,
            min_ship_type=min_ship_type,
            max_ship_type=max_ship_type,
        )
    except TrackingError as exc:
        return _log_error("get_vessels_in_area", exc)
    _log_status(f"Found {result['count']} vessels within {radius} nm")
    return _log_response("get_vessels_in_area", result)


# =============================================================================
# RESOURCES
# =============================================================================
@mcp.resource(
    "vessel://{identifier}",
    name="Vessel Information",
    description="Information about a vessel by MMSI or IMO number",
    mime_type="application/json",
)
async def vessel_resource(identifier: str) -> str:
    _log_request("vessel://", identifier=identifier)
    try:
        return await vessels.vessel_resource(get_client(), identifier)
    except TrackingError as exc:
        _log_error("vessel://", exc)
        raise ResourceError(exc.message) from exc


@mcp.resource(
    "vessels://area/{lat}/{lon}/{radius}",
    name="Vessels in Area",
    description="List of vessels in a specified geographic area",
    mime_type="application/json",
)
async def vessels_area_resource(lat: str, lon: str, radius: str) -> str:
    _log_request("vessels://area", lat=lat, lon=lon, radius=radius)
    try:
        return await vessels.vessels_area_resource(get_client(), lat, lon, radius)
    except TrackingError as exc:
        _log_error("vessels://area", exc)
        raise ResourceError(exc.message) from exc


# =============================================================================
# Server entry point
# =============================================================================
def run() -> None:
    configure_logging(load_settings().log_level)
    logger.info("MarineTraffic MCP server running on stdio")
    mcp.run()


if __name__ == "__main__":
    run()
