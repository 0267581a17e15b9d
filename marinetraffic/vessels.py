# =============================================================================
# marinetraffic/vessels.py  —  Vessel Queries (what the MCP tools call)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Each function here is one complete user-facing query:
#     1. VALIDATE the input (before any network call)
#     2. RESOLVE identifiers through the shared resolver
#     3. CALL the client
#     4. FORMAT the result for a human (or a model) to read
#
# ERRORS:
#   Every function raises TrackingError subclasses (see errors.py).
#   Validation errors are raised BEFORE the client is touched.
# =============================================================================

import json
import math
from datetime import datetime, timezone
from typing import Any, Optional

from marinetraffic.client import MarineTrafficClient
from marinetraffic.errors import InvalidParameters, VesselNotFound
from marinetraffic.formatting import (
    format_area,
    format_combined,
    format_details,
    format_position,
    format_vessel_summary,
)
from marinetraffic.identifiers import resolve_identifier
from marinetraffic.lookup import fetch_vessel
from marinetraffic.models import AreaQuery, SearchCriteria


async def vessel_position(client: MarineTrafficClient, identifier: str) -> dict[str, Any]:
    """Real-time position of a vessel by MMSI or IMO number."""
    vessel_id = resolve_identifier(identifier)
    position = await client.get_vessel_position(vessel_id)
    return format_position(position)


async def vessel_details(client: MarineTrafficClient, identifier: str) -> dict[str, Any]:
    """Registry details of a vessel by MMSI or IMO number."""
    vessel_id = resolve_identifier(identifier)
    details = await client.get_vessel_details(vessel_id)
    return format_details(details)


async def search(
    client: MarineTrafficClient,
    vessel_name: Optional[str] = None,
    mmsi: Optional[str] = None,
    imo: Optional[str] = None,
    ship_type: Optional[int] = None,
) -> dict[str, Any]:
    """Search by name, MMSI, IMO and/or ship type.

    At least one filter is required; MMSI must be 9 digits and IMO 7 digits
    (an "IMO" prefix is accepted and stripped).
    """
    criteria = SearchCriteria.build(
        vessel_name=vessel_name, mmsi=mmsi, imo=imo, ship_type=ship_type
    )
    vessels = await client.search_vessels(criteria)
    return {
        "count": len(vessels),
        "vessels": [format_vessel_summary(v) for v in vessels],
    }


async def vessels_in_area(
    client: MarineTrafficClient,
    latitude: float,
    longitude: float,
    radius: float,
    min_ship_type: Optional[int] = None,
    max_ship_type: Optional[int] = None,
) -> dict[str, Any]:
    """Vessels within `radius` nautical miles of a point."""
    area = AreaQuery(
        center_lat=latitude,
        center_lon=longitude,
        radius=radius,
        min_ship_type=min_ship_type,
        max_ship_type=max_ship_type,
    )
    vessels = await client.get_vessels_in_area(area)
    return format_area(latitude, longitude, radius, vessels)


# =============================================================================
# Resource readers (these return JSON TEXT, not dicts)
# =============================================================================
async def vessel_resource(client: MarineTrafficClient, identifier: str) -> str:
    """Everything we know about one vessel, position and details merged.

    Position and details are fetched in parallel.  Either may fail on its
    own; the resource only fails when both did.
    """
    vessel_id = resolve_identifier(identifier)
    lookup = await fetch_vessel(client, vessel_id)

    if lookup.all_failed:
        raise VesselNotFound(f"No data found for vessel with identifier: {identifier}")

    combined = format_combined(
        vessel_id.value, lookup.position.value, lookup.details.value
    )
    return json.dumps(combined, indent=2, ensure_ascii=False)


def _parse_coordinate(raw: Any, name: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidParameters(f"Invalid {name}. Must be a number") from None
    if math.isnan(value):
        raise InvalidParameters(f"Invalid {name}. Must be a number")
    return value


async def vessels_area_resource(
    client: MarineTrafficClient,
    lat: Any,
    lon: Any,
    radius: Any,
    now: Optional[datetime] = None,
) -> str:
    """Vessels in an area, for vessels://area/{lat}/{lon}/{radius}.

    The path segments arrive as strings, so they're parsed here first.
    """
    latitude = _parse_coordinate(lat, "latitude")
    longitude = _parse_coordinate(lon, "longitude")
    radius_nm = _parse_coordinate(radius, "radius")

    area = AreaQuery(center_lat=latitude, center_lon=longitude, radius=radius_nm)
    vessels = await client.get_vessels_in_area(area)

    generated_at = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    result = format_area(
        latitude,
        longitude,
        radius_nm,
        vessels,
        generated_at=generated_at.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )
    return json.dumps(result, indent=2, ensure_ascii=False)
