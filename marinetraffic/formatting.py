# =============================================================================
# marinetraffic/formatting.py  —  Human-Readable Payloads
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns VesselPosition / VesselDetails into the dicts the MCP tools return.
#   The model reading these doesn't need "ship_type": 70, it needs
#   "70 (Cargo)".  It doesn't need a bare 12.4, it needs "12.4 knots".
#
# CONVENTIONS:
#   - Missing identifiers / registry fields → "N/A"
#   - Missing names, statuses, voyage info  → "Unknown"
#   - Units are baked into the string: knots, °, m, GT, t
#   - Timestamps are normalized to UTC ISO-8601 ("...T12:00:00.000Z")
#
# Everything here is a pure function of its inputs.  Even the "generated at"
# timestamp for area resources is passed in by the caller.
# =============================================================================

from datetime import datetime, timezone
from typing import Any, Optional

from marinetraffic.models import VesselDetails, VesselPosition

NOT_AVAILABLE = "N/A"
UNKNOWN = "Unknown"


# =============================================================================
# AIS Ship Type Codes
# =============================================================================
# Codes 0-99 as defined by ITU-R M.1371.  The second digit of the 60-99
# ranges encodes the hazardous-cargo category, which we don't surface, so
# those decades collapse to one name each.
# =============================================================================
_SHIP_TYPE_NAMES: dict[int, str] = {
    0: "Not available",
    1: "Reserved",
    2: "Wing In Ground",
    3: "Special Category",
    4: "High-Speed Craft",
    5: "Special Category",
    6: "Passenger",
    7: "Cargo",
    8: "Tanker",
    9: "Other",
    30: "Fishing",
    31: "Towing",
    32: "Towing",
    33: "Dredging",
    34: "Diving",
    35: "Military",
    36: "Sailing",
    37: "Pleasure Craft",
    38: "Reserved",
    39: "Reserved",
    50: "Pilot Vessel",
    51: "Search and Rescue",
    52: "Tug",
    53: "Port Tender",
    54: "Anti-Pollution",
    55: "Law Enforcement",
    56: "Local Vessel",
    57: "Local Vessel",
    58: "Medical Transport",
    59: "Special Craft",
}
_SHIP_TYPE_NAMES.update({code: "Reserved" for code in range(10, 20)})
_SHIP_TYPE_NAMES.update({code: "Wing In Ground (WIG)" for code in range(20, 30)})
_SHIP_TYPE_NAMES.update({code: "High-Speed Craft" for code in range(40, 50)})
_SHIP_TYPE_NAMES.update({code: "Passenger" for code in range(60, 70)})
_SHIP_TYPE_NAMES.update({code: "Cargo" for code in range(70, 80)})
_SHIP_TYPE_NAMES.update({code: "Tanker" for code in range(80, 90)})
_SHIP_TYPE_NAMES.update({code: "Other" for code in range(90, 100)})


def ship_type_name(code: Optional[int]) -> str:
    """Human name for an AIS ship type code ("Unknown" if unmapped)."""
    if code is None:
        return UNKNOWN
    return _SHIP_TYPE_NAMES.get(code, UNKNOWN)


# =============================================================================
# Small helpers
# =============================================================================
def _number(value: float) -> str:
    """12.0 → "12", 12.5 → "12.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _with_unit(value: Optional[float], unit: str, default: str = NOT_AVAILABLE) -> str:
    if value is None:
        return default
    return f"{_number(value)}{unit}"


def iso_timestamp(raw: str) -> str:
    """Normalize an API timestamp to UTC ISO-8601 with milliseconds.

    MarineTraffic sends timestamps without a zone ("2024-05-01T12:00:00");
    those are UTC.  A timestamp we can't parse is returned unchanged rather
    than dropped.
    """
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return raw
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    utc = parsed.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# =============================================================================
# Position formats
# =============================================================================
def format_position(position: VesselPosition) -> dict[str, Any]:
    """Full single-vessel position view (the get_vessel_position tool)."""
    return {
        "mmsi": position.mmsi,
        "imo": position.imo or NOT_AVAILABLE,
        "name": position.ship_name or UNKNOWN,
        "position": {
            "latitude": position.latitude,
            "longitude": position.longitude,
        },
        "speed": f"{_number(position.speed)} knots",
        "course": _with_unit(position.course, "°"),
        "heading": _with_unit(position.heading, "°"),
        "status": position.status or UNKNOWN,
        "last_update": iso_timestamp(position.timestamp),
        "destination": position.destination or UNKNOWN,
        "eta": position.eta or UNKNOWN,
    }


def format_vessel_summary(position: VesselPosition) -> dict[str, Any]:
    """One row of a search / area listing."""
    if position.ship_type is None:
        vessel_type = UNKNOWN
    else:
        vessel_type = f"{position.ship_type} ({ship_type_name(position.ship_type)})"

    return {
        "mmsi": position.mmsi,
        "imo": position.imo or NOT_AVAILABLE,
        "name": position.ship_name or UNKNOWN,
        "position": {
            "latitude": position.latitude,
            "longitude": position.longitude,
        },
        "speed": f"{_number(position.speed)} knots",
        "course": _with_unit(position.course, "°"),
        "status": position.status or UNKNOWN,
        "type": vessel_type,
        "destination": position.destination or UNKNOWN,
        "eta": position.eta or UNKNOWN,
        "last_update": iso_timestamp(position.timestamp),
    }


def format_area(
    latitude: float,
    longitude: float,
    radius: float,
    vessels: list[VesselPosition],
    generated_at: Optional[str] = None,
) -> dict[str, Any]:
    """Listing of vessels in a circle, with the circle echoed back."""
    result: dict[str, Any] = {
        "area": {
            "center": {"latitude": latitude, "longitude": longitude},
            "radius": f"{_number(radius)} nautical miles",
        },
    }
    if generated_at is not None:
        result["timestamp"] = generated_at
    result["count"] = len(vessels)
    result["vessels"] = [format_vessel_summary(v) for v in vessels]
    return result


# =============================================================================
# Details formats
# =============================================================================
def _vessel_type(code: int, type_name: Optional[str]) -> dict[str, Any]:
    return {"code": code, "name": type_name or ship_type_name(code)}


def _particulars(details: VesselDetails) -> dict[str, Any]:
    return {
        "callsign": details.callsign or NOT_AVAILABLE,
        "flag": details.flag or NOT_AVAILABLE,
        "dimensions": {
            "length_overall": _with_unit(details.length_overall, " m"),
            "breadth_extreme": _with_unit(details.breadth_extreme, " m"),
        },
        "tonnage": {
            "gross": _with_unit(details.gross_tonnage, " GT"),
            "summer_dwt": _with_unit(details.summer_dwt, " t"),
        },
        "year_built": details.year_built if details.year_built is not None else NOT_AVAILABLE,
        "home_port": details.home_port or NOT_AVAILABLE,
    }


def format_details(details: VesselDetails) -> dict[str, Any]:
    """Full single-vessel details view (the get_vessel_details tool)."""
    result = {
        "mmsi": details.mmsi,
        "imo": details.imo or NOT_AVAILABLE,
        "name": details.name,
        "vessel_type": _vessel_type(details.ship_type, details.type_name),
    }
    result.update(_particulars(details))
    return result


# =============================================================================
# Combined view (the vessel:// resource)
# =============================================================================
def format_combined(
    identifier: str,
    position: Optional[VesselPosition],
    details: Optional[VesselDetails],
) -> dict[str, Any]:
    """Merge whatever we got from the position and details lookups.

    Either side may be None (that lookup failed); sections that depend on
    the missing side are left out instead of being filled with defaults.
    """
    if details is not None:
        vessel_type: Optional[dict] = _vessel_type(details.ship_type, details.type_name)
    elif position is not None and position.ship_type is not None:
        vessel_type = _vessel_type(position.ship_type, None)
    else:
        vessel_type = None

    result: dict[str, Any] = {
        "mmsi": (position and position.mmsi) or (details and details.mmsi) or identifier,
        "imo": (position and position.imo) or (details and details.imo) or NOT_AVAILABLE,
        "name": (position and position.ship_name) or (details and details.name) or UNKNOWN,
    }
    if vessel_type is not None:
        result["vessel_type"] = vessel_type

    if position is not None:
        result["position"] = {
            "latitude": position.latitude,
            "longitude": position.longitude,
            "speed": f"{_number(position.speed)} knots",
            "course": _with_unit(position.course, "°"),
            "heading": _with_unit(position.heading, "°"),
            "status": position.status or UNKNOWN,
            "last_update": iso_timestamp(position.timestamp),
        }

    if details is not None:
        result["details"] = _particulars(details)

    if position is not None:
        result["voyage"] = {
            "destination": position.destination or UNKNOWN,
            "eta": position.eta or UNKNOWN,
        }

    return result
