# =============================================================================
# marinetraffic/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Two kinds of models live here:
#
#   1. QUERIES: what we send (SearchCriteria, AreaQuery).  These validate
#      themselves on construction, so an invalid query never reaches the
#      network.  Each one knows how to turn itself into query parameters.
#
#   2. RESPONSE ENTITIES: what we get back (VesselPosition, VesselDetails).
#      These are frozen: once built from an API payload they cannot change.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Optional, Union

from marinetraffic.errors import InvalidParameters
from marinetraffic.identifiers import resolve_imo, resolve_mmsi

Number = Union[int, float]


def _required(payload: dict[str, Any], key: str, entity: str) -> Any:
    value = payload.get(key)
    if value is None:
        raise ValueError(f"{entity} payload is missing required field '{key}'")
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _optional_float(value: Any) -> Optional[float]:
    # MarineTraffic sends most numbers as strings ("12.3").
    if value is None or value == "":
        return None
    return float(value)


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(float(value))


# -----------------------------------------------------------------------------
# SearchCriteria — filters for the search endpoint
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchCriteria:
    """Search filters.  At least one field must be set.

    Use SearchCriteria.build() for untrusted input: it validates the MMSI/IMO
    formats and strips the "IMO" prefix before the value is stored.
    """

    vessel_name: Optional[str] = None
    mmsi: Optional[str] = None
    imo: Optional[str] = None
    ship_type: Optional[int] = None

    def __post_init__(self):
        if self.is_empty():
            raise InvalidParameters(
                "At least one search parameter (vessel_name, mmsi, imo, or "
                "ship_type) must be provided"
            )

    def is_empty(self) -> bool:
        return (
            not self.vessel_name
            and not self.mmsi
            and not self.imo
            and self.ship_type is None
        )

    @classmethod
    def build(
        cls,
        vessel_name: Optional[str] = None,
        mmsi: Optional[str] = None,
        imo: Optional[str] = None,
        ship_type: Optional[int] = None,
    ) -> "SearchCriteria":
        # Empty-check first so "no criteria" wins over "bad MMSI".
        if not vessel_name and not mmsi and not imo and ship_type is None:
            return cls()
        return cls(
            vessel_name=vessel_name or None,
            mmsi=resolve_mmsi(mmsi) if mmsi else None,
            imo=resolve_imo(imo) if imo else None,
            ship_type=ship_type,
        )

    def as_params(self) -> dict[str, Any]:
        """Only the fields that were set, passed through as-is."""
        params = {
            "vessel_name": self.vessel_name,
            "mmsi": self.mmsi,
            "imo": self.imo,
            "ship_type": self.ship_type,
        }
        return {k: v for k, v in params.items() if v is not None}


# -----------------------------------------------------------------------------
# AreaQuery — a circle on the map
# -----------------------------------------------------------------------------
# Radius is in NAUTICAL MILES and is sent to the API unchanged.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class AreaQuery:
    """A circular search area plus an optional ship-type range."""

    center_lat: Number
    center_lon: Number
    radius: Number
    min_ship_type: Optional[int] = None
    max_ship_type: Optional[int] = None

    def __post_init__(self):
        # Written as "not (a <= x <= b)" so NaN is rejected too.
        if not (-90 <= self.center_lat <= 90):
            raise InvalidParameters("Invalid latitude. Must be between -90 and 90")
        if not (-180 <= self.center_lon <= 180):
            raise InvalidParameters("Invalid longitude. Must be between -180 and 180")
        if not (1 <= self.radius <= 100):
            raise InvalidParameters(
                "Invalid radius. Must be between 1 and 100 nautical miles"
            )

    def as_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "center_lat": self.center_lat,
            "center_lon": self.center_lon,
            "radius": self.radius,
        }
        if self.min_ship_type is not None:
            params["min_ship_type"] = self.min_ship_type
        if self.max_ship_type is not None:
            params["max_ship_type"] = self.max_ship_type
        return params


# -----------------------------------------------------------------------------
# VesselPosition — one AIS position report
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class VesselPosition:
    """Where a vessel was, how fast it was going, and where it's headed."""

    mmsi: str
    latitude: float
    longitude: float
    speed: float                        # knots
    timestamp: str                      # ISO-8601, as sent by the API
    imo: Optional[str] = None
    ship_name: Optional[str] = None
    heading: Optional[float] = None     # degrees
    course: Optional[float] = None      # degrees
    status: Optional[str] = None
    ship_type: Optional[int] = None     # AIS ship type code
    destination: Optional[str] = None
    eta: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "VesselPosition":
        entity = "VesselPosition"
        return cls(
            mmsi=str(_required(payload, "mmsi", entity)),
            latitude=float(_required(payload, "latitude", entity)),
            longitude=float(_required(payload, "longitude", entity)),
            speed=float(_required(payload, "speed", entity)),
            timestamp=str(_required(payload, "timestamp", entity)),
            imo=_optional_str(payload.get("imo")),
            ship_name=_optional_str(payload.get("ship_name")),
            heading=_optional_float(payload.get("heading")),
            course=_optional_float(payload.get("course")),
            status=_optional_str(payload.get("status")),
            ship_type=_optional_int(payload.get("ship_type")),
            destination=_optional_str(payload.get("destination")),
            eta=_optional_str(payload.get("eta")),
        )


# -----------------------------------------------------------------------------
# VesselDetails — the vessel's static particulars
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class VesselDetails:
    """Registry-style information: type, flag, size, age."""

    mmsi: str
    name: str
    ship_type: int
    imo: Optional[str] = None
    type_name: Optional[str] = None
    callsign: Optional[str] = None
    flag: Optional[str] = None
    gross_tonnage: Optional[float] = None
    summer_dwt: Optional[float] = None
    length_overall: Optional[float] = None    # metres
    breadth_extreme: Optional[float] = None   # metres
    year_built: Optional[int] = None
    home_port: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "VesselDetails":
        entity = "VesselDetails"
        return cls(
            mmsi=str(_required(payload, "mmsi", entity)),
            name=str(_required(payload, "name", entity)),
            ship_type=int(float(_required(payload, "ship_type", entity))),
            imo=_optional_str(payload.get("imo")),
            type_name=_optional_str(payload.get("type_name")),
            callsign=_optional_str(payload.get("callsign")),
            flag=_optional_str(payload.get("flag")),
            gross_tonnage=_optional_float(payload.get("gross_tonnage")),
            summer_dwt=_optional_float(payload.get("summer_dwt")),
            length_overall=_optional_float(payload.get("length_overall")),
            breadth_extreme=_optional_float(payload.get("breadth_extreme")),
            year_built=_optional_int(payload.get("year_built")),
            home_port=_optional_str(payload.get("home_port")),
        )
