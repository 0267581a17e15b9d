# =============================================================================
# marinetraffic/identifiers.py  —  MMSI / IMO Resolution
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a raw identifier string ("123456789", "IMO1234567", "1234567")
#   into a tagged VesselIdentifier: either an MMSI or an IMO number, never
#   both and never neither.
#
# THE RULES:
#   - Exactly 9 digits                       → MMSI
#   - Exactly 7 digits, optional "IMO" prefix → IMO (prefix stripped)
#   - Anything else                           → InvalidIdentifier
#
# This is the ONLY place identifier strings are parsed.  The client takes
# the tagged value, so a malformed string can never reach the API disguised
# as an `imo` parameter.
# =============================================================================

import re
from dataclasses import dataclass
from enum import Enum

from marinetraffic.errors import InvalidIdentifier

# ASCII digits only: \d would also match full-width and Arabic-Indic digits.
_MMSI_RE = re.compile(r"^[0-9]{9}$")
_IMO_RE = re.compile(r"^(?:IMO)?([0-9]{7})$")


class IdentifierKind(str, Enum):
    MMSI = "mmsi"
    IMO = "imo"


@dataclass(frozen=True)
class VesselIdentifier:
    """A vessel identifier that has already been classified and cleaned."""

    kind: IdentifierKind
    value: str

    def as_params(self) -> dict[str, str]:
        """The single query parameter this identifier becomes."""
        return {self.kind.value: self.value}

    def __str__(self) -> str:
        return self.value


def mmsi(value: str) -> VesselIdentifier:
    return VesselIdentifier(IdentifierKind.MMSI, value)


def imo(value: str) -> VesselIdentifier:
    return VesselIdentifier(IdentifierKind.IMO, value)


def resolve_identifier(raw: str) -> VesselIdentifier:
    """Classify a raw identifier as MMSI or IMO.

    Args:
        raw: The identifier as the user typed it.  Surrounding whitespace
             is ignored.

    Returns:
        A VesselIdentifier tagged MMSI or IMO.

    Raises:
        InvalidIdentifier: if the string is neither a 9-digit MMSI nor a
            7-digit IMO number (optionally prefixed with "IMO").
    """
    candidate = (raw or "").strip()

    if _MMSI_RE.match(candidate):
        return mmsi(candidate)

    match = _IMO_RE.match(candidate)
    if match:
        return imo(match.group(1))

    raise InvalidIdentifier(
        "Invalid vessel identifier. Must be a 9-digit MMSI number or IMO "
        'number (7 digits, optionally prefixed with "IMO")'
    )


def resolve_mmsi(raw: str) -> str:
    """Validate a value that must be an MMSI (used by search criteria)."""
    candidate = (raw or "").strip()
    if not _MMSI_RE.match(candidate):
        raise InvalidIdentifier("Invalid MMSI number. Must be a 9-digit number")
    return candidate


def resolve_imo(raw: str) -> str:
    """Validate a value that must be an IMO number; returns the bare digits."""
    match = _IMO_RE.match((raw or "").strip())
    if not match:
        raise InvalidIdentifier(
            'Invalid IMO number. Must be a 7-digit number, optionally prefixed with "IMO"'
        )
    return match.group(1)
