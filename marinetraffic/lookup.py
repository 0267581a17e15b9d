# =============================================================================
# marinetraffic/lookup.py  —  Combined Position + Details Lookup
# =============================================================================
#
# The vessel:// resource shows everything we know about a vessel, which
# means TWO API calls: position and details.  They're independent, so we run
# them at the same time with asyncio.gather().
#
# PER-BRANCH OUTCOMES:
#   A vessel that's laid up may have details but no recent position; a new
#   build may have a position but no details yet.  One branch failing must
#   not throw away the other branch's data.  So each branch is wrapped in an
#   Outcome (value OR error), and the CALLER decides what "good enough" is.
#   The vessel resource's rule: fail only if BOTH branches failed.
#
# Every exception a branch raises is captured into its Outcome, including a
# malformed payload rejected by from_api().  Cancellation still propagates.
# =============================================================================

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

from marinetraffic.client import MarineTrafficClient
from marinetraffic.errors import TrackingError
from marinetraffic.identifiers import VesselIdentifier
from marinetraffic.models import VesselDetails, VesselPosition

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """The result of one branch: exactly one of value / error is set."""

    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class VesselLookup:
    identifier: VesselIdentifier
    position: Outcome[VesselPosition]
    details: Outcome[VesselDetails]

    @property
    def all_failed(self) -> bool:
        return not self.position.ok and not self.details.ok


async def _capture(label: str, call: Awaitable[T]) -> Outcome[T]:
    try:
        return Outcome(value=await call)
    except TrackingError as exc:
        logger.warning(f"Error fetching vessel {label}: {exc.message}")
        return Outcome(error=exc)
    except Exception as exc:
        logger.exception(f"Unexpected error fetching vessel {label}")
        return Outcome(error=exc)


async def fetch_vessel(client: MarineTrafficClient, identifier: VesselIdentifier) -> VesselLookup:
    """Fetch position and details concurrently, keeping each branch's outcome."""
    position, details = await asyncio.gather(
        _capture("position", client.get_vessel_position(identifier)),
        _capture("details", client.get_vessel_details(identifier)),
    )
    return VesselLookup(identifier=identifier, position=position, details=details)
