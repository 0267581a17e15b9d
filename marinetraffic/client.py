# =============================================================================
# marinetraffic/client.py  —  MarineTraffic API Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps the four read-only MarineTraffic endpoints we use behind one async
#   client.  Every request goes through the same _get() method, which is
#   where the interesting behavior lives:
#
#     1. AUTH:    the API key is attached as the `apiKey` query parameter to
#                 EVERY request (set once on the httpx client).  Callers
#                 never pass it.
#     2. TIMEOUT: 10 seconds per attempt, start to finish (not per phase).
#     3. RETRY:   HTTP 429 (rate limited) is retried up to 3 times, waiting
#                 1s, 2s, then 4s.  Nothing else is retried.
#     4. ERRORS:  every failure is turned into one of the classes in
#                 errors.py.  Callers never see a raw httpx exception.
#
# CLASSIFICATION ORDER (first match wins):
#     429 with retries left  → sleep and try again
#     401                    → InvalidCredential
#     any other non-2xx      → UpstreamError(status, body)
#                              (includes the final 429 once retries run out)
#     no response at all     → TransportError (connect failure, timeout)
#     anything else          → propagated unchanged
#
# CONCURRENCY:
#   The client holds no mutable state besides the httpx connection pool.
#   The retry counter is a local variable, so concurrent calls never share
#   it, and the backoff is an `await`, so a sleeping retry never blocks the
#   other requests in flight.
# =============================================================================

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from marinetraffic.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from marinetraffic.errors import (
    InvalidCredential,
    MissingCredential,
    TransportError,
    UpstreamError,
)
from marinetraffic.identifiers import VesselIdentifier, resolve_identifier
from marinetraffic.models import AreaQuery, SearchCriteria, VesselDetails, VesselPosition

logger = logging.getLogger(__name__)

# MarineTraffic endpoint paths (relative to the base URL).
# The version segments differ per endpoint.
ENDPOINTS = {
    "position": "/exportvessel/v:5/position",
    "details": "/exportvessel/v:4/vesseldetails",
    "search": "/exportvessel/v:5/ps01",
    "area": "/exportvessel/v:5/ps02",
}

MAX_RETRIES = 3
RETRY_BASE_DELAY_SECONDS = 1.0

Sleep = Callable[[float], Awaitable[Any]]


class MarineTrafficClient:
    """Async client for the MarineTraffic export API.

    Create ONE of these per process and share it: it owns an httpx
    connection pool, and nothing about it changes after construction.

    Args:
        api_key: The MarineTraffic API key.  Required.
        base_url: API root.  Defaults to production.
        timeout: Per-attempt timeout in seconds.
        max_retries: How many times a 429 is retried (attempts = retries + 1).
        retry_base_delay: Delay before the first retry; doubles each time.
        transport: Optional httpx transport (tests pass a MockTransport).
        sleep: The coroutine used for backoff waits (tests pass a recorder).

    Raises:
        MissingCredential: if api_key is empty or None.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = MAX_RETRIES,
        retry_base_delay: float = RETRY_BASE_DELAY_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        if not api_key:
            raise MissingCredential()

        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self._sleep = sleep
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            params={"apiKey": api_key},
            transport=transport,
        )

    async def __aenter__(self) -> "MarineTrafficClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # The one place requests are made
    # -------------------------------------------------------------------------
    def retry_delay(self, retry_number: int) -> float:
        """Seconds to wait before retry N (1-based): 1s, 2s, 4s, ..."""
        return self.retry_base_delay * 2 ** (retry_number - 1)

    async def _get(self, endpoint: str, params: dict[str, Any]) -> httpx.Response:
        retries = 0
        while True:
            try:
                # httpx times each phase separately; this caps the whole attempt.
                response = await asyncio.wait_for(
                    self._http.get(endpoint, params=params), self.timeout
                )
            except asyncio.TimeoutError as exc:
                logger.warning(f"No response from {endpoint} within {self.timeout:.1f}s")
                raise TransportError() from exc
            except httpx.TransportError as exc:
                logger.warning(f"No response from {endpoint}: {exc!r}")
                raise TransportError() from exc

            status = response.status_code

            if status == 429 and retries < self.max_retries:
                retries += 1
                delay = self.retry_delay(retries)
                logger.warning(
                    f"Rate limited on {endpoint}; retry {retries}/{self.max_retries} "
                    f"in {delay:.1f}s"
                )
                await self._sleep(delay)
                continue

            if status == 401:
                logger.error(f"MarineTraffic rejected the API key ({endpoint})")
                raise InvalidCredential()

            if not response.is_success:
                logger.warning(f"{endpoint} failed with HTTP {status}")
                raise UpstreamError(status, response.text)

            return response

    async def _get_one(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        # Single-vessel endpoints sometimes answer with a one-element list.
        response = await self._get(endpoint, params)
        payload = response.json()
        if isinstance(payload, list):
            if not payload:
                raise UpstreamError(
                    response.status_code,
                    response.text,
                    "MarineTraffic API returned no data",
                )
            payload = payload[0]
        return payload

    async def _get_many(self, endpoint: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        response = await self._get(endpoint, params)
        payload = response.json()
        if isinstance(payload, dict):
            return [payload]
        return payload or []

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------
    async def get_vessel_position(
        self, identifier: Union[VesselIdentifier, str]
    ) -> VesselPosition:
        """Latest position report for one vessel (by MMSI or IMO)."""
        vessel_id = _as_identifier(identifier)
        payload = await self._get_one(ENDPOINTS["position"], vessel_id.as_params())
        return VesselPosition.from_api(payload)

    async def get_vessel_details(
        self, identifier: Union[VesselIdentifier, str]
    ) -> VesselDetails:
        """Static particulars for one vessel (by MMSI or IMO)."""
        vessel_id = _as_identifier(identifier)
        payload = await self._get_one(ENDPOINTS["details"], vessel_id.as_params())
        return VesselDetails.from_api(payload)

    async def search_vessels(self, criteria: SearchCriteria) -> list[VesselPosition]:
        """Vessels matching the criteria, in the order the API returned them."""
        rows = await self._get_many(ENDPOINTS["search"], criteria.as_params())
        return [VesselPosition.from_api(row) for row in rows]

    async def get_vessels_in_area(self, area: AreaQuery) -> list[VesselPosition]:
        """Vessels currently inside a circle (radius in nautical miles)."""
        rows = await self._get_many(ENDPOINTS["area"], area.as_params())
        return [VesselPosition.from_api(row) for row in rows]


def _as_identifier(identifier: Union[VesselIdentifier, str]) -> VesselIdentifier:
    # Plain strings go through the same resolver the call sites use.
    if isinstance(identifier, VesselIdentifier):
        return identifier
    return resolve_identifier(identifier)
