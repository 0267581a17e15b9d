import httpx
import pytest

from marinetraffic.client import MarineTrafficClient

POSITION = {
    "mmsi": "353136000",
    "imo": "9811000",
    "ship_name": "EVER GIVEN",
    "latitude": "30.0123",
    "longitude": "32.5498",
    "speed": "12.5",
    "heading": "180",
    "course": "178.4",
    "status": "Under Way Using Engine",
    "timestamp": "2024-05-01T12:00:00",
    "ship_type": "70",
    "destination": "ROTTERDAM",
    "eta": "2024-05-10T08:00:00",
}

DETAILS = {
    "mmsi": "353136000",
    "imo": "9811000",
    "name": "EVER GIVEN",
    "ship_type": "70",
    "callsign": "H3RC",
    "flag": "PA",
    "gross_tonnage": "219079",
    "summer_dwt": "199629",
    "length_overall": "399.94",
    "breadth_extreme": "58.8",
    "year_built": "2018",
    "home_port": "PANAMA",
}


def ok(payload) -> httpx.Response:
    return httpx.Response(200, json=payload)


def status(code: int, body: str = "") -> httpx.Response:
    return httpx.Response(code, text=body)


class FakeUpstream:
    """Serves queued responses in order and records every request.

    A queued item may be an httpx.Response or an exception to raise.
    """

    def __init__(self, *responses):
        self.queue = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.queue:
            raise AssertionError(f"unexpected request: {request.url}")
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class RoutedUpstream:
    """Answers position and details requests independently."""

    def __init__(self, position, details):
        self.routes = {"position": position, "details": details}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = "position" if request.url.path.endswith("/position") else "details"
        item = self.routes[route]
        if isinstance(item, Exception):
            raise item
        return item


class SleepRecorder:
    """Stands in for asyncio.sleep; remembers the delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
async def make_client(sleeps):
    clients = []

    def factory(upstream, **kwargs) -> MarineTrafficClient:
        client = MarineTrafficClient(
            "test-key",
            transport=httpx.MockTransport(upstream),
            sleep=sleeps,
            **kwargs,
        )
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.aclose()
