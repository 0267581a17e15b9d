"""Tests for the vessel queries the MCP tools call."""

import json
from datetime import datetime, timezone

import pytest

from marinetraffic import vessels
from marinetraffic.errors import (
    InvalidIdentifier,
    InvalidParameters,
    UpstreamError,
    VesselNotFound,
)
from marinetraffic.identifiers import IdentifierKind, resolve_identifier
from marinetraffic.lookup import fetch_vessel
from tests.conftest import DETAILS, POSITION, FakeUpstream, RoutedUpstream, ok, status


class TestVesselPosition:

    async def test_formatted_position(self, make_client):
        upstream = FakeUpstream(ok(POSITION))
        result = await vessels.vessel_position(make_client(upstream), "IMO9811000")
        assert upstream.requests[0].url.params["imo"] == "9811000"
        assert result["name"] == "EVER GIVEN"
        assert result["last_update"] == "2024-05-01T12:00:00.000Z"

    async def test_invalid_identifier_makes_no_call(self, make_client):
        upstream = FakeUpstream()
        with pytest.raises(InvalidIdentifier):
            await vessels.vessel_position(make_client(upstream), "12345")
        assert upstream.requests == []

    async def test_full_width_digits_make_no_call(self, make_client):
        upstream = FakeUpstream()
        with pytest.raises(InvalidIdentifier):
            await vessels.vessel_position(make_client(upstream), "１２３４５６７８９")
        assert upstream.requests == []


class TestVesselDetails:

    async def test_formatted_details(self, make_client):
        upstream = FakeUpstream(ok(DETAILS))
        result = await vessels.vessel_details(make_client(upstream), "353136000")
        assert upstream.requests[0].url.params["mmsi"] == "353136000"
        assert result["vessel_type"] == {"code": 70, "name": "Cargo"}


class TestSearch:

    async def test_no_criteria_makes_no_call(self, make_client):
        upstream = FakeUpstream()
        with pytest.raises(InvalidParameters):
            await vessels.search(make_client(upstream))
        assert upstream.requests == []

    async def test_bad_mmsi_makes_no_call(self, make_client):
        upstream = FakeUpstream()
        with pytest.raises(InvalidIdentifier):
            await vessels.search(make_client(upstream), mmsi="1234")
        assert upstream.requests == []

    async def test_results(self, make_client):
        upstream = FakeUpstream(ok([POSITION]))
        result = await vessels.search(make_client(upstream), imo="IMO9811000")
        assert upstream.requests[0].url.params["imo"] == "9811000"
        assert result["count"] == 1
        assert result["vessels"][0]["type"] == "70 (Cargo)"


class TestVesselsInArea:

    async def test_golden_gate(self, make_client):
        upstream = FakeUpstream(ok([POSITION]))
        result = await vessels.vessels_in_area(
            make_client(upstream), 37.8199, -122.4783, 10
        )
        params = upstream.requests[0].url.params
        assert (params["center_lat"], params["center_lon"], params["radius"]) == (
            "37.8199", "-122.4783", "10",
        )
        assert result["area"] == {
            "center": {"latitude": 37.8199, "longitude": -122.4783},
            "radius": "10 nautical miles",
        }
        assert result["count"] == 1

    @pytest.mark.parametrize(
        "lat,lon,radius", [(91, 0, 10), (0, -181, 10), (0, 0, 0), (0, 0, 150)]
    )
    async def test_invalid_area_makes_no_call(self, make_client, lat, lon, radius):
        upstream = FakeUpstream()
        with pytest.raises(InvalidParameters):
            await vessels.vessels_in_area(make_client(upstream), lat, lon, radius)
        assert upstream.requests == []


class TestCombinedLookup:

    async def test_both_branches_succeed(self, make_client):
        upstream = RoutedUpstream(position=ok(POSITION), details=ok(DETAILS))
        lookup = await fetch_vessel(make_client(upstream), resolve_identifier("353136000"))
        assert lookup.position.ok and lookup.details.ok
        assert not lookup.all_failed
        assert len(upstream.requests) == 2

    async def test_one_branch_failing_keeps_the_other(self, make_client):
        upstream = RoutedUpstream(position=status(500, "down"), details=ok(DETAILS))
        lookup = await fetch_vessel(make_client(upstream), resolve_identifier("353136000"))
        assert isinstance(lookup.position.error, UpstreamError)
        assert lookup.position.value is None
        assert lookup.details.value.name == "EVER GIVEN"
        assert not lookup.all_failed

    async def test_malformed_payload_stays_in_its_branch(self, make_client):
        upstream = RoutedUpstream(position=ok(POSITION), details=ok({"mmsi": "353136000"}))
        lookup = await fetch_vessel(make_client(upstream), resolve_identifier("353136000"))
        assert isinstance(lookup.details.error, ValueError)
        assert lookup.position.value.ship_name == "EVER GIVEN"
        assert not lookup.all_failed

    async def test_unexpected_error_stays_in_its_branch(self, make_client):
        upstream = RoutedUpstream(position=RuntimeError("bug"), details=ok(DETAILS))
        lookup = await fetch_vessel(make_client(upstream), resolve_identifier("353136000"))
        assert isinstance(lookup.position.error, RuntimeError)
        assert lookup.details.ok


class TestVesselResource:

    async def test_merged_json(self, make_client):
        upstream = RoutedUpstream(position=ok(POSITION), details=ok(DETAILS))
        text = await vessels.vessel_resource(make_client(upstream), "IMO9811000")
        data = json.loads(text)
        assert data["mmsi"] == "353136000"
        assert data["details"]["callsign"] == "H3RC"
        assert data["voyage"]["destination"] == "ROTTERDAM"
        for request in upstream.requests:
            assert request.url.params["imo"] == "9811000"

    async def test_position_missing(self, make_client):
        upstream = RoutedUpstream(position=status(404), details=ok(DETAILS))
        data = json.loads(await vessels.vessel_resource(make_client(upstream), "353136000"))
        assert "position" not in data
        assert data["details"]["home_port"] == "PANAMA"

    async def test_malformed_details_still_renders_position(self, make_client):
        upstream = RoutedUpstream(position=ok(POSITION), details=ok({"mmsi": "353136000"}))
        data = json.loads(await vessels.vessel_resource(make_client(upstream), "353136000"))
        assert "details" not in data
        assert data["position"]["speed"] == "12.5 knots"
        assert data["voyage"]["destination"] == "ROTTERDAM"

    async def test_both_missing(self, make_client):
        upstream = RoutedUpstream(position=status(404), details=status(404))
        with pytest.raises(VesselNotFound, match="353136000"):
            await vessels.vessel_resource(make_client(upstream), "353136000")

    async def test_invalid_identifier(self, make_client):
        upstream = RoutedUpstream(position=ok(POSITION), details=ok(DETAILS))
        with pytest.raises(InvalidIdentifier):
            await vessels.vessel_resource(make_client(upstream), "not-a-vessel")
        assert upstream.requests == []


class TestVesselsAreaResource:

    async def test_parses_path_segments(self, make_client):
        upstream = FakeUpstream(ok([POSITION]))
        now = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)

        text = await vessels.vessels_area_resource(
            make_client(upstream), "37.8199", "-122.4783", "10", now=now
        )

        data = json.loads(text)
        assert data["timestamp"] == "2024-05-01T12:30:00.000Z"
        assert data["area"]["radius"] == "10 nautical miles"
        assert data["count"] == 1
        assert upstream.requests[0].url.params["center_lat"] == "37.8199"

    @pytest.mark.parametrize(
        "lat,lon,radius", [("abc", "0", "10"), ("0", "nan", "10"), ("0", "0", "500")]
    )
    async def test_bad_segments(self, make_client, lat, lon, radius):
        upstream = FakeUpstream()
        with pytest.raises(InvalidParameters):
            await vessels.vessels_area_resource(make_client(upstream), lat, lon, radius)
        assert upstream.requests == []


def test_identifier_kind_values():
    assert {kind.value for kind in IdentifierKind} == {"mmsi", "imo"}
