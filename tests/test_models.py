"""Tests for query validation and response parsing."""

import dataclasses
import math

import pytest

from marinetraffic.errors import InvalidIdentifier, InvalidParameters
from marinetraffic.models import AreaQuery, SearchCriteria, VesselDetails, VesselPosition
from tests.conftest import DETAILS, POSITION


class TestSearchCriteria:

    def test_requires_at_least_one_field(self):
        with pytest.raises(InvalidParameters, match="At least one search parameter"):
            SearchCriteria.build()

    def test_empty_strings_count_as_absent(self):
        with pytest.raises(InvalidParameters):
            SearchCriteria.build(vessel_name="", mmsi="", imo="")

    def test_ship_type_zero_is_a_criterion(self):
        assert SearchCriteria.build(ship_type=0).as_params() == {"ship_type": 0}

    def test_imo_prefix_is_stripped(self):
        criteria = SearchCriteria.build(imo="IMO9811000")
        assert criteria.as_params() == {"imo": "9811000"}

    def test_bad_mmsi_is_rejected(self):
        with pytest.raises(InvalidIdentifier):
            SearchCriteria.build(mmsi="12345")

    def test_bad_imo_is_rejected(self):
        with pytest.raises(InvalidIdentifier):
            SearchCriteria.build(imo="IMO12")

    def test_only_set_fields_become_params(self):
        criteria = SearchCriteria.build(vessel_name="EVER", ship_type=70)
        assert criteria.as_params() == {"vessel_name": "EVER", "ship_type": 70}


class TestAreaQuery:

    def test_params_are_passed_unchanged(self):
        area = AreaQuery(center_lat=37.8199, center_lon=-122.4783, radius=10)
        assert area.as_params() == {
            "center_lat": 37.8199,
            "center_lon": -122.4783,
            "radius": 10,
        }

    def test_optional_ship_type_range(self):
        area = AreaQuery(0, 0, 5, min_ship_type=70, max_ship_type=89)
        assert area.as_params()["min_ship_type"] == 70
        assert area.as_params()["max_ship_type"] == 89

    @pytest.mark.parametrize("lat,lon,radius", [(-90, -180, 1), (90, 180, 100)])
    def test_boundaries_are_accepted(self, lat, lon, radius):
        AreaQuery(lat, lon, radius)

    @pytest.mark.parametrize(
        "lat,lon,radius,match",
        [
            (90.01, 0, 10, "latitude"),
            (-91, 0, 10, "latitude"),
            (0, 180.5, 10, "longitude"),
            (0, -181, 10, "longitude"),
            (0, 0, 0.5, "radius"),
            (0, 0, 101, "radius"),
            (math.nan, 0, 10, "latitude"),
        ],
    )
    def test_out_of_range_is_rejected(self, lat, lon, radius, match):
        with pytest.raises(InvalidParameters, match=match):
            AreaQuery(lat, lon, radius)


class TestResponseEntities:

    def test_position_from_api_converts_numbers(self):
        position = VesselPosition.from_api(POSITION)
        assert position.mmsi == "353136000"
        assert position.latitude == pytest.approx(30.0123)
        assert position.speed == 12.5
        assert position.ship_type == 70

    def test_position_optional_fields_default_to_none(self):
        position = VesselPosition.from_api({
            "mmsi": 123456789,
            "latitude": 1,
            "longitude": 2,
            "speed": 0,
            "timestamp": "2024-05-01T12:00:00",
            "destination": "",
        })
        assert position.mmsi == "123456789"
        assert position.imo is None
        assert position.destination is None
        assert position.heading is None

    def test_position_missing_required_field(self):
        payload = dict(POSITION)
        del payload["latitude"]
        with pytest.raises(ValueError, match="latitude"):
            VesselPosition.from_api(payload)

    def test_details_from_api(self):
        details = VesselDetails.from_api(DETAILS)
        assert details.ship_type == 70
        assert details.year_built == 2018
        assert details.length_overall == pytest.approx(399.94)

    def test_entities_are_read_only(self):
        position = VesselPosition.from_api(POSITION)
        with pytest.raises(dataclasses.FrozenInstanceError):
            position.latitude = 0.0
