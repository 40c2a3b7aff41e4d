# tests/test_parking.py
"""Unit tests for parking area and parking spot factories."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json
import random

from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.fixtures import Fixtures
from fleetseed.schemas.fixtures import ParkingAnchor, ParkingSpotFixture
from fleetseed.services.geometry import Point, point_in_polygon, points_from_json
from fleetseed.services.parking import (
    create_parking_areas,
    create_parking_spots,
    place_spot,
    random_rectangle,
)

FIXTURES = Fixtures(
    regions={"Oakland": ParkingAnchor(city="Oakland", center=(37.8044, -122.2712), max_radius=3500)},
    parking_spots=[ParkingSpotFixture(name="Rack", description="Covered rack", pic=None)],
)
FLEETS = [
    {"fleet_id": 1, "operator_id": 11, "customer_id": 100, "fleet_name": "Lake Merritt Cycles"},
    {"fleet_id": 2, "operator_id": 12, "customer_id": 100, "fleet_name": "Oakland Spokes"},
]


def parking_context():
    return (
        SeedContext()
        .with_collection("customers", [{"customer_id": 100, "region": "Oakland"}])
        .with_collection("fleets", FLEETS)
    )


class TestParkingAreas:
    def test_areas_use_all_types(self):
        areas = create_parking_areas(parking_context(), FIXTURES, random.Random(0), Settings(NUMBER_OF_PARKING_AREAS=60))
        assert len(areas) == 60
        assert {a["type"] for a in areas} == {"circle", "polygon", "rectangle"}
        for area in areas:
            fleet = FLEETS[area["fleet_id"] - 1]
            assert (area["operator_id"], area["customer_id"]) == (fleet["operator_id"], fleet["customer_id"])

    def test_rectangles_are_closed_four_corner_rings(self):
        ring = random_rectangle(Point(37.8, -122.27), random.Random(1))
        assert len(ring) == 5
        assert ring[0] == ring[-1]
        assert point_in_polygon(Point(37.8, -122.27), ring)

    def test_no_fleets_no_areas(self):
        context = parking_context().with_collection("fleets", [])
        assert create_parking_areas(context, FIXTURES, random.Random(0), Settings()) == []


class TestParkingSpots:
    def test_circle_spot_sits_on_center(self):
        area = {
            "parking_area_id": 9,
            "type": "circle",
            "geometry": json.dumps([{"latitude": 1.0, "longitude": 2.0, "radius": 50}]),
        }
        point, area_id = place_spot(area, random.Random(0))
        assert point == Point(1.0, 2.0)
        assert area_id == 9

    def test_spot_outside_area_loses_reference(self):
        flat = [{"latitude": 0, "longitude": 0}, {"latitude": 1, "longitude": 1},
                {"latitude": 2, "longitude": 2}, {"latitude": 0, "longitude": 0}]
        area = {"parking_area_id": 3, "type": "polygon", "geometry": json.dumps(flat)}
        _, area_id = place_spot(area, random.Random(0))
        assert area_id is None

    def test_spots_inside_polygon_areas(self):
        areas = create_parking_areas(parking_context(), FIXTURES, random.Random(2), Settings(NUMBER_OF_PARKING_AREAS=30))
        areas = [{**a, "parking_area_id": i} for i, a in enumerate(areas, start=1)]
        context = parking_context().with_collection("parking_areas", areas)

        spots = create_parking_spots(context, FIXTURES, random.Random(2), Settings(NUMBER_OF_PARKING_SPOTS=90))

        assert len(spots) == 90
        by_id = {a["parking_area_id"]: a for a in areas}
        for spot in spots:
            if spot["parking_area_id"] is None:
                continue
            area = by_id[spot["parking_area_id"]]
            assert spot["fleet_id"] == area["fleet_id"]
            if area["type"] != "circle":
                assert point_in_polygon((spot["latitude"], spot["longitude"]), points_from_json(area["geometry"]))

    def test_first_spots_cover_every_area(self):
        areas = [
            {"parking_area_id": i, "type": "circle", "fleet_id": 1, "operator_id": 11, "customer_id": 100,
             "geometry": json.dumps([{"latitude": float(i), "longitude": 0.0, "radius": 10}])}
            for i in range(1, 4)
        ]
        context = parking_context().with_collection("parking_areas", areas)
        spots = create_parking_spots(context, FIXTURES, random.Random(0), Settings(NUMBER_OF_PARKING_SPOTS=5))
        assert [s["parking_area_id"] for s in spots[:3]] == [1, 2, 3]
        assert all(s["name"] == "Rack" for s in spots)
