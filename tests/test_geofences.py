# tests/test_geofences.py
"""Unit tests for geofence and hub factories."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import math
import random

from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.fixtures import Fixtures
from fleetseed.schemas.fixtures import ParkingAnchor
from fleetseed.services.geofences import create_geofences, create_hubs, random_polygon
from fleetseed.services.geometry import Point, meters_to_degrees, points_from_json

CENTER = (52.52, 13.405)
FIXTURES = Fixtures(regions={"Berlin": ParkingAnchor(city="Berlin", center=CENTER, max_radius=6000)})


def geofence_context(fleet_count=40):
    fleets = [{"fleet_id": i, "operator_id": 1, "customer_id": 100} for i in range(1, fleet_count + 1)]
    return (
        SeedContext()
        .with_collection("customers", [{"customer_id": 100, "region": "Berlin"}])
        .with_collection("fleets", fleets)
    )


def persisted(records, id_column):
    return [{**record, id_column: i} for i, record in enumerate(records, start=1)]


class TestGeofences:
    def test_one_geofence_per_fleet(self):
        result = create_geofences(geofence_context(), FIXTURES, random.Random(0), Settings())
        fleet_ids = [g["fleet_id"] for g in result["geofence_circle"] + result["geofence_polygon"]]
        assert sorted(fleet_ids) == list(range(1, 41))
        assert result["geofence_circle"] and result["geofence_polygon"]

    def test_circle_centers_within_half_radius(self):
        result = create_geofences(geofence_context(), FIXTURES, random.Random(1), Settings())
        limit = meters_to_degrees(3000)
        for circle in result["geofence_circle"]:
            distance = math.hypot(circle["latitude"] - CENTER[0], circle["longitude"] - CENTER[1])
            assert distance <= limit + 1e-9
            assert 0 < circle["radius"] <= 3000

    def test_polygons_are_closed_rings(self):
        result = create_geofences(geofence_context(), FIXTURES, random.Random(2), Settings())
        for polygon in result["geofence_polygon"]:
            ring = points_from_json(polygon["steps"])
            assert 4 <= len(ring) <= 9
            assert ring[0] == ring[-1]

    def test_random_polygon_vertex_count(self):
        rng = random.Random(3)
        sizes = {len(random_polygon(Point(*CENTER), rng)) for _ in range(300)}
        assert sizes == set(range(4, 10))


class TestHubs:
    def hubs(self, seed=4):
        rng = random.Random(seed)
        context = geofence_context()
        geofences = create_geofences(context, FIXTURES, rng, Settings())
        context = (
            context
            .with_collection("geofence_circle", persisted(geofences["geofence_circle"], "geofence_circle_id"))
            .with_collection("geofence_polygon", persisted(geofences["geofence_polygon"], "geofence_polygon_id"))
        )
        return context, create_hubs(context, FIXTURES, rng, Settings())

    def test_each_hub_references_exactly_one_geofence(self):
        _, hubs = self.hubs()
        assert hubs
        for hub in hubs:
            assert (hub["geofence_circle_id"] is None) != (hub["geofence_polygon_id"] is None)

    def test_hub_geofence_belongs_to_hub_fleet(self):
        context, hubs = self.hubs()
        circle_fleet = {g["geofence_circle_id"]: g["fleet_id"] for g in context.get("geofence_circle")}
        polygon_fleet = {g["geofence_polygon_id"]: g["fleet_id"] for g in context.get("geofence_polygon")}
        for hub in hubs:
            if hub["geofence_circle_id"] is not None:
                assert circle_fleet[hub["geofence_circle_id"]] == hub["fleet_id"]
            else:
                assert polygon_fleet[hub["geofence_polygon_id"]] == hub["fleet_id"]

    def test_hub_counts_per_fleet(self):
        _, hubs = self.hubs(seed=5)
        per_fleet = {}
        for hub in hubs:
            per_fleet[hub["fleet_id"]] = per_fleet.get(hub["fleet_id"], 0) + 1
        assert all(count < 20 for count in per_fleet.values())
        assert 1 <= hubs[0]["bike_racks"] <= 20
