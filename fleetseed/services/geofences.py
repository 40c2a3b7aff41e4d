# fleetseed/services/geofences.py
"""
Geofence and hub factories.

Each fleet gets exactly one geofence: a circle or a polygon, chosen by coin
flip. Centers are sampled uniformly inside the customer's anchor region at no
more than half its radius. Hubs are then scattered near about two thirds of
the geofences.
"""

import random
from typing import Dict, List, Tuple

from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.fixtures import Fixtures
from fleetseed.services.geometry import (
    Point,
    close_ring,
    meters_to_degrees,
    midpoint,
    nearby_point,
    points_from_json,
    points_to_json,
    random_point_in_disk,
)
from fleetseed.utils.logger import get_logger

logger = get_logger(__name__)

MIN_VERTICES = 3
MAX_VERTICES = 8
HUB_FLEET_SHARE = 0.67
MAX_HUBS_PER_FLEET = 20
MAX_BIKE_RACKS = 20


def sample_fleet_center(fleet: dict, customers_by_id: Dict[int, dict], fixtures: Fixtures, rng: random.Random) -> Tuple[Point, float]:
    """Center inside the fleet's region at <= half its max radius, plus that half radius in meters."""
    region = fixtures.region_for(customers_by_id[fleet["customer_id"]]["region"])
    half_radius = 0.5 * region.max_radius
    return random_point_in_disk(meters_to_degrees(half_radius), region.center, rng), half_radius


def random_polygon(center: Point, rng: random.Random) -> List[Point]:
    """3 to 8 jittered vertices around center, returned as a closed ring."""
    count = rng.randint(MIN_VERTICES, MAX_VERTICES)
    return close_ring([nearby_point(center, rng) for _ in range(count)])


def _owner(fleet: dict) -> dict:
    return {"fleet_id": fleet["fleet_id"], "operator_id": fleet["operator_id"], "customer_id": fleet["customer_id"]}


def create_geofences(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> Dict[str, List[dict]]:
    customers_by_id = {c["customer_id"]: c for c in context.get("customers")}
    circles, polygons = [], []

    for fleet in context.get("fleets"):
        center, half_radius = sample_fleet_center(fleet, customers_by_id, fixtures, rng)
        if rng.random() < 0.5:
            circles.append({
                "latitude": center.latitude,
                "longitude": center.longitude,
                "radius": half_radius * rng.uniform(0.1, 1.0),
                **_owner(fleet),
            })
        else:
            polygons.append({"steps": points_to_json(random_polygon(center, rng)), **_owner(fleet)})

    logger.info(f"Created {len(circles)} circular and {len(polygons)} polygon geofences")
    return {"geofence_circle": circles, "geofence_polygon": polygons}


def create_hubs(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    circles = {g["fleet_id"]: g for g in context.get("geofence_circle")}
    polygons = {g["fleet_id"]: g for g in context.get("geofence_polygon")}

    hubs = []
    for fleet in context.get("fleets"):
        if rng.random() >= HUB_FLEET_SHARE:
            continue

        circle = circles.get(fleet["fleet_id"])
        polygon = polygons.get(fleet["fleet_id"])
        if circle is not None:
            anchor = Point(circle["latitude"], circle["longitude"])
            circle_id, polygon_id = circle["geofence_circle_id"], None
        elif polygon is not None:
            # midpoint of the distinct vertices, without the closing one
            anchor = midpoint(points_from_json(polygon["steps"])[:-1])
            circle_id, polygon_id = None, polygon["geofence_polygon_id"]
        else:
            continue

        for _ in range(rng.randrange(MAX_HUBS_PER_FLEET)):
            position = nearby_point(anchor, rng)
            hubs.append({
                "latitude": position.latitude,
                "longitude": position.longitude,
                "rule": rng.choice(("anywhere", "hub")),
                "bike_racks": rng.randint(1, MAX_BIKE_RACKS),
                "geofence_circle_id": circle_id,
                "geofence_polygon_id": polygon_id,
                **_owner(fleet),
            })

    logger.info(f"Created {len(hubs)} hubs")
    return hubs
