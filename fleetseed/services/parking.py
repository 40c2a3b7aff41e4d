# fleetseed/services/parking.py
"""
Parking area and parking spot factories.

Areas are circles, polygons or axis-aligned rectangles inside a fleet's
region. Spots are placed in areas round-robin, then at random; a spot keeps
its area reference only when it actually landed inside the area.
"""

import json
import random
from typing import List

from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.fixtures import Fixtures
from fleetseed.services.geometry import (
    NEARBY_SPREAD,
    Point,
    close_ring,
    points_from_json,
    points_to_json,
    sample_inside_polygon,
)
from fleetseed.services.geofences import random_polygon, sample_fleet_center
from fleetseed.utils.logger import get_logger

logger = get_logger(__name__)

AREA_TYPES = ("circle", "polygon", "rectangle")
SPOT_TYPES = ("parking_meter", "bike_rack", "sheffield_stand")
MAX_SPOT_CAPACITY = 3


def random_rectangle(center: Point, rng: random.Random) -> List[Point]:
    half_lat = rng.uniform(0.2, 1.0) * NEARBY_SPREAD
    half_lon = rng.uniform(0.2, 1.0) * NEARBY_SPREAD
    return close_ring([
        Point(center.latitude - half_lat, center.longitude - half_lon),
        Point(center.latitude - half_lat, center.longitude + half_lon),
        Point(center.latitude + half_lat, center.longitude + half_lon),
        Point(center.latitude + half_lat, center.longitude - half_lon),
    ])


def create_parking_areas(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    fleets = context.get("fleets")
    if not fleets:
        logger.warning("No fleets, skipping parking areas")
        return []
    customers_by_id = {c["customer_id"]: c for c in context.get("customers")}

    areas = []
    for _ in range(settings.NUMBER_OF_PARKING_AREAS):
        area_type = rng.choice(AREA_TYPES)
        fleet = rng.choice(fleets)
        center, half_radius = sample_fleet_center(fleet, customers_by_id, fixtures, rng)

        if area_type == "circle":
            geometry = json.dumps([{**center.as_dict(), "radius": half_radius * rng.uniform(0.05, 0.5)}])
        elif area_type == "polygon":
            geometry = points_to_json(random_polygon(center, rng))
        else:
            geometry = points_to_json(random_rectangle(center, rng))

        areas.append({
            "name": f"{fleet['fleet_name']} {area_type} zone",
            "type": area_type,
            "geometry": geometry,
            "fleet_id": fleet["fleet_id"],
            "operator_id": fleet["operator_id"],
            "customer_id": fleet["customer_id"],
        })

    logger.info(f"Created {len(areas)} parking areas")
    return areas


def place_spot(area: dict, rng: random.Random):
    """Returns (point, parking_area_id or None)."""
    if area["type"] == "circle":
        circle = json.loads(area["geometry"])[0]
        return Point(circle["latitude"], circle["longitude"]), area["parking_area_id"]

    point, inside = sample_inside_polygon(points_from_json(area["geometry"]), rng)
    return point, (area["parking_area_id"] if inside else None)


def create_parking_spots(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    areas = context.get("parking_areas")
    if not areas or not fixtures.parking_spots:
        logger.warning("No parking areas or spot fixtures, skipping parking spots")
        return []

    spots = []
    outside = 0
    for i in range(settings.NUMBER_OF_PARKING_SPOTS):
        area = areas[i] if i < len(areas) else rng.choice(areas)
        raw = rng.choice(fixtures.parking_spots)
        point, area_id = place_spot(area, rng)
        if area_id is None:
            outside += 1

        spots.append({
            "type": rng.choice(SPOT_TYPES),
            "name": raw.name,
            "description": raw.description,
            "pic": raw.pic,
            "latitude": point.latitude,
            "longitude": point.longitude,
            "capacity": rng.randint(1, MAX_SPOT_CAPACITY),
            "parking_area_id": area_id,
            "fleet_id": area["fleet_id"],
            "operator_id": area["operator_id"],
            "customer_id": area["customer_id"],
        })

    logger.info(f"Created {len(spots)} parking spots ({outside} outside any area)")
    return spots
