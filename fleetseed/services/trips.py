# fleetseed/services/trips.py
"""
Trip, theft and crash factories.

Trips are planned up front (all random draws happen sequentially so a seeded
run is reproducible), then enriched through Mapbox concurrently. A failed
enrichment drops only that trip. Thefts and crashes are anchored on a random
waypoint of an already persisted trip.
"""

import asyncio
import json
import random
from dataclasses import dataclass
from typing import List, Optional

from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.errors import FatalStageError, SoftEnrichmentError
from fleetseed.fixtures import Fixtures
from fleetseed.models.trip import STEPS_MAX_LENGTH
from fleetseed.services.geometry import Point, meters_to_degrees, random_point_in_disk
from fleetseed.services.mapbox_client import MapboxClient, RouteStep
from fleetseed.utils.logger import get_logger
from fleetseed.utils.random_utils import random_past_timestamp

logger = get_logger(__name__)

PARKING_IMAGE = "https://s3-us-west-1.amazonaws.com/lattis.bike.image.upload/parking_image.jpg"
SENSOR_MAX = 1000.0


@dataclass
class TripPlan:
    lock: dict
    fleet: dict
    city: str
    bike_id: Optional[int]
    origin: Point
    destination: Point
    start_time: int


def select_trip_locks(locks: List[dict], number_of_trips: int, rng: random.Random) -> List[dict]:
    """Every eligible lock once, in order, then random repeats until number_of_trips."""
    eligible = [
        lock for lock in locks
        if lock["status"] == "active" and lock.get("user_id") is not None and lock.get("fleet_id") is not None
    ]
    if not eligible:
        raise FatalStageError("There are no active locks with a user and a fleet", "trips")

    selected = eligible[:number_of_trips]
    while len(selected) < number_of_trips:
        selected.append(rng.choice(eligible))
    return selected


def plan_trips(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[TripPlan]:
    fleets_by_id = {fleet["fleet_id"]: fleet for fleet in context.get("fleets")}
    customers_by_id = {c["customer_id"]: c for c in context.get("customers")}
    bike_by_lock = {bike["lock_id"]: bike["bike_id"] for bike in context.get("bikes")}

    plans = []
    for lock in select_trip_locks(context.get("locks"), settings.NUMBER_OF_TRIPS, rng):
        fleet = fleets_by_id.get(lock["fleet_id"])
        if fleet is None:
            logger.warning(f"Lock {lock['lock_id']} points at unknown fleet {lock['fleet_id']}, skipping")
            continue
        region = fixtures.region_for(customers_by_id[fleet["customer_id"]]["region"])
        radius = meters_to_degrees(region.max_radius)
        plans.append(TripPlan(
            lock=lock,
            fleet=fleet,
            city=region.city,
            bike_id=bike_by_lock.get(lock["lock_id"]),
            origin=random_point_in_disk(radius, region.center, rng),
            destination=random_point_in_disk(radius, region.center, rng),
            start_time=random_past_timestamp(rng, settings.REFERENCE_TIME),
        ))
    return plans


def build_steps(route: List[RouteStep], start_time: int) -> List[list]:
    """Integrate per-segment durations into absolute, non-decreasing timestamps."""
    elapsed = 0.0
    steps = []
    for step in route:
        elapsed += max(step.duration, 0.0)
        steps.append([step.latitude, step.longitude, int(start_time + elapsed)])
    return steps


async def enrich_trip(plan: TripPlan, enrichment: MapboxClient) -> Optional[dict]:
    """Route and reverse-geocode one planned trip. None means the trip is dropped."""
    try:
        route = await enrichment.route(plan.origin, plan.destination)
        steps = build_steps(route, plan.start_time)
        steps_json = json.dumps(steps)
        if len(steps_json) >= STEPS_MAX_LENGTH:
            logger.info(f"Not adding trip for lock {plan.lock['lock_id']}: {len(steps)} steps is too many")
            return None
        start = await enrichment.address_for(plan.origin)
        end = await enrichment.address_for(plan.destination)
    except SoftEnrichmentError as e:
        logger.warning(f"Skipping trip for lock {plan.lock['lock_id']} in {plan.city}: {e}")
        return None

    duration_min = (steps[-1][2] - steps[0][2]) / 60
    logger.debug(
        f"Trip in {plan.city} from '{start.formatted()}' to '{end.formatted()}' "
        f"({len(steps)} steps, {duration_min:.1f} mins)"
    )
    return {
        "steps": steps_json,
        "parking_image": PARKING_IMAGE,
        "user_id": plan.lock["user_id"],
        "operator_id": plan.lock["operator_id"],
        "customer_id": plan.fleet["customer_id"],
        "fleet_id": plan.fleet["fleet_id"],
        "lock_id": plan.lock["lock_id"],
        "bike_id": plan.bike_id,
        "date_created": plan.start_time,
        "start_address": start.formatted(),
        "end_address": end.formatted(),
    }


async def create_trips(
    context: SeedContext,
    fixtures: Fixtures,
    rng: random.Random,
    settings: Settings,
    enrichment: MapboxClient,
) -> List[dict]:
    logger.info("Creating trips... there may be some lag while Mapbox is queried")
    plans = plan_trips(context, fixtures, rng, settings)
    semaphore = asyncio.Semaphore(max(1, settings.ENRICHMENT_CONCURRENCY))

    async def _bounded(plan: TripPlan):
        async with semaphore:
            return await enrich_trip(plan, enrichment)

    # Wait for every enrichment before deciding anything, then surface the first real failure
    results = await asyncio.gather(*(_bounded(plan) for plan in plans), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result

    trips = [trip for trip in results if trip is not None]
    logger.info(f"Created {len(trips)} of {settings.NUMBER_OF_TRIPS} requested trips")
    return trips


# ── Thefts / crashes ─────────────────────────────────────────────────────────

def _incident(trip: dict, rng: random.Random, now: Optional[int]) -> dict:
    latitude, longitude, _ = rng.choice(json.loads(trip["steps"]))
    return {
        "date": random_past_timestamp(rng, now),
        "x_ave": SENSOR_MAX * rng.random(),
        "y_ave": SENSOR_MAX * rng.random(),
        "z_ave": SENSOR_MAX * rng.random(),
        "x_dev": SENSOR_MAX * rng.random(),
        "y_dev": SENSOR_MAX * rng.random(),
        "z_dev": SENSOR_MAX * rng.random(),
        "latitude": latitude,
        "longitude": longitude,
        "lock_id": trip["lock_id"],
        "user_id": trip["user_id"],
        "trip_id": trip["trip_id"],
    }


def _incidents(context: SeedContext, count: int, rng: random.Random, kind: str, now: Optional[int]) -> List[dict]:
    trips = context.get("trips")
    if not trips:
        logger.warning(f"No persisted trips to anchor {kind} on; creating none")
        return []
    return [_incident(rng.choice(trips), rng, now) for _ in range(count)]


def create_thefts(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    thefts = _incidents(context, settings.NUMBER_OF_THEFTS, rng, "thefts", settings.REFERENCE_TIME)
    for theft in thefts:
        theft["confirmed"] = True
    return thefts


def create_crashes(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    crashes = _incidents(context, settings.NUMBER_OF_CRASHES, rng, "crashes", settings.REFERENCE_TIME)
    for crash in crashes:
        crash["message_sent"] = True
    return crashes
