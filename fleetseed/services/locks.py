# fleetseed/services/locks.py
"""
Lock, bike and maintenance factories.

Statuses are picked from explicit weight tables:
- locks: active with a user 50%, shipping 20%, maintenance 10%, active without a user 20%
- bikes: 20/20/20/20/10/10 across active (on trip / parked), suspended (field / shop),
  inactive and deleted, each variant drawing its lock from one status pool
"""

import random
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.errors import FatalStageError
from fleetseed.fixtures import Fixtures
from fleetseed.utils.logger import get_logger
from fleetseed.utils.random_utils import (
    random_byte_string,
    random_past_timestamp,
    weighted_choice,
)

logger = get_logger(__name__)

BIKE_PIC = "https://s3-us-west-1.amazonaws.com/lattis.bike.image.upload/bike.jpg"
BIKE_ADJECTIVES = ["Happy", "Calm", "Cool", "Perfect", "Attractive", "Hot", "Smile", "Terrific", "Quick", "Brisk"]
BIKE_ANIMALS = ["Tiger", "Cat", "Lion", "Cheetah", "Dog", "Horse", "Wolf", "Zebra", "Goat", "Leopard", "Kangaroo"]
BIKE_MAKES = ["Mongoose", "Genze", "Schwinn", "Trek", "Atlas", "Montra"]
BIKE_MODELS = [
    "ARTERY SPORT", "SELOUS COMP", "TYAX SUPA EXPERT", "Sport", "4 ONE ONE 1",
    "Emonda SL 6 Pro", "Crockett 7 Disc", "TORPEDO D/SHOX", "ROCK 650B", "CELTIC 2.2",
]
BIKE_TYPES = ["regular", "electric"]
BIKE_DESCRIPTIONS = [
    "Bikes in this network are black and white, and have a UHBikes sticker placed on the crossbar.",
    "Bikes in this network are blue.",
]
RIDER_NOTES = (
    "Customer had an accident which damaged the such and such part. Damage was reported by customer. "
    "Technician replaced the part and cleaned the little supporting parts."
)
HOUR = 3600


class LockStatus(str, Enum):
    ACTIVE = "active"
    SHIPPING = "shipping"
    MAINTENANCE = "maintenance"


class LockVariant(Enum):
    ACTIVE_WITH_USER = "active_with_user"
    SHIPPING = "shipping"
    MAINTENANCE = "maintenance"
    ACTIVE_UNASSIGNED = "active_unassigned"

    @property
    def status(self) -> LockStatus:
        return LOCK_VARIANT_STATUS[self]


LOCK_VARIANT_STATUS = {
    LockVariant.ACTIVE_WITH_USER: LockStatus.ACTIVE,
    LockVariant.SHIPPING: LockStatus.SHIPPING,
    LockVariant.MAINTENANCE: LockStatus.MAINTENANCE,
    LockVariant.ACTIVE_UNASSIGNED: LockStatus.ACTIVE,
}


LOCK_WEIGHTS: Tuple[Tuple[LockVariant, float], ...] = (
    (LockVariant.ACTIVE_WITH_USER, 0.5),
    (LockVariant.SHIPPING, 0.2),
    (LockVariant.MAINTENANCE, 0.1),
    (LockVariant.ACTIVE_UNASSIGNED, 0.2),
)


class BikeStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"
    DELETED = "deleted"


@dataclass(frozen=True)
class BikeProfile:
    status: BikeStatus
    lock_pool: LockStatus
    current_statuses: Tuple[str, ...]
    maintenance_status: Optional[str] = None


class BikeVariant(Enum):
    ACTIVE_ON_TRIP = BikeProfile(BikeStatus.ACTIVE, LockStatus.ACTIVE, ("on_trip",))
    ACTIVE_PARKED = BikeProfile(BikeStatus.ACTIVE, LockStatus.ACTIVE, ("parked",))
    SUSPENDED_FIELD = BikeProfile(
        BikeStatus.SUSPENDED, LockStatus.MAINTENANCE, ("damaged", "stolen", "under_maintenance"), "field_maintenance"
    )
    SUSPENDED_SHOP = BikeProfile(
        BikeStatus.SUSPENDED, LockStatus.MAINTENANCE, ("damaged", "stolen", "under_maintenance"), "shop_maintenance"
    )
    INACTIVE = BikeProfile(BikeStatus.INACTIVE, LockStatus.SHIPPING, ("lock_assigned", "lock_not_assigned"))
    DELETED = BikeProfile(BikeStatus.DELETED, LockStatus.SHIPPING, ("total_loss", "stolen", "defleeted"))


BIKE_WEIGHTS: Tuple[Tuple[BikeVariant, float], ...] = (
    (BikeVariant.ACTIVE_ON_TRIP, 20),
    (BikeVariant.ACTIVE_PARKED, 20),
    (BikeVariant.SUSPENDED_FIELD, 20),
    (BikeVariant.SUSPENDED_SHOP, 20),
    (BikeVariant.INACTIVE, 10),
    (BikeVariant.DELETED, 10),
)

# (status, category, rider notes) for shop maintenance
SHOP_MAINTENANCE_WEIGHTS = (
    (("in_workshop", "faulty_gears", RIDER_NOTES), 40),
    (("in_workshop", "wheel_damage", RIDER_NOTES), 20),
    (("in_workshop", "faulty_part", RIDER_NOTES), 40),
)
FIELD_MAINTENANCE = ("onboarding_in_process", "standard_service", None)


# ── Locks ────────────────────────────────────────────────────────────────────

def _raw_lock(fixtures: Fixtures, index: int, rng: random.Random) -> dict:
    """Fixture locks first; beyond those, synthesize a MAC id and key."""
    if index < len(fixtures.locks):
        return fixtures.locks[index].model_dump()
    return {
        "name": f"Ellipse {index + 1:03d}",
        "mac_id": random_byte_string(rng, 6).upper(),
        "key": random_byte_string(rng, 32),
    }


def create_locks(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    fleets_by_operator: Dict[int, List[dict]] = defaultdict(list)
    for fleet in context.get("fleets"):
        fleets_by_operator[fleet["operator_id"]].append(fleet)

    operator_ids = [op["operator_id"] for op in context.get("operators") if fleets_by_operator[op["operator_id"]]]
    if not operator_ids:
        raise FatalStageError("No operator owns a fleet; cannot place locks", "locks")

    users = context.get("users")
    locks_per_user: Dict[int, int] = defaultdict(int)
    locks = []

    for i in range(settings.NUMBER_OF_LOCKS):
        operator_id = rng.choice(operator_ids)
        fleet = rng.choice(fleets_by_operator[operator_id])
        variant = weighted_choice(rng, LOCK_WEIGHTS)

        lock = _raw_lock(fixtures, i, rng)
        lock.update({
            "battery_level": rng.randrange(100),
            "fleet_id": fleet["fleet_id"],
            "operator_id": operator_id,
            "user_id": None,
            "customer_id": None,
            "hub_id": None,
        })

        if variant is LockVariant.ACTIVE_WITH_USER:
            available = [u for u in users if locks_per_user[u["user_id"]] < u.get("max_locks", settings.MAX_LOCKS_PER_USER)]
            if available:
                user = rng.choice(available)
                locks_per_user[user["user_id"]] += 1
                lock["user_id"] = user["user_id"]
                lock["name"] = f"{user['first_name']} {user['last_name']}'s Lock"
            else:
                variant = LockVariant.ACTIVE_UNASSIGNED

        if variant is not LockVariant.ACTIVE_WITH_USER:
            lock["customer_id"] = fleet["customer_id"]

        lock["status"] = variant.status.value
        locks.append(lock)

    logger.info(f"Created {len(locks)} locks, {len(locks_per_user)} users own at least one")
    return locks


# ── Bikes ────────────────────────────────────────────────────────────────────

def create_bikes(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    """
    One bike per lock. Locks are drawn without replacement from the pool their
    status belongs to, so no two bikes can share a lock.
    """
    pools: Dict[LockStatus, List[dict]] = {status: [] for status in LockStatus}
    for lock in context.get("locks"):
        pools[LockStatus(lock["status"])].append(lock)

    bikes = []
    while True:
        table = [(variant, weight) for variant, weight in BIKE_WEIGHTS if pools[variant.value.lock_pool]]
        if not table:
            break
        profile = weighted_choice(rng, table).value
        pool = pools[profile.lock_pool]
        lock = pool.pop(rng.randrange(len(pool)))

        bikes.append({
            "date_created": random_past_timestamp(rng, settings.REFERENCE_TIME),
            "status": profile.status.value,
            "current_status": rng.choice(profile.current_statuses),
            "maintenance_status": profile.maintenance_status,
            "battery_level": rng.randrange(100),
            "lock_id": lock["lock_id"],
            "fleet_id": lock["fleet_id"],
            "bike_name": f"{rng.choice(BIKE_ADJECTIVES)} {rng.choice(BIKE_ANIMALS)}",
            "make": rng.choice(BIKE_MAKES),
            "model": rng.choice(BIKE_MODELS),
            "type": rng.choice(BIKE_TYPES),
            "description": rng.choice(BIKE_DESCRIPTIONS),
            "pic": BIKE_PIC,
        })

    logger.info(f"Created {len(bikes)} bikes")
    return bikes


# ── Maintenance ──────────────────────────────────────────────────────────────

def create_maintenance(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    locks_by_id = {lock["lock_id"]: lock for lock in context.get("locks")}
    fleets_by_id = {fleet["fleet_id"]: fleet for fleet in context.get("fleets")}

    records = []
    for bike in context.get("bikes"):
        if bike["status"] != BikeStatus.SUSPENDED.value:
            continue
        lock = locks_by_id[bike["lock_id"]]
        fleet = fleets_by_id[lock["fleet_id"]]

        if bike["maintenance_status"] == "field_maintenance":
            status, category, notes = FIELD_MAINTENANCE
        else:
            status, category, notes = weighted_choice(rng, SHOP_MAINTENANCE_WEIGHTS)

        start = random_past_timestamp(rng, settings.REFERENCE_TIME)
        records.append({
            "bike_id": bike["bike_id"],
            "lock_id": lock["lock_id"],
            "fleet_id": fleet["fleet_id"],
            "customer_id": fleet["customer_id"],
            "operator_id": fleet["operator_id"],
            "status": status,
            "category": category,
            "rider_notes": notes,
            "service_start_date": start,
            "service_end_date": start + HOUR + int(rng.random() * 71 * HOUR),
        })

    logger.info(f"Created {len(records)} maintenance records")
    return records
