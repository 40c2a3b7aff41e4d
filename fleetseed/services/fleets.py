# fleetseed/services/fleets.py
"""One fleet per customer, plus an admin access edge from the owning operator to each fleet."""

import random
from typing import List

from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.fixtures import Fixtures
from fleetseed.utils.logger import get_logger
from fleetseed.utils.random_utils import random_past_timestamp

logger = get_logger(__name__)

METERS_UNTIL_MAINTENANCE = 100


def create_fleets(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    fleets = [
        {
            "operator_id": customer["operator_id"],
            "customer_id": customer["customer_id"],
            "fleet_name": customer["customer_name"],
            "meters_until_maintenance": METERS_UNTIL_MAINTENANCE,
            "date_created": random_past_timestamp(rng, settings.REFERENCE_TIME),
        }
        for customer in context.get("customers")
    ]
    logger.info(f"Created {len(fleets)} fleets")
    return fleets


def create_fleet_associations(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    return [
        {"operator_id": fleet["operator_id"], "fleet_id": fleet["fleet_id"], "acl": "admin", "on_call": 0}
        for fleet in context.get("fleets")
    ]
