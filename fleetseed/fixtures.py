# fleetseed/fixtures.py
"""
Loads and validates the static demo-data fixtures shipped in fleetseed/data/demo_data.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from fleetseed.schemas.fixtures import (
    CustomerFixture,
    LockFixture,
    OperatorFixture,
    ParkingAnchor,
    ParkingSpotFixture,
    UserFixture,
)
from fleetseed.utils.logger import get_logger

logger = get_logger(__name__)

DEMO_DATA_DIR = os.path.join(os.path.dirname(__file__), "data", "demo_data")


@dataclass
class Fixtures:
    operators: List[OperatorFixture] = field(default_factory=list)
    customers: List[CustomerFixture] = field(default_factory=list)
    users: List[UserFixture] = field(default_factory=list)
    locks: List[LockFixture] = field(default_factory=list)
    parking_spots: List[ParkingSpotFixture] = field(default_factory=list)
    regions: Dict[str, ParkingAnchor] = field(default_factory=dict)

    def region_for(self, city: str) -> ParkingAnchor:
        try:
            return self.regions[city]
        except KeyError:
            raise ValueError(f"No parking anchor for region {city!r}") from None


def _read(directory: str, filename: str, model) -> list:
    with open(os.path.join(directory, filename), encoding="utf-8") as f:
        rows = json.load(f)
    return [model.model_validate(row) for row in rows]


def load_fixtures(directory: Optional[str] = None) -> Fixtures:
    directory = directory or DEMO_DATA_DIR
    anchors = _read(directory, "parking-anchors.json", ParkingAnchor)
    fixtures = Fixtures(
        operators=_read(directory, "operators.json", OperatorFixture),
        customers=_read(directory, "customers.json", CustomerFixture),
        users=_read(directory, "users.json", UserFixture),
        locks=_read(directory, "locks.json", LockFixture),
        parking_spots=_read(directory, "parking-spots.json", ParkingSpotFixture),
        regions={anchor.city: anchor for anchor in anchors},
    )

    unknown = {c.region for c in fixtures.customers} - set(fixtures.regions)
    if unknown:
        raise ValueError(f"Customers reference unknown regions: {sorted(unknown)}")

    logger.info(
        f"Loaded fixtures: {len(fixtures.operators)} operators, {len(fixtures.customers)} customers, "
        f"{len(fixtures.users)} users, {len(fixtures.locks)} locks, {len(fixtures.regions)} regions"
    )
    return fixtures
