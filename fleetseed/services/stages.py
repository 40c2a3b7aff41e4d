# fleetseed/services/stages.py
"""
Builds the two pipeline shapes:

  schema_stages   drop users DB -> drop main DB -> create users DB -> create main DB -> create tables
  data_stages     [create entity -> save -> get]* in dependency order

"get" stages only follow entities whose generated ids a later stage needs.
"""

import inspect
import random
from functools import partial
from typing import Callable, List

from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.database import MAIN, USERS
from fleetseed.errors import ExpectedAbsenceError
from fleetseed.fixtures import Fixtures
from fleetseed.services import accounts, fleets, geofences, locks, parking, trips
from fleetseed.services.mapbox_client import MapboxClient
from fleetseed.services.persistence import refresh, save_in_batches
from fleetseed.services.pipeline import Stage
from fleetseed.utils.logger import get_logger

logger = get_logger(__name__)


# ── Schema ───────────────────────────────────────────────────────────────────

def _drop_database(storage, key: str, context: SeedContext):
    try:
        storage.drop_database(key)
    except ExpectedAbsenceError as e:
        logger.info(f"{e}, nothing to drop")
    return context


def _create_database(storage, key: str, context: SeedContext):
    storage.create_database(key)
    return context


def _create_tables(storage, context: SeedContext):
    names = storage.tables()
    for name in names:
        storage.create_table(name)
    logger.info(f"Created {len(names)} tables")
    return context


def schema_stages(storage) -> List[Stage]:
    return [
        Stage("drop users database", partial(_drop_database, storage, USERS)),
        Stage("drop main database", partial(_drop_database, storage, MAIN)),
        Stage("create users database", partial(_create_database, storage, USERS)),
        Stage("create main database", partial(_create_database, storage, MAIN)),
        Stage("create tables", partial(_create_tables, storage)),
    ]


# ── Data ─────────────────────────────────────────────────────────────────────

class DataStageBuilder:
    """Wraps factories and the persistence adapter into named stages."""

    def __init__(self, storage, fixtures: Fixtures, rng: random.Random, settings: Settings):
        self.storage = storage
        self.fixtures = fixtures
        self.rng = rng
        self.settings = settings

    def create(self, kind: str, factory: Callable) -> Stage:
        async def run(context: SeedContext) -> SeedContext:
            records = factory(context, self.fixtures, self.rng, self.settings)
            if inspect.isawaitable(records):
                records = await records
            return context.with_collection(kind, records)
        return Stage(f"create {kind}", run)

    def create_many(self, name: str, factory: Callable) -> Stage:
        """For factories that emit several kinds at once, as a {kind: records} mapping."""
        def run(context: SeedContext) -> SeedContext:
            for kind, records in factory(context, self.fixtures, self.rng, self.settings).items():
                context = context.with_collection(kind, records)
            return context
        return Stage(f"create {name}", run)

    def save(self, kind: str) -> Stage:
        def run(context: SeedContext):
            save_in_batches(self.storage, kind, context.get(kind), self.settings.BATCH_SIZE)
        return Stage(f"save {kind}", run)

    def get(self, kind: str) -> Stage:
        def run(context: SeedContext) -> SeedContext:
            return context.with_collection(kind, refresh(self.storage, kind))
        return Stage(f"get {kind}", run)

    def entity(self, kind: str, factory: Callable, hydrate: bool = True) -> List[Stage]:
        stages = [self.create(kind, factory), self.save(kind)]
        if hydrate:
            stages.append(self.get(kind))
        return stages


def data_stages(storage, fixtures: Fixtures, rng: random.Random, settings: Settings, enrichment: MapboxClient) -> List[Stage]:
    b = DataStageBuilder(storage, fixtures, rng, settings)
    create_trips = partial(trips.create_trips, enrichment=enrichment)
    return [
        *b.entity("operators", accounts.create_operators),
        *b.entity("users", accounts.create_users),
        *b.entity("customers", accounts.create_customers),
        *b.entity("fleets", fleets.create_fleets),
        *b.entity("fleet_associations", fleets.create_fleet_associations, hydrate=False),
        *b.entity("locks", locks.create_locks),
        *b.entity("bikes", locks.create_bikes),
        *b.entity("maintenance", locks.create_maintenance, hydrate=False),
        *b.entity("trips", create_trips),
        *b.entity("thefts", trips.create_thefts, hydrate=False),
        *b.entity("crashes", trips.create_crashes, hydrate=False),
        b.create_many("geofences", geofences.create_geofences),
        b.save("geofence_circle"),
        b.save("geofence_polygon"),
        b.get("geofence_circle"),
        b.get("geofence_polygon"),
        *b.entity("hubs", geofences.create_hubs, hydrate=False),
        *b.entity("parking_areas", parking.create_parking_areas),
        *b.entity("parking_spots", parking.create_parking_spots, hydrate=False),
    ]
