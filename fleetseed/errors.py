# fleetseed/errors.py
"""
Failure taxonomy for the seeding pipeline.

- FatalStageError       aborts the whole pipeline (schema / persistence failures)
- ExpectedAbsenceError  dropping a database that does not exist; treated as success
- SoftEnrichmentError   a routing / geocoding call failed; only the current trip is skipped
"""

from typing import Optional


class SeedError(Exception):
    """Base class for every seeder failure."""


class FatalStageError(SeedError):
    def __init__(self, message: str, context: Optional[str] = None):
        super().__init__(message)
        self.context = context   # failing table, statement or database name

    def __str__(self):
        base = super().__str__()
        return f"{base} [{self.context}]" if self.context else base


class ExpectedAbsenceError(SeedError):
    def __init__(self, database: str):
        super().__init__(f"Database {database} does not exist")
        self.database = database


class SoftEnrichmentError(SeedError):
    """Raised by the Mapbox client. Callers skip the record and move on."""
