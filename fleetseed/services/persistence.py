# fleetseed/services/persistence.py
"""
Batch persistence on top of the storage collaborator.

Inserts go out in strictly sequential batches, never more than one statement
in flight, to bound statement size. `refresh` re-reads a table so that
database-generated ids are available to later stages.
"""

from typing import List, Optional, Protocol, Sequence

from fleetseed.utils.logger import get_logger

logger = get_logger(__name__)


class Storage(Protocol):
    def insert_batch(self, table_name: str, records: Sequence[dict]) -> None: ...
    def select(self, table_name: str, filters: Optional[dict] = None) -> List[dict]: ...


def chunked(records: Sequence[dict], size: int):
    if size < 1:
        raise ValueError("batch size must be at least 1")
    for start in range(0, len(records), size):
        yield records[start:start + size]


def save_in_batches(storage: Storage, table_name: str, records: Sequence[dict], batch_size: int) -> int:
    """Insert records batch by batch. The first failing batch raises and stops the rest."""
    saved = 0
    for batch in chunked(list(records), batch_size):
        storage.insert_batch(table_name, batch)
        saved += len(batch)
    logger.info(f"Saved {saved} rows to {table_name}")
    return saved


def refresh(storage: Storage, table_name: str, filters: Optional[dict] = None) -> List[dict]:
    rows = storage.select(table_name, filters)
    logger.info(f"Retrieved {len(rows)} rows from {table_name}")
    return rows
