# fleetseed/context.py
"""
Seed context: the entity collections produced so far, keyed by entity kind
(the table name). Stages never mutate a context; they return a new one.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Tuple


@dataclass(frozen=True)
class SeedContext:
    collections: Mapping[str, Tuple[dict, ...]] = field(default_factory=dict)

    def get(self, kind: str) -> List[dict]:
        """Shallow copies of the records, safe for a factory to modify."""
        return [dict(record) for record in self.collections.get(kind, ())]

    def count(self, kind: str) -> int:
        return len(self.collections.get(kind, ()))

    def with_collection(self, kind: str, records: Iterable[dict]) -> "SeedContext":
        updated: Dict[str, Tuple[dict, ...]] = dict(self.collections)
        updated[kind] = tuple(dict(record) for record in records)
        return SeedContext(updated)

    def summary(self) -> Dict[str, int]:
        return {kind: len(records) for kind, records in self.collections.items()}
