# tests/test_persistence.py
"""Unit tests for batched persistence."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import MagicMock, call

import pytest
from fleetseed.errors import FatalStageError
from fleetseed.services.persistence import chunked, refresh, save_in_batches

RECORDS = [{"n": i} for i in range(12)]


class TestBatching:
    def test_chunks_keep_order_and_remainder(self):
        sizes = [len(batch) for batch in chunked(RECORDS, 5)]
        assert sizes == [5, 5, 2]

    def test_batch_size_must_be_positive(self):
        with pytest.raises(ValueError):
            list(chunked(RECORDS, 0))

    def test_batches_are_sent_in_order(self):
        storage = MagicMock()
        saved = save_in_batches(storage, "locks", RECORDS, 5)

        assert saved == 12
        assert storage.insert_batch.call_args_list == [
            call("locks", RECORDS[0:5]),
            call("locks", RECORDS[5:10]),
            call("locks", RECORDS[10:12]),
        ]

    def test_empty_collection_issues_no_inserts(self):
        storage = MagicMock()
        assert save_in_batches(storage, "hubs", [], 5) == 0
        storage.insert_batch.assert_not_called()

    def test_failed_batch_stops_the_rest(self):
        storage = MagicMock()
        storage.insert_batch.side_effect = [None, FatalStageError("duplicate key", "locks"), None]

        with pytest.raises(FatalStageError):
            save_in_batches(storage, "locks", RECORDS, 5)
        assert storage.insert_batch.call_count == 2

    def test_refresh_reads_back_rows(self):
        storage = MagicMock()
        storage.select.return_value = [{"lock_id": 1}, {"lock_id": 2}]
        assert refresh(storage, "locks") == [{"lock_id": 1}, {"lock_id": 2}]
        storage.select.assert_called_once_with("locks", None)
