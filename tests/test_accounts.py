# tests/test_accounts.py
"""Unit tests for operator, user and customer factories."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import random
from collections import Counter
from unittest.mock import patch

import pytest
from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.fixtures import Fixtures
from fleetseed.schemas.fixtures import CustomerFixture, OperatorFixture, UserFixture
from fleetseed.services.accounts import (
    assign_operators,
    create_customers,
    create_operators,
    create_users,
)
from fleetseed.utils.passwords import check_password, make_password


def make_fixtures(customers=8):
    return Fixtures(
        operators=[
            OperatorFixture(first_name="Op", last_name=str(i), email=f"op{i}@example.com", password="secret")
            for i in range(3)
        ],
        users=[
            UserFixture(username=f"u{i}", email=f"u{i}@example.com", password="password", first_name="U", last_name=str(i))
            for i in range(2)
        ],
        customers=[
            CustomerFixture(customer_name=f"Customer {i}", region="Berlin") for i in range(customers)
        ],
    )


class TestAssignOperators:
    def test_every_operator_reaches_minimum(self):
        for seed in range(25):
            assignments = assign_operators(12, [1, 2, 3, 4], 2, random.Random(seed))
            counts = Counter(assignments)
            assert len(assignments) == 12
            assert all(counts[op] >= 2 for op in (1, 2, 3, 4))

    def test_exact_fit(self):
        assignments = assign_operators(6, [10, 20, 30], 2, random.Random(3))
        assert Counter(assignments) == {10: 2, 20: 2, 30: 2}

    def test_no_operators_raises(self):
        with pytest.raises(ValueError):
            assign_operators(3, [], 1, random.Random(0))


class TestFactories:
    def test_operators_get_hashed_passwords(self):
        with patch("fleetseed.services.accounts.make_password", return_value="hashed") as mock_hash:
            operators = create_operators(SeedContext(), make_fixtures(), random.Random(0), Settings())

        assert len(operators) == 3
        assert all(op["password"] == "hashed" for op in operators)
        mock_hash.assert_called_with("secret")

    def test_users_get_lock_capacity_and_creation_date(self):
        settings = Settings(MAX_LOCKS_PER_USER=5)
        with patch("fleetseed.services.accounts.make_password", return_value="hashed"):
            users = create_users(SeedContext(), make_fixtures(), random.Random(0), settings)

        assert [u["username"] for u in users] == ["u0", "u1"]
        assert all(u["max_locks"] == 5 for u in users)
        assert all(isinstance(u["date_created"], int) for u in users)
        assert all(u["password"] == "hashed" for u in users)

    def test_customers_are_spread_over_operators(self):
        context = SeedContext().with_collection(
            "operators", [{"operator_id": 7}, {"operator_id": 8}, {"operator_id": 9}]
        )
        settings = Settings(MIN_FLEETS_PER_OPERATOR=2)
        customers = create_customers(context, make_fixtures(customers=8), random.Random(1), settings)

        counts = Counter(c["operator_id"] for c in customers)
        assert len(customers) == 8
        assert set(counts) <= {7, 8, 9}
        assert all(counts[op] >= 2 for op in (7, 8, 9))
        assert customers[0]["customer_name"] == "Customer 0"


class TestPasswords:
    def test_hash_verifies(self):
        hashed = make_password("password")
        assert hashed != "password"
        assert check_password("password", hashed)
        assert not check_password("wrong", hashed)
