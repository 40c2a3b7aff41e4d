# fleetseed/services/accounts.py
"""
Account factories: operators, users and customers.
Operators and users come from fixtures with hashed passwords; customers are
spread across operators so that each operator gets a minimum share first.
"""

import random
from typing import Dict, List, Sequence

from fleetseed.config import Settings
from fleetseed.context import SeedContext
from fleetseed.fixtures import Fixtures
from fleetseed.utils.logger import get_logger
from fleetseed.utils.passwords import make_password
from fleetseed.utils.random_utils import random_past_timestamp

logger = get_logger(__name__)


def create_operators(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    operators = []
    for raw in fixtures.operators:
        operator = raw.model_dump()
        operator["password"] = make_password(raw.password)
        operators.append(operator)
    logger.info(f"Created {len(operators)} operators")
    return operators


def create_users(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    users = []
    for raw in fixtures.users:
        user = raw.model_dump()
        user["password"] = make_password(raw.password)
        user["date_created"] = random_past_timestamp(rng, settings.REFERENCE_TIME)
        user["max_locks"] = settings.MAX_LOCKS_PER_USER
        users.append(user)
    logger.info(f"Created {len(users)} users")
    return users


def assign_operators(
    customer_count: int,
    operator_ids: Sequence[int],
    minimum: int,
    rng: random.Random,
) -> List[int]:
    """
    Pick an operator for each customer.

    Until every operator holds `minimum` customers, a drawn operator that is
    already at the minimum is rejected and another one is drawn. After that,
    draws are accepted as-is.

    Precondition: customer_count >= len(operator_ids) * minimum. With fewer
    customers the guarantee cannot be met and the loop has no termination
    bound; it is kept that way rather than silently capped.
    """
    if not operator_ids:
        raise ValueError("Cannot assign customers without operators")

    counts: Dict[int, int] = {}
    assignments = []
    for _ in range(customer_count):
        while True:
            operator_id = rng.choice(operator_ids)
            all_full = all(counts.get(op, 0) >= minimum for op in operator_ids)
            if all_full:
                break
            if counts.get(operator_id, 0) < minimum:
                counts[operator_id] = counts.get(operator_id, 0) + 1
                break
        assignments.append(operator_id)
    return assignments


def create_customers(context: SeedContext, fixtures: Fixtures, rng: random.Random, settings: Settings) -> List[dict]:
    operator_ids = [op["operator_id"] for op in context.get("operators")]
    minimum = settings.MIN_FLEETS_PER_OPERATOR
    if len(fixtures.customers) < len(operator_ids) * minimum:
        logger.warning(
            f"Only {len(fixtures.customers)} customers for {len(operator_ids)} operators "
            f"with a minimum of {minimum} each; customer assignment may not terminate"
        )

    assignments = assign_operators(len(fixtures.customers), operator_ids, minimum, rng)
    customers = []
    for raw, operator_id in zip(fixtures.customers, assignments):
        customer = raw.model_dump()
        customer["operator_id"] = operator_id
        customers.append(customer)
    logger.info(f"Created {len(customers)} customers across {len(operator_ids)} operators")
    return customers
