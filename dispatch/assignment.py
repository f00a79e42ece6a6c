"""
Purpose: Assignment service (the glue between order storage and the batching engine).
What it does:
Takes the current order list and driver roster, keeps only the orders that are
still waiting for a driver, runs the batching engine, and hands back updated
copies of every batched order (driver_id set, status ASSIGNED) so the caller
can persist batches and orders together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence

from drivers.models import Driver
from drivers.selection import filter_available_drivers
from orders.batching.engine import run_clustering
from orders.batching.policy import BatchingPolicy, default_policy
from orders.models import Batch, Order, OrderStatus

logger = logging.getLogger(__name__)

ASSIGNABLE_STATUSES = (OrderStatus.PENDING, OrderStatus.READY)


class NoAvailableDriversError(Exception):
    """Raised when there are orders to assign but no driver can take them."""
    pass


class OrderStateError(Exception):
    """Raised when an invalid order transition is attempted."""
    pass


@dataclass
class AssignmentOutcome:
    batches: List[Batch] = field(default_factory=list)
    # updated copies of the batched orders, ready to persist
    orders: List[Order] = field(default_factory=list)
    unassigned_orders: List[Order] = field(default_factory=list)


def eligible_orders(orders: Sequence[Order]) -> List[Order]:
    """
    Orders still waiting for a driver, with a usable pickup and dropoff.
    """
    return [
        order for order in orders
        if order.driver_id is None
        and order.status in ASSIGNABLE_STATUSES
        and order.is_batchable
    ]


def mark_orders_assigned(orders: Sequence[Order], batch: Batch) -> List[Order]:
    """
    Once a batch is created, its orders are locked to the batch driver.
    Returns new Order instances; the inputs are left untouched.
    """
    updated = []
    for order in orders:
        if order.driver_id is not None and order.driver_id != batch.driver_id:
            raise OrderStateError(
                f"Order {order.id} is already assigned to driver {order.driver_id}"
            )
        if order.status not in ASSIGNABLE_STATUSES + (OrderStatus.ASSIGNED,):
            raise OrderStateError(f"Order {order.id} cannot be assigned from {order.status.value}")
        updated.append(replace(order, driver_id=batch.driver_id, status=OrderStatus.ASSIGNED))
    return updated


def assign_orders_to_drivers(
    orders: Sequence[Order],
    drivers: Sequence[Driver],
    policy: Optional[BatchingPolicy] = None,
) -> AssignmentOutcome:
    """
    Cluster every assignable order into batches and stamp each batched order
    with its driver.

    Raises NoAvailableDriversError when there is work but no available driver;
    the batching engine itself treats that case as "nothing to do".
    """
    policy = policy or default_policy()

    candidates = eligible_orders(orders)
    if not candidates:
        logger.info("No assignable orders")
        return AssignmentOutcome()

    if not filter_available_drivers(drivers):
        raise NoAvailableDriversError("No available drivers found")

    clustering = run_clustering(candidates, drivers, policy)

    outcome = AssignmentOutcome(
        batches=clustering.batches,
        unassigned_orders=clustering.unassigned_orders + clustering.skipped_orders,
    )
    for batch in clustering.batches:
        stamped = mark_orders_assigned(batch.orders, batch)
        # the batch carries the same updated orders the caller persists
        batch.orders = stamped
        outcome.orders.extend(stamped)

    logger.info(
        "Assigned %d order(s) in %d batch(es); %d left for a later run",
        len(outcome.orders), len(outcome.batches), len(outcome.unassigned_orders),
    )
    return outcome
