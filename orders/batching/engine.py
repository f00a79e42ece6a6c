"""
Purpose: The batching "orchestrator" (single entry point).
What it does:

Coordinates the pipeline end-to-end:

- takes a list of candidate orders and a list of drivers

- keeps only drivers that are available (input order preserved)

- drops orders with no resolvable pickup/dropoff location

- walks the drivers in order, letting each one carve batches out of the
  shared pool (assembler.py), and removes every assigned order from the pool

- returns the batches + whatever could not be assigned

Typical public function signature:

- cluster_orders(orders, drivers, max_orders_per_batch=10) -> List[Batch]

- run_clustering(orders, drivers, policy) -> ClusteringResult
  where ClusteringResult contains:

- batches: List[Batch]

- unassigned_orders: List[Order]  (caller re-queues them for a later run)

- skipped_orders: List[Order]     (unusable geometry)

Driver order matters: earlier drivers get first pick of the pool.

Rule: Engine is the only file other modules should call directly for batching.
"""

# orders/batching/engine.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from drivers.models import Driver
from drivers.selection import filter_available_drivers

from ..models import Batch, Order
from ..pool import OrderPool
from .assembler import build_batches_for_driver
from .policy import DEFAULT_MAX_DETOUR_KM, BatchingPolicy, default_policy

logger = logging.getLogger(__name__)


@dataclass
class ClusteringResult:
    """
    Output of a clustering run.
    """
    batches: List[Batch] = field(default_factory=list)
    unassigned_orders: List[Order] = field(default_factory=list)
    skipped_orders: List[Order] = field(default_factory=list)

    @property
    def assigned_order_ids(self) -> List[str]:
        return [order_id for batch in self.batches for order_id in batch.order_ids]


def run_clustering(
    orders: Sequence[Order],
    drivers: Sequence[Driver],
    policy: Optional[BatchingPolicy] = None,
) -> ClusteringResult:
    """
    Main batching entry point (pure algorithm, no I/O).

    It does NOT mutate orders or drivers. Orders are never assigned twice:
    each driver's assigned ids leave the shared pool before the next driver runs.
    """
    policy = policy or default_policy()
    policy.validate()

    result = ClusteringResult()

    if not orders:
        return result

    available = filter_available_drivers(drivers)

    batchable: List[Order] = []
    for order in orders:
        if order.is_batchable:
            batchable.append(order)
        else:
            logger.warning("Order %s excluded from clustering: no resolvable pickup/dropoff location", order.id)
            result.skipped_orders.append(order)

    pool = OrderPool(batchable)

    if not available:
        logger.info("No available drivers; %d order(s) left unassigned", len(pool))
        result.unassigned_orders = pool.orders()
        return result

    for driver in available:
        if not pool:
            break

        assembly = build_batches_for_driver(driver, pool, policy)
        result.batches.extend(assembly.batches)
        pool.remove_many(assembly.assigned_order_ids)
        pool.remove_many(assembly.discarded_order_ids)

    result.unassigned_orders = pool.orders()

    logger.info(
        "Clustering produced %d batch(es) for %d order(s); %d unassigned, %d skipped",
        len(result.batches),
        len(result.assigned_order_ids),
        len(result.unassigned_orders),
        len(result.skipped_orders),
    )
    return result


def cluster_orders(
    orders: Sequence[Order],
    drivers: Sequence[Driver],
    max_orders_per_batch: int = 10,
    max_detour_km: Optional[float] = None,
) -> List[Batch]:
    """
    Group orders into driver batches. Returns an empty list when there is
    nothing to batch or nobody to batch for.

    Bad records are skipped, but a bad cap or threshold is a configuration
    error: ValueError is raised before any order is looked at.
    """
    policy = BatchingPolicy(
        max_orders_per_batch=max_orders_per_batch,
        max_detour_km=DEFAULT_MAX_DETOUR_KM if max_detour_km is None else max_detour_km,
    )
    return run_clustering(orders, drivers, policy).batches
