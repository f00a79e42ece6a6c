"""
Purpose: Build one driver's batches from the shared order pool.
What it does:

Per driver, loops while the pool has orders and the driver can take work:

1) SEED   - pop the next pool order; start Route = [pickup, dropoff].
            Orders with unusable geometry are discarded, never re-added.
2) GROW   - price every remaining order with best_insertion against the
            current route; take the globally smallest detour. Accept it if
            detour <= policy.max_detour_km, otherwise stop growing.
            Growth also stops at policy.max_orders_per_batch.
3) CLOSE  - validate precedence, annotate leg distances, emit a Batch.

Rule: The assembler works on its own copy of the pool. The orchestrator
decides what leaves the shared pool, using the returned assigned ids.
"""

# orders/batching/assembler.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from drivers.models import Driver
from routing.distance import haversine_km

from ..models import Batch, GeoPoint, Order, RouteNode
from ..pool import OrderPool
from .insertion import InsertionResult, best_insertion, route_distance_km
from .policy import BatchingPolicy, default_policy
from .validation import check_route_precedence

logger = logging.getLogger(__name__)


@dataclass
class AssemblyResult:
    """
    Output of one driver's assembly step.
    """
    batches: List[Batch] = field(default_factory=list)
    assigned_order_ids: List[str] = field(default_factory=list)
    discarded_order_ids: List[str] = field(default_factory=list)


def build_batches_for_driver(
    driver: Driver,
    pool: OrderPool,
    policy: Optional[BatchingPolicy] = None,
) -> AssemblyResult:
    """
    Greedily carve `pool` into batches for `driver`.

    The caller's pool is not modified; remove `assigned_order_ids` from it
    afterwards. A busy driver gets nothing and the pool is left as is.
    """
    policy = policy or default_policy()
    result = AssemblyResult()

    if driver.is_busy:
        logger.debug("Driver %s is %s, skipping assembly", driver.id, driver.status.value)
        return result

    working = pool.copy()
    start = driver.start_point

    while working and not driver.is_busy:
        # 1) Seed
        seed = working.pop_next()
        if not seed.is_batchable:
            logger.warning("Discarding order %s: no resolvable pickup/dropoff location", seed.id)
            result.discarded_order_ids.append(seed.id)
            continue

        route: List[RouteNode] = [seed.pickup_node(), seed.dropoff_node()]
        batch_orders: List[Order] = [seed]

        # 2) Grow
        while len(batch_orders) < policy.max_orders_per_batch and working:
            picked = _cheapest_candidate(route, working, start)
            if picked is None:
                break

            candidate, insertion = picked
            if insertion.detour_km > policy.max_detour_km:
                logger.debug(
                    "Best candidate %s needs %.3f km detour (> %.3f km), closing batch",
                    candidate.id, insertion.detour_km, policy.max_detour_km,
                )
                break

            route = insertion.route
            batch_orders.append(candidate)
            working.remove(candidate.id)

        # 3) Close
        batch = _close_batch(driver, batch_orders, route, start)
        result.batches.append(batch)
        result.assigned_order_ids.extend(batch.order_ids)

        logger.debug(
            "Driver %s: closed batch %s with %d order(s), %.2f km",
            driver.id, batch.id, batch.size, batch.total_distance_km,
        )

    return result


def _cheapest_candidate(
    route: List[RouteNode],
    pool: OrderPool,
    start: Optional[GeoPoint],
) -> Optional[Tuple[Order, InsertionResult]]:
    """
    Price every batchable pool order against `route`; return the order with the
    smallest detour. The first candidate in pool order wins ties.
    """
    best: Optional[Tuple[Order, InsertionResult]] = None

    for candidate in pool:
        if not candidate.is_batchable:
            # left in the pool; it is discarded once it comes up as a seed
            continue

        insertion = best_insertion(
            route,
            candidate.pickup_point,
            candidate.dropoff_point,
            start,
            candidate.id,
        )
        if insertion is None:
            continue

        if best is None or insertion.detour_km < best[1].detour_km:
            best = (candidate, insertion)

    return best


def _close_batch(
    driver: Driver,
    orders: List[Order],
    route: List[RouteNode],
    start: Optional[GeoPoint],
) -> Batch:
    check_route_precedence(route, expected_order_ids=[o.id for o in orders])

    annotated: List[RouteNode] = []
    previous = start
    for node in route:
        leg = haversine_km(previous, node.location) if previous is not None else 0.0
        annotated.append(replace(node, distance_from_previous_km=leg))
        previous = node.location

    return Batch.new(
        driver_id=driver.id,
        driver_name=driver.name,
        orders=orders,
        route=annotated,
        total_distance_km=route_distance_km(route, start),
    )
