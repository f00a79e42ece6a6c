"""
Purpose: Guard the route correctness contract.
What it does:
Checks that every order in a route has exactly one PICKUP and one DROPOFF node,
with the pickup strictly before the dropoff.

A failure here is a programming error in the planner, not bad input, so it is
raised and never downgraded to "skip this record".
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..models import RouteNode, StopType


class RouteInvariantError(RuntimeError):
    """Raised when a route breaks pickup-before-dropoff precedence."""
    pass


def check_route_precedence(route: List[RouteNode], expected_order_ids: Optional[Iterable[str]] = None) -> None:
    pickup_index: Dict[str, int] = {}
    dropoff_index: Dict[str, int] = {}

    for index, node in enumerate(route):
        seen = pickup_index if node.stop_type == StopType.PICKUP else dropoff_index
        if node.order_id in seen:
            raise RouteInvariantError(
                f"Order {node.order_id} has more than one {node.stop_type.value} node in route"
            )
        seen[node.order_id] = index

    if set(pickup_index) != set(dropoff_index):
        unmatched = sorted(set(pickup_index) ^ set(dropoff_index))
        raise RouteInvariantError(f"Orders without a matching pickup/dropoff pair: {unmatched}")

    for order_id, p_idx in pickup_index.items():
        if p_idx >= dropoff_index[order_id]:
            raise RouteInvariantError(
                f"Order {order_id} is dropped off (stop {dropoff_index[order_id]}) "
                f"before it is picked up (stop {p_idx})"
            )

    if expected_order_ids is not None:
        expected = set(expected_order_ids)
        if expected != set(pickup_index):
            raise RouteInvariantError(
                f"Route covers {sorted(pickup_index)} but batch holds {sorted(expected)}"
            )
