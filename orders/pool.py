"""
Purpose: The working set of orders for one clustering run.
What it does:
- Keeps not-yet-batched orders in arrival order (id -> Order)
- Makes consumption explicit: pop_next / remove / remove_many
- copy() gives a per-driver working pool so a driver step never edits
  the shared pool behind the orchestrator's back

Rule: The pool owns membership only. It knows nothing about routes or drivers.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from .models import Order


class OrderPool:
    """
    Insertion-ordered pool of orders. Duplicate ids keep the first occurrence.
    """

    def __init__(self, orders: Iterable[Order] = ()):
        self._orders: Dict[str, Order] = {}
        for order in orders:
            #idempotency: dont double insert
            if order.id not in self._orders:
                self._orders[order.id] = order

    def __len__(self) -> int:
        return len(self._orders)

    def __bool__(self) -> bool:
        return bool(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(list(self._orders.values()))

    def __contains__(self, order_id: object) -> bool:
        return order_id in self._orders

    def orders(self) -> List[Order]:
        return list(self._orders.values())

    def ids(self) -> List[str]:
        return list(self._orders.keys())

    def peek_next(self) -> Optional[Order]:
        for order in self._orders.values():
            return order
        return None

    def pop_next(self) -> Optional[Order]:
        """
        FIFO pop of the oldest order still in the pool.
        """
        order = self.peek_next()
        if order is not None:
            del self._orders[order.id]
        return order

    def remove(self, order_id: str) -> Optional[Order]:
        return self._orders.pop(order_id, None)

    def remove_many(self, order_ids: Iterable[str]) -> int:
        removed = 0
        for order_id in order_ids:
            if self._orders.pop(order_id, None) is not None:
                removed += 1
        return removed

    def copy(self) -> OrderPool:
        return OrderPool(self._orders.values())

    def __repr__(self) -> str:
        return f"OrderPool(size={len(self._orders)})"
