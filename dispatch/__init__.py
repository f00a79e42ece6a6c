#Expose the high-level assignment pipeline:
#Eligible-order filtering
#Batching run + driver stamping (the "one call" entry point)

from .assignment import (
    AssignmentOutcome,
    NoAvailableDriversError,
    OrderStateError,
    assign_orders_to_drivers,
    eligible_orders,
    mark_orders_assigned,
)

__all__ = [
    "AssignmentOutcome",
    "NoAvailableDriversError",
    "OrderStateError",
    "assign_orders_to_drivers",
    "eligible_orders",
    "mark_orders_assigned",
]
