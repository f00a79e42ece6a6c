"""
Orders domain package.

Public API:
- Domain models: GeoPoint, Order, RouteNode, Batch, OrderStatus, StopType, BatchStatus
- Working pool: OrderPool
- Batching entry: orders.batching.cluster_orders

"""
from .models import GeoPoint, Order, RouteNode, Batch, OrderStatus, StopType, BatchStatus
from .pool import OrderPool

__all__ = ["GeoPoint",
           "Order",
             "RouteNode",
               "Batch",
               "OrderStatus",
               "StopType",
               "BatchStatus",
               "OrderPool",
               ]
