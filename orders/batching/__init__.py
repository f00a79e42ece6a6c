"""
Batching subpackage for the Orders domain.

Public API:
- cluster_orders / run_clustering
- ClusteringResult
- BatchingPolicy
"""

from .engine import cluster_orders, run_clustering, ClusteringResult
from .assembler import build_batches_for_driver, AssemblyResult
from .insertion import best_insertion, route_distance_km, InsertionResult
from .policy import BatchingPolicy, default_policy, policy_from_env
from .validation import RouteInvariantError, check_route_precedence

__all__ = [
    "cluster_orders",
    "run_clustering",
    "ClusteringResult",
    "build_batches_for_driver",
    "AssemblyResult",
    "best_insertion",
    "route_distance_km",
    "InsertionResult",
    "BatchingPolicy",
    "default_policy",
    "policy_from_env",
    "RouteInvariantError",
    "check_route_precedence",
]
