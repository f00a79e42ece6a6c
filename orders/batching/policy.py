"""
Purpose: Central configuration for batching behavior (single source of truth).
What it does:

Stores all tunable thresholds/caps:

MAX_ORDERS_PER_BATCH = 10

MAX_DETOUR_KM = 3.0

Optionally reads overrides from the environment (.env supported) so ops can
tune without a deploy.

Rule: No logic here—just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MAX_ORDERS_PER_BATCH = 10
DEFAULT_MAX_DETOUR_KM = 3.0

ENV_MAX_ORDERS_PER_BATCH = "BATCH_MAX_ORDERS_PER_BATCH"
ENV_MAX_DETOUR_KM = "BATCH_MAX_DETOUR_KM"


@dataclass(frozen=True)
class BatchingPolicy:
    """
    Central configuration for order batching.

    Notes:
    - 'max_detour_km' is the "close enough to be on the way" rule: an order joins
      a growing batch only if splicing its pickup+dropoff in adds at most this
      much straight-line distance to the route.
      Lower = stricter batching (smaller batches, more of them).
    - 'max_orders_per_batch' bounds route length, and with it the O(L^3)
      insertion search per candidate.
    """

    # --- Batch size caps ---
    max_orders_per_batch: int = DEFAULT_MAX_ORDERS_PER_BATCH

    # --- Detour cap (km of extra travel per accepted order) ---
    max_detour_km: float = DEFAULT_MAX_DETOUR_KM

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.max_orders_per_batch < 1:
            raise ValueError("max_orders_per_batch must be >= 1")

        if self.max_detour_km < 0:
            raise ValueError("max_detour_km must be >= 0")


def default_policy() -> BatchingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = BatchingPolicy()
    p.validate()
    return p


def policy_from_env(dotenv_path: Optional[str] = None) -> BatchingPolicy:
    """
    Build a policy from environment variables, loading a .env file first.
    Unset variables keep their defaults; unparsable ones raise ValueError.
    """
    load_dotenv(dotenv_path)

    max_orders = os.getenv(ENV_MAX_ORDERS_PER_BATCH)
    max_detour = os.getenv(ENV_MAX_DETOUR_KM)

    try:
        p = BatchingPolicy(
            max_orders_per_batch=int(max_orders) if max_orders else DEFAULT_MAX_ORDERS_PER_BATCH,
            max_detour_km=float(max_detour) if max_detour else DEFAULT_MAX_DETOUR_KM,
        )
    except ValueError as exc:
        raise ValueError(f"Invalid batching configuration in environment: {exc}") from exc

    p.validate()
    return p
