"""
Purpose: Turn tabular exports (CSV / DataFrame) into domain models.
What it does:
- orders_from_frame / drivers_from_frame map DataFrame rows to Order / Driver
- load_orders_csv / load_drivers_csv wrap pandas.read_csv

Missing optional columns and NaN cells become None. Rows with bad coordinates
are still loaded: deciding what is batchable is the engine's job. Rows whose
status is not a known OrderStatus / DriverStatus are skipped with a warning.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import pandas as pd

from drivers.models import Driver, DriverStatus
from .models import GeoPoint, Order, OrderStatus

logger = logging.getLogger(__name__)


def _cell(row: pd.Series, column: str) -> Any:
    if column not in row.index:
        return None
    value = row[column]
    if pd.isna(value):
        return None
    return value


def _point(row: pd.Series, lat_column: str, lon_column: str) -> Optional[GeoPoint]:
    lat = _cell(row, lat_column)
    lon = _cell(row, lon_column)
    if lat is None or lon is None:
        return None
    try:
        return GeoPoint(float(lat), float(lon))
    except (TypeError, ValueError):
        return None


def _status(value: Any, enum_cls, default):
    if value is None:
        return default
    return enum_cls(str(value).strip().lower())


def orders_from_frame(df: pd.DataFrame) -> List[Order]:
    """
    Rows with an unknown status are skipped (logged), never raised.
    """
    orders = []
    for _, row in df.iterrows():
        order_id = str(row["order_id"])
        driver_id = _cell(row, "driver_id")
        try:
            status = _status(_cell(row, "status"), OrderStatus, OrderStatus.PENDING)
        except ValueError:
            logger.warning("Skipping order %s: unknown status %r", order_id, row["status"])
            continue

        orders.append(
            Order(
                id=order_id,
                pickup=_point(row, "pickup_lat", "pickup_lon"),
                business_location=_point(row, "business_lat", "business_lon"),
                dropoff=_point(row, "dropoff_lat", "dropoff_lon"),
                driver_id=str(driver_id) if driver_id is not None else None,
                status=status,
            )
        )
    return orders


def drivers_from_frame(df: pd.DataFrame) -> List[Driver]:
    """
    Rows with an unknown status are skipped (logged), never raised.
    """
    drivers = []
    for _, row in df.iterrows():
        driver_id = str(row["driver_id"])
        lat = _cell(row, "lat")
        lon = _cell(row, "lon")
        name = _cell(row, "name")
        try:
            status = _status(_cell(row, "status"), DriverStatus, DriverStatus.AVAILABLE)
        except ValueError:
            logger.warning("Skipping driver %s: unknown status %r", driver_id, row["status"])
            continue

        drivers.append(
            Driver.new(
                driver_id,
                float(lat) if lat is not None else None,
                float(lon) if lon is not None else None,
                status=status,
                name=str(name) if name is not None else None,
            )
        )
    return drivers


def load_orders_csv(path: str) -> List[Order]:
    orders = orders_from_frame(pd.read_csv(path))
    logger.info("Loaded %d order(s) from %s", len(orders), path)
    return orders


def load_drivers_csv(path: str) -> List[Driver]:
    drivers = drivers_from_frame(pd.read_csv(path))
    logger.info("Loaded %d driver(s) from %s", len(drivers), path)
    return drivers
