import pytest

from drivers.models import Driver, DriverStatus
from orders.batching.assembler import build_batches_for_driver
from orders.batching.insertion import route_distance_km
from orders.batching.policy import BatchingPolicy
from orders.models import BatchStatus, GeoPoint, Order, StopType
from orders.pool import OrderPool


def order(order_id, pickup, dropoff):
    return Order(
        id=order_id,
        pickup=GeoPoint(*pickup) if pickup else None,
        dropoff=GeoPoint(*dropoff) if dropoff else None,
    )


@pytest.fixture
def driver():
    return Driver.new("D1", 35.0, -78.0, DriverStatus.AVAILABLE, name="Driver-D1")


@pytest.fixture
def close_orders():
    return [
        order("O1", (35.0, -78.0), (35.01, -78.0)),
        order("O2", (35.0, -78.002), (35.012, -78.002)),
        order("O3", (35.0, -78.004), (35.013, -78.004)),
    ]


def test_single_seed_forms_pickup_dropoff_batch(driver):
    pool = OrderPool([order("O1", (35.0, -78.0), (35.01, -78.0))])

    result = build_batches_for_driver(driver, pool)

    assert len(result.batches) == 1
    batch = result.batches[0]
    assert batch.order_ids == ["O1"]
    assert [n.stop_type for n in batch.route] == [StopType.PICKUP, StopType.DROPOFF]
    assert batch.driver_id == "D1"
    assert batch.driver_name == "Driver-D1"
    assert batch.status == BatchStatus.ASSIGNED
    assert result.assigned_order_ids == ["O1"]


def test_caller_pool_is_not_mutated(driver, close_orders):
    pool = OrderPool(close_orders)

    build_batches_for_driver(driver, pool)

    assert pool.ids() == ["O1", "O2", "O3"]


def test_growth_respects_batch_cap(driver, close_orders):
    result = build_batches_for_driver(driver, OrderPool(close_orders), BatchingPolicy(max_orders_per_batch=2))

    assert [b.size for b in result.batches] == [2, 1]
    assert sorted(result.assigned_order_ids) == ["O1", "O2", "O3"]


def test_growth_stops_when_detour_exceeds_threshold(driver):
    pool = OrderPool([
        order("O1", (35.0, -78.0), (35.01, -78.0)),
        order("FAR", (35.2, -78.2), (35.21, -78.2)),
    ])

    result = build_batches_for_driver(driver, pool, BatchingPolicy(max_detour_km=3.0))

    assert [b.order_ids for b in result.batches] == [["O1"], ["FAR"]]


def test_zero_threshold_still_accepts_free_insertions(driver):
    pool = OrderPool([
        order("O1", (35.0, -78.0), (35.02, -78.0)),
        order("O2", (35.005, -78.0), (35.015, -78.0)),
    ])

    result = build_batches_for_driver(driver, pool, BatchingPolicy(max_detour_km=0.0001))

    assert [b.order_ids for b in result.batches] == [["O1", "O2"]]


def test_lowest_detour_candidate_wins(driver):
    pool = OrderPool([
        order("SEED", (35.0, -78.0), (35.02, -78.0)),
        order("OKAY", (35.005, -78.01), (35.015, -78.01)),
        order("BEST", (35.005, -78.0), (35.015, -78.0)),
    ])

    result = build_batches_for_driver(driver, pool, BatchingPolicy(max_orders_per_batch=2))

    assert result.batches[0].order_ids == ["SEED", "BEST"]
    assert result.batches[1].order_ids == ["OKAY"]


def test_bad_geometry_is_discarded_not_raised(driver):
    pool = OrderPool([
        order("BROKEN", None, (35.01, -78.0)),
        order("O1", (35.0, -78.0), (35.01, -78.0)),
    ])

    result = build_batches_for_driver(driver, pool)

    assert result.discarded_order_ids == ["BROKEN"]
    assert [b.order_ids for b in result.batches] == [["O1"]]


def test_busy_driver_gets_nothing(close_orders):
    busy = Driver.new("D2", 35.0, -78.0, DriverStatus.BUSY)
    pool = OrderPool(close_orders)

    result = build_batches_for_driver(busy, pool)

    assert result.batches == []
    assert result.assigned_order_ids == []
    assert len(pool) == 3


def test_total_distance_and_leg_annotations_start_at_driver(close_orders):
    far_driver = Driver.new("D3", 35.05, -78.05, DriverStatus.AVAILABLE)

    batch = build_batches_for_driver(far_driver, OrderPool(close_orders)).batches[0]

    assert batch.total_distance_km == pytest.approx(route_distance_km(batch.route, far_driver.location))
    assert sum(n.distance_from_previous_km for n in batch.route) == pytest.approx(batch.total_distance_km)
    assert batch.route[0].distance_from_previous_km > 5.0
