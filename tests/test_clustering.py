import random

import pytest

from drivers.models import Driver, DriverStatus
from orders.batching.engine import cluster_orders, run_clustering
from orders.batching.policy import BatchingPolicy
from orders.models import GeoPoint, Order, StopType


def order(order_id, pickup, dropoff):
    return Order(
        id=order_id,
        pickup=GeoPoint(*pickup) if pickup else None,
        dropoff=GeoPoint(*dropoff) if dropoff else None,
    )


def mock_driver(driver_id="D1", lat=35.0, lon=-78.0, status=DriverStatus.AVAILABLE):
    return Driver.new(driver_id, lat, lon, status, name=f"Driver-{driver_id}")


def assert_pickup_before_dropoff(batch):
    for order_id in batch.order_ids:
        p = batch.stop_index(order_id, StopType.PICKUP)
        d = batch.stop_index(order_id, StopType.DROPOFF)
        assert 0 <= p < d, f"{order_id}: pickup {p}, dropoff {d}"


@pytest.fixture
def o1():
    return order("O1", (35.0, -78.0), (35.01, -78.0))


@pytest.fixture
def scattered_orders():
    rng = random.Random(42)
    orders = []
    for i in range(25):
        lat = 35.0 + rng.uniform(-0.05, 0.05)
        lon = -78.0 + rng.uniform(-0.05, 0.05)
        orders.append(order(f"R{i}", (lat, lon), (lat + rng.uniform(-0.02, 0.02), lon + rng.uniform(-0.02, 0.02))))
    return orders


def test_scenario_a_single_order_single_batch(o1):
    batches = cluster_orders([o1], [mock_driver()])

    assert len(batches) == 1
    assert batches[0].order_ids == ["O1"]
    assert [(n.order_id, n.stop_type) for n in batches[0].route] == [
        ("O1", StopType.PICKUP),
        ("O1", StopType.DROPOFF),
    ]


def test_scenario_b_on_the_way_orders_merge(o1):
    o2 = order("O2", (35.005, -78.001), (35.015, -78.001))

    batches = cluster_orders([o1, o2], [mock_driver()])

    assert len(batches) == 1
    assert set(batches[0].order_ids) == {"O1", "O2"}
    assert batches[0].stop_index("O2", StopType.PICKUP) < batches[0].stop_index("O2", StopType.DROPOFF)


def test_waypoints_follow_route_order(o1):
    o2 = order("O2", (35.005, -78.001), (35.015, -78.001))

    batch = cluster_orders([o1, o2], [mock_driver()])[0]

    assert batch.waypoints() == [(n.location.lat, n.location.lon) for n in batch.route]
    assert batch.waypoints() == [(35.0, -78.0), (35.005, -78.001), (35.01, -78.0), (35.015, -78.001)]


def test_scenario_c_far_orders_split(o1):
    o3 = order("O3", (35.2, -78.2), (35.21, -78.2))

    batches = cluster_orders([o1, o3], [mock_driver()])

    assert len(batches) == 2
    assert sum(b.size for b in batches) == 2


def test_scenario_d_cap_limits_batch_size(o1):
    orders = [
        o1,
        order("O2", (35.0, -78.002), (35.012, -78.002)),
        order("O3", (35.0, -78.004), (35.013, -78.004)),
    ]

    batches = cluster_orders(orders, [mock_driver()], max_orders_per_batch=2)

    assert len(batches) >= 2
    assert batches[0].size <= 2
    assert all(b.size <= 2 for b in batches)


def test_wider_detour_threshold_merges_far_orders(o1):
    o3 = order("O3", (35.2, -78.2), (35.21, -78.2))

    batches = cluster_orders([o1, o3], [mock_driver()], max_detour_km=100.0)

    assert len(batches) == 1


def test_no_drivers_or_orders_give_empty_list(o1):
    assert cluster_orders([], [mock_driver()]) == []
    assert cluster_orders([o1], []) == []
    assert cluster_orders([o1], [mock_driver(status=DriverStatus.OFFLINE)]) == []
    assert cluster_orders([o1], [Driver(id="D9", name="Nowhere", location=None)]) == []


def test_unavailable_drivers_are_skipped_and_order_is_significant(o1):
    o3 = order("O3", (35.2, -78.2), (35.21, -78.2))
    drivers = [
        mock_driver("BUSY", status=DriverStatus.BUSY),
        mock_driver("FIRST"),
        mock_driver("SECOND", 35.2, -78.2),
    ]

    batches = cluster_orders([o1, o3], drivers)

    # the first available driver consumes the whole pool
    assert {b.driver_id for b in batches} == {"FIRST"}
    assert sorted(oid for b in batches for oid in b.order_ids) == ["O1", "O3"]


def test_invariants_hold_on_larger_pool(scattered_orders):
    drivers = [mock_driver("D1"), mock_driver("D2", 35.03, -78.03)]

    batches = cluster_orders(scattered_orders, drivers, max_orders_per_batch=4)

    seen = []
    for batch in batches:
        assert_pickup_before_dropoff(batch)
        assert 1 <= batch.size <= 4
        assert len(batch.route) == 2 * batch.size
        seen.extend(batch.order_ids)

    assert len(seen) == len(set(seen))
    assert sorted(seen) == sorted(o.id for o in scattered_orders)


def test_same_snapshot_gives_same_membership(scattered_orders):
    drivers = [mock_driver("D1"), mock_driver("D2", 35.03, -78.03)]

    first = cluster_orders(scattered_orders, drivers, max_orders_per_batch=3)
    second = cluster_orders(list(scattered_orders), list(drivers), max_orders_per_batch=3)

    assert [(b.driver_id, b.order_ids) for b in first] == [(b.driver_id, b.order_ids) for b in second]


def test_run_clustering_reports_skipped_and_unassigned(o1):
    broken = order("BROKEN", None, (35.01, -78.0))

    result = run_clustering([o1, broken], [mock_driver()])
    assert [o.id for o in result.skipped_orders] == ["BROKEN"]
    assert result.assigned_order_ids == ["O1"]
    assert result.unassigned_orders == []

    nobody = run_clustering([o1, broken], [mock_driver(status=DriverStatus.OFFLINE)])
    assert nobody.batches == []
    assert [o.id for o in nobody.unassigned_orders] == ["O1"]


def test_inputs_are_not_mutated(o1):
    orders = [o1, order("O2", (35.005, -78.001), (35.015, -78.001))]
    drivers = [mock_driver()]

    cluster_orders(orders, drivers)

    assert [o.id for o in orders] == ["O1", "O2"]
    assert all(o.driver_id is None for o in orders)
    assert drivers[0].status == DriverStatus.AVAILABLE


def test_invalid_policy_is_rejected(o1):
    with pytest.raises(ValueError):
        run_clustering([o1], [mock_driver()], BatchingPolicy(max_orders_per_batch=0))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_orders_per_batch": 0},
        {"max_detour_km": -1.0},
    ],
)
def test_cluster_orders_rejects_bad_configuration(o1, kwargs):
    with pytest.raises(ValueError):
        cluster_orders([o1], [mock_driver()], **kwargs)
