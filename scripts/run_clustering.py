import argparse
import csv
import logging
import time

from dispatch.assignment import NoAvailableDriversError, assign_orders_to_drivers
from orders.batching.policy import BatchingPolicy, policy_from_env
from orders.loaders import load_drivers_csv, load_orders_csv

logger = logging.getLogger("run_clustering")


def write_batches(batches, output_path):
    with open(output_path, "w", newline="") as file:
        writer = csv.writer(file)
        writer.writerow(["batch_id", "driver_id", "driver_name", "stop_index", "stop_type", "order_id", "lat", "lon", "leg_km"])
        for batch in batches:
            for index, node in enumerate(batch.route):
                writer.writerow([
                    batch.id,
                    batch.driver_id,
                    batch.driver_name,
                    index,
                    node.stop_type.value,
                    node.order_id,
                    node.location.lat,
                    node.location.lon,
                    round(node.distance_from_previous_km or 0.0, 3),
                ])


def run(orders_path, drivers_path, output_path, max_orders=None, max_detour_km=None):
    orders = load_orders_csv(orders_path)
    drivers = load_drivers_csv(drivers_path)

    policy = policy_from_env()
    if max_orders is not None or max_detour_km is not None:
        policy = BatchingPolicy(
            max_orders_per_batch=max_orders if max_orders is not None else policy.max_orders_per_batch,
            max_detour_km=max_detour_km if max_detour_km is not None else policy.max_detour_km,
        )

    logger.info(
        "Batching %d orders across %d drivers (cap=%d, detour<=%.1f km)",
        len(orders), len(drivers), policy.max_orders_per_batch, policy.max_detour_km,
    )

    start_time = time.time()
    try:
        outcome = assign_orders_to_drivers(orders, drivers, policy)
    except NoAvailableDriversError as exc:
        logger.error("%s", exc)
        return 1
    logger.info("Built %d batches in %.2fs", len(outcome.batches), time.time() - start_time)

    for batch in outcome.batches:
        logger.info("%s -> %s: %d orders, %.2f km", batch.id, batch.driver_id, batch.size, batch.total_distance_km)

    if outcome.unassigned_orders:
        logger.info("Left for a later run: %s", ", ".join(o.id for o in outcome.unassigned_orders))

    write_batches(outcome.batches, output_path)
    logger.info("Results written to '%s'", output_path)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Cluster orders into driver batches.")
    parser.add_argument("--orders", default="mock_orders.csv")
    parser.add_argument("--drivers", default="mock_drivers.csv")
    parser.add_argument("--output", default="batches.csv")
    parser.add_argument("--max-orders", type=int, default=None)
    parser.add_argument("--max-detour-km", type=float, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    raise SystemExit(run(args.orders, args.drivers, args.output, args.max_orders, args.max_detour_km))
