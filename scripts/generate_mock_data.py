import argparse
import uuid

import numpy as np
import pandas as pd

# Center around Raleigh, NC
CENTER_LAT = 35.7796
CENTER_LON = -78.6382


def generate_mock_orders(num_orders=200, num_merchants=20, output_file="mock_orders.csv", seed=None):
    """
    Generates delivery orders around a fixed set of merchants (pickups), so that
    several orders originate from the same or nearby stores and batching has
    something to work with. A few rows get a missing dropoff to exercise the
    "unusable geometry" path.
    """
    rng = np.random.default_rng(seed)

    # 1. Generate fixed merchants (pickups) within a ~5km radius (roughly 0.05 degrees)
    merchants = []
    for merchant_index in range(num_merchants):
        merchants.append({
            "id": f"m_{str(uuid.uuid4())[:8]}",
            "name": f"Business {merchant_index + 1}",
            "lat": CENTER_LAT + rng.uniform(-0.05, 0.05),
            "lon": CENTER_LON + rng.uniform(-0.05, 0.05),
        })

    # 2. Generate Orders; dropoff placed within ~3km of the merchant
    data = []
    for order_index in range(num_orders):
        merchant = merchants[rng.integers(0, num_merchants)]
        missing_dropoff = rng.random() < 0.02

        data.append({
            "order_id": f"o_{str(order_index + 1).zfill(6)}",
            "business_id": merchant["id"],
            "business_name": merchant["name"],
            "business_lat": np.round(merchant["lat"], 6),
            "business_lon": np.round(merchant["lon"], 6),
            "dropoff_lat": np.nan if missing_dropoff else np.round(merchant["lat"] + rng.uniform(-0.03, 0.03), 6),
            "dropoff_lon": np.nan if missing_dropoff else np.round(merchant["lon"] + rng.uniform(-0.03, 0.03), 6),
            "status": "pending",
        })

    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_orders} orders and saved to '{output_file}'")

    print("\nTop 5 Businesses (Batching Potential):")
    counts = df["business_name"].value_counts().head(5)
    for name, count in counts.items():
        print(f"  {name}: {count} orders")


def generate_mock_drivers(count=10, output_file="mock_drivers.csv", seed=None):
    rng = np.random.default_rng(seed)

    rows = []
    for i in range(count):
        # 80% available, the rest busy or offline
        status = rng.choice(["available", "busy", "offline"], p=[0.8, 0.1, 0.1])
        rows.append({
            "driver_id": f"DRV-{str(i + 1).zfill(3)}",
            "name": f"Driver {i + 1}",
            "lat": np.round(CENTER_LAT + (rng.random() - 0.5) * 0.15, 6),
            "lon": np.round(CENTER_LON + (rng.random() - 0.5) * 0.15, 6),
            "status": status,
        })

    pd.DataFrame(rows).to_csv(output_file, index=False)
    print(f"Generated {count} mock drivers into '{output_file}'.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate mock order/driver CSVs for batching runs.")
    parser.add_argument("--orders", type=int, default=200)
    parser.add_argument("--merchants", type=int, default=20)
    parser.add_argument("--drivers", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    generate_mock_orders(num_orders=args.orders, num_merchants=args.merchants, seed=args.seed)
    generate_mock_drivers(count=args.drivers, seed=args.seed)
