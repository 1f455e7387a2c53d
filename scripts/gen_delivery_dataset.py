#!/usr/bin/env python3
"""Synthetic delivery-record generator for load testing.

Writes medical-supply delivery records as CSV, JSON or XLSX (chosen by the
output suffix). Column headers are taken from the spellings seen in real
exports ("Vendor", "Client Name", "Qty", "Delivery Date" ...) so the header
resolution path is exercised, and a small share of rows carries a malformed
date or a zero quantity.
"""
from __future__ import annotations

import argparse
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

SUPPORTED_SUFFIXES = {".csv", ".json", ".xlsx"}

CATEGORIES = ["Gloves", "Syringes", "Catheters", "Implants", "Dressings", "Monitors"]
MODELS = ["AX-100", "AX-200", "BT-7", "CR-9", "DM-12", "EZ-3", "FL-40"]

HEADERS = {
    "supplier": "Vendor",
    "customer": "Client Name",
    "category": "Product Type",
    "license": "License No",
    "model": "Model",
    "lot": "Lot No",
    "serial": "S/N",
    "udid": "UDID",
    "device": "Device Name",
    "quantity": "Qty",
    "date": "Delivery Date",
}


def generate_delivery_data(
    rows: int,
    suppliers: int = 20,
    customers: int = 60,
    bad_ratio: float = 0.02,
    seed: int = 42,
) -> pd.DataFrame:
    """Generate a DataFrame of delivery records.

    Args:
        rows: number of records
        suppliers: size of the supplier pool
        customers: size of the customer pool
        bad_ratio: share of rows given an unparseable date or a zero quantity
        seed: random seed for reproducible data

    Returns:
        DataFrame whose columns use the alias headers in ``HEADERS``
    """
    np.random.seed(seed)

    base = date(2024, 1, 1)
    offsets = np.random.randint(0, 366, rows)
    dates = [(base + timedelta(days=int(o))).strftime("%Y-%m-%d") for o in offsets]
    quantities = np.random.randint(1, 500, rows).tolist()

    bad = np.random.random(rows) < bad_ratio
    for i in np.flatnonzero(bad):
        if i % 2 == 0:
            # fewer than eight digits once separators are stripped
            d = base + timedelta(days=int(offsets[i]))
            dates[i] = f"{d.year}/{d.month}/{d.day}" if d.month < 10 or d.day < 10 else "n/a"
        else:
            quantities[i] = 0

    categories = np.random.choice(CATEGORIES, rows).tolist()
    data: dict[str, list[Any]] = {
        HEADERS["supplier"]: [f"SUP-{n:03d}" for n in np.random.randint(1, suppliers + 1, rows)],
        HEADERS["customer"]: [f"HOSP-{n:03d}" for n in np.random.randint(1, customers + 1, rows)],
        HEADERS["category"]: categories,
        HEADERS["license"]: [f"LIC{n:06d}" for n in np.random.randint(1, 10_000, rows)],
        HEADERS["model"]: np.random.choice(MODELS, rows).tolist(),
        HEADERS["lot"]: [f"L{n:05d}" for n in np.random.randint(1, 99_999, rows)],
        HEADERS["serial"]: [f"SN{j:08d}" for j in range(1, rows + 1)],
        HEADERS["udid"]: [f"0{n:013d}" for n in np.random.randint(1, 2**31 - 1, rows)],
        HEADERS["device"]: [f"{c} unit" for c in categories],
        HEADERS["quantity"]: quantities,
        HEADERS["date"]: dates,
    }
    return pd.DataFrame(data)


def write_dataset(df: pd.DataFrame, output_path: Path) -> None:
    """Write ``df`` in the format implied by the suffix of ``output_path``."""
    suffix = output_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"unsupported output format: {suffix or '(none)'}")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        df.to_csv(output_path, index=False, lineterminator="\n")
    elif suffix == ".json":
        df.to_json(output_path, orient="records", force_ascii=False)
    else:
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Deliveries", index=False)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic medical-supply delivery records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 50k rows as CSV
  %(prog)s deliveries.csv

  # Small Excel workbook with a narrow supplier pool
  %(prog)s deliveries.xlsx --rows 2000 --suppliers 5

  # JSON with more malformed rows
  %(prog)s deliveries.json --rows 10000 --bad-ratio 0.1 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output path (.csv, .json or .xlsx)")
    parser.add_argument("--rows", type=int, default=50_000, help="Number of records (default: 50,000)")
    parser.add_argument("--suppliers", type=int, default=20, help="Supplier pool size (default: 20)")
    parser.add_argument("--customers", type=int, default=60, help="Customer pool size (default: 60)")
    parser.add_argument("--bad-ratio", type=float, default=0.02, help="Share of malformed rows (default: 0.02)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without writing a file")
    args = parser.parse_args(argv)

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.suppliers <= 0 or args.customers <= 0:
        print("Error: --suppliers and --customers must be positive", file=sys.stderr)
        return 1
    if not 0.0 <= args.bad_ratio <= 1.0:
        print("Error: --bad-ratio must be between 0 and 1", file=sys.stderr)
        return 1
    if args.output.suffix.lower() not in SUPPORTED_SUFFIXES:
        print(f"Error: output must end in one of {sorted(SUPPORTED_SUFFIXES)}", file=sys.stderr)
        return 1

    print("Dataset generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Rows: {args.rows:,}")
    print(f"  Suppliers: {args.suppliers}  Customers: {args.customers}")
    print(f"  Malformed share: {args.bad_ratio:.1%}")
    print(f"  Random seed: {args.seed}")

    if args.dry_run:
        print("\n[DRY RUN] Nothing written.")
        return 0

    df = generate_delivery_data(
        args.rows,
        suppliers=args.suppliers,
        customers=args.customers,
        bad_ratio=args.bad_ratio,
        seed=args.seed,
    )
    try:
        write_dataset(df, args.output)
    except (OSError, ValueError) as e:
        print(f"\nError writing dataset: {e}", file=sys.stderr)
        return 1
    print(f"\nWrote {len(df):,} records to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
