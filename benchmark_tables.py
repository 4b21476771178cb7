#!/usr/bin/env python3
"""Performance benchmarking suite for table operations.

This script times the main Table operations on synthetic tables of varying
shape, so users can see how growth-on-write and order-preserving row
removal scale with the number of rows and columns.
"""

import argparse
import random
import time
from typing import Any, Dict, List

import pandas as pd

try:
    from hashgrid import Table, decode, encode
except ImportError:
    print("Please install hashgrid package first: pip install -e .")
    exit(1)


def generate_synthetic_table(n_rows: int, n_cols: int, density: float = 0.5) -> Table:
    """Generate a synthetic table for benchmarking.

    Parameters
    ----------
    n_rows : int
        Number of rows
    n_cols : int
        Number of columns
    density : float
        Fraction of cells that hold a value

    Returns
    -------
    Table
        Synthetic table with roughly ``density * n_rows * n_cols`` values
    """
    table = Table.with_columns(f"col_{j}" for j in range(n_cols))
    for i in range(n_rows):
        table.push_row(
            {f"col_{j}": i * n_cols + j for j in range(n_cols) if random.random() < density}
        )
    return table


def time_operation(name: str, func, repeat: int) -> Dict[str, Any]:
    """Run ``func`` ``repeat`` times and report the mean runtime."""
    start = time.perf_counter()
    for _ in range(repeat):
        func()
    runtime = (time.perf_counter() - start) / repeat
    return {"operation": name, "runtime": runtime}


def run_benchmark_suite(
    n_rows_list: List[int],
    n_cols_list: List[int],
    density: float,
    repeat: int,
) -> List[Dict[str, Any]]:
    """Time every operation for every table shape."""
    results = []
    for n_rows in n_rows_list:
        for n_cols in n_cols_list:
            print(f"Testing {n_rows} rows x {n_cols} cols, density={density:.1f}")
            table = generate_synthetic_table(n_rows, n_cols, density)
            keys = list(table.column_keys())

            def random_get():
                table.get(random.choice(keys), random.randrange(n_rows))

            def grow_and_shrink():
                table.set(keys[0], table.row_count + 10, 1)
                while table.row_count > n_rows:
                    table.remove_row(table.row_count - 1)

            def remove_first_row():
                values = table.remove_row(0)
                table.push_row(values)

            def round_trip():
                decode(encode(table))

            for name, func in [
                ("get", random_get),
                ("grow_and_shrink", grow_and_shrink),
                ("remove_first_row", remove_first_row),
                ("round_trip", round_trip),
            ]:
                result = time_operation(name, func, repeat)
                result.update({"n_rows": n_rows, "n_cols": n_cols})
                results.append(result)
                print(f"  {name}: {result['runtime'] * 1e6:.1f}us")
            print()
    return results


def analyze_results(results: List[Dict[str, Any]]) -> None:
    """Display a runtime summary per operation and table size."""
    df = pd.DataFrame(results)
    df["cells"] = df["n_rows"] * df["n_cols"]

    print("=" * 60)
    print("BENCHMARK RESULTS SUMMARY")
    print("=" * 60)
    print()
    summary = df.pivot_table(
        index="cells", columns="operation", values="runtime", aggfunc="mean"
    )
    print((summary * 1e6).round(1))


def main():
    """Main benchmark runner with command line interface."""
    parser = argparse.ArgumentParser(description="Benchmark hashgrid table operations")
    parser.add_argument("--rows", nargs="+", type=int, default=[100, 1000, 10000],
                        help="List of row counts to test")
    parser.add_argument("--cols", nargs="+", type=int, default=[5, 20],
                        help="List of column counts to test")
    parser.add_argument("--density", type=float, default=0.5,
                        help="Fraction of cells holding a value (0.0-1.0)")
    parser.add_argument("--repeat", type=int, default=100,
                        help="Repetitions per operation")
    parser.add_argument("--save", type=str, help="Save detailed results to CSV file")

    args = parser.parse_args()

    results = run_benchmark_suite(args.rows, args.cols, args.density, args.repeat)
    analyze_results(results)

    if args.save:
        pd.DataFrame(results).to_csv(args.save, index=False)
        print(f"\nDetailed results saved to {args.save}")


if __name__ == "__main__":
    main()
