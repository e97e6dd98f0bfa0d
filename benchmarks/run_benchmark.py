"""
CLI entry point for the burst benchmark.

Usage:
    python -m benchmarks.run_benchmark                              # 50 concurrent requests
    python -m benchmarks.run_benchmark --concurrency 200
    python -m benchmarks.run_benchmark --source samples/grid.jpg

The server must be running and the source original must exist
(see scripts/upload_sample_image.py).
"""

import argparse
import asyncio
import json
import uuid

from benchmarks.burst import BurstBenchmark
from config.settings import Settings
from storage.registry import create_store


def main():
    parser = argparse.ArgumentParser(description="Thumbnail Service Burst Benchmark")
    parser.add_argument(
        "--concurrency", type=int, default=50,
        help="Number of simultaneous requests (default: 50)",
    )
    parser.add_argument(
        "--source", type=str, default="samples/grid.jpg",
        help="Existing original to copy under a fresh key (default: samples/grid.jpg)",
    )
    parser.add_argument(
        "--base-url", type=str, default="http://localhost:8000",
        help="Service base URL (default: http://localhost:8000)",
    )
    args = parser.parse_args()

    # A unique key guarantees the burst starts from a cache miss
    store = create_store(Settings())
    path = f"bench/{uuid.uuid4().hex}/{args.source.rsplit('/', 1)[-1]}"
    store.put(path, store.get(args.source), "application/octet-stream")

    print("=== Thumbnail Service Burst Benchmark ===")
    print(f"Concurrency: {args.concurrency} | Path: {path}\n")

    bench = BurstBenchmark(base_url=args.base_url, concurrency=args.concurrency)
    result = asyncio.run(bench.run(path))

    print("=== RESULTS ===")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
