"""
Burst benchmark — N concurrent requests for the same uncached thumbnail.

This is the thundering-herd case: every request misses the cache at the
same moment. With COALESCE_REQUESTS=true one request should report MISS and
the rest SHARED; with it off, every request generates on its own.

How it works:
1. Pick a fresh path (the original is copied under a unique key first,
   so the thumbnail is guaranteed not to exist)
2. Fire N GETs at once with httpx.AsyncClient
3. Report wall clock, per-request latency and the X-Thumbnail-Cache mix
4. Fire one more GET to confirm the thumbnail is now a HIT
"""

import asyncio
import statistics
import time
from collections import Counter

import httpx

BASE_URL = "http://localhost:8000"


class BurstBenchmark:

    def __init__(self, base_url: str = BASE_URL, concurrency: int = 50):
        self.base_url = base_url
        self.concurrency = concurrency

    async def _get(self, client: httpx.AsyncClient, path: str) -> tuple[float, int, str]:
        start = time.monotonic()
        resp = await client.get(f"/{path}")
        elapsed = time.monotonic() - start
        return elapsed, resp.status_code, resp.headers.get("X-Thumbnail-Cache", "-")

    async def run(self, path: str) -> dict:
        """Run one burst against path, which must not have a thumbnail yet."""
        async with httpx.AsyncClient(base_url=self.base_url, timeout=60.0) as client:
            start = time.monotonic()
            results = await asyncio.gather(
                *(self._get(client, path) for _ in range(self.concurrency))
            )
            wall_clock = time.monotonic() - start
            _, _, follow_up = await self._get(client, path)

        latencies = [r[0] for r in results]
        return {
            "path": path,
            "concurrency": self.concurrency,
            "wall_clock_sec": round(wall_clock, 3),
            "latency_p50_ms": round(statistics.median(latencies) * 1000, 1),
            "latency_max_ms": round(max(latencies) * 1000, 1),
            "status_codes": dict(Counter(r[1] for r in results)),
            "cache_status": dict(Counter(r[2] for r in results)),
            "follow_up_cache_status": follow_up,
        }
