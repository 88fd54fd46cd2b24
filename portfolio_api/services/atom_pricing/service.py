"""High-level service that orchestrates marketplace price lookups."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from queue import Empty, Queue
from typing import Callable, List, Sequence

from configs import settings

from .models import LookupResult
from .provider import AtomPriceProvider

logger = logging.getLogger("atom_pricing.service")


class PriceLookupService:
    """Look up one domain, or drain a list of them with a small worker pool."""

    DEFAULT_MAX_WORKERS = 6
    DEFAULT_DELAY_SECONDS = 0.12

    def __init__(
        self,
        provider: AtomPriceProvider | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.provider = provider or AtomPriceProvider()
        self.max_workers = max(1, max_workers)
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def lookup(self, domain: str) -> LookupResult:
        return self.provider.lookup(domain)

    def lookup_many(self, domains: Sequence[str]) -> List[LookupResult]:
        """Look up every domain; results come back in completion order.

        At most ``max_workers`` requests are in flight. Each worker pauses
        ``delay_seconds`` after every item to throttle the upstream site.
        """
        pending: "Queue[str]" = Queue()
        for domain in domains:
            pending.put(domain)

        pool_size = min(self.max_workers, pending.qsize())
        if pool_size == 0:
            return []

        results: List[LookupResult] = []
        lock = threading.Lock()

        def worker() -> None:
            while True:
                try:
                    domain = pending.get_nowait()
                except Empty:
                    return
                result = self.lookup(domain)
                with lock:
                    results.append(result)
                self._sleep(self.delay_seconds)

        logger.info(
            "Looking up %d domain(s) with %d worker(s)", len(domains), pool_size
        )
        with ThreadPoolExecutor(
            max_workers=pool_size, thread_name_prefix="atom-batch"
        ) as pool:
            workers = [pool.submit(worker) for _ in range(pool_size)]
            for future in workers:
                future.result()

        failed = sum(1 for result in results if not result.ok)
        logger.info("Batch finished: %d ok, %d failed", len(results) - failed, failed)
        return results


def get_price_lookup_service() -> PriceLookupService:
    """FastAPI dependency that wires the lookup service from the settings."""
    provider = AtomPriceProvider(
        base_url=settings.ATOM_BASE_URL, timeout=settings.ATOM_REQUEST_TIMEOUT
    )
    return PriceLookupService(
        provider=provider,
        max_workers=settings.ATOM_BATCH_MAX_WORKERS,
        delay_seconds=settings.ATOM_BATCH_DELAY_MS / 1000,
    )
