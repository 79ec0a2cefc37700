"""Process-local counters and gauges for entry store and statistics instrumentation."""

from __future__ import annotations

from collections import Counter
from functools import lru_cache
from threading import Lock
from typing import Dict, Mapping, Protocol

from .logging import get_logger

logger = get_logger(__name__)


class MetricsClient(Protocol):  # pragma: no cover - interface only
    def increment(self, metric: str, value: int = 1) -> None: ...

    def gauge(self, metric: str, value: int) -> None: ...

    def snapshot(self) -> Mapping[str, Mapping[str, int]]: ...


class InMemoryMetricsClient:
    """Thread-safe sink whose snapshot is served by the health endpoint."""

    def __init__(self) -> None:
        self._lock = Lock()
        self.counters: Counter[str] = Counter()
        self.gauges: Dict[str, int] = {}

    def increment(self, metric: str, value: int = 1) -> None:
        with self._lock:
            self.counters[metric] += value
        logger.debug("metrics_increment", extra={"metric": metric, "value": value})

    def gauge(self, metric: str, value: int) -> None:
        with self._lock:
            self.gauges[metric] = value
        logger.debug("metrics_gauge", extra={"metric": metric, "value": value})

    def snapshot(self) -> Dict[str, Dict[str, int]]:
        with self._lock:
            return {"counters": dict(self.counters), "gauges": dict(self.gauges)}


@lru_cache(maxsize=None)
def get_metrics_client() -> MetricsClient:
    """Return the metrics client shared by the whole process."""

    return InMemoryMetricsClient()
