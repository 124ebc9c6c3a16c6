"""Metrics store - in-memory endpoint statistics with a JSON snapshot on disk."""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..config import DEFAULT_METRICS_PATH
from ..schemas.metrics import EndpointMetrics

logger = logging.getLogger(__name__)


class MetricsStore:
    """Cumulative per-endpoint statistics.

    Not safe for concurrent mutation of the same endpoint; the scheduler
    records each endpoint once per cycle, sequentially.
    """

    def __init__(self, endpoints: Iterable[str], path: str = DEFAULT_METRICS_PATH):
        self.path = Path(path)
        self._metrics: Dict[str, EndpointMetrics] = {
            endpoint: EndpointMetrics(endpoint=endpoint) for endpoint in endpoints
        }

    def get(self, endpoint: str) -> EndpointMetrics:
        return self._metrics[endpoint]

    def all(self) -> List[EndpointMetrics]:
        return list(self._metrics.values())

    def last_status(self, endpoint: str) -> Optional[str]:
        """Status as of the previous record call (None before the first)."""
        return self._metrics[endpoint].last_status

    def record(
        self,
        endpoint: str,
        success: bool,
        response_time: float,
        interval: int,
    ) -> EndpointMetrics:
        """Apply one observation and persist the snapshot.

        Successful checks feed the running mean of response times; failed
        checks charge one full ``interval`` of downtime.
        """
        metrics = self._metrics[endpoint]

        metrics.total_checks += 1
        metrics.last_check = datetime.now(timezone.utc)
        metrics.last_status = "up" if success else "down"

        if success:
            metrics.successful_checks += 1
            n = metrics.successful_checks
            metrics.average_response_time = (
                metrics.average_response_time * (n - 1) + response_time
            ) / n
        else:
            metrics.failed_checks += 1
            metrics.total_downtime += interval

        self.snapshot()
        return metrics

    def dump(self) -> str:
        """Serialize all endpoints to pretty-printed JSON."""
        data = {
            endpoint: metrics.model_dump(mode="json")
            for endpoint, metrics in self._metrics.items()
        }
        return json.dumps(data, indent=2)

    def snapshot(self) -> bool:
        """Overwrite the snapshot file with the current state.

        Returns False if the write failed; the in-memory state stays
        authoritative and the next snapshot replaces the file fully.
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(self.dump(), encoding="utf-8")
            return True
        except OSError as e:
            logger.error(f"Failed to save metrics to {self.path}: {e}")
            return False
