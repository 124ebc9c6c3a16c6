"""Per-endpoint availability metrics."""
from datetime import datetime
from typing import Optional, Literal

from pydantic import BaseModel, Field


class EndpointMetrics(BaseModel):
    """Cumulative statistics for one monitored endpoint."""
    endpoint: str
    total_checks: int = Field(default=0, ge=0)
    successful_checks: int = Field(default=0, ge=0)
    failed_checks: int = Field(default=0, ge=0)
    total_downtime: int = Field(default=0, ge=0)  # seconds, charged per failed interval
    last_check: Optional[datetime] = None  # UTC
    last_status: Optional[Literal["up", "down"]] = None
    average_response_time: float = 0.0  # seconds, successful checks only

    @property
    def success_rate(self) -> float:
        """Percentage of successful checks (0.0 before the first check)."""
        if not self.total_checks:
            return 0.0
        return self.successful_checks / self.total_checks * 100
