"""Status overview schemas for the read-only API."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class EndpointSummary(BaseModel):
    """Summary of an endpoint for the overview."""
    endpoint: str
    status: str  # up, down, unknown
    total_checks: int
    successful_checks: int
    failed_checks: int
    total_downtime: int
    average_response_time: float
    success_rate: float  # Percentage
    last_check: Optional[datetime] = None


class StatusOverview(BaseModel):
    """Overview of every monitored endpoint."""
    total_endpoints: int
    endpoints_up: int
    endpoints_down: int
    endpoints_unknown: int
    check_interval: int
    endpoints: List[EndpointSummary]
