"""Pydantic schemas for metrics and API responses."""
from .metrics import EndpointMetrics
from .status import (
    StatusOverview,
    EndpointSummary,
)

__all__ = [
    "EndpointMetrics",
    "StatusOverview",
    "EndpointSummary",
]
