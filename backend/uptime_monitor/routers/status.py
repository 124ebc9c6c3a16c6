"""Status overview API."""
from typing import Dict

from fastapi import APIRouter, Depends, Request

from ..schemas.metrics import EndpointMetrics
from ..schemas.status import StatusOverview, EndpointSummary
from ..services.scheduler import SchedulerService

router = APIRouter(prefix="/api/status", tags=["status"])


def get_monitor(request: Request) -> SchedulerService:
    return request.app.state.monitor


@router.get("/overview", response_model=StatusOverview)
async def get_status_overview(monitor: SchedulerService = Depends(get_monitor)):
    """Get overview of every monitored endpoint."""
    summaries = []
    counts = {"up": 0, "down": 0, "unknown": 0}

    for metrics in monitor.store.all():
        current_status = metrics.last_status or "unknown"
        counts[current_status] += 1

        summaries.append(EndpointSummary(
            endpoint=metrics.endpoint,
            status=current_status,
            total_checks=metrics.total_checks,
            successful_checks=metrics.successful_checks,
            failed_checks=metrics.failed_checks,
            total_downtime=metrics.total_downtime,
            average_response_time=metrics.average_response_time,
            success_rate=round(metrics.success_rate, 2),
            last_check=metrics.last_check,
        ))

    return StatusOverview(
        total_endpoints=len(summaries),
        endpoints_up=counts["up"],
        endpoints_down=counts["down"],
        endpoints_unknown=counts["unknown"],
        check_interval=monitor.config.check_interval,
        endpoints=summaries,
    )


@router.get("/metrics", response_model=Dict[str, EndpointMetrics])
async def get_metrics(monitor: SchedulerService = Depends(get_monitor)):
    """Raw metrics, same shape as the snapshot file."""
    return {metrics.endpoint: metrics for metrics in monitor.store.all()}
