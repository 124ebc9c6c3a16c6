"""Services for probing, metrics, scheduling, and alerting."""
from .checker import CheckerService, ProbeResult
from .metrics_store import MetricsStore
from .alerter import Notifier, NoOpNotifier, WebhookNotifier, build_notifier
from .scheduler import SchedulerService

__all__ = [
    "CheckerService",
    "ProbeResult",
    "MetricsStore",
    "Notifier",
    "NoOpNotifier",
    "WebhookNotifier",
    "build_notifier",
    "SchedulerService",
]
