"""Application configuration from environment variables and CLI arguments."""
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

DEFAULT_METRICS_PATH = "metrics/uptime_metrics.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Webhook (Slack-compatible) for up/down notifications
    slack_webhook_url: str | None = None

    # Where the metrics snapshot is written, relative to the working directory
    metrics_path: str = DEFAULT_METRICS_PATH

    # Maximum probes in flight during one cycle
    max_concurrent_checks: int = 10

    # Timeout for webhook delivery in seconds
    notification_timeout: float = 10.0

    # Status API port (optional - API is not served if unset)
    web_port: int | None = None

    log_level: str = "INFO"

    class Config:
        env_prefix = ""
        case_sensitive = False


settings = Settings()


class MonitorConfig(BaseModel):
    """Monitoring configuration, fixed for the lifetime of the process."""

    model_config = {"frozen": True}

    endpoints: Tuple[str, ...] = Field(..., min_length=1)
    check_interval: int = Field(default=60, gt=0)  # seconds
    timeout: int = Field(default=10, gt=0)  # seconds
    webhook_url: Optional[str] = None
    metrics_path: str = DEFAULT_METRICS_PATH
    max_concurrent_checks: int = Field(default=10, ge=1)
    notification_timeout: float = Field(default=10.0, gt=0)


def build_monitor_config(
    endpoints: List[str],
    check_interval: int = 60,
    timeout: int = 10,
    metrics_path: Optional[str] = None,
    env: Optional[Settings] = None,
) -> MonitorConfig:
    """Merge CLI values with environment settings.

    Explicit arguments win over the environment; the webhook target is
    only ever read from the environment.
    """
    env = env or settings
    return MonitorConfig(
        endpoints=endpoints,
        check_interval=check_interval,
        timeout=timeout,
        webhook_url=env.slack_webhook_url or None,
        metrics_path=metrics_path or env.metrics_path,
        max_concurrent_checks=env.max_concurrent_checks,
        notification_timeout=env.notification_timeout,
    )
