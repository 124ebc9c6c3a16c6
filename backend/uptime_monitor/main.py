"""Entry point - CLI, logging, and optional status API."""
import argparse
import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
from fastapi import FastAPI
from pydantic import ValidationError

from .config import settings, build_monitor_config, MonitorConfig
from .routers import status_router
from .services.scheduler import SchedulerService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(monitor: SchedulerService) -> FastAPI:
    """Create the read-only status API around a monitor.

    The app's lifespan starts and stops the monitor.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await monitor.start()
        yield
        monitor.stop()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="Uptime Monitor",
        description="Availability metrics for monitored HTTP endpoints",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.monitor = monitor
    app.include_router(status_router)

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "endpoints": len(monitor.config.endpoints),
        }

    return app


def create_http_client(timeout: int) -> httpx.AsyncClient:
    """Shared client for probes and webhook delivery."""
    return httpx.AsyncClient(timeout=timeout, follow_redirects=True)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="uptime-monitor",
        description="Monitor HTTP endpoints and notify when they go down or come back up.",
    )
    parser.add_argument("endpoints", nargs="+", metavar="URLS", help="Endpoint URLs to monitor")
    parser.add_argument("-i", "--interval", type=int, default=60, help="Check interval in seconds")
    parser.add_argument("-t", "--timeout", type=int, default=10, help="Request timeout in seconds")
    parser.add_argument(
        "--metrics-path",
        default=None,
        help=f"Metrics snapshot path (default: {settings.metrics_path})",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=settings.web_port,
        help="Serve the status API on this port",
    )
    args = parser.parse_args(argv)

    try:
        args.config = build_monitor_config(
            endpoints=args.endpoints,
            check_interval=args.interval,
            timeout=args.timeout,
            metrics_path=args.metrics_path,
        )
    except ValidationError as e:
        parser.error(str(e))

    return args


async def run(config: MonitorConfig, web_port: Optional[int] = None) -> int:
    """Build the client and monitor, then run until terminated."""
    try:
        client = create_http_client(config.timeout)
    except Exception as e:
        logger.error(f"Failed to create HTTP client: {e}")
        return 1

    async with client:
        monitor = SchedulerService(config, client)

        if web_port:
            import uvicorn

            server = uvicorn.Server(uvicorn.Config(
                create_app(monitor),
                host="0.0.0.0",
                port=web_port,
                log_level="info",
            ))
            logger.info(f"Status API starting on port {web_port}")
            await server.serve()
        else:
            await monitor.run_forever()

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return asyncio.run(run(args.config, args.web_port))
    except KeyboardInterrupt:
        logger.info("Interrupted - exiting")
        return 0


if __name__ == "__main__":
    sys.exit(main())
