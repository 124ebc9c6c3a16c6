"""Checker service - performs a single timed HTTP GET against an endpoint."""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class ProbeResult:
    """Result of one probe.

    ``error`` tags the failure kind for diagnostics only; callers decide
    on ``success`` alone.
    """
    success: bool
    response_time: float = 0.0  # seconds
    error: Optional[str] = None  # timeout, connect, http_status, request
    status_code: Optional[int] = None


class CheckerService:
    """Service for probing HTTP endpoints with a shared client."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def probe(self, url: str, timeout: float) -> ProbeResult:
        """Perform exactly one GET request against ``url``.

        A response with a 2xx status is a success. Any other status is a
        failure that still reports the measured response time. Transport
        errors (timeout, DNS, refused connection, TLS) report 0.0.

        ``timeout`` bounds the whole request, body included; httpx's own
        timeout only limits each connect/read/write step.
        """
        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(
                self.client.get(url, timeout=timeout), timeout=timeout
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error(f"Request failed for {url}: timeout ({type(e).__name__})")
            return ProbeResult(success=False, error="timeout")
        except httpx.ConnectError as e:
            logger.error(f"Request failed for {url}: connection error: {e}")
            return ProbeResult(success=False, error="connect")
        except Exception as e:
            logger.error(f"Request failed for {url}: {type(e).__name__}: {e}")
            return ProbeResult(success=False, error="request")

        response_time = time.perf_counter() - start

        if not response.is_success:
            logger.error(f"Request for {url} returned HTTP {response.status_code}")
            return ProbeResult(
                success=False,
                response_time=response_time,
                error="http_status",
                status_code=response.status_code,
            )

        return ProbeResult(
            success=True,
            response_time=response_time,
            status_code=response.status_code,
        )
