"""Shared fixtures for the uptime monitor test suite."""
from __future__ import annotations

import asyncio
import os
from typing import Any, Callable, Optional

import httpx
import pytest
import pytest_asyncio

os.environ.setdefault("SLACK_WEBHOOK_URL", "")

from uptime_monitor.config import MonitorConfig  # noqa: E402
from uptime_monitor.services.alerter import Notifier  # noqa: E402


class ScriptedEndpoints:
    """Serves a scripted sequence of outcomes per URL.

    An outcome is either an HTTP status code or an exception class from
    httpx, raised as if the transport failed.
    """

    def __init__(self) -> None:
        self.outcomes: dict[str, list[Any]] = {}
        self.requests: list[httpx.Request] = []

    def script(self, url: str, *outcomes: Any) -> None:
        self.outcomes.setdefault(url, []).extend(outcomes)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.outcomes.get(str(request.url))
        if not queue:
            return httpx.Response(404)
        outcome = queue.pop(0)
        if isinstance(outcome, type) and issubclass(outcome, Exception):
            raise outcome("scripted failure", request=request)
        return httpx.Response(outcome, text="ok")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.calls: list[tuple[str, bool, Optional[float]]] = []

    async def notify(self, endpoint: str, is_down: bool, response_time: Optional[float] = None) -> bool:
        self.calls.append((endpoint, is_down, response_time))
        return True


@pytest.fixture
def scripted() -> ScriptedEndpoints:
    return ScriptedEndpoints()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def make_config(tmp_path) -> Callable[..., MonitorConfig]:
    def _make(*endpoints: str, **overrides: Any) -> MonitorConfig:
        values: dict[str, Any] = {
            "endpoints": list(endpoints),
            "check_interval": 60,
            "timeout": 10,
            "metrics_path": str(tmp_path / "metrics" / "uptime_metrics.json"),
        }
        values.update(overrides)
        return MonitorConfig(**values)

    return _make


@pytest_asyncio.fixture
async def slow_server():
    """Factory for a local HTTP server that trickles its body out.

    Each byte is sent ``delay`` seconds after the previous one, so no single
    read waits long but the whole response takes ``len(body) * delay``.
    """
    servers: list[asyncio.AbstractServer] = []

    async def _start(body: bytes = b"slowok", delay: float = 0.3, status: int = 200) -> str:
        async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
            try:
                await reader.readuntil(b"\r\n\r\n")
                writer.write(
                    f"HTTP/1.1 {status} OK\r\nContent-Length: {len(body)}\r\n"
                    "Connection: close\r\n\r\n".encode()
                )
                await writer.drain()
                for byte in body:
                    await asyncio.sleep(delay)
                    writer.write(bytes([byte]))
                    await writer.drain()
            except (ConnectionError, asyncio.IncompleteReadError):
                pass
            finally:
                writer.close()

        server = await asyncio.start_server(handle, "127.0.0.1", 0)
        servers.append(server)
        port = server.sockets[0].getsockname()[1]
        return f"http://127.0.0.1:{port}/health"

    yield _start

    for server in servers:
        server.close()
