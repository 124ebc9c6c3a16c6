from __future__ import annotations

import pytest
from pydantic import ValidationError

from uptime_monitor.config import DEFAULT_METRICS_PATH, MonitorConfig, Settings, build_monitor_config
from uptime_monitor.main import parse_args


def test_parse_args_defaults() -> None:
    args = parse_args(["http://a.test/", "http://b.test/"])
    config = args.config
    assert config.endpoints == ("http://a.test/", "http://b.test/")
    assert config.check_interval == 60
    assert config.timeout == 10


def test_parse_args_short_flags() -> None:
    args = parse_args(["-i", "5", "-t", "2", "--metrics-path", "/tmp/m.json", "http://a.test/"])
    assert args.config.check_interval == 5
    assert args.config.timeout == 2
    assert args.config.metrics_path == "/tmp/m.json"


def test_parse_args_requires_an_endpoint() -> None:
    with pytest.raises(SystemExit):
        parse_args([])


def test_parse_args_rejects_non_positive_interval() -> None:
    with pytest.raises(SystemExit):
        parse_args(["-i", "0", "http://a.test/"])


def test_webhook_comes_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://hooks.example.test/x")
    monkeypatch.setenv("MAX_CONCURRENT_CHECKS", "3")
    config = build_monitor_config(["http://a.test/"], env=Settings())
    assert config.webhook_url == "https://hooks.example.test/x"
    assert config.max_concurrent_checks == 3
    assert config.metrics_path == DEFAULT_METRICS_PATH


def test_empty_webhook_means_unconfigured() -> None:
    config = build_monitor_config(["http://a.test/"], env=Settings(slack_webhook_url=""))
    assert config.webhook_url is None


def test_monitor_config_is_frozen() -> None:
    config = MonitorConfig(endpoints=["http://a.test/"])
    with pytest.raises(ValidationError):
        config.check_interval = 1


def test_monitor_config_endpoints_cannot_be_mutated() -> None:
    config = build_monitor_config(["http://a.test/", "http://b.test/"], env=Settings())
    assert isinstance(config.endpoints, tuple)
    with pytest.raises(AttributeError):
        config.endpoints.append("http://c.test/")
