"""
Pytest configuration and fixtures for kubewatch tests.
"""

import logging
from typing import List

import httpx
import pytest

from dingbot import DingTalkSettings
from kubewatch.config import Config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's environment and any ``.env`` file out of the tests."""
    for key in ("TOKEN", "SIGN", "TIMEOUT", "API_URL", "SIGN_PER_REQUEST"):
        monkeypatch.delenv(f"KW_DINGTALK_{key}", raising=False)
    monkeypatch.delenv("KW_CONFIG", raising=False)
    monkeypatch.delenv("KW_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def restore_root_logger():
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_path(tmp_path):
    """Path of a config file inside a temporary directory."""
    return tmp_path / "kubewatch" / "config.json"


@pytest.fixture
def dingtalk_config(config_path) -> Config:
    """Config with DingTalk credentials."""
    config = Config.load(config_path)
    config.handler.dingtalk.token = "config-token"
    config.handler.dingtalk.sign = "SECconfig"
    return config


@pytest.fixture
def settings() -> DingTalkSettings:
    """Settings without any credentials."""
    return DingTalkSettings(token="", sign="")


@pytest.fixture
def captured() -> List[httpx.Request]:
    """Requests seen by the mock transports."""
    return []


@pytest.fixture
def ok_transport(captured) -> httpx.MockTransport:
    """Transport answering every request with errcode 0."""

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"errcode": 0, "errmsg": "ok"})

    return httpx.MockTransport(handler)


@pytest.fixture
def failing_transport(captured) -> httpx.MockTransport:
    """Transport that fails every request with a connection error."""

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


@pytest.fixture
def pod() -> dict:
    """A namespaced Pod as returned by the API server."""
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {"name": "web-7d4b9", "namespace": "default"},
    }
