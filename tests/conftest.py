"""Shared fixtures for dockcheck tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
import yaml

from dockcheck.config.models import AppConfig, DockcheckConfig, ServerConfig
from dockcheck.status.models import CommandResult


SAMPLE_CONFIG: Dict[str, Any] = {
    "servers": {
        "one": {"host": "10.0.0.1", "username": "deploy", "pem": "~/.ssh/id_rsa"},
        "two": {"host": "10.0.0.2", "port": 2222},
    },
    "apps": {
        "web": {
            "name": "web",
            "servers": ["one", "two"],
            "env": {"PORT": 8080, "ROOT_URL": "http://example.com"},
            "docker": {"image_port": 3000},
        },
    },
    "ssh": {"timeout": 10, "options": ["StrictHostKeyChecking=no"]},
}

RUNNING_INSPECT: Dict[str, Any] = {
    "Created": "2024-05-01T10:00:00.000000000Z",
    "State": {"Status": "running", "Running": True, "Restarting": False},
    "RestartCount": 1,
    "Config": {"Env": ["PORT=3000", "ROOT_URL=http://example.com"]},
    "NetworkSettings": {"Ports": {"80/tcp": [{"HostIp": "0.0.0.0", "HostPort": "8080"}]}},
}


class FakeRunner:
    """RemoteRunner that answers from a command -> CommandResult table."""

    def __init__(self, responses: Dict[str, Any] | None = None, default_exit_code: int = 0) -> None:
        self.responses = responses or {}
        self.default_exit_code = default_exit_code
        self.calls: List[tuple[str, str]] = []

    async def run(self, server: ServerConfig, command: str) -> CommandResult:
        self.calls.append((server.host, command))
        for prefix, response in self.responses.items():
            if command.startswith(prefix):
                if isinstance(response, BaseException):
                    raise response
                if isinstance(response, int):
                    return CommandResult(host=server.host, exit_code=response)
                return CommandResult(host=server.host, exit_code=0, output=response)
        return CommandResult(host=server.host, exit_code=self.default_exit_code)


@pytest.fixture()
def sample_config() -> DockcheckConfig:
    return DockcheckConfig(**SAMPLE_CONFIG)


@pytest.fixture()
def server(sample_config: DockcheckConfig) -> ServerConfig:
    return sample_config.servers["one"]


@pytest.fixture()
def web_app(sample_config: DockcheckConfig) -> AppConfig:
    return sample_config.apps["web"]


@pytest.fixture()
def running_output() -> str:
    return json.dumps(RUNNING_INSPECT)


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    """Write sample config to a temp .dockcheck.yaml and return the path."""
    path = tmp_path / ".dockcheck.yaml"
    with path.open("w") as fh:
        yaml.dump(SAMPLE_CONFIG, fh)
    return path


@pytest.fixture()
def make_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner
