"""Tests for the SSH remote runner."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from dockcheck.config.models import ServerConfig, SSHConfig
from dockcheck.remote import RemoteExecutionError, SSHRunner


def _process(output: bytes = b"", returncode: int = 0) -> MagicMock:
    process = MagicMock()
    process.communicate = AsyncMock(return_value=(output, None))
    process.wait = AsyncMock(return_value=returncode)
    process.returncode = returncode
    return process


class TestBuildArgs:
    def test_minimal(self):
        runner = SSHRunner()
        args = runner.build_args(ServerConfig(host="1.2.3.4"), "uptime")
        assert args == ["ssh", "-o", "BatchMode=yes", "-p", "22", "root@1.2.3.4", "uptime"]

    def test_key_port_and_options(self, monkeypatch):
        monkeypatch.setenv("HOME", "/home/deploy")
        runner = SSHRunner(SSHConfig(options=["StrictHostKeyChecking=no"]))
        server = ServerConfig(host="example.com", username="deploy", port=2222, pem="~/.ssh/id_ed25519")
        args = runner.build_args(server, "docker ps")
        assert args == [
            "ssh",
            "-o",
            "BatchMode=yes",
            "-p",
            "2222",
            "-i",
            "/home/deploy/.ssh/id_ed25519",
            "-o",
            "StrictHostKeyChecking=no",
            "deploy@example.com",
            "docker ps",
        ]


class TestRun:
    @pytest.mark.asyncio
    async def test_success(self):
        server = ServerConfig(host="1.2.3.4")
        process = _process(b'{"State": {}}\n', 0)
        with patch("dockcheck.remote.asyncio.create_subprocess_exec", AsyncMock(return_value=process)) as mock_exec:
            result = await SSHRunner().run(server, "docker inspect web")
        assert result.host == "1.2.3.4"
        assert result.exit_code == 0
        assert result.ok
        assert result.output == '{"State": {}}\n'
        assert mock_exec.await_args.args[-1] == "docker inspect web"

    @pytest.mark.asyncio
    async def test_command_failure_is_data(self):
        process = _process(b"curl: (7) Failed to connect", 7)
        with patch("dockcheck.remote.asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            result = await SSHRunner().run(ServerConfig(host="1.2.3.4"), "curl 127.0.0.1:80")
        assert result.exit_code == 7
        assert not result.ok

    @pytest.mark.asyncio
    async def test_ssh_error_raises(self):
        process = _process(b"ssh: connect to host 1.2.3.4 port 22: Connection refused", 255)
        with patch("dockcheck.remote.asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(RemoteExecutionError, match="Connection refused") as exc_info:
                await SSHRunner().run(ServerConfig(host="1.2.3.4"), "uptime")
        assert exc_info.value.host == "1.2.3.4"
        assert exc_info.value.command == "uptime"

    @pytest.mark.asyncio
    async def test_missing_binary(self):
        with patch(
            "dockcheck.remote.asyncio.create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("ssh")),
        ):
            with pytest.raises(RemoteExecutionError, match="Could not start ssh"):
                await SSHRunner().run(ServerConfig(host="1.2.3.4"), "uptime")

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def _hang():
            await asyncio.sleep(5)
            return b"", None

        process = _process()
        process.returncode = None
        process.communicate = _hang
        with patch("dockcheck.remote.asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            with pytest.raises(RemoteExecutionError, match="timed out"):
                await SSHRunner(SSHConfig(timeout=0.01)).run(ServerConfig(host="1.2.3.4"), "uptime")
        process.kill.assert_called_once()
        process.wait.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cancel_kills_ssh(self):
        started = asyncio.Event()

        async def _hang():
            started.set()
            await asyncio.sleep(30)
            return b"", None

        process = _process()
        process.returncode = None
        process.communicate = _hang
        with patch("dockcheck.remote.asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            task = asyncio.create_task(SSHRunner().run(ServerConfig(host="1.2.3.4"), "uptime"))
            await started.wait()
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
        process.kill.assert_called_once()
        process.wait.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_finished_process_not_killed(self):
        process = _process(b"up 3 days", 0)
        with patch("dockcheck.remote.asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            await SSHRunner().run(ServerConfig(host="1.2.3.4"), "uptime")
        process.kill.assert_not_called()
