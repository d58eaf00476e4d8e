"""Run shell commands on remote servers."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Protocol

from dockcheck.config.models import ServerConfig, SSHConfig
from dockcheck.status.models import CommandResult

logger = logging.getLogger(__name__)

# ssh reserves this exit status for its own errors
SSH_ERROR_EXIT_CODE = 255


class RemoteExecutionError(Exception):
    """The command could not be delivered to the remote host."""

    def __init__(self, message: str, host: str, command: str) -> None:
        super().__init__(message)
        self.host = host
        self.command = command


class RemoteRunner(Protocol):
    """Protocol for anything that can run a command on a server."""

    async def run(self, server: ServerConfig, command: str) -> CommandResult: ...


class SSHRunner:
    """Runs commands through the system ``ssh`` client. Implements RemoteRunner."""

    def __init__(self, ssh: SSHConfig | None = None, binary: str = "ssh") -> None:
        self._ssh = ssh or SSHConfig()
        self._binary = binary

    def build_args(self, server: ServerConfig, command: str) -> list[str]:
        args = [self._binary, "-o", "BatchMode=yes", "-p", str(server.port)]
        if server.pem:
            args += ["-i", os.path.expanduser(server.pem)]
        for option in self._ssh.options:
            args += ["-o", option]
        args += [f"{server.username}@{server.host}", command]
        return args

    async def run(self, server: ServerConfig, command: str) -> CommandResult:
        args = self.build_args(server, command)
        logger.debug("Running on %s: %s", server.host, command)
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            raise RemoteExecutionError(f"Could not start {self._binary}: {exc}", server.host, command) from exc

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=self._ssh.timeout)
        except asyncio.TimeoutError as exc:
            raise RemoteExecutionError(
                f"Command timed out after {self._ssh.timeout} seconds", server.host, command
            ) from exc
        finally:
            # timeouts and cancellation must not leave ssh running
            if process.returncode is None:
                process.kill()
                await process.wait()

        output = stdout.decode(errors="replace")
        if process.returncode == SSH_ERROR_EXIT_CODE:
            raise RemoteExecutionError(
                f"SSH connection to {server.host} failed: {output.strip()}", server.host, command
            )
        logger.debug("Command on %s exited with %s", server.host, process.returncode)
        return CommandResult(host=server.host, exit_code=process.returncode or 0, output=output)
