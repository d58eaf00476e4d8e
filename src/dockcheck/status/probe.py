"""Concurrent reachability probes."""

from __future__ import annotations

import asyncio
import logging
import shlex
from typing import TYPE_CHECKING

import httpx

from dockcheck.status.models import ReachabilityReport

if TYPE_CHECKING:
    from dockcheck.config.models import AppConfig, ServerConfig
    from dockcheck.remote import RemoteRunner

logger = logging.getLogger(__name__)

LOCAL_PROBE_TIMEOUT = 5.0


def in_container_command(app: AppConfig) -> str:
    return f"docker exec {shlex.quote(app.name)} curl http://localhost:{app.docker.image_port}"


def on_host_command(app: AppConfig) -> str:
    return f"curl 127.0.0.1:{app.port}"


async def check_in_container(runner: RemoteRunner, server: ServerConfig, app: AppConfig) -> bool:
    result = await runner.run(server, in_container_command(app))
    return result.exit_code == 0


async def check_on_host(runner: RemoteRunner, server: ServerConfig, app: AppConfig) -> bool:
    result = await runner.run(server, on_host_command(app))
    return result.exit_code == 0


async def check_locally(server: ServerConfig, app: AppConfig, timeout: float = LOCAL_PROBE_TIMEOUT) -> bool:
    """Send a HEAD request from this machine to the app's published port."""
    url = f"http://{server.host}:{app.port}"
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            resp = await client.head(url)
            resp.raise_for_status()
    except httpx.ConnectError as exc:
        logger.info("%s unreachable: connection refused (%s)", url, exc)
        return False
    except httpx.TimeoutException:
        logger.info("%s unreachable: timed out after %ss", url, timeout)
        return False
    except httpx.HTTPStatusError as exc:
        logger.info("%s answered %s", url, exc.response.status_code)
        return False
    except Exception as exc:
        logger.info("%s unreachable: %s", url, exc)
        return False
    return True


async def probe_reachability(runner: RemoteRunner, server: ServerConfig, app: AppConfig) -> ReachabilityReport:
    """Run the in-container, on-host and local probes concurrently.

    Every probe settles before the report is built. Transport failures from
    *runner* are re-raised once all three are done.
    """
    in_container, on_host, local = await asyncio.gather(
        check_in_container(runner, server, app),
        check_on_host(runner, server, app),
        check_locally(server, app),
        return_exceptions=True,
    )
    for result in (in_container, on_host, local):
        if isinstance(result, BaseException):
            raise result
    return ReachabilityReport(in_container=in_container, on_host=on_host, local=local)
