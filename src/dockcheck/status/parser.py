"""Turn ``docker inspect`` output into a :class:`ContainerStatus`."""

from __future__ import annotations

import json
import logging
import shlex
from typing import TYPE_CHECKING, Any

from dockcheck.status.models import ContainerStatus, Severity

if TYPE_CHECKING:
    from dockcheck.config.models import ServerConfig
    from dockcheck.remote import RemoteRunner

logger = logging.getLogger(__name__)


def inspect_command(app_name: str) -> str:
    return f'docker inspect {shlex.quote(app_name)} --format "{{{{json .}}}}"'


def _state_severity(state: dict[str, Any]) -> Severity:
    if state.get("Restarting"):
        return Severity.WARNING
    if not state.get("Running"):
        return Severity.CRITICAL
    return Severity.NORMAL


def _split_ports(info: dict[str, Any]) -> tuple[list[str], list[str]]:
    published: list[str] = []
    exposed: list[str] = []
    ports = (info.get("NetworkSettings") or {}).get("Ports") or {}
    for port, bindings in ports.items():
        if bindings:
            # Only the first binding is shown
            published.append(f"{port} => {bindings[0]['HostPort']}")
        else:
            exposed.append(port)
    return published, exposed


def _dedupe_env(entries: list[str]) -> list[str]:
    env: dict[str, str] = {}
    for entry in entries:
        name = entry.split("=", 1)[0]
        env[name] = entry
    return list(env.values())


def _decode(raw_text: str) -> Any:
    # docker may print warnings before the JSON document
    start = raw_text.find("{")
    if start == -1:
        raise ValueError("no JSON object in inspection output")
    return json.loads(raw_text[start:].strip())


def parse_status(raw_text: str, host: str) -> ContainerStatus:
    """Parse inspection output for a container running on *host*.

    Anything unreadable (no JSON, invalid JSON, no ``State`` section) means the
    container does not exist or was removed, and gives the stopped record.
    """
    try:
        info = _decode(raw_text)
    except (ValueError, RecursionError) as exc:
        logger.debug("Unreadable inspection output from %s: %s", host, exc)
        return ContainerStatus.stopped(host)

    if not isinstance(info, dict) or not isinstance(info.get("State"), dict):
        logger.debug("Inspection output from %s has no State section", host)
        return ContainerStatus.stopped(host)

    state = info["State"]
    try:
        published, exposed = _split_ports(info)
        environment = _dedupe_env((info.get("Config") or {}).get("Env") or [])
        restart_count = info.get("RestartCount")
        if restart_count is not None:
            restart_count = int(restart_count)
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        logger.debug("Malformed inspection output from %s: %s", host, exc)
        return ContainerStatus.stopped(host)

    return ContainerStatus(
        host=host,
        created=info.get("Created"),
        status=state.get("Status", ""),
        severity=_state_severity(state),
        environment=environment,
        restart_count=restart_count,
        published_ports=published,
        exposed_ports=exposed,
    )


async def fetch_status(runner: RemoteRunner, server: ServerConfig, app_name: str) -> ContainerStatus:
    """Inspect *app_name* on *server* and parse the result."""
    result = await runner.run(server, inspect_command(app_name))
    return parse_status(result.output, server.host)
