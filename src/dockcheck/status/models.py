"""Data models for container status and reachability."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Severity(str, Enum):
    """Three-tier classification shown as green, yellow or red."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def color(self) -> str:
        return _PALETTE[self]

    @classmethod
    def from_flag(cls, ok: bool) -> Severity:
        return cls.NORMAL if ok else cls.CRITICAL

    @classmethod
    def from_restart_count(cls, count: Optional[int]) -> Severity:
        if count is None or count <= 0:
            return cls.NORMAL
        if count > 2:
            return cls.CRITICAL
        return cls.WARNING


_PALETTE = {
    Severity.NORMAL: "green",
    Severity.WARNING: "yellow",
    Severity.CRITICAL: "red",
}

STOPPED = "Stopped"


@dataclass
class CommandResult:
    """Outcome of a command run on a remote host."""

    host: str
    exit_code: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass
class ContainerStatus:
    """Normalized view of a container's ``docker inspect`` output."""

    host: str
    status: str
    severity: Severity
    created: Optional[str] = None
    environment: list[str] = field(default_factory=list)
    restart_count: Optional[int] = None
    published_ports: list[str] = field(default_factory=list)
    exposed_ports: list[str] = field(default_factory=list)
    inspected: bool = True  # false only for the fallback record

    @classmethod
    def stopped(cls, host: str) -> ContainerStatus:
        """The record used when the container is missing or unreadable."""
        return cls(host=host, status=STOPPED, severity=Severity.CRITICAL, inspected=False)

    @property
    def restart_severity(self) -> Severity:
        return Severity.from_restart_count(self.restart_count)

    @property
    def is_stopped(self) -> bool:
        return not self.inspected

    def to_dict(self) -> dict[str, Any]:
        return {
            "host": self.host,
            "created": self.created,
            "status": self.status,
            "severity": self.severity.value,
            "environment": list(self.environment),
            "restart_count": self.restart_count,
            "restart_severity": self.restart_severity.value,
            "published_ports": list(self.published_ports),
            "exposed_ports": list(self.exposed_ports),
        }


@dataclass
class ReachabilityReport:
    """Whether the app answers from inside its container, on its host, and locally."""

    in_container: bool
    on_host: bool
    local: bool

    @property
    def in_container_severity(self) -> Severity:
        return Severity.from_flag(self.in_container)

    @property
    def on_host_severity(self) -> Severity:
        return Severity.from_flag(self.on_host)

    @property
    def local_severity(self) -> Severity:
        return Severity.from_flag(self.local)

    def to_dict(self) -> dict[str, Any]:
        return {
            "in_container": self.in_container,
            "on_host": self.on_host,
            "local": self.local,
        }


@dataclass
class StatusReport:
    """Status of one app on one server."""

    server: str
    status: ContainerStatus
    reachability: Optional[ReachabilityReport] = None
