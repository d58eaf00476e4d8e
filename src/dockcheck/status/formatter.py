"""Write container status and reachability into a line sink."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from dockcheck.display import LineSink
    from dockcheck.status.models import ContainerStatus, ReachabilityReport

IN_CONTAINER_LABEL = "Available in app's docker container"
ON_HOST_LABEL = "Available on server"
LOCAL_LABEL = "Available on local computer"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def format_port_sections(exposed_ports: list[str], published_ports: list[str], sink: LineSink) -> None:
    if exposed_ports:
        section = sink.add_line("Exposed Ports:")
        for port in exposed_ports:
            section.add_line(f"- {port}")

    if published_ports:
        section = sink.add_line("Published Ports:")
        for port in published_ports:
            section.add_line(f"- {port}")


def format_availability(status: ContainerStatus, reachability: ReachabilityReport, sink: LineSink) -> None:
    """Report where the app answers.

    Without a published port traffic comes through a reverse proxy, so only
    the in-container probe is meaningful.
    """
    if status.published_ports:
        host_port = status.published_ports[0].split("=>")[1].strip()
        section = sink.add_line(f"App running at http://{status.host}:{host_port}")
        section.add_line(
            f"- {IN_CONTAINER_LABEL}: {_flag(reachability.in_container)}", reachability.in_container_severity
        )
        section.add_line(f"- {ON_HOST_LABEL}: {_flag(reachability.on_host)}", reachability.on_host_severity)
        section.add_line(f"- {LOCAL_LABEL}: {_flag(reachability.local)}", reachability.local_severity)
    else:
        section = sink.add_line("App available through reverse proxy")
        section.add_line(
            f"- {IN_CONTAINER_LABEL}: {_flag(reachability.in_container)}", reachability.in_container_severity
        )


def format_status(status: ContainerStatus, reachability: Optional[ReachabilityReport], sink: LineSink) -> None:
    sink.add_line(f"Status: {status.status}", status.severity)
    if status.is_stopped:
        return

    if status.created:
        sink.add_line(f"Created at {status.created}")
    if status.restart_count is not None:
        sink.add_line(f"Restarted {status.restart_count} times", status.restart_severity)
    if status.environment:
        section = sink.add_line("Environment Variables:")
        for entry in status.environment:
            section.add_line(f"- {entry}")

    format_port_sections(status.exposed_ports, status.published_ports, sink)
    if reachability is not None:
        format_availability(status, reachability, sink)
