"""Status checker: inspects, probes and renders an app on each of its servers."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from dockcheck.config.models import AppConfig, DockcheckConfig, ServerConfig
from dockcheck.display import StatusDisplay
from dockcheck.remote import RemoteRunner, SSHRunner
from dockcheck.status.formatter import format_status
from dockcheck.status.models import StatusReport
from dockcheck.status.parser import fetch_status
from dockcheck.status.probe import probe_reachability

logger = logging.getLogger(__name__)


class StatusChecker:
    """Checks configured apps on their servers."""

    def __init__(self, config: DockcheckConfig, runner: Optional[RemoteRunner] = None) -> None:
        self._config = config
        self._runner = runner or SSHRunner(config.ssh)

    @property
    def app_keys(self) -> List[str]:
        return list(self._config.apps.keys())

    def get_app(self, key: str) -> AppConfig:
        app = self._config.apps.get(key)
        if app is None:
            raise ValueError(f"Unknown app: {key}")
        return app

    def get_server(self, key: str) -> ServerConfig:
        server = self._config.servers.get(key)
        if server is None:
            raise ValueError(f"Unknown server: {key}")
        return server

    async def check_server(self, server_key: str, app_key: str) -> StatusReport:
        app = self.get_app(app_key)
        server = self.get_server(server_key)
        status = await fetch_status(self._runner, server, app.name)
        if status.is_stopped:
            logger.info("%s is not running on %s", app.name, server_key)
            return StatusReport(server=server_key, status=status)
        reachability = await probe_reachability(self._runner, server, app)
        return StatusReport(server=server_key, status=status, reachability=reachability)

    async def check_app(self, app_key: str, server_key: Optional[str] = None) -> List[StatusReport]:
        """Check *app_key* on every server it is deployed to, or only *server_key*."""
        app = self.get_app(app_key)
        if server_key is not None:
            if server_key not in app.servers:
                raise ValueError(f"App '{app_key}' is not deployed to server '{server_key}'")
            servers = [server_key]
        else:
            servers = list(app.servers)
        return list(await asyncio.gather(*(self.check_server(key, app_key) for key in servers)))

    def check_app_sync(self, app_key: str, server_key: Optional[str] = None) -> List[StatusReport]:
        return asyncio.run(self.check_app(app_key, server_key))

    def render(self, app_key: str, reports: List[StatusReport]) -> StatusDisplay:
        display = StatusDisplay(f"{app_key} status")
        for report in reports:
            section = display.add_line(f"{report.server} ({report.status.host})")
            format_status(report.status, report.reachability, section)
        return display
