"""App listing and status endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

import yaml
from fastapi import APIRouter, HTTPException

from dockcheck.config.loader import load_config
from dockcheck.display import StatusDisplay
from dockcheck.remote import RemoteExecutionError
from dockcheck.status.checker import StatusChecker
from dockcheck.status.formatter import format_status

router = APIRouter(tags=["apps"])


def _get_checker() -> StatusChecker:
    try:
        config = load_config()
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        raise HTTPException(status_code=500, detail=f"Configuration error: {exc}")
    return StatusChecker(config)


@router.get("/apps")
async def list_apps() -> List[Dict[str, Any]]:
    checker = _get_checker()
    apps = []
    for key in checker.app_keys:
        entry = checker.get_app(key)
        apps.append({"key": key, "name": entry.name, "servers": entry.servers, "port": entry.port})
    return apps


@router.get("/apps/{name}/status")
async def app_status(name: str) -> List[Dict[str, Any]]:
    checker = _get_checker()
    try:
        reports = await checker.check_app(name)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except RemoteExecutionError as exc:
        raise HTTPException(status_code=502, detail=f"{exc.host}: {exc}")

    out = []
    for report in reports:
        display = StatusDisplay(report.server)
        format_status(report.status, report.reachability, display)
        out.append(
            {
                "server": report.server,
                "status": report.status.to_dict(),
                "reachability": report.reachability.to_dict() if report.reachability else None,
                "display": display.to_dict(),
            }
        )
    return out
