"""Read .dockcheck.yaml into a validated DockcheckConfig."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from dockcheck.config.models import DockcheckConfig

CONFIG_FILENAME = ".dockcheck.yaml"
CONFIG_ENV = "DOCKCHECK_CONFIG"

_PLACEHOLDER = re.compile(r"\$\{(?P<name>[^}:]+)(?::-(?P<default>[^}]*))?\}")


def _substitute(match: re.Match[str]) -> str:
    fallback = match["default"] if match["default"] is not None else match[0]
    return os.environ.get(match["name"].strip(), fallback)


def _expand(data: Any) -> Any:
    # ${NAME} or ${NAME:-default}; unset names without a default stay as written
    if isinstance(data, str):
        return _PLACEHOLDER.sub(_substitute, data)
    if isinstance(data, dict):
        return {key: _expand(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_expand(item) for item in data]
    return data


def find_config_file(start: Path | None = None) -> Path | None:
    """Return $DOCKCHECK_CONFIG, or the nearest .dockcheck.yaml above *start* (default cwd)."""
    if start is None and os.environ.get(CONFIG_ENV):
        return Path(os.environ[CONFIG_ENV]).expanduser()
    directory = (start or Path.cwd()).resolve()
    for candidate in (d / CONFIG_FILENAME for d in (directory, *directory.parents)):
        if candidate.is_file():
            return candidate
    return None


def _check_references(config: DockcheckConfig) -> None:
    for key, app in config.apps.items():
        missing = [name for name in app.servers if name not in config.servers]
        if missing:
            raise ValueError(f"App '{key}' references unknown server '{missing[0]}'")


def load_config(path: Path | None = None) -> DockcheckConfig:
    config_path = path or find_config_file()
    if config_path is None or not config_path.is_file():
        raise FileNotFoundError(
            f"No {CONFIG_FILENAME} found. Create one next to your project, set {CONFIG_ENV}, or pass --path."
        )
    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    try:
        config = DockcheckConfig(**_expand(raw))
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration in {config_path}: {exc}") from exc
    _check_references(config)
    return config
