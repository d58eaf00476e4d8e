"""dockcheck configuration system."""

from dockcheck.config.loader import find_config_file, load_config
from dockcheck.config.models import AppConfig, DockcheckConfig, DockerConfig, ServerConfig, SSHConfig

__all__ = [
    "AppConfig",
    "DockcheckConfig",
    "DockerConfig",
    "SSHConfig",
    "ServerConfig",
    "load_config",
    "find_config_file",
]
