"""Pydantic models for dockcheck configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServerConfig(BaseModel):
    """A remote machine reachable over SSH."""

    host: str
    username: str = "root"
    port: int = 22
    pem: str | None = None  # path to a private key, ssh defaults when unset


class DockerConfig(BaseModel):
    """Container-side settings for an app."""

    image_port: int = 3000


class AppConfig(BaseModel):
    """An app deployed as a Docker container on one or more servers."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    servers: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    docker: DockerConfig = Field(default_factory=DockerConfig)

    @field_validator("env")
    @classmethod
    def check_port(cls, env: dict[str, str]) -> dict[str, str]:
        port = env.get("PORT")
        if port is not None and not port.strip().isdigit():
            raise ValueError(f"env.PORT must be a port number, got {port!r}")
        return env

    @property
    def port(self) -> int:
        """Host port the app is published on (``env.PORT``)."""
        return int(self.env.get("PORT", 80))


class SSHConfig(BaseModel):
    """Options shared by every SSH connection."""

    timeout: float = 30.0
    options: list[str] = Field(default_factory=list)


class DockcheckConfig(BaseModel):
    """Root configuration model for .dockcheck.yaml."""

    servers: dict[str, ServerConfig] = Field(default_factory=dict)
    apps: dict[str, AppConfig] = Field(default_factory=dict)
    ssh: SSHConfig = Field(default_factory=SSHConfig)
