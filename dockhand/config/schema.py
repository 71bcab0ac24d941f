"""Configuration schema using Pydantic.

Single data model and defaults for dockhand, persisted to ~/.dockhand/config.json.
"""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"


class TLSConfig(BaseModel):
    """TLS material for a remote Docker daemon."""
    verify: bool = False
    ca_cert: str | None = None  # Path to CA certificate file
    cert: str | None = None  # Path to client certificate file
    key: str | None = None  # Path to client key file


class DockerConfig(BaseModel):
    """Docker daemon connection."""
    # e.g. tcp://remote-host:2375 or ssh://user@host
    host: str = DEFAULT_DOCKER_HOST
    tls: TLSConfig | None = None
    # Prefix every command with coreutils `timeout <n>s` in addition to the in-process timeout.
    timeout_wrapper: bool = True
    max_buffer_bytes: int = 5 * 1024 * 1024


class SandboxProviderConfig(BaseModel):
    """A named sandbox provider."""
    type: Literal["docker"] = "docker"


class SandboxConfig(BaseModel):
    """Sandbox providers registered at install time."""
    default_provider: str = ""
    providers: dict[str, SandboxProviderConfig] = Field(default_factory=dict)


class ToolsConfig(BaseModel):
    """Docker tools configuration."""
    # Host directory bind-mounted at /workdir by docker_run.
    working_dir: str = "~/.dockhand/workspace"
    # When non-empty, only these tools are enabled.
    optional_allowlist: list[str] = Field(default_factory=list)
    max_output_chars: int = 10000


class LoggingConfig(BaseModel):
    """Loguru sinks."""
    level: str = "INFO"
    file_enabled: bool = True


class Config(BaseSettings):
    """Root configuration for dockhand."""
    docker: DockerConfig | None = None
    sandbox: SandboxConfig | None = None
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def docker_enabled(self) -> bool:
        return self.docker is not None

    model_config = SettingsConfigDict(
        env_prefix="DOCKHAND_",
        env_nested_delimiter="__"
    )
