"""Configuration module for dockhand."""

from dockhand.config.loader import load_config, save_config, get_config_path
from dockhand.config.schema import Config, DockerConfig, SandboxConfig, TLSConfig

__all__ = [
    "Config",
    "DockerConfig",
    "SandboxConfig",
    "TLSConfig",
    "load_config",
    "save_config",
    "get_config_path",
]
