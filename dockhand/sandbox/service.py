"""Sandbox service: named providers registered at install time."""

from __future__ import annotations

from loguru import logger

from dockhand.sandbox.base import SandboxProvider
from dockhand.utils.exceptions import ConfigurationError


class SandboxService:
    """Registry of sandbox providers by name."""

    def __init__(self, default_provider: str = ""):
        self._providers: dict[str, SandboxProvider] = {}
        self._default = (default_provider or "").strip()

    def register_provider(self, name: str, provider: SandboxProvider) -> None:
        self._providers[name] = provider
        logger.debug("Registered sandbox provider {}", name)

    def unregister_provider(self, name: str) -> None:
        self._providers.pop(name, None)

    def get_provider(self, name: str | None = None) -> SandboxProvider:
        """
        Resolve a provider: explicit name, else the configured default, else the first registered.

        Raises:
            ConfigurationError: No matching provider is registered.
        """
        key = (name or "").strip() or self._default
        if key:
            provider = self._providers.get(key)
            if provider is None:
                raise ConfigurationError(f"Sandbox provider not found: {key}", operation="sandbox")
            return provider
        if not self._providers:
            raise ConfigurationError("No sandbox provider is configured", operation="sandbox")
        return next(iter(self._providers.values()))

    @property
    def provider_names(self) -> list[str]:
        return list(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, name: str) -> bool:
        return name in self._providers
