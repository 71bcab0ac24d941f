"""dockhand - Docker CLI tools and sandbox provider for agents."""

__version__ = "0.1.0"
__logo__ = "🐳"
