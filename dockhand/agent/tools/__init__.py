"""Agent tools: base class, registry and the docker tool set."""

from dockhand.agent.tools.base import Tool, ToolParams
from dockhand.agent.tools.registry import ToolRegistry

__all__ = ["Tool", "ToolParams", "ToolRegistry"]
