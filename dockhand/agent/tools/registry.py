"""Tool registry for dynamic tool management.

The plugin installs docker tools here; an optional allowlist limits which
optional tools are enabled.
"""

from typing import Any

from loguru import logger

from dockhand.agent.tools.base import Tool
from dockhand.utils.exceptions import format_tool_error


class ToolRegistry:
    """
    Registry for agent tools.

    Allows dynamic registration and execution of tools.
    """

    def __init__(self, optional_allowlist: list[str] | None = None):
        self._tools: dict[str, Tool] = {}
        self._optional_tools: set[str] = set()
        normalized = [str(x).strip() for x in (optional_allowlist or []) if str(x).strip()]
        self._optional_allowlist: set[str] | None = set(normalized) if normalized else None

    def register(self, tool: Tool, *, optional: bool = False) -> None:
        """Register a tool."""
        self._tools[tool.name] = tool
        if optional:
            self._optional_tools.add(tool.name)
        else:
            self._optional_tools.discard(tool.name)

    def unregister(self, name: str) -> None:
        self._tools.pop(name, None)

    def get(self, name: str) -> Tool | None:
        if not self._is_enabled(name):
            return None
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        return name in self._tools and self._is_enabled(name)

    def get_definitions(self) -> list[dict[str, Any]]:
        """Get all enabled tool definitions in OpenAI format."""
        return [tool.to_schema() for name, tool in self._tools.items() if self._is_enabled(name)]

    async def execute(self, name: str, params: dict[str, Any]) -> str:
        """
        Execute a tool by name with given parameters.

        Failures never raise out of here; they come back as "Error: ..." strings
        the agent can read.

        Args:
            name: Tool name.
            params: Tool parameters (camelCase or snake_case keys).

        Returns:
            Tool execution result as string.
        """
        if not isinstance(params, dict):
            params = {}
        tool = self._tools.get(name)
        if not tool:
            return f"Error: Tool '{name}' not found"
        if not self._is_enabled(name):
            return f"Error: Tool '{name}' is disabled"

        errors = tool.validate_params(params)
        if errors:
            return f"Error: Invalid parameters for tool '{name}': " + "; ".join(errors)
        try:
            return await tool.execute(**params)
        except Exception as e:
            logger.warning("Tool {} failed: {}", name, e)
            return format_tool_error(name, e)

    @property
    def tool_names(self) -> list[str]:
        return [name for name in self._tools if self._is_enabled(name)]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools and self._is_enabled(name)

    def _is_enabled(self, name: str) -> bool:
        if name not in self._tools:
            return False
        if name not in self._optional_tools:
            return True
        if self._optional_allowlist is None:
            return True
        return name in self._optional_allowlist
