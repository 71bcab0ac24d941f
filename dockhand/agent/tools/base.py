"""Base class for agent tools.

Parameters are declared as a pydantic model; its JSON schema is what the
agent sees, and validation happens before any command is built.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from dockhand.utils.exceptions import ValidationError


class ToolParams(BaseModel):
    """Tool parameters: camelCase on the wire, snake_case in Python, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


def _format_errors(exc: PydanticValidationError) -> list[str]:
    errors = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "params"
        errors.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return errors


class Tool(ABC):
    """Agent-callable tool: name, description, JSON-schema parameters, async execute."""

    params_model: ClassVar[type[ToolParams] | None] = None

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @property
    def parameters(self) -> dict[str, Any]:
        if self.params_model is None:
            return {"type": "object", "properties": {}}
        schema = self.params_model.model_json_schema(by_alias=True)
        schema.pop("title", None)
        return schema

    @abstractmethod
    async def execute(self, **kwargs: Any) -> str:
        """Run the tool and return a string for the agent."""
        pass

    def validate_params(self, params: dict[str, Any]) -> list[str]:
        """Return human-readable validation errors (empty when valid)."""
        if self.params_model is None:
            return []
        try:
            self.params_model.model_validate(params)
        except PydanticValidationError as e:
            return _format_errors(e)
        return []

    def parse_params(self, params: dict[str, Any]) -> ToolParams:
        """
        Validate and coerce params.

        Raises:
            ValidationError: A required field is missing or empty, or a value has the wrong type.
        """
        if self.params_model is None:
            raise ValidationError("tool declares no parameters", operation=self.name)
        try:
            return self.params_model.model_validate(params)
        except PydanticValidationError as e:
            raise ValidationError("; ".join(_format_errors(e)), operation=self.name) from None

    def to_schema(self) -> dict[str, Any]:
        """Tool definition in OpenAI function format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }
