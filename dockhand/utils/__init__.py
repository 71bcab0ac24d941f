"""Utility functions for dockhand."""

from dockhand.utils.helpers import ensure_dir, get_data_path, get_workspace_path
from dockhand.utils.exceptions import (
    DockhandError,
    ConfigurationError,
    ValidationError,
    InvocationError,
    InvocationTimeoutError,
    BufferExceededError,
    DecodeError,
    ErrorCategory,
    classify_exception,
    sanitize_error_message,
    format_tool_error,
)

__all__ = [
    "ensure_dir",
    "get_data_path",
    "get_workspace_path",
    "DockhandError",
    "ConfigurationError",
    "ValidationError",
    "InvocationError",
    "InvocationTimeoutError",
    "BufferExceededError",
    "DecodeError",
    "ErrorCategory",
    "classify_exception",
    "sanitize_error_message",
    "format_tool_error",
]
