"""
Exception hierarchy and error handling utilities for dockhand.

Provides:
- Custom exception classes with error codes
- Error categorization (validation, configuration, invocation, decode)
- Safe error message formatting (no sensitive data leak)
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    INVOCATION = "invocation"
    TIMEOUT = "timeout"
    DECODE = "decode"
    NOT_FOUND = "not_found"
    FATAL = "fatal"


class DockhandError(Exception):
    """Base exception for all dockhand errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


def _prefixed(operation: str | None, message: str) -> str:
    return f"[{operation}] {message}" if operation else message


class ConfigurationError(DockhandError):
    """A required collaborator (e.g. the Docker connection) is not configured."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(
            _prefixed(operation, message),
            code="CONFIGURATION_ERROR",
            category=ErrorCategory.CONFIGURATION,
            details={"operation": operation} if operation else {},
        )


class ValidationError(DockhandError):
    """Input validation error."""

    def __init__(self, message: str, field: str | None = None, operation: str | None = None):
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if operation:
            details["operation"] = operation
        super().__init__(
            _prefixed(operation, message),
            code="VALIDATION_ERROR",
            category=ErrorCategory.VALIDATION,
            details=details,
        )


class InvocationError(DockhandError):
    """The docker process failed to start or exited non-zero."""

    def __init__(
        self,
        operation: str,
        message: str,
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
        code: str = "INVOCATION_ERROR",
        category: ErrorCategory = ErrorCategory.INVOCATION,
    ):
        super().__init__(
            _prefixed(operation, message),
            code=code,
            category=category,
            details={"operation": operation, "exit_code": exit_code},
        )
        self.operation = operation
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class InvocationTimeoutError(InvocationError):
    """The docker process exceeded its timeout and was terminated."""

    def __init__(self, operation: str, timeout_seconds: float, stdout: str = "", stderr: str = ""):
        super().__init__(
            operation,
            f"Command timed out after {timeout_seconds} seconds",
            exit_code=None,
            stdout=stdout,
            stderr=stderr,
            code="TIMEOUT",
            category=ErrorCategory.TIMEOUT,
        )
        self.details["timeout_seconds"] = timeout_seconds
        self.timeout_seconds = timeout_seconds


class BufferExceededError(InvocationError):
    """The docker process produced more output than the capture limit allows."""

    def __init__(self, operation: str, max_buffer: int):
        super().__init__(
            operation,
            f"Output exceeded the {max_buffer} byte capture limit",
            code="BUFFER_EXCEEDED",
        )
        self.details["max_buffer"] = max_buffer
        self.max_buffer = max_buffer


class DecodeError(DockhandError):
    """Expected-JSON output could not be decoded."""

    def __init__(self, operation: str, message: str, line: str = ""):
        super().__init__(
            _prefixed(operation, f"Error parsing JSON output: {message}"),
            code="DECODE_ERROR",
            category=ErrorCategory.DECODE,
            details={"operation": operation, "line": line[:200]},
        )
        self.operation = operation


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"sk-[a-zA-Z0-9]{20,}"),
]

# docker login -p <password>
_PASSWORD_FLAG = re.compile(r"(\s-p\s+)\S+")


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = _PASSWORD_FLAG.sub(lambda m: m.group(1) + replacement, message)
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: Exception) -> tuple[str, ErrorCategory]:
    """Classify an exception and return (error_code, category)."""
    if isinstance(exc, DockhandError):
        return exc.code, exc.category

    if isinstance(exc, FileNotFoundError):
        return "FILE_NOT_FOUND", ErrorCategory.NOT_FOUND

    if isinstance(exc, asyncio.TimeoutError):
        return "TIMEOUT", ErrorCategory.TIMEOUT

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.DECODE

    if isinstance(exc, (ValueError, KeyError, TypeError)):
        return "INVALID_VALUE", ErrorCategory.VALIDATION

    return "INTERNAL_ERROR", ErrorCategory.FATAL


def format_tool_error(tool_name: str, exc: Exception, include_details: bool = False) -> str:
    """Format an exception as a tool error response string."""
    code, category = classify_exception(exc)

    if isinstance(exc, DockhandError):
        message = sanitize_error_message(exc.message)
    else:
        message = f"[{tool_name}] {sanitize_error_message(str(exc))}"

    if include_details:
        return f"Error [{code}] ({category.value}): {message}"
    return f"Error: {message}"
