"""Uniform result record returned by every docker operation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


def _truncate(text: str, limit: int) -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    return text[:limit] + f"\n... (truncated, {len(text) - limit} more chars)"


@dataclass
class CommandResult:
    """
    Outcome of one docker invocation.

    ok is True iff the exit code was zero and nothing raised during
    invocation or parsing. Operation-specific values (count, containers,
    spaceReclaimed, ...) live in `fields`, keyed by their wire names.
    """

    ok: bool
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "ok": self.ok,
            "exitCode": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr,
        }
        if self.error is not None:
            out["error"] = self.error
        out.update(self.fields)
        return out

    def to_json(self, max_output_chars: int = 0) -> str:
        """JSON for agent consumption; stdout/stderr truncated to max_output_chars when > 0."""
        data = self.to_dict()
        data["stdout"] = _truncate(self.stdout, max_output_chars)
        data["stderr"] = _truncate(self.stderr, max_output_chars)
        return json.dumps(data, ensure_ascii=False, default=str)
