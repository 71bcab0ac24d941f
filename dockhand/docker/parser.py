"""Result parser: table text, `{{json .}}` line streams, and prune summaries."""

from __future__ import annotations

import json
import re
from typing import Any

from dockhand.utils.exceptions import DecodeError

_RECLAIMED_RE = re.compile(r"Total reclaimed space: ([\d.]+\s?[KMGT]?B)", re.IGNORECASE)
_DELETED_VOLUMES_RE = re.compile(r"Deleted Volumes:\s*(.*?)Total", re.DOTALL)


def non_empty_lines(stdout: str) -> list[str]:
    return [line for line in stdout.strip().split("\n") if line.strip()]


def parse_table(stdout: str) -> str:
    return stdout.strip()


def count_lines(stdout: str) -> int:
    """Number of non-empty lines."""
    return len(non_empty_lines(stdout))


def parse_json_lines(stdout: str, operation: str) -> list[dict[str, Any]]:
    """
    Parse docker's `--format '{{json .}}'` output: one JSON object per line.

    Blank lines are skipped. Any undecodable line fails the whole call.

    Raises:
        DecodeError: A line is not a JSON object.
    """
    items: list[dict[str, Any]] = []
    for line in non_empty_lines(stdout):
        try:
            obj = json.loads(line)
        except json.JSONDecodeError as e:
            raise DecodeError(operation, str(e), line=line) from e
        if not isinstance(obj, dict):
            raise DecodeError(operation, f"expected a JSON object, got {type(obj).__name__}", line=line)
        items.append(obj)
    return items


def parse_reclaimed_space(stdout: str) -> str:
    """Extract 'Total reclaimed space: 1.2GB' -> '1.2GB'; '0B' when absent."""
    match = _RECLAIMED_RE.search(stdout)
    return match.group(1) if match else "0B"


def count_deleted_volumes(stdout: str) -> int:
    match = _DELETED_VOLUMES_RE.search(stdout)
    if not match:
        return 0
    return count_lines(match.group(1))
