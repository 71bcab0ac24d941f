"""Path helpers: data directory and the workspace bind-mounted into ephemeral containers."""

from __future__ import annotations

from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Create the directory if missing and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """~/.dockhand (config, logs)."""
    return ensure_dir(Path.home() / ".dockhand")


def get_workspace_path(workspace: str | None = None) -> Path:
    """
    Resolve the base directory bind-mounted at /workdir by docker_run.

    Args:
        workspace: Optional path; defaults to ~/.dockhand/workspace.

    Returns:
        Absolute, existing directory.
    """
    if workspace and workspace.strip():
        path = Path(workspace.strip()).expanduser().resolve()
    else:
        path = get_data_path() / "workspace"
    return ensure_dir(path)
