"""Entry point for running dockhand as a module: python -m dockhand."""

from dockhand.cli.commands import app

if __name__ == "__main__":
    app()
