"""Entry point for running chainlog as a module."""

from chainlog.cli.commands import app

if __name__ == "__main__":
    app()
