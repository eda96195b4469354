"""Utility functions for chainlog."""

from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """Get the chainlog data directory (~/.chainlog)."""
    return ensure_dir(Path.home() / ".chainlog")
