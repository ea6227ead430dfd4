"""Shared utilities for propwise."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

# Directories to skip during file discovery
SKIP_DIRS = {
    ".git", "__pycache__", "node_modules", "venv", ".venv", "env",
    ".tox", ".mypy_cache", ".pytest_cache", ".ruff_cache", "dist",
    "build", "egg-info", ".eggs", ".nox", ".ipynb_checkpoints",
    ".hypothesis",
}

# Maximum file size to read (skip generated or vendored blobs)
MAX_FILE_SIZE = 2 * 1024 * 1024  # 2 MB


def discover_files(
    workspace: Path,
    suffix: str = ".py",
    skip_dirs: Iterable[str] = (),
) -> list[Path]:
    """Walk workspace in a stable order, skipping ignored dirs and large files."""
    skip = SKIP_DIRS | set(skip_dirs)
    files: list[Path] = []
    for item in sorted(workspace.rglob(f"*{suffix}")):
        if item.is_dir():
            continue
        if any(part in skip for part in item.relative_to(workspace).parts):
            continue
        try:
            if item.stat().st_size > MAX_FILE_SIZE:
                continue
        except OSError:
            continue
        files.append(item)
    return files
