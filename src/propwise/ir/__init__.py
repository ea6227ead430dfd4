"""IR (Intermediate Representation) package for propwise.

Provides:
    parse_project(root, analyze_paths, exclude) -> list[FunctionRecord]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from propwise.ir.nodes import FunctionRecord, NodeKind, SyntaxNode
from propwise.ir.python_frontend import parse_file, parse_source
from propwise.ir.text import render
from propwise.utils import discover_files

log = logging.getLogger(__name__)


def parse_project(
    root: Path,
    analyze_paths: Iterable[str] = (".",),
    exclude: Iterable[str] = (),
) -> list[FunctionRecord]:
    """Collect FunctionRecords from every Python file under the analyze paths.

    Args:
        root: Project root.
        analyze_paths: Directories (relative to root) to scan. Module names are
            computed relative to each of them.
        exclude: Extra directory names to skip.

    Returns:
        FunctionRecords in discovery order (path order, then source order).
    """
    exclude = tuple(exclude)
    functions: list[FunctionRecord] = []
    seen: set[Path] = set()
    file_count = 0

    for rel in analyze_paths:
        base = (root / rel).resolve()
        if not base.is_dir():
            log.debug("Analyze path %s does not exist, skipping", base)
            continue
        for fpath in discover_files(base, skip_dirs=exclude):
            if fpath in seen:
                continue
            seen.add(fpath)
            file_count += 1
            functions.extend(parse_file(fpath, base))

    log.info("Parsed %d functions from %d files", len(functions), file_count)
    return functions


__all__ = [
    "FunctionRecord",
    "NodeKind",
    "SyntaxNode",
    "parse_file",
    "parse_project",
    "parse_source",
    "render",
]
