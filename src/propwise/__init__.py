"""PropWise: find functions worth property-based testing."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from propwise.analyzer.models import AnalysisReport

__version__ = "0.1.0"


def analyze(path: str | Path, min_score: int | None = None) -> AnalysisReport:
    """Scan a project directory and return its AnalysisReport."""
    from propwise.scanner import scan

    return scan(Path(path), min_score=min_score).report
