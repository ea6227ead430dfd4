"""Unified scanner: config, parsing and analysis of a project directory in one pass."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from propwise.analyzer.models import AnalysisReport
from propwise.analyzer.service import analyze_project
from propwise.analyzer.suggestions import SuggestionStyle
from propwise.config import ProjectConfig, load_config
from propwise.ir import parse_project

log = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Analysis report plus the context it was produced in."""
    report: AnalysisReport
    project_path: Path
    config: ProjectConfig
    analyze_paths: list[str]


def scan(
    project_path: Path,
    *,
    config: ProjectConfig | None = None,
    min_score: int | None = None,
    style: SuggestionStyle | None = None,
    workers: int | None = None,
) -> ScanResult:
    """Run the full pipeline on a project directory.

    Args:
        project_path: Path to the project to scan.
        config: Explicit configuration. Defaults to the project's `.propwise.yml`.
        min_score: Overrides the configured threshold.
        style: Overrides the configured suggestion style.
        workers: Thread pool size for per-function analysis.

    Returns:
        ScanResult with the analysis report.
    """
    project_path = project_path.resolve()
    if config is None:
        config = load_config(project_path)

    analyze_paths = config.resolve_analyze_paths(project_path)
    log.info("Scanning %s (paths: %s)", project_path, ", ".join(analyze_paths))

    functions = parse_project(project_path, analyze_paths, config.exclude)

    report = analyze_project(
        functions,
        min_score=config.min_score if min_score is None else min_score,
        rules=config.analysis_rules(),
        style=style or config.suggestion_style,
        workers=workers,
    )
    log.info("Scan complete: %d candidates out of %d functions",
             report.candidates_count, report.total_functions)

    return ScanResult(
        report=report,
        project_path=project_path,
        config=config,
        analyze_paths=analyze_paths,
    )
