"""
PropWise analysis entrypoint.

Usage:
    from pathlib import Path
    from propwise.ir import parse_project
    from propwise.analyzer.service import analyze_project

    functions = parse_project(Path("/path/to/repo"), analyze_paths=["src"])
    report = analyze_project(functions, min_score=3)

    # report.candidates:     scored Candidate objects, best first
    # report.inverse_pairs:  InversePair objects (round-trip candidates)
    # report.total_functions / candidates_count / dropped_count
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from propwise.analyzer.models import AnalysisReport, Candidate
from propwise.analyzer.patterns import detect_patterns, find_inverse_pairs
from propwise.analyzer.purity import classify
from propwise.analyzer.rules import DEFAULT_RULES, AnalysisRules
from propwise.analyzer.scoring import is_complex, score_breakdown
from propwise.analyzer.suggestions import SuggestionStyle, suggest
from propwise.ir.nodes import FunctionRecord

log = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 3


def analyze_function(
    fn: FunctionRecord,
    rules: AnalysisRules = DEFAULT_RULES,
    style: SuggestionStyle = "hypothesis",
) -> Candidate:
    """Classify, detect, score and suggest for a single function."""
    verdict = classify(fn.body, rules.purity)
    patterns = detect_patterns(fn, rules.patterns)
    breakdown = score_breakdown(verdict, patterns, fn)
    return Candidate(
        module=fn.module,
        name=fn.name,
        arity=fn.arity,
        file=fn.file,
        line=fn.line,
        visibility=fn.visibility,
        purity=verdict,
        patterns=patterns,
        score=breakdown.total,
        breakdown=breakdown,
        is_complex=is_complex(fn),
        suggestions=suggest(patterns, fn, style),
    )


def analyze_project(
    functions: Sequence[FunctionRecord],
    min_score: int = DEFAULT_MIN_SCORE,
    rules: AnalysisRules | None = None,
    style: SuggestionStyle = "hypothesis",
    workers: int | None = None,
) -> AnalysisReport:
    """Analyze every function and keep those scoring at least `min_score`.

    Args:
        functions: Function records from the front end, in source order.
        min_score: Inclusive threshold for a function to be reported.
        rules: Side-effect rules, pattern keywords and inverse conventions.
        style: "hypothesis" for test skeletons, "hints" for a checklist.
        workers: Evaluate functions on a thread pool of this size when > 1.

    Returns:
        AnalysisReport with candidates sorted by score (ties keep source order)
        and inverse pairs found across all functions.
    """
    rules = rules or DEFAULT_RULES

    if workers and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            analyzed = list(pool.map(lambda fn: analyze_function(fn, rules, style), functions))
    else:
        analyzed = [analyze_function(fn, rules, style) for fn in functions]

    kept = [c for c in analyzed if c.score >= min_score]
    kept = sorted(kept, key=lambda c: c.score, reverse=True)
    dropped = sum(1 for c in analyzed if 0 < c.score < min_score)

    inverse_pairs = find_inverse_pairs(functions, rules.inverse_conventions)

    log.info(
        "Analyzed %d functions: %d candidates, %d below threshold, %d inverse pairs",
        len(analyzed), len(kept), dropped, len(inverse_pairs),
    )

    return AnalysisReport(
        candidates=kept,
        inverse_pairs=inverse_pairs,
        total_functions=len(analyzed),
        candidates_count=len(kept),
        dropped_count=dropped,
        min_score=min_score,
    )
