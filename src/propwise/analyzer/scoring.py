"""Testability score: a pure function of purity, patterns, complexity and visibility."""

from __future__ import annotations

from collections.abc import Sequence

from propwise.analyzer.models import PatternMatch, PurityVerdict, ScoreBreakdown
from propwise.ir.nodes import FunctionRecord, NodeKind
from propwise.ir.text import render

# Conditional forms that always count as non-trivial, whatever their length.
MULTI_CLAUSE_FORMS = frozenset({"case", "cond", "with"})

# Rendered bodies longer than this many lines are non-trivial.
MAX_TRIVIAL_LINES = 3


def is_complex(fn: FunctionRecord) -> bool:
    """Cheap proxy for "non-trivial": line count of the rendering, or a multi-clause body.

    This is not cyclomatic complexity; a long pipeline on one line stays trivial.
    """
    line_count = len(render(fn.body).split("\n"))
    if line_count > MAX_TRIVIAL_LINES:
        return True
    return fn.body.kind is NodeKind.CONDITIONAL and fn.body.name in MULTI_CLAUSE_FORMS


def score_breakdown(
    verdict: PurityVerdict,
    patterns: Sequence[PatternMatch],
    fn: FunctionRecord,
) -> ScoreBreakdown:
    if not verdict.is_pure:
        return ScoreBreakdown()

    count = len(patterns)
    return ScoreBreakdown(
        base=1,
        patterns=2 * count,
        multi_pattern_bonus=2 if count >= 2 else 0,
        complexity_bonus=1 if is_complex(fn) else 0,
        visibility_bonus=1 if fn.visibility == "public" else 0,
    )


def score(verdict: PurityVerdict, patterns: Sequence[PatternMatch], fn: FunctionRecord) -> int:
    """Impure functions score 0; pure ones 1 + 2/pattern + bonuses."""
    return score_breakdown(verdict, patterns, fn).total
