"""Shared helpers for render backends (text, markdown, PDF)."""

from __future__ import annotations

from propwise.analyzer.models import AnalysisReport, Candidate, InversePair
from propwise.analyzer.rules import PatternKind

# Candidates listed in full; the rest only count towards the summary.
MAX_LISTED_CANDIDATES = 20

_PATTERN_LABELS = {
    PatternKind.COLLECTION_OPERATION: "Collection Operation",
    PatternKind.TRANSFORMATION: "Data Transformation",
    PatternKind.VALIDATION: "Validation",
    PatternKind.ALGEBRAIC: "Algebraic Structure",
    PatternKind.ENCODER_DECODER: "Encoder/Decoder",
    PatternKind.PARSER: "Parser",
    PatternKind.NUMERIC: "Numeric Algorithm",
}

# Score tiers for badges: (lower bound, label)
_TIERS = ((8, "strong"), (5, "good"), (1, "fair"))


def pattern_label(kind: PatternKind) -> str:
    return _PATTERN_LABELS.get(kind, str(kind.value))


def candidate_labels(candidate: Candidate) -> str:
    """Comma-joined human labels of a candidate's patterns."""
    return ", ".join(pattern_label(p.kind) for p in candidate.patterns) or "none"


def score_tier(score: int) -> str:
    for bound, label in _TIERS:
        if score >= bound:
            return label
    return "none"


def coverage(report: AnalysisReport) -> float:
    """Share of analyzed functions that made the candidate list, in percent."""
    if report.total_functions == 0:
        return 0.0
    return round(report.candidates_count / report.total_functions * 100, 1)


def pair_label(pair: InversePair) -> str:
    f, i = pair.forward, pair.inverse
    return f"{pair.module}.{f.name}/{f.arity} <-> {i.name}/{i.arity}"


def location(candidate: Candidate) -> str:
    return f"{candidate.file}:{candidate.line}"


def listed_candidates(report: AnalysisReport) -> list[Candidate]:
    return report.candidates[:MAX_LISTED_CANDIDATES]


def summary_bullets(report: AnalysisReport) -> list[str]:
    """Plain-language takeaways for the top of a report."""
    bullets: list[str] = []
    if not report.candidates:
        bullets.append("No strong candidates found. Consider lowering the min_score threshold.")
    else:
        best = report.candidates[0]
        bullets.append(
            f"{report.candidates_count} of {report.total_functions} functions "
            f"score {report.min_score} or more."
        )
        bullets.append(f"Best candidate: {best.qualified_name} (score {best.score}).")
    if report.inverse_pairs:
        bullets.append(f"{len(report.inverse_pairs)} inverse pair(s) are ready for round-trip tests.")
    if report.dropped_count:
        bullets.append(f"{report.dropped_count} pure function(s) scored below the threshold.")
    return bullets


# Unicode -> ASCII substitutions for PDF core fonts (latin-1 only).
_UNICODE_SUBS = str.maketrans({
    "\u2014": "--",   # em dash
    "\u2013": "-",    # en dash
    "\u2018": "'",    # left single quote
    "\u2019": "'",    # right single quote
    "\u201c": '"',    # left double quote
    "\u201d": '"',    # right double quote
    "\u2026": "...",  # ellipsis
    "\u2192": "->",   # right arrow
    "\u2194": "<->",  # left-right arrow
    "\u00a0": " ",    # non-breaking space
})


def latin1(text: str) -> str:
    """Sanitize text for latin-1 PDF core fonts."""
    result = text.translate(_UNICODE_SUBS)
    return result.encode("latin-1", errors="replace").decode("latin-1")
