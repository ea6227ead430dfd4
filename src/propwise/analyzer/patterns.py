"""Detect function shapes that suggest property-based tests, and inverse function pairs.

Seven detectors run in a fixed order, each contributing at most one match.
Textual checks run against the canonical rendering of the body (see
`propwise.ir.text`), never against raw source.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Sequence

from propwise.analyzer.models import FunctionRef, InversePair, PatternMatch
from propwise.analyzer.rules import (
    DEFAULT_PATTERN_KEYWORDS,
    INVERSE_CONVENTIONS,
    PatternKeywords,
    PatternKind,
)
from propwise.ir.nodes import FunctionRecord, NodeKind, SyntaxNode
from propwise.ir.text import render

log = logging.getLogger(__name__)

# Modules larger than this make the all-pairs inverse scan noticeably slow.
LARGE_MODULE_THRESHOLD = 500

_Detector = Callable[[FunctionRecord, str, PatternKeywords], str | None]


def detect_patterns(
    fn: FunctionRecord,
    keywords: PatternKeywords = DEFAULT_PATTERN_KEYWORDS,
) -> list[PatternMatch]:
    """Return the pattern matches for `fn`, in detector order."""
    body_text = render(fn.body)
    matches: list[PatternMatch] = []
    for kind, detector in _DETECTORS:
        reason = detector(fn, body_text, keywords)
        if reason is not None:
            matches.append(PatternMatch(kind=kind, reason=reason))
    return matches


# ── Detectors ───────────────────────────────────────────────────────────────


def _detect_collection_operation(fn: FunctionRecord, text: str, kw: PatternKeywords) -> str | None:
    return _first_regex(kw.collection_patterns, text)


def _detect_transformation(fn: FunctionRecord, text: str, kw: PatternKeywords) -> str | None:
    if any(marker in text for marker in kw.pipeline_markers):
        return "Pipeline transformation"
    if _has_struct_construction(fn.body, kw):
        return "Struct transformation"
    if _has_map_manipulation(fn.body, kw):
        return "Map transformation"
    return None


def _detect_validation(fn: FunctionRecord, text: str, kw: PatternKeywords) -> str | None:
    name = fn.name.lstrip("_")
    if name.startswith(kw.validation_prefixes) or any(s in name for s in kw.validation_substrings):
        return "Validation function"
    if name.startswith(kw.check_prefixes):
        return "Checking function"
    if any(word in text for word in kw.boolean_vocabulary):
        return "Boolean predicate"
    return None


def _detect_algebraic(fn: FunctionRecord, text: str, kw: PatternKeywords) -> str | None:
    if any(op in fn.name for op in kw.algebraic_names):
        return "Potentially algebraic operation"
    return None


def _detect_encoder_decoder(fn: FunctionRecord, text: str, kw: PatternKeywords) -> str | None:
    if any(word in fn.name for word in kw.encoding_names):
        return "Encoding/decoding function"
    return None


def _detect_parser(fn: FunctionRecord, text: str, kw: PatternKeywords) -> str | None:
    if any(word in fn.name for word in kw.parser_names):
        return "Parser function"
    if any(marker in text for marker in kw.string_parsing_markers):
        return "String parsing"
    return None


def _detect_numeric(fn: FunctionRecord, text: str, kw: PatternKeywords) -> str | None:
    return _first_regex(kw.numeric_patterns, text)


_DETECTORS: tuple[tuple[PatternKind, _Detector], ...] = (
    (PatternKind.COLLECTION_OPERATION, _detect_collection_operation),
    (PatternKind.TRANSFORMATION, _detect_transformation),
    (PatternKind.VALIDATION, _detect_validation),
    (PatternKind.ALGEBRAIC, _detect_algebraic),
    (PatternKind.ENCODER_DECODER, _detect_encoder_decoder),
    (PatternKind.PARSER, _detect_parser),
    (PatternKind.NUMERIC, _detect_numeric),
)


# ── Tree helpers ────────────────────────────────────────────────────────────


def _first_regex(patterns: Sequence[tuple[str, str]], text: str) -> str | None:
    for regex, reason in patterns:
        if re.search(regex, text):
            return reason
    return None


def _is_call(node: SyntaxNode) -> bool:
    return node.kind in (NodeKind.CALL, NodeKind.QUALIFIED_CALL)


def _has_struct_construction(body: SyntaxNode, kw: PatternKeywords) -> bool:
    """A record built field by field: `Point(x=1, y=2)` or `replace(p, x=3)`."""
    for node in body.walk():
        if not _is_call(node):
            continue
        if node.name in kw.struct_updaters:
            return True
        has_fields = any(c.kind is NodeKind.OTHER and c.name == "keyword" for c in node.children)
        if node.name[:1].isupper() and has_fields:
            return True
    return False


def _has_map_manipulation(body: SyntaxNode, kw: PatternKeywords) -> bool:
    for node in body.walk():
        if node.kind is NodeKind.OTHER and node.name in kw.map_constructs:
            return True
        if node.kind is NodeKind.CALL and node.name in kw.map_constructs:
            return True
        if node.kind is NodeKind.QUALIFIED_CALL and node.name in kw.map_methods:
            return True
    return False


# ── Inverse pairs ───────────────────────────────────────────────────────────


def find_inverse_pairs(
    functions: Iterable[FunctionRecord],
    conventions: Sequence[tuple[str, str]] = INVERSE_CONVENTIONS,
) -> list[InversePair]:
    """Find same-module function pairs named after a forward/inverse convention.

    Every ordered pair (f1, f2) with different names, where f1's name contains
    the forward term and f2's the inverse term, yields one pair per
    convention. Quadratic in the size of each module.
    """
    by_module: dict[str, list[FunctionRecord]] = {}
    for fn in functions:
        by_module.setdefault(fn.module, []).append(fn)

    for module, members in by_module.items():
        if len(members) > LARGE_MODULE_THRESHOLD:
            log.warning(
                "Module %s has %d functions; inverse-pair search is quadratic per module",
                module, len(members),
            )

    pairs: list[InversePair] = []
    for forward, inverse in conventions:
        for module, members in by_module.items():
            for f1 in members:
                if forward not in f1.name:
                    continue
                for f2 in members:
                    if f1.name != f2.name and inverse in f2.name:
                        pairs.append(_inverse_pair(module, f1, f2, forward, inverse))
    return pairs


def _inverse_pair(
    module: str,
    f1: FunctionRecord,
    f2: FunctionRecord,
    forward: str,
    inverse: str,
) -> InversePair:
    return InversePair(
        module=module,
        forward=FunctionRef(name=f1.name, arity=f1.arity, line=f1.line),
        inverse=FunctionRef(name=f2.name, arity=f2.arity, line=f2.line),
        convention=(forward, inverse),
        suggestion=f"Test round-trip property: {f2.name}({f1.name}(x)) == x",
    )
