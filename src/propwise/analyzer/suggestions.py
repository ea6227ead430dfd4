"""Property-test suggestions for detected patterns.

Two styles:
  * "hypothesis": pytest + Hypothesis skeletons that call the function by its
    module alias, e.g. `codec.encode(data)` after `from pkg import codec`.
  * "hints": a short plain-language checklist.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

from propwise.analyzer.models import PatternMatch
from propwise.analyzer.rules import PatternKind
from propwise.ir.nodes import FunctionRecord

SuggestionStyle = Literal["hypothesis", "hints"]

SUGGESTION_STYLES: tuple[str, ...] = ("hypothesis", "hints")


def suggest(
    patterns: Sequence[PatternMatch],
    fn: FunctionRecord,
    style: SuggestionStyle = "hypothesis",
) -> list[str]:
    """One block of suggestions per pattern kind, deduplicated in order."""
    out: list[str] = []
    for match in patterns:
        if style == "hints":
            items = [f"{fn.qualified_name}: {hint}" for hint in _HINTS.get(match.kind, ())]
        else:
            items = _hypothesis_templates(match.kind, fn)
        for item in items:
            if item not in out:
                out.append(item)
    return out


# ── Hints ───────────────────────────────────────────────────────────────────

_HINTS: dict[PatternKind, tuple[str, ...]] = {
    PatternKind.COLLECTION_OPERATION: (
        "Test that output length is correct for different input sizes",
        "Test preservation of elements",
        "Test order properties if applicable",
    ),
    PatternKind.TRANSFORMATION: (
        "Test with various input types and edge cases",
        "Test that transformed data maintains invariants",
    ),
    PatternKind.VALIDATION: (
        "Test with both valid and invalid inputs",
        "Test boundary conditions",
        "Test that validation is consistent",
    ),
    PatternKind.ALGEBRAIC: (
        "Test associativity: (a op b) op c == a op (b op c)",
        "Test commutativity if applicable: a op b == b op a",
        "Test identity element if it exists",
    ),
    PatternKind.ENCODER_DECODER: (
        "Test round-trip property",
        "Test with edge cases and malformed input",
    ),
    PatternKind.PARSER: (
        "Test with valid and invalid inputs",
        "Test round-trip with formatter if available",
    ),
    PatternKind.NUMERIC: (
        "Test with boundary values",
        "Test with negative numbers, zero, and positive numbers",
    ),
}


# ── Hypothesis templates ────────────────────────────────────────────────────

_COLLECTION = (
    """\
@given(st.lists(st.integers()))
def test_{slug}_preserves_size(xs):
    assert len({target}(xs)) == len(xs)
""",
    """\
@given(st.lists(st.integers()))
def test_{slug}_keeps_elements(xs):
    result = {target}(xs)
    assert all(x in result for x in xs)
""",
)

_TRANSFORMATION = (
    """\
@given(st.from_type(object))
def test_{slug}_maintains_invariants(value):
    result = {target}(value)
    # Add your invariant checks here
    assert is_valid_structure(result)
""",
    """\
@given(st.one_of(st.none(), st.just([]), st.just({{}}), st.from_type(object)))
def test_{slug}_handles_edge_cases(value):
    result = {target}(value)
    assert is_valid_result(result)
""",
)

_VALIDATION = (
    """\
@given(st.from_type(object))
def test_{slug}_is_consistent(value):
    assert {target}(value) == {target}(value)
""",
    """\
@given(st.from_type(object))
def test_{slug}_returns_bool(value):
    assert isinstance({target}(value), bool)
""",
)

_ALGEBRAIC = (
    """\
@given(values(), values(), values())
def test_{slug}_is_associative(a, b, c):
    assert {target}({target}(a, b), c) == {target}(a, {target}(b, c))
""",
    """\
@given(values(), values())
def test_{slug}_is_commutative(a, b):
    assert {target}(a, b) == {target}(b, a)
""",
    """\
@given(values())
def test_{slug}_has_identity(a):
    assert {target}(a, identity_value()) == a
""",
)

_ENCODER_DECODER = (
    """\
@given(data())
def test_{forward_slug}_round_trip(value):
    encoded = {forward}(value)
    assert {inverse}(encoded) == value
""",
    """\
@given(st.binary())
def test_{inverse_slug}_rejects_malformed_input(blob):
    try:
        {inverse}(blob)
    except (ValueError, TypeError):
        pass
""",
)

_PARSER = (
    """\
@given(st.text())
def test_{slug}_returns_expected_structure(text):
    try:
        result = {target}(text)
    except ValueError:
        return
    assert is_valid_parsed_structure(result)
""",
    """\
@given(valid_data())
def test_{slug}_format_round_trip(value):
    assert {target}({formatter}(value)) == value
""",
)

_NUMERIC = (
    """\
@given(st.one_of(st.integers(), st.floats(allow_nan=False, allow_infinity=False)))
def test_{slug}_handles_numeric_boundaries(n):
    assert isinstance({target}(n), (int, float))
""",
    """\
@given(st.sampled_from([0, -1, 1, math.pi, -math.pi]))
def test_{slug}_handles_special_values(n):
    assert is_valid_numeric({target}(n))
""",
)

_TEMPLATES: dict[PatternKind, tuple[str, ...]] = {
    PatternKind.COLLECTION_OPERATION: _COLLECTION,
    PatternKind.TRANSFORMATION: _TRANSFORMATION,
    PatternKind.VALIDATION: _VALIDATION,
    PatternKind.ALGEBRAIC: _ALGEBRAIC,
    PatternKind.ENCODER_DECODER: _ENCODER_DECODER,
    PatternKind.PARSER: _PARSER,
    PatternKind.NUMERIC: _NUMERIC,
}

# (term found in the name, counterpart term); inverse-side terms listed first so
# "deserialize" is not mistaken for "serialize"
_ROUND_TRIP_TERMS: tuple[tuple[str, str], ...] = (
    ("deserialize", "serialize"),
    ("from_json", "to_json"),
    ("decode", "encode"),
    ("serialize", "deserialize"),
    ("to_json", "from_json"),
    ("encode", "decode"),
)
_INVERSE_TERMS = frozenset({"deserialize", "from_json", "decode"})


def _hypothesis_templates(kind: PatternKind, fn: FunctionRecord) -> list[str]:
    alias = fn.import_module.rsplit(".", 1)[-1]
    prefix = f"{alias}.{fn.owner}." if fn.owner else f"{alias}."
    forward, inverse = _round_trip_names(fn.name)
    fields = {
        "slug": fn.name.strip("_"),
        "target": prefix + fn.name,
        "forward": prefix + forward,
        "inverse": prefix + inverse,
        "forward_slug": forward.strip("_"),
        "inverse_slug": inverse.strip("_"),
        "formatter": prefix + (fn.name.replace("parse", "format", 1) if "parse" in fn.name else "format"),
    }
    return [template.format(**fields) for template in _TEMPLATES.get(kind, ())]


def _round_trip_names(name: str) -> tuple[str, str]:
    """(forward, inverse) function names for an encoder or decoder named `name`."""
    for term, counterpart in _ROUND_TRIP_TERMS:
        if term in name:
            other = name.replace(term, counterpart, 1)
            return (other, name) if term in _INVERSE_TERMS else (name, other)
    return name, "decode"
