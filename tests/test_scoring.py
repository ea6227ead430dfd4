"""Tests for the testability score and the complexity heuristic."""

from __future__ import annotations

import textwrap

import pytest

from propwise.analyzer.models import PatternMatch, PurityVerdict, SideEffect
from propwise.analyzer.patterns import detect_patterns
from propwise.analyzer.purity import classify
from propwise.analyzer.rules import PatternKind
from propwise.analyzer.scoring import is_complex, score, score_breakdown
from propwise.ir import parse_source

PURE = PurityVerdict(status="pure")
IMPURE = PurityVerdict(status="impure", effects=[SideEffect(kind="bang_operator")])


def _fn(code: str):
    return parse_source(textwrap.dedent(code))[0]


def _score(code: str) -> int:
    fn = _fn(code)
    return score(classify(fn.body), detect_patterns(fn), fn)


def _matches(*kinds: PatternKind) -> list[PatternMatch]:
    return [PatternMatch(kind=k, reason="test") for k in kinds]


SIMPLE = "def f(x):\n    return x\n"


class TestScore:
    def test_double_scores_four(self):
        assert _score("def double(x):\n    return x * 2\n") == 4

    def test_impure_scores_zero(self):
        assert _score("def save(data, path):\n    return shutil.copyfile(data, path)\n") == 0

    def test_private_predicate_scores_three(self):
        assert _score("def _is_ok(x):\n    return x > 0\n") == 3

    def test_impure_ignores_patterns(self):
        fn = _fn(SIMPLE)
        assert score(IMPURE, _matches(*PatternKind), fn) == 0

    @pytest.mark.parametrize("count, expected", [(0, 2), (1, 4), (2, 8), (3, 10)])
    def test_pattern_contribution(self, count, expected):
        fn = _fn(SIMPLE)
        kinds = list(PatternKind)[:count]
        assert score(PURE, _matches(*kinds), fn) == expected

    def test_monotonic_in_patterns(self):
        fn = _fn(SIMPLE)
        kinds = list(PatternKind)
        scores = [score(PURE, _matches(*kinds[:n]), fn) for n in range(len(kinds) + 1)]
        assert scores == sorted(scores)
        assert len(set(scores)) == len(scores)

    def test_breakdown_sums_to_total(self):
        fn = _fn("""
            def merge(a, b):
                out = dict(a)
                out.update(b)
                for k in out:
                    out[k] = out[k] + 1
                return out
        """)
        breakdown = score_breakdown(PURE, _matches(PatternKind.ALGEBRAIC, PatternKind.NUMERIC), fn)
        assert breakdown.base == 1
        assert breakdown.patterns == 4
        assert breakdown.multi_pattern_bonus == 2
        assert breakdown.complexity_bonus == 1
        assert breakdown.visibility_bonus == 1
        assert breakdown.total == 9

    def test_impure_breakdown_is_empty(self):
        assert score_breakdown(IMPURE, [], _fn(SIMPLE)).total == 0

    def test_score_is_non_negative(self):
        assert _score("def _f():\n    pass\n") >= 0


class TestComplexity:
    def test_short_body_is_trivial(self):
        assert not is_complex(_fn(SIMPLE))

    def test_long_body_is_complex(self):
        assert is_complex(_fn("""
            def f(x):
                a = x + 1
                b = a * 2
                c = b - 3
                return c
        """))

    def test_three_lines_is_still_trivial(self):
        assert not is_complex(_fn("""
            def f(x):
                a = x + 1
                b = a * 2
                return b
        """))

    def test_multi_clause_body_is_complex(self):
        assert is_complex(_fn("""
            def f(x):
                if x:
                    return 1
                elif x is None:
                    return 2
        """))

    def test_match_body_is_complex(self):
        assert is_complex(_fn("""
            def f(x):
                match x:
                    case 1:
                        return 1
        """))

    def test_plain_if_is_judged_by_length(self):
        assert not is_complex(_fn("""
            def f(x):
                if x:
                    return 1
        """))
