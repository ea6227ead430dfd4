"""Tests for the analysis orchestrator."""

from __future__ import annotations

import textwrap

import pytest

from propwise.analyzer.rules import AnalysisRules, PurityRules
from propwise.analyzer.service import analyze_function, analyze_project
from propwise.ir import parse_source

PROJECT = textwrap.dedent("""
    def double(x):
        return x * 2

    def _is_ok(x):
        return x > 0

    def save(data, path):
        return shutil.copyfile(data, path)

    def shout(msg):
        print(msg)

    def ident(value):
        return value

    def encode_x(v):
        return v.encode()

    def decode_x(v):
        return v.decode()

    def merge_sorted(a, b):
        return sorted(a + b)

    def parse_csv(line):
        return [cell.strip() for cell in line.split(',')]

    def mean(values):
        return sum(values) / len(values)
""")


@pytest.fixture
def functions():
    return parse_source(PROJECT, module="lib")


def test_analyze_function_fills_candidate(functions):
    c = analyze_function(functions[0])
    assert c.qualified_name == "lib.double/1"
    assert c.purity.status == "pure"
    assert c.score == 4
    assert c.breakdown.total == c.score
    assert c.suggestions


def test_project_scenario(functions):
    report = analyze_project(functions, min_score=3)
    names = [c.name for c in report.candidates]

    assert report.total_functions == 10
    assert report.candidates_count == len(report.candidates)
    assert "save" not in names
    assert "shout" not in names
    assert "ident" not in names
    assert {"double", "_is_ok", "encode_x", "decode_x", "merge_sorted", "parse_csv", "mean"} <= set(names)
    assert report.dropped_count == 1         # ident: pure, no patterns, score 2
    assert report.min_score == 3


def test_candidates_sorted_by_score(functions):
    scores = [c.score for c in analyze_project(functions).candidates]
    assert scores == sorted(scores, reverse=True)


def test_ties_keep_source_order():
    fns = parse_source("def a(x):\n    return x * 2\n\ndef b(x):\n    return x * 3\n")
    assert [c.name for c in analyze_project(fns).candidates] == ["a", "b"]


def test_threshold_is_inclusive(functions):
    report = analyze_project(functions, min_score=4)
    assert "double" in [c.name for c in report.candidates]
    assert "_is_ok" not in [c.name for c in report.candidates]


def test_inverse_pairs_use_unfiltered_list(functions):
    report = analyze_project(functions, min_score=100)
    assert report.candidates == []
    assert [(p.forward.name, p.inverse.name) for p in report.inverse_pairs] == [("encode_x", "decode_x")]


def test_empty_project():
    report = analyze_project([])
    assert report.total_functions == 0
    assert report.candidates == []
    assert report.inverse_pairs == []


def test_threaded_run_matches_sequential(functions):
    sequential = analyze_project(functions)
    threaded = analyze_project(functions, workers=4)
    assert threaded == sequential


def test_custom_rules(functions):
    rules = AnalysisRules(purity=PurityRules.from_tuples(calls=[("v", "encode", 0)]))
    report = analyze_project(functions, rules=rules)
    assert "encode_x" not in [c.name for c in report.candidates]
    save = analyze_function(functions[2], rules)     # shutil is no longer a known effect
    assert save.purity.is_pure


def test_hints_style(functions):
    report = analyze_project(functions, style="hints")
    double = next(c for c in report.candidates if c.name == "double")
    assert double.suggestions == [
        "lib.double/1: Test with boundary values",
        "lib.double/1: Test with negative numbers, zero, and positive numbers",
    ]


def test_ten_function_project():
    fns = parse_source(textwrap.dedent("""
        def save(data, path):
            return shutil.copyfile(data, path)

        def shout(msg):
            print(msg)

        def stamp():
            return time.time()

        def double(x):
            return x * 2

        def _is_ok(x):
            return x > 0

        def mean(values):
            return sum(values) / len(values)

        def encode_x(v):
            return v

        def ident(value):
            return value

        def first(items):
            return items[0]

        def _unwrap(box):
            return box.value
    """), module="lib")
    report = analyze_project(fns, min_score=3)
    assert report.total_functions == 10
    assert report.candidates_count == 4
    assert report.dropped_count == 3
    assert [c.name for c in report.candidates] == ["double", "mean", "encode_x", "_is_ok"]
