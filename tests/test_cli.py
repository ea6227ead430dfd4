"""Tests for the propwise command line."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from propwise import __version__
from propwise.cli import main


def _write(root: Path, rel: str, code: str) -> None:
    f = root / rel
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(textwrap.dedent(code))


@pytest.fixture
def project(tmp_path):
    _write(tmp_path, "src/lib/codec.py", """
        def encode(text):
            return "".join(sorted(text))

        def decode(text):
            return text[::-1]

        def save(data, path):
            with open(path, "w") as fh:
                fh.write(data)
    """)
    _write(tmp_path, "src/lib/maths.py", """
        def double(x):
            return x * 2
    """)
    return tmp_path


def test_text_output(project):
    result = CliRunner().invoke(main, [str(project)])
    assert result.exit_code == 0, result.output
    assert "PropWise Analysis Report" in result.output
    assert "lib.maths.double/1" in result.output
    assert "lib.codec.encode/1 <-> decode/1" in result.output


def test_json_output(project):
    result = CliRunner().invoke(main, [str(project), "-f", "json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    report = data["report"]
    assert report["total_functions"] == 4
    assert data["analyze_paths"] == ["src"]
    names = [c["name"] for c in report["candidates"]]
    assert "double" in names
    assert "save" not in names
    assert all("total" in c["breakdown"] for c in report["candidates"])


def test_min_score_flag(project):
    result = CliRunner().invoke(main, [str(project), "-f", "json", "-m", "100"])
    report = json.loads(result.output)["report"]
    assert report["candidates"] == []
    assert report["min_score"] == 100


def test_hints_style(project):
    result = CliRunner().invoke(main, [str(project), "-f", "json", "-s", "hints"])
    report = json.loads(result.output)["report"]
    double = next(c for c in report["candidates"] if c["name"] == "double")
    assert double["suggestions"][0] == "lib.maths.double/1: Test with boundary values"


def test_markdown_to_file(project, tmp_path):
    out = tmp_path / "report.md"
    result = CliRunner().invoke(main, [str(project), "-f", "md", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text().startswith("# PropWise Report")
    assert "Report written to" in result.output


def test_jobs_flag(project):
    sequential = CliRunner().invoke(main, [str(project), "-f", "json"])
    threaded = CliRunner().invoke(main, [str(project), "-f", "json", "-j", "3"])
    assert json.loads(sequential.output) == json.loads(threaded.output)


def test_config_file_is_honoured(project):
    (project / ".propwise.yml").write_text("min_score: 50\n")
    result = CliRunner().invoke(main, [str(project), "-f", "json"])
    assert json.loads(result.output)["report"]["min_score"] == 50


def test_missing_path_is_rejected(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "nope")])
    assert result.exit_code != 0


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert __version__ in result.output
