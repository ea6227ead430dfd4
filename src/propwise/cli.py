"""CLI entry point for propwise."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from propwise import __version__
from propwise.analyzer.suggestions import SUGGESTION_STYLES
from propwise.scanner import ScanResult, scan


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    default=".",
)
@click.option(
    "-m", "--min-score",
    type=click.IntRange(min=0),
    default=None,
    help="Minimum score for a function to be reported (default: 3, or the config file).",
)
@click.option(
    "-f", "--format", "fmt",
    type=click.Choice(["text", "md", "json", "pdf"], case_sensitive=False),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "-s", "--style",
    type=click.Choice(SUGGESTION_STYLES, case_sensitive=False),
    default=None,
    help="Suggestion style: Hypothesis test skeletons or short hints.",
)
@click.option(
    "-o", "--output",
    type=click.Path(resolve_path=True),
    default=None,
    help="Output file path. Defaults to stdout, or propwise-report.pdf for pdf.",
)
@click.option(
    "-j", "--jobs",
    type=click.IntRange(min=1),
    default=1,
    help="Analyze functions on this many threads.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.version_option(version=__version__)
def main(
    path: str,
    min_score: int | None,
    fmt: str,
    style: str | None,
    output: str | None,
    jobs: int,
    verbose: bool,
) -> None:
    """Find functions in a Python project that are good candidates for property-based testing."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )

    project_path = Path(path)
    if fmt == "text":
        click.echo(f"Analyzing {project_path} for property-based testing opportunities...", err=True)

    result = scan(
        project_path,
        min_score=min_score,
        style=style,
        workers=jobs,
    )

    if fmt == "json":
        _output_json(result, output)
    elif fmt == "pdf":
        _output_pdf(result, output)
    elif fmt == "md":
        _output_md(result, output)
    else:
        _output_text(result, output)


def _write_or_echo(text: str, output: str | None, label: str) -> None:
    if output:
        Path(output).write_text(text)
        click.echo(f"{label} written to {output}")
    else:
        click.echo(text)


def _output_text(result: ScanResult, output: str | None) -> None:
    from propwise.render.text import render_text
    _write_or_echo(render_text(result.report), output, "Report")


def _output_md(result: ScanResult, output: str | None) -> None:
    from propwise.render.markdown import render_markdown
    _write_or_echo(render_markdown(result), output, "Report")


def _output_pdf(result: ScanResult, output: str | None) -> None:
    from propwise.render.pdf import render_pdf
    dest = Path(output) if output else Path("propwise-report.pdf")
    render_pdf(result, dest)
    click.echo(f"PDF report written to {dest}")


def _output_json(result: ScanResult, output: str | None) -> None:
    data = {
        "project": str(result.project_path),
        "analyze_paths": result.analyze_paths,
        "report": result.report.model_dump(mode="json"),
    }
    _write_or_echo(json.dumps(data, indent=2), output, "JSON report")


if __name__ == "__main__":
    main()
