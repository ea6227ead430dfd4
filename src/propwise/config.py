"""Project configuration: `.propwise.yml` at the project root.

Example:

    analyze_paths: [src]
    exclude: [migrations]
    min_score: 4
    suggestion_style: hints
    side_effects:
      calls:
        - [boto3, client, "*"]
      functions:
        - [notify, 1]
    inverse_pairs:
      - [freeze, thaw]
    patterns:
      algebraic_names: [merge, join]
"""

from __future__ import annotations

import dataclasses
import logging
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from propwise.analyzer.rules import (
    DEFAULT_PATTERN_KEYWORDS,
    DEFAULT_PURITY_RULES,
    INVERSE_CONVENTIONS,
    AnalysisRules,
    PatternKeywords,
    PurityRules,
)

log = logging.getLogger(__name__)

CONFIG_FILENAMES = (".propwise.yml", ".propwise.yaml")

Arity = int | Literal["*"]


class SideEffectsConfig(BaseModel):
    calls: list[tuple[str, str, Arity]] = Field(default_factory=list)
    functions: list[tuple[str, Arity]] = Field(default_factory=list)
    replace_defaults: bool = False    # drop the built-in tables entirely


class PatternOverrides(BaseModel):
    """Replacement keyword lists, one optional field per `PatternKeywords` list."""

    model_config = ConfigDict(extra="forbid")

    collection_patterns: list[tuple[str, str]] | None = None    # (regex, reason)
    pipeline_markers: list[str] | None = None
    struct_updaters: list[str] | None = None
    map_constructs: list[str] | None = None
    map_methods: list[str] | None = None
    validation_prefixes: list[str] | None = None
    validation_substrings: list[str] | None = None
    check_prefixes: list[str] | None = None
    boolean_vocabulary: list[str] | None = None
    algebraic_names: list[str] | None = None
    encoding_names: list[str] | None = None
    parser_names: list[str] | None = None
    string_parsing_markers: list[str] | None = None
    numeric_patterns: list[tuple[str, str]] | None = None       # (regex, reason)

    @field_validator("collection_patterns", "numeric_patterns")
    @classmethod
    def _compiles(cls, value: list[tuple[str, str]] | None) -> list[tuple[str, str]] | None:
        for regex, _reason in value or ():
            try:
                re.compile(regex)
            except re.error as exc:
                raise ValueError(f"invalid regex {regex!r}: {exc}") from exc
        return value


class ProjectConfig(BaseModel):
    analyze_paths: list[str] | None = None
    exclude: list[str] = Field(default_factory=list)
    min_score: int = 3
    suggestion_style: Literal["hypothesis", "hints"] = "hypothesis"
    side_effects: SideEffectsConfig = Field(default_factory=SideEffectsConfig)
    inverse_pairs: list[tuple[str, str]] = Field(default_factory=list)
    patterns: PatternOverrides = Field(default_factory=PatternOverrides)

    def resolve_analyze_paths(self, project_path: Path) -> list[str]:
        """Configured paths, else `src` when the project has one, else the root."""
        if self.analyze_paths:
            return list(self.analyze_paths)
        if (project_path / "src").is_dir():
            return ["src"]
        return ["."]

    def purity_rules(self) -> PurityRules:
        extra = PurityRules.from_tuples(
            calls=self.side_effects.calls,
            bare_functions=self.side_effects.functions,
        )
        if self.side_effects.replace_defaults:
            return extra
        return DEFAULT_PURITY_RULES.extend(extra)

    def pattern_keywords(self) -> PatternKeywords:
        overrides = {
            key: tuple(values)
            for key, values in self.patterns.model_dump(exclude_none=True).items()
        }
        if not overrides:
            return DEFAULT_PATTERN_KEYWORDS
        return dataclasses.replace(DEFAULT_PATTERN_KEYWORDS, **overrides)

    def analysis_rules(self) -> AnalysisRules:
        return AnalysisRules(
            purity=self.purity_rules(),
            patterns=self.pattern_keywords(),
            inverse_conventions=INVERSE_CONVENTIONS + tuple(self.inverse_pairs),
        )


def find_config(project_path: Path) -> Path | None:
    for name in CONFIG_FILENAMES:
        candidate = project_path / name
        if candidate.is_file():
            return candidate
    return None


def load_config(project_path: Path) -> ProjectConfig:
    """Read the project's config file; any problem with it means defaults.

    A missing file is silent. An unreadable, malformed or invalid one logs a
    warning and the analysis continues with the default configuration.
    """
    path = find_config(project_path)
    if path is None:
        return ProjectConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        log.warning("Could not read %s (%s); using default configuration", path, exc)
        return ProjectConfig()

    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        log.warning("%s must contain a mapping; using default configuration", path)
        return ProjectConfig()

    try:
        config = ProjectConfig.model_validate(data)
    except ValidationError as exc:
        log.warning("Invalid configuration in %s; using defaults:\n%s", path, exc)
        return ProjectConfig()

    log.info("Loaded configuration from %s", path)
    return config
