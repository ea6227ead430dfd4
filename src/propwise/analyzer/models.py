"""Pydantic models for all analyzer results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, computed_field

from propwise.analyzer.rules import PatternKind


# ── Purity ──────────────────────────────────────────────────────────────────

class SideEffect(BaseModel):
    kind: Literal["module_call", "function_call", "receive_block", "bang_operator"]
    qualifier: str | None = None     # module_call only
    operation: str | None = None     # module_call / function_call
    arity: int | None = None         # module_call / function_call
    line: int | None = None

    def describe(self) -> str:
        if self.kind == "module_call":
            return f"{self.qualifier}.{self.operation}/{self.arity}"
        if self.kind == "function_call":
            return f"{self.operation}/{self.arity}"
        return self.kind


class PurityVerdict(BaseModel):
    status: Literal["pure", "impure"]
    effects: list[SideEffect] = Field(default_factory=list)

    @property
    def is_pure(self) -> bool:
        return self.status == "pure"


# ── Patterns ────────────────────────────────────────────────────────────────

class PatternMatch(BaseModel):
    kind: PatternKind
    reason: str


class FunctionRef(BaseModel):
    name: str
    arity: int
    line: int


class InversePair(BaseModel):
    module: str
    forward: FunctionRef
    inverse: FunctionRef
    convention: tuple[str, str]      # (forward term, inverse term)
    suggestion: str


# ── Scoring ─────────────────────────────────────────────────────────────────

class ScoreBreakdown(BaseModel):
    base: int = 0
    patterns: int = 0
    multi_pattern_bonus: int = 0
    complexity_bonus: int = 0
    visibility_bonus: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return (
            self.base + self.patterns + self.multi_pattern_bonus
            + self.complexity_bonus + self.visibility_bonus
        )


# ── Candidates & report ─────────────────────────────────────────────────────

class Candidate(BaseModel):
    module: str
    name: str
    arity: int
    file: str
    line: int
    visibility: Literal["public", "private"]
    purity: PurityVerdict
    patterns: list[PatternMatch] = Field(default_factory=list)
    score: int
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)
    is_complex: bool = False
    suggestions: list[str] = Field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.name}/{self.arity}"


class AnalysisReport(BaseModel):
    candidates: list[Candidate] = Field(default_factory=list)
    inverse_pairs: list[InversePair] = Field(default_factory=list)
    total_functions: int = 0
    candidates_count: int = 0
    dropped_count: int = 0           # pure but below min_score
    min_score: int = 3
