"""Central extensibility point: side-effect rules, pattern keywords, inverse naming.

Every table here is plain data. New libraries or naming conventions are new
entries (or `.propwise.yml` overrides), never analyzer logic changes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

WILDCARD = "*"


class PatternKind(str, Enum):
    COLLECTION_OPERATION = "collection_operation"
    TRANSFORMATION = "transformation"
    VALIDATION = "validation"
    ALGEBRAIC = "algebraic"
    ENCODER_DECODER = "encoder_decoder"
    PARSER = "parser"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class SideEffectRule:
    qualifier: str | None              # dotted namespace; None marks a bare function
    operation: str = WILDCARD
    arity: int | str = WILDCARD

    def matches(self, qualifier: str | None, operation: str, arity: int) -> bool:
        return (
            self.qualifier == qualifier
            and (self.operation == WILDCARD or self.operation == operation)
            and (self.arity == WILDCARD or self.arity == arity)
        )


@dataclass(frozen=True)
class PurityRules:
    calls: tuple[SideEffectRule, ...] = ()
    bare_functions: tuple[SideEffectRule, ...] = ()

    @classmethod
    def from_tuples(
        cls,
        calls: Iterable[tuple[str, str, int | str]] = (),
        bare_functions: Iterable[tuple[str, int | str]] = (),
    ) -> PurityRules:
        """Build rules from `(qualifier, operation, arity)` and `(name, arity)` tuples."""
        return cls(
            calls=tuple(SideEffectRule(q, op, ar) for q, op, ar in calls),
            bare_functions=tuple(SideEffectRule(None, name, ar) for name, ar in bare_functions),
        )

    def extend(self, other: PurityRules) -> PurityRules:
        return PurityRules(
            calls=self.calls + other.calls,
            bare_functions=self.bare_functions + other.bare_functions,
        )

    def call_matches(self, qualifier: str, operation: str, arity: int) -> bool:
        return any(rule.matches(qualifier, operation, arity) for rule in self.calls)

    def bare_matches(self, operation: str, arity: int) -> bool:
        return any(rule.matches(None, operation, arity) for rule in self.bare_functions)


# ── Default side-effect tables ───────────────────────────────────────────

# Whole namespaces: any operation, any arity.
_WILDCARD_NAMESPACES: tuple[str, ...] = (
    # I/O
    "io", "sys.stdin", "sys.stdout", "sys.stderr", "tempfile",
    # Logging
    "logging", "log", "logger",
    # Processes, threads, event loops
    "subprocess", "multiprocessing", "threading", "asyncio", "signal",
    # Databases
    "sqlite3", "psycopg2", "pymongo", "sqlalchemy", "redis",
    # HTTP / network clients
    "requests", "httpx", "aiohttp", "urllib.request", "socket", "smtplib",
    # OS / system
    "os", "os.environ", "shutil",
    # Mutable table stores
    "shelve", "dbm",
    # Supervision / executors
    "concurrent.futures",
    # Nondeterminism
    "random", "secrets",
)

# Narrower rules: only some operations of a namespace are effects.
_NARROW_CALLS: tuple[tuple[str, str, int | str], ...] = (
    ("sys", "exit", WILDCARD),
    ("sys", "setrecursionlimit", WILDCARD),
    ("sys", "settrace", WILDCARD),
    ("time", "sleep", WILDCARD),
    ("time", "time", 0),
    ("time", "monotonic", 0),
    ("time", "perf_counter", 0),
    ("datetime.datetime", "now", WILDCARD),
    ("datetime.datetime", "utcnow", 0),
    ("datetime.date", "today", 0),
    ("os.path", "exists", 1),
    ("os.path", "isfile", 1),
    ("os.path", "isdir", 1),
    ("os.path", "getsize", 1),
    ("os.path", "getmtime", 1),
    ("uuid", "uuid1", WILDCARD),
    ("uuid", "uuid4", 0),
)

_BARE_FUNCTIONS: tuple[tuple[str, int | str], ...] = (
    ("print", WILDCARD),
    ("input", WILDCARD),
    ("open", WILDCARD),
    ("exec", WILDCARD),
    ("eval", WILDCARD),
    ("breakpoint", WILDCARD),
    ("exit", WILDCARD),
    ("quit", WILDCARD),
    ("__import__", WILDCARD),
    ("setattr", 3),
    ("delattr", 2),
)

DEFAULT_PURITY_RULES = PurityRules.from_tuples(
    calls=[(ns, WILDCARD, WILDCARD) for ns in _WILDCARD_NAMESPACES] + list(_NARROW_CALLS),
    bare_functions=_BARE_FUNCTIONS,
)


# ── Pattern keywords ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class PatternKeywords:
    # (regex, reason) pairs, first match wins
    collection_patterns: tuple[tuple[str, str], ...] = (
        (r"\b(map|filter|sorted|reversed|zip)\(", "Uses builtin collection operations"),
        (
            r"\b(functools|itertools)\.(reduce|groupby|chain|accumulate|starmap|islice|batched)\b",
            "Uses functools/itertools operations",
        ),
        (r"\)\.(map|filter|sort|sort_values|groupby|apply|reduce)\(", "Chained collection operations"),
        (r"[\w)\]}'\"] for .+ in ", "Comprehension"),
    )
    pipeline_markers: tuple[str, ...] = (").", ":=")
    struct_updaters: tuple[str, ...] = ("replace", "_replace", "evolve", "model_copy")
    map_constructs: tuple[str, ...] = ("dict", "dictcomp")
    map_methods: tuple[str, ...] = ("items", "keys", "values", "get", "setdefault", "update")
    validation_prefixes: tuple[str, ...] = ("valid",)
    validation_substrings: tuple[str, ...] = ("validate",)
    check_prefixes: tuple[str, ...] = ("check",)
    boolean_vocabulary: tuple[str, ...] = (
        "True", "False", " and ", " or ", "not ", "==", "!=",
        ">", "<", ">=", "<=", "is_", " is ", "isinstance(",
    )
    algebraic_names: tuple[str, ...] = (
        "merge", "concat", "combine", "union", "intersect",
        "compose", "append", "add", "multiply",
    )
    encoding_names: tuple[str, ...] = (
        "encode", "decode", "serialize", "deserialize", "to_json", "from_json",
    )
    parser_names: tuple[str, ...] = ("parse",)
    string_parsing_markers: tuple[str, ...] = (
        ".split(", ".rsplit(", ".partition(",
        "re.match", "re.search", "re.findall", "re.finditer", "re.fullmatch",
    )
    numeric_patterns: tuple[tuple[str, str], ...] = (
        (r"\b(divmod|abs|round|floor|ceil|sqrt|pow|trunc)\b", "Numeric operations"),
        (r"\+|-|\*|/|%", "Arithmetic operations"),
    )


DEFAULT_PATTERN_KEYWORDS = PatternKeywords()


# ── Inverse naming conventions ───────────────────────────────────────────

# (forward substring, inverse substring), in priority order
INVERSE_CONVENTIONS: tuple[tuple[str, str], ...] = (
    ("encode", "decode"),
    ("serialize", "deserialize"),
    ("parse", "generate"),
    ("parse", "format"),
    ("compress", "decompress"),
    ("encrypt", "decrypt"),
    ("to_", "from_"),
    ("pack", "unpack"),
    ("marshal", "unmarshal"),
)


@dataclass(frozen=True)
class AnalysisRules:
    """Everything the engine is configured with, injected at every entry point."""
    purity: PurityRules = DEFAULT_PURITY_RULES
    patterns: PatternKeywords = DEFAULT_PATTERN_KEYWORDS
    inverse_conventions: tuple[tuple[str, str], ...] = INVERSE_CONVENTIONS


DEFAULT_RULES = AnalysisRules()
