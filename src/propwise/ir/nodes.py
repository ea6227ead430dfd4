"""SyntaxNode and FunctionRecord dataclasses: pure data, no analysis logic."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class NodeKind(str, Enum):
    CALL = "call"                      # bare call: name(args)
    QUALIFIED_CALL = "qualified_call"  # qualifier.name(args), qualifier is a dotted path
    BLOCK = "block"                    # ordered statements
    CONDITIONAL = "conditional"        # name holds the form: if|cond|case|with|ternary
    BINDING = "binding"                # name holds the operator: =|+=|:=|...
    LITERAL = "literal"
    IDENTIFIER = "identifier"
    RECEIVE = "receive"                # blocking wait for a message / awaitable
    BANG = "bang"                      # assert / unwrap-or-raise
    OTHER = "other"                    # opaque; name holds a construct label


@dataclass(frozen=True)
class SyntaxNode:
    kind: NodeKind
    name: str = ""
    qualifier: str | None = None
    children: tuple[SyntaxNode, ...] = ()
    text: str | None = None            # canonical source rendering, if the front end has one
    line: int | None = None

    @property
    def arity(self) -> int:
        """Argument count for call nodes."""
        return len(self.children)

    def walk(self) -> Iterator[SyntaxNode]:
        """Yield this node and every descendant in pre-order, each exactly once."""
        stack: list[SyntaxNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class FunctionRecord:
    module: str                        # owning namespace, "pkg.mod" or "pkg.mod.Class"
    name: str
    arity: int
    params: tuple[str, ...]
    body: SyntaxNode
    file: str
    line: int
    visibility: str = "public"         # "public"|"private"
    owner: str | None = None           # enclosing class path for methods

    @property
    def key(self) -> tuple[str, str, int, str, int]:
        return (self.module, self.name, self.arity, self.file, self.line)

    @property
    def import_module(self) -> str:
        """Module that has to be imported to reach this function."""
        if self.owner and self.module.endswith("." + self.owner):
            return self.module[: -(len(self.owner) + 1)]
        return self.module

    @property
    def call_target(self) -> str:
        """Attribute path from the import module to the function."""
        return f"{self.owner}.{self.name}" if self.owner else self.name

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.name}/{self.arity}"
