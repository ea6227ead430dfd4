"""Python front end: turns source files into FunctionRecords.

Each top-level function and class method becomes one FunctionRecord whose body
is converted from `ast` into the generic SyntaxNode tree the analyzer walks.
Every converted node keeps its `ast.unparse` text so the textual detectors see
normalized source.
"""

from __future__ import annotations

import ast
import logging
from pathlib import Path

from propwise.ir.nodes import FunctionRecord, NodeKind, SyntaxNode

log = logging.getLogger(__name__)

# Sub-nodes that carry analyzable code; expression contexts, operators and
# bare `arg` declarations are skipped.
_STRUCTURAL = (
    ast.expr,
    ast.stmt,
    ast.keyword,
    ast.comprehension,
    ast.excepthandler,
    ast.withitem,
    ast.match_case,
    ast.pattern,
    ast.arguments,
)

_RECEIVE_NODES = (ast.Await, ast.AsyncFor, ast.AsyncWith)

_OPERATOR_SYMBOLS: dict[type[ast.operator], str] = {
    ast.Add: "+",
    ast.Sub: "-",
    ast.Mult: "*",
    ast.MatMult: "@",
    ast.Div: "/",
    ast.Mod: "%",
    ast.Pow: "**",
    ast.LShift: "<<",
    ast.RShift: ">>",
    ast.BitOr: "|",
    ast.BitXor: "^",
    ast.BitAnd: "&",
    ast.FloorDiv: "//",
}


def parse_file(fpath: Path, base: Path) -> list[FunctionRecord]:
    """Parse one file; files that cannot be read or parsed yield nothing."""
    try:
        source = fpath.read_text(errors="replace")
        tree = ast.parse(source, filename=str(fpath))
    except (SyntaxError, ValueError, OSError):
        log.debug("Skipping unparseable file %s", fpath, exc_info=True)
        return []

    module = module_name(fpath, base)
    return extract_functions(tree, module, str(fpath))


def parse_source(source: str, module: str = "__main__", file: str = "<string>") -> list[FunctionRecord]:
    """Parse a source string. Raises SyntaxError on invalid code."""
    tree = ast.parse(source, filename=file)
    return extract_functions(tree, module, file)


def module_name(fpath: Path, base: Path) -> str:
    """Dotted module name of `fpath` relative to the analyzed directory `base`."""
    parts = list(fpath.relative_to(base).with_suffix("").parts)
    if parts and parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts) or base.resolve().name


def extract_functions(tree: ast.Module, module: str, file: str) -> list[FunctionRecord]:
    """Collect FunctionRecords in source order."""
    records: list[FunctionRecord] = []
    _collect(tree.body, module, None, file, records)
    return records


def _collect(
    stmts: list[ast.stmt],
    module: str,
    owner: str | None,
    file: str,
    out: list[FunctionRecord],
) -> None:
    for stmt in stmts:
        if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
            out.append(_function_record(stmt, module, owner, file))
        elif isinstance(stmt, ast.ClassDef):
            cls_owner = f"{owner}.{stmt.name}" if owner else stmt.name
            _collect(stmt.body, f"{module}.{stmt.name}", cls_owner, file, out)
        # Conditional definitions: `if TYPE_CHECKING:`, `try: ... except ImportError:`
        elif isinstance(stmt, ast.If):
            _collect(stmt.body, module, owner, file, out)
            _collect(stmt.orelse, module, owner, file, out)
        elif isinstance(stmt, ast.Try):
            _collect(stmt.body, module, owner, file, out)
            for handler in stmt.handlers:
                _collect(handler.body, module, owner, file, out)
            _collect(stmt.orelse, module, owner, file, out)
            _collect(stmt.finalbody, module, owner, file, out)


def _function_record(
    node: ast.FunctionDef | ast.AsyncFunctionDef,
    module: str,
    owner: str | None,
    file: str,
) -> FunctionRecord:
    args = node.args
    params = [a.arg for a in (*args.posonlyargs, *args.args)]
    if args.vararg:
        params.append("*" + args.vararg.arg)
    params.extend(a.arg for a in args.kwonlyargs)
    if args.kwarg:
        params.append("**" + args.kwarg.arg)

    # The implicit receiver of instance and class methods is not part of the arity.
    if owner and params and not _has_decorator(node, "staticmethod"):
        params = params[1:]

    return FunctionRecord(
        module=module,
        name=node.name,
        arity=len(params),
        params=tuple(params),
        body=_statements(_strip_docstring(node.body), node.lineno),
        file=file,
        line=node.lineno,
        visibility=_visibility(node.name),
        owner=owner,
    )


def _visibility(name: str) -> str:
    if name.startswith("__") and name.endswith("__"):
        return "public"
    return "private" if name.startswith("_") else "public"


def _has_decorator(node: ast.FunctionDef | ast.AsyncFunctionDef, name: str) -> bool:
    for dec in node.decorator_list:
        target = dec.func if isinstance(dec, ast.Call) else dec
        if isinstance(target, ast.Name) and target.id == name:
            return True
        if isinstance(target, ast.Attribute) and target.attr == name:
            return True
    return False


def _strip_docstring(body: list[ast.stmt]) -> list[ast.stmt]:
    if (
        body
        and isinstance(body[0], ast.Expr)
        and isinstance(body[0].value, ast.Constant)
        and isinstance(body[0].value.value, str)
    ):
        return body[1:]
    return body


# ── ast → SyntaxNode ─────────────────────────────────────────────────────


def _statements(stmts: list[ast.stmt], line: int | None = None) -> SyntaxNode:
    """A single statement is its own node; anything else becomes a block."""
    if len(stmts) == 1:
        return _convert(stmts[0])
    children = tuple(_convert(s) for s in stmts)
    text = "\n".join(c.text or "" for c in children)
    first_line = stmts[0].lineno if stmts else line
    return SyntaxNode(NodeKind.BLOCK, children=children, text=text, line=first_line)


def _convert(node: ast.AST) -> SyntaxNode:
    if isinstance(node, ast.Expr):
        return _convert(node.value)

    text = _source_text(node)
    line = getattr(node, "lineno", None)

    if isinstance(node, ast.Call):
        return _convert_call(node, text, line)

    if isinstance(node, ast.If):
        elif_chain = len(node.orelse) == 1 and isinstance(node.orelse[0], ast.If)
        children = [_convert(node.test), _statements(node.body, line)]
        if node.orelse:
            children.append(_statements(node.orelse, line))
        return SyntaxNode(
            NodeKind.CONDITIONAL, name="cond" if elif_chain else "if",
            children=tuple(children), text=text, line=line,
        )

    if isinstance(node, ast.Match):
        children = (_convert(node.subject), *(_convert(c) for c in node.cases))
        return SyntaxNode(NodeKind.CONDITIONAL, name="case", children=children, text=text, line=line)

    if isinstance(node, ast.IfExp):
        children = (_convert(node.test), _convert(node.body), _convert(node.orelse))
        return SyntaxNode(NodeKind.CONDITIONAL, name="ternary", children=children, text=text, line=line)

    if isinstance(node, ast.Assign):
        children = (*(_convert(t) for t in node.targets), _convert(node.value))
        return SyntaxNode(NodeKind.BINDING, name="=", children=children, text=text, line=line)

    if isinstance(node, ast.AugAssign):
        op = _OPERATOR_SYMBOLS.get(type(node.op), "?") + "="
        children = (_convert(node.target), _convert(node.value))
        return SyntaxNode(NodeKind.BINDING, name=op, children=children, text=text, line=line)

    if isinstance(node, ast.AnnAssign):
        children = (_convert(node.target),) + ((_convert(node.value),) if node.value else ())
        return SyntaxNode(NodeKind.BINDING, name="=", children=children, text=text, line=line)

    if isinstance(node, ast.NamedExpr):
        children = (_convert(node.target), _convert(node.value))
        return SyntaxNode(NodeKind.BINDING, name=":=", children=children, text=text, line=line)

    if isinstance(node, ast.Constant):
        return SyntaxNode(NodeKind.LITERAL, name=text, text=text, line=line)

    if isinstance(node, ast.Name):
        return SyntaxNode(NodeKind.IDENTIFIER, name=node.id, text=text, line=line)

    if isinstance(node, _RECEIVE_NODES):
        return SyntaxNode(
            NodeKind.RECEIVE, name=type(node).__name__.lower(),
            children=_child_nodes(node), text=text, line=line,
        )

    if isinstance(node, ast.Assert):
        return SyntaxNode(NodeKind.BANG, name="assert", children=_child_nodes(node), text=text, line=line)

    return SyntaxNode(
        NodeKind.OTHER, name=type(node).__name__.lower(),
        children=_child_nodes(node), text=text, line=line,
    )


def _convert_call(node: ast.Call, text: str, line: int | None) -> SyntaxNode:
    args = tuple(_convert(a) for a in (*node.args, *node.keywords))
    func = node.func

    if isinstance(func, ast.Name):
        return SyntaxNode(NodeKind.CALL, name=func.id, children=args, text=text, line=line)

    if isinstance(func, ast.Attribute):
        qualifier = _dotted_path(func.value)
        if qualifier is not None:
            return SyntaxNode(
                NodeKind.QUALIFIED_CALL, name=func.attr, qualifier=qualifier,
                children=args, text=text, line=line,
            )

    # Computed callee (`f()()`, `obj[0].m()`, `"".join(x)`): not a rule target,
    # but the callee expression is still walked.
    return SyntaxNode(NodeKind.OTHER, name="call", children=(_convert(func), *args), text=text, line=line)


def _dotted_path(node: ast.expr) -> str | None:
    """`a.b.c` → "a.b.c"; anything that is not a plain name chain → None."""
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        head = _dotted_path(node.value)
        return f"{head}.{node.attr}" if head is not None else None
    return None


def _child_nodes(node: ast.AST) -> tuple[SyntaxNode, ...]:
    return tuple(_convert(c) for c in ast.iter_child_nodes(node) if isinstance(c, _STRUCTURAL))


def _source_text(node: ast.AST) -> str:
    # f-string fragments have no standalone source form.
    if isinstance(node, ast.FormattedValue):
        return "{" + ast.unparse(node.value) + "}"
    return ast.unparse(node)
