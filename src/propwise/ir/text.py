"""Canonical text projection of a SyntaxNode.

Pattern detection and the complexity heuristic match against this rendering
rather than raw source, so formatting differences never change a verdict.
Nodes built by the Python front end carry their own `ast.unparse` text; hand
built trees fall back to a structural rendering.
"""

from __future__ import annotations

from propwise.ir.nodes import NodeKind, SyntaxNode

_INDENT = "    "


def render(node: SyntaxNode) -> str:
    """Return the canonical, whitespace-normalized text for `node`."""
    return "\n".join(_lines(node))


def _lines(node: SyntaxNode) -> list[str]:
    if node.text is not None:
        return node.text.split("\n")

    kind = node.kind
    if kind is NodeKind.BLOCK:
        out: list[str] = []
        for child in node.children:
            out.extend(_lines(child))
        return out or ["pass"]
    if kind is NodeKind.CONDITIONAL:
        return _conditional_lines(node)
    return [_inline(node)]


def _inline(node: SyntaxNode) -> str:
    """Single-line rendering for expression-like nodes."""
    if node.text is not None:
        return " ".join(line.strip() for line in node.text.split("\n"))

    kind = node.kind
    args = ", ".join(_inline(c) for c in node.children)
    if kind is NodeKind.CALL:
        return f"{node.name}({args})"
    if kind is NodeKind.QUALIFIED_CALL:
        return f"{node.qualifier}.{node.name}({args})"
    if kind in (NodeKind.IDENTIFIER, NodeKind.LITERAL):
        return node.name
    if kind is NodeKind.BINDING:
        op = node.name or "="
        parts = [_inline(c) for c in node.children]
        if op == ":=":
            return f"({' := '.join(parts)})"
        return f" {op} ".join(parts)
    if kind is NodeKind.RECEIVE:
        return f"await {args}" if args else "await"
    if kind is NodeKind.BANG:
        return f"assert {args}" if args else "assert"
    if kind is NodeKind.CONDITIONAL and node.name == "ternary" and len(node.children) == 3:
        test, body, orelse = (_inline(c) for c in node.children)
        return f"{body} if {test} else {orelse}"
    if kind is NodeKind.BLOCK or kind is NodeKind.CONDITIONAL:
        return "; ".join(line.strip() for line in _lines(node))
    return f"{node.name}({args})" if node.name else args


def _indented(node: SyntaxNode) -> list[str]:
    return [_INDENT + line for line in _lines(node)]


def _conditional_lines(node: SyntaxNode) -> list[str]:
    form = node.name
    children = node.children

    if form == "ternary":
        return [_inline(node)]

    if form in ("if", "cond") and len(children) >= 2:
        lines = [f"if {_inline(children[0])}:"]
        lines.extend(_indented(children[1]))
        if len(children) > 2:
            orelse = children[2]
            if orelse.kind is NodeKind.CONDITIONAL and orelse.name in ("if", "cond"):
                nested = _conditional_lines(orelse)
                lines.append("el" + nested[0])
                lines.extend(nested[1:])
            else:
                lines.append("else:")
                lines.extend(_indented(orelse))
        return lines

    if form == "case" and children:
        lines = [f"match {_inline(children[0])}:"]
        for clause in children[1:]:
            lines.extend(_indented(clause))
        return lines

    # Any other form: header line with the first child, remaining children as clauses.
    if not children:
        return [f"{form}:"]
    lines = [f"{form} {_inline(children[0])}:"]
    for clause in children[1:]:
        lines.extend(_indented(clause))
    return lines
