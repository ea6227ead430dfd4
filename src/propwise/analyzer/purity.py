"""Purity classification: flag every node of a function body that matches a side-effect rule.

Only explicit rules count. A call to a function the rules do not name is
purity-neutral; there is no cross-module inference.
"""

from __future__ import annotations

from propwise.analyzer.models import PurityVerdict, SideEffect
from propwise.analyzer.rules import DEFAULT_PURITY_RULES, PurityRules
from propwise.ir.nodes import FunctionRecord, NodeKind, SyntaxNode


def classify(body: SyntaxNode, rules: PurityRules = DEFAULT_PURITY_RULES) -> PurityVerdict:
    """Walk `body` once in pre-order and collect side effects in traversal order."""
    effects: list[SideEffect] = []
    for node in body.walk():
        effect = _detect_side_effect(node, rules)
        if effect is not None:
            effects.append(effect)

    return PurityVerdict(status="impure" if effects else "pure", effects=effects)


def is_pure(fn: FunctionRecord, rules: PurityRules = DEFAULT_PURITY_RULES) -> bool:
    return classify(fn.body, rules).is_pure


def _detect_side_effect(node: SyntaxNode, rules: PurityRules) -> SideEffect | None:
    kind = node.kind

    if kind is NodeKind.QUALIFIED_CALL and node.qualifier is not None:
        if rules.call_matches(node.qualifier, node.name, node.arity):
            return SideEffect(
                kind="module_call", qualifier=node.qualifier,
                operation=node.name, arity=node.arity, line=node.line,
            )
        return None

    if kind is NodeKind.CALL:
        if rules.bare_matches(node.name, node.arity):
            return SideEffect(kind="function_call", operation=node.name, arity=node.arity, line=node.line)
        return None

    if kind is NodeKind.RECEIVE:
        return SideEffect(kind="receive_block", line=node.line)

    if kind is NodeKind.BANG:
        return SideEffect(kind="bang_operator", line=node.line)

    return None
