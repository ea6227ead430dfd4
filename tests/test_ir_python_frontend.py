"""Tests for the Python front end (ast -> FunctionRecord / SyntaxNode)."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from propwise.ir import parse_project
from propwise.ir.nodes import NodeKind
from propwise.ir.python_frontend import module_name, parse_file, parse_source


def make_py_file(tmp_path: Path, name: str, code: str) -> Path:
    """Write Python code to a temp file and return the path."""
    f = tmp_path / name
    f.parent.mkdir(parents=True, exist_ok=True)
    f.write_text(textwrap.dedent(code))
    return f


def _only(code: str):
    records = parse_source(textwrap.dedent(code))
    assert len(records) == 1
    return records[0]


class TestFunctionRecords:
    def test_top_level_function(self):
        fn = _only("""
            def double(x):
                return x * 2
        """)
        assert fn.name == "double"
        assert fn.arity == 1
        assert fn.params == ("x",)
        assert fn.visibility == "public"
        assert fn.line == 2
        assert fn.owner is None

    def test_private_and_dunder_visibility(self):
        records = parse_source(textwrap.dedent("""
            def _helper(x):
                return x

            def __special__(x):
                return x
        """))
        assert [r.visibility for r in records] == ["private", "public"]

    def test_arity_counts_every_parameter_kind(self):
        fn = _only("""
            def f(a, /, b, *rest, c, **opts):
                return a
        """)
        assert fn.params == ("a", "b", "*rest", "c", "**opts")
        assert fn.arity == 5

    def test_methods_drop_receiver(self):
        records = parse_source(textwrap.dedent("""
            class Money:
                def add(self, other):
                    return self.amount + other.amount

                @classmethod
                def zero(cls):
                    return cls(0)

                @staticmethod
                def parse(text):
                    return int(text)
        """), module="bank.money")
        by_name = {r.name: r for r in records}
        assert by_name["add"].arity == 1
        assert by_name["zero"].arity == 0
        assert by_name["parse"].arity == 1
        assert by_name["add"].module == "bank.money.Money"
        assert by_name["add"].owner == "Money"
        assert by_name["add"].import_module == "bank.money"
        assert by_name["add"].call_target == "Money.add"
        assert by_name["add"].key == ("bank.money.Money", "add", 1, "<string>", 3)

    def test_nested_class_owner(self):
        records = parse_source(textwrap.dedent("""
            class Outer:
                class Inner:
                    def run(self):
                        return 1
        """), module="m")
        assert records[0].module == "m.Outer.Inner"
        assert records[0].owner == "Outer.Inner"

    def test_nested_functions_stay_in_body(self):
        records = parse_source(textwrap.dedent("""
            def outer(xs):
                def inner(x):
                    return x + 1
                return [inner(x) for x in xs]
        """))
        assert [r.name for r in records] == ["outer"]

    def test_conditional_definitions_are_collected(self):
        records = parse_source(textwrap.dedent("""
            try:
                def fast(x):
                    return x
            except ImportError:
                def slow(x):
                    return x
        """))
        assert [r.name for r in records] == ["fast", "slow"]

    def test_docstring_is_dropped(self):
        fn = _only('''
            def f(x):
                """Docs."""
                return x
        ''')
        assert "Docs" not in (fn.body.text or "")
        assert fn.body.kind is NodeKind.OTHER
        assert fn.body.name == "return"


class TestNodeMapping:
    def test_bare_and_qualified_calls(self):
        fn = _only("""
            def f(path):
                print(os.path.join(path, "x"))
        """)
        kinds = {(n.kind, n.name, n.qualifier) for n in fn.body.walk()}
        assert (NodeKind.CALL, "print", None) in kinds
        assert (NodeKind.QUALIFIED_CALL, "join", "os.path") in kinds

    def test_computed_callee_is_other(self):
        fn = _only("""
            def f(xs):
                return "".join(xs)
        """)
        calls = [n for n in fn.body.walk() if n.kind is NodeKind.OTHER and n.name == "call"]
        assert len(calls) == 1

    def test_call_arity_includes_keywords(self):
        fn = _only("""
            def f(x):
                return sorted(x, key=len)
        """)
        call = next(n for n in fn.body.walk() if n.kind is NodeKind.CALL)
        assert call.arity == 2

    def test_multi_statement_body_is_block(self):
        fn = _only("""
            def f(x):
                y = x + 1
                return y
        """)
        assert fn.body.kind is NodeKind.BLOCK
        assert fn.body.children[0].kind is NodeKind.BINDING
        assert fn.body.text == "y = x + 1\nreturn y"

    @pytest.mark.parametrize("code, form", [
        ("if x:\n        return 1\n    return 2", "if"),
        ("if x:\n        return 1\n    elif y:\n        return 2\n    else:\n        return 3", "cond"),
        ("match x:\n        case 1:\n            return 1\n        case _:\n            return 2", "case"),
    ])
    def test_conditional_forms(self, code, form):
        fn = _only(f"def f(x, y):\n    {code}\n")
        forms = [n.name for n in fn.body.walk() if n.kind is NodeKind.CONDITIONAL]
        assert forms[0] == form

    def test_ternary(self):
        fn = _only("""
            def f(x):
                return 1 if x else 2
        """)
        assert any(n.kind is NodeKind.CONDITIONAL and n.name == "ternary" for n in fn.body.walk())

    @pytest.mark.parametrize("stmt, op", [
        ("y = x", "="),
        ("y += x", "+="),
        ("y: int = x", "="),
    ])
    def test_bindings(self, stmt, op):
        fn = _only(f"def f(x):\n    {stmt}\n")
        assert fn.body.kind is NodeKind.BINDING
        assert fn.body.name == op

    def test_walrus_is_binding(self):
        fn = _only("""
            def f(xs):
                return [y for x in xs if (y := x * 2)]
        """)
        assert any(n.kind is NodeKind.BINDING and n.name == ":=" for n in fn.body.walk())

    def test_await_and_async_constructs_are_receive(self):
        fn = _only("""
            async def f(q):
                async with q.lock:
                    return await q.get()
        """)
        receives = [n.name for n in fn.body.walk() if n.kind is NodeKind.RECEIVE]
        assert receives == ["asyncwith", "await"]

    def test_assert_is_bang(self):
        fn = _only("""
            def f(x):
                assert x
        """)
        assert fn.body.kind is NodeKind.BANG

    def test_literals_and_identifiers(self):
        fn = _only("""
            def f(x):
                return x + 1
        """)
        kinds = {n.kind for n in fn.body.walk()}
        assert NodeKind.LITERAL in kinds
        assert NodeKind.IDENTIFIER in kinds

    def test_nodes_carry_lines(self):
        fn = _only("""
            def f(x):
                y = 1
                return print(y)
        """)
        call = next(n for n in fn.body.walk() if n.kind is NodeKind.CALL)
        assert call.line == 4


class TestFiles:
    def test_module_name(self, tmp_path):
        assert module_name(tmp_path / "pkg" / "codec.py", tmp_path) == "pkg.codec"
        assert module_name(tmp_path / "pkg" / "__init__.py", tmp_path) == "pkg"

    def test_unparseable_file_is_skipped(self, tmp_path):
        f = make_py_file(tmp_path, "broken.py", """
            def f(:
                pass
        """)
        assert parse_file(f, tmp_path) == []

    def test_parse_project_walks_analyze_paths(self, tmp_path):
        make_py_file(tmp_path, "src/pkg/a.py", """
            def one(x):
                return x
        """)
        make_py_file(tmp_path, "src/pkg/build/gen.py", """
            def generated(x):
                return x
        """)
        make_py_file(tmp_path, "src/pkg/vendor/lib.py", """
            def vendored(x):
                return x
        """)
        records = parse_project(tmp_path, ["src", "missing"], exclude=["vendor"])
        assert [(r.module, r.name) for r in records] == [("pkg.a", "one")]
        assert records[0].file.endswith("a.py")

    def test_overlapping_paths_parse_each_file_once(self, tmp_path):
        make_py_file(tmp_path, "pkg/a.py", """
            def one(x):
                return x
        """)
        records = parse_project(tmp_path, [".", "pkg"])
        assert len(records) == 1
