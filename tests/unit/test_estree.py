"""Tests for EstreeConverter — tree-sitter JavaScript tree to ESTree nodes."""

from __future__ import annotations

import pytest
from tree_sitter_language_pack import get_parser

from js2go.ast_nodes import UNDEFINED, AstNode
from js2go.errors import JsSyntaxError
from js2go.estree import EstreeConverter, decode_escape, parse_number


def _convert(source: str) -> AstNode:
    parser = get_parser("javascript")
    tree = parser.parse(source.encode("utf-8"))
    return EstreeConverter().convert(tree, source.encode("utf-8"))


def _first(source: str) -> AstNode:
    return _convert(source).nodes("body")[0]


def _expr(source: str) -> AstNode:
    return _first(source).node("expression")


class TestProgram:
    def test_empty_program(self):
        program = _convert("")
        assert program.kind == "Program"
        assert program.nodes("body") == []

    def test_comments_skipped(self):
        program = _convert("// note\nfoo(); /* trailing */\n")
        assert [n.kind for n in program.nodes("body")] == ["ExpressionStatement"]

    def test_loc_is_one_based_line(self):
        stmt = _convert("\n\nfoo();").nodes("body")[0]
        assert stmt.get("loc")["start"]["line"] == 3

    def test_syntax_error_raises_with_position(self):
        with pytest.raises(JsSyntaxError) as exc_info:
            _convert("let x = ;")
        assert exc_info.value.line >= 1
        assert exc_info.value.column >= 1


class TestDeclarations:
    def test_let_declaration(self):
        decl = _first("let x = 5;")
        assert decl.kind == "VariableDeclaration"
        assert decl.get("kind") == "let"
        declarator = decl.nodes("declarations")[0]
        assert declarator.node("id").get("name") == "x"
        assert declarator.node("init").get("value") == 5

    def test_var_and_const_kinds(self):
        assert _first("var a = 1;").get("kind") == "var"
        assert _first("const a = 1;").get("kind") == "const"

    def test_multiple_declarators(self):
        decl = _first("var a = 1, b;")
        declarators = decl.nodes("declarations")
        assert [d.node("id").get("name") for d in declarators] == ["a", "b"]
        assert declarators[1].node("init") is None

    def test_function_declaration(self):
        fn = _first("async function on_click(a, b) { }")
        assert fn.kind == "FunctionDeclaration"
        assert fn.node("id").get("name") == "on_click"
        assert [p.get("name") for p in fn.nodes("params")] == ["a", "b"]
        assert fn.get("async") is True
        assert fn.node("body").kind == "BlockStatement"

    def test_arrow_single_parameter_without_parens(self):
        arrow = _first("const f = value => value;").nodes("declarations")[0].node("init")
        assert arrow.kind == "ArrowFunctionExpression"
        assert [p.get("name") for p in arrow.nodes("params")] == ["value"]
        assert arrow.get("expression") is True

    def test_arrow_block_body(self):
        arrow = _first("const f = (a) => { a(); };").nodes("declarations")[0].node("init")
        assert arrow.get("expression") is False
        assert arrow.node("body").kind == "BlockStatement"

    def test_class_with_method(self):
        cls = _first("class Widget { render(target) { } }")
        assert cls.kind == "ClassDeclaration"
        method = cls.node("body").nodes("body")[0]
        assert method.kind == "MethodDefinition"
        assert method.get("kind") == "method"
        assert method.node("key").get("name") == "render"
        assert method.node("value").kind == "FunctionExpression"


class TestLiterals:
    def test_string_escapes_decoded(self):
        assert _expr(r'"a\nb\x41B\u{43}";').get("value") == "a\nbABC"

    def test_single_quoted_string(self):
        assert _expr("'battery_service';").get("value") == "battery_service"

    def test_surrogate_pair_joined(self):
        assert _expr(r'"\uD83D\uDE00";').get("value") == "\U0001F600"

    def test_numbers(self):
        assert _expr("0x10;").get("value") == 16
        assert _expr("1_000;").get("value") == 1000
        assert _expr("1.5;").get("value") == 1.5

    def test_bigint_marked(self):
        literal = _expr("10n;")
        assert literal.get("bigint") == "10"

    def test_keyword_literals(self):
        assert _expr("true;").get("value") is True
        assert _expr("null;").has("value")
        assert _expr("null;").get("value") is None
        assert _expr("undefined;").get("value") is UNDEFINED

    def test_code_point_out_of_range_is_syntax_error(self):
        with pytest.raises(JsSyntaxError, match="escape") as exc_info:
            _expr(r'"\u{110000}";')
        assert exc_info.value.line == 1
        assert exc_info.value.column >= 1

    def test_regex(self):
        literal = _expr("/ab+/g;")
        assert literal.get("regex") == {"pattern": "ab+", "flags": "g"}


class TestExpressions:
    def test_member_chain(self):
        member = _expr("navigator.bluetooth.requestDevice;")
        assert member.kind == "MemberExpression"
        assert member.get("computed") is False
        assert member.node("property").get("name") == "requestDevice"
        assert member.node("object").node("object").get("name") == "navigator"

    def test_subscript_is_computed_member(self):
        member = _expr("items[0];")
        assert member.kind == "MemberExpression"
        assert member.get("computed") is True

    def test_call_arguments(self):
        call = _expr("console.log(1, 'two');")
        assert call.kind == "CallExpression"
        assert [a.get("value") for a in call.nodes("arguments")] == [1, "two"]

    def test_await_unwraps_argument(self):
        fn = _first("async function f() { await fetch(); }")
        awaited = fn.node("body").nodes("body")[0].node("expression")
        assert awaited.kind == "AwaitExpression"
        assert awaited.node("argument").kind == "CallExpression"

    def test_object_properties(self):
        obj = _expr("({ filters: [1], 'quoted': 2, short });")
        assert obj.kind == "ObjectExpression"
        props = obj.nodes("properties")
        assert [p.kind for p in props] == ["Property"] * 3
        assert props[0].node("key").get("name") == "filters"
        assert props[1].node("key").get("value") == "quoted"
        assert props[2].get("shorthand") is True

    def test_computed_key_flagged(self):
        prop = _expr("({ [key]: 1 });").nodes("properties")[0]
        assert prop.get("computed") is True

    def test_array_holes(self):
        array = _expr("[1, , 2];")
        elements = array.nodes("elements")
        assert len(elements) == 3
        assert elements[1] is None

    def test_trailing_comma_is_not_a_hole(self):
        assert len(_expr("[1, 2,];").nodes("elements")) == 2

    def test_logical_versus_binary(self):
        assert _expr("a && b;").kind == "LogicalExpression"
        assert _expr("a + b;").kind == "BinaryExpression"

    def test_parentheses_unwrapped(self):
        assert _expr("(foo);").kind == "Identifier"

    def test_update_prefix(self):
        assert _expr("++i;").get("prefix") is True
        assert _expr("i++;").get("prefix") is False

    def test_template_literal_is_opaque(self):
        assert _expr("`x`;").kind == "TemplateLiteral"


class TestStatements:
    def test_if_else(self):
        node = _first("if (ok) { a(); } else { b(); }")
        assert node.kind == "IfStatement"
        assert node.node("test").get("name") == "ok"
        assert node.node("alternate").kind == "BlockStatement"

    def test_for_of_declaration(self):
        node = _first("for (const item of items) { }")
        assert node.kind == "ForOfStatement"
        assert node.node("left").kind == "VariableDeclaration"
        assert node.node("left").get("kind") == "const"

    def test_for_in(self):
        assert _first("for (k in obj) { }").kind == "ForInStatement"

    def test_classic_for(self):
        node = _first("for (let i = 0; i < n; i++) { }")
        assert node.kind == "ForStatement"
        assert node.node("init").kind == "VariableDeclaration"
        assert node.node("test").kind == "BinaryExpression"
        assert node.node("update").kind == "UpdateExpression"

    def test_try_catch_finally(self):
        node = _first("try { a(); } catch (e) { } finally { }")
        assert node.node("handler").kind == "CatchClause"
        assert node.node("handler").node("param").get("name") == "e"
        assert node.node("finalizer").kind == "BlockStatement"

    def test_switch(self):
        node = _first("switch (k) { case 1: a(); break; default: b(); }")
        cases = node.nodes("cases")
        assert [c.node("test") is None for c in cases] == [False, True]
        assert [s.kind for s in cases[0].nodes("consequent")] == [
            "ExpressionStatement",
            "BreakStatement",
        ]

    def test_return_and_throw(self):
        fn = _first("function f() { return 1; throw err; }")
        kinds = [s.kind for s in fn.node("body").nodes("body")]
        assert kinds == ["ReturnStatement", "ThrowStatement"]


class TestLiteralDecoding:
    def test_parse_number_legacy_octal(self):
        assert parse_number("010") == 8
        assert parse_number("089") == 89

    def test_parse_number_binary_and_octal(self):
        assert parse_number("0b101") == 5
        assert parse_number("0o17") == 15

    def test_parse_number_exponent_is_float(self):
        assert parse_number("1e3") == 1000.0
        assert isinstance(parse_number("1e3"), float)

    def test_decode_simple_escapes(self):
        assert decode_escape(r"\t") == "\t"
        assert decode_escape(r"\'") == "'"

    def test_decode_rejects_code_point_above_unicode_range(self):
        assert decode_escape(r"\u{10FFFF}") == "\U0010FFFF"
        with pytest.raises(ValueError):
            decode_escape(r"\u{110000}")

    def test_decode_line_continuation(self):
        assert decode_escape("\\\n") == ""
