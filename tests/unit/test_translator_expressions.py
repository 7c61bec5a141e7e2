"""Tests for the expression emitters — literals, identifiers, calls, composites."""

from __future__ import annotations

import pytest

from js2go.ast_nodes import UNDEFINED
from js2go.bindings import HostBindings
from js2go.errors import UnknownNodeKind, UnsupportedLiteral
from js2go.translator import Translator

NEUTRAL = HostBindings(global_object="Global()", await_bridge="AwaitBridge")


def _ident(name: str) -> dict:
    return {"type": "Identifier", "name": name}


def _lit(value) -> dict:
    return {"type": "Literal", "value": value}


def _member(obj: dict, *names: str) -> dict:
    node = obj
    for name in names:
        node = {
            "type": "MemberExpression",
            "object": node,
            "property": _ident(name),
            "computed": False,
        }
    return node


def _call(callee: dict, *args: dict) -> dict:
    return {"type": "CallExpression", "callee": callee, "arguments": list(args)}


def _prop(key: str, value: dict) -> dict:
    return {"type": "Property", "key": _ident(key), "value": value, "computed": False}


def _obj(*props: dict) -> dict:
    return {"type": "ObjectExpression", "properties": list(props)}


def _arr(*elements) -> dict:
    return {"type": "ArrayExpression", "elements": list(elements)}


def _program(*body: dict) -> dict:
    return {"type": "Program", "body": list(body)}


def _stmt(expression: dict) -> dict:
    return {"type": "ExpressionStatement", "expression": expression}


def _var(name: str, init: dict | None, kind: str = "var") -> dict:
    return {
        "type": "VariableDeclaration",
        "kind": kind,
        "declarations": [
            {"type": "VariableDeclarator", "id": _ident(name), "init": init}
        ],
    }


def _translate(*body: dict) -> list[str]:
    return Translator(NEUTRAL).translate(_program(*body))


class TestLiterals:
    def test_number(self):
        assert _translate(_var("x", _lit(5))) == ["var x = 5"]

    def test_float(self):
        assert _translate(_var("x", _lit(2.5))) == ["var x = 2.5"]

    def test_string_is_go_quoted(self):
        assert _translate(_var("s", _lit('a"b'))) == ['var s = "a\\"b"']

    def test_booleans(self):
        assert _translate(_var("t", _lit(True)), _var("f", _lit(False))) == [
            "var t = true",
            "var f = false",
        ]

    def test_null_is_nil(self):
        assert _translate(_var("n", _lit(None))) == ["var n = nil"]

    def test_undefined_uses_host_sentinel(self):
        assert Translator().translate(_program(_var("u", _lit(UNDEFINED)))) == [
            "var u = js.Undefined()"
        ]

    def test_object_valued_literal_rejected(self):
        with pytest.raises(UnsupportedLiteral):
            _translate(_var("o", _lit({"a": 1})))

    def test_regex_rejected(self):
        regex = {"type": "Literal", "value": None, "regex": {"pattern": "a", "flags": ""}}
        with pytest.raises(UnsupportedLiteral):
            _translate(_var("r", regex))

    def test_bigint_rejected(self):
        bigint = {"type": "Literal", "value": None, "bigint": "10", "raw": "10n"}
        with pytest.raises(UnsupportedLiteral):
            _translate(_var("b", bigint))


class TestIdentifiers:
    def test_unresolved_identifier_is_global_get(self):
        assert _translate(_var("d", _ident("document"))) == [
            'var d = Global().Get("document")'
        ]

    def test_window_is_global_object(self):
        assert _translate(_var("w", _ident("window"))) == ["var w = Global()"]

    def test_defined_identifier_is_bare(self):
        assert _translate(_var("a", _lit(1)), _var("b", _ident("a"))) == [
            "var a = 1",
            "var b = a",
        ]

    def test_default_bindings_use_js_global(self):
        lines = Translator().translate(_program(_var("d", _ident("document"))))
        assert lines == ['var d = js.Global().Get("document")']


class TestMemberExpressions:
    def test_static_chain_collapses(self):
        init = _member(_ident("document"), "body", "style")
        assert _translate(_var("s", init)) == [
            'var s = Global().Get("document").Get("body").Get("style")'
        ]

    def test_member_of_local(self):
        assert _translate(_var("a", _lit(1)), _var("b", _member(_ident("a"), "length"))) == [
            "var a = 1",
            'var b = a.Get("length")',
        ]

    def test_computed_member_statement_is_elided(self):
        computed = {
            "type": "MemberExpression",
            "object": _ident("list"),
            "property": _lit(0),
            "computed": True,
        }
        assert _translate(_stmt(computed)) == []

    def test_computed_member_in_value_position_raises(self):
        computed = {
            "type": "MemberExpression",
            "object": _ident("list"),
            "property": _ident("i"),
            "computed": True,
        }
        with pytest.raises(UnknownNodeKind, match="produces no value"):
            _translate(_var("x", computed))

    def test_member_of_this_is_elided(self):
        this_member = _member({"type": "ThisExpression"}, "name")
        assert _translate(_stmt(this_member)) == []


class TestCalls:
    def test_unresolved_callee_is_global_call(self):
        assert _translate(_stmt(_call(_ident("alert"), _lit("hi")))) == [
            'Global().Call("alert", "hi")'
        ]

    def test_method_call_on_global_chain(self):
        call = _call(_member(_ident("console"), "log"), _lit("hello"))
        assert _translate(_stmt(call)) == ['Global().Get("console").Call("log", "hello")']

    def test_window_method(self):
        call = _call(_member(_ident("window"), "alert"), _lit("x"))
        assert _translate(_stmt(call)) == ['Global().Call("alert", "x")']

    def test_many_arguments_one_per_line(self):
        call = _call(_member(_ident("console"), "log"), _lit(1), _lit(2))
        assert _translate(_stmt(call)) == [
            'Global().Get("console").Call("log",',
            "1,",
            "2,",
            ")",
        ]

    def test_no_arguments(self):
        call = _call(_member(_ident("console"), "clear"))
        assert _translate(_stmt(call)) == ['Global().Get("console").Call("clear")']

    def test_call_result_called_again(self):
        inner = _call(_ident("factory"))
        assert _translate(_stmt(_call(inner, _lit(1)))) == [
            'Global().Call("factory")(1)'
        ]

    def test_call_on_this_is_elided(self):
        call = _call(_member({"type": "ThisExpression"}, "run"))
        assert _translate(_stmt(call)) == []

    def test_elided_argument_raises(self):
        binary = {
            "type": "BinaryExpression",
            "operator": "+",
            "left": _lit(1),
            "right": _lit(2),
        }
        with pytest.raises(UnknownNodeKind, match="call argument"):
            _translate(_stmt(_call(_ident("alert"), binary)))


class TestAwait:
    def test_await_of_non_call_raises(self):
        awaited = {"type": "AwaitExpression", "argument": _ident("promise")}
        with pytest.raises(UnknownNodeKind, match="only calls"):
            _translate(_var("x", awaited))

    def test_top_level_await_declaration(self):
        call = _call(_member(_ident("navigator"), "bluetooth", "requestDevice"), _obj())
        awaited = {"type": "AwaitExpression", "argument": call}
        assert _translate(_var("device", awaited, kind="let")) == [
            'var device, err = AwaitBridge(Global().Get("navigator").Get("bluetooth")'
            '.Call("requestDevice", map[string]interface{}{}))'
        ]

    def test_custom_error_binding(self):
        bindings = HostBindings(await_bridge="AwaitBridge", error_binding="failure")
        awaited = {"type": "AwaitExpression", "argument": _call(_ident("fetch"))}
        lines = Translator(bindings).translate(_program(_var("r", awaited)))
        assert lines == ['var r, failure = AwaitBridge(js.Global().Call("fetch"))']


class TestCompositeLiterals:
    def test_empty_array(self):
        assert _translate(_var("a", _arr())) == ["var a = []interface{}{}"]

    def test_single_element_inlined(self):
        assert _translate(_var("a", _arr(_lit("x")))) == ['var a = []interface{}{"x"}']

    def test_many_elements_one_per_line_in_order(self):
        assert _translate(_var("a", _arr(_lit(1), _lit(2), _lit(3)))) == [
            "var a = []interface{}{",
            "1,",
            "2,",
            "3,",
            "}",
        ]

    def test_array_hole_raises(self):
        with pytest.raises(UnknownNodeKind, match="holes"):
            _translate(_var("a", _arr(_lit(1), None)))

    def test_object_keys_are_quoted(self):
        assert _translate(_var("o", _obj(_prop("name", _lit("x"))))) == [
            'var o = map[string]interface{}{"name": "x"}'
        ]

    def test_object_key_not_resolved_against_scope(self):
        lines = _translate(
            _var("filters", _lit(1)),
            _var("o", _obj(_prop("filters", _lit(2)))),
        )
        assert lines[1] == 'var o = map[string]interface{}{"filters": 2}'

    def test_object_value_resolved_against_scope(self):
        lines = _translate(_var("o", _obj(_prop("target", _ident("document")))))
        assert lines == [
            'var o = map[string]interface{}{"target": Global().Get("document")}'
        ]

    def test_literal_keys(self):
        props = [
            {"type": "Property", "key": _lit("a-b"), "value": _lit(1), "computed": False},
            {"type": "Property", "key": _lit(2), "value": _lit(3), "computed": False},
        ]
        assert _translate(_var("o", {"type": "ObjectExpression", "properties": props})) == [
            "var o = map[string]interface{}{",
            '"a-b": 1,',
            '"2": 3,',
            "}",
        ]

    def test_computed_key_raises(self):
        prop = {"type": "Property", "key": _ident("k"), "value": _lit(1), "computed": True}
        with pytest.raises(UnknownNodeKind, match="computed"):
            _translate(_var("o", _obj(prop)))

    def test_filters_object_preserves_nesting(self):
        filters = _obj(_prop("filters", _arr(_obj(_prop("services", _arr(_lit("battery_service")))))))
        assert _translate(_var("options", filters)) == [
            'var options = map[string]interface{}{"filters": []interface{}'
            '{map[string]interface{}{"services": []interface{}{"battery_service"}}}}'
        ]
