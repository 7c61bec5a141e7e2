"""EstreeConverter — tree-sitter JavaScript concrete tree → ESTree ``AstNode``.

The translation engine consumes ESTree; tree-sitter produces a concrete
syntax tree with its own node names and field names. This adapter rewrites
one into the other for every construct the engine dispatches on, and maps the
remaining constructs onto opaque ESTree kinds the engine rejects.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .ast_nodes import UNDEFINED, AstNode
from .errors import JsSyntaxError, UnknownNodeKind
from . import constants

logger = logging.getLogger(__name__)

ESTree = dict[str, Any]

_STRING_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_LINE_TERMINATORS = ("\r\n", "\n", "\r", " ", " ")
_MAX_CODE_POINT = 0x10FFFF


class EstreeConverter:
    """Converts a tree-sitter ``javascript`` tree into an ESTree ``Program``."""

    COMMENT_TYPES: frozenset[str] = frozenset({"comment", "hash_bang_line"})

    # Constructs the engine never reconstructs; converted without children.
    OPAQUE_KINDS: dict[str, str] = {
        "template_string": "TemplateLiteral",
        "yield_expression": "YieldExpression",
        "class": "ClassExpression",
        "object_pattern": "ObjectPattern",
        "array_pattern": "ArrayPattern",
        "labeled_statement": "LabeledStatement",
        "import_statement": "ImportDeclaration",
        "export_statement": "ExportNamedDeclaration",
        "debugger_statement": "DebuggerStatement",
        "with_statement": "WithStatement",
        "field_definition": "PropertyDefinition",
        "class_static_block": "StaticBlock",
        "meta_property": "MetaProperty",
        "import": "ImportExpression",
        "super": "Super",
        "private_property_identifier": "PrivateIdentifier",
        "jsx_element": "JSXElement",
        "jsx_self_closing_element": "JSXElement",
    }

    def __init__(self):
        self._source: bytes = b""
        self._CONVERT: dict[str, Callable[[Any], ESTree]] = {
            # statements
            "program": self._convert_program,
            "expression_statement": self._convert_expression_statement,
            "lexical_declaration": self._convert_declaration,
            "variable_declaration": self._convert_declaration,
            "statement_block": self._convert_block,
            "empty_statement": self._convert_empty,
            "if_statement": self._convert_if,
            "while_statement": self._convert_while,
            "do_statement": self._convert_do,
            "for_statement": self._convert_for,
            "for_in_statement": self._convert_for_in,
            "try_statement": self._convert_try,
            "switch_statement": self._convert_switch,
            "return_statement": self._convert_return,
            "throw_statement": self._convert_throw,
            "break_statement": self._convert_jump,
            "continue_statement": self._convert_jump,
            "function_declaration": self._convert_function,
            "generator_function_declaration": self._convert_function,
            "class_declaration": self._convert_class,
            # expressions
            "identifier": self._convert_identifier,
            "property_identifier": self._convert_identifier,
            "shorthand_property_identifier": self._convert_identifier,
            "statement_identifier": self._convert_identifier,
            "this": self._convert_this,
            "number": self._convert_number,
            "string": self._convert_string,
            "regex": self._convert_regex,
            "true": self._convert_keyword_literal,
            "false": self._convert_keyword_literal,
            "null": self._convert_keyword_literal,
            "undefined": self._convert_keyword_literal,
            "parenthesized_expression": self._convert_parenthesized,
            "member_expression": self._convert_member,
            "subscript_expression": self._convert_subscript,
            "call_expression": self._convert_call,
            "new_expression": self._convert_new,
            "await_expression": self._convert_await,
            "array": self._convert_array,
            "object": self._convert_object,
            "assignment_expression": self._convert_assignment,
            "augmented_assignment_expression": self._convert_assignment,
            "binary_expression": self._convert_binary,
            "unary_expression": self._convert_unary,
            "update_expression": self._convert_update,
            "ternary_expression": self._convert_ternary,
            "sequence_expression": self._convert_sequence,
            "arrow_function": self._convert_arrow,
            "function": self._convert_function,
            "function_expression": self._convert_function,
            "generator_function": self._convert_function,
            "spread_element": self._convert_spread,
            "assignment_pattern": self._convert_assignment_pattern,
            "rest_pattern": self._convert_rest,
        }

    # ── entry point ──────────────────────────────────────────────

    def convert(self, tree, source: bytes) -> AstNode:
        """Return the ``Program`` node for *tree*.

        Raises ``JsSyntaxError`` if tree-sitter recovered from a syntax error,
        ``UnknownNodeKind`` for syntax with no ESTree mapping.
        """
        self._source = source
        root = tree.root_node
        if root.has_error:
            raise self._syntax_error(root)
        program = self._convert(root)
        logger.debug("Converted %d top-level statements", len(program["body"]))
        return AstNode(program)

    # ── helpers ──────────────────────────────────────────────────

    def _node_text(self, node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def _loc(self, node) -> dict[str, dict[str, int]]:
        s, e = node.start_point, node.end_point
        return {
            "start": {"line": s[0] + 1, "column": s[1]},
            "end": {"line": e[0] + 1, "column": e[1]},
        }

    def _named(self, node) -> list:
        return [c for c in node.named_children if c.type not in self.COMMENT_TYPES]

    def _has_token(self, node, token: str) -> bool:
        return any(not c.is_named and c.type == token for c in node.children)

    def _syntax_error(self, root) -> JsSyntaxError:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                row, col = node.start_point[0] + 1, node.start_point[1] + 1
                if node.is_missing:
                    return JsSyntaxError(f"missing {node.type}", row, col)
                return JsSyntaxError(
                    f"unexpected {self._node_text(node)[:20]!r}", row, col
                )
            stack.extend(reversed(node.children))
        return JsSyntaxError("syntax error")

    def _convert(self, node) -> ESTree:
        handler = self._CONVERT.get(node.type)
        if handler is not None:
            estree = handler(node)
        elif node.type in self.OPAQUE_KINDS:
            estree = {"type": self.OPAQUE_KINDS[node.type]}
        else:
            row, col = node.start_point[0] + 1, node.start_point[1] + 1
            raise UnknownNodeKind(
                f"unsupported syntax: {node.type} at {row}:{col}", node.type
            )
        estree.setdefault("loc", self._loc(node))
        return estree

    def _convert_optional(self, node) -> ESTree | None:
        return self._convert(node) if node is not None else None

    def _field(self, node, name: str) -> ESTree | None:
        return self._convert_optional(node.child_by_field_name(name))

    def _first_named(self, node) -> ESTree | None:
        named = self._named(node)
        return self._convert(named[0]) if named else None

    def _unwrap_statement(self, node) -> ESTree | None:
        """``for`` clauses arrive as statements in some grammar versions."""
        if node is None or node.type == "empty_statement":
            return None
        if node.type == "expression_statement":
            return self._first_named(node)
        return self._convert(node)

    # ── statements ───────────────────────────────────────────────

    def _convert_program(self, node) -> ESTree:
        return {
            "type": constants.PROGRAM,
            "sourceType": "script",
            "body": [self._convert(c) for c in self._named(node)],
        }

    def _convert_expression_statement(self, node) -> ESTree:
        return {
            "type": constants.EXPRESSION_STATEMENT,
            "expression": self._first_named(node),
        }

    def _convert_declaration(self, node) -> ESTree:
        kind = next(
            (c.type for c in node.children if c.type in ("var", "let", "const")),
            constants.KIND_VAR,
        )
        return {
            "type": constants.VARIABLE_DECLARATION,
            "kind": kind,
            "declarations": [
                self._convert_declarator(c)
                for c in node.named_children
                if c.type == "variable_declarator"
            ],
        }

    def _convert_declarator(self, node) -> ESTree:
        return {
            "type": constants.VARIABLE_DECLARATOR,
            "id": self._field(node, "name"),
            "init": self._field(node, "value"),
            "loc": self._loc(node),
        }

    def _convert_block(self, node) -> ESTree:
        return {
            "type": constants.BLOCK_STATEMENT,
            "body": [self._convert(c) for c in self._named(node)],
        }

    def _convert_empty(self, node) -> ESTree:
        return {"type": constants.EMPTY_STATEMENT}

    def _convert_if(self, node) -> ESTree:
        alternative = node.child_by_field_name("alternative")
        if alternative is not None and alternative.type == "else_clause":
            alternative = self._named(alternative)[0]
        return {
            "type": constants.IF_STATEMENT,
            "test": self._field(node, "condition"),
            "consequent": self._field(node, "consequence"),
            "alternate": self._convert_optional(alternative),
        }

    def _convert_while(self, node) -> ESTree:
        return {
            "type": constants.WHILE_STATEMENT,
            "test": self._field(node, "condition"),
            "body": self._field(node, "body"),
        }

    def _convert_do(self, node) -> ESTree:
        return {
            "type": constants.DO_WHILE_STATEMENT,
            "body": self._field(node, "body"),
            "test": self._field(node, "condition"),
        }

    def _convert_for(self, node) -> ESTree:
        return {
            "type": constants.FOR_STATEMENT,
            "init": self._unwrap_statement(node.child_by_field_name("initializer")),
            "test": self._unwrap_statement(node.child_by_field_name("condition")),
            "update": self._field(node, "increment"),
            "body": self._field(node, "body"),
        }

    def _convert_for_in(self, node) -> ESTree:
        operator = node.child_by_field_name("operator")
        is_of = operator is not None and self._node_text(operator) == "of"
        left_node = node.child_by_field_name("left")
        kind_node = node.child_by_field_name("kind")
        left = self._convert(left_node)
        if kind_node is not None:
            left = {
                "type": constants.VARIABLE_DECLARATION,
                "kind": self._node_text(kind_node),
                "declarations": [
                    {"type": constants.VARIABLE_DECLARATOR, "id": left, "init": None}
                ],
                "loc": self._loc(left_node),
            }
        return {
            "type": constants.FOR_OF_STATEMENT if is_of else constants.FOR_IN_STATEMENT,
            "left": left,
            "right": self._field(node, "right"),
            "body": self._field(node, "body"),
            "await": self._has_token(node, "await"),
        }

    def _convert_try(self, node) -> ESTree:
        handler = node.child_by_field_name("handler")
        finalizer = node.child_by_field_name("finalizer")
        return {
            "type": constants.TRY_STATEMENT,
            "block": self._field(node, "body"),
            "handler": (
                {
                    "type": constants.CATCH_CLAUSE,
                    "param": self._field(handler, "parameter"),
                    "body": self._field(handler, "body"),
                    "loc": self._loc(handler),
                }
                if handler is not None
                else None
            ),
            "finalizer": self._field(finalizer, "body") if finalizer is not None else None,
        }

    def _convert_switch(self, node) -> ESTree:
        body = node.child_by_field_name("body")
        cases = []
        for case in self._named(body) if body is not None else []:
            cases.append(
                {
                    "type": constants.SWITCH_CASE,
                    "test": self._field(case, "value") if case.type == "switch_case" else None,
                    "consequent": [
                        self._convert(c)
                        for c in case.children_by_field_name("body")
                        if c.type not in self.COMMENT_TYPES
                    ],
                    "loc": self._loc(case),
                }
            )
        return {
            "type": constants.SWITCH_STATEMENT,
            "discriminant": self._field(node, "value"),
            "cases": cases,
        }

    def _convert_return(self, node) -> ESTree:
        return {"type": constants.RETURN_STATEMENT, "argument": self._first_named(node)}

    def _convert_throw(self, node) -> ESTree:
        return {"type": constants.THROW_STATEMENT, "argument": self._first_named(node)}

    def _convert_jump(self, node) -> ESTree:
        kind = (
            constants.BREAK_STATEMENT
            if node.type == "break_statement"
            else constants.CONTINUE_STATEMENT
        )
        return {"type": kind, "label": self._field(node, "label")}

    def _convert_class(self, node) -> ESTree:
        heritage = next((c for c in node.named_children if c.type == "class_heritage"), None)
        body = node.child_by_field_name("body")
        return {
            "type": constants.CLASS_DECLARATION,
            "id": self._field(node, "name"),
            "superClass": self._first_named(heritage) if heritage is not None else None,
            "body": {
                "type": constants.CLASS_BODY,
                "body": [self._convert_class_member(c) for c in self._named(body)],
                "loc": self._loc(body),
            },
        }

    def _convert_class_member(self, node) -> ESTree:
        if node.type != "method_definition":
            return self._convert(node)
        name_node = node.child_by_field_name("name")
        name = self._node_text(name_node)
        kind = "method"
        if name == "constructor":
            kind = "constructor"
        elif self._has_token(node, "get"):
            kind = "get"
        elif self._has_token(node, "set"):
            kind = "set"
        key, computed = self._convert_key(name_node)
        return {
            "type": constants.METHOD_DEFINITION,
            "key": key,
            "computed": computed,
            "kind": kind,
            "static": self._has_token(node, "static"),
            "value": self._method_function(node),
            "loc": self._loc(node),
        }

    def _method_function(self, node) -> ESTree:
        return {
            "type": constants.FUNCTION_EXPRESSION,
            "id": None,
            "params": self._convert_params(node.child_by_field_name("parameters")),
            "body": self._field(node, "body"),
            "async": self._has_token(node, "async"),
            "generator": self._has_token(node, "*"),
            "loc": self._loc(node),
        }

    # ── functions ────────────────────────────────────────────────

    def _convert_params(self, node) -> list[ESTree]:
        if node is None:
            return []
        return [self._convert(c) for c in self._named(node)]

    def _convert_function(self, node) -> ESTree:
        kind = (
            constants.FUNCTION_DECLARATION
            if node.type.endswith("_declaration")
            else constants.FUNCTION_EXPRESSION
        )
        return {
            "type": kind,
            "id": self._field(node, "name"),
            "params": self._convert_params(node.child_by_field_name("parameters")),
            "body": self._field(node, "body"),
            "async": self._has_token(node, "async"),
            "generator": self._has_token(node, "*"),
        }

    def _convert_arrow(self, node) -> ESTree:
        single = node.child_by_field_name("parameter")
        if single is not None:
            params = [self._convert(single)]
        else:
            params = self._convert_params(node.child_by_field_name("parameters"))
        body = node.child_by_field_name("body")
        return {
            "type": constants.ARROW_FUNCTION_EXPRESSION,
            "id": None,
            "params": params,
            "body": self._convert(body),
            "async": self._has_token(node, "async"),
            "expression": body.type != "statement_block",
        }

    def _convert_assignment_pattern(self, node) -> ESTree:
        return {
            "type": "AssignmentPattern",
            "left": self._field(node, "left"),
            "right": self._field(node, "right"),
        }

    def _convert_rest(self, node) -> ESTree:
        return {"type": "RestElement", "argument": self._first_named(node)}

    # ── scalars ──────────────────────────────────────────────────

    def _convert_identifier(self, node) -> ESTree:
        return {"type": constants.IDENTIFIER, "name": self._node_text(node)}

    def _convert_this(self, node) -> ESTree:
        return {"type": constants.THIS_EXPRESSION}

    def _convert_keyword_literal(self, node) -> ESTree:
        values = {"true": True, "false": False, "null": None, "undefined": UNDEFINED}
        return {
            "type": constants.LITERAL,
            "value": values[node.type],
            "raw": node.type,
        }

    def _convert_number(self, node) -> ESTree:
        raw = self._node_text(node)
        literal: ESTree = {"type": constants.LITERAL, "raw": raw}
        if raw.endswith("n"):
            literal["value"] = None
            literal["bigint"] = raw[:-1].replace("_", "")
        else:
            literal["value"] = parse_number(raw)
        return literal

    def _convert_string(self, node) -> ESTree:
        parts: list[str] = []
        for child in node.named_children:
            text = self._node_text(child)
            if child.type == "escape_sequence":
                try:
                    parts.append(decode_escape(text))
                except ValueError as e:
                    row, col = child.start_point[0] + 1, child.start_point[1] + 1
                    raise JsSyntaxError(f"invalid escape sequence: {e}", row, col) from e
            elif child.type == "string_fragment":
                parts.append(text)
        return {
            "type": constants.LITERAL,
            "value": _join_surrogates("".join(parts)),
            "raw": self._node_text(node),
        }

    def _convert_regex(self, node) -> ESTree:
        pattern = node.child_by_field_name("pattern")
        flags = node.child_by_field_name("flags")
        return {
            "type": constants.LITERAL,
            "value": None,
            "raw": self._node_text(node),
            "regex": {
                "pattern": self._node_text(pattern) if pattern is not None else "",
                "flags": self._node_text(flags) if flags is not None else "",
            },
        }

    # ── expressions ──────────────────────────────────────────────

    def _convert_parenthesized(self, node) -> ESTree:
        inner = self._named(node)
        if len(inner) != 1:
            return {
                "type": constants.SEQUENCE_EXPRESSION,
                "expressions": [self._convert(c) for c in inner],
            }
        return self._convert(inner[0])

    def _convert_member(self, node) -> ESTree:
        return {
            "type": constants.MEMBER_EXPRESSION,
            "object": self._field(node, "object"),
            "property": self._field(node, "property"),
            "computed": False,
            "optional": node.child_by_field_name("optional_chain") is not None,
        }

    def _convert_subscript(self, node) -> ESTree:
        return {
            "type": constants.MEMBER_EXPRESSION,
            "object": self._field(node, "object"),
            "property": self._field(node, "index"),
            "computed": True,
            "optional": node.child_by_field_name("optional_chain") is not None,
        }

    def _convert_call(self, node) -> ESTree:
        args = node.child_by_field_name("arguments")
        if args is not None and args.type == "template_string":
            return {"type": "TaggedTemplateExpression"}
        return {
            "type": constants.CALL_EXPRESSION,
            "callee": self._field(node, "function"),
            "arguments": self._convert_params(args),
            "optional": node.child_by_field_name("optional_chain") is not None,
        }

    def _convert_new(self, node) -> ESTree:
        return {
            "type": constants.NEW_EXPRESSION,
            "callee": self._field(node, "constructor"),
            "arguments": self._convert_params(node.child_by_field_name("arguments")),
        }

    def _convert_await(self, node) -> ESTree:
        return {"type": constants.AWAIT_EXPRESSION, "argument": self._first_named(node)}

    def _convert_array(self, node) -> ESTree:
        elements: list[ESTree | None] = []
        expecting = True
        for child in node.children:
            if child.type == ",":
                if expecting:
                    elements.append(None)
                expecting = True
            elif child.is_named and child.type not in self.COMMENT_TYPES:
                elements.append(self._convert(child))
                expecting = False
        return {"type": constants.ARRAY_EXPRESSION, "elements": elements}

    def _convert_object(self, node) -> ESTree:
        return {
            "type": constants.OBJECT_EXPRESSION,
            "properties": [self._convert_object_member(c) for c in self._named(node)],
        }

    def _convert_object_member(self, node) -> ESTree:
        if node.type == "pair":
            key, computed = self._convert_key(node.child_by_field_name("key"))
            return {
                "type": constants.PROPERTY,
                "key": key,
                "value": self._field(node, "value"),
                "computed": computed,
                "kind": "init",
                "method": False,
                "shorthand": False,
                "loc": self._loc(node),
            }
        if node.type == "shorthand_property_identifier":
            ident = self._convert(node)
            return {
                "type": constants.PROPERTY,
                "key": ident,
                "value": dict(ident),
                "computed": False,
                "kind": "init",
                "method": False,
                "shorthand": True,
                "loc": self._loc(node),
            }
        if node.type == "method_definition":
            name_node = node.child_by_field_name("name")
            key, computed = self._convert_key(name_node)
            kind = "init"
            if self._has_token(node, "get"):
                kind = "get"
            elif self._has_token(node, "set"):
                kind = "set"
            return {
                "type": constants.PROPERTY,
                "key": key,
                "value": self._method_function(node),
                "computed": computed,
                "kind": kind,
                "method": kind == "init",
                "shorthand": False,
                "loc": self._loc(node),
            }
        return self._convert(node)

    def _convert_key(self, node) -> tuple[ESTree, bool]:
        if node.type == "computed_property_name":
            return self._first_named(node), True
        return self._convert(node), False

    def _convert_assignment(self, node) -> ESTree:
        operator = node.child_by_field_name("operator")
        return {
            "type": constants.ASSIGNMENT_EXPRESSION,
            "operator": self._node_text(operator) if operator is not None else "=",
            "left": self._field(node, "left"),
            "right": self._field(node, "right"),
        }

    def _convert_binary(self, node) -> ESTree:
        operator = self._node_text(node.child_by_field_name("operator"))
        kind = (
            constants.LOGICAL_EXPRESSION
            if operator in constants.LOGICAL_OPERATORS
            else constants.BINARY_EXPRESSION
        )
        return {
            "type": kind,
            "operator": operator,
            "left": self._field(node, "left"),
            "right": self._field(node, "right"),
        }

    def _convert_unary(self, node) -> ESTree:
        return {
            "type": "UnaryExpression",
            "operator": self._node_text(node.child_by_field_name("operator")),
            "prefix": True,
            "argument": self._field(node, "argument"),
        }

    def _convert_update(self, node) -> ESTree:
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        return {
            "type": constants.UPDATE_EXPRESSION,
            "operator": self._node_text(operator),
            "prefix": operator.start_byte < argument.start_byte,
            "argument": self._convert(argument),
        }

    def _convert_ternary(self, node) -> ESTree:
        return {
            "type": constants.CONDITIONAL_EXPRESSION,
            "test": self._field(node, "condition"),
            "consequent": self._field(node, "consequence"),
            "alternate": self._field(node, "alternative"),
        }

    def _convert_sequence(self, node) -> ESTree:
        expressions: list[ESTree] = []
        for child in self._named(node):
            converted = self._convert(child)
            if child.type == "sequence_expression":
                expressions.extend(converted["expressions"])
            else:
                expressions.append(converted)
        return {"type": constants.SEQUENCE_EXPRESSION, "expressions": expressions}

    def _convert_spread(self, node) -> ESTree:
        return {"type": "SpreadElement", "argument": self._first_named(node)}


# ── literal decoding ─────────────────────────────────────────────


def parse_number(raw: str) -> int | float:
    """Value of a JS numeric literal (hex/octal/binary, separators, legacy octal)."""
    text = raw.replace("_", "")
    lowered = text.lower()
    for prefix, base in (("0x", 16), ("0o", 8), ("0b", 2)):
        if lowered.startswith(prefix):
            return int(text[2:], base)
    if len(text) > 1 and text[0] == "0" and text.isdigit():
        return int(text, 8) if all(ch in "01234567" for ch in text) else int(text)
    if any(ch in lowered for ch in ".e"):
        return float(text)
    return int(text)


def decode_escape(text: str) -> str:
    """Decode one ``escape_sequence`` token such as ``\\n`` or ``\\u{1F600}``.

    Raises ``ValueError`` for a malformed escape or a code point past U+10FFFF.
    """
    body = text[1:]
    if not body:
        return ""
    if body.startswith(_LINE_TERMINATORS):
        return ""
    head = body[0]
    if head == "x" and len(body) == 3:
        return chr(int(body[1:], 16))
    if head == "u":
        if body.startswith("u{"):
            code = int(body[2:-1], 16)
            if code > _MAX_CODE_POINT:
                raise ValueError(f"code point out of range in {text}")
            return chr(code)
        return chr(int(body[1:5], 16))
    if body in _STRING_ESCAPES:
        return _STRING_ESCAPES[body]
    if body.isdigit() and all(ch in "01234567" for ch in body):
        return chr(int(body, 8))
    return body


def _join_surrogates(text: str) -> str:
    try:
        return text.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError:
        return text
