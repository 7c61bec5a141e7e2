"""Expression emitters — literals, identifiers, member chains, calls and composite literals."""

from __future__ import annotations

import logging
from typing import Sequence

from ..ast_nodes import UNDEFINED, AstNode
from ..bindings import go_quote, render_number
from ..errors import UnknownNodeKind, UnsupportedLiteral
from ..lines import EmittedLines
from .. import constants
from ._base import BaseEmitter

logger = logging.getLogger(__name__)


class ExpressionEmitter(BaseEmitter):
    """Emits Go expressions that drive host JS values through the interop API."""

    # ── scalars ──────────────────────────────────────────────────

    def _emit_literal(self, node: AstNode) -> EmittedLines:
        if node.has("regex") or node.has("bigint"):
            raise UnsupportedLiteral(
                f"unsupported literal: {node.get('raw', 'regex')}", constants.LITERAL
            )
        value = node.get("value")
        if value is None:
            token = self._bindings.null_value
        elif value is UNDEFINED:
            token = self._bindings.undefined_value
        elif isinstance(value, bool):
            token = "true" if value else "false"
        elif isinstance(value, (int, float)):
            token = render_number(value)
        elif isinstance(value, str):
            token = go_quote(value)
        else:
            raise UnsupportedLiteral(
                f"unsupported literal: {type(value).__name__}", constants.LITERAL
            )
        return EmittedLines([token])

    def _emit_identifier(self, node: AstNode) -> EmittedLines:
        name = node.get("name", "")
        if self._define_mode:
            return EmittedLines([name])
        if name == constants.WINDOW:
            return EmittedLines([self._bindings.global_object])
        if self._scopes.is_defined(name):
            return EmittedLines([name])
        return EmittedLines([self._calls.global_chain([name])])

    def _emit_this(self, node: AstNode) -> EmittedLines:
        return self._elide(node)

    # ── member chains ────────────────────────────────────────────

    def _member_parts(self, node: AstNode) -> tuple[EmittedLines, str]:
        """Split ``a.b.c`` into the emitted chain for ``a.b`` and the name ``c``.

        A nested static member object is collapsed into a single property
        chain first. An empty chain means the object was elided.
        """
        target = node.node("object")
        prop = self._static_property_name(node)
        if target is not None and _is_static_member(target):
            inner, inner_prop = self._member_parts(target)
            if inner.is_empty():
                return inner, prop
            return self._calls.property_get(inner, inner_prop), prop
        return self._emit(target), prop

    def _static_property_name(self, node: AstNode) -> str:
        prop = node.node("property")
        if prop is None or prop.kind != constants.IDENTIFIER:
            kind = prop.kind if prop is not None else ""
            raise UnknownNodeKind(f"unsupported member property: {kind}", kind)
        return prop.get("name", "")

    def _emit_member_expression(self, node: AstNode) -> EmittedLines:
        if node.get("computed"):
            return self._elide(node)
        target, prop = self._member_parts(node)
        if target.is_empty():
            return self._elide(node)
        return self._calls.property_get(target, prop)

    # ── calls ────────────────────────────────────────────────────

    def _emit_call_expression(self, node: AstNode) -> EmittedLines:
        callee = node.node("callee")
        if callee is None:
            raise UnknownNodeKind("call without callee", constants.CALL_EXPRESSION)

        if callee.kind == constants.IDENTIFIER:
            name = callee.get("name", "")
            binding = self._scopes.resolve(name)
            args = self._emit_arguments(node)
            if binding is None:
                return self._calls.global_call(name, args)
            return self._calls.symbol_call(name, binding, args)

        if _is_static_member(callee):
            target, method = self._member_parts(callee)
            if target.is_empty():
                return self._elide(node)
            return self._calls.method_call(target, method, self._emit_arguments(node))

        target = self._emit(callee)
        if target.is_empty():
            return self._elide(node)
        return self._calls.plain_call(target, self._emit_arguments(node))

    def _emit_arguments(self, node: AstNode) -> list[EmittedLines]:
        return [
            self._emit_value(arg, "call argument") for arg in node.nodes("arguments")
        ]

    def _emit_await_expression(self, node: AstNode) -> EmittedLines:
        argument = node.node("argument")
        if argument is None or argument.kind != constants.CALL_EXPRESSION:
            kind = argument.kind if argument is not None else ""
            raise UnknownNodeKind(
                f"await of {kind or 'nothing'} is not supported; only calls can be awaited",
                constants.AWAIT_EXPRESSION,
            )
        call = self._emit_value(argument, "await")
        return call.enclosed(f"{self._bindings.await_bridge}(", ")")

    # ── composite literals ───────────────────────────────────────

    def _emit_array_expression(self, node: AstNode) -> EmittedLines:
        elements: list[EmittedLines] = []
        for element in node.nodes("elements"):
            if element is None:
                raise UnknownNodeKind(
                    "array holes are not supported", constants.ARRAY_EXPRESSION
                )
            elements.append(self._emit_value(element, "array element"))
        return self._composite(self._bindings.array_type, elements)

    def _emit_object_expression(self, node: AstNode) -> EmittedLines:
        with self._define_mode_as(True):
            properties = [
                self._emit_value(prop, "object literal")
                for prop in node.nodes("properties")
            ]
        return self._composite(self._bindings.object_type, properties)

    def _emit_property(self, node: AstNode) -> EmittedLines:
        if node.get("computed"):
            raise UnknownNodeKind(
                "computed property keys are not supported", constants.PROPERTY
            )
        key = self._property_key(node.node("key"))
        with self._define_mode_as(False):
            value = self._emit_value(node.node("value"), f"property {key!r}")
        return value.enclosed(f"{go_quote(key)}: ")

    def _property_key(self, key: AstNode | None) -> str:
        if key is not None and key.kind == constants.IDENTIFIER:
            return self._emit(key).first
        if key is not None and key.kind == constants.LITERAL:
            value = key.get("value")
            if isinstance(value, str):
                return value
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return render_number(value)
        kind = key.kind if key is not None else ""
        raise UnknownNodeKind(f"unsupported property key: {kind}", kind)

    def _composite(self, type_name: str, items: Sequence[EmittedLines]) -> EmittedLines:
        opening = f"{type_name}{{"
        if not items:
            return EmittedLines([opening + "}"])
        if len(items) == 1:
            return items[0].enclosed(opening, "}")
        lines = EmittedLines([opening])
        for item in items:
            lines.extend(item).concat(",")
        return lines.append("}")


def _is_static_member(node: AstNode) -> bool:
    return node.kind == constants.MEMBER_EXPRESSION and not node.get("computed")
