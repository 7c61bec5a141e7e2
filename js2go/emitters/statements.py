"""Statement emitters — declarations, function definitions and block flattening."""

from __future__ import annotations

import logging

from ..ast_nodes import AstNode
from ..errors import UnknownNodeKind
from ..lines import EmittedLines
from ..scope import BindingKind
from .. import constants
from .expressions import ExpressionEmitter

logger = logging.getLogger(__name__)


class StatementEmitter(ExpressionEmitter):
    """Emits Go statements; owns frame push/pop around every nested body."""

    # ── declarations ─────────────────────────────────────────────

    def _emit_variable_declaration(self, node: AstNode) -> EmittedLines:
        kind = node.get("kind", constants.KIND_VAR)
        declarators = node.nodes("declarations")

        if kind == constants.KIND_LET:
            if self._scopes.depth > 1:
                lines = EmittedLines()
                for declarator in declarators:
                    lines.extend(self._emit_declarator(declarator, constants.SHORT_ASSIGN))
                return lines
            kind = constants.KIND_VAR

        parts = [
            self._emit_declarator(declarator, constants.ASSIGN)
            for declarator in declarators
        ]
        if len(parts) == 1:
            return parts[0].enclosed(f"{kind} ")
        lines = EmittedLines([f"{kind} ("])
        for part in parts:
            lines.extend(part)
        return lines.append(")")

    def _emit_variable_declarator(self, node: AstNode) -> EmittedLines:
        return self._emit_declarator(node, constants.ASSIGN)

    def _emit_declarator(self, node: AstNode | None, operator: str) -> EmittedLines:
        if node is None or node.kind != constants.VARIABLE_DECLARATOR:
            kind = node.kind if node is not None else ""
            raise UnknownNodeKind(f"unexpected declarator: {kind}", kind)
        target = node.node("id")
        if target is None or target.kind != constants.IDENTIFIER:
            kind = target.kind if target is not None else ""
            raise UnknownNodeKind(f"unsupported declaration target: {kind}", kind)

        name = target.get("name", "")
        self._scopes.define(name, BindingKind.NATIVE_VALUE)
        init = node.node("init")
        if init is None:
            return EmittedLines([f"{name} {operator} {self._bindings.null_value}"])
        if init.kind == constants.AWAIT_EXPRESSION:
            name = f"{name}, {self._bindings.error_binding}"
        # A MemberExpression init arrives here as a direct <object>.Get("prop").
        value = self._emit_value(init, f"initializer of {name}")
        return value.enclosed(f"{name} {operator} ")

    # ── functions ────────────────────────────────────────────────

    def _emit_function(self, node: AstNode, name: str | None = None) -> EmittedLines:
        """Shared rule for declarations, expressions, arrows and methods.

        The function's own name is bound as a native value in the enclosing
        frame so recursive and forward calls compile to direct calls.
        """
        own = node.node("id")
        own_name = own.get("name") if own is not None else None
        if own_name:
            self._scopes.define(own_name, BindingKind.NATIVE_VALUE)
        if name is None and node.kind == constants.FUNCTION_DECLARATION:
            name = own_name

        with self._scopes.frame(node.kind):
            params = ", ".join(self._emit_parameter(p) for p in node.nodes("params"))
            header = f"func {name}({params}) {{" if name else f"func({params}) {{"
            body = node.node("body")
            lines = self._emit(body) if body is not None else EmittedLines()
        return lines.wrapped([header], ["}"])

    def _emit_parameter(self, param: AstNode | None) -> str:
        if param is None or param.kind != constants.IDENTIFIER:
            kind = param.kind if param is not None else ""
            raise UnknownNodeKind(f"unsupported parameter: {kind}", kind)
        name = param.get("name", "")
        self._scopes.define(name, BindingKind.DYNAMIC_HANDLE)
        return f"{name} {self._bindings.handle_type}"

    def _emit_method_definition(self, node: AstNode) -> EmittedLines:
        key = node.node("key")
        if node.get("computed") or key is None or key.kind != constants.IDENTIFIER:
            kind = key.kind if key is not None else ""
            raise UnknownNodeKind(f"unsupported method key: {kind}", kind)
        name = key.get("name", "")
        self._scopes.define(name, BindingKind.NATIVE_VALUE)
        value = node.node("value")
        if value is None or value.kind not in constants.FUNCTION_KINDS:
            kind = value.kind if value is not None else ""
            raise UnknownNodeKind(f"unsupported method value: {kind}", kind)
        return self._emit_function(value, name=name)

    # ── containers ───────────────────────────────────────────────

    def _emit_expression_statement(self, node: AstNode) -> EmittedLines:
        with self._scopes.frame(node.kind):
            return self._emit(node.node("expression"))

    def _emit_block(self, node: AstNode) -> EmittedLines:
        with self._scopes.frame(node.kind):
            return self._emit_sequence(node.nodes("body"))

    def _emit_empty(self, node: AstNode) -> EmittedLines:
        return EmittedLines()

    # ── traversal-only statements ────────────────────────────────
    #
    # Control flow is walked so that the symbols it declares are tracked and
    # unsupported constructs inside it still fail, but its syntax is not
    # reconstructed.

    def _traverse(self, node: AstNode, *children: AstNode | None) -> EmittedLines:
        with self._scopes.frame(node.kind):
            for child in children:
                if child is not None:
                    self._emit(child)
        return self._elide(node)

    def _emit_if(self, node: AstNode) -> EmittedLines:
        return self._traverse(node, node.node("consequent"), node.node("alternate"))

    def _emit_loop(self, node: AstNode) -> EmittedLines:
        return self._traverse(node, node.node("body"))

    def _emit_for(self, node: AstNode) -> EmittedLines:
        return self._traverse(node, _declaration_or_none(node.node("init")), node.node("body"))

    def _emit_for_in(self, node: AstNode) -> EmittedLines:
        return self._traverse(node, _declaration_or_none(node.node("left")), node.node("body"))

    def _emit_try(self, node: AstNode) -> EmittedLines:
        return self._traverse(
            node, node.node("block"), node.node("handler"), node.node("finalizer")
        )

    def _emit_catch_clause(self, node: AstNode) -> EmittedLines:
        with self._scopes.frame(node.kind):
            param = node.node("param")
            if param is not None:
                self._emit_parameter(param)
            self._emit(node.node("body"))
        return EmittedLines()

    def _emit_switch(self, node: AstNode) -> EmittedLines:
        return self._traverse(node, *node.nodes("cases"))

    def _emit_switch_case(self, node: AstNode) -> EmittedLines:
        self._emit_sequence(node.nodes("consequent"))
        return EmittedLines()

    def _emit_class_declaration(self, node: AstNode) -> EmittedLines:
        own = node.node("id")
        if own is not None:
            self._scopes.define(own.get("name", ""), BindingKind.NATIVE_VALUE)
        return self._traverse(node, node.node("body"))

    def _emit_assignment(self, node: AstNode) -> EmittedLines:
        self._emit(node.node("left"))
        self._emit(node.node("right"))
        return self._elide(node)


def _declaration_or_none(node: AstNode | None) -> AstNode | None:
    if node is not None and node.kind == constants.VARIABLE_DECLARATION:
        return node
    return None
