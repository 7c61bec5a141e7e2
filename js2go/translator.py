"""Translator — ESTree JavaScript AST → Go (syscall/js) source lines."""

from __future__ import annotations

import logging
from typing import Callable

from .ast_nodes import AstNode
from .bindings import GO_SYSCALL_JS, HostBindings
from .emitters.statements import StatementEmitter
from .lines import EmittedLines
from . import constants as c

logger = logging.getLogger(__name__)


class Translator(StatementEmitter):
    """Traversal engine: maps each ESTree discriminant to its emitter."""

    def __init__(
        self,
        bindings: HostBindings = GO_SYSCALL_JS,
        log: logging.Logger | None = None,
    ):
        super().__init__(bindings, log)
        self._DISPATCH: dict[str, Callable[[AstNode], EmittedLines]] = {
            # expressions
            c.LITERAL: self._emit_literal,
            c.IDENTIFIER: self._emit_identifier,
            c.THIS_EXPRESSION: self._emit_this,
            c.MEMBER_EXPRESSION: self._emit_member_expression,
            c.CALL_EXPRESSION: self._emit_call_expression,
            c.AWAIT_EXPRESSION: self._emit_await_expression,
            c.ARRAY_EXPRESSION: self._emit_array_expression,
            c.OBJECT_EXPRESSION: self._emit_object_expression,
            c.PROPERTY: self._emit_property,
            c.ASSIGNMENT_EXPRESSION: self._emit_assignment,
            c.FUNCTION_EXPRESSION: self._emit_function,
            c.ARROW_FUNCTION_EXPRESSION: self._emit_function,
            # statements
            c.EMPTY_STATEMENT: self._emit_empty,
            c.EXPRESSION_STATEMENT: self._emit_expression_statement,
            c.BLOCK_STATEMENT: self._emit_block,
            c.CLASS_BODY: self._emit_block,
            c.VARIABLE_DECLARATION: self._emit_variable_declaration,
            c.VARIABLE_DECLARATOR: self._emit_variable_declarator,
            c.FUNCTION_DECLARATION: self._emit_function,
            c.METHOD_DEFINITION: self._emit_method_definition,
            c.CLASS_DECLARATION: self._emit_class_declaration,
            c.IF_STATEMENT: self._emit_if,
            c.WHILE_STATEMENT: self._emit_loop,
            c.DO_WHILE_STATEMENT: self._emit_loop,
            c.FOR_STATEMENT: self._emit_for,
            c.FOR_IN_STATEMENT: self._emit_for_in,
            c.FOR_OF_STATEMENT: self._emit_for_in,
            c.TRY_STATEMENT: self._emit_try,
            c.CATCH_CLAUSE: self._emit_catch_clause,
            c.SWITCH_STATEMENT: self._emit_switch,
            c.SWITCH_CASE: self._emit_switch_case,
        }
        for kind in c.ELIDED_KINDS:
            self._DISPATCH[kind] = self._elide

    @property
    def supported_kinds(self) -> frozenset[str]:
        return frozenset(self._DISPATCH)


def translate(
    root: AstNode | dict, bindings: HostBindings = GO_SYSCALL_JS
) -> list[str]:
    """Translate an ESTree ``Program`` with a fresh ``Translator``."""
    return Translator(bindings).translate(root)
