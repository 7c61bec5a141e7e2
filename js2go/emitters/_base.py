"""BaseEmitter — dispatch, scope threading and error policy for the traversal."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator

from ..ast_nodes import AstNode
from ..bindings import GO_SYSCALL_JS, CallBuilder, HostBindings
from ..errors import UnknownNodeKind
from ..lines import EmittedLines
from ..scope import ScopeTable
from .. import constants

logger = logging.getLogger(__name__)


class BaseEmitter:
    """Base class for the ESTree → Go emitters.

    Subclasses populate ``_DISPATCH`` with one handler per supported node
    kind. Every handler returns the ``EmittedLines`` for its node; a kind with
    no handler is a hard error.
    """

    def __init__(
        self,
        bindings: HostBindings = GO_SYSCALL_JS,
        log: logging.Logger | None = None,
    ):
        self._bindings = bindings
        self._calls = CallBuilder(bindings)
        self._log = log or logger
        self._scopes = ScopeTable()
        self._define_mode = False
        self._DISPATCH: dict[str, Callable[[AstNode], EmittedLines]] = {}

    @property
    def scope_depth(self) -> int:
        return self._scopes.depth

    # ── entry point ──────────────────────────────────────────────

    def translate(self, root: AstNode | dict[str, Any]) -> list[str]:
        """Translate a ``Program`` node into Go source lines.

        Raises ``TranslationError`` on the first unsupported construct; no
        partial output is returned in that case.
        """
        program = AstNode.wrap(root)
        if not isinstance(program, AstNode) or program.kind != constants.PROGRAM:
            kind = program.kind if isinstance(program, AstNode) else type(root).__name__
            raise UnknownNodeKind(f"expected a Program node, got {kind}", kind)
        self._scopes = ScopeTable()
        self._define_mode = False
        with self._scopes.frame(constants.PROGRAM):
            lines = self._emit_sequence(program.nodes("body"))
        self._log.info("Translated program into %d lines", len(lines))
        return lines.to_list()

    # ── dispatchers ──────────────────────────────────────────────

    def _emit(self, node: AstNode | None) -> EmittedLines:
        if node is None:
            raise UnknownNodeKind("missing node")
        if not isinstance(node, AstNode):
            raise UnknownNodeKind(f"malformed node: {node!r:.60}")
        kind = node.kind
        handler = self._DISPATCH.get(kind)
        if handler is None:
            self._log.debug("unknown expression type: %r", node)
            raise UnknownNodeKind(f"unknown expression type: {kind}", kind)
        self._log.debug("%s%s", "  " * self._scopes.depth, kind)
        return handler(node)

    def _emit_sequence(self, nodes: Iterable[AstNode | None]) -> EmittedLines:
        lines = EmittedLines()
        for node in nodes:
            lines.extend(self._emit(node))
        return lines

    def _emit_value(self, node: AstNode | None, context: str) -> EmittedLines:
        """Emit *node* where a value is required; elided nodes are an error."""
        lines = self._emit(node)
        if lines.is_empty():
            kind = node.kind if node is not None else ""
            raise UnknownNodeKind(f"{kind} produces no value in {context}", kind)
        return lines

    def _elide(self, node: AstNode) -> EmittedLines:
        self._log.info("%s is not reconstructed; no output emitted", node.kind)
        return EmittedLines()

    # ── define mode ──────────────────────────────────────────────

    @contextmanager
    def _define_mode_as(self, enabled: bool) -> Iterator[None]:
        """Switch identifier handling for nested emission, restoring the prior mode."""
        previous = self._define_mode
        self._define_mode = enabled
        try:
            yield
        finally:
            self._define_mode = previous
