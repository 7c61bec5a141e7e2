"""Error types raised by the parser adapter and the translation engine."""

from __future__ import annotations


class TranslationError(Exception):
    """First unsupported construct met during a translation.

    Terminal for the whole translation: the engine returns no lines once one
    of these has been raised.
    """

    def __init__(self, message: str, node_kind: str = ""):
        super().__init__(message)
        self.node_kind = node_kind


class UnsupportedLiteral(TranslationError):
    """A literal value with no literal form in the target language."""


class UnknownNodeKind(TranslationError):
    """A discriminant outside the supported set, or an invalid combination."""


class JsSyntaxError(ValueError):
    """The JavaScript source could not be parsed."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(f"{message} at {line}:{column}" if line else message)
        self.line = line
        self.column = column


class ScopeUnderflowError(RuntimeError):
    """pop() was called on an empty scope stack."""
