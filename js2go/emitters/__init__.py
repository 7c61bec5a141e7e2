"""ESTree → Go emitters, layered base → expressions → statements."""

from __future__ import annotations

from ._base import BaseEmitter
from .expressions import ExpressionEmitter
from .statements import StatementEmitter

__all__ = [
    "BaseEmitter",
    "ExpressionEmitter",
    "StatementEmitter",
]
