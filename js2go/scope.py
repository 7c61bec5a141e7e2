"""Scope Table — lexical frames recording how each symbol must be emitted."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from .errors import ScopeUnderflowError

logger = logging.getLogger(__name__)


class BindingKind(str, Enum):
    # Generated directly in Go syntax (declared variable, named function).
    NATIVE_VALUE = "native_value"
    # Host value reachable only through Get / Call / Invoke (parameters).
    DYNAMIC_HANDLE = "dynamic_handle"


@dataclass
class ScopeFrame:
    """One nesting level of the traversal."""

    owner: str = ""
    bindings: dict[str, BindingKind] = field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.bindings


class ScopeTable:
    """Stack of ``ScopeFrame``s, innermost last."""

    def __init__(self):
        self._frames: list[ScopeFrame] = []

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def current(self) -> ScopeFrame:
        if not self._frames:
            raise ScopeUnderflowError("No active scope frame")
        return self._frames[-1]

    def push(self, owner: str = "") -> ScopeFrame:
        frame = ScopeFrame(owner=owner)
        self._frames.append(frame)
        return frame

    def pop(self) -> ScopeFrame:
        if not self._frames:
            raise ScopeUnderflowError("Cannot pop an empty scope stack")
        return self._frames.pop()

    @contextmanager
    def frame(self, owner: str = "") -> Iterator[ScopeFrame]:
        """Push a frame for the duration of the block, popping it on any exit."""
        pushed = self.push(owner)
        try:
            yield pushed
        finally:
            self.pop()

    def define(self, name: str, kind: BindingKind) -> None:
        logger.debug("define %s as %s (depth %d)", name, kind.value, self.depth)
        self.current.bindings[name] = kind

    def resolve(self, name: str) -> BindingKind | None:
        """Innermost-to-outermost lookup; ``None`` means a global property."""
        return next(
            (
                frame.bindings[name]
                for frame in reversed(self._frames)
                if name in frame.bindings
            ),
            None,
        )

    def is_defined(self, name: str) -> bool:
        return self.resolve(name) is not None
