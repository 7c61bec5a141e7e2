"""AstNode — read-only view over an ESTree-shaped mapping."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import UnknownNodeKind


class _Undefined:
    """Sentinel for a JavaScript ``undefined`` literal value."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


class AstNode:
    """An ESTree node: a ``type`` discriminant plus kind-specific attributes.

    Attribute values are exposed as scalars, nested ``AstNode``s, or lists of
    ``AstNode``. The wrapped mapping is never mutated.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, Any]):
        self._fields = fields

    @classmethod
    def of(cls, kind: str, **fields: Any) -> AstNode:
        """Build a node of *kind*; nested dicts may be plain ESTree mappings."""
        return cls({"type": kind, **fields})

    @classmethod
    def wrap(cls, value: Any) -> Any:
        if isinstance(value, AstNode):
            return value
        if isinstance(value, Mapping) and "type" in value:
            return cls(value)
        if isinstance(value, list):
            return [cls.wrap(item) for item in value]
        return value

    @property
    def kind(self) -> str:
        return str(self._fields.get("type", ""))

    def get(self, name: str, default: Any = None) -> Any:
        if name not in self._fields:
            return default
        return AstNode.wrap(self._fields[name])

    def node(self, name: str) -> AstNode | None:
        value = self.get(name)
        return value if isinstance(value, AstNode) else None

    def nodes(self, name: str) -> list[AstNode | None]:
        """Return the list attribute *name*; holes stay ``None``."""
        value = self.get(name)
        if value is None:
            return []
        if not isinstance(value, list):
            raise UnknownNodeKind(
                f"malformed {self.kind}: {name!r} is not a list", self.kind
            )
        for item in value:
            if item is not None and not isinstance(item, AstNode):
                raise UnknownNodeKind(
                    f"malformed {self.kind}: {name!r} holds {item!r:.60}", self.kind
                )
        return list(value)

    def has(self, name: str) -> bool:
        return name in self._fields

    def to_estree(self) -> dict[str, Any]:
        def unwrap(value: Any) -> Any:
            if isinstance(value, AstNode):
                return value.to_estree()
            if isinstance(value, Mapping):
                return {k: unwrap(v) for k, v in value.items()}
            if isinstance(value, list):
                return [unwrap(v) for v in value]
            return value

        return unwrap(self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AstNode):
            return NotImplemented
        return self.to_estree() == other.to_estree()

    def __hash__(self) -> int:
        return id(self)

    def __repr__(self) -> str:
        name = self._fields.get("name")
        if name is not None:
            return f"AstNode({self.kind} {name!r})"
        return f"AstNode({self.kind})"
