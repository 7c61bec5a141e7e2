"""EmittedLines — ordered buffer of generated source lines."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence


class EmittedLines:
    """Generated lines in traversal order.

    Lines are only ever appended, or have a fragment concatenated onto the
    last line; nothing is reordered once emitted.
    """

    __slots__ = ("_lines",)

    def __init__(self, lines: Iterable[str] = ()):
        self._lines: list[str] = list(lines)

    # ── mutation ─────────────────────────────────────────────────

    def append(self, line: str) -> EmittedLines:
        self._lines.append(line)
        return self

    def extend(self, lines: Iterable[str]) -> EmittedLines:
        self._lines.extend(lines)
        return self

    def concat(self, fragment: str) -> EmittedLines:
        """Concatenate *fragment* onto the last line (starting one if empty)."""
        if self._lines:
            self._lines[-1] += fragment
        else:
            self._lines.append(fragment)
        return self

    def join(self, other: Iterable[str]) -> EmittedLines:
        """Continue the last line with the first line of *other*, then the rest."""
        incoming = list(other)
        if not incoming:
            return self
        self.concat(incoming[0])
        self._lines.extend(incoming[1:])
        return self

    # ── decoration ───────────────────────────────────────────────

    def wrapped(
        self, prefix: Sequence[str] = (), suffix: Sequence[str] = ()
    ) -> EmittedLines:
        """Return ``prefix + self + suffix`` as a new buffer, whatever the length."""
        return EmittedLines([*prefix, *self._lines, *suffix])

    def enclosed(self, head: str = "", tail: str = "") -> EmittedLines:
        """Return a copy with *head* leading the first line and *tail* closing the last."""
        result = EmittedLines([head]).join(self._lines)
        return result.concat(tail)

    # ── access ───────────────────────────────────────────────────

    @property
    def first(self) -> str:
        return self._lines[0]

    @property
    def last(self) -> str:
        return self._lines[-1]

    def is_empty(self) -> bool:
        return not self._lines

    def to_list(self) -> list[str]:
        return list(self._lines)

    def render(self) -> str:
        return "\n".join(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> str:
        return self._lines[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EmittedLines):
            return self._lines == other._lines
        if isinstance(other, list):
            return self._lines == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"EmittedLines({self._lines!r})"
