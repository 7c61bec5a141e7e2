"""Output formatters applied to the generated Go text."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

_OPENERS = frozenset("{([")
_CLOSERS = frozenset("})]")
_QUOTES = frozenset("\"'`")


class Formatter(ABC):
    """Abstract post-processor for generated source text."""

    @abstractmethod
    def format(self, text: str) -> str: ...


class IdentityFormatter(Formatter):
    """Returns the text unchanged."""

    def format(self, text: str) -> str:
        return text


class BraceIndentFormatter(Formatter):
    """Re-indents lines by bracket nesting, one ``indent`` per open bracket.

    A line starting with closers is dedented to the level it closes back to.
    Brackets inside string, rune and raw-string literals are ignored.
    """

    def __init__(self, indent: str = "\t"):
        self._indent = indent

    def format(self, text: str) -> str:
        out: list[str] = []
        depth = 0
        raw_string = False
        for line in text.splitlines():
            stripped = line.strip()
            if raw_string:
                # Inside a multi-line raw string the text is kept verbatim.
                out.append(line.rstrip())
                delta, _, raw_string = _bracket_balance(line, raw_string)
                depth = max(0, depth + delta)
                continue
            if not stripped:
                if out and out[-1]:
                    out.append("")
                continue
            delta, lowest, raw_string = _bracket_balance(stripped, False)
            level = max(0, depth + min(0, lowest))
            out.append(self._indent * level + stripped)
            depth = max(0, depth + delta)

        while out and not out[-1]:
            out.pop()
        if depth:
            logger.warning("Unbalanced brackets in formatted output (depth %d)", depth)
        return "\n".join(out)


def _bracket_balance(line: str, in_raw: bool) -> tuple[int, int, bool]:
    """Net bracket change, lowest running balance, and whether a raw string is still open."""
    balance = 0
    lowest = 0
    quote = "`" if in_raw else ""
    escaped = False
    for ch in line:
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\" and quote != "`":
                escaped = True
            elif ch == quote:
                quote = ""
            continue
        if ch in _QUOTES:
            quote = ch
        elif ch in _OPENERS:
            balance += 1
        elif ch in _CLOSERS:
            balance -= 1
            lowest = min(lowest, balance)
    return balance, lowest, quote == "`"
