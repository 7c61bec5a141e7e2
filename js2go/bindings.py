"""Binding-Call Builder — host-interop call chains and Go literal rendering.

Everything here is pure: the builders take already-emitted argument lines and
return new ``EmittedLines`` without consulting any traversal state.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from .lines import EmittedLines
from .scope import BindingKind

logger = logging.getLogger(__name__)


class HostBindings(BaseModel):
    """Target-language tokens for the dynamic interop binding."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    global_object: str = "js.Global()"
    undefined_value: str = "js.Undefined()"
    null_value: str = "nil"
    await_bridge: str = "jsutil.Await"
    handle_type: str = "js.Value"
    array_type: str = "[]interface{}"
    object_type: str = "map[string]interface{}"
    error_binding: str = "err"


GO_SYSCALL_JS = HostBindings()


def load_bindings(path: str | Path) -> HostBindings:
    """Overlay the JSON object in *path* on the ``syscall/js`` defaults."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    logger.info("Loaded host bindings from %s", path)
    return HostBindings.model_validate({**GO_SYSCALL_JS.model_dump(), **data})


# ── Go literal rendering ─────────────────────────────────────────

_SIMPLE_ESCAPES = {
    "\a": r"\a",
    "\b": r"\b",
    "\f": r"\f",
    "\n": r"\n",
    "\r": r"\r",
    "\t": r"\t",
    "\v": r"\v",
    "\\": r"\\",
    '"': r"\"",
}


def go_quote(text: str) -> str:
    """Quote *text* the way Go's ``%q`` verb does."""
    out: list[str] = []
    for ch in text:
        if ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) <= 0xFFFF:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    return '"' + "".join(out) + '"'


def render_number(value: int | float) -> str:
    """Render a JS number like Go's ``fmt.Sprint(float64)``."""
    try:
        number = float(value)
    except OverflowError:
        # Integers beyond the float64 range are Infinity in JS.
        number = math.inf if value > 0 else -math.inf
    if math.isfinite(number) and number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "+Inf" if number > 0 else "-Inf"
    return repr(number)


# ── call chain builders ──────────────────────────────────────────


class CallBuilder:
    """Assembles the interop call shapes used by the expression emitters."""

    def __init__(self, bindings: HostBindings = GO_SYSCALL_JS):
        self._bindings = bindings

    def property_chain(self, root: str, names: Iterable[str]) -> str:
        """``root.Get("p1").Get("p2")…``"""
        return root + "".join(f".Get({go_quote(name)})" for name in names)

    def global_chain(self, names: Iterable[str]) -> str:
        """``Global().Get("p1").Get("p2")…``"""
        return self.property_chain(self._bindings.global_object, names)

    def property_get(self, target: EmittedLines, name: str) -> EmittedLines:
        """Append a final ``.Get("name")`` accessor to an emitted chain."""
        return EmittedLines(target).concat(f".Get({go_quote(name)})")

    def method_call(
        self, target: EmittedLines, method: str, args: Sequence[EmittedLines]
    ) -> EmittedLines:
        """``<target>.Call("method", args…)``"""
        head = EmittedLines(target).concat(f".Call({go_quote(method)}")
        return self._close_call(head, args, leading_separator=True)

    def global_call(self, name: str, args: Sequence[EmittedLines]) -> EmittedLines:
        """``Global().Call("name", args…)`` for an unresolved callee."""
        head = EmittedLines([f"{self._bindings.global_object}.Call({go_quote(name)}"])
        return self._close_call(head, args, leading_separator=True)

    def symbol_call(
        self, symbol: str, kind: BindingKind, args: Sequence[EmittedLines]
    ) -> EmittedLines:
        """Direct call for a native symbol, ``.Invoke`` for a dynamic handle."""
        if kind == BindingKind.DYNAMIC_HANDLE:
            head = EmittedLines([f"{symbol}.Invoke("])
        else:
            head = EmittedLines([f"{symbol}("])
        return self._close_call(head, args, leading_separator=False)

    def plain_call(
        self, callee: EmittedLines, args: Sequence[EmittedLines]
    ) -> EmittedLines:
        """``<callee>(args…)`` for any other callee shape."""
        head = EmittedLines(callee).concat("(")
        return self._close_call(head, args, leading_separator=False)

    def _close_call(
        self,
        head: EmittedLines,
        args: Sequence[EmittedLines],
        *,
        leading_separator: bool,
    ) -> EmittedLines:
        if not args:
            return head.concat(")")
        if len(args) == 1:
            if leading_separator:
                head.concat(", ")
            return head.join(args[0]).concat(")")
        if leading_separator:
            head.concat(",")
        for arg in args:
            head.extend(arg).concat(",")
        return head.append(")")
