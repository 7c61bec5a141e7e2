"""Two-pass audit of JavaScript syntax coverage.

Pass 1 (Conversion coverage):
    Parses every sample snippet with tree-sitter, collects all named node
    types, and compares them against EstreeConverter's conversion table,
    its opaque kinds and its comment types. Node types consumed directly by
    their parent's converter (parameter lists, string fragments, clause
    wrappers) are reported as structural, not as gaps.

Pass 2 (Translation outcome):
    Translates each snippet end to end and classifies it as translated
    (produced Go lines), elided (translated to nothing) or rejected (raised
    a TranslationError), together with the ESTree kinds involved.

Usage:
    python scripts/audit_node_kinds.py
"""

from __future__ import annotations

import dataclasses
import logging

import tree_sitter_language_pack

from js2go.api import parse_source
from js2go.ast_nodes import AstNode
from js2go.errors import JsSyntaxError, TranslationError
from js2go.estree import EstreeConverter
from js2go.translator import Translator
from js2go import constants

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Sample snippets, one construct each
# ---------------------------------------------------------------------------

SNIPPETS: dict[str, str] = {
    "let": "let x = 5;",
    "const arrow": "const name = (value) => { console.log(value); };",
    "grouped var": "var a = 1, b = 'two', c;",
    "await": "async function f() { let d = await navigator.bluetooth.requestDevice({ filters: [] }); }",
    "member chain": "const s = document.body.style;",
    "window call": "window.alert('hi');",
    "method": "class Widget { render(target) { target.focus(); } }",
    "object": "const o = { name: 'x', 'quoted': 1, short, method() {} };",
    "array": "const a = [1, 2.5, true, null, undefined];",
    "array hole": "const a = [1, , 2];",
    "computed key": "const o = { [key]: 1 };",
    "subscript": "items[0];",
    "if": "if (ok) { a(); } else { b(); }",
    "for": "for (let i = 0; i < n; i++) { tick(i); }",
    "for of": "for (const item of items) { use(item); }",
    "for in": "for (const k in obj) { use(k); }",
    "while": "while (running) { step(); }",
    "do while": "do { step(); } while (running);",
    "try": "try { risky(); } catch (e) { report(e); } finally { done(); }",
    "switch": "switch (k) { case 1: one(); break; default: other(); }",
    "return": "function f() { return 1; }",
    "throw": "throw new Error('x');",
    "binary": "const sum = a + b;",
    "logical": "const v = a || b;",
    "ternary": "const v = a ? b : c;",
    "assignment": "x = 1;",
    "augmented": "x += 1;",
    "sequence": "a(), b();",
    "new": "new Widget();",
    "this": "this.render();",
    "template": "const t = `hello ${name}`;",
    "regex": "const r = /ab+/g;",
    "bigint": "const big = 10n;",
    "destructuring": "const { a, b } = options;",
    "default param": "function f(x = 1) {}",
    "rest param": "function f(...xs) {}",
    "spread": "f(...args);",
    "generator": "function* gen() { yield 1; }",
    "labeled": "outer: for (;;) { break outer; }",
    "class expression": "const C = class {};",
    "optional chain": "a?.b();",
    "tagged template": "tag`x`;",
}

# Types consumed by their parent's converter; never dispatched on their own.
STRUCTURAL_TYPES: frozenset[str] = frozenset(
    {
        "formal_parameters",
        "arguments",
        "variable_declarator",
        "string_fragment",
        "escape_sequence",
        "regex_pattern",
        "regex_flags",
        "else_clause",
        "catch_clause",
        "finally_clause",
        "switch_body",
        "switch_case",
        "switch_default",
        "class_body",
        "class_heritage",
        "method_definition",
        "pair",
        "computed_property_name",
        "optional_chain",
        "template_substitution",
    }
)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class SnippetResult:
    """Outcome of translating one snippet."""

    name: str
    outcome: str
    estree_kinds: list[str]
    detail: str


# ---------------------------------------------------------------------------
# Pass 1 helpers — conversion table comparison
# ---------------------------------------------------------------------------


def collect_ast_types(source: str) -> set[str]:
    """Parse source and collect all unique named tree-sitter node types."""
    parser = tree_sitter_language_pack.get_parser("javascript")
    tree = parser.parse(source.encode("utf-8"))
    types: set[str] = set()

    def _walk(node):
        if node.is_named:
            types.add(node.type)
        for child in node.children:
            _walk(child)

    _walk(tree.root_node)
    return types


def get_handled_types(converter: EstreeConverter) -> set[str]:
    """Union of conversion, opaque and comment types."""
    return (
        set(converter._CONVERT)
        | set(converter.OPAQUE_KINDS)
        | set(converter.COMMENT_TYPES)
    )


# ---------------------------------------------------------------------------
# Pass 2 helpers — end-to-end translation
# ---------------------------------------------------------------------------


def collect_estree_kinds(node: AstNode) -> list[str]:
    """Every ESTree discriminant reachable from *node*, in first-seen order."""
    seen: dict[str, None] = {}

    def _walk(value):
        if isinstance(value, AstNode):
            seen.setdefault(value.kind, None)
            for child in value.to_estree().values():
                _walk(AstNode.wrap(child))
        elif isinstance(value, list):
            for item in value:
                _walk(item)

    _walk(node)
    return list(seen)


def translate_snippet(name: str, source: str) -> SnippetResult:
    try:
        program = parse_source(source)
    except (JsSyntaxError, TranslationError) as e:
        return SnippetResult(name, "unconvertible", [], str(e))

    kinds = [k for k in collect_estree_kinds(program) if k != constants.PROGRAM]
    try:
        lines = Translator().translate(program)
    except TranslationError as e:
        return SnippetResult(name, "rejected", kinds, str(e))
    if not lines:
        return SnippetResult(name, "elided", kinds, "")
    return SnippetResult(name, "translated", kinds, f"{len(lines)} lines")


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


def print_conversion_coverage(all_types: set[str], handled: set[str]):
    unhandled = all_types - handled
    structural = sorted(unhandled & STRUCTURAL_TYPES)
    gaps = sorted(unhandled - STRUCTURAL_TYPES)

    logger.info("")
    logger.info("Pass 1 -- Conversion coverage:")
    logger.info("  tree-sitter types found:       %3d", len(all_types))
    logger.info("  Handled (convert+opaque):      %3d", len(all_types & handled))
    logger.info("  Structural (parent-consumed):  %3d", len(structural))
    logger.info("  Gaps:                          %3d", len(gaps))
    for gap in gaps:
        logger.info("      - %s", gap)


def print_translation_outcomes(results: list[SnippetResult]):
    logger.info("")
    logger.info("Pass 2 -- Translation outcome:")
    logger.info("  %-18s %-14s %s", "Snippet", "Outcome", "Detail")
    logger.info("  %s", "-" * 66)
    for r in results:
        logger.info("  %-18s %-14s %s", r.name, r.outcome, r.detail)

    logger.info("")
    for outcome in ("translated", "elided", "rejected", "unconvertible"):
        count = sum(1 for r in results if r.outcome == outcome)
        logger.info("  %-14s %3d", outcome, count)

    elided_kinds = sorted(
        {
            k
            for r in results
            for k in r.estree_kinds
            if k in constants.ELIDED_KINDS
        }
    )
    logger.info("")
    logger.info("  Elided ESTree kinds seen: %s", ", ".join(elided_kinds) or "none")


def main():
    converter = EstreeConverter()
    all_types: set[str] = set()
    for source in SNIPPETS.values():
        all_types |= collect_ast_types(source)

    print_conversion_coverage(all_types, get_handled_types(converter))
    print_translation_outcomes(
        [translate_snippet(name, source) for name, source in SNIPPETS.items()]
    )


if __name__ == "__main__":
    main()
