"""Composable API functions for the JavaScript → Go pipelines.

Each function corresponds to a CLI workflow (source, --estree, formatted
dump) but is callable programmatically without argparse.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .ast_nodes import AstNode
from .bindings import GO_SYSCALL_JS, HostBindings
from .errors import UnknownNodeKind
from .estree import EstreeConverter
from .formatter import BraceIndentFormatter, Formatter
from .parser import Parser, TreeSitterParserFactory
from .translator import Translator

logger = logging.getLogger(__name__)


def parse_source(source: str) -> AstNode:
    """Parse JavaScript source into an ESTree ``Program`` node.

    Raises:
        JsSyntaxError: the source does not parse.
        UnknownNodeKind: the source uses syntax with no ESTree mapping.
    """
    logger.info("Parsing %d characters of JavaScript", len(source))
    tree = Parser(TreeSitterParserFactory()).parse(source)
    return EstreeConverter().convert(tree, source.encode("utf-8"))


def translate_tree(
    root: AstNode | dict[str, Any],
    bindings: HostBindings = GO_SYSCALL_JS,
) -> list[str]:
    """Translate an ESTree ``Program`` into Go source lines."""
    return Translator(bindings).translate(root)


def translate_source(
    source: str,
    bindings: HostBindings = GO_SYSCALL_JS,
) -> list[str]:
    """Parse JavaScript source and translate it into Go source lines."""
    lines = translate_tree(parse_source(source), bindings)
    logger.info("Translated source into %d Go lines", len(lines))
    return lines


def translate_estree_json(
    text: str,
    bindings: HostBindings = GO_SYSCALL_JS,
) -> list[str]:
    """Translate a serialized ESTree ``Program`` (e.g. from acorn or esprima)."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise UnknownNodeKind(
            f"expected an ESTree object, got {type(data).__name__}",
            type(data).__name__,
        )
    logger.info("Translating ESTree JSON (%s)", data.get("type", "?"))
    return translate_tree(data, bindings)


def dump_go(
    source: str,
    bindings: HostBindings = GO_SYSCALL_JS,
    formatter: Formatter | None = None,
) -> str:
    """Translate JavaScript source and return the formatted Go text.

    Args:
        source: The JavaScript source text.
        bindings: Target tokens for the interop API.
        formatter: Post-processor for the joined lines; defaults to
            ``BraceIndentFormatter``.
    """
    formatter = formatter or BraceIndentFormatter()
    text = "\n".join(translate_source(source, bindings))
    return formatter.format(text)
