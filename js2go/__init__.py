"""js2go — JavaScript (ESTree) to Go syscall/js translator."""

from .translator import Translator, translate  # noqa: F401
from .bindings import GO_SYSCALL_JS, HostBindings, load_bindings  # noqa: F401
from .api import (  # noqa: F401
    parse_source,
    translate_tree,
    translate_source,
    translate_estree_json,
    dump_go,
)
